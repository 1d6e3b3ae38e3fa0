"""Credential cache factory functions."""

from .base import Clock, CredentialCache, utc_now
from .file_cache import FileCredentialCache
from .null_cache import NullCredentialCache


def create_credential_cache(
    cache_file: object, clock: Clock = utc_now
) -> CredentialCache:
    """Create the credential cache for a cache file setting.

    Args:
        cache_file: Path of the cache file, or a falsy value to disable caching.
        clock: Clock used by the file cache for freshness checks.

    Returns:
        A ``NullCredentialCache`` when caching is disabled, otherwise a
        ``FileCredentialCache`` bound to ``cache_file``.
    """
    if not cache_file:
        return NullCredentialCache()
    return FileCredentialCache(cache_file, clock=clock)  # type: ignore[arg-type]
