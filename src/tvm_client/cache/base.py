"""Base credential cache interface and lookup results.

This module defines the ``CredentialCache`` protocol implemented by the file
backed and the disabled caches, the result types returned by a lookup and the
freshness policy applied to cached credentials.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

CredentialBlob = dict[str, Any]

# Credentials are not served from cache during the last minute of their validity
FRESHNESS_BUFFER = timedelta(seconds=60)


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(tz=UTC)


Clock = Callable[[], datetime]


@dataclass(frozen=True)
class CacheHit:
    """A fresh credential was found in the cache."""

    blob: CredentialBlob


@dataclass(frozen=True)
class CacheMiss:
    """No usable credential: the key is absent, stale or has no valid expiration."""


@dataclass(frozen=True)
class CacheDegraded:
    """The cache could not be read; callers treat this like a miss."""

    cause: BaseException


CacheLookup = CacheHit | CacheMiss | CacheDegraded


def parse_expiration(value: object) -> datetime | None:
    """Parse an ISO-8601 expiration timestamp.

    A trailing ``Z`` is accepted and naive timestamps are taken as UTC.
    Returns None for anything that cannot be parsed.
    """
    if not isinstance(value, str):
        return None
    try:
        expiration = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if expiration.tzinfo is None:
        expiration = expiration.replace(tzinfo=UTC)
    return expiration


def is_fresh(blob: object, now: datetime) -> bool:
    """Check whether ``blob`` can still be handed out at ``now``."""
    if not isinstance(blob, Mapping):
        return False
    expiration = parse_expiration(blob.get("expiration"))
    if expiration is None:
        return False
    return now + FRESHNESS_BUFFER < expiration


class CredentialCache(Protocol):
    """Protocol for credential cache implementations.

    Implementations never raise for cache problems: an unreadable cache is
    reported as ``CacheDegraded`` by ``lookup`` and a failed write makes
    ``set`` return False.
    """

    @property
    def enabled(self) -> bool:
        """Whether this cache persists anything at all."""
        ...

    async def lookup(self, key: str) -> CacheLookup:
        """Look up ``key`` and report a hit, a miss or a degraded cache.

        Args:
            key: The cache key built from namespace and endpoint URL.

        Returns:
            ``CacheHit`` with a fresh blob, otherwise ``CacheMiss`` or
            ``CacheDegraded``.
        """
        ...

    async def get(self, key: str) -> CredentialBlob | None:
        """Return the fresh credential stored under ``key`` or None."""
        ...

    async def set(self, key: str, blob: CredentialBlob) -> bool:
        """Store ``blob`` under ``key``.

        Returns:
            True when the credential was persisted or caching is disabled,
            False when the write failed.
        """
        ...

    async def clear(self) -> None:
        """Drop every cached credential."""
        ...
