"""Credential caching with expiration-aware lookups."""

from .base import (
    FRESHNESS_BUFFER,
    CacheDegraded,
    CacheHit,
    CacheLookup,
    CacheMiss,
    CredentialBlob,
    CredentialCache,
    is_fresh,
    parse_expiration,
    utc_now,
)
from .factory import create_credential_cache
from .file_cache import FileCredentialCache
from .null_cache import NullCredentialCache

__all__ = [
    "FRESHNESS_BUFFER",
    "CacheDegraded",
    "CacheHit",
    "CacheLookup",
    "CacheMiss",
    "CredentialBlob",
    "CredentialCache",
    "FileCredentialCache",
    "NullCredentialCache",
    "create_credential_cache",
    "is_fresh",
    "parse_expiration",
    "utc_now",
]
