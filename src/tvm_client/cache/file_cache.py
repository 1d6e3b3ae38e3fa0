"""File backed credential cache.

This module provides the FileCredentialCache class which keeps credentials for
any number of identities and endpoints in one JSON object on disk. The file is
read on every lookup and fully rewritten on every write. No locking is done:
concurrent writers can lose each other's updates to unrelated keys.
"""

import json
import os
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os
import structlog

from .base import (
    CacheDegraded,
    CacheHit,
    CacheLookup,
    CacheMiss,
    Clock,
    CredentialBlob,
    is_fresh,
    utc_now,
)

# Get logger for this module
logger = structlog.get_logger(__name__)


class CacheFileFormatError(ValueError):
    """Raised internally when the cache file does not hold a JSON object."""

    def __init__(self, path: str, found: str) -> None:
        super().__init__(f"Cache file {path} holds {found}, expected an object")
        self.path = path


class FileCredentialCache:
    """Credential cache persisted as a single JSON file."""

    def __init__(self, path: str | os.PathLike[str], clock: Clock = utc_now) -> None:
        """Initialize the file cache.

        Args:
            path: Location of the cache file. It is created on the first write.
            clock: Returns the current aware datetime, used for freshness checks.
        """
        self.path = Path(path)
        self._clock = clock

    @property
    def enabled(self) -> bool:
        return True

    async def _load(self) -> dict[str, Any]:
        async with aiofiles.open(self.path, encoding="utf-8") as f:
            content = await f.read()
        data = json.loads(content)
        if not isinstance(data, dict):
            raise CacheFileFormatError(str(self.path), type(data).__name__)
        return data

    async def lookup(self, key: str) -> CacheLookup:
        """Look up a fresh credential for ``key``."""
        try:
            entries = await self._load()
        except FileNotFoundError:
            return CacheMiss()
        except Exception as e:
            logger.warning(
                "Credential cache unreadable, ignoring it",
                path=str(self.path),
                error=str(e),
            )
            return CacheDegraded(cause=e)

        blob = entries.get(key)
        if blob is None:
            return CacheMiss()
        if not is_fresh(blob, self._clock()):
            logger.debug("Cached credentials expired", path=str(self.path))
            return CacheMiss()
        return CacheHit(blob=blob)

    async def get(self, key: str) -> CredentialBlob | None:
        """Return the fresh credential stored under ``key`` or None."""
        result = await self.lookup(key)
        if isinstance(result, CacheHit):
            return result.blob
        return None

    async def set(self, key: str, blob: CredentialBlob) -> bool:
        """Merge ``key -> blob`` into the cache file and rewrite it.

        A missing or corrupt file is replaced by a mapping holding only the
        new entry. Write failures are logged and reported by returning False.
        """
        try:
            entries = await self._load()
        except Exception:
            entries = {}

        entries[key] = blob
        try:
            content = json.dumps(entries)
            await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
            async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
                await f.write(content)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(
                "Failed to write credential cache",
                path=str(self.path),
                error=str(e),
            )
            return False
        return True

    async def clear(self) -> None:
        """Remove the cache file if it exists."""
        try:
            await aiofiles.os.remove(self.path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(
                "Failed to remove credential cache",
                path=str(self.path),
                error=str(e),
            )
