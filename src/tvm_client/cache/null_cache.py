"""Credential cache used when caching is disabled."""

from .base import CacheLookup, CacheMiss, CredentialBlob


class NullCredentialCache:
    """Cache that never stores anything, so every lookup goes to the TVM."""

    @property
    def enabled(self) -> bool:
        return False

    async def lookup(self, key: str) -> CacheLookup:  # noqa: ARG002
        return CacheMiss()

    async def get(self, key: str) -> CredentialBlob | None:  # noqa: ARG002
        return None

    async def set(self, key: str, blob: CredentialBlob) -> bool:  # noqa: ARG002
        return True

    async def clear(self) -> None:
        """Nothing to remove."""
