"""Client for the token vending machine (TVM).

This module provides the TvmClient class which hands out short-lived storage
credentials. Credentials are read through a cache keyed by OpenWhisk namespace
and endpoint URL: a fresh cached entry is returned without any network call,
otherwise the TVM is queried and the result is written back to the cache.
"""

from collections.abc import Mapping
from typing import Any

import structlog

from .cache import (
    CacheDegraded,
    CacheHit,
    CredentialBlob,
    CredentialCache,
    create_credential_cache,
)
from .config import CACHE_KEY_SEPARATOR, TvmClientConfig
from .endpoints import AwsS3Credentials, AzureBlobCredentials, Endpoint
from .fetcher import RemoteFetcher

# Get logger for this module
logger = structlog.get_logger(__name__)


class TvmClient:
    """Client SDK for the token vending machine.

    Concurrent calls are independent: two calls racing on a cache miss for the
    same endpoint may both query the TVM and both write the cache, the last
    write wins.
    """

    def __init__(
        self,
        config: TvmClientConfig,
        cache: CredentialCache | None = None,
        fetcher: RemoteFetcher | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Validated client configuration.
            cache: Credential cache to read through. Defaults to the cache
                selected by ``config.cache_file``.
            fetcher: Remote fetcher used on cache misses.
        """
        self.config = config
        self.ow = config.ow
        self.api_url = config.api_url
        self.cache = (
            cache if cache is not None else create_credential_cache(config.cache_file)
        )
        self.fetcher = fetcher if fetcher is not None else RemoteFetcher()

    @classmethod
    def init(cls, config: TvmClientConfig | Mapping[str, Any]) -> "TvmClient":
        """Create a client from a config object or a plain mapping.

        Raises:
            TvmConfigurationError: When the configuration is invalid.
        """
        if not isinstance(config, TvmClientConfig):
            config = TvmClientConfig.from_dict(config)
        return cls(config)

    def cache_key(self, endpoint: Endpoint) -> str:
        """Build the cache key for ``endpoint`` under this client's namespace."""
        url = endpoint.resolve(self.api_url)
        return f"{self.ow.namespace}{CACHE_KEY_SEPARATOR}{url}"

    async def get_credentials(self, endpoint: Endpoint) -> CredentialBlob:
        """Read the credentials for ``endpoint`` from the cache or the TVM.

        Raises:
            RemoteFetchError: The TVM answered with a non-success status.
            TvmTransportError: The TVM could not be reached.
        """
        url = endpoint.resolve(self.api_url)
        cache_key = self.cache_key(endpoint)
        log = logger.bind(endpoint=endpoint.cli_name, namespace=self.ow.namespace)

        cached = await self.cache.lookup(cache_key)
        if isinstance(cached, CacheHit):
            log.debug("TVM_CREDENTIALS_CACHE_HIT")
            return cached.blob
        if isinstance(cached, CacheDegraded):
            log.warning("TVM_CREDENTIALS_CACHE_DEGRADED", error=str(cached.cause))

        creds = await self.fetcher.fetch(url, self.ow)
        log.info("TVM_CREDENTIALS_FETCHED", expiration=_expiration_of(creds))

        if not await self.cache.set(cache_key, creds):
            log.warning("TVM_CREDENTIALS_CACHE_WRITE_SKIPPED")
        return creds

    async def get_aws_s3_credentials(self) -> AwsS3Credentials:
        """Request temporary credentials for AWS S3."""
        return await self.get_credentials(Endpoint.AWS_S3)  # type: ignore[return-value]

    async def get_azure_blob_credentials(self) -> AzureBlobCredentials:
        """Request SAS credentials for Azure Blob storage."""
        return await self.get_credentials(Endpoint.AZURE_BLOB)  # type: ignore[return-value]

    async def clear_cache(self) -> None:
        """Remove every cached credential, for all namespaces and endpoints."""
        await self.cache.clear()


def _expiration_of(creds: object) -> object:
    if isinstance(creds, Mapping):
        return creds.get("expiration")
    return None
