"""Client for the token vending machine (TVM).

Obtains short-lived AWS S3 and Azure Blob credentials for an OpenWhisk
identity and caches them in a local file until shortly before they expire.
"""

from .cache import (
    CacheDegraded,
    CacheHit,
    CacheMiss,
    CredentialCache,
    FileCredentialCache,
    NullCredentialCache,
)
from .client import TvmClient
from .config import (
    DEFAULT_API_URL,
    DEFAULT_CACHE_FILE,
    OpenWhiskCredentials,
    TvmClientConfig,
)
from .endpoints import AwsS3Credentials, AzureBlobCredentials, Endpoint
from .exceptions import (
    InvalidResponseError,
    RemoteFetchError,
    TvmConfigurationError,
    TvmError,
    TvmTransportError,
    UnknownEndpointError,
)
from .factory import create_tvm_client
from .fetcher import RemoteFetcher

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_CACHE_FILE",
    "AwsS3Credentials",
    "AzureBlobCredentials",
    "CacheDegraded",
    "CacheHit",
    "CacheMiss",
    "CredentialCache",
    "Endpoint",
    "FileCredentialCache",
    "InvalidResponseError",
    "NullCredentialCache",
    "OpenWhiskCredentials",
    "RemoteFetchError",
    "RemoteFetcher",
    "TvmClient",
    "TvmClientConfig",
    "TvmConfigurationError",
    "TvmError",
    "TvmTransportError",
    "UnknownEndpointError",
    "create_tvm_client",
]
