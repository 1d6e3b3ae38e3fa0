"""TVM client factory functions.

This module builds a ``TvmClient`` from explicit arguments, falling back to
environment variables for anything that is not given.

Environment Variables:
    TVM_CLIENT_NAMESPACE: OpenWhisk namespace. Falls back to __OW_NAMESPACE.
    TVM_CLIENT_AUTH: OpenWhisk auth key. Falls back to __OW_API_KEY.
    TVM_CLIENT_API_URL: TVM API base URL. Default: the Adobe I/O TVM.
    TVM_CLIENT_CACHE_FILE: Cache file path. Default: <tmpdir>/.tvmCache
    TVM_CLIENT_NO_CACHE: Disable the credential cache ("true", "1", ...). Default: "false"
"""

import os

from .client import TvmClient
from .config import DEFAULT_API_URL, DEFAULT_CACHE_FILE, TvmClientConfig
from .exceptions import TvmConfigurationError

_TRUTHY = {"1", "true", "yes", "on"}


def _get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean value from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def _get_namespace() -> str | None:
    """Get namespace with precedence: TVM_CLIENT_NAMESPACE > __OW_NAMESPACE."""
    return os.getenv("TVM_CLIENT_NAMESPACE") or os.getenv("__OW_NAMESPACE")


def _get_auth() -> str | None:
    """Get auth key with precedence: TVM_CLIENT_AUTH > __OW_API_KEY."""
    return os.getenv("TVM_CLIENT_AUTH") or os.getenv("__OW_API_KEY")


def create_tvm_client(
    namespace: str | None = None,
    auth: str | None = None,
    api_url: str | None = None,
    cache_file: str | None = None,
    no_cache: bool | None = None,
) -> TvmClient:
    """Create a TVM client instance.

    Args:
        namespace: OpenWhisk namespace.
                   If None, uses TVM_CLIENT_NAMESPACE or __OW_NAMESPACE env vars.
        auth: OpenWhisk auth key.
              If None, uses TVM_CLIENT_AUTH or __OW_API_KEY env vars.
        api_url: TVM API base URL.
                 If None, uses TVM_CLIENT_API_URL env var or the default TVM.
        cache_file: Credential cache file path.
                    If None, uses TVM_CLIENT_CACHE_FILE env var or <tmpdir>/.tvmCache.
        no_cache: Disable the credential cache.
                  If None, uses TVM_CLIENT_NO_CACHE env var.

    Returns:
        Configured TVM client instance.

    Raises:
        TvmConfigurationError: When no identity is available or a value is invalid.
    """
    if namespace is None:
        namespace = _get_namespace()
    if auth is None:
        auth = _get_auth()
    if not namespace or not auth:
        raise TvmConfigurationError(
            "OpenWhisk namespace and auth are required: pass them explicitly or "
            "set TVM_CLIENT_NAMESPACE and TVM_CLIENT_AUTH",
            field="ow",
        )

    if api_url is None:
        api_url = os.getenv("TVM_CLIENT_API_URL") or DEFAULT_API_URL
    if no_cache is None:
        no_cache = _get_env_bool("TVM_CLIENT_NO_CACHE")

    resolved_cache_file: str | None
    if no_cache:
        resolved_cache_file = None
    elif cache_file is not None:
        resolved_cache_file = cache_file
    else:
        resolved_cache_file = os.getenv("TVM_CLIENT_CACHE_FILE") or DEFAULT_CACHE_FILE

    config = TvmClientConfig(
        ow={"namespace": namespace, "auth": auth},  # type: ignore[arg-type]
        api_url=api_url,
        cache_file=resolved_cache_file,
    )
    return TvmClient(config)
