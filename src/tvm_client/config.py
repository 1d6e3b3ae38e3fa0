"""Client configuration for the TVM client.

This module contains the OpenWhisk identity and the ``TvmClientConfig``
dataclass. Configuration is validated eagerly at construction time so that
invalid input fails before any file or network I/O happens.
"""

import os
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from yarl import URL

from .exceptions import TvmConfigurationError

# Adobe I/O default token vending machine API host
DEFAULT_API_URL = "https://adobeio.adobeioruntime.net/apis/tvm"
DEFAULT_CACHE_FILE = str(Path(tempfile.gettempdir()) / ".tvmCache")

# Separates the namespace from the endpoint URL in cache keys
CACHE_KEY_SEPARATOR = "|"

CacheFileSetting = str | os.PathLike[str] | bool | None


def _require_string(value: object, field_name: str) -> str:
    if not isinstance(value, str) or not value:
        raise TvmConfigurationError(
            f'"{field_name}" is required and must be a non-empty string',
            field=field_name,
        )
    return value


@dataclass(frozen=True)
class OpenWhiskCredentials:
    """OpenWhisk identity used to authenticate against the TVM."""

    namespace: str
    auth: str = field(repr=False)

    def __post_init__(self) -> None:
        """Validate namespace and auth key."""
        _require_string(self.namespace, "ow.namespace")
        _require_string(self.auth, "ow.auth")
        if CACHE_KEY_SEPARATOR in self.namespace:
            raise TvmConfigurationError(
                f'"ow.namespace" must not contain "{CACHE_KEY_SEPARATOR}"',
                field="ow.namespace",
            )

    @classmethod
    def from_value(cls, value: object) -> "OpenWhiskCredentials":
        """Build credentials from an instance or a ``namespace``/``auth`` mapping."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise TvmConfigurationError(
                '"ow" is required and must be a mapping with "namespace" and "auth"',
                field="ow",
            )
        return cls(namespace=value.get("namespace"), auth=value.get("auth"))  # type: ignore[arg-type]


@dataclass(frozen=True)
class TvmClientConfig:
    """TVM client configuration.

    Attributes:
        ow: OpenWhisk credentials. A mapping with ``namespace`` and ``auth``
            keys is accepted and converted.
        api_url: Base URL of the token vending machine API.
        cache_file: Path of the credential cache file. Defaults to
            ``<tmpdir>/.tvmCache``; any falsy value disables caching.
    """

    ow: OpenWhiskCredentials
    api_url: str = DEFAULT_API_URL
    cache_file: CacheFileSetting = DEFAULT_CACHE_FILE

    def __post_init__(self) -> None:
        """Validate all fields, raising ``TvmConfigurationError`` on failure."""
        object.__setattr__(self, "ow", OpenWhiskCredentials.from_value(self.ow))
        self._validate_api_url()
        self._validate_cache_file()

    def _validate_api_url(self) -> None:
        if not isinstance(self.api_url, str):
            raise TvmConfigurationError('"apiUrl" must be a string', field="apiUrl")
        try:
            url = URL(self.api_url)
        except ValueError as e:
            raise TvmConfigurationError(
                f'"apiUrl" must be a valid uri: {e}', field="apiUrl"
            ) from e
        if url.scheme not in ("http", "https") or not url.host:
            raise TvmConfigurationError(
                f'"apiUrl" must be a valid http(s) uri, got "{self.api_url}"',
                field="apiUrl",
            )

    def _validate_cache_file(self) -> None:
        if not self.cache_file:
            return
        if self.cache_file is True or not isinstance(
            self.cache_file, str | os.PathLike
        ):
            raise TvmConfigurationError(
                '"cacheFile" must be a file path or a falsy value to disable caching',
                field="cacheFile",
            )

    @property
    def caching_enabled(self) -> bool:
        """Whether credentials are persisted to a cache file."""
        return bool(self.cache_file)

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "TvmClientConfig":
        """Create a config from a mapping using ``ow``, ``apiUrl`` and ``cacheFile``.

        Snake case keys (``api_url``, ``cache_file``) are accepted too and
        unknown keys are ignored. An absent cache file setting selects the
        default path while an explicit falsy one disables caching.
        """
        if not isinstance(config, Mapping):
            raise TvmConfigurationError('"config" must be a mapping', field="config")
        if "ow" not in config:
            raise TvmConfigurationError('"ow" is required', field="ow")

        kwargs: dict[str, Any] = {"ow": config["ow"]}
        api_url = config.get("apiUrl", config.get("api_url"))
        if api_url:
            kwargs["api_url"] = api_url
        for key in ("cacheFile", "cache_file"):
            if key in config:
                kwargs["cache_file"] = config[key]
                break
        return cls(**kwargs)
