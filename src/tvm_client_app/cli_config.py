"""CLI configuration using environ-config.

This module defines the configuration classes for the command-line interface.
Every setting is read from ``TVM_CLIENT_*`` environment variables.
"""

import os
from collections.abc import Mapping

import environ


@environ.config(prefix="TVM_CLIENT")
class GetConfig:
    """Configuration for the get command."""

    namespace: str | None = environ.var(
        default=None, help="OpenWhisk namespace (falls back to __OW_NAMESPACE)"
    )
    auth: str | None = environ.var(
        default=None, help="OpenWhisk auth key (falls back to __OW_API_KEY)"
    )
    api_url: str | None = environ.var(default=None, help="TVM API base URL")
    cache_file: str | None = environ.var(
        default=None, help="Credential cache file path"
    )
    no_cache: bool = environ.bool_var(
        default=False, help="Always query the TVM and never write the cache"
    )
    log_level: str = environ.var(default="WARNING", help="Log level")
    dev_mode: bool = environ.bool_var(
        default=False, help="Enable development mode logging"
    )


@environ.config(prefix="TVM_CLIENT")
class EndpointsConfig:
    """Configuration for the endpoints command."""

    api_url: str | None = environ.var(default=None, help="TVM API base URL")
    log_level: str = environ.var(default="WARNING", help="Log level")
    dev_mode: bool = environ.bool_var(
        default=False, help="Enable development mode logging"
    )


def create_get_config(env: Mapping[str, str] | None = None) -> GetConfig:
    """Create a GetConfig from environment variables.

    Args:
        env: Environment mapping. If None, uses os.environ.

    Returns:
        GetConfig instance populated from the environment.
    """
    return environ.to_config(GetConfig, environ=os.environ if env is None else env)


def create_endpoints_config(env: Mapping[str, str] | None = None) -> EndpointsConfig:
    """Create an EndpointsConfig from environment variables.

    Args:
        env: Environment mapping. If None, uses os.environ.

    Returns:
        EndpointsConfig instance populated from the environment.
    """
    return environ.to_config(
        EndpointsConfig, environ=os.environ if env is None else env
    )
