"""Command-line interface and main entry point.

This module provides the CLI for requesting credentials from the token vending
machine, listing the supported endpoints and clearing the credential cache.
"""
# ruff: noqa: T201

import asyncio
import json
import sys

import structlog

from tvm_client import __version__
from tvm_client.client import TvmClient
from tvm_client.config import DEFAULT_API_URL
from tvm_client.endpoints import Endpoint
from tvm_client.exceptions import TvmError, UnknownEndpointError
from tvm_client.factory import create_tvm_client
from tvm_client_app.cli_config import (
    GetConfig,
    create_endpoints_config,
    create_get_config,
)
from tvm_client_app.observability import configure_logging

# Get logger for this module
logger = structlog.get_logger(__name__)


def _client_from_config(config: GetConfig) -> TvmClient:
    return create_tvm_client(
        namespace=config.namespace,
        auth=config.auth,
        api_url=config.api_url,
        cache_file=config.cache_file,
        no_cache=config.no_cache,
    )


def get_command(args: list[str] | None = None) -> None:
    """Print the credentials for an endpoint as JSON.

    Args:
        args: Command arguments; the first one names the endpoint.
    """
    if not args:
        show_help()
        sys.exit(1)

    config = create_get_config()
    configure_logging(log_level=config.log_level, dev_mode=config.dev_mode)

    try:
        endpoint = Endpoint.from_name(args[0])
        client = _client_from_config(config)
        creds = asyncio.run(client.get_credentials(endpoint))
    except (TvmError, UnknownEndpointError) as e:
        print(f"Error: {e!s}", file=sys.stderr)
        logger.exception("GET_COMMAND_ERROR", error=str(e))
        sys.exit(1)

    print(json.dumps(creds, indent=2))


def endpoints_command(args: list[str] | None = None) -> None:  # noqa: ARG001
    """List the supported endpoints and the URLs they resolve to."""
    config = create_endpoints_config()
    configure_logging(log_level=config.log_level, dev_mode=config.dev_mode)

    api_url = config.api_url or DEFAULT_API_URL
    for endpoint in Endpoint:
        print(f"{endpoint.cli_name:<12} {endpoint.resolve(api_url)}")


def clear_cache_command(args: list[str] | None = None) -> None:  # noqa: ARG001
    """Remove the credential cache file."""
    config = create_get_config()
    configure_logging(log_level=config.log_level, dev_mode=config.dev_mode)

    try:
        client = _client_from_config(config)
        asyncio.run(client.clear_cache())
    except TvmError as e:
        print(f"Error: {e!s}", file=sys.stderr)
        logger.exception("CLEAR_CACHE_COMMAND_ERROR", error=str(e))
        sys.exit(1)


def show_help() -> None:
    """Show help information for the CLI."""
    help_text = """
Token Vending Machine Client

Usage:
    tvm-client <command> [arguments]

Commands:
    get <endpoint>     Print credentials for an endpoint (aws-s3, azure-blob)
    endpoints          List the supported endpoints and their URLs
    clear-cache        Remove the credential cache file
    --help, -h         Show this help message
    --version, -v      Show version information

Environment variables:
    TVM_CLIENT_NAMESPACE   OpenWhisk namespace (or __OW_NAMESPACE)
    TVM_CLIENT_AUTH        OpenWhisk auth key (or __OW_API_KEY)
    TVM_CLIENT_API_URL     TVM API base URL
    TVM_CLIENT_CACHE_FILE  Credential cache file path
    TVM_CLIENT_NO_CACHE    Disable the credential cache
    TVM_CLIENT_LOG_LEVEL   Log level (DEBUG, INFO, WARNING, ERROR)
    TVM_CLIENT_DEV_MODE    Enable development mode logging

Examples:
    tvm-client get aws-s3
    TVM_CLIENT_NO_CACHE=true tvm-client get azure-blob
    tvm-client endpoints
"""
    print(help_text)


def main() -> None:
    """Main entry point for the CLI."""
    min_args = 2
    if len(sys.argv) < min_args:
        show_help()
        sys.exit(1)

    command = sys.argv[1]
    args = sys.argv[2:]

    if command == "get":
        get_command(args)
    elif command == "endpoints":
        endpoints_command(args)
    elif command == "clear-cache":
        clear_cache_command(args)
    elif command in ["--help", "-h", "help"]:
        show_help()
        sys.exit(0)
    elif command in ["--version", "-v", "version"]:
        print(f"tvm-client, version {__version__}")
        sys.exit(0)
    else:
        show_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
