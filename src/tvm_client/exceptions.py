"""Standardized exceptions for the TVM client.

This module provides the error taxonomy surfaced to callers of the client:
configuration problems, non-success responses from the token vending machine
and network-level failures reaching it. Cache problems are never raised.
"""

from typing import Any


class TvmError(Exception):
    """Base exception for all TVM client errors."""

    def __init__(self, message: str, error_code: str | None = None) -> None:
        """Initialize the error with a message and optional error code.

        Args:
            message: Human-readable error message.
            error_code: Optional error code for programmatic handling.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class TvmConfigurationError(TvmError, ValueError):
    """Raised when the client configuration is invalid or incomplete."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error message describing the configuration issue.
            field: Optional name of the offending configuration field.
        """
        super().__init__(message, "BAD_ARGUMENT")
        self.field = field


class RemoteFetchError(TvmError):
    """Raised when the token vending machine answers with a non-success status."""

    def __init__(
        self,
        status_code: int,
        body: Any,  # noqa: ANN401
        url: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize remote fetch error.

        Args:
            status_code: HTTP status code of the response.
            body: Response body, parsed as JSON when possible, else raw text.
            url: Endpoint URL without query string.
            message: Optional override for the default message.
        """
        super().__init__(
            message or f"TVM request to {url} failed with status {status_code}",
            "STATUS_ERROR",
        )
        self.status_code = status_code
        self.body = body
        self.url = url


class InvalidResponseError(RemoteFetchError):
    """Raised when a successful response body cannot be parsed as JSON."""

    def __init__(self, status_code: int, body: str, url: str | None = None) -> None:
        super().__init__(
            status_code,
            body,
            url,
            message=f"TVM response from {url} is not valid JSON",
        )


class TvmTransportError(TvmError):
    """Raised when the token vending machine cannot be reached."""

    def __init__(self, message: str, url: str | None = None) -> None:
        """Initialize transport error.

        Args:
            message: Error message describing the network issue.
            url: Endpoint URL without query string.
        """
        super().__init__(message, "TRANSPORT_ERROR")
        self.url = url


class UnknownEndpointError(ValueError):
    """Raised when an unknown endpoint name is specified."""

    def __init__(self, name: str) -> None:
        """Initialize the unknown endpoint error.

        Args:
            name: The unknown endpoint name that was specified.
        """
        super().__init__(f"Unknown endpoint: {name}")
        self.name = name
