"""Remote fetcher for the token vending machine.

This module provides the RemoteFetcher class which requests credentials from
a TVM endpoint over HTTP. Failures are surfaced immediately: there is no retry
and no timeout beyond the httpx transport defaults.
"""

import json
from typing import Any

import httpx
import structlog

from .cache.base import CredentialBlob
from .config import OpenWhiskCredentials
from .exceptions import InvalidResponseError, RemoteFetchError, TvmTransportError

# Get logger for this module
logger = structlog.get_logger(__name__)

DEFAULT_HEADERS = {"User-Agent": "TvmClient/1.0"}


def _parse_body(response: httpx.Response) -> Any:  # noqa: ANN401
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


class RemoteFetcher:
    """Fetches credentials from the TVM using httpx."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            client: Optional shared client. It is used as-is and never closed
                by the fetcher.
            transport: Optional transport for the short-lived clients created
                when no shared client is given.
            headers: Extra request headers merged over the defaults.
        """
        self._client = client
        self._transport = transport
        self._headers = {**DEFAULT_HEADERS, **(headers or {})}

    async def fetch(self, url: str, identity: OpenWhiskCredentials) -> CredentialBlob:
        """Request credentials from ``url`` on behalf of ``identity``.

        Args:
            url: Fully-qualified endpoint URL, without query string.
            identity: OpenWhisk credentials sent as ``owNamespace``/``owAuth``.

        Returns:
            The parsed response body, unmodified.

        Raises:
            RemoteFetchError: The TVM answered with a non-success status.
            InvalidResponseError: A success response did not hold JSON.
            TvmTransportError: The TVM could not be reached.
        """
        params = {"owNamespace": identity.namespace, "owAuth": identity.auth}
        try:
            if self._client is not None:
                response = await self._client.get(
                    url, params=params, headers=self._headers
                )
            else:
                async with httpx.AsyncClient(transport=self._transport) as client:
                    response = await client.get(
                        url, params=params, headers=self._headers
                    )
        except httpx.TransportError as e:
            logger.warning(
                "TVM request failed", url=url, error_type=type(e).__name__
            )
            raise TvmTransportError(
                f"Failed to reach TVM at {url}: {type(e).__name__}", url=url
            ) from e

        if not response.is_success:
            raise RemoteFetchError(response.status_code, _parse_body(response), url)

        try:
            return response.json()  # type: ignore[no-any-return]
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidResponseError(response.status_code, response.text, url) from e
