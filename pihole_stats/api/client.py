"""
HTTP Client for the Pi-hole API.

Every call is a GET against {base_url}/api.php with one action parameter
(summary, status, enable, disable) and the auth token. Responses are
returned as raw bytes; decoding lives in pihole_stats.api.models.

Usage:
    async with APIClient(config) as client:
        payload = await client.fetch(Endpoint.SUMMARY)
"""

from enum import Enum
from typing import Any
from urllib.parse import quote

import httpx

from pihole_stats.core.config import PiholeConfig
from pihole_stats.core.exceptions import TransportError
from pihole_stats.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

API_PATH = "/api.php"


class Endpoint(str, Enum):
    """Actions exposed by api.php."""

    SUMMARY = "summary"
    STATUS = "status"
    ENABLE = "enable"
    DISABLE = "disable"


def build_url(base_url: str, endpoint: Endpoint, credential: str) -> str:
    """
    Build the request URL for one action.

    The auth parameter is always present, empty or not.
    """
    return (
        f"{base_url.rstrip('/')}{API_PATH}"
        f"?{endpoint.value}&auth={quote(credential, safe='')}"
    )


class APIClient:
    """
    HTTP client for Pi-hole API communication.

    One instance per CLI invocation. The underlying httpx.AsyncClient is
    created on first use and closed by close() or on context exit.

    No retries and no custom timeout: each call is a single best-effort
    request using httpx defaults.
    """

    def __init__(
        self,
        config: PiholeConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            config: Base URL and API token of the Pi-hole instance.
            transport: Optional httpx transport, used by tests.
        """
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def fetch(self, endpoint: Endpoint) -> bytes:
        """
        Issue one GET for the given action.

        Args:
            endpoint: API action to call

        Returns:
            Raw response body

        Raises:
            TransportError: On network failure or a non-2xx response
        """
        client = await self._get_client()
        url = build_url(self.config.base_url, endpoint, self.config.credential)

        # The URL carries the token, so only the action is logged
        log_with_source(logger, "api", "debug", "API request", endpoint=endpoint.value)

        try:
            response = await client.get(url)
            response.raise_for_status()
            body = response.content
        except httpx.HTTPStatusError as e:
            log_with_source(
                logger,
                "api",
                "error",
                "API request rejected",
                endpoint=endpoint.value,
                status_code=e.response.status_code,
            )
            raise TransportError(
                f"Pi-hole returned HTTP {e.response.status_code} for '{endpoint.value}'",
                cause=e,
                details={"endpoint": endpoint.value, "status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "api",
                "error",
                "API request failed",
                endpoint=endpoint.value,
                error=str(e),
            )
            raise TransportError(
                f"Could not complete '{endpoint.value}' request: {str(e) or type(e).__name__}",
                cause=e,
                details={"endpoint": endpoint.value},
            ) from e
        except httpx.InvalidURL as e:
            # Message not logged: it echoes the URL, token included
            raise TransportError(
                f"Invalid Pi-hole URL: {self.config.base_url!r}",
                cause=e,
                details={"endpoint": endpoint.value},
            ) from e

        log_with_source(
            logger,
            "api",
            "debug",
            "API response",
            endpoint=endpoint.value,
            status_code=response.status_code,
            size=len(body),
        )
        return body
