"""Transport adapter backed by httpx."""

import logging
from typing import Any

import httpx

from .base import RawResponse, TransportAdapter, TransportError

logger = logging.getLogger(__name__)


class HttpxTransport(TransportAdapter):
    """
    Transport adapter wrapping an httpx.AsyncClient.

    Features:
    - Non-blocking requests on the running event loop
    - Optional injected client (e.g. one built on httpx.MockTransport)
    - httpx request failures reported as TransportError
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 30.0,
    ):
        """
        Initialize the transport.

        Args:
            http_client: Optional httpx async client (created if None)
            timeout_seconds: Request timeout in seconds for a created client
        """
        self.timeout_seconds = timeout_seconds

        # Track if we own the HTTP client (for cleanup)
        self._owns_client = http_client is None

        if http_client is None:
            self.http_client = httpx.AsyncClient(timeout=timeout_seconds)
        else:
            self.http_client = http_client

    async def send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
    ) -> RawResponse:
        try:
            response = await self.http_client.request(
                method=method,
                url=url,
                params=params,
                headers=headers,
                content=content,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {e}", cause=e) from e
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {e}", cause=e) from e

        return RawResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=response.content,
        )

    async def aclose(self) -> None:
        """Close the HTTP client if we created it."""
        if self._owns_client and self.http_client:
            await self.http_client.aclose()
