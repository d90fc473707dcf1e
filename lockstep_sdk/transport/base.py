"""Base class for transport adapters."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RawResponse:
    """Status, headers and body of one HTTP response, before normalization."""
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes = b""


class TransportError(Exception):
    """Raised when no HTTP response was obtained (timeout, DNS, refused connection)."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class TransportAdapter(ABC):
    """
    Abstract seam performing exactly one HTTP round trip.

    Implementations must not retry and must report a missing response by
    raising TransportError rather than returning a RawResponse, so that
    "status present" and "status absent" stay distinguishable.
    """

    @abstractmethod
    async def send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
    ) -> RawResponse:
        """
        Perform one HTTP call.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            url: Fully resolved URL
            params: Query parameters
            headers: Request headers
            content: Serialized request body

        Returns:
            The raw response, whatever its status code

        Raises:
            TransportError: If no response was received
        """
        pass

    async def aclose(self) -> None:
        """Release any resources held by the adapter."""
        return None
