"""Transport adapters performing the actual network calls."""

from .base import RawResponse, TransportAdapter, TransportError
from .httpx_transport import HttpxTransport

__all__ = ["RawResponse", "TransportAdapter", "TransportError", "HttpxTransport"]
