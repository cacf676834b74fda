"""HTTP helpers: pooled async clients, the transport contract, status checks."""

from .client import get_async_httpx_client, aclose_all_clients
from .transport import StreamingResponse, Transport, HttpxTransport
from .response_check import check_response, read_body_text

__all__ = [
    "get_async_httpx_client",
    "aclose_all_clients",
    "StreamingResponse",
    "Transport",
    "HttpxTransport",
    "check_response",
    "read_body_text",
]
