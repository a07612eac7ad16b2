"""Client-side event-stream transport."""

from sse_relay.infrastructure.transport.httpx_transport import (
    HttpxSSETransport,
    HttpxTransportHandle,
)

__all__ = ["HttpxSSETransport", "HttpxTransportHandle"]
