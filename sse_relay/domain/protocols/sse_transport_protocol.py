"""Client-side event-stream transport.

A transport owns exactly one physical connection per open() call. It reports
lifecycle through callbacks in event-source style: open once, a frame per
message, and an error once on any failure, including the server ending the
stream.
"""

from collections.abc import Awaitable, Callable, Mapping
from typing import Protocol

from sse_relay.domain.events.sse_frame import SSEFrame


class TransportHandleProtocol(Protocol):
    """Handle to one physical connection."""

    def close(self) -> None:
        """Tear the connection down. No callback fires afterwards."""
        ...


class SSETransportProtocol(Protocol):
    """Protocol for opening event-stream connections.

    Example:
        >>> handle = transport.open(
        ...     url,
        ...     headers={"Accept": "text/event-stream"},
        ...     on_open=client_on_open,
        ...     on_frame=client_on_frame,
        ...     on_error=client_on_error,
        ... )
        >>> handle.close()
    """

    def open(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        on_open: Callable[[], Awaitable[None]],
        on_frame: Callable[[SSEFrame], Awaitable[None]],
        on_error: Callable[[BaseException], Awaitable[None]],
    ) -> TransportHandleProtocol:
        """Start a connection in the background.

        Args:
            url: Fully built request URL (resume parameter already applied).
            headers: Request headers.
            on_open: Awaited once the stream is established.
            on_frame: Awaited for each complete inbound frame, in order.
            on_error: Awaited once when the connection fails or ends.

        Returns:
            Handle owning the connection.
        """
        ...


class EventStreamStatusError(Exception):
    """Server answered with a non-200 status or a non event-stream body."""

    def __init__(self, status_code: int, content_type: str | None = None) -> None:
        self.status_code = status_code
        self.content_type = content_type
        super().__init__(
            f"Unexpected event-stream response: HTTP {status_code}"
            f" ({content_type or 'no content type'})"
        )


class EventStreamEndedError(Exception):
    """Server closed an established event stream."""

    def __init__(self, message: str = "Server closed the event stream") -> None:
        super().__init__(message)
