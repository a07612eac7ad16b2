"""httpx implementation of SSETransportProtocol.

Each open() runs one streaming GET in a background asyncio task and reports
lifecycle through the supplied callbacks in event-source style.

Architecture:
    - Implements SSETransportProtocol without inheritance (structural typing)
    - Uses httpx-sse (``aconnect_sse``) over httpx with no read timeout
    - Frames with an empty data buffer are dropped
    - Server end-of-stream is reported as EventStreamEndedError
    - Closing a handle suppresses every later callback
"""

import asyncio
from collections.abc import Awaitable, Callable, Mapping

import httpx
import structlog
from httpx_sse import ServerSentEvent, aconnect_sse

from sse_relay.core.constants import SSE_MEDIA_TYPE
from sse_relay.domain.events.sse_frame import SSEFrame
from sse_relay.domain.protocols.sse_transport_protocol import (
    EventStreamEndedError,
    EventStreamStatusError,
)

STREAM_TIMEOUT = httpx.Timeout(10.0, read=None)
"""Connect/write/pool timeouts; reads wait indefinitely on a live stream."""


def to_frame(sse: ServerSentEvent) -> SSEFrame:
    """Convert an httpx-sse event into the client's frame type."""
    return SSEFrame(data=sse.data, id=sse.id or None, event=sse.event, retry=sse.retry)


class HttpxTransportHandle:
    """Owns one background streaming task.

    Closing from inside one of the task's own callbacks only marks the
    handle closed; the task notices and stops before its next callback.
    """

    def __init__(self) -> None:
        self._task: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def attach(self, task: "asyncio.Task[None]") -> None:
        self._task = task

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._task is not None and self._task is not asyncio.current_task():
            self._task.cancel()


class HttpxSSETransport:
    """Opens event-stream connections with httpx.

    Attributes:
        _client: Optional shared AsyncClient; a per-connection client is
            created (and closed) when not provided.
        _timeout: Timeout for per-connection clients.
        _logger: Structured logger.

    Example:
        >>> transport = HttpxSSETransport()
        >>> handle = transport.open(
        ...     "http://localhost:3001/events",
        ...     headers={},
        ...     on_open=on_open,
        ...     on_frame=on_frame,
        ...     on_error=on_error,
        ... )
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: httpx.Timeout = STREAM_TIMEOUT,
    ) -> None:
        self._client = client
        self._timeout = timeout
        self._logger = structlog.get_logger("sse_transport")

    def open(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        on_open: Callable[[], Awaitable[None]],
        on_frame: Callable[[SSEFrame], Awaitable[None]],
        on_error: Callable[[BaseException], Awaitable[None]],
    ) -> HttpxTransportHandle:
        """Start streaming url in a background task.

        Args:
            url: Request URL.
            headers: Extra request headers.
            on_open: Awaited once the response is a 200 event stream.
            on_frame: Awaited for each frame.
            on_error: Awaited once on failure or end of stream.

        Returns:
            Handle owning the connection.
        """
        handle = HttpxTransportHandle()
        task = asyncio.get_running_loop().create_task(
            self._run(handle, url, dict(headers), on_open, on_frame, on_error)
        )
        handle.attach(task)
        return handle

    async def _run(
        self,
        handle: HttpxTransportHandle,
        url: str,
        headers: dict[str, str],
        on_open: Callable[[], Awaitable[None]],
        on_frame: Callable[[SSEFrame], Awaitable[None]],
        on_error: Callable[[BaseException], Awaitable[None]],
    ) -> None:
        try:
            if self._client is not None:
                await self._stream(
                    self._client, handle, url, headers, on_open, on_frame
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    await self._stream(client, handle, url, headers, on_open, on_frame)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if handle.closed:
                return
            self._logger.debug(
                "sse_transport_error",
                url=url,
                error_type=type(e).__name__,
                error=str(e),
            )
            await on_error(e)

    async def _stream(
        self,
        client: httpx.AsyncClient,
        handle: HttpxTransportHandle,
        url: str,
        headers: dict[str, str],
        on_open: Callable[[], Awaitable[None]],
        on_frame: Callable[[SSEFrame], Awaitable[None]],
    ) -> None:
        async with aconnect_sse(client, "GET", url, headers=headers) as event_source:
            response = event_source.response
            content_type = response.headers.get("content-type")
            if response.status_code != 200 or not (
                content_type or ""
            ).startswith(SSE_MEDIA_TYPE):
                raise EventStreamStatusError(response.status_code, content_type)

            if handle.closed:
                return
            await on_open()

            async for sse in event_source.aiter_sse():
                if not sse.data:
                    continue
                if handle.closed:
                    return
                await on_frame(to_frame(sse))
                if handle.closed:
                    return

        raise EventStreamEndedError()
