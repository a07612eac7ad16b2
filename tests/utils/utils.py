"""Test doubles shared by the unit and API suites.

Provides deterministic stand-ins for the client's injected collaborators
(scheduler, transport, random source) and a minimal request object for
driving the stream adapter without an ASGI server.
"""

import inspect
import random
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any
from unittest.mock import MagicMock

from starlette.datastructures import Headers, QueryParams

from sse_relay.domain.events.sse_frame import SSEFrame


# =============================================================================
# Logging
# =============================================================================


def make_logger() -> MagicMock:
    """Logger double whose bind() returns itself.

    Returns:
        MagicMock usable wherever LoggerProtocol is expected.
    """
    logger = MagicMock()
    logger.bind.return_value = logger
    return logger


# =============================================================================
# Randomness
# =============================================================================


class FixedRandom(random.Random):
    """Random source that always returns the same fraction."""

    def __init__(self, value: float = 0.5) -> None:
        super().__init__()
        self.value = value

    def random(self) -> float:
        return self.value


# =============================================================================
# Scheduler
# =============================================================================


@dataclass
class FakeTimerHandle:
    """Recorded call_later() invocation."""

    delay_seconds: float
    callback: Callable[[], Any]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manually driven scheduler.

    Nothing runs until a test fires a handle.
    """

    def __init__(self) -> None:
        self.handles: list[FakeTimerHandle] = []

    def call_later(
        self, delay_seconds: float, callback: Callable[[], Any]
    ) -> FakeTimerHandle:
        handle = FakeTimerHandle(delay_seconds=delay_seconds, callback=callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeTimerHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    async def fire(self, handle: FakeTimerHandle) -> None:
        """Run a handle's callback unless it was cancelled."""
        if handle.cancelled or handle.fired:
            return
        handle.fired = True
        result = handle.callback()
        if inspect.isawaitable(result):
            await result

    async def fire_next(self) -> FakeTimerHandle:
        """Fire the oldest pending handle."""
        handle = self.pending[0]
        await self.fire(handle)
        return handle


# =============================================================================
# Transport
# =============================================================================


class FakeTransportHandle:
    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


@dataclass
class FakeConnection:
    """One opened connection; tests drive its callbacks directly.

    Callbacks are suppressed once the handle is closed, matching the real
    transport.
    """

    url: str
    headers: Mapping[str, str]
    on_open: Callable[[], Awaitable[None]]
    on_frame: Callable[[SSEFrame], Awaitable[None]]
    on_error: Callable[[BaseException], Awaitable[None]]
    handle: FakeTransportHandle = field(default_factory=FakeTransportHandle)

    async def open(self) -> None:
        if not self.handle.closed:
            await self.on_open()

    async def frame(
        self, data: str, *, id: str | None = None, event: str | None = None
    ) -> None:
        if not self.handle.closed:
            await self.on_frame(SSEFrame(data=data, id=id, event=event))

    async def fail(self, exc: BaseException | None = None) -> None:
        if not self.handle.closed:
            await self.on_error(exc or ConnectionError("connection refused"))

    async def force_fail(self, exc: BaseException | None = None) -> None:
        """Deliver an error even though the handle is closed."""
        await self.on_error(exc or ConnectionError("late error"))


class FakeTransport:
    """Records every open() call as a FakeConnection."""

    def __init__(self) -> None:
        self.connections: list[FakeConnection] = []

    def open(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        on_open: Callable[[], Awaitable[None]],
        on_frame: Callable[[SSEFrame], Awaitable[None]],
        on_error: Callable[[BaseException], Awaitable[None]],
    ) -> FakeTransportHandle:
        connection = FakeConnection(
            url=url,
            headers=dict(headers),
            on_open=on_open,
            on_frame=on_frame,
            on_error=on_error,
        )
        self.connections.append(connection)
        return connection.handle

    @property
    def latest(self) -> FakeConnection:
        return self.connections[-1]


# =============================================================================
# Requests
# =============================================================================


class FakeRequest:
    """Minimal request for the stream adapter.

    Args:
        headers: Request headers.
        query: Query parameters.
        disconnect_after: Report the client as disconnected once
            is_disconnected() has been called this many times.
    """

    def __init__(
        self,
        headers: dict[str, str] | None = None,
        query: dict[str, str] | None = None,
        disconnect_after: int | None = None,
    ) -> None:
        self.headers = Headers(headers or {})
        self.query_params = QueryParams(query or {})
        self._disconnect_after = disconnect_after
        self.disconnect_checks = 0

    async def is_disconnected(self) -> bool:
        self.disconnect_checks += 1
        if self._disconnect_after is None:
            return False
        return self.disconnect_checks > self._disconnect_after
