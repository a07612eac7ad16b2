"""Client-local heartbeat.

While the connection is open, fires a synthetic liveness payload at a fixed
period. Purely local: it never probes the server, so it cannot detect a
connection that is open but stalled.
"""

import time
from collections.abc import Awaitable, Callable
from typing import Any

from sse_relay.domain.protocols.scheduler_protocol import (
    SchedulerProtocol,
    TimerHandleProtocol,
)


class HeartbeatMonitor:
    """Periodic liveness ticks driven by a scheduler.

    Attributes:
        _scheduler: Timer source.
        _interval_ms: Tick period; 0 when disabled (None or non-positive input).
        _on_beat: Awaited with ``{"timestamp": <epoch ms>}`` on every tick.
        _clock: Returns current time in seconds.
    """

    def __init__(
        self,
        scheduler: SchedulerProtocol,
        interval_ms: int | None,
        on_beat: Callable[[dict[str, Any]], Awaitable[None]],
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._scheduler = scheduler
        self._interval_ms = interval_ms if interval_ms and interval_ms > 0 else 0
        self._on_beat = on_beat
        self._clock = clock
        self._handle: TimerHandleProtocol | None = None
        self._running = False

    @property
    def enabled(self) -> bool:
        return self._interval_ms > 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> bool:
        """Begin ticking. No-op when disabled or already running.

        Returns:
            True if the monitor is running after the call.
        """
        if not self.enabled:
            return False
        if not self._running:
            self._running = True
            self._schedule_next()
        return True

    def stop(self) -> bool:
        """Stop ticking immediately.

        Returns:
            True if the monitor was running.
        """
        was_running = self._running
        self._running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        return was_running

    def _schedule_next(self) -> None:
        self._handle = self._scheduler.call_later(
            self._interval_ms / 1000, self._tick
        )

    async def _tick(self) -> None:
        if not self._running:
            return
        self._handle = None
        await self._on_beat({"timestamp": int(self._clock() * 1000)})
        if self._running and self._handle is None:
            self._schedule_next()
