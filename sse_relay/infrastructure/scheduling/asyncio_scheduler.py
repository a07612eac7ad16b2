"""asyncio implementation of SchedulerProtocol.

Callbacks run on the event loop thread. When a callback returns an
awaitable it is wrapped in a task that the handle tracks, so cancel()
also stops a callback already in progress.
"""

import asyncio
import inspect
from collections.abc import Awaitable
from typing import Any

import structlog

from sse_relay.domain.protocols.scheduler_protocol import ScheduledCallback


class AsyncioTimerHandle:
    """Cancellable handle for one scheduled callback."""

    def __init__(self) -> None:
        self._timer: asyncio.TimerHandle | None = None
        self._task: asyncio.Task[Any] | None = None
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()
        if (
            self._task is not None
            and not self._task.done()
            and self._task is not asyncio.current_task()
        ):
            self._task.cancel()


class AsyncioScheduler:
    """Schedules callbacks on the running event loop.

    Example:
        >>> scheduler = AsyncioScheduler()
        >>> handle = scheduler.call_later(1.5, client.connect)
        >>> handle.cancel()
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._logger = structlog.get_logger("sse_scheduler")

    def call_later(
        self, delay_seconds: float, callback: ScheduledCallback
    ) -> AsyncioTimerHandle:
        """Run callback once after delay_seconds.

        Args:
            delay_seconds: Delay before firing; negative values fire immediately.
            callback: Function or coroutine function.

        Returns:
            Handle that cancels the pending call or its running task.
        """
        loop = self._loop or asyncio.get_running_loop()
        handle = AsyncioTimerHandle()

        def fire() -> None:
            if handle.cancelled:
                return
            try:
                result = callback()
            except Exception as e:
                self._logger.error(
                    "scheduled_callback_failed",
                    error_type=type(e).__name__,
                    error=str(e),
                )
                return
            if inspect.isawaitable(result):
                handle._task = loop.create_task(self._run(result))

        handle._timer = loop.call_later(max(delay_seconds, 0.0), fire)
        return handle

    async def _run(self, awaitable: Awaitable[Any]) -> None:
        try:
            await awaitable
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._logger.error(
                "scheduled_callback_failed",
                error_type=type(e).__name__,
                error=str(e),
            )
