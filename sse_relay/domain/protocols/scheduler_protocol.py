"""Deferred, cancellable timers.

Reconnect retries and heartbeats are driven through this abstraction so the
connection state machine can be exercised without wall-clock waits.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

type ScheduledCallback = Callable[[], Awaitable[None] | None]


class TimerHandleProtocol(Protocol):
    """Handle to one scheduled callback."""

    def cancel(self) -> None:
        """Prevent the callback from firing if it has not fired yet."""
        ...


class SchedulerProtocol(Protocol):
    """Protocol for scheduling callbacks after a delay.

    Callbacks may be plain functions or coroutine functions; awaitables they
    return are run to completion by the scheduler.
    """

    def call_later(
        self, delay_seconds: float, callback: ScheduledCallback
    ) -> TimerHandleProtocol:
        """Schedule callback to run once after delay_seconds.

        Args:
            delay_seconds: Delay before firing (>= 0).
            callback: Function or coroutine function to invoke.

        Returns:
            Handle that can cancel the pending call.
        """
        ...
