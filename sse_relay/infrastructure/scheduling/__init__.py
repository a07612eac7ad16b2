"""Timer scheduling adapters."""

from sse_relay.infrastructure.scheduling.asyncio_scheduler import (
    AsyncioScheduler,
    AsyncioTimerHandle,
)

__all__ = ["AsyncioScheduler", "AsyncioTimerHandle"]
