"""Domain protocols (ports) package.

This package contains protocol definitions the core needs from its
collaborators. Infrastructure adapters implement these protocols without
inheritance.

Usage:
    from sse_relay.domain.protocols import CursorStoreProtocol, SchedulerProtocol
"""

from sse_relay.domain.protocols.cursor_store_protocol import CursorStoreProtocol
from sse_relay.domain.protocols.logger_protocol import LoggerProtocol
from sse_relay.domain.protocols.scheduler_protocol import (
    ScheduledCallback,
    SchedulerProtocol,
    TimerHandleProtocol,
)
from sse_relay.domain.protocols.sse_transport_protocol import (
    EventStreamEndedError,
    EventStreamStatusError,
    SSETransportProtocol,
    TransportHandleProtocol,
)

__all__ = [
    "CursorStoreProtocol",
    "EventStreamEndedError",
    "EventStreamStatusError",
    "LoggerProtocol",
    "ScheduledCallback",
    "SchedulerProtocol",
    "SSETransportProtocol",
    "TimerHandleProtocol",
    "TransportHandleProtocol",
]
