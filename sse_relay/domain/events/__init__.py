"""Stream event records.

Usage:
    >>> from sse_relay.domain.events import StreamEvent, SSEFrame
    >>> event = StreamEvent(event_type="message", payload={"event": "message"})
"""

from sse_relay.domain.events.sse_frame import SSEFrame
from sse_relay.domain.events.stream_event import StreamEvent

__all__ = ["SSEFrame", "StreamEvent"]
