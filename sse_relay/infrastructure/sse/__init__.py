"""SSE server infrastructure and cursor storage adapters.

This package contains:
- EventHistory: Sequence allocation and bounded replay window
- SSEStreamAdapter: Bridges async event sources to SSE responses
- CursorKeys: Durable cursor key naming
- InMemoryCursorStore / RedisCursorStore: CursorStoreProtocol adapters

Architecture:
    - Implements domain protocols without inheritance (structural typing)
    - One EventHistory per process, injected (never a module global)
    - Fail-open cursor storage: failures degrade to "no resumption"
"""

from sse_relay.infrastructure.sse.cursor_keys import CursorKeys
from sse_relay.infrastructure.sse.cursor_store import (
    InMemoryCursorStore,
    RedisCursorStore,
)
from sse_relay.infrastructure.sse.event_history import EventHistory
from sse_relay.infrastructure.sse.stream_adapter import SSEStreamAdapter

__all__ = [
    "CursorKeys",
    "EventHistory",
    "InMemoryCursorStore",
    "RedisCursorStore",
    "SSEStreamAdapter",
]
