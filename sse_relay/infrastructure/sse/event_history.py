"""In-process event history with sequence numbering.

Assigns every admitted event a store-wide monotonic sequence id and retains
a bounded FIFO window of the most recent events for Last-Event-ID replay.

Architecture:
    - One instance per process, injected into every stream adapter
    - Counter and window updated together under one lock
    - History is NOT persisted; it is lost when the process exits
    - Evicted events are silently absent from replay
"""

import threading
from typing import Any

from sse_relay.core.constants import MAX_HISTORY_SIZE_DEFAULT
from sse_relay.domain.events.stream_event import StreamEvent


class EventHistory:
    """Sequence allocator and bounded replay window.

    Sequence ids start at 1 and are never reused. Because ids only grow,
    the dict's insertion order is ascending id order and evicting the first
    key always removes the smallest retained id.

    Attributes:
        _max_history_size: Maximum number of retained events.
        _counter: Last sequence id handed out (0 before any admission).
        _window: Retained events keyed by sequence id.
        _lock: Guards counter and window as one unit.
    """

    def __init__(self, max_history_size: int = MAX_HISTORY_SIZE_DEFAULT) -> None:
        """Initialize an empty history.

        Args:
            max_history_size: Maximum number of events retained for replay.

        Raises:
            ValueError: If max_history_size is less than 1.
        """
        if max_history_size < 1:
            raise ValueError("max_history_size must be at least 1")
        self._max_history_size = max_history_size
        self._counter = 0
        self._window: dict[int, StreamEvent] = {}
        self._lock = threading.Lock()

    @property
    def max_history_size(self) -> int:
        return self._max_history_size

    @property
    def last_sequence_id(self) -> int:
        """Most recently assigned sequence id (0 if none)."""
        return self._counter

    def __len__(self) -> int:
        return len(self._window)

    def admit(self, event_type: str, payload: Any) -> StreamEvent:
        """Tag an event with the next sequence id and retain it.

        Args:
            event_type: Logical event type.
            payload: JSON-serializable payload.

        Returns:
            The admitted event carrying its sequence id.
        """
        with self._lock:
            self._counter += 1
            event = StreamEvent(
                event_type=event_type, payload=payload
            ).with_sequence_id(self._counter)
            self._window[self._counter] = event
            while len(self._window) > self._max_history_size:
                oldest = next(iter(self._window))
                del self._window[oldest]
            return event

    def missed_since(self, last_seen_id: int) -> list[StreamEvent]:
        """Return retained events newer than last_seen_id.

        Args:
            last_seen_id: Last sequence id the client observed.

        Returns:
            Events with id > last_seen_id in ascending order. Empty when the
            client is already caught up. Evicted events are omitted.
        """
        with self._lock:
            if last_seen_id >= self._counter:
                return []
            return [
                event
                for sequence_id, event in self._window.items()
                if sequence_id > last_seen_id
            ]
