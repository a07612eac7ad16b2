"""Stream event record and wire serialization.

A StreamEvent is the unit the server history retains and replays. Its
sequence id is assigned exactly once, by the event history, when the event
is admitted to a stream. Events that have not been admitted carry no id.

Wire Format (one frame per event):
    id: <sequence_id>
    data: <json_payload>
    <blank line>

No ``event:`` field is written: clients read the logical event type from
the ``event`` key of the JSON payload.
"""

import dataclasses
import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, kw_only=True, slots=True)
class StreamEvent:
    """Event record flowing from an event source to connected clients.

    Immutable after creation (frozen dataclass). Admission produces a new
    instance carrying the sequence id.

    Attributes:
        event_type: Logical event type (checked against the stream allowlist).
        payload: JSON-serializable event payload.
        sequence_id: Store-wide monotonic id, None until admitted.

    Example:
        >>> event = StreamEvent(
        ...     event_type="message",
        ...     payload={"event": "message", "data": {"n": 1}},
        ...     sequence_id=7,
        ... )
        >>> print(event.to_sse_format())
        id: 7
        data: {"event": "message", "data": {"n": 1}}
    """

    event_type: str
    """Logical event type."""

    payload: Any
    """Event payload (will be JSON serialized)."""

    sequence_id: int | None = None
    """Sequence id assigned on admission."""

    @property
    def is_admitted(self) -> bool:
        """Whether the event history has tagged this event."""
        return self.sequence_id is not None

    def with_sequence_id(self, sequence_id: int) -> "StreamEvent":
        """Return a copy tagged with the given sequence id.

        Args:
            sequence_id: Id assigned by the event history.

        Returns:
            New StreamEvent carrying the id.
        """
        return dataclasses.replace(self, sequence_id=sequence_id)

    def to_sse_format(self) -> str:
        """Serialize to SSE wire format.

        Returns:
            SSE-formatted string ready for a streaming response.

        Note:
            - The id line is omitted for events that were never admitted
            - Message ends with double newline (event-stream format)
            - Values json cannot encode natively are rendered with str()
        """
        lines = []
        if self.is_admitted:
            lines.append(f"id: {self.sequence_id}")
        lines.append(f"data: {json.dumps(self.payload, default=str)}")
        lines.append("")  # Empty line terminates the message
        return "\n".join(lines) + "\n"
