"""Error codes for stream and connection failures (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Transport errors (connection dropped, bad status, stream ended)
- Retry budget errors (reconnect attempts exhausted)
- Protocol violations (event type outside the allowlist)
- Durable storage errors (cursor read/write)
"""

from enum import Enum


class ErrorCode(Enum):
    """Stream-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Transport errors
    TRANSPORT_CONNECTION_FAILED = "transport_connection_failed"
    TRANSPORT_BAD_STATUS = "transport_bad_status"
    TRANSPORT_STREAM_ENDED = "transport_stream_ended"

    # Retry budget
    RECONNECT_RETRY_LIMIT_EXCEEDED = "reconnect_retry_limit_exceeded"

    # Protocol violations
    STREAM_EVENT_NOT_ALLOWED = "stream_event_not_allowed"

    # Durable storage
    CURSOR_READ_FAILED = "cursor_read_failed"
    CURSOR_WRITE_FAILED = "cursor_write_failed"
