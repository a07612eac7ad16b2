"""Centralized constants for internal implementation details.

This module contains constants that are protocol details, NOT
environment-specific configuration. For environment-specific settings,
use `sse_relay/core/config.py` instead.

Categories:
- Wire format: content type, header and query parameter names
- Event types: well-known event type names
- Backoff: reconnect delay ceiling
- Defaults: fallback values mirrored by Settings

Example:
    >>> from sse_relay.core.constants import LAST_EVENT_ID_HEADER
    >>> request.headers.get(LAST_EVENT_ID_HEADER)
"""

# =============================================================================
# Wire Format
# =============================================================================

SSE_MEDIA_TYPE: str = "text/event-stream"
"""Content type of an event stream response."""

LAST_EVENT_ID_HEADER: str = "Last-Event-ID"
"""Resumption header sent by reconnecting clients (takes precedence)."""

LAST_EVENT_ID_QUERY_PARAM: str = "lastEventId"
"""Resumption query parameter for transports that cannot set headers."""

SSE_RESPONSE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-transform, no-cache",
    "Connection": "keep-alive",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Expose-Headers": "Content-Type, Cache-Control, Connection",
    "X-Accel-Buffering": "no",  # Disable nginx/Traefik buffering
}
"""Headers sent with the opening frame of every stream."""


# =============================================================================
# Event Types
# =============================================================================

DEFAULT_ALLOWED_EVENT_TYPES: tuple[str, ...] = ("message", "end", "test")
"""Event types a stream carries when no allowlist is given."""

TERMINAL_EVENT_TYPE: str = "end"
"""Event type that signals intentional end-of-stream."""

HEARTBEAT_EVENT_TYPE: str = "ping"
"""Event type dispatched by the client-local heartbeat."""

EVENT_TYPE_FIELD: str = "event"
"""Payload field carrying the logical event type."""


# =============================================================================
# Backoff
# =============================================================================

RECONNECT_MAX_DELAY_MS: int = 30_000
"""Ceiling for the exponential reconnect delay (milliseconds)."""


# =============================================================================
# Defaults
# =============================================================================

MAX_HISTORY_SIZE_DEFAULT: int = 1000
"""Default number of events retained for replay."""

RECONNECT_INTERVAL_MS_DEFAULT: int = 3000
"""Default base interval for reconnect backoff (milliseconds)."""

MAX_RETRY_ATTEMPTS_DEFAULT: int = 10
"""Default number of consecutive reconnect attempts before giving up."""

CURSOR_KEY_PREFIX_DEFAULT: str = "sse-last-event-id"
"""Default prefix of durable resumption cursor keys."""
