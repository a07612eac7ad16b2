"""SSE dependency factories.

Application-scoped singletons and per-subscription factories for SSE:
- get_event_history(): App-scoped event history (replay window)
- get_stream_adapter(): App-scoped adapter writing streams to clients
- get_cursor_store(): App-scoped durable cursor store (Redis)
- create_sse_client(): New reconnecting client per subscription
"""

from functools import lru_cache
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sse_relay.application.client.sse_client import SSEClient
    from sse_relay.domain.protocols.cursor_store_protocol import CursorStoreProtocol
    from sse_relay.infrastructure.sse.event_history import EventHistory
    from sse_relay.infrastructure.sse.stream_adapter import SSEStreamAdapter


@lru_cache()
def get_event_history() -> "EventHistory":
    """Get event history singleton (app-scoped).

    One history is shared by every stream served by this process, so ids
    are unique and monotonic across connections.

    Returns:
        EventHistory sized by settings.sse_max_history_size.
    """
    from sse_relay.core.config import get_settings
    from sse_relay.infrastructure.sse.event_history import EventHistory

    settings = get_settings()
    return EventHistory(max_history_size=settings.sse_max_history_size)


@lru_cache()
def get_stream_adapter() -> "SSEStreamAdapter":
    """Get stream adapter singleton (app-scoped).

    Returns:
        SSEStreamAdapter bound to the shared event history.

    Usage:
        # Presentation Layer (FastAPI route)
        adapter = get_stream_adapter()
        return adapter.stream_to_client(request, source)
    """
    from sse_relay.core.config import get_settings
    from sse_relay.core.container.infrastructure import get_logger
    from sse_relay.infrastructure.sse.stream_adapter import SSEStreamAdapter

    settings = get_settings()
    return SSEStreamAdapter(
        get_event_history(),
        terminal_event_type=settings.sse_terminal_event_type,
        logger=get_logger(),
    )


@lru_cache()
def get_cursor_store() -> "CursorStoreProtocol":
    """Get durable cursor store singleton (app-scoped).

    Returns RedisCursorStore with its own small connection pool.

    Returns:
        Cursor store implementing CursorStoreProtocol.
    """
    from redis.asyncio import ConnectionPool, Redis

    from sse_relay.core.config import get_settings
    from sse_relay.infrastructure.sse.cursor_store import RedisCursorStore

    settings = get_settings()

    pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=5,
        decode_responses=False,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
        socket_keepalive=True,
    )
    redis_client: Redis[bytes] = Redis(connection_pool=pool)  # type: ignore[type-arg]
    return RedisCursorStore(redis_client=redis_client)


def create_sse_client(url: str, **overrides: Any) -> "SSEClient":
    """Create a reconnecting client (per subscription).

    Options come from settings; keyword arguments override individual
    option fields (callbacks, headers, last_event_id, ...).

    Args:
        url: Subscription URL.
        **overrides: SSEClientOptions fields.

    Returns:
        New SSEClient using the durable cursor store. Not connected.

    Note:
        NOT a singleton - each subscription owns its own state machine.
    """
    from sse_relay.application.client.sse_client import SSEClient, SSEClientOptions
    from sse_relay.core.config import get_settings
    from sse_relay.core.container.infrastructure import get_logger

    options = SSEClientOptions.from_settings(get_settings(), **overrides)
    return SSEClient(
        url,
        options,
        cursor_store=get_cursor_store(),
        logger=get_logger(),
    )
