"""Container module - Centralized dependency injection.

This module re-exports all factory functions from submodules so callers
import from one place:

    from sse_relay.core.container import get_logger, get_event_history

The container is organized into modules by concern:
- infrastructure: Core services (logging)
- sse: Event history, stream adapter, cursor storage, client factory
"""

# Infrastructure services
from sse_relay.core.container.infrastructure import get_logger

# SSE
from sse_relay.core.container.sse import (
    create_sse_client,
    get_cursor_store,
    get_event_history,
    get_stream_adapter,
)

__all__ = [
    # Infrastructure
    "get_logger",
    # SSE
    "get_event_history",
    "get_stream_adapter",
    "get_cursor_store",
    "create_sse_client",
]
