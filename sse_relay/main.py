"""
Main FastAPI application factory.

The relay does not produce events itself: the embedding application
supplies a source factory that returns a fresh async event source for each
request, and the factory wires it to the stream adapter.

Usage:
    async def ticker(request: Request):
        for n in range(3):
            yield {"event": "message", "data": {"n": n}}
        yield {"event": "end"}

    app = create_app(ticker)
"""

from fastapi import FastAPI

from sse_relay.core.config import settings
from sse_relay.core.container import get_logger, get_stream_adapter
from sse_relay.infrastructure.sse.event_history import EventHistory
from sse_relay.infrastructure.sse.stream_adapter import SSEStreamAdapter
from sse_relay.presentation.routers import create_events_router, system_router
from sse_relay.presentation.routers.events import EventSourceFactory


def create_app(
    source_factory: EventSourceFactory,
    history: EventHistory | None = None,
) -> FastAPI:
    """Create the relay application.

    Args:
        source_factory: Returns the event source for one request.
        history: Event history to share across streams (container
            singleton if not provided).

    Returns:
        FastAPI application serving ``GET /events``.
    """
    if history is None:
        adapter = get_stream_adapter()
        history = adapter.history
    else:
        adapter = SSEStreamAdapter(
            history,
            terminal_event_type=settings.sse_terminal_event_type,
            logger=get_logger(),
        )

    app = FastAPI(
        title=settings.app_name,
        description="Resumable Server-Sent Events relay",
        version=settings.app_version,
        debug=settings.debug,
    )
    app.state.event_history = history
    app.state.stream_adapter = adapter

    app.include_router(system_router)
    app.include_router(
        create_events_router(
            adapter,
            source_factory,
            allowed_event_types=settings.sse_allowed_event_types,
        )
    )
    return app
