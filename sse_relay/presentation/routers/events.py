"""SSE events endpoint.

Thin HTTP binding: the route builds the application's event source for the
request and hands it to the stream adapter, which owns the protocol
(replay, allowlist, terminal event, disconnect handling).
"""

from collections.abc import AsyncIterable, Callable, Iterable, Mapping
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from sse_relay.infrastructure.sse.stream_adapter import SSEStreamAdapter

type EventSourceFactory = Callable[[Request], AsyncIterable[Mapping[str, Any]]]


def create_events_router(
    adapter: SSEStreamAdapter,
    source_factory: EventSourceFactory,
    *,
    allowed_event_types: Iterable[str],
    path: str = "/events",
) -> APIRouter:
    """Build the router serving the event stream.

    Args:
        adapter: Stream adapter shared by every connection.
        source_factory: Returns a fresh event source for each request.
        allowed_event_types: Event types streams may carry.
        path: Route path.

    Returns:
        Router with a single GET endpoint.
    """
    events_router = APIRouter(tags=["Events"])
    allowed = tuple(allowed_event_types)

    @events_router.get(path)
    async def get_events(request: Request) -> StreamingResponse:
        """Stream events via Server-Sent Events (SSE).

        **Reconnection**: Send the `Last-Event-ID` header (or the
        `lastEventId` query parameter) to replay retained events newer
        than the given id before live delivery resumes.

        Returns:
            StreamingResponse with SSE content type.
        """
        return adapter.stream_to_client(request, source_factory(request), allowed)

    return events_router
