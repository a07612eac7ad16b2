"""Stream adapter bridging an async event source onto an SSE response.

One adapter call serves one client: it replays missed history, then pulls
the application's event source one item at a time, tags each item through
the shared EventHistory and writes it as a wire frame.

Stream termination:
    - Terminal event type delivered: frame written, stream closed
    - Event type outside the allowlist: stream closed, event NOT written
    - Source exhausted or raised: stream closed
    - Client disconnected: no further items pulled from the source

Source items are mappings carrying their logical type under ``event``
(e.g. ``{"event": "message", "data": {...}}``). The whole item becomes the
frame payload, so clients can read the type back from the JSON.
"""

import asyncio
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Mapping
from typing import Any

from fastapi import Request
from fastapi.responses import StreamingResponse
from uuid_extensions import uuid7

from sse_relay.core.constants import (
    DEFAULT_ALLOWED_EVENT_TYPES,
    EVENT_TYPE_FIELD,
    LAST_EVENT_ID_HEADER,
    LAST_EVENT_ID_QUERY_PARAM,
    SSE_MEDIA_TYPE,
    SSE_RESPONSE_HEADERS,
    TERMINAL_EVENT_TYPE,
)
from sse_relay.core.enums import ErrorCode
from sse_relay.core.errors import EventNotAllowedError
from sse_relay.domain.protocols.logger_protocol import LoggerProtocol
from sse_relay.infrastructure.sse.event_history import EventHistory


class SSEStreamAdapter:
    """Attaches client connections to event sources.

    All adapters in a process share one EventHistory, so admission order
    across concurrent streams defines the global sequence order.

    Attributes:
        _history: Shared event history (sequence ids and replay window).
        _terminal_event_type: Event type that ends a stream after delivery.
        _logger: Logger instance.
    """

    def __init__(
        self,
        history: EventHistory,
        *,
        terminal_event_type: str = TERMINAL_EVENT_TYPE,
        logger: LoggerProtocol | None = None,
    ) -> None:
        """Initialize stream adapter.

        Args:
            history: Event history shared by every stream in the process.
            terminal_event_type: Event type that closes the stream.
            logger: Optional logger (container logger if not provided).
        """
        if logger is None:
            from sse_relay.core.container import get_logger

            logger = get_logger()
        self._history = history
        self._terminal_event_type = terminal_event_type
        self._logger = logger

    @property
    def history(self) -> EventHistory:
        return self._history

    def stream_to_client(
        self,
        request: Request,
        event_source: AsyncIterable[Mapping[str, Any]],
        allowed_event_types: Iterable[str] = DEFAULT_ALLOWED_EVENT_TYPES,
    ) -> StreamingResponse:
        """Stream events from event_source to the requesting client.

        Args:
            request: Incoming request (resume id, disconnect detection).
            event_source: Async, possibly infinite, non-restartable source.
            allowed_event_types: Event types this stream may carry.

        Returns:
            StreamingResponse with SSE content type and protocol headers.
        """
        allowed = frozenset(allowed_event_types)
        resume_from = self.resume_id_from(request)
        return StreamingResponse(
            self._event_stream(request, event_source, allowed, resume_from),
            media_type=SSE_MEDIA_TYPE,
            headers=dict(SSE_RESPONSE_HEADERS),
        )

    def resume_id_from(self, request: Request) -> int | None:
        """Extract the resumption id, header taking precedence over query.

        Args:
            request: Incoming request.

        Returns:
            Last sequence id the client saw, or None when absent or invalid.
        """
        raw = request.headers.get(LAST_EVENT_ID_HEADER)
        if not raw:
            raw = request.query_params.get(LAST_EVENT_ID_QUERY_PARAM)
        if not raw:
            return None
        try:
            return int(raw)
        except ValueError:
            self._logger.warning(
                "Ignoring invalid resumption id",
                last_event_id=raw[:64],
            )
            return None

    async def _event_stream(
        self,
        request: Request,
        event_source: AsyncIterable[Mapping[str, Any]],
        allowed: frozenset[str],
        resume_from: int | None,
    ) -> AsyncIterator[str]:
        """Generate wire frames for one client.

        Yields:
            SSE-formatted frames: replayed history first, then live events.
        """
        stream_logger = self._logger.bind(stream_id=str(uuid7()))
        iterator = aiter(event_source)
        delivered = 0

        try:
            if resume_from is not None:
                missed = self._history.missed_since(resume_from)
                for event in missed:
                    yield event.to_sse_format()
                stream_logger.info(
                    "Replayed missed events",
                    last_event_id=resume_from,
                    count=len(missed),
                )

            while True:
                if await request.is_disconnected():
                    stream_logger.info("Client disconnected", delivered=delivered)
                    return

                try:
                    item = await anext(iterator)
                except StopAsyncIteration:
                    stream_logger.info("Event source exhausted", delivered=delivered)
                    return
                except Exception as e:
                    stream_logger.error(
                        "Event source failed", error=e, delivered=delivered
                    )
                    return

                event_type = self._event_type_of(item)
                if event_type is None or event_type not in allowed:
                    violation = EventNotAllowedError(
                        code=ErrorCode.STREAM_EVENT_NOT_ALLOWED,
                        message="Event type not allowed on this stream",
                        details={
                            "event_type": str(event_type),
                            "allowed": ",".join(sorted(allowed)),
                        },
                    )
                    stream_logger.warning(
                        "Closing stream on disallowed event type",
                        error_code=violation.code.value,
                        **(violation.details or {}),
                    )
                    return

                event = self._history.admit(event_type, dict(item))
                yield event.to_sse_format()
                delivered += 1

                if event_type == self._terminal_event_type:
                    stream_logger.info(
                        "Terminal event delivered, closing stream",
                        sequence_id=event.sequence_id,
                        delivered=delivered,
                    )
                    return

        except asyncio.CancelledError:
            # Normal cancellation (client disconnect)
            stream_logger.debug("Stream cancelled", delivered=delivered)
            raise
        finally:
            await self._close_source(iterator, stream_logger)

    @staticmethod
    def _event_type_of(item: Any) -> str | None:
        if isinstance(item, Mapping):
            event_type = item.get(EVENT_TYPE_FIELD)
            if isinstance(event_type, str):
                return event_type
        return None

    @staticmethod
    async def _close_source(
        iterator: AsyncIterator[Any], stream_logger: LoggerProtocol
    ) -> None:
        aclose = getattr(iterator, "aclose", None)
        if aclose is None:
            return
        try:
            await aclose()
        except Exception as e:
            stream_logger.warning(
                "Error closing event source",
                error_type=type(e).__name__,
                error_message=str(e),
            )
