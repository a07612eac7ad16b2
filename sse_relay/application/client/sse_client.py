"""Reconnecting SSE client (connection state machine).

Owns the lifecycle of one logical subscription: connect, detect failure,
back off, reconnect with the persisted resumption cursor, or give up after
the retry budget is spent.

States:
    IDLE -> CONNECTING -> OPEN -> RECONNECTING -> CONNECTING -> ...
    CLOSED is terminal and reachable from any state through close() or
    retry exhaustion. connect() / reconnect() leave it again explicitly.

Architecture:
    - Transport, scheduler, and cursor store are injected protocols
    - Exactly one transport per subscription; reconnects replace it
    - Callbacks from a replaced transport are ignored
    - Listener registry maps event type -> single handler (re-registering
      replaces the previous handler, it does not fan out)

Usage:
    >>> client = SSEClient(
    ...     "http://localhost:3001/events",
    ...     SSEClientOptions(heartbeat_interval_ms=15_000),
    ... )
    >>> client.on("message", handle_message)
    >>> await client.connect()
    >>> ...
    >>> client.close()
"""

import inspect
import json
import random
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any
from urllib.parse import urlencode, urlsplit, urlunsplit

from uuid_extensions import uuid7

from sse_relay.application.client.backoff import BackoffPolicy
from sse_relay.application.client.heartbeat import HeartbeatMonitor
from sse_relay.application.client.resumption_cursor import ResumptionCursor
from sse_relay.core.config import Settings
from sse_relay.core.constants import (
    CURSOR_KEY_PREFIX_DEFAULT,
    EVENT_TYPE_FIELD,
    HEARTBEAT_EVENT_TYPE,
    LAST_EVENT_ID_QUERY_PARAM,
    MAX_RETRY_ATTEMPTS_DEFAULT,
    RECONNECT_INTERVAL_MS_DEFAULT,
)
from sse_relay.core.enums import ErrorCode
from sse_relay.core.errors import RetryLimitExceededError, TransportError
from sse_relay.domain.events.sse_frame import SSEFrame
from sse_relay.domain.protocols.cursor_store_protocol import CursorStoreProtocol
from sse_relay.domain.protocols.logger_protocol import LoggerProtocol
from sse_relay.domain.protocols.scheduler_protocol import (
    SchedulerProtocol,
    TimerHandleProtocol,
)
from sse_relay.domain.protocols.sse_transport_protocol import (
    EventStreamEndedError,
    EventStreamStatusError,
    SSETransportProtocol,
    TransportHandleProtocol,
)

type EventHandler = Callable[[Any], Awaitable[None] | None]

DEFAULT_EVENT_TYPE = "message"
"""Dispatch type for payloads that do not name their own event type."""


class ConnectionState(StrEnum):
    """Lifecycle states of a subscription."""

    IDLE = "idle"
    CONNECTING = "connecting"
    OPEN = "open"
    RECONNECTING = "reconnecting"
    CLOSED = "closed"


@dataclass(frozen=True, kw_only=True)
class SSEClientOptions:
    """Client configuration.

    Callbacks may be plain functions or coroutine functions.

    Attributes:
        headers: Extra request headers sent on every connection.
        last_event_id: Resume point used when no cursor is persisted.
        heartbeat_interval_ms: Local heartbeat period; None disables it.
        reconnect_interval_ms: Base interval for exponential backoff.
        max_retry_attempts: Consecutive reconnects before giving up.
        enable_logging: Emit verbose lifecycle logs.
        cursor_key_prefix: Namespace of durable cursor keys.
        on_open: Called when a connection opens.
        on_error: Called with a TransportError on every connection failure.
        on_reconnect_attempt: Called with the attempt number when a retry
            is scheduled.
        on_max_retries_exceeded: Called once with a RetryLimitExceededError
            when the retry budget is exhausted.
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    last_event_id: str | None = None
    heartbeat_interval_ms: int | None = None
    reconnect_interval_ms: int = RECONNECT_INTERVAL_MS_DEFAULT
    max_retry_attempts: int = MAX_RETRY_ATTEMPTS_DEFAULT
    enable_logging: bool = False
    cursor_key_prefix: str = CURSOR_KEY_PREFIX_DEFAULT
    on_open: Callable[[], Any] | None = None
    on_error: Callable[[TransportError], Any] | None = None
    on_reconnect_attempt: Callable[[int], Any] | None = None
    on_max_retries_exceeded: Callable[[RetryLimitExceededError], Any] | None = None

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> "SSEClientOptions":
        """Build options from application settings.

        Args:
            settings: Loaded settings.
            **overrides: Fields that replace the settings-derived values.

        Returns:
            Client options.
        """
        values: dict[str, Any] = {
            "heartbeat_interval_ms": settings.sse_heartbeat_interval_ms,
            "reconnect_interval_ms": settings.sse_reconnect_interval_ms,
            "max_retry_attempts": settings.sse_max_retry_attempts,
            "enable_logging": settings.debug,
            "cursor_key_prefix": settings.sse_cursor_key_prefix,
        }
        values.update(overrides)
        return cls(**values)


@dataclass
class _ConnectionSession:
    """One physical connection attempt."""

    connection_id: str
    url: str
    handle: TransportHandleProtocol | None = None


class SSEClient:
    """Reconnecting event-stream subscription.

    Attributes:
        _url: Subscription URL (without resume parameter).
        _options: Client options.
        _transport: Opens physical connections.
        _scheduler: Drives retries and heartbeats.
        _cursor: Durable resumption cursor for _url.
        _backoff: Retry delay policy.
        _heartbeat: Local liveness ticker.
        _listeners: Event type -> handler.
        _state: Current ConnectionState.
        _attempts: Consecutive reconnect attempts since the last open.
        _closed: Set by close() and exhaustion; blocks pending retries.
        _session: Current connection attempt, if any.
        _retry_timer: Pending reconnect, if any.
    """

    def __init__(
        self,
        url: str,
        options: SSEClientOptions | None = None,
        *,
        transport: SSETransportProtocol | None = None,
        scheduler: SchedulerProtocol | None = None,
        cursor_store: CursorStoreProtocol | None = None,
        rng: random.Random | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        """Initialize client. Does not connect.

        Args:
            url: Subscription URL.
            options: Client options (defaults if not provided).
            transport: Transport (httpx if not provided).
            scheduler: Timer source (asyncio if not provided).
            cursor_store: Durable cursor storage (in-memory if not provided).
            rng: Random source for backoff jitter.
            logger: Optional logger (container logger if not provided).
        """
        if options is None:
            options = SSEClientOptions()
        if transport is None:
            from sse_relay.infrastructure.transport.httpx_transport import (
                HttpxSSETransport,
            )

            transport = HttpxSSETransport()
        if scheduler is None:
            from sse_relay.infrastructure.scheduling.asyncio_scheduler import (
                AsyncioScheduler,
            )

            scheduler = AsyncioScheduler()
        if cursor_store is None:
            from sse_relay.infrastructure.sse.cursor_store import InMemoryCursorStore

            cursor_store = InMemoryCursorStore()
        if logger is None:
            from sse_relay.core.container import get_logger

            logger = get_logger()

        self._url = url
        self._options = options
        self._transport = transport
        self._scheduler = scheduler
        self._logger = logger.bind(sse_url=url)
        self._cursor = ResumptionCursor(
            url,
            cursor_store,
            key_prefix=options.cursor_key_prefix,
            logger=self._logger,
        )
        self._backoff = BackoffPolicy(
            base_interval_ms=options.reconnect_interval_ms,
            rng=rng or random.Random(),
        )
        self._heartbeat = HeartbeatMonitor(
            scheduler,
            options.heartbeat_interval_ms,
            self._dispatch_heartbeat,
        )
        self._listeners: dict[str, EventHandler] = {}
        self._state = ConnectionState.IDLE
        self._attempts = 0
        self._closed = False
        self._session: _ConnectionSession | None = None
        self._retry_timer: TimerHandleProtocol | None = None
        self._connect_generation = 0

    # =========================================================================
    # Public API
    # =========================================================================

    @property
    def url(self) -> str:
        return self._url

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def reconnect_attempts(self) -> int:
        return self._attempts

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def heartbeat_running(self) -> bool:
        return self._heartbeat.running

    @property
    def cursor(self) -> ResumptionCursor:
        return self._cursor

    def on(self, event_type: str, handler: EventHandler) -> None:
        """Register the handler for an event type.

        A second registration for the same type replaces the first.

        Args:
            event_type: Logical event type (``ping`` receives heartbeats).
            handler: Called with the parsed payload (or raw text).
        """
        self._log("Registered listener", event_type=event_type)
        self._listeners[event_type] = handler

    async def connect(self) -> None:
        """Open a new connection, replacing any existing one.

        Appends the persisted cursor (or the configured initial id) as the
        resume query parameter.
        """
        self._closed = False
        self._cancel_retry()
        self._teardown_transport()
        self._connect_generation += 1
        generation = self._connect_generation
        self._state = ConnectionState.CONNECTING

        cursor = await self._cursor.load() or self._options.last_event_id
        if self._closed or generation != self._connect_generation:
            return

        url = self.build_url(cursor)
        session = _ConnectionSession(connection_id=str(uuid7()), url=url)
        self._session = session
        self._log(
            "Connecting",
            url=url,
            connection_id=session.connection_id,
            resume_from=cursor,
        )

        async def on_open() -> None:
            await self._handle_open(session)

        async def on_frame(frame: SSEFrame) -> None:
            await self._handle_frame(session, frame)

        async def on_error(exc: BaseException) -> None:
            await self._handle_error(session, exc)

        session.handle = self._transport.open(
            url,
            headers=dict(self._options.headers),
            on_open=on_open,
            on_frame=on_frame,
            on_error=on_error,
        )

    def close(self) -> None:
        """Close the subscription and stop all reconnection."""
        if self._state is not ConnectionState.CLOSED:
            self._log("Closing connection")
        self._shutdown()

    async def reconnect(self) -> None:
        """Restart after close() or retry exhaustion with a fresh budget."""
        self._log("Reconnecting on request")
        self._attempts = 0
        self._closed = False
        await self.connect()

    def build_url(self, cursor: str | None) -> str:
        """Apply the resume parameter to the subscription URL.

        Args:
            cursor: Last observed sequence id, or None.

        Returns:
            URL with ``lastEventId`` appended to any existing query.
        """
        if not cursor:
            return self._url
        parts = urlsplit(self._url)
        extra = urlencode({LAST_EVENT_ID_QUERY_PARAM: cursor})
        query = f"{parts.query}&{extra}" if parts.query else extra
        return urlunsplit(parts._replace(query=query))

    # =========================================================================
    # Transport callbacks
    # =========================================================================

    async def _handle_open(self, session: _ConnectionSession) -> None:
        if session is not self._session or self._closed:
            return
        self._attempts = 0
        self._state = ConnectionState.OPEN
        self._log("Connection opened", connection_id=session.connection_id)
        await self._invoke("on_open", self._options.on_open)
        if session is self._session and self._state is ConnectionState.OPEN:
            if self._heartbeat.start():
                self._log("Heartbeat started")

    async def _handle_frame(self, session: _ConnectionSession, frame: SSEFrame) -> None:
        if session is not self._session or self._state is not ConnectionState.OPEN:
            return

        if frame.id:
            await self._cursor.save(frame.id)

        payload = self.parse_payload(frame.data)
        event_type = self.event_type_of(payload, frame)
        handler = self._listeners.get(event_type)
        if handler is None:
            self._log("No listener, dropping event", event_type=event_type)
            return
        await self._invoke(f"listener:{event_type}", handler, payload)

    async def _handle_error(
        self, session: _ConnectionSession, exc: BaseException
    ) -> None:
        if session is not self._session or self._closed:
            return

        error = self._transport_error(exc)
        self._logger.warning(
            "Connection error",
            connection_id=session.connection_id,
            error_code=error.code.value,
            **(error.details or {}),
        )
        await self._invoke("on_error", self._options.on_error, error)
        if self._heartbeat.stop():
            self._log("Heartbeat stopped")

        if session is not self._session or self._closed:
            return
        self._teardown_transport()

        if self._attempts >= self._options.max_retry_attempts:
            await self._exhaust()
            return
        await self._schedule_retry()

    # =========================================================================
    # Retry handling
    # =========================================================================

    async def _schedule_retry(self) -> None:
        self._attempts += 1
        attempt = self._attempts
        delay_ms = self._backoff.delay_ms(attempt)
        self._state = ConnectionState.RECONNECTING
        self._log(
            "Scheduling reconnect",
            attempt=attempt,
            max_attempts=self._options.max_retry_attempts,
            delay_ms=delay_ms,
        )
        self._retry_timer = self._scheduler.call_later(
            delay_ms / 1000, self._fire_retry
        )
        await self._invoke(
            "on_reconnect_attempt", self._options.on_reconnect_attempt, attempt
        )

    async def _fire_retry(self) -> None:
        self._retry_timer = None
        if self._closed:
            self._log("Reconnect cancelled, client is closed")
            return
        await self.connect()

    async def _exhaust(self) -> None:
        max_attempts = self._options.max_retry_attempts
        self._logger.error(
            "Max reconnect attempts exceeded, giving up",
            max_attempts=max_attempts,
        )
        self._shutdown()
        error = RetryLimitExceededError(
            code=ErrorCode.RECONNECT_RETRY_LIMIT_EXCEEDED,
            message=f"Gave up after {max_attempts} reconnect attempts",
            details={"max_attempts": str(max_attempts), "url": self._url},
        )
        await self._invoke(
            "on_max_retries_exceeded", self._options.on_max_retries_exceeded, error
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def parse_payload(data: str) -> Any:
        """Parse frame data as JSON, falling back to the raw text."""
        try:
            return json.loads(data)
        except ValueError:
            return data

    @staticmethod
    def event_type_of(payload: Any, frame: SSEFrame) -> str:
        """Logical event type of a payload.

        The ``event`` key of an object payload wins, then the frame's own
        ``event`` field, then ``message``.
        """
        if isinstance(payload, dict):
            event_type = payload.get(EVENT_TYPE_FIELD)
            if isinstance(event_type, str):
                return event_type
        return frame.event or DEFAULT_EVENT_TYPE

    async def _dispatch_heartbeat(self, payload: dict[str, Any]) -> None:
        handler = self._listeners.get(HEARTBEAT_EVENT_TYPE)
        if handler is not None:
            await self._invoke(f"listener:{HEARTBEAT_EVENT_TYPE}", handler, payload)

    def _shutdown(self) -> None:
        self._closed = True
        self._state = ConnectionState.CLOSED
        self._cancel_retry()
        self._teardown_transport()
        if self._heartbeat.stop():
            self._log("Heartbeat stopped")

    def _cancel_retry(self) -> None:
        if self._retry_timer is not None:
            self._retry_timer.cancel()
            self._retry_timer = None

    def _teardown_transport(self) -> None:
        session = self._session
        self._session = None
        if session is not None and session.handle is not None:
            self._log("Cleaning up connection", connection_id=session.connection_id)
            session.handle.close()

    def _transport_error(self, exc: BaseException) -> TransportError:
        details = {
            "error_type": type(exc).__name__,
            "attempt": str(self._attempts),
        }
        if isinstance(exc, EventStreamStatusError):
            details["status_code"] = str(exc.status_code)
            return TransportError(
                code=ErrorCode.TRANSPORT_BAD_STATUS,
                message=str(exc),
                details=details,
            )
        if isinstance(exc, EventStreamEndedError):
            return TransportError(
                code=ErrorCode.TRANSPORT_STREAM_ENDED,
                message=str(exc),
                details=details,
            )
        return TransportError(
            code=ErrorCode.TRANSPORT_CONNECTION_FAILED,
            message=str(exc) or type(exc).__name__,
            details=details,
        )

    async def _invoke(
        self, name: str, callback: Callable[..., Any] | None, *args: Any
    ) -> None:
        if callback is None:
            return
        try:
            result = callback(*args)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self._logger.error("Client callback failed", error=e, callback=name)

    def _log(self, message: str, **context: Any) -> None:
        if self._options.enable_logging:
            self._logger.info(message, **context)
