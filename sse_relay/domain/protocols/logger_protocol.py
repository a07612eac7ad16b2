"""LoggerProtocol definition for structured logging.

This protocol standardizes structured logging across the server and client
halves while remaining backend-agnostic. Implementations MUST ensure logs
are structured (key-value context).

Log Levels (standard 5-level hierarchy):
    - DEBUG: Frame-level diagnostics (dev only)
    - INFO: Stream opened/closed, connection opened
    - WARNING: Degraded behavior (cursor storage unavailable, bad resume id)
    - ERROR: Operation failed, system continues (source raised, transport dropped)
    - CRITICAL: System-wide failure

Context Binding:
    Use bind() to create stream- or connection-scoped loggers with
    permanent context (stream_id, url) included in all logs.

Usage:
    from sse_relay.core.container import get_logger
    from sse_relay.domain.protocols.logger_protocol import LoggerProtocol

    logger: LoggerProtocol = get_logger()
    stream_logger = logger.bind(stream_id=str(stream_id))
    stream_logger.info("Stream opened", replayed=3)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    All logging calls MUST be structured: message + key-value context.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def error(
        self, message: str, /, *, error: BaseException | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            error: Optional exception instance; implementation may include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: BaseException | None = None, **context: Any
    ) -> None:
        """Log a critical-level message.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            error: Optional exception instance.
            **context: Structured key-value context fields.
        """
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        Original logger instance remains unchanged (immutable pattern).

        Args:
            **context: Context to bind to all future logs.

        Returns:
            New logger instance with bound context.
        """
        ...
