"""Structured logging adapters."""

from sse_relay.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
