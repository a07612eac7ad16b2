"""Core errors package.

Exports all core-level error classes for convenient importing.

Usage:
    from sse_relay.core.errors import DomainError, TransportError
"""

from sse_relay.core.errors.domain_error import DomainError
from sse_relay.core.errors.stream_errors import (
    CursorStoreError,
    EventNotAllowedError,
    RetryLimitExceededError,
    TransportError,
)

__all__ = [
    "DomainError",
    "TransportError",
    "RetryLimitExceededError",
    "EventNotAllowedError",
    "CursorStoreError",
]
