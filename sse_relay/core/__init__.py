"""Core shared kernel.

This module provides foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Base error classes for stream and connection failures
- Settings and constants

The core module has NO dependencies on other application layers.
"""

from sse_relay.core.enums import ErrorCode
from sse_relay.core.errors import (
    CursorStoreError,
    DomainError,
    EventNotAllowedError,
    RetryLimitExceededError,
    TransportError,
)
from sse_relay.core.result import Failure, Result, Success

__all__ = [
    "CursorStoreError",
    "DomainError",
    "ErrorCode",
    "EventNotAllowedError",
    "Failure",
    "Result",
    "RetryLimitExceededError",
    "Success",
    "TransportError",
]
