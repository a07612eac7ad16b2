"""Stream and connection error types.

Each class maps to one failure category of the delivery protocol:

- TransportError: connection-level failure, surfaced to the application via
  the client's error callback. Never fatal by itself.
- RetryLimitExceededError: reconnect budget exhausted. Fatal to the
  subscription; surfaced via the exhaustion callback.
- EventNotAllowedError: the event source produced a type outside the stream
  allowlist. Fatal to that stream only.
- CursorStoreError: durable cursor storage failed. Recovered locally, never
  surfaced to the application.
"""

from dataclasses import dataclass

from sse_relay.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class TransportError(DomainError):
    """Connection dropped, refused, or ended by the server."""


@dataclass(frozen=True, slots=True, kw_only=True)
class RetryLimitExceededError(DomainError):
    """Reconnect attempts exceeded the configured maximum."""


@dataclass(frozen=True, slots=True, kw_only=True)
class EventNotAllowedError(DomainError):
    """Event source yielded an event type outside the allowlist."""


@dataclass(frozen=True, slots=True, kw_only=True)
class CursorStoreError(DomainError):
    """Durable cursor storage could not be read or written."""
