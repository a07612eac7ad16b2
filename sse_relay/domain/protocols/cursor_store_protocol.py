"""Durable key-value storage for client resumption cursors.

The store is external to the core: the resumption cursor calls into it but
does not implement durability itself. Failures are returned as data so the
caller can degrade to "no resumption" instead of aborting a subscription.
"""

from typing import Protocol

from sse_relay.core.errors import CursorStoreError
from sse_relay.core.result import Result


class CursorStoreProtocol(Protocol):
    """Protocol for durable cursor storage.

    Adapters (in-memory, Redis) implement this without inheritance.

    Example:
        >>> match await store.load("sse-last-event-id:abc"):
        ...     case Success(value=cursor):
        ...         ...
        ...     case Failure(error=err):
        ...         ...
    """

    async def load(self, key: str) -> Result[str | None, CursorStoreError]:
        """Read the cursor stored under key.

        Args:
            key: Opaque key derived from the subscription URL.

        Returns:
            Success with the stored value (None when absent), or Failure.
        """
        ...

    async def save(self, key: str, value: str) -> Result[None, CursorStoreError]:
        """Persist a cursor value under key, replacing any previous value.

        Args:
            key: Opaque key derived from the subscription URL.
            value: Last observed sequence id.

        Returns:
            Success(None) once stored, or Failure.
        """
        ...
