"""Durable cursor store adapters implementing CursorStoreProtocol.

- InMemoryCursorStore: process-local dict (tests, single-session clients)
- RedisCursorStore: Redis strings, survives client process restarts

Architecture:
    - Implements CursorStoreProtocol without inheritance (structural typing)
    - Fail-open design: storage errors are returned as Failure, never raised
"""

import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from sse_relay.core.enums import ErrorCode
from sse_relay.core.errors import CursorStoreError
from sse_relay.core.result import Failure, Result, Success


class InMemoryCursorStore:
    """Dict-backed cursor store.

    Values live only as long as the store instance.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    async def load(self, key: str) -> Result[str | None, CursorStoreError]:
        return Success(value=self._values.get(key))

    async def save(self, key: str, value: str) -> Result[None, CursorStoreError]:
        self._values[key] = value
        return Success(value=None)


class RedisCursorStore:
    """Redis implementation of CursorStoreProtocol.

    Stores each cursor as a plain string key. When a TTL is configured the
    key expiry is refreshed on every write, so cursors of abandoned
    subscriptions age out.

    Attributes:
        _redis: Async Redis client instance.
        _ttl_seconds: Optional expiry for cursor keys.
        _logger: Logger instance.
    """

    def __init__(
        self,
        redis_client: "Redis[bytes]",  # type: ignore[type-arg]
        ttl_seconds: int | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize Redis cursor store.

        Args:
            redis_client: Async Redis client instance.
            ttl_seconds: Optional key expiry in seconds.
            logger: Optional logger (creates default if not provided).
        """
        self._redis = redis_client
        self._ttl_seconds = ttl_seconds
        self._logger = logger or logging.getLogger(__name__)

    async def load(self, key: str) -> Result[str | None, CursorStoreError]:
        """Read a cursor.

        Args:
            key: Cursor key.

        Returns:
            Success with the decoded value (None if unset), or Failure on
            Redis errors.
        """
        try:
            raw = await self._redis.get(key)
        except RedisError as e:
            self._logger.warning(
                "Failed to read resumption cursor (fail-open)",
                extra={"key": key, "error": str(e), "error_type": type(e).__name__},
            )
            return Failure(
                error=CursorStoreError(
                    code=ErrorCode.CURSOR_READ_FAILED,
                    message="Cursor storage unavailable",
                    details={"key": key, "error": str(e)},
                )
            )

        if raw is None:
            return Success(value=None)
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return Success(value=str(raw))

    async def save(self, key: str, value: str) -> Result[None, CursorStoreError]:
        """Persist a cursor.

        Args:
            key: Cursor key.
            value: Sequence id to store.

        Returns:
            Success(None), or Failure on Redis errors.
        """
        try:
            await self._redis.set(key, value, ex=self._ttl_seconds)
        except RedisError as e:
            self._logger.warning(
                "Failed to write resumption cursor (fail-open)",
                extra={"key": key, "error": str(e), "error_type": type(e).__name__},
            )
            return Failure(
                error=CursorStoreError(
                    code=ErrorCode.CURSOR_WRITE_FAILED,
                    message="Cursor storage unavailable",
                    details={"key": key, "error": str(e)},
                )
            )
        return Success(value=None)
