"""Per-endpoint resumption cursor.

Records the last sequence id a client observed so a reconnect, or a later
session, can ask the server to replay what it missed. Storage failures
degrade to "no resumption" and are never surfaced to the application.
"""

from sse_relay.core.constants import CURSOR_KEY_PREFIX_DEFAULT
from sse_relay.core.result import Failure, Success
from sse_relay.domain.protocols.cursor_store_protocol import CursorStoreProtocol
from sse_relay.domain.protocols.logger_protocol import LoggerProtocol
from sse_relay.infrastructure.sse.cursor_keys import CursorKeys


class ResumptionCursor:
    """Durable cursor bound to one subscription URL.

    Attributes:
        _key: Storage key derived from the URL.
        _store: Durable cursor store.
        _logger: Logger instance.
    """

    def __init__(
        self,
        url: str,
        store: CursorStoreProtocol,
        *,
        key_prefix: str = CURSOR_KEY_PREFIX_DEFAULT,
        logger: LoggerProtocol,
    ) -> None:
        self._key = CursorKeys.for_url(url, key_prefix)
        self._store = store
        self._logger = logger

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> str | None:
        """Read the persisted cursor.

        Returns:
            Last observed sequence id, or None when absent or unreadable.
        """
        try:
            result = await self._store.load(self._key)
        except Exception as e:
            self._logger.warning(
                "Cursor load failed, starting from live tail",
                key=self._key,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return None

        match result:
            case Success(value=cursor):
                return cursor or None
            case Failure(error=err):
                self._logger.warning(
                    "Cursor unavailable, starting from live tail",
                    key=self._key,
                    error_code=err.code.value,
                )
                return None

    async def save(self, sequence_id: str) -> None:
        """Persist a newly observed sequence id.

        Args:
            sequence_id: Id carried by the inbound frame.
        """
        try:
            result = await self._store.save(self._key, sequence_id)
        except Exception as e:
            self._logger.warning(
                "Cursor save failed",
                key=self._key,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return

        if isinstance(result, Failure):
            self._logger.warning(
                "Cursor save failed",
                key=self._key,
                error_code=result.error.code.value,
            )
