"""Unit tests for ResumptionCursor (fail-open durable cursor).

Tests cover:
- Key derivation from the subscription URL
- load()/save() through a cursor store
- Failure results and raising stores degrade to "no cursor"
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from sse_relay.application.client.resumption_cursor import ResumptionCursor
from sse_relay.core.enums import ErrorCode
from sse_relay.core.errors import CursorStoreError
from sse_relay.core.result import Failure, Success
from sse_relay.infrastructure.sse.cursor_keys import CursorKeys
from sse_relay.infrastructure.sse.cursor_store import InMemoryCursorStore
from tests.utils.utils import make_logger

URL = "http://localhost:3001/events"


def failing_store(code: ErrorCode) -> MagicMock:
    failure = Failure(error=CursorStoreError(code=code, message="unavailable"))
    store = MagicMock()
    store.load = AsyncMock(return_value=failure)
    store.save = AsyncMock(return_value=failure)
    return store


@pytest.mark.unit
class TestResumptionCursor:
    """Test ResumptionCursor."""

    def test_key_derived_from_url(self):
        cursor = ResumptionCursor(URL, InMemoryCursorStore(), logger=make_logger())

        assert cursor.key == CursorKeys.for_url(URL)

    @pytest.mark.asyncio
    async def test_load_absent(self):
        cursor = ResumptionCursor(URL, InMemoryCursorStore(), logger=make_logger())

        assert await cursor.load() is None

    @pytest.mark.asyncio
    async def test_save_then_load(self):
        store = InMemoryCursorStore()
        cursor = ResumptionCursor(URL, store, logger=make_logger())

        await cursor.save("5")

        assert await cursor.load() == "5"
        assert await store.load(CursorKeys.for_url(URL)) == Success(value="5")

    @pytest.mark.asyncio
    async def test_survives_new_instance(self):
        """Test a later session over the same store resumes."""
        store = InMemoryCursorStore()
        await ResumptionCursor(URL, store, logger=make_logger()).save("8")

        assert await ResumptionCursor(URL, store, logger=make_logger()).load() == "8"

    @pytest.mark.asyncio
    async def test_empty_value_is_absent(self):
        store = InMemoryCursorStore({CursorKeys.for_url(URL): ""})

        assert await ResumptionCursor(URL, store, logger=make_logger()).load() is None

    @pytest.mark.asyncio
    async def test_load_failure_is_absent(self):
        logger = make_logger()
        cursor = ResumptionCursor(
            URL, failing_store(ErrorCode.CURSOR_READ_FAILED), logger=logger
        )

        assert await cursor.load() is None
        logger.warning.assert_called_once()

    @pytest.mark.asyncio
    async def test_save_failure_is_swallowed(self):
        logger = make_logger()
        cursor = ResumptionCursor(
            URL, failing_store(ErrorCode.CURSOR_WRITE_FAILED), logger=logger
        )

        await cursor.save("1")

        logger.warning.assert_called_once()

    @pytest.mark.asyncio
    async def test_raising_store_is_absent(self):
        store = MagicMock()
        store.load = AsyncMock(side_effect=OSError("disk gone"))
        store.save = AsyncMock(side_effect=OSError("disk gone"))
        cursor = ResumptionCursor(URL, store, logger=make_logger())

        assert await cursor.load() is None
        await cursor.save("2")
