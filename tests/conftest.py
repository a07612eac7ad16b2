"""Pytest configuration shared by all suites.

This configuration ensures:
1. Container singletons are rebuilt for every test
2. Tests run with the testing environment (JSON logs, no colors)
"""

import os

import pytest

os.environ.setdefault("ENVIRONMENT", "testing")

from sse_relay.core.container import (  # noqa: E402
    get_cursor_store,
    get_event_history,
    get_logger,
    get_stream_adapter,
)


# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)


@pytest.fixture(autouse=True)
def clear_container_caches():
    """Bypass container singletons for test isolation."""
    caches = (get_logger, get_event_history, get_stream_adapter, get_cursor_store)
    for factory in caches:
        factory.cache_clear()
    yield
    for factory in caches:
        factory.cache_clear()


@pytest.fixture
def logger():
    """Logger double whose bind() returns itself."""
    from tests.utils.utils import make_logger

    return make_logger()
