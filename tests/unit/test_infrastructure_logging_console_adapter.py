"""Unit tests for ConsoleAdapter (structured console logging).

Tests cover:
- All LoggerProtocol methods (debug, info, warning, error, critical)
- Exception details on error/critical
- Context binding (stream and connection scoped loggers)
- Renderer and level configuration

Architecture:
- Unit tests with mocked structlog
- NO real logging dependencies
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from sse_relay.infrastructure.logging.console_adapter import ConsoleAdapter

STRUCTLOG = "sse_relay.infrastructure.logging.console_adapter.structlog"


@pytest.fixture
def mock_structlog():
    with patch(STRUCTLOG) as mocked:
        mocked.get_logger.return_value = MagicMock()
        yield mocked


@pytest.mark.unit
class TestConsoleAdapterLogging:
    """Test ConsoleAdapter logging methods."""

    @pytest.mark.parametrize("level", ["debug", "info", "warning"])
    def test_level_methods_pass_context(self, mock_structlog, level):
        """Test message and context are forwarded unchanged."""
        adapter = ConsoleAdapter()

        getattr(adapter, level)("Stream opened", stream_id="s-1", replayed=3)

        getattr(mock_structlog.get_logger.return_value, level).assert_called_once_with(
            "Stream opened", stream_id="s-1", replayed=3
        )

    def test_error_without_exception(self, mock_structlog):
        adapter = ConsoleAdapter()

        adapter.error("Event source failed", delivered=2)

        mock_structlog.get_logger.return_value.error.assert_called_once_with(
            "Event source failed", delivered=2
        )

    def test_error_with_exception_adds_type_and_message(self, mock_structlog):
        """Test error= is flattened into error_type/error_message."""
        adapter = ConsoleAdapter()

        adapter.error("Client callback failed", error=ValueError("bad"), callback="on_open")

        mock_structlog.get_logger.return_value.error.assert_called_once_with(
            "Client callback failed",
            callback="on_open",
            error_type="ValueError",
            error_message="bad",
        )

    def test_critical_with_exception(self, mock_structlog):
        adapter = ConsoleAdapter()

        adapter.critical("Relay down", error=RuntimeError("boom"))

        mock_structlog.get_logger.return_value.critical.assert_called_once_with(
            "Relay down", error_type="RuntimeError", error_message="boom"
        )


@pytest.mark.unit
class TestConsoleAdapterContextBinding:
    """Test ConsoleAdapter context binding."""

    def test_bind_returns_new_adapter_with_bound_logger(self, mock_structlog):
        mock_logger = mock_structlog.get_logger.return_value
        mock_bound_logger = MagicMock()
        mock_logger.bind.return_value = mock_bound_logger

        adapter = ConsoleAdapter()
        bound_adapter = adapter.bind(stream_id="s-1")

        mock_logger.bind.assert_called_once_with(stream_id="s-1")
        assert bound_adapter is not adapter
        assert bound_adapter._logger is mock_bound_logger

    def test_bound_context_persists_across_logs(self, mock_structlog):
        mock_bound_logger = MagicMock()
        mock_structlog.get_logger.return_value.bind.return_value = mock_bound_logger

        bound_adapter = ConsoleAdapter().bind(sse_url="http://relay.test/events")
        bound_adapter.info("Connecting", attempt=1)
        bound_adapter.warning("Connection error", attempt=1)

        mock_bound_logger.info.assert_called_once_with("Connecting", attempt=1)
        mock_bound_logger.warning.assert_called_once_with("Connection error", attempt=1)


@pytest.mark.unit
class TestConsoleAdapterInitialization:
    """Test ConsoleAdapter configuration."""

    def test_json_renderer_when_requested(self, mock_structlog):
        ConsoleAdapter(use_json=True)

        mock_structlog.processors.JSONRenderer.assert_called_once_with()
        mock_structlog.dev.ConsoleRenderer.assert_not_called()

    def test_console_renderer_by_default(self, mock_structlog):
        ConsoleAdapter()

        mock_structlog.dev.ConsoleRenderer.assert_called_once_with(colors=True)
        mock_structlog.processors.JSONRenderer.assert_not_called()

    def test_level_applied_to_filtering_logger(self, mock_structlog):
        ConsoleAdapter(level="warning")

        mock_structlog.make_filtering_bound_logger.assert_called_once_with(
            logging.WARNING
        )

    def test_unknown_level_falls_back_to_info(self, mock_structlog):
        ConsoleAdapter(level="chatty")

        mock_structlog.make_filtering_bound_logger.assert_called_once_with(
            logging.INFO
        )
