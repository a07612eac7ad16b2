"""Unit tests for get_logger() container function.

Tests cover:
- Renderer selection based on ENVIRONMENT
- Log level taken from settings
- Singleton pattern (same instance returned)
- Protocol compliance

Architecture:
- Unit tests with mocked settings and adapters
- Tests centralized dependency injection pattern
"""

from unittest.mock import MagicMock, patch

import pytest

from sse_relay.core.container import get_logger


@pytest.mark.unit
class TestGetLoggerContainer:
    """Test get_logger() container function."""

    @pytest.mark.parametrize(
        "environment,use_json",
        [
            ("development", False),
            ("production", False),
            ("testing", True),
            ("ci", True),
        ],
    )
    def test_get_logger_selects_renderer(self, environment, use_json):
        """Test JSON output in testing/ci, human-readable elsewhere."""
        with patch("sse_relay.core.container.infrastructure.settings") as mock_settings:
            mock_settings.environment = environment
            mock_settings.log_level = "DEBUG"

            get_logger.cache_clear()

            with patch(
                "sse_relay.infrastructure.logging.console_adapter.ConsoleAdapter"
            ) as mock_console:
                mock_adapter = MagicMock()
                mock_console.return_value = mock_adapter

                logger = get_logger()

                mock_console.assert_called_once_with(use_json=use_json, level="DEBUG")
                assert logger == mock_adapter

    def test_get_logger_uses_singleton_pattern(self):
        """Test get_logger() returns same instance on multiple calls."""
        with patch("sse_relay.core.container.infrastructure.settings") as mock_settings:
            mock_settings.environment = "development"
            mock_settings.log_level = "INFO"

            get_logger.cache_clear()

            with patch(
                "sse_relay.infrastructure.logging.console_adapter.ConsoleAdapter"
            ) as mock_console:
                mock_console.return_value = MagicMock()

                logger1 = get_logger()
                logger2 = get_logger()

                mock_console.assert_called_once()
                assert logger1 is logger2

    def test_get_logger_returns_protocol_compliant_adapter(self):
        """Test real adapter exposes every LoggerProtocol method."""
        get_logger.cache_clear()

        logger = get_logger()

        for method in ("debug", "info", "warning", "error", "critical", "bind"):
            assert callable(getattr(logger, method))
