"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from environment
variables.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic
- Protocol constants stay in `sse_relay/core/constants.py`

Usage:
    from sse_relay.core.config import settings

    # Access config
    history_size = settings.sse_max_history_size
    allowed = settings.sse_allowed_event_types

    # Environment detection
    if settings.is_development:
        # Dev-specific behavior
"""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from sse_relay.core.constants import (
    CURSOR_KEY_PREFIX_DEFAULT,
    DEFAULT_ALLOWED_EVENT_TYPES,
    MAX_HISTORY_SIZE_DEFAULT,
    MAX_RETRY_ATTEMPTS_DEFAULT,
    RECONNECT_INTERVAL_MS_DEFAULT,
    TERMINAL_EVENT_TYPE,
)
from sse_relay.core.enums import Environment


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Loads configuration from environment variables. Every field has a
    default so the relay runs without any environment set.

    Configuration precedence:
        1. Environment variables
        2. Default values

    Returns:
        Settings: Application configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )

    # Core application settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, detailed errors)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(
        default="SSE Relay",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )

    # Durable cursor storage (Redis)
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL for durable resumption cursors",
    )

    # Server stream configuration
    sse_max_history_size: int = Field(
        default=MAX_HISTORY_SIZE_DEFAULT,
        description="Number of most recent events retained for replay",
    )
    sse_allowed_event_types: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_EVENT_TYPES),
        description="Event types a stream may carry (comma-separated)",
    )
    sse_terminal_event_type: str = Field(
        default=TERMINAL_EVENT_TYPE,
        description="Event type that ends a stream after delivery",
    )

    # Client connection configuration
    sse_reconnect_interval_ms: int = Field(
        default=RECONNECT_INTERVAL_MS_DEFAULT,
        description="Base interval for exponential reconnect backoff (ms)",
    )
    sse_max_retry_attempts: int = Field(
        default=MAX_RETRY_ATTEMPTS_DEFAULT,
        description="Consecutive reconnect attempts before the client gives up",
    )
    sse_heartbeat_interval_ms: int | None = Field(
        default=None,
        description="Client-local heartbeat period (ms); unset disables heartbeat",
    )
    sse_cursor_key_prefix: str = Field(
        default=CURSOR_KEY_PREFIX_DEFAULT,
        description="Prefix of durable resumption cursor keys",
    )

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("sse_max_history_size")
    @classmethod
    def validate_max_history_size(cls, v: int) -> int:
        """
        Validate history window holds at least one event.

        Args:
            v: Configured history size.

        Returns:
            int: Validated history size.

        Raises:
            ValueError: If size is less than 1.
        """
        if v < 1:
            raise ValueError("sse_max_history_size must be at least 1")
        return v

    @field_validator("sse_reconnect_interval_ms")
    @classmethod
    def validate_reconnect_interval(cls, v: int) -> int:
        """
        Validate reconnect interval is positive.

        Args:
            v: Base reconnect interval in milliseconds.

        Returns:
            int: Validated interval.

        Raises:
            ValueError: If interval is not positive.
        """
        if v <= 0:
            raise ValueError("sse_reconnect_interval_ms must be positive")
        return v

    @field_validator("sse_max_retry_attempts")
    @classmethod
    def validate_max_retry_attempts(cls, v: int) -> int:
        """
        Validate retry budget is not negative.

        Args:
            v: Maximum reconnect attempts.

        Returns:
            int: Validated attempt count.

        Raises:
            ValueError: If negative.
        """
        if v < 0:
            raise ValueError("sse_max_retry_attempts must not be negative")
        return v

    @field_validator("sse_allowed_event_types", mode="before")
    @classmethod
    def parse_allowed_event_types(cls, v: str | list[str]) -> list[str]:
        """
        Parse comma-separated event type allowlist.

        Args:
            v: Comma-separated string or list of event types.

        Returns:
            list[str]: Event type names.
        """
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @model_validator(mode="after")
    def validate_terminal_event_allowed(self) -> "Settings":
        """
        Validate the terminal event type is deliverable.

        A terminal type missing from the allowlist would close every stream
        without ever being written.

        Returns:
            Settings: Validated settings.

        Raises:
            ValueError: If the terminal type is not in the allowlist.
        """
        if self.sse_terminal_event_type not in self.sse_allowed_event_types:
            raise ValueError(
                f"sse_terminal_event_type '{self.sse_terminal_event_type}' "
                "must be listed in sse_allowed_event_types"
            )
        return self

    # Convenience properties for environment checks
    @property
    def is_development(self) -> bool:
        """
        Check if running in development environment.

        Returns:
            bool: True if environment is DEVELOPMENT, False otherwise.
        """
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """
        Check if running in testing environment.

        Returns:
            bool: True if environment is TESTING, False otherwise.
        """
        return self.environment == Environment.TESTING

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.

        Returns:
            bool: True if environment is PRODUCTION, False otherwise.
        """
        return self.environment == Environment.PRODUCTION


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application configuration (cached singleton).
    """
    return Settings()


settings = get_settings()
