"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (console)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from sse_relay.core.config import settings

if TYPE_CHECKING:
    from sse_relay.domain.protocols.logger_protocol import LoggerProtocol


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development/production: ConsoleAdapter (human-readable)
    - testing/ci: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from sse_relay.infrastructure.logging.console_adapter import ConsoleAdapter

    env = (
        settings.environment.value
        if hasattr(settings.environment, "value")
        else str(settings.environment)
    )
    use_json = env in {"testing", "ci"}
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)
