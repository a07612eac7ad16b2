"""Core enums package.

Exports all core-level enums for convenient importing.

Usage:
    from sse_relay.core.enums import ErrorCode, Environment
"""

from sse_relay.core.enums.environment import Environment
from sse_relay.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
