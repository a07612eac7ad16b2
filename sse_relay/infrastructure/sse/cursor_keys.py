"""Durable key naming for client resumption cursors.

Keys are derived deterministically from the subscription URL so the same
endpoint resumes across sessions while distinct endpoints never collide.

Key Pattern:
    {prefix}:{sha256(url)}

Example:
    >>> CursorKeys.for_url("http://localhost:3001/events")
    "sse-last-event-id:5f1c..."
"""

import hashlib

from sse_relay.core.constants import CURSOR_KEY_PREFIX_DEFAULT


class CursorKeys:
    """Centralized cursor key generation."""

    @staticmethod
    def digest(url: str) -> str:
        """Opaque, fixed-length digest of a subscription URL.

        Args:
            url: Subscription URL as configured (before resume parameters).

        Returns:
            Hex-encoded SHA-256 digest.
        """
        return hashlib.sha256(url.encode("utf-8")).hexdigest()

    @staticmethod
    def for_url(url: str, prefix: str = CURSOR_KEY_PREFIX_DEFAULT) -> str:
        """Cursor storage key for a subscription URL.

        Args:
            url: Subscription URL.
            prefix: Key namespace.

        Returns:
            Storage key.
        """
        return f"{prefix}:{CursorKeys.digest(url)}"
