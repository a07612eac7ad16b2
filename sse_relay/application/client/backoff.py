"""Reconnect backoff: capped exponential ceiling with full jitter.

For attempt n (1-based) the ceiling is ``min(base * 2**(n-1), max_delay)``
and the actual wait is drawn uniformly from ``[0, ceiling)``. Full jitter
spreads reconnecting clients out instead of synchronizing their retries.

Example:
    >>> policy = BackoffPolicy(base_interval_ms=1000)
    >>> policy.ceiling_ms(3)
    4000
    >>> 0 <= policy.delay_ms(3) < 4000
    True
"""

import math
import random
from dataclasses import dataclass, field

from sse_relay.core.constants import (
    RECONNECT_INTERVAL_MS_DEFAULT,
    RECONNECT_MAX_DELAY_MS,
)


@dataclass(frozen=True, kw_only=True)
class BackoffPolicy:
    """Computes reconnect delays.

    Attributes:
        base_interval_ms: Ceiling for the first attempt.
        max_delay_ms: Upper bound for every ceiling.
        rng: Random source (injectable for deterministic tests).
    """

    base_interval_ms: int = RECONNECT_INTERVAL_MS_DEFAULT
    max_delay_ms: int = RECONNECT_MAX_DELAY_MS
    rng: random.Random = field(default_factory=random.Random, compare=False)

    def __post_init__(self) -> None:
        if self.base_interval_ms <= 0:
            raise ValueError("base_interval_ms must be positive")
        if self.max_delay_ms <= 0:
            raise ValueError("max_delay_ms must be positive")

    def ceiling_ms(self, attempt: int) -> int:
        """Exponential ceiling for an attempt.

        Args:
            attempt: 1-based attempt number.

        Returns:
            ``min(base * 2**(attempt-1), max_delay)`` in milliseconds.

        Raises:
            ValueError: If attempt is less than 1.
        """
        if attempt < 1:
            raise ValueError("attempt must be at least 1")
        # Exponent capped so the power never grows unbounded.
        exponent = min(attempt - 1, 62)
        return min(self.base_interval_ms * 2**exponent, self.max_delay_ms)

    def delay_ms(self, attempt: int) -> int:
        """Jittered wait for an attempt, in ``[0, ceiling)``.

        Args:
            attempt: 1-based attempt number.

        Returns:
            Whole milliseconds to wait before reconnecting.
        """
        return math.floor(self.rng.random() * self.ceiling_ms(attempt))
