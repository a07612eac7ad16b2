"""Unit tests for BackoffPolicy (capped exponential backoff, full jitter)."""

import random

import pytest

from sse_relay.application.client.backoff import BackoffPolicy
from sse_relay.core.constants import RECONNECT_MAX_DELAY_MS
from tests.utils.utils import FixedRandom


@pytest.mark.unit
class TestCeiling:
    """Test BackoffPolicy.ceiling_ms()."""

    def test_doubles_per_attempt(self):
        policy = BackoffPolicy(base_interval_ms=1000)

        assert [policy.ceiling_ms(n) for n in (1, 2, 3, 4)] == [1000, 2000, 4000, 8000]

    def test_capped_at_thirty_seconds(self):
        policy = BackoffPolicy(base_interval_ms=3000)

        assert policy.ceiling_ms(5) == RECONNECT_MAX_DELAY_MS
        assert policy.ceiling_ms(500) == RECONNECT_MAX_DELAY_MS

    def test_attempt_must_be_positive(self):
        with pytest.raises(ValueError):
            BackoffPolicy().ceiling_ms(0)

    @pytest.mark.parametrize("field", ["base_interval_ms", "max_delay_ms"])
    def test_rejects_non_positive_config(self, field):
        with pytest.raises(ValueError):
            BackoffPolicy(**{field: 0})


@pytest.mark.unit
class TestDelay:
    """Test BackoffPolicy.delay_ms()."""

    def test_third_attempt_within_ceiling(self):
        """Test base 1000, attempt 3 waits in [0, 4000)."""
        policy = BackoffPolicy(base_interval_ms=1000, rng=random.Random(1234))

        delays = [policy.delay_ms(3) for _ in range(500)]

        assert all(0 <= d < 4000 for d in delays)
        assert len(set(delays)) > 1

    def test_full_jitter_scales_ceiling(self):
        policy = BackoffPolicy(base_interval_ms=1000, rng=FixedRandom(0.5))

        assert policy.delay_ms(3) == 2000

    def test_zero_draw_means_immediate_retry(self):
        policy = BackoffPolicy(rng=FixedRandom(0.0))

        assert policy.delay_ms(1) == 0

    def test_never_reaches_ceiling(self):
        policy = BackoffPolicy(base_interval_ms=1000, rng=FixedRandom(0.99999))

        assert policy.delay_ms(1) == 999
