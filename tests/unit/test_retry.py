"""
Tests for backoff policies.
"""

import pytest

from hedera_client import ExponentialBackoff, FixedBackoff, NetworkError, PrecheckStatusError, Status


class TestRetryPolicies:
    """Test retry policy implementations."""

    def test_exponential_backoff_calculation(self):
        """Test exponential backoff delay calculation."""
        policy = ExponentialBackoff(base_delay=1.0, max_delay=60.0, factor=2.0, jitter=False)

        assert policy.calculate_delay(1) == 1.0
        assert policy.calculate_delay(2) == 2.0
        assert policy.calculate_delay(3) == 4.0
        assert policy.calculate_delay(4) == 8.0

    def test_exponential_backoff_is_capped(self):
        policy = ExponentialBackoff(base_delay=0.25, max_delay=8.0, jitter=False)
        assert policy.calculate_delay(20) == 8.0

    def test_exponential_backoff_large_attempts(self):
        policy = ExponentialBackoff(max_attempts=100_000, base_delay=0.25, max_delay=8.0, factor=10.0,
                                    jitter=False)
        assert policy.calculate_delay(5_000) == 8.0
        assert policy.calculate_delay(100_000) == 8.0

    def test_factor_must_be_positive(self):
        with pytest.raises(ValueError):
            ExponentialBackoff(factor=0)

    def test_fixed_backoff_calculation(self):
        """Test fixed backoff delay calculation."""
        policy = FixedBackoff(delay=2.0)

        assert policy.calculate_delay(1) == 2.0
        assert policy.calculate_delay(5) == 2.0

    def test_backoff_sleeps_the_delay(self):
        slept = []
        policy = ExponentialBackoff(base_delay=0.5, max_delay=4.0, jitter=False, sleep=slept.append)
        policy.backoff(1)
        policy.backoff(2)
        assert slept == [0.5, 1.0]
        assert policy.total_retries == 2

    def test_jitter_stays_near_delay(self):
        policy = ExponentialBackoff(base_delay=1.0, jitter=True, jitter_factor=0.1)
        for _ in range(50):
            assert 0.95 <= policy.add_jitter(1.0) <= 1.05

    def test_should_retry(self):
        policy = FixedBackoff(max_attempts=3, delay=0.0)
        assert policy.should_retry(1, NetworkError("down"))
        assert policy.should_retry(2, PrecheckStatusError(Status.BUSY))
        assert not policy.should_retry(3, NetworkError("down"))
        assert not policy.should_retry(1, PrecheckStatusError(Status.INVALID_SIGNATURE))

    @pytest.mark.parametrize("status", [Status.BUSY, Status.PLATFORM_TRANSACTION_NOT_CREATED,
                                        Status.PLATFORM_NOT_ACTIVE])
    def test_busy_statuses_are_retryable(self, status):
        assert status.is_busy
        assert FixedBackoff(max_attempts=2, delay=0.0).should_retry(1, PrecheckStatusError(status))

    def test_invalid_bounds(self):
        with pytest.raises(ValueError):
            ExponentialBackoff(max_attempts=0)
        with pytest.raises(ValueError):
            ExponentialBackoff(base_delay=5.0, max_delay=1.0)
