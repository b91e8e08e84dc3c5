"""Tests for retry delay policies."""

import pytest

from factom_monitor.config import Settings
from factom_monitor.infrastructure.retry import (
    ConstantRetry,
    ExponentialBackoff,
    retry_policy_from_settings,
)


class TestConstantRetry:
    def test_delay_never_grows(self):
        policy = ConstantRetry(interval=1.0)

        assert [policy.next_delay(n) for n in (1, 2, 10, 1000)] == [1.0, 1.0, 1.0, 1.0]


class TestExponentialBackoff:
    def test_grows_by_multiplier(self):
        policy = ExponentialBackoff(base_delay=0.05, multiplier=1.5, max_delay=15.0)

        assert policy.next_delay(1) == pytest.approx(0.05)
        assert policy.next_delay(2) == pytest.approx(0.075)
        assert policy.next_delay(3) == pytest.approx(0.1125)

    def test_capped_at_max_delay(self):
        policy = ExponentialBackoff(base_delay=0.05, multiplier=1.5, max_delay=15.0)

        assert policy.next_delay(30) == 15.0
        assert policy.next_delay(100_000) == 15.0

    def test_zero_failures_uses_base_delay(self):
        policy = ExponentialBackoff(base_delay=0.5, multiplier=2.0, max_delay=10.0)

        assert policy.next_delay(0) == 0.5


class TestPolicyFromSettings:
    def test_constant_is_default(self):
        settings = Settings(_env_file=None, poll_interval=0.25)

        policy = retry_policy_from_settings(settings)

        assert policy == ConstantRetry(interval=0.25)

    def test_exponential_from_settings(self):
        settings = Settings(
            _env_file=None,
            retry_strategy="exponential",
            retry_interval=0.1,
            retry_multiplier=2.0,
            retry_max=1.0,
        )

        policy = retry_policy_from_settings(settings)

        assert policy == ExponentialBackoff(base_delay=0.1, multiplier=2.0, max_delay=1.0)
