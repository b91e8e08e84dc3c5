"""Retry delay policies for failed polls.

Two cadences for a node that keeps failing:
- constant: retry every poll_interval (default, matches normal polling)
- exponential: retry_interval * multiplier ** (n - 1), capped at retry_max

The policy only computes delays; the poller does the waiting so that every
wait stays cancellable by stop().
"""

from dataclasses import dataclass
from typing import Protocol

from factom_monitor.config import Settings


class RetryPolicy(Protocol):
    """Maps the current failure streak to the next delay in seconds."""

    def next_delay(self, failures: int) -> float:
        ...


@dataclass(frozen=True)
class ConstantRetry:
    """Retry at a fixed cadence, however long the outage lasts."""

    interval: float

    def next_delay(self, failures: int) -> float:
        return self.interval


@dataclass(frozen=True)
class ExponentialBackoff:
    """Exponential backoff between consecutive failures.

    Delay is ``base_delay * multiplier ** (failures - 1)``, capped at
    ``max_delay``; an overflowing power also yields ``max_delay``.

    Example:
        >>> policy = ExponentialBackoff(base_delay=0.05, multiplier=1.5, max_delay=15.0)
        >>> policy.next_delay(1)  # 0.05
        >>> policy.next_delay(2)  # 0.075
        >>> policy.next_delay(30)  # 15.0 (ceiling)
    """

    base_delay: float
    multiplier: float
    max_delay: float

    def next_delay(self, failures: int) -> float:
        if failures < 1:
            return self.base_delay
        try:
            delay = self.base_delay * (self.multiplier ** (failures - 1))
        except OverflowError:
            return self.max_delay
        return min(delay, self.max_delay)


def retry_policy_from_settings(settings: Settings) -> RetryPolicy:
    """Build the retry policy selected by ``settings.retry_strategy``."""
    if settings.retry_strategy == "exponential":
        return ExponentialBackoff(
            base_delay=settings.retry_interval,
            multiplier=settings.retry_multiplier,
            max_delay=settings.retry_max,
        )
    return ConstantRetry(interval=settings.poll_interval)
