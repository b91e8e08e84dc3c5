"""Poller - the scheduling loop behind a Monitor.

One request in flight at a time. After a minute transition that landed
close to where the node's block timing predicted, the poller sleeps through
most of the next minute instead of polling every interval.
"""

import time
from collections.abc import Callable
from typing import Optional, Protocol

from factom_monitor.config import Settings
from factom_monitor.config.logging import get_logger
from factom_monitor.domain.monitoring import Observation, StateTracker, Transition
from factom_monitor.infrastructure.messaging import Broadcaster
from factom_monitor.infrastructure.retry import RetryPolicy, retry_policy_from_settings

from .lifecycle import Lifecycle, RequestCancelled

logger = get_logger(__name__)


class MinuteSource(Protocol):
    """Anything that can fetch the node's current minute under a deadline.

    FactomdClient raises FactomdError subclasses; any other Exception from
    a custom source is reported the same way.
    """

    async def current_minute(self, *, timeout: Optional[float] = None) -> Observation:
        ...


def post_transition_delay(gap: Optional[float], minute_duration: float, poll_interval: float) -> float:
    """How long to sleep after a minute transition.

    Args:
        gap: Seconds since the previous transition (None if this is the first).
        minute_duration: Nominal minute length (block seconds / 10).
        poll_interval: Normal spacing between requests.

    Returns:
        ``minute_duration - poll_interval`` when the transition arrived within
        one poll interval of the nominal minute length, else 0 (keep dense
        polling).
    """
    if gap is None or minute_duration <= poll_interval:
        return 0.0
    if abs(gap - minute_duration) <= poll_interval:
        return minute_duration - poll_interval
    return 0.0


class Poller:
    """Polling loop feeding the StateTracker and the Broadcaster.

    Cycle:
    1. Wait ``delay`` (poll interval, retry delay) or until stopped
    2. Request current-minute under ``request_timeout``
    3. Failure → publish error, next delay from the retry policy
    4. Success → apply to tracker, publish transition, maybe sleep through
       the rest of the minute

    Only Lifecycle.stop() ends the loop.
    """

    def __init__(
        self,
        source: MinuteSource,
        tracker: StateTracker,
        broadcaster: Broadcaster,
        lifecycle: Lifecycle,
        settings: Settings,
        retry_policy: Optional[RetryPolicy] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = source
        self._tracker = tracker
        self._broadcaster = broadcaster
        self._lifecycle = lifecycle
        self._settings = settings
        self._retry_policy = retry_policy or retry_policy_from_settings(settings)
        self._clock = clock

        self._failures = 0
        self._last_transition_at: Optional[float] = None

    @property
    def failures(self) -> int:
        """Current streak of failed requests."""
        return self._failures

    async def run(self) -> None:
        """Run until the lifecycle is stopped."""
        interval = self._settings.poll_interval
        delay = interval
        logger.info(
            "poller.started",
            poll_interval=interval,
            request_timeout=self._settings.request_timeout,
        )

        while True:
            if await self._lifecycle.wait(delay):
                break

            try:
                observation = await self._lifecycle.run_request(
                    self._source.current_minute(timeout=self._settings.request_timeout)
                )
            except RequestCancelled:
                break
            except Exception as e:
                if self._lifecycle.stopped:
                    break
                self._failures += 1
                delay = self._retry_policy.next_delay(self._failures)
                logger.warning(
                    "poller.request_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                    failures=self._failures,
                    retry_in=delay,
                )
                self._broadcaster.publish_error(e)
                continue

            if self._lifecycle.stopped:
                break

            if self._failures:
                logger.info("poller.recovered", failures=self._failures)
            self._failures = 0
            delay = interval

            transition = self._tracker.apply(observation)
            if not transition.is_progress:
                continue

            self._broadcaster.publish_transition(transition)
            if transition.minute_advanced:
                sleep_for = self._on_minute_transition(transition, observation)
                if sleep_for > 0 and await self._lifecycle.wait(sleep_for):
                    break

        logger.info("poller.stopped")

    def _on_minute_transition(self, transition: Transition, observation: Observation) -> float:
        now = self._clock()
        gap = None if self._last_transition_at is None else now - self._last_transition_at
        self._last_transition_at = now

        sleep_for = post_transition_delay(
            gap, observation.minute_duration, self._settings.poll_interval
        )
        logger.debug(
            "poller.transition",
            height=transition.position.height,
            committed_height=transition.position.committed_height,
            minute=transition.position.minute,
            kind=str(transition.kind),
            gap=gap,
            sleep_for=sleep_for,
        )
        return sleep_for
