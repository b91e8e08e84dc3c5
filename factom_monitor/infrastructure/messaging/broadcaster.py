"""Broadcaster - lossy fan-out of transitions and errors to subscribers.

Broadcaster decouples the poller from its consumers:
- The poller publishes each Transition and each failed request once
- Every subscriber of the matching kind gets its own copy
- A slow subscriber loses events; it never slows the poller down
"""

import threading
from collections import defaultdict
from collections.abc import Mapping
from typing import Any

from factom_monitor.config.logging import get_logger
from factom_monitor.domain.monitoring import MinuteEvent, SubscriptionKind, Transition

from .subscription import Subscription

logger = get_logger(__name__)


class Broadcaster:
    """Per-kind subscriber registry with non-blocking delivery.

    Delivery rules:
    - MINUTE: MinuteEvent on every minute-or-height transition
    - HEIGHT: new height (int) on height transitions only
    - COMMITTED_HEIGHT: new committed height (int) on committed transitions only
    - ERROR: every failed request

    Subscriber lists are append-only. The lock guards the lists and is held
    only while taking a snapshot; sends happen outside it. The closed flag is
    re-checked before every send, so at most the offer already under way
    when close() returns can still land.

    Example:
        >>> broadcaster = Broadcaster()
        >>> minutes = broadcaster.subscribe(SubscriptionKind.MINUTE)
        >>> broadcaster.publish_transition(transition)
        >>> event = await minutes.get()
    """

    def __init__(self, buffer_sizes: Mapping[SubscriptionKind, int] | None = None) -> None:
        """Initialize broadcaster.

        Args:
            buffer_sizes: Queue size per kind; missing kinds use the kind default.
        """
        self._buffer_sizes = {kind: kind.default_buffer_size for kind in SubscriptionKind}
        if buffer_sizes:
            self._buffer_sizes.update(buffer_sizes)

        self._subscribers: dict[SubscriptionKind, list[Subscription[Any]]] = defaultdict(list)
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def close(self) -> None:
        """Stop delivering. Every later publish is a no-op."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        logger.info("broadcaster.closed", subscribers=self.subscriber_count())

    def subscribe(self, kind: SubscriptionKind) -> Subscription[Any]:
        """Create and register a new subscription of the given kind."""
        subscription: Subscription[Any] = Subscription(kind, self._buffer_sizes[kind])
        with self._lock:
            self._subscribers[kind].append(subscription)
            count = len(self._subscribers[kind])
        logger.debug("broadcaster.subscription_added", kind=kind.value, subscribers=count)
        return subscription

    def subscriber_count(self, kind: SubscriptionKind | None = None) -> int:
        """Get number of subscriptions for a kind (or all kinds)."""
        with self._lock:
            if kind is not None:
                return len(self._subscribers.get(kind, []))
            return sum(len(subs) for subs in self._subscribers.values())

    def _snapshot(self, kind: SubscriptionKind) -> tuple[Subscription[Any], ...]:
        with self._lock:
            if self._closed:
                return ()
            return tuple(self._subscribers.get(kind, ()))

    def publish(self, kind: SubscriptionKind, payload: Any) -> int:
        """Offer a payload to every subscriber of a kind.

        Args:
            kind: Subscriber kind to deliver to.
            payload: Item to enqueue.

        Returns:
            Number of subscribers that accepted the payload.
        """
        delivered = 0
        for subscription in self._snapshot(kind):
            # close() from another thread stops the rest of this fan-out
            if self._closed:
                break
            if subscription.offer(payload):
                delivered += 1
            else:
                logger.debug(
                    "broadcaster.event_dropped",
                    kind=kind.value,
                    dropped=subscription.dropped,
                )
        return delivered

    def publish_transition(self, transition: Transition) -> int:
        """Deliver a Transition to minute/height/committed subscribers.

        Returns:
            Total number of deliveries.
        """
        delivered = 0
        if transition.minute_advanced:
            event = transition.event or MinuteEvent.from_position(transition.position)
            delivered += self.publish(SubscriptionKind.MINUTE, event)
        if transition.height_advanced:
            delivered += self.publish(SubscriptionKind.HEIGHT, transition.position.height)
        if transition.committed_height_advanced:
            delivered += self.publish(
                SubscriptionKind.COMMITTED_HEIGHT, transition.position.committed_height
            )
        return delivered

    def publish_error(self, error: Exception) -> int:
        """Deliver a request failure to error subscribers."""
        return self.publish(SubscriptionKind.ERROR, error)
