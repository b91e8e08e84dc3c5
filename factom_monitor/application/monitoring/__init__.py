"""Monitoring use case: seed, poll, broadcast, stop."""

from .lifecycle import Lifecycle, RequestCancelled
from .monitor import Monitor
from .poller import MinuteSource, Poller, post_transition_delay

__all__ = [
    "Lifecycle",
    "RequestCancelled",
    "Monitor",
    "MinuteSource",
    "Poller",
    "post_transition_delay",
]
