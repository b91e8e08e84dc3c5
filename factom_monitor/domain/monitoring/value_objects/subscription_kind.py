"""Subscription kinds - one channel type per payload shape."""

from enum import Enum


class SubscriptionKind(str, Enum):
    """Kinds of subscriber channels.

    - MINUTE: MinuteEvent on every minute (or height) advance
    - HEIGHT: bare height int on height advance
    - COMMITTED_HEIGHT: bare committed height int on committed advance
    - ERROR: exception instance on every failed poll
    """

    MINUTE = "minute"
    HEIGHT = "height"
    COMMITTED_HEIGHT = "committed_height"
    ERROR = "error"

    @property
    def default_buffer_size(self) -> int:
        """Recommended queue size for this kind."""
        return 25 if self is SubscriptionKind.MINUTE else 6
