"""Messaging infrastructure - lossy subscriber fan-out."""

from .broadcaster import Broadcaster
from .subscription import Subscription

__all__ = ["Broadcaster", "Subscription"]
