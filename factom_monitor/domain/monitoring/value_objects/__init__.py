"""Monitoring value objects."""

from .observation import MINUTES_PER_BLOCK, Observation
from .position import MinuteEvent, Position
from .subscription_kind import SubscriptionKind
from .transition import Transition, TransitionKind

__all__ = [
    "MINUTES_PER_BLOCK",
    "Observation",
    "Position",
    "MinuteEvent",
    "SubscriptionKind",
    "Transition",
    "TransitionKind",
]
