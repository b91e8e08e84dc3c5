"""Monitoring bounded context: positions, transitions and the state tracker."""

from .exceptions import MonitorConstructionError, MonitorError
from .services import StateTracker
from .value_objects import (
    MinuteEvent,
    Observation,
    Position,
    SubscriptionKind,
    Transition,
    TransitionKind,
)

__all__ = [
    "MonitorError",
    "MonitorConstructionError",
    "StateTracker",
    "MinuteEvent",
    "Observation",
    "Position",
    "SubscriptionKind",
    "Transition",
    "TransitionKind",
]
