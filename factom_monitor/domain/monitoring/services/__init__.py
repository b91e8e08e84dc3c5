"""Monitoring domain services."""

from .state_tracker import StateTracker

__all__ = ["StateTracker"]
