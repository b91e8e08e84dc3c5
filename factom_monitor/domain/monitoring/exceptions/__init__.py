"""Monitoring exceptions."""

from .monitor_exceptions import MonitorConstructionError, MonitorError

__all__ = [
    "MonitorError",
    "MonitorConstructionError",
]
