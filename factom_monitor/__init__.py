"""factomd-monitor - watch a factomd node's height and minute.

Usage:
    from factom_monitor import Monitor

    monitor = await Monitor.create("http://localhost:8088/v2")
    heights = monitor.subscribe_height_events()
    new_height = await heights.get()
    await monitor.aclose()
"""

from .__version__ import __version__
from .application.monitoring import Monitor
from .config import Settings, get_settings, setup_logging
from .domain.monitoring import (
    MinuteEvent,
    MonitorConstructionError,
    MonitorError,
    Observation,
    Position,
    SubscriptionKind,
)
from .infrastructure.messaging import Subscription
from .infrastructure.rpc import FactomdClient, FactomdError

__all__ = [
    "__version__",
    "Monitor",
    "Settings",
    "get_settings",
    "setup_logging",
    "MinuteEvent",
    "Observation",
    "Position",
    "SubscriptionKind",
    "Subscription",
    "FactomdClient",
    "FactomdError",
    "MonitorError",
    "MonitorConstructionError",
]
