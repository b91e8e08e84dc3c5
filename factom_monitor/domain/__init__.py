"""Domain Layer - Pure Monitoring Logic.

This layer contains:
- Value Objects (Observation, Position, MinuteEvent, Transition)
- Domain Services (StateTracker)
- Domain Exceptions

Key Principles:
- No network or asyncio code
- Monotonic state, decided in one place

Bounded Contexts:
- monitoring: node position tracking
- shared: Common base classes
"""

from .shared import DomainException, ValueObject

__all__ = [
    "DomainException",
    "ValueObject",
]
