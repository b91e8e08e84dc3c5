"""Base ValueObject class for domain model.

ValueObject - immutable object compared by attribute values, not identity.
Positions and events are value objects: two events with the same height and
minute are the same event.
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True, eq=True)
class ValueObject(ABC):
    """Base class for all domain value objects.

    ValueObject characteristics:
    - **Immutable**: cannot be changed after creation (frozen=True)
    - **Equality by value**: compared by attributes, not by id
    - **Replaceable**: to "change" a VO, build a new one

    Example:
        >>> @dataclass(frozen=True)
        ... class Position(ValueObject):
        ...     height: int
        ...     minute: int

        >>> Position(10, 5) == Position(10, 5)  # True (same value)
        >>> position.minute = 6  # FrozenInstanceError!
    """

    def __post_init__(self) -> None:
        """Hook for validation after initialization.

        Override to add invariants.

        Raises:
            ValueError: If validation fails.
        """
        pass


def validate_value_object(condition: bool, message: str) -> None:
    """Helper for validation in value objects.

    Args:
        condition: Condition that must be True.
        message: Error message if condition is False.

    Raises:
        ValueError: If condition is False.

    Example:
        >>> validate_value_object(0 <= minute <= 9, "Minute must be in [0, 9]")
    """
    if not condition:
        raise ValueError(message)
