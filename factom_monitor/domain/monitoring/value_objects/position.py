"""Position and MinuteEvent value objects."""

from dataclasses import dataclass

from factom_monitor.domain.shared import ValueObject, validate_value_object

from .observation import MINUTES_PER_BLOCK, Observation


@dataclass(frozen=True)
class Position(ValueObject):
    """Canonical monitor state: height, committed height, normalized minute.

    Exactly one live Position per monitor. The StateTracker never mutates a
    Position in place, it swaps in a new one, so a reader always holds a
    consistent snapshot.
    """

    height: int
    committed_height: int
    minute: int

    def __post_init__(self) -> None:
        validate_value_object(
            0 <= self.minute < MINUTES_PER_BLOCK,
            f"Minute must be in [0, {MINUTES_PER_BLOCK - 1}], got {self.minute}",
        )

    @classmethod
    def from_observation(cls, observation: Observation) -> "Position":
        """Build a Position from a raw observation (minute normalized)."""
        return cls(
            height=observation.height,
            committed_height=observation.committed_height,
            minute=observation.normalized_minute,
        )

    @property
    def key(self) -> tuple[int, int]:
        """(height, minute) pair used for lexicographic progress checks."""
        return (self.height, self.minute)

    def as_tuple(self) -> tuple[int, int, int]:
        """Return (height, committed_height, minute)."""
        return (self.height, self.committed_height, self.minute)


@dataclass(frozen=True)
class MinuteEvent(ValueObject):
    """Payload delivered to minute subscribers."""

    committed_height: int
    height: int
    minute: int

    @classmethod
    def from_position(cls, position: Position) -> "MinuteEvent":
        return cls(
            committed_height=position.committed_height,
            height=position.height,
            minute=position.minute,
        )
