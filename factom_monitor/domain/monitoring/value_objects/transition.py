"""Transition - classification of an observation against the stored position."""

from dataclasses import dataclass
from enum import Flag, auto

from factom_monitor.domain.shared import ValueObject

from .position import MinuteEvent, Position


class TransitionKind(Flag):
    """Granularities at which an observation made progress.

    HEIGHT always comes together with MINUTE. COMMITTED_HEIGHT is checked
    independently and may appear alone or with either of them.
    """

    NONE = 0
    MINUTE = auto()
    HEIGHT = auto()
    COMMITTED_HEIGHT = auto()


@dataclass(frozen=True)
class Transition(ValueObject):
    """Result of StateTracker.apply().

    Attributes:
        kind: Which granularities advanced (NONE if nothing did).
        position: Stored position after the observation was applied.
        event: Minute event payload, set only when the minute advanced.
    """

    kind: TransitionKind
    position: Position
    event: MinuteEvent | None = None

    @property
    def is_progress(self) -> bool:
        return self.kind != TransitionKind.NONE

    @property
    def minute_advanced(self) -> bool:
        return TransitionKind.MINUTE in self.kind

    @property
    def height_advanced(self) -> bool:
        return TransitionKind.HEIGHT in self.kind

    @property
    def committed_height_advanced(self) -> bool:
        return TransitionKind.COMMITTED_HEIGHT in self.kind
