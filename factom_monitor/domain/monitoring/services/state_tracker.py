"""StateTracker - Domain Service holding the single current Position.

Decides whether an Observation is genuine progress and at which
granularity (minute, height, committed height).
"""

import threading

from factom_monitor.config.logging import get_logger

from ..value_objects import MinuteEvent, Observation, Position, Transition, TransitionKind

logger = get_logger(__name__)


class StateTracker:
    """Monotonic tracker of the node position.

    Rules:
    - Raw minute is normalized with ``% 10`` before any comparison, so a raw
      10 at an unchanged height is absorbed as no progress.
    - (height, minute) is compared lexicographically with the stored pair;
      only a strictly greater pair counts as a minute transition.
    - Committed height is compared on its own and stored whenever it grows,
      even without minute progress.

    Thread-safe: apply() runs under a lock and swaps in a new immutable
    Position, so position() never sees a half-applied update.

    Example:
        >>> tracker = StateTracker(seed_observation)
        >>> transition = tracker.apply(observation)
        >>> if transition.minute_advanced:
        ...     print(transition.event)
    """

    def __init__(self, seed: Observation) -> None:
        """Initialize tracker from the seed observation.

        Args:
            seed: First successful observation of the node.
        """
        self._lock = threading.Lock()
        self._position = Position.from_observation(seed)

    @property
    def position(self) -> Position:
        """Snapshot of the current position (never blocks on broadcasting)."""
        with self._lock:
            return self._position

    def apply(self, observation: Observation) -> Transition:
        """Classify an observation and update the stored position.

        Args:
            observation: Fresh observation from the node.

        Returns:
            Transition with kind NONE when nothing advanced.
        """
        candidate = Position.from_observation(observation)

        with self._lock:
            current = self._position
            kind = TransitionKind.NONE

            if candidate.key > current.key:
                kind |= TransitionKind.MINUTE
                if candidate.height > current.height:
                    kind |= TransitionKind.HEIGHT

            committed = current.committed_height
            if candidate.committed_height > committed:
                kind |= TransitionKind.COMMITTED_HEIGHT
                committed = candidate.committed_height

            if kind == TransitionKind.NONE:
                return Transition(kind=kind, position=current)

            if TransitionKind.MINUTE in kind:
                updated = Position(
                    height=candidate.height,
                    committed_height=committed,
                    minute=candidate.minute,
                )
            else:
                updated = Position(
                    height=current.height,
                    committed_height=committed,
                    minute=current.minute,
                )
            self._position = updated

        logger.debug(
            "state_tracker.progress",
            kind=str(kind),
            height=updated.height,
            committed_height=updated.committed_height,
            minute=updated.minute,
        )

        event = MinuteEvent.from_position(updated) if TransitionKind.MINUTE in kind else None
        return Transition(kind=kind, position=updated, event=event)
