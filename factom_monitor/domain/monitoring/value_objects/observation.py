"""Observation - one decoded current-minute response."""

from dataclasses import dataclass

from factom_monitor.domain.shared import ValueObject, validate_value_object

MINUTES_PER_BLOCK = 10


@dataclass(frozen=True)
class Observation(ValueObject):
    """Raw node state as reported by a single current-minute request.

    Produced fresh on every successful request and handed to the
    StateTracker. The raw minute may be 10: factomd reports it briefly
    while a block is being finalized, it is not an 11th minute.

    Attributes:
        committed_height: Directory block height (last saved block).
        height: Leader height (block currently being built).
        minute: Raw minute, 0-10.
        block_seconds: Configured directory block duration.
        block_start_time: Node clock at block start (0 if not reported).
        minute_start_time: Node clock at minute start (0 if not reported).
        server_time: Node clock when the response was built (0 if not reported).
    """

    committed_height: int
    height: int
    minute: int
    block_seconds: int
    block_start_time: int = 0
    minute_start_time: int = 0
    server_time: int = 0

    def __post_init__(self) -> None:
        validate_value_object(
            0 <= self.minute <= MINUTES_PER_BLOCK,
            f"Raw minute must be in [0, {MINUTES_PER_BLOCK}], got {self.minute}",
        )
        validate_value_object(self.block_seconds >= 0, "Block duration must be non-negative")

    @property
    def normalized_minute(self) -> int:
        """Minute folded into [0, 9] (raw 10 is the same as 0)."""
        return self.minute % MINUTES_PER_BLOCK

    @property
    def minute_duration(self) -> float:
        """Nominal length of one minute in seconds."""
        return self.block_seconds / MINUTES_PER_BLOCK
