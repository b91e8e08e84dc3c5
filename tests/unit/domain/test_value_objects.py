"""Tests for monitoring value objects."""

import dataclasses

import pytest

from factom_monitor.domain.monitoring import (
    MinuteEvent,
    Observation,
    Position,
    SubscriptionKind,
    Transition,
    TransitionKind,
)


class TestObservation:
    """Tests for Observation."""

    def test_raw_minute_ten_normalizes_to_zero(self):
        obs = Observation(committed_height=9, height=10, minute=10, block_seconds=600)

        assert obs.minute == 10
        assert obs.normalized_minute == 0

    def test_minute_duration_is_tenth_of_block(self):
        obs = Observation(committed_height=9, height=10, minute=3, block_seconds=600)

        assert obs.minute_duration == 60.0

    @pytest.mark.parametrize("minute", [-1, 11])
    def test_rejects_minute_out_of_range(self, minute):
        with pytest.raises(ValueError):
            Observation(committed_height=1, height=1, minute=minute, block_seconds=600)

    def test_rejects_negative_block_duration(self):
        with pytest.raises(ValueError):
            Observation(committed_height=1, height=1, minute=1, block_seconds=-1)


class TestPosition:
    """Tests for Position."""

    def test_from_observation_normalizes_minute(self):
        obs = Observation(committed_height=9, height=10, minute=10, block_seconds=600)

        position = Position.from_observation(obs)

        assert position.as_tuple() == (10, 9, 0)

    def test_rejects_minute_ten(self):
        with pytest.raises(ValueError):
            Position(height=1, committed_height=1, minute=10)

    def test_is_immutable(self):
        position = Position(height=1, committed_height=1, minute=1)

        with pytest.raises(dataclasses.FrozenInstanceError):
            position.minute = 2  # type: ignore[misc]

    def test_key_orders_lexicographically(self):
        assert Position(11, 10, 0).key > Position(10, 10, 9).key
        assert Position(10, 10, 6).key > Position(10, 10, 5).key
        assert not Position(10, 10, 5).key > Position(10, 10, 5).key

    def test_equality_by_value(self):
        assert Position(1, 1, 1) == Position(1, 1, 1)
        assert MinuteEvent(1, 2, 3) == MinuteEvent.from_position(Position(2, 1, 3))


class TestTransition:
    """Tests for Transition flags."""

    def test_none_is_not_progress(self):
        transition = Transition(kind=TransitionKind.NONE, position=Position(1, 1, 1))

        assert not transition.is_progress
        assert not transition.minute_advanced
        assert not transition.height_advanced
        assert not transition.committed_height_advanced

    def test_combined_flags(self):
        kind = TransitionKind.MINUTE | TransitionKind.HEIGHT | TransitionKind.COMMITTED_HEIGHT
        transition = Transition(kind=kind, position=Position(2, 2, 0))

        assert transition.is_progress
        assert transition.minute_advanced
        assert transition.height_advanced
        assert transition.committed_height_advanced


class TestSubscriptionKind:
    def test_default_buffer_sizes(self):
        assert SubscriptionKind.MINUTE.default_buffer_size == 25
        assert SubscriptionKind.HEIGHT.default_buffer_size == 6
        assert SubscriptionKind.COMMITTED_HEIGHT.default_buffer_size == 6
        assert SubscriptionKind.ERROR.default_buffer_size == 6
