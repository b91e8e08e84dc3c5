"""Tests for StateTracker domain service."""

import threading

import pytest

from factom_monitor.domain.monitoring import MinuteEvent, StateTracker, TransitionKind
from tests.fakes import observation


@pytest.fixture
def tracker():
    """Tracker seeded at height 10, minute 5."""
    return StateTracker(observation(10, 5))


class TestStateTrackerSeed:
    def test_seed_sets_position(self, tracker):
        """Seed (10, 10, 5) is readable immediately."""
        assert tracker.position.as_tuple() == (10, 10, 5)

    def test_seed_normalizes_minute_ten(self):
        tracker = StateTracker(observation(10, 10, committed=9))

        assert tracker.position.as_tuple() == (10, 9, 0)


class TestStateTrackerApply:
    """Tests for StateTracker.apply()."""

    def test_minute_advance(self, tracker):
        # Act
        transition = tracker.apply(observation(10, 6))

        # Assert
        assert transition.kind == TransitionKind.MINUTE
        assert transition.event == MinuteEvent(committed_height=10, height=10, minute=6)
        assert tracker.position.as_tuple() == (10, 10, 6)

    def test_same_position_is_no_progress(self, tracker):
        transition = tracker.apply(observation(10, 5))

        assert transition.kind == TransitionKind.NONE
        assert transition.event is None
        assert tracker.position.as_tuple() == (10, 10, 5)

    def test_older_position_is_no_progress(self, tracker):
        transition = tracker.apply(observation(10, 4))

        assert not transition.is_progress
        assert tracker.position.minute == 5

    def test_height_advance_implies_minute_advance(self, tracker):
        # Height 11 minute 0: committed still 10 (block 11 not saved yet)
        transition = tracker.apply(observation(11, 0, committed=10))

        assert transition.minute_advanced
        assert transition.height_advanced
        assert not transition.committed_height_advanced
        assert transition.event == MinuteEvent(committed_height=10, height=11, minute=0)

    def test_minute_ten_at_same_height_is_absorbed(self):
        """Raw minute 10 at an unchanged height never produces a transition."""
        tracker = StateTracker(observation(10, 9))

        transition = tracker.apply(observation(10, 10))

        assert transition.kind == TransitionKind.NONE
        assert tracker.position.as_tuple() == (10, 10, 9)

    def test_minute_ten_with_new_height_counts(self):
        tracker = StateTracker(observation(10, 9))

        transition = tracker.apply(observation(11, 10, committed=10))

        assert transition.height_advanced
        assert tracker.position.as_tuple() == (11, 10, 0)

    def test_committed_only_progress_updates_committed(self):
        tracker = StateTracker(observation(11, 0, committed=10))

        transition = tracker.apply(observation(11, 0, committed=11))

        assert transition.kind == TransitionKind.COMMITTED_HEIGHT
        assert transition.event is None
        assert tracker.position.as_tuple() == (11, 11, 0)

    def test_committed_advance_with_minute(self):
        tracker = StateTracker(observation(11, 0, committed=10))

        transition = tracker.apply(observation(11, 1, committed=11))

        assert transition.kind == TransitionKind.MINUTE | TransitionKind.COMMITTED_HEIGHT
        assert transition.event == MinuteEvent(committed_height=11, height=11, minute=1)

    def test_committed_never_decreases(self, tracker):
        tracker.apply(observation(10, 6, committed=8))

        assert tracker.position.committed_height == 10


class TestStateTrackerInvariants:
    def test_heights_are_non_decreasing(self):
        """Delivered heights and committed heights never go backwards."""
        tracker = StateTracker(observation(5, 0, committed=4))
        script = [
            (5, 1, 5), (5, 0, 4), (6, 3, 5), (5, 9, 5), (6, 10, 6),
            (6, 4, 6), (7, 0, 6), (6, 8, 6), (7, 1, 7), (7, 1, 3),
        ]

        heights, committed = [], []
        for height, minute, committed_height in script:
            transition = tracker.apply(observation(height, minute, committed=committed_height))
            if transition.height_advanced:
                heights.append(transition.position.height)
            if transition.committed_height_advanced:
                committed.append(transition.position.committed_height)

        assert heights == sorted(heights)
        assert committed == sorted(committed)
        assert tracker.position.as_tuple() == (7, 7, 1)

    def test_concurrent_apply_keeps_position_consistent(self):
        tracker = StateTracker(observation(0, 0))
        observations = [observation(h, m) for h in range(20) for m in range(10)]

        def worker(offset: int) -> None:
            for obs in observations[offset::4]:
                tracker.apply(obs)
                snapshot = tracker.position
                assert 0 <= snapshot.minute <= 9

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert tracker.position.as_tuple() == (19, 19, 9)
