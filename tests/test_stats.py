"""Tests for diversity and statistics tracking."""

import numpy as np
import pytest

from evo_arena.stats import FitnessHistory, StatsTracker, diversity


class TestDiversity:
    """Tests for the mean pairwise distance measure."""

    def test_two_points(self) -> None:
        """Two points: their Euclidean distance."""
        assert diversity(np.array([[0.0, 0.0], [3.0, 4.0]])) == pytest.approx(5.0)

    def test_three_points(self) -> None:
        """Mean over all unordered pairs."""
        x = np.array([[0.0], [1.0], [3.0]])

        # Pairs: 1, 3, 2
        assert diversity(x) == pytest.approx(2.0)

    def test_single_point_is_zero(self) -> None:
        """Fewer than two points have zero diversity."""
        assert diversity(np.array([[1.0, 2.0]])) == 0.0

    def test_identical_points_are_zero(self) -> None:
        """Identical points have zero diversity."""
        assert diversity(np.ones((4, 3))) == 0.0


class TestFitnessHistory:
    """Tests for the history snapshot."""

    def test_default_is_empty(self) -> None:
        """A default history has no records."""
        assert len(FitnessHistory()) == 0

    def test_rejects_unequal_lengths(self) -> None:
        """The three sequences must have equal length."""
        with pytest.raises(ValueError, match="equal length"):
            FitnessHistory(best_fitness=np.zeros(2), average_fitness=np.zeros(2), diversity=np.zeros(1))


class TestStatsTracker:
    """Tests for the append-only recorder."""

    def test_record_updates_latest(self) -> None:
        """The latest record reflects the last call."""
        tracker = StatsTracker()
        tracker.record(generation=3, best_fitness=-1.0, average_fitness=-2.0, diversity=0.5, evaluations=40)

        latest = tracker.latest
        assert latest.current_generation == 3
        assert latest.best_fitness == -1.0
        assert latest.average_fitness == -2.0
        assert latest.diversity_measure == 0.5
        assert latest.evaluations == 40

    def test_history_appends_in_order(self) -> None:
        """Each record appends one entry to every sequence."""
        tracker = StatsTracker()
        for g in range(4):
            tracker.record(generation=g, best_fitness=g, average_fitness=-g, diversity=1.0, evaluations=g)

        history = tracker.snapshot().history
        assert len(tracker) == 4
        np.testing.assert_array_equal(history.best_fitness, [0, 1, 2, 3])
        np.testing.assert_array_equal(history.average_fitness, [0, -1, -2, -3])

    def test_history_limit_keeps_newest(self) -> None:
        """With a limit, only the newest records are kept."""
        tracker = StatsTracker(history_limit=2)
        for g in range(5):
            tracker.record(generation=g, best_fitness=g, average_fitness=g, diversity=g, evaluations=g)

        history = tracker.snapshot().history
        np.testing.assert_array_equal(history.best_fitness, [3, 4])
        assert tracker.latest.current_generation == 4

    def test_invalid_history_limit(self) -> None:
        """A non-positive limit is rejected."""
        with pytest.raises(ValueError, match="history_limit must be positive"):
            StatsTracker(history_limit=0)

    def test_clear(self) -> None:
        """clear() empties the history and resets the latest record."""
        tracker = StatsTracker()
        tracker.record(generation=1, best_fitness=1.0, average_fitness=1.0, diversity=1.0, evaluations=1)
        tracker.clear()

        assert len(tracker) == 0
        assert tracker.latest.current_generation == 0
        assert tracker.latest.evaluations == 0

    def test_record_population(self) -> None:
        """Population records compute mean fitness and diversity."""
        tracker = StatsTracker()
        tracker.record_population(
            generation=0,
            x=np.array([[0.0, 0.0], [3.0, 4.0]]),
            fitness=np.array([-1.0, -3.0]),
            best_fitness=-1.0,
            evaluations=2,
        )

        assert tracker.latest.average_fitness == -2.0
        assert tracker.latest.diversity_measure == pytest.approx(5.0)

    def test_snapshot_is_independent(self) -> None:
        """A snapshot does not change when more records arrive."""
        tracker = StatsTracker()
        tracker.record(generation=0, best_fitness=0.0, average_fitness=0.0, diversity=0.0, evaluations=0)
        snapshot = tracker.snapshot()
        tracker.record(generation=1, best_fitness=1.0, average_fitness=1.0, diversity=1.0, evaluations=1)

        assert len(snapshot.history) == 1
