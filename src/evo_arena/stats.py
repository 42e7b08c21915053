"""Per-generation statistics for algorithm monitoring.

Every algorithm records one statistics entry when its population is created and
one per step: the best fitness seen so far, the mean fitness of the current
population, and the population diversity. Entries accumulate in an
append-only history that charting code can read in full.

- diversity: Mean pairwise Euclidean distance across a population
- FitnessHistory: Immutable snapshot of the three parallel history sequences
- AlgorithmStats: Immutable snapshot of the latest entry plus the history
- StatsTracker: The mutable recorder each algorithm owns
"""

from dataclasses import dataclass, field

import numpy as np


def diversity(x: np.ndarray) -> float:
    """Compute the mean pairwise Euclidean distance of a set of points.

    Args:
        x: Points, shape (n, dimension).

    Returns:
        Mean distance over all n*(n-1)/2 unordered pairs, or 0.0 when there are
        fewer than two points.

    Example:
        >>> diversity(np.array([[0.0, 0.0], [3.0, 4.0]]))
        5.0
    """
    n = x.shape[0]
    if n < 2:
        return 0.0
    diff = x[:, np.newaxis, :] - x[np.newaxis, :, :]
    distances = np.sqrt(np.sum(diff * diff, axis=-1))
    upper = np.triu_indices(n, k=1)
    return float(np.mean(distances[upper]))


@dataclass(frozen=True, eq=False)
class FitnessHistory:
    """Parallel per-generation sequences, one entry per recorded generation.

    Attributes:
        best_fitness: Best fitness seen so far at each record.
        average_fitness: Mean fitness of the population at each record.
        diversity: Population diversity at each record.
    """

    best_fitness: np.ndarray = field(default_factory=lambda: np.empty(0))
    average_fitness: np.ndarray = field(default_factory=lambda: np.empty(0))
    diversity: np.ndarray = field(default_factory=lambda: np.empty(0))

    def __post_init__(self) -> None:
        """Validate that the three sequences have equal length.

        Raises:
            ValueError: If the sequences differ in length.
        """
        lengths = {len(self.best_fitness), len(self.average_fitness), len(self.diversity)}
        if len(lengths) != 1:
            raise ValueError(f"history sequences must have equal length, got {sorted(lengths)}")
        for name in ("best_fitness", "average_fitness", "diversity"):
            values = np.array(getattr(self, name), dtype=np.float64)
            values.setflags(write=False)
            object.__setattr__(self, name, values)

    def __len__(self) -> int:
        return len(self.best_fitness)


@dataclass(frozen=True)
class AlgorithmStats:
    """Snapshot of an algorithm's statistics.

    Attributes:
        current_generation: Generations (or iterations) completed.
        best_fitness: Best fitness seen so far, maximize form.
        average_fitness: Mean fitness of the current population.
        diversity_measure: Diversity of the current population.
        evaluations: Objective function evaluations performed.
        history: Full retained history for charting.
    """

    current_generation: int = 0
    best_fitness: float = 0.0
    average_fitness: float = 0.0
    diversity_measure: float = 0.0
    evaluations: int = 0
    history: FitnessHistory = field(default_factory=FitnessHistory)


class StatsTracker:
    """Append-only recorder of per-generation statistics.

    Args:
        history_limit: Keep only the newest history_limit records. None keeps
            everything.

    Example:
        >>> tracker = StatsTracker()
        >>> tracker.record(generation=0, best_fitness=-2.0, average_fitness=-4.0, diversity=1.5, evaluations=10)
        >>> tracker.snapshot().history.best_fitness
        array([-2.])
    """

    def __init__(self, history_limit: int | None = None) -> None:
        if history_limit is not None and history_limit <= 0:
            raise ValueError(f"history_limit must be positive, got {history_limit}")
        self.history_limit = history_limit
        self.clear()

    def clear(self) -> None:
        """Drop all records."""
        self._latest = AlgorithmStats()
        self._best: list[float] = []
        self._average: list[float] = []
        self._diversity: list[float] = []

    def record(
        self,
        generation: int,
        best_fitness: float,
        average_fitness: float,
        diversity: float,
        evaluations: int,
    ) -> None:
        """Append one record and make it the latest snapshot."""
        self._best.append(float(best_fitness))
        self._average.append(float(average_fitness))
        self._diversity.append(float(diversity))

        if self.history_limit is not None and len(self._best) > self.history_limit:
            excess = len(self._best) - self.history_limit
            del self._best[:excess]
            del self._average[:excess]
            del self._diversity[:excess]

        self._latest = AlgorithmStats(
            current_generation=generation,
            best_fitness=float(best_fitness),
            average_fitness=float(average_fitness),
            diversity_measure=float(diversity),
            evaluations=evaluations,
        )

    def record_population(
        self,
        generation: int,
        x: np.ndarray,
        fitness: np.ndarray,
        best_fitness: float,
        evaluations: int,
    ) -> None:
        """Record the statistics of a population of genotypes and fitness values."""
        self.record(
            generation=generation,
            best_fitness=best_fitness,
            average_fitness=float(np.mean(fitness)),
            diversity=diversity(x),
            evaluations=evaluations,
        )

    def __len__(self) -> int:
        return len(self._best)

    @property
    def latest(self) -> AlgorithmStats:
        """Latest record without history (cheap to read every step)."""
        return self._latest

    def snapshot(self) -> AlgorithmStats:
        """Return the latest record together with a copy of the full history."""
        history = FitnessHistory(
            best_fitness=np.array(self._best),
            average_fitness=np.array(self._average),
            diversity=np.array(self._diversity),
        )
        latest = self._latest
        return AlgorithmStats(
            current_generation=latest.current_generation,
            best_fitness=latest.best_fitness,
            average_fitness=latest.average_fitness,
            diversity_measure=latest.diversity_measure,
            evaluations=latest.evaluations,
            history=history,
        )
