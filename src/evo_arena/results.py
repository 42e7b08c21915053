"""Result record for a completed optimization run.

RunResult is immutable (frozen dataclass). The best genotype is copied on
construction, and the history is the algorithm's FitnessHistory snapshot.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from evo_arena.stats import FitnessHistory


@dataclass(frozen=True, eq=False)
class RunResult:
    """Outcome of running one algorithm on one problem.

    Attributes:
        algorithm_id: Canonical algorithm id.
        problem_id: Benchmark function id.
        dimension: Problem dimension.
        seed: Seed the algorithm was created with.
        best_objective: Best raw objective value found, in the problem's own
            sense (lower is better for minimization problems).
        best_genotype: Location of the best solution, shape (dimension,).
        generations: Generations (or iterations) performed.
        evaluations: Objective function evaluations performed.
        history: Per-generation statistics in maximize-form fitness.
        elapsed_seconds: Wall-clock run time.

    Example:
        >>> result = run_once("pso", "sphere", seed=3)
        >>> result.to_dict()["algorithm"]
        'pso'
    """

    algorithm_id: str
    problem_id: str
    dimension: int
    seed: int | None
    best_objective: float
    best_genotype: np.ndarray
    generations: int
    evaluations: int
    history: FitnessHistory
    elapsed_seconds: float

    def __post_init__(self) -> None:
        """Validate and copy the best genotype.

        Raises:
            ValueError: If the genotype length does not match dimension, or the
                counters are negative.
        """
        genotype = np.array(self.best_genotype, dtype=np.float64)
        if genotype.shape != (self.dimension,):
            raise ValueError(f"best_genotype must have shape ({self.dimension},), got {genotype.shape}")
        if self.generations < 0:
            raise ValueError(f"generations must be non-negative, got {self.generations}")
        if self.evaluations < 0:
            raise ValueError(f"evaluations must be non-negative, got {self.evaluations}")
        genotype.setflags(write=False)
        object.__setattr__(self, "best_genotype", genotype)
        object.__setattr__(self, "best_objective", float(self.best_objective))

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable summary (history omitted)."""
        return {
            "algorithm": self.algorithm_id,
            "problem": self.problem_id,
            "dimension": self.dimension,
            "seed": self.seed,
            "best_objective": self.best_objective,
            "best_genotype": self.best_genotype.tolist(),
            "generations": self.generations,
            "evaluations": self.evaluations,
            "time_seconds": self.elapsed_seconds,
        }
