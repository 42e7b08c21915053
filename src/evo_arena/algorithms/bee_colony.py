"""Artificial bee colony.

A generation runs three phases over the food sources (candidate solutions):

1. Employed bees: every source tries one neighbour and keeps it if better.
2. Onlooker bees: sources are scanned cyclically and each visit is accepted
   with probability proportional to the source's quality. Every accepted
   visit tries one neighbour. The phase ends after ``population_size``
   accepted visits.
3. Scouts: sources that failed to improve more than ``limit`` times in a row
   are replaced by random solutions.

A neighbour changes one random dimension j of source i towards or away from a
random partner k != i:

    v_j = x_ij + phi (x_ij - x_kj),   phi ~ U(-scaling_factor, scaling_factor)
"""

import logging
from typing import Any

import numpy as np

from evo_arena.params import ABCParams, merge_params
from evo_arena.population import Individual, Population
from evo_arena.problem import Problem
from evo_arena.stats import AlgorithmStats, StatsTracker

logger = logging.getLogger(__name__)


def selection_weights(objective: np.ndarray, is_minimization: bool) -> np.ndarray:
    """Onlooker selection weights from raw objective values.

    Minimization uses 1 / (1 + cost - min(0, min(cost))), which is positive and
    at most 1 for every finite source. Maximization uses max(0, value).
    Non-finite weights count as 0, and the weights fall back to uniform when
    none is positive, so onlookers can always be placed.

    Args:
        objective: Raw objective values, shape (n,).
        is_minimization: Whether lower objective values are better.

    Returns:
        Selection probabilities summing to 1, shape (n,).
    """
    with np.errstate(invalid="ignore", divide="ignore"):
        if is_minimization:
            shift = min(0.0, float(np.min(objective)))
            weights = 1.0 / (1.0 + objective - shift)
        else:
            weights = np.maximum(0.0, objective)
    weights = np.where(np.isfinite(weights), weights, 0.0)
    if not np.any(weights > 0):
        weights = np.ones_like(objective, dtype=np.float64)
    return weights / weights.sum()


class ArtificialBeeColony:
    """Step-wise artificial bee colony.

    Args:
        problem: The problem to optimize.
        params: Initial parameters. Defaults to ABCParams().
        seed: Seed for the instance's random number generator.
        history_limit: Keep only the newest N statistics records.
    """

    algorithm_id = "abc"

    def __init__(
        self,
        problem: Problem,
        params: ABCParams | None = None,
        *,
        seed: int | None = None,
        history_limit: int | None = None,
    ) -> None:
        self.problem = problem
        self._params, _ = merge_params(ABCParams(), params)
        self._rng = np.random.default_rng(seed)
        self._tracker = StatsTracker(history_limit)
        self.reset()

    def initialize(self, params: ABCParams | None = None, **changes: Any) -> None:
        self._params, _ = merge_params(self._params, params, **changes)
        self.reset()

    def reset(self) -> None:
        self._x: np.ndarray | None = None
        self._fitness: np.ndarray | None = None
        self._trials: np.ndarray | None = None
        self._best: Individual | None = None
        self._generation = 0
        self._evaluations = 0
        self._tracker.clear()
        logger.debug("ABC reset")

    def set_params(self, params: ABCParams | None = None, **changes: Any) -> None:
        self._params, needs_reinit = merge_params(self._params, params, **changes)
        logger.debug("ABC parameters updated: %s", self._params)
        if needs_reinit and self._x is not None:
            self.reset()
            self.initialize_population()

    def initialize_population(self) -> Population:
        n = self._params.population_size
        self._x = np.stack([self.problem.generate_random_solution(self._rng) for _ in range(n)])
        self._fitness = self._evaluate(self._x)
        self._trials = np.zeros(n, dtype=np.int64)
        self._update_best()
        self._record()
        logger.debug("ABC initialized %d food sources", n)
        return self.population

    def step(self) -> None:
        """Run the employed, onlooker and scout phases once."""
        if self._x is None:
            self.initialize_population()
            return

        self._employed_phase()
        self._onlooker_phase()
        self._scout_phase()

        self._generation += 1
        self._update_best()
        self._record()

    def run(self, generations: int | None = None) -> Individual:
        if self._x is None:
            self.initialize_population()
        budget = self._params.max_generations if generations is None else generations
        for _ in range(budget):
            if self.has_converged():
                logger.debug("ABC converged at generation %d", self._generation)
                break
            self.step()
        return self.best

    def has_converged(self) -> bool:
        if self._x is None:
            return False
        if self._generation >= self._params.max_generations:
            return True
        return self._tracker.latest.diversity_measure < self._params.convergence_threshold

    @property
    def params(self) -> ABCParams:
        return self._params

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def population(self) -> Population:
        if self._x is None:
            return Population(x=np.empty((0, self.problem.dimension)), fitness=np.empty(0))
        return Population(x=self._x, fitness=self._fitness)

    @property
    def trials(self) -> np.ndarray:
        """Copy of the consecutive failed-improvement counters, one per source."""
        if self._trials is None:
            return np.empty(0, dtype=np.int64)
        return self._trials.copy()

    @property
    def best(self) -> Individual:
        if self._best is None:
            raise RuntimeError("ABC has no food sources yet; call initialize_population() or step() first")
        return self._best

    @property
    def stats(self) -> AlgorithmStats:
        return self._tracker.snapshot()

    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------

    def _employed_phase(self) -> None:
        for i in range(self._x.shape[0]):
            self._try_neighbor(i)

    def _onlooker_phase(self) -> None:
        n = self._x.shape[0]
        objective = np.array([self.problem.to_objective(f) for f in self._fitness])
        probabilities = selection_weights(objective, self.problem.is_minimization)

        attempts = 0
        i = 0
        while attempts < n:
            if self._rng.random() < probabilities[i]:
                self._try_neighbor(i)
                attempts += 1
            i = (i + 1) % n

    def _scout_phase(self) -> None:
        exhausted = np.flatnonzero(self._trials > self._params.limit)
        for i in exhausted:
            self._x[i] = self.problem.generate_random_solution(self._rng)
            self._fitness[i] = self._evaluate(self._x[i][np.newaxis, :])[0]
            self._trials[i] = 0
        if exhausted.size:
            logger.debug("ABC scouts replaced %d abandoned sources", exhausted.size)

    def _try_neighbor(self, i: int) -> None:
        """Greedy replacement of source i by one of its neighbours."""
        n, d = self._x.shape
        candidate = self._x[i].copy()
        j = self._rng.integers(d)
        # Partner drawn uniformly from the other sources
        k = self._rng.integers(n - 1)
        if k >= i:
            k += 1
        phi = self._rng.uniform(-1.0, 1.0) * self._params.scaling_factor
        candidate[j] += phi * (candidate[j] - self._x[k, j])
        candidate = self.problem.repair(candidate)

        fitness = self._evaluate(candidate[np.newaxis, :])[0]
        if fitness > self._fitness[i]:
            self._x[i] = candidate
            self._fitness[i] = fitness
            self._trials[i] = 0
        else:
            self._trials[i] += 1

    def _evaluate(self, x: np.ndarray) -> np.ndarray:
        self._evaluations += x.shape[0]
        return np.array([self.problem.to_fitness(self.problem.evaluate(row)) for row in x], dtype=np.float64)

    def _update_best(self) -> None:
        idx = int(np.argmax(self._fitness))
        if self._best is None or self._fitness[idx] > self._best.fitness:
            self._best = Individual(genotype=self._x[idx], fitness=self._fitness[idx])

    def _record(self) -> None:
        self._tracker.record_population(
            generation=self._generation,
            x=self._x,
            fitness=self._fitness,
            best_fitness=self._best.fitness,
            evaluations=self._evaluations,
        )
