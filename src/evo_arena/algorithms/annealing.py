"""Simulated annealing over a single bounded solution.

Each iteration perturbs the current solution, accepts the neighbour if it is
strictly better or otherwise with Metropolis probability exp(-delta / T), and
then cools the temperature geometrically. The population is always the single
current solution.
"""

import logging
import math
from typing import Any

import numpy as np

from evo_arena.params import SAParams, merge_params
from evo_arena.population import Individual, Population
from evo_arena.problem import Problem
from evo_arena.stats import AlgorithmStats, StatsTracker

logger = logging.getLogger(__name__)

# Probability that a given dimension is perturbed when building a neighbour
PERTURB_PROBABILITY = 0.5


class SimulatedAnnealing:
    """Step-wise simulated annealing.

    The best solution is tracked separately from the current one, since the
    current solution may move to worse points while the temperature is high.

    Args:
        problem: The problem to optimize.
        params: Initial parameters. Defaults to SAParams().
        seed: Seed for the instance's random number generator.
        history_limit: Keep only the newest N statistics records.

    Example:
        >>> sa = SimulatedAnnealing(problem, SAParams(cooling_rate=0.5), seed=1)
        >>> _ = sa.initialize_population()
        >>> sa.step()
        >>> sa.temperature
        50.0
    """

    algorithm_id = "sa"

    def __init__(
        self,
        problem: Problem,
        params: SAParams | None = None,
        *,
        seed: int | None = None,
        history_limit: int | None = None,
    ) -> None:
        self.problem = problem
        self._params, _ = merge_params(SAParams(), params)
        self._rng = np.random.default_rng(seed)
        self._tracker = StatsTracker(history_limit)
        self.reset()

    def initialize(self, params: SAParams | None = None, **changes: Any) -> None:
        """Apply parameters, then reset (restoring the initial temperature)."""
        self._params, _ = merge_params(self._params, params, **changes)
        self.reset()

    def reset(self) -> None:
        self._current: Individual | None = None
        self._best: Individual | None = None
        self._temperature = self._params.initial_temperature
        self._generation = 0
        self._evaluations = 0
        self._tracker.clear()
        logger.debug("SA reset")

    def set_params(self, params: SAParams | None = None, **changes: Any) -> None:
        """Update parameters without touching the current temperature."""
        self._params, _ = merge_params(self._params, params, **changes)
        logger.debug("SA parameters updated: %s", self._params)

    def initialize_population(self) -> Population:
        """Start from a uniformly random solution at the initial temperature."""
        self._temperature = self._params.initial_temperature
        genotype = self.problem.generate_random_solution(self._rng)
        self._current = Individual(genotype=genotype, fitness=self._evaluate(genotype))
        self._best = self._current
        self._record()
        logger.debug("SA initialized at temperature %.6g", self._temperature)
        return self.population

    def step(self) -> None:
        """Perform one annealing iteration and cool the temperature."""
        if self._current is None:
            self.initialize_population()
            return

        neighbor_x = self._neighbor(self._current.genotype)
        neighbor = Individual(genotype=neighbor_x, fitness=self._evaluate(neighbor_x))

        if neighbor.fitness > self._current.fitness:
            self._current = neighbor
        else:
            delta = self._current.fitness - neighbor.fitness
            if self._temperature > 0:
                probability = math.exp(-delta / self._temperature)
            else:
                probability = 0.0
            if self._rng.random() < probability:
                self._current = neighbor

        if self._current.fitness > self._best.fitness:
            self._best = self._current

        self._temperature *= self._params.cooling_rate
        self._generation += 1
        self._record()

    def run(self, generations: int | None = None) -> Individual:
        if self._current is None:
            self.initialize_population()
        budget = self._params.max_generations if generations is None else generations
        for _ in range(budget):
            if self.has_converged():
                logger.debug(
                    "SA converged at iteration %d, temperature %.6g", self._generation, self._temperature
                )
                break
            self.step()
        return self.best

    def has_converged(self) -> bool:
        """True after max_generations iterations or once the system has cooled."""
        if self._current is None:
            return False
        if self._generation >= self._params.max_generations:
            return True
        return self._temperature < self._params.min_temperature

    @property
    def params(self) -> SAParams:
        return self._params

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def temperature(self) -> float:
        return self._temperature

    @property
    def current(self) -> Individual:
        """The solution the search is currently at."""
        if self._current is None:
            raise RuntimeError("SA has no solution yet; call initialize_population() or step() first")
        return self._current

    @property
    def population(self) -> Population:
        if self._current is None:
            return Population(x=np.empty((0, self.problem.dimension)), fitness=np.empty(0))
        return Population.from_individuals([self._current])

    @property
    def best(self) -> Individual:
        if self._best is None:
            raise RuntimeError("SA has no solution yet; call initialize_population() or step() first")
        return self._best

    @property
    def stats(self) -> AlgorithmStats:
        return self._tracker.snapshot()

    def _neighbor(self, x: np.ndarray) -> np.ndarray:
        d = x.shape[0]
        mask = self._rng.random(d) < PERTURB_PROBABILITY
        perturbation = self._rng.uniform(-1.0, 1.0, d) * self.problem.ranges * self._params.neighborhood_size
        return self.problem.repair(np.where(mask, x + perturbation, x))

    def _evaluate(self, x: np.ndarray) -> float:
        self._evaluations += 1
        return self.problem.to_fitness(self.problem.evaluate(x))

    def _record(self) -> None:
        # Single solution: diversity is zero and the average is the current fitness
        self._tracker.record(
            generation=self._generation,
            best_fitness=self._best.fitness,
            average_fitness=self._current.fitness,
            diversity=0.0,
            evaluations=self._evaluations,
        )
