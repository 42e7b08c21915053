"""Differential evolution (DE/x/y/bin).

Generations are synchronous: every mutant is built from the population as it
stood at the start of the generation, and replacements take effect together
at the end. A trial replaces its target when it is at least as fit.
"""

import logging
from typing import Any

import numpy as np

from evo_arena.operators import binomial_crossover, de_mutant
from evo_arena.params import DEParams, merge_params
from evo_arena.population import Individual, Population
from evo_arena.problem import Problem
from evo_arena.stats import AlgorithmStats, StatsTracker

logger = logging.getLogger(__name__)


class DifferentialEvolution:
    """Step-wise differential evolution.

    The best/* strategies use the best individual found so far as their base
    vector.

    Args:
        problem: The problem to optimize.
        params: Initial parameters. Defaults to DEParams().
        seed: Seed for the instance's random number generator.
        history_limit: Keep only the newest N statistics records.
    """

    algorithm_id = "de"

    def __init__(
        self,
        problem: Problem,
        params: DEParams | None = None,
        *,
        seed: int | None = None,
        history_limit: int | None = None,
    ) -> None:
        self.problem = problem
        self._params, _ = merge_params(DEParams(), params)
        self._rng = np.random.default_rng(seed)
        self._tracker = StatsTracker(history_limit)
        self.reset()

    def initialize(self, params: DEParams | None = None, **changes: Any) -> None:
        self._params, _ = merge_params(self._params, params, **changes)
        self.reset()

    def reset(self) -> None:
        self._x: np.ndarray | None = None
        self._fitness: np.ndarray | None = None
        self._best: Individual | None = None
        self._generation = 0
        self._evaluations = 0
        self._tracker.clear()
        logger.debug("DE reset")

    def set_params(self, params: DEParams | None = None, **changes: Any) -> None:
        self._params, needs_reinit = merge_params(self._params, params, **changes)
        logger.debug("DE parameters updated: %s", self._params)
        if needs_reinit and self._x is not None:
            self.reset()
            self.initialize_population()

    def initialize_population(self) -> Population:
        n = self._params.population_size
        self._x = np.stack([self.problem.generate_random_solution(self._rng) for _ in range(n)])
        self._fitness = self._evaluate(self._x)
        self._update_best()
        self._record()
        logger.debug("DE initialized %d vectors with strategy %s", n, self._params.strategy)
        return self.population

    def step(self) -> None:
        """Perform one generation of mutation, crossover and greedy replacement."""
        if self._x is None:
            self.initialize_population()
            return

        params = self._params
        start_x = self._x
        start_fitness = self._fitness
        best = self._best.genotype

        new_x = start_x.copy()
        new_fitness = start_fitness.copy()
        for i in range(start_x.shape[0]):
            mutant = self.problem.repair(
                de_mutant(params.strategy, start_x, i, best, params.differential_weight, self._rng)
            )
            trial = binomial_crossover(start_x[i], mutant, params.crossover_rate, self._rng)
            trial_fitness = self._evaluate(trial[np.newaxis, :])[0]

            # Ties go to the trial
            if trial_fitness >= start_fitness[i]:
                new_x[i] = trial
                new_fitness[i] = trial_fitness

        self._x = new_x
        self._fitness = new_fitness
        self._generation += 1
        self._update_best()
        self._record()

    def run(self, generations: int | None = None) -> Individual:
        if self._x is None:
            self.initialize_population()
        budget = self._params.max_generations if generations is None else generations
        for _ in range(budget):
            if self.has_converged():
                logger.debug("DE converged at generation %d", self._generation)
                break
            self.step()
        return self.best

    def has_converged(self) -> bool:
        """True when population diversity falls below convergence_threshold."""
        if self._x is None:
            return False
        return self._tracker.latest.diversity_measure < self._params.convergence_threshold

    @property
    def params(self) -> DEParams:
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
    def best(self) -> Individual:
        if self._best is None:
            raise RuntimeError("DE has no population yet; call initialize_population() or step() first")
        return self._best

    @property
    def stats(self) -> AlgorithmStats:
        return self._tracker.snapshot()

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
