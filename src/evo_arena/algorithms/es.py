"""(mu + lambda) and (mu, lambda) evolution strategy with self-adaptive step sizes.

Every individual carries its own vector of mutation step sizes, one per
dimension. An offspring inherits its parent's step sizes, rescales them with a
single log-normal factor and then mutates each gene with its own step size.
Step sizes therefore evolve alongside the genotypes they produced.
"""

import logging
from typing import Any

import numpy as np

from evo_arena.operators import self_adaptive_mutation
from evo_arena.params import ESParams, merge_params
from evo_arena.population import Individual, Population
from evo_arena.problem import Problem
from evo_arena.stats import AlgorithmStats, StatsTracker
from evo_arena.survival import truncation_survival

logger = logging.getLogger(__name__)


class EvolutionStrategy:
    """Step-wise evolution strategy.

    ``params.population_size`` is mu (parents kept per generation) and
    ``params.offspring_size`` is lambda (children created per generation).

    Args:
        problem: The problem to optimize.
        params: Initial parameters. Defaults to ESParams().
        seed: Seed for the instance's random number generator.
        history_limit: Keep only the newest N statistics records.
    """

    algorithm_id = "es"

    def __init__(
        self,
        problem: Problem,
        params: ESParams | None = None,
        *,
        seed: int | None = None,
        history_limit: int | None = None,
    ) -> None:
        self.problem = problem
        self._params, _ = merge_params(ESParams(), params)
        self._rng = np.random.default_rng(seed)
        self._tracker = StatsTracker(history_limit)
        self._survivor_selector = truncation_survival()
        self.reset()

    def initialize(self, params: ESParams | None = None, **changes: Any) -> None:
        self._params, _ = merge_params(self._params, params, **changes)
        self.reset()

    def reset(self) -> None:
        self._x: np.ndarray | None = None
        self._fitness: np.ndarray | None = None
        self._step_sizes: np.ndarray | None = None
        self._best: Individual | None = None
        self._generation = 0
        self._evaluations = 0
        self._tracker.clear()
        logger.debug("ES reset")

    def set_params(self, params: ESParams | None = None, **changes: Any) -> None:
        """Update parameters; a change of mu rebuilds the population."""
        self._params, needs_reinit = merge_params(self._params, params, **changes)
        logger.debug("ES parameters updated: %s", self._params)
        if needs_reinit and self._x is not None:
            self.reset()
            self.initialize_population()

    def initialize_population(self) -> Population:
        """Create mu random parents, each with step sizes set to initial_step_size."""
        mu = self._params.mu
        d = self.problem.dimension
        self._x = np.stack([self.problem.generate_random_solution(self._rng) for _ in range(mu)])
        self._step_sizes = np.full((mu, d), self._params.initial_step_size)
        self._fitness = self._evaluate(self._x)
        self._update_best()
        self._record()
        logger.debug("ES initialized mu=%d, lambda=%d", mu, self._params.lambda_)
        return self.population

    def step(self) -> None:
        """Create lambda offspring and select the next mu parents.

        Plus selection ranks parents and offspring together; comma selection
        ranks the offspring only.
        """
        if self._x is None:
            self.initialize_population()
            return

        params = self._params
        lower, upper = self.problem.lower, self.problem.upper

        # Uniformly random parents, one per offspring
        parent_indices = self._rng.integers(0, self._x.shape[0], size=params.lambda_)
        offspring_x = np.empty((params.lambda_, self.problem.dimension))
        offspring_steps = np.empty_like(offspring_x)
        for k, parent in enumerate(parent_indices):
            offspring_x[k], offspring_steps[k] = self_adaptive_mutation(
                self._x[parent], self._step_sizes[parent], lower, upper, self._rng
            )
        offspring_fitness = self._evaluate(offspring_x)

        if params.selection_type == "plus":
            pool_x = np.concatenate([self._x, offspring_x])
            pool_steps = np.concatenate([self._step_sizes, offspring_steps])
            pool_fitness = np.concatenate([self._fitness, offspring_fitness])
        else:
            pool_x, pool_steps, pool_fitness = offspring_x, offspring_steps, offspring_fitness

        survivors = self._survivor_selector(Population(x=pool_x, fitness=pool_fitness), params.mu)

        self._x = pool_x[survivors]
        self._step_sizes = pool_steps[survivors]
        self._fitness = pool_fitness[survivors]
        self._generation += 1
        self._update_best()
        self._record()

    def run(self, generations: int | None = None) -> Individual:
        if self._x is None:
            self.initialize_population()
        budget = self._params.max_generations if generations is None else generations
        for _ in range(budget):
            if self.has_converged():
                logger.debug("ES converged at generation %d", self._generation)
                break
            self.step()
        return self.best

    def has_converged(self) -> bool:
        """True when population diversity falls below convergence_threshold."""
        if self._x is None:
            return False
        return self._tracker.latest.diversity_measure < self._params.convergence_threshold

    @property
    def params(self) -> ESParams:
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
    def step_sizes(self) -> np.ndarray:
        """Copy of the parents' step sizes, shape (mu, dimension)."""
        if self._step_sizes is None:
            return np.empty((0, self.problem.dimension))
        return self._step_sizes.copy()

    @property
    def best(self) -> Individual:
        if self._best is None:
            raise RuntimeError("ES has no population yet; call initialize_population() or step() first")
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
