"""Generational genetic algorithm for bounded real-valued problems.

Each generation keeps the current best individual unchanged and fills the rest
of the population with children: two parents are chosen by the configured
selection method, recombined by arithmetic crossover with probability
``crossover_rate`` (otherwise copied), then Gaussian-mutated gene by gene with
probability ``mutation_rate``. The mutation standard deviation is 10% of each
gene's bound range, and mutated genes are clipped back into bounds.

Example:
    >>> from evo_arena.functions import create_problem
    >>> from evo_arena.algorithms import GeneticAlgorithm
    >>>
    >>> problem = create_problem("sphere", dimension=2)
    >>> ga = GeneticAlgorithm(problem, seed=42)
    >>> best = ga.run()
    >>> problem.to_objective(best.fitness) < 0.1
    True
"""

import logging
from typing import Any

import numpy as np

from evo_arena.operators import arithmetic_crossover, gaussian_mutation
from evo_arena.params import GAParams, merge_params
from evo_arena.population import Individual, Population
from evo_arena.problem import Problem
from evo_arena.selection import make_selector
from evo_arena.stats import AlgorithmStats, StatsTracker
from evo_arena.survival import elitist_survival

logger = logging.getLogger(__name__)

# Gaussian mutation sigma as a fraction of each gene's bound range
MUTATION_SCALE = 0.1


class GeneticAlgorithm:
    """Step-wise genetic algorithm with single-individual elitism.

    Args:
        problem: The problem to optimize.
        params: Initial parameters. Defaults to GAParams().
        seed: Seed for the instance's random number generator.
        history_limit: Keep only the newest N statistics records.

    Raises:
        TypeError: If params is not a GAParams instance.
    """

    algorithm_id = "ga"

    def __init__(
        self,
        problem: Problem,
        params: GAParams | None = None,
        *,
        seed: int | None = None,
        history_limit: int | None = None,
    ) -> None:
        self.problem = problem
        self._params, _ = merge_params(GAParams(), params)
        self._rng = np.random.default_rng(seed)
        self._tracker = StatsTracker(history_limit)
        self._survivor_selector = elitist_survival(elite_count=1)
        self.reset()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def initialize(self, params: GAParams | None = None, **changes: Any) -> None:
        """Apply parameters and return to the uninitialized state."""
        self._params, _ = merge_params(self._params, params, **changes)
        self.reset()

    def reset(self) -> None:
        """Discard population, best individual and history, keeping parameters."""
        self._x: np.ndarray | None = None
        self._fitness: np.ndarray | None = None
        self._best: Individual | None = None
        self._generation = 0
        self._evaluations = 0
        self._tracker.clear()
        logger.debug("GA reset")

    def set_params(self, params: GAParams | None = None, **changes: Any) -> None:
        """Update parameters.

        A population size change rebuilds the population from scratch. Every
        other change applies from the next step on.
        """
        self._params, needs_reinit = merge_params(self._params, params, **changes)
        logger.debug("GA parameters updated: %s", self._params)
        if needs_reinit and self._x is not None:
            self.reset()
            self.initialize_population()

    def initialize_population(self) -> Population:
        """Create and evaluate a uniformly random population."""
        n = self._params.population_size
        self._x = np.stack([self.problem.generate_random_solution(self._rng) for _ in range(n)])
        self._fitness = self._evaluate(self._x)
        self._update_best()
        self._record()
        logger.debug("GA initialized %d individuals, best fitness %.6g", n, self._best.fitness)
        return self.population

    # =========================================================================
    # Evolution
    # =========================================================================

    def step(self) -> None:
        """Perform one generation.

        Creates the population instead when called before initialization.
        """
        if self._x is None:
            self.initialize_population()
            return

        params = self._params
        pop = self.population
        n = len(pop)
        n_children = n - 1
        n_pairs = (n_children + 1) // 2

        # Select parents
        selector = make_selector(params.selection_method, params.tournament_size)
        parent_indices = selector(pop, 2 * n_pairs, self._rng)

        # Create offspring via crossover and mutation
        lower, upper = self.problem.lower, self.problem.upper
        sigma = MUTATION_SCALE * self.problem.ranges
        children: list[np.ndarray] = []
        for k in range(n_pairs):
            p1 = pop.x[parent_indices[2 * k]]
            p2 = pop.x[parent_indices[2 * k + 1]]
            if self._rng.random() < params.crossover_rate:
                c1, c2 = arithmetic_crossover(p1, p2, self._rng)
            else:
                c1, c2 = p1.copy(), p2.copy()
            children.append(gaussian_mutation(c1, params.mutation_rate, sigma, lower, upper, self._rng))
            # Odd remainder: the second child of the last pair is dropped
            if len(children) < n_children:
                children.append(gaussian_mutation(c2, params.mutation_rate, sigma, lower, upper, self._rng))

        offspring_x = np.array(children).reshape(-1, self.problem.dimension)
        offspring_fitness = self._evaluate(offspring_x)

        # Best parent followed by every child
        combined = Population(
            x=np.concatenate([pop.x, offspring_x]),
            fitness=np.concatenate([pop.fitness, offspring_fitness]),
        )
        survivors = self._survivor_selector(combined, n, parent_size=n)

        self._x = combined.x[survivors]
        self._fitness = combined.fitness[survivors]
        self._generation += 1
        self._update_best()
        self._record()

    def run(self, generations: int | None = None) -> Individual:
        """Run until the generation budget is used or the algorithm converges.

        Args:
            generations: Maximum number of steps. Defaults to max_generations.

        Returns:
            The best individual found.
        """
        if self._x is None:
            self.initialize_population()
        budget = self._params.max_generations if generations is None else generations
        for _ in range(budget):
            if self.has_converged():
                logger.debug("GA converged at generation %d", self._generation)
                break
            self.step()
        return self.best

    def has_converged(self) -> bool:
        """True once max_generations generations have been performed."""
        if self._x is None:
            return False
        return self._generation >= self._params.max_generations

    # =========================================================================
    # State access
    # =========================================================================

    @property
    def params(self) -> GAParams:
        return self._params

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def population(self) -> Population:
        """Snapshot of the current population (empty before initialization)."""
        if self._x is None:
            return Population(x=np.empty((0, self.problem.dimension)), fitness=np.empty(0))
        return Population(x=self._x, fitness=self._fitness)

    @property
    def best(self) -> Individual:
        """Best individual found since initialization.

        Raises:
            RuntimeError: If no population has been created yet.
        """
        if self._best is None:
            raise RuntimeError("GA has no population yet; call initialize_population() or step() first")
        return self._best

    @property
    def stats(self) -> AlgorithmStats:
        return self._tracker.snapshot()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

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
