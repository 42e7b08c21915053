"""Particle swarm optimization with global, ring and von Neumann topologies.

Each particle is pulled towards its own personal best and towards the best
personal best among its informants:

    v = w v + c1 r1 (pbest - x) + c2 r2 (informant_best - x)

with r1, r2 ~ U(0, 1) drawn per dimension. Velocities are clamped to
[-vmax, vmax] where vmax is ``max_velocity`` times the mean bound range.
Informant bests are read from the personal bests as they stood when the
iteration began, so the update order of particles does not matter.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from evo_arena.params import PSOParams, merge_params
from evo_arena.population import Individual, Population
from evo_arena.problem import Problem
from evo_arena.stats import AlgorithmStats, StatsTracker

logger = logging.getLogger(__name__)


def ring_informants(n: int, k: int) -> list[np.ndarray]:
    """Informants of each particle on a ring: itself plus k neighbours per side.

    Example:
        >>> [list(a) for a in ring_informants(5, 1)]
        [[0, 4, 1], [1, 0, 2], [2, 1, 3], [3, 2, 4], [4, 3, 0]]
    """
    informants = []
    for i in range(n):
        neighbors = [i]
        for j in range(1, k + 1):
            neighbors.append((i - j) % n)
            neighbors.append((i + j) % n)
        informants.append(np.array(neighbors, dtype=np.intp))
    return informants


def von_neumann_informants(n: int) -> list[np.ndarray]:
    """Informants on a wrapped ceil(sqrt(n)) square grid: itself plus N, S, W, E.

    Grid cells at or beyond n are empty and skipped.
    """
    size = math.ceil(math.sqrt(n))
    informants = []
    for i in range(n):
        row, col = divmod(i, size)
        candidates = [
            ((row - 1) % size) * size + col,
            ((row + 1) % size) * size + col,
            row * size + (col - 1) % size,
            row * size + (col + 1) % size,
        ]
        informants.append(np.array([i] + [c for c in candidates if c < n], dtype=np.intp))
    return informants


@dataclass(frozen=True, eq=False)
class SwarmState:
    """Copy of the swarm's per-particle state for visualization.

    Attributes:
        positions: Current positions, shape (n, dimension).
        velocities: Current velocities, shape (n, dimension).
        personal_best_x: Personal best positions, shape (n, dimension).
        personal_best_fitness: Personal best fitness values, shape (n,).
    """

    positions: np.ndarray
    velocities: np.ndarray
    personal_best_x: np.ndarray
    personal_best_fitness: np.ndarray


class ParticleSwarmOptimization:
    """Step-wise particle swarm optimization.

    Args:
        problem: The problem to optimize.
        params: Initial parameters. Defaults to PSOParams().
        seed: Seed for the instance's random number generator.
        history_limit: Keep only the newest N statistics records.
    """

    algorithm_id = "pso"

    def __init__(
        self,
        problem: Problem,
        params: PSOParams | None = None,
        *,
        seed: int | None = None,
        history_limit: int | None = None,
    ) -> None:
        self.problem = problem
        self._params, _ = merge_params(PSOParams(), params)
        self._rng = np.random.default_rng(seed)
        self._tracker = StatsTracker(history_limit)
        self.reset()

    def initialize(self, params: PSOParams | None = None, **changes: Any) -> None:
        self._params, _ = merge_params(self._params, params, **changes)
        self.reset()

    def reset(self) -> None:
        self._x: np.ndarray | None = None
        self._fitness: np.ndarray | None = None
        self._velocity: np.ndarray | None = None
        self._pbest_x: np.ndarray | None = None
        self._pbest_fitness: np.ndarray | None = None
        self._best: Individual | None = None
        self._generation = 0
        self._evaluations = 0
        self._tracker.clear()
        logger.debug("PSO reset")

    def set_params(self, params: PSOParams | None = None, **changes: Any) -> None:
        """Update parameters; a swarm size change rebuilds the swarm.

        Topology and coefficient changes apply from the next iteration.
        """
        self._params, needs_reinit = merge_params(self._params, params, **changes)
        logger.debug("PSO parameters updated: %s", self._params)
        if needs_reinit and self._x is not None:
            self.reset()
            self.initialize_population()

    def initialize_population(self) -> Population:
        """Create the swarm with random positions and velocities in [-vmax, vmax]."""
        n = self._params.population_size
        d = self.problem.dimension
        vmax = self._velocity_limit()
        self._x = np.stack([self.problem.generate_random_solution(self._rng) for _ in range(n)])
        self._velocity = self._rng.uniform(-vmax, vmax, size=(n, d))
        self._fitness = self._evaluate(self._x)
        self._pbest_x = self._x.copy()
        self._pbest_fitness = self._fitness.copy()
        self._update_best()
        self._record()
        logger.debug("PSO initialized %d particles with %s topology", n, self._params.topology)
        return self.population

    def step(self) -> None:
        """Move every particle once and update personal and global bests."""
        if self._x is None:
            self.initialize_population()
            return

        params = self._params
        n, d = self._x.shape
        vmax = self._velocity_limit()

        # Informant bests come from the personal bests at the start of the iteration
        pbest_x = self._pbest_x.copy()
        pbest_fitness = self._pbest_fitness.copy()
        social_targets = pbest_x[self._informant_best_indices(pbest_fitness)]

        r1 = self._rng.random((n, d))
        r2 = self._rng.random((n, d))
        velocity = (
            params.inertia_weight * self._velocity
            + params.cognitive_coefficient * r1 * (pbest_x - self._x)
            + params.social_coefficient * r2 * (social_targets - self._x)
        )
        self._velocity = np.clip(velocity, -vmax, vmax)
        self._x = np.clip(self._x + self._velocity, self.problem.lower, self.problem.upper)
        self._fitness = self._evaluate(self._x)

        improved = self._fitness > self._pbest_fitness
        self._pbest_x[improved] = self._x[improved]
        self._pbest_fitness[improved] = self._fitness[improved]

        self._generation += 1
        self._update_best()
        self._record()

    def run(self, generations: int | None = None) -> Individual:
        if self._x is None:
            self.initialize_population()
        budget = self._params.max_generations if generations is None else generations
        for _ in range(budget):
            if self.has_converged():
                logger.debug("PSO converged at iteration %d", self._generation)
                break
            self.step()
        return self.best

    def has_converged(self) -> bool:
        """True after max_generations iterations or when the swarm has collapsed."""
        if self._x is None:
            return False
        if self._generation >= self._params.max_generations:
            return True
        return self._tracker.latest.diversity_measure < self._params.convergence_threshold

    @property
    def params(self) -> PSOParams:
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
    def particles(self) -> SwarmState:
        """Positions, velocities and personal bests of every particle.

        Raises:
            RuntimeError: If the swarm has not been created yet.
        """
        if self._x is None:
            raise RuntimeError("PSO has no swarm yet; call initialize_population() or step() first")
        return SwarmState(
            positions=self._x.copy(),
            velocities=self._velocity.copy(),
            personal_best_x=self._pbest_x.copy(),
            personal_best_fitness=self._pbest_fitness.copy(),
        )

    @property
    def best(self) -> Individual:
        if self._best is None:
            raise RuntimeError("PSO has no swarm yet; call initialize_population() or step() first")
        return self._best

    @property
    def stats(self) -> AlgorithmStats:
        return self._tracker.snapshot()

    def _velocity_limit(self) -> float:
        return float(np.mean(self.problem.ranges)) * self._params.max_velocity

    def _informant_best_indices(self, pbest_fitness: np.ndarray) -> np.ndarray:
        """Index of the best personal best among each particle's informants."""
        n = pbest_fitness.shape[0]
        topology = self._params.topology
        if topology == "global":
            return np.full(n, int(np.argmax(pbest_fitness)), dtype=np.intp)

        if topology == "ring":
            informants = ring_informants(n, self._params.neighborhood_size)
        else:
            informants = von_neumann_informants(n)
        # Self is listed first, so it wins ties
        return np.array([group[np.argmax(pbest_fitness[group])] for group in informants], dtype=np.intp)

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
