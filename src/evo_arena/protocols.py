"""Protocol definitions for algorithms and selection strategies.

This module defines the interfaces the rest of the package is written
against:

1. **Algorithm**: The lifecycle every optimizer implements (initialize, step,
   run, reset, read population/best/stats). The six algorithms share this
   contract but no implementation; each is an independent class that
   satisfies the protocol structurally.

2. **ParentSelector**: Chooses parent indices from a population
   (tournament, roulette wheel, linear rank).

3. **SurvivorSelector**: Chooses which individuals of a combined population
   survive (elitist, truncation).

Fitness is always in maximize form: selectors prefer higher values.

Example usage:
    ```python
    def drive(algorithm: Algorithm, steps: int) -> None:
        algorithm.initialize_population()
        for _ in range(steps):
            if algorithm.has_converged():
                break
            algorithm.step()
            chart(algorithm.stats.history)
    ```
"""

from typing import Any, Protocol, runtime_checkable

import numpy as np

from evo_arena.params import AlgorithmParams
from evo_arena.population import Individual, Population
from evo_arena.problem import Problem
from evo_arena.stats import AlgorithmStats


@runtime_checkable
class Algorithm(Protocol):
    """Protocol for step-wise optimization algorithms.

    State machine: Uninitialized -> Initialized (population created) ->
    Stepping -> Converged. reset() returns to Uninitialized while keeping the
    parameters. Calling step() while uninitialized creates the population
    instead of performing a generation. Stepping after convergence is allowed;
    drivers are expected to check has_converged() first.
    """

    problem: Problem

    @property
    def params(self) -> AlgorithmParams:
        """Parameters currently in effect."""
        ...

    @property
    def generation(self) -> int:
        """Generations (or iterations) completed since initialization."""
        ...

    @property
    def population(self) -> Population:
        """Snapshot of the current population."""
        ...

    @property
    def best(self) -> Individual:
        """Best individual found since initialization (never regresses)."""
        ...

    @property
    def stats(self) -> AlgorithmStats:
        """Latest statistics together with the full history."""
        ...

    def initialize(self, params: AlgorithmParams | None = None, **changes: Any) -> None:
        """Apply parameters and return to the uninitialized state."""
        ...

    def initialize_population(self) -> Population:
        """Create and evaluate a fresh population, recording its statistics."""
        ...

    def step(self) -> None:
        """Perform one generation (or iteration)."""
        ...

    def run(self, generations: int | None = None) -> Individual:
        """Step until the budget is used or the algorithm converges; return the best."""
        ...

    def reset(self) -> None:
        """Discard population, best individual and history, keeping parameters."""
        ...

    def set_params(self, params: AlgorithmParams | None = None, **changes: Any) -> None:
        """Update parameters; population-size changes rebuild the population."""
        ...

    def has_converged(self) -> bool:
        """Whether the algorithm's termination criterion holds."""
        ...


@runtime_checkable
class ParentSelector(Protocol):
    """Protocol for parent selection strategies.

    Parent selectors choose which individuals from a population will be used
    as parents for creating offspring.

    Parameters:
        pop: The current population to select parents from.
        n_parents: Number of parent indices to return. May select the same
            individual multiple times depending on the strategy.
        rng: NumPy random number generator for reproducible stochastic selection.

    Returns:
        Array of indices into the population, shape (n_parents,), values in
        range [0, len(pop)).
    """

    def __call__(
        self,
        pop: Population,
        n_parents: int,
        rng: np.random.Generator,
    ) -> np.ndarray:
        """Select parent indices from the population."""
        ...


@runtime_checkable
class SurvivorSelector(Protocol):
    """Protocol for survivor selection strategies.

    Survivor selectors determine which individuals of a (typically combined
    parent + offspring) population survive to the next generation.

    Parameters:
        pop: The population to select survivors from.
        n_survivors: Number of individuals to keep.
        **kwargs: Strategy-specific data, e.g. ``parent_size`` for elitist
            survival.

    Returns:
        Array of indices of the survivors, shape (n_survivors,), best first.
    """

    def __call__(
        self,
        pop: Population,
        n_survivors: int,
        **kwargs: int,
    ) -> np.ndarray:
        """Select survivor indices from the population."""
        ...
