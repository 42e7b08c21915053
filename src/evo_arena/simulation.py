"""Driver-side controller for interactive, step-by-step runs.

A Simulation owns one algorithm on one benchmark problem and applies the
rules an interactive front end needs:

- The population is created as soon as the simulation is.
- step() refuses to advance a converged algorithm and reports it.
- Changing population size or generation budget starts a fresh run; any
  other parameter change is applied to the running algorithm.

Example:
    >>> sim = Simulation("pso", "ackley", {"topology": "ring"}, seed=1)
    >>> while sim.step():
    ...     redraw(sim.algorithm.population, sim.stats.history)
    >>> sim.update_params(inertiaWeight=0.5)
"""

import logging
from collections.abc import Mapping
from typing import Any

from evo_arena.functions import create_problem, list_problems
from evo_arena.params import AlgorithmParams, merge_params, params_from_mapping
from evo_arena.problem import Problem
from evo_arena.protocols import Algorithm
from evo_arena.registry import AlgorithmInfo, create_algorithm, get_algorithm_details, list_algorithms
from evo_arena.stats import AlgorithmStats

logger = logging.getLogger(__name__)

_POPULATION_SIZE_KEYS = ("population_size", "populationSize")


class Simulation:
    """One algorithm running on one benchmark function.

    Args:
        algorithm_id: Algorithm id or alias.
        problem_id: Benchmark function id.
        params: Params instance or a mapping of camelCase/snake_case overrides.
        dimension: Problem dimension.
        seed: Seed for the algorithm's random number generator.
        history_limit: Keep only the newest N statistics records.

    Raises:
        ValueError: If either id is unknown or the parameters are invalid.
    """

    def __init__(
        self,
        algorithm_id: str,
        problem_id: str,
        params: AlgorithmParams | Mapping[str, Any] | None = None,
        *,
        dimension: int = 2,
        seed: int | None = None,
        history_limit: int | None = None,
    ) -> None:
        info = get_algorithm_details(algorithm_id)
        if info is None:
            raise ValueError(
                f"Unknown algorithm '{algorithm_id}'. Available algorithms: {', '.join(list_algorithms())}"
            )
        problem = create_problem(problem_id, dimension)
        if problem is None:
            raise ValueError(f"Unknown problem '{problem_id}'. Available problems: {', '.join(list_problems())}")

        if isinstance(params, Mapping):
            params = params_from_mapping(info.params_class, self._drop_fixed(info, params))

        self._info = info
        self._problem = problem
        self._algorithm = create_algorithm(algorithm_id, problem, params, seed=seed, history_limit=history_limit)
        self._algorithm.initialize_population()
        self._steps = 0
        logger.debug("Simulation of %s on %s (d=%d) started", info.id, problem_id, dimension)

    @staticmethod
    def _drop_fixed(info: AlgorithmInfo, changes: Mapping[str, Any]) -> dict[str, Any]:
        """Remove population size keys for algorithms whose size is fixed."""
        if info.fixed_population_size is None:
            return dict(changes)
        kept = {k: v for k, v in changes.items() if k not in _POPULATION_SIZE_KEYS}
        if len(kept) != len(changes):
            logger.debug("%s has a fixed population size of %d", info.id, info.fixed_population_size)
        return kept

    def step(self) -> bool:
        """Advance one generation unless the algorithm has converged.

        Returns:
            True if a step was performed, False if the algorithm had converged.
        """
        if self._algorithm.has_converged():
            return False
        self._algorithm.step()
        self._steps += 1
        return True

    def run(self, max_steps: int) -> int:
        """Step up to max_steps times, stopping at convergence.

        Returns:
            Number of steps performed.
        """
        performed = 0
        while performed < max_steps and self.step():
            performed += 1
        return performed

    def update_params(self, **changes: Any) -> None:
        """Apply parameter changes, restarting the run when the budget or size changes.

        Keys may be snake_case, camelCase or algorithm aliases (mu, lambda, F, CR).

        Raises:
            TypeError: If a key names no parameter of the algorithm.
            ValueError: If a value fails validation.
        """
        changes = self._drop_fixed(self._info, changes)
        if not changes:
            return

        current = self._algorithm.params
        new, size_changed = merge_params(current, **changes)
        if size_changed or new.max_generations != current.max_generations:
            logger.debug("Critical parameter changed, restarting %s", self._info.id)
            self._algorithm.initialize(new)
            self._algorithm.initialize_population()
            self._steps = 0
        else:
            self._algorithm.set_params(new)

    def reset(self) -> None:
        """Start a fresh run with the current parameters."""
        self._algorithm.reset()
        self._algorithm.initialize_population()
        self._steps = 0

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def problem(self) -> Problem:
        return self._problem

    @property
    def info(self) -> AlgorithmInfo:
        return self._info

    @property
    def stats(self) -> AlgorithmStats:
        return self._algorithm.stats

    @property
    def steps_taken(self) -> int:
        """Steps performed since the run (re)started."""
        return self._steps

    @property
    def converged(self) -> bool:
        return self._algorithm.has_converged()
