"""Batch helpers: run an algorithm to completion and compare algorithms.

Example:
    >>> from evo_arena.runner import compare_algorithms, summarize
    >>>
    >>> results = compare_algorithms("rastrigin", ["ga", "de", "pso"], seeds=range(5))
    >>> summary = summarize(results)
    >>> sorted(summary)
    ['de', 'ga', 'pso']
"""

import logging
import time
from collections import defaultdict
from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np

from evo_arena.functions import create_problem, list_problems
from evo_arena.params import AlgorithmParams, params_from_mapping
from evo_arena.registry import ALIASES, create_algorithm, get_algorithm_details, list_algorithms
from evo_arena.results import RunResult

logger = logging.getLogger(__name__)

ParamsLike = AlgorithmParams | Mapping[str, Any] | None


def _resolve_params(algorithm_id: str, params: ParamsLike) -> AlgorithmParams | None:
    if params is None or not isinstance(params, Mapping):
        return params
    info = get_algorithm_details(algorithm_id)
    return params_from_mapping(info.params_class, params)


def run_once(
    algorithm_id: str,
    problem_id: str,
    *,
    dimension: int = 2,
    seed: int | None = None,
    params: ParamsLike = None,
    generations: int | None = None,
) -> RunResult:
    """Run one algorithm on one benchmark function until it stops.

    Args:
        algorithm_id: Algorithm id or alias.
        problem_id: Benchmark function id.
        dimension: Problem dimension.
        seed: Seed for the algorithm's random number generator.
        params: Params instance, or a mapping of (camelCase or snake_case) overrides.
        generations: Step budget. Defaults to the algorithm's max_generations.

    Returns:
        RunResult describing the best solution found.

    Raises:
        ValueError: If either id is unknown or the parameters are invalid.
    """
    problem = create_problem(problem_id, dimension)
    if problem is None:
        raise ValueError(f"Unknown problem '{problem_id}'. Available problems: {', '.join(list_problems())}")
    if get_algorithm_details(algorithm_id) is None:
        raise ValueError(f"Unknown algorithm '{algorithm_id}'. Available algorithms: {', '.join(list_algorithms())}")

    algorithm = create_algorithm(algorithm_id, problem, _resolve_params(algorithm_id, params), seed=seed)

    start_time = time.perf_counter()
    best = algorithm.run(generations)
    elapsed = time.perf_counter() - start_time

    stats = algorithm.stats
    return RunResult(
        algorithm_id=ALIASES.get(algorithm_id, algorithm_id),
        problem_id=problem_id,
        dimension=dimension,
        seed=seed,
        best_objective=problem.to_objective(best.fitness),
        best_genotype=best.genotype,
        generations=algorithm.generation,
        evaluations=stats.evaluations,
        history=stats.history,
        elapsed_seconds=elapsed,
    )


def compare_algorithms(
    problem_id: str,
    algorithm_ids: Iterable[str] | None = None,
    *,
    dimension: int = 2,
    seeds: Iterable[int] = (0,),
    params: Mapping[str, ParamsLike] | None = None,
) -> list[RunResult]:
    """Run several algorithms on the same problem over the same seeds.

    Args:
        problem_id: Benchmark function id.
        algorithm_ids: Algorithms to compare. Defaults to all of them.
        dimension: Problem dimension.
        seeds: One run per algorithm per seed.
        params: Optional per-algorithm parameters keyed by algorithm id.

    Returns:
        One RunResult per (algorithm, seed), in input order.
    """
    algorithm_ids = list_algorithms() if algorithm_ids is None else list(algorithm_ids)
    seeds = list(seeds)
    params = params or {}

    results = []
    for algorithm_id in algorithm_ids:
        for seed in seeds:
            result = run_once(
                algorithm_id,
                problem_id,
                dimension=dimension,
                seed=seed,
                params=params.get(algorithm_id),
            )
            logger.debug(
                "%s on %s (seed=%s): best %.6g after %d generations",
                algorithm_id,
                problem_id,
                seed,
                result.best_objective,
                result.generations,
            )
            results.append(result)
    return results


def summarize(results: Iterable[RunResult]) -> dict[str, dict[str, float]]:
    """Aggregate best objective values per algorithm.

    Returns:
        Mapping of algorithm id to {"mean", "std", "best", "mean_time", "runs"}.
        "best" is the lowest objective, as every benchmark function is minimized.
    """
    objectives: dict[str, list[float]] = defaultdict(list)
    times: dict[str, list[float]] = defaultdict(list)
    for r in results:
        objectives[r.algorithm_id].append(r.best_objective)
        times[r.algorithm_id].append(r.elapsed_seconds)

    return {
        algorithm_id: {
            "mean": float(np.mean(values)),
            "std": float(np.std(values)),
            "best": float(np.min(values)),
            "mean_time": float(np.mean(times[algorithm_id])),
            "runs": len(values),
        }
        for algorithm_id, values in objectives.items()
    }
