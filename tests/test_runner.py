"""Tests for batch running and comparison helpers."""

import numpy as np
import pytest

from evo_arena import DEParams, compare_algorithms, run_once, summarize
from evo_arena.results import RunResult
from evo_arena.stats import FitnessHistory


class TestRunOnce:
    """Tests for run_once."""

    def test_runs_to_budget(self) -> None:
        """The algorithm runs its generation budget."""
        result = run_once("ga", "sphere", seed=1, params={"populationSize": 10, "maxGenerations": 15})

        assert result.algorithm_id == "ga"
        assert result.problem_id == "sphere"
        assert result.generations == 15
        assert result.evaluations == 10 + 15 * 9
        assert len(result.history) == 16

    def test_objective_is_raw_value(self) -> None:
        """best_objective is the function value at best_genotype."""
        result = run_once("de", "rastrigin", seed=2, generations=10)

        x = result.best_genotype
        expected = 20.0 + np.sum(x * x - 10.0 * np.cos(2.0 * np.pi * x))
        assert result.best_objective == pytest.approx(expected)
        assert result.best_objective >= 0.0

    def test_explicit_generations(self) -> None:
        """generations overrides the default budget."""
        result = run_once("pso", "ackley", seed=3, generations=4)

        assert result.generations == 4

    def test_params_instance(self) -> None:
        """A params instance is accepted."""
        result = run_once("de", "sphere", seed=4, params=DEParams(population_size=8, max_generations=5))

        assert result.evaluations == 8 + 5 * 8

    def test_alias_is_canonicalized(self) -> None:
        """Results carry the canonical algorithm id."""
        result = run_once("particle-swarm", "sphere", seed=5, generations=2)

        assert result.algorithm_id == "pso"

    def test_dimension(self) -> None:
        """The genotype has the requested dimension."""
        result = run_once("abc", "step", dimension=4, seed=6, generations=3)

        assert result.dimension == 4
        assert result.best_genotype.shape == (4,)

    def test_same_seed_same_result(self) -> None:
        """Runs are reproducible from the seed."""
        a = run_once("es", "rosenbrock", seed=7, generations=10)
        b = run_once("es", "rosenbrock", seed=7, generations=10)

        assert a.best_objective == b.best_objective
        np.testing.assert_array_equal(a.best_genotype, b.best_genotype)

    def test_unknown_ids(self) -> None:
        """Unknown ids raise ValueError."""
        with pytest.raises(ValueError, match="Unknown problem 'banana'"):
            run_once("ga", "banana")
        with pytest.raises(ValueError, match="Unknown algorithm 'tabu'"):
            run_once("tabu", "sphere")


class TestCompareAlgorithms:
    """Tests for compare_algorithms."""

    def test_one_result_per_algorithm_and_seed(self) -> None:
        """Results come in algorithm-major, seed-minor order."""
        results = compare_algorithms(
            "sphere",
            ["de", "sa"],
            seeds=[0, 1],
            params={"de": {"maxGenerations": 5}, "sa": {"maxGenerations": 20}},
        )

        assert [(r.algorithm_id, r.seed) for r in results] == [("de", 0), ("de", 1), ("sa", 0), ("sa", 1)]
        assert results[0].generations == 5

    def test_defaults_to_every_algorithm(self) -> None:
        """Without ids every algorithm is compared."""
        params = {alg: {"maxGenerations": 2} for alg in ["abc", "de", "es", "ga", "pso", "sa"]}

        results = compare_algorithms("sphere", params=params)

        assert sorted(r.algorithm_id for r in results) == ["abc", "de", "es", "ga", "pso", "sa"]


class TestSummarize:
    """Tests for summarize."""

    def _result(self, algorithm_id: str, objective: float, elapsed: float) -> RunResult:
        return RunResult(
            algorithm_id=algorithm_id,
            problem_id="sphere",
            dimension=1,
            seed=0,
            best_objective=objective,
            best_genotype=np.zeros(1),
            generations=1,
            evaluations=1,
            history=FitnessHistory(),
            elapsed_seconds=elapsed,
        )

    def test_statistics(self) -> None:
        """Mean, std, best and mean time per algorithm."""
        results = [
            self._result("ga", 1.0, 0.1),
            self._result("ga", 3.0, 0.3),
            self._result("de", 0.5, 1.0),
        ]

        summary = summarize(results)

        assert summary["ga"] == {"mean": 2.0, "std": 1.0, "best": 1.0, "mean_time": pytest.approx(0.2), "runs": 2}
        assert summary["de"]["best"] == 0.5
        assert summary["de"]["runs"] == 1

    def test_empty(self) -> None:
        """No results, no summary."""
        assert summarize([]) == {}
