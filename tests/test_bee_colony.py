"""Tests for the artificial bee colony."""

import numpy as np
import pytest

from evo_arena import ABCParams, ArtificialBeeColony, Problem
from evo_arena.algorithms.bee_colony import selection_weights


class TestSelectionWeights:
    """Tests for onlooker selection probabilities."""

    def test_minimization(self) -> None:
        """Lower cost gets a higher probability."""
        probs = selection_weights(np.array([0.0, 1.0, 3.0]), is_minimization=True)

        np.testing.assert_allclose(probs, np.array([1.0, 0.5, 0.25]) / 1.75)

    def test_minimization_negative_costs(self) -> None:
        """Negative costs are shifted so the best weight is 1."""
        probs = selection_weights(np.array([-2.0, 0.0]), is_minimization=True)

        np.testing.assert_allclose(probs, [0.75, 0.25])

    def test_maximization(self) -> None:
        """Non-positive values get zero weight."""
        probs = selection_weights(np.array([2.0, -1.0, 6.0]), is_minimization=False)

        np.testing.assert_allclose(probs, [0.25, 0.0, 0.75])

    def test_maximization_all_non_positive(self) -> None:
        """Falls back to uniform weights."""
        probs = selection_weights(np.array([-2.0, 0.0, -5.0, -1.0]), is_minimization=False)

        np.testing.assert_allclose(probs, 0.25)

    def test_minimization_all_infinite_is_uniform(self) -> None:
        """Sources that all overflow to inf are picked uniformly."""
        probs = selection_weights(np.full(3, np.inf), is_minimization=True)

        np.testing.assert_allclose(probs, 1.0 / 3.0)

    def test_non_finite_sources_get_zero_weight(self) -> None:
        """inf and nan costs are never chosen while a finite source exists."""
        probs = selection_weights(np.array([np.inf, 1.0, np.nan]), is_minimization=True)

        np.testing.assert_allclose(probs, [0.0, 1.0, 0.0])



class TestArtificialBeeColony:
    """Tests for the employed, onlooker and scout phases."""

    def test_trials_start_at_zero(self, sphere_problem) -> None:
        """Every food source starts with no failed trials."""
        abc = ArtificialBeeColony(sphere_problem, ABCParams(population_size=10), seed=1)

        assert abc.trials.shape == (0,)
        abc.initialize_population()

        np.testing.assert_array_equal(abc.trials, np.zeros(10))

    def test_sources_never_worsen_without_scouts(self, rastrigin_problem) -> None:
        """Greedy replacement keeps every source at least as good."""
        abc = ArtificialBeeColony(rastrigin_problem, ABCParams(population_size=10, limit=10_000), seed=2)
        abc.initialize_population()
        previous = abc.population.fitness

        for _ in range(10):
            abc.step()
            current = abc.population.fitness
            assert np.all(current >= previous)
            previous = current

    def test_evaluations_without_scouts(self, sphere_problem) -> None:
        """Employed and onlooker phases evaluate n candidates each."""
        abc = ArtificialBeeColony(sphere_problem, ABCParams(population_size=10, limit=10_000), seed=3)
        abc.initialize_population()
        for _ in range(3):
            abc.step()

        assert abc.stats.evaluations == 10 + 3 * 2 * 10

    def test_trials_count_failures(self, sphere_problem) -> None:
        """Trial counters grow with failed attempts and never go negative."""
        abc = ArtificialBeeColony(sphere_problem, ABCParams(population_size=10, limit=10_000), seed=4)
        abc.initialize_population()
        for _ in range(20):
            abc.step()

        trials = abc.trials
        assert np.all(trials >= 0)
        assert np.any(trials > 0)

    def test_scouts_with_zero_limit(self, sphere_problem) -> None:
        """With limit 0 every source that failed is abandoned after the step."""
        abc = ArtificialBeeColony(sphere_problem, ABCParams(population_size=10, limit=0), seed=5)
        abc.initialize_population()

        for _ in range(5):
            abc.step()
            np.testing.assert_array_equal(abc.trials, 0)

    def test_best_survives_scouts(self, sphere_problem) -> None:
        """The best ever is kept even when its source is abandoned."""
        abc = ArtificialBeeColony(sphere_problem, ABCParams(population_size=10, limit=0), seed=6)
        abc.run(10)

        history = abc.stats.history.best_fitness
        assert np.all(np.diff(history) >= 0)
        assert abc.best.fitness == pytest.approx(history[-1])

    def test_sources_stay_in_bounds(self, rastrigin_problem) -> None:
        """Neighbour candidates are repaired into the bounds."""
        abc = ArtificialBeeColony(rastrigin_problem, ABCParams(scaling_factor=5.0), seed=7)
        abc.initialize_population()

        for _ in range(5):
            abc.step()
            assert np.all(np.abs(abc.population.x) <= 5.12)

    def test_maximization(self, maximize_problem) -> None:
        """Maximization problems use the non-negative weighting."""
        abc = ArtificialBeeColony(maximize_problem, ABCParams(population_size=10, max_generations=30), seed=8)

        best = abc.run()

        assert best.genotype[0] > 9.0

    def test_sphere(self, sphere_problem) -> None:
        """The colony approaches the Sphere optimum."""
        abc = ArtificialBeeColony(sphere_problem, seed=42)

        best = abc.run()

        assert sphere_problem.to_objective(best.fitness) < 1e-2

    def test_step_with_overflowing_objective(self) -> None:
        """A problem that only returns inf still completes a step."""
        problem = Problem(
            id="overflow",
            name="Overflow",
            function=lambda x: float("inf"),
            bounds=np.array([[-1.0, 1.0]] * 2),
        )
        abc = ArtificialBeeColony(problem, ABCParams(population_size=6), seed=3)
        abc.initialize_population()

        abc.step()

        assert abc.generation == 1
        assert abc.best.fitness == -np.inf
