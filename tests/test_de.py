"""Tests for differential evolution."""

import numpy as np
import pytest

from evo_arena import DEParams, DifferentialEvolution


class TestDifferentialEvolution:
    """Tests for DE generations and greedy replacement."""

    def test_greedy_retention(self, rastrigin_problem) -> None:
        """No target vector is ever replaced by a worse trial."""
        de = DifferentialEvolution(rastrigin_problem, DEParams(population_size=12), seed=1)
        de.initialize_population()
        previous = de.population.fitness

        for _ in range(15):
            de.step()
            current = de.population.fitness
            assert np.all(current >= previous)
            previous = current

    def test_population_stays_in_bounds(self, sphere_problem) -> None:
        """Mutants are repaired, so trials never leave the bounds."""
        params = DEParams(population_size=10, differential_weight=2.0, crossover_rate=1.0)
        de = DifferentialEvolution(sphere_problem, params, seed=2)
        de.initialize_population()

        for _ in range(10):
            de.step()
            assert np.all(de.population.x >= sphere_problem.lower)
            assert np.all(de.population.x <= sphere_problem.upper)

    def test_one_evaluation_per_target(self, sphere_problem) -> None:
        """Each generation evaluates one trial per target."""
        de = DifferentialEvolution(sphere_problem, DEParams(population_size=8), seed=3)
        de.initialize_population()
        for _ in range(4):
            de.step()

        assert de.stats.evaluations == 8 + 4 * 8

    def test_best_matches_population(self, sphere_problem) -> None:
        """With greedy replacement the best ever is in the population."""
        de = DifferentialEvolution(sphere_problem, seed=4)
        de.run(20)

        assert de.best.fitness == pytest.approx(np.max(de.population.fitness))

    @pytest.mark.parametrize("strategy", ["rand/1", "best/1", "rand/2", "best/2"])
    def test_every_strategy_solves_sphere(self, sphere_problem, strategy: str) -> None:
        """Each mutation strategy approaches the Sphere optimum."""
        de = DifferentialEvolution(sphere_problem, DEParams(strategy=strategy), seed=42)

        best = de.run()

        assert sphere_problem.to_objective(best.fitness) < 1e-3

    def test_smallest_population_for_strategy(self, sphere_problem) -> None:
        """The minimum population size for a strategy runs."""
        de = DifferentialEvolution(sphere_problem, DEParams(population_size=6, strategy="rand/2"), seed=5)

        de.run(5)

        assert de.generation == 5

    def test_converges_on_diversity(self, sphere_problem) -> None:
        """A diversity threshold above the initial spread stops the run at once."""
        de = DifferentialEvolution(sphere_problem, DEParams(convergence_threshold=1e6), seed=6)

        de.run()

        assert de.has_converged()
        assert de.generation == 0

    def test_strategy_change_keeps_population(self, sphere_problem) -> None:
        """Switching strategy applies from the next generation."""
        de = DifferentialEvolution(sphere_problem, DEParams(population_size=10), seed=7)
        de.initialize_population()
        de.step()
        before = de.population.x

        de.set_params(strategy="best/1", F=0.9)

        np.testing.assert_array_equal(de.population.x, before)
        assert de.params.differential_weight == 0.9
        de.step()
        assert de.generation == 2

    def test_population_too_small_for_new_strategy(self, sphere_problem) -> None:
        """Switching to a strategy the population cannot support is rejected."""
        de = DifferentialEvolution(sphere_problem, DEParams(population_size=4), seed=8)

        with pytest.raises(ValueError, match="needs population_size >= 6"):
            de.set_params(strategy="rand/2")
