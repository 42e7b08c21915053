"""Tests for particle swarm optimization and its topologies."""

import numpy as np
import pytest

from evo_arena import ParticleSwarmOptimization, PSOParams
from evo_arena.algorithms.pso import ring_informants, von_neumann_informants

# =============================================================================
# Topology Tests
# =============================================================================


class TestInformants:
    """Tests for neighbourhood construction."""

    def test_ring(self) -> None:
        """Ring informants wrap around and list the particle first."""
        informants = ring_informants(5, 1)

        assert [a.tolist() for a in informants] == [[0, 4, 1], [1, 0, 2], [2, 1, 3], [3, 2, 4], [4, 3, 0]]

    def test_ring_two_per_side(self) -> None:
        """k neighbours on each side."""
        assert ring_informants(6, 2)[0].tolist() == [0, 5, 1, 4, 2]

    def test_von_neumann_full_grid(self) -> None:
        """On a full 3x3 grid the centre sees its four neighbours."""
        assert von_neumann_informants(9)[4].tolist() == [4, 1, 7, 3, 5]

    def test_von_neumann_skips_empty_cells(self) -> None:
        """Cells beyond n on a partial grid are dropped."""
        informants = von_neumann_informants(5)

        # 3x3 grid, particle 4 at row 1 col 1: south (7) and east (5) are empty
        assert informants[4].tolist() == [4, 1, 3]
        assert all(np.all(group < 5) for group in informants)


# =============================================================================
# Swarm Tests
# =============================================================================


class TestParticleSwarm:
    """Tests for the swarm update."""

    def test_particles_before_initialization(self, sphere_problem) -> None:
        """The swarm state is unavailable before initialization."""
        with pytest.raises(RuntimeError, match="no swarm yet"):
            _ = ParticleSwarmOptimization(sphere_problem).particles

    def test_initial_velocities_bounded(self, sphere_problem) -> None:
        """Initial velocities lie in [-vmax, vmax]."""
        pso = ParticleSwarmOptimization(sphere_problem, PSOParams(max_velocity=0.2), seed=1)
        pso.initialize_population()

        vmax = 0.2 * 10.24
        assert np.all(np.abs(pso.particles.velocities) <= vmax)

    @pytest.mark.parametrize("topology", ["global", "ring", "vonNeumann"])
    def test_velocity_and_position_bounds(self, rastrigin_problem, topology: str) -> None:
        """Velocities are clamped and positions clipped every iteration."""
        params = PSOParams(population_size=20, topology=topology, inertia_weight=1.5)
        pso = ParticleSwarmOptimization(rastrigin_problem, params, seed=2)
        pso.initialize_population()
        vmax = 0.1 * 10.24

        for _ in range(10):
            pso.step()
            state = pso.particles
            assert np.all(np.abs(state.velocities) <= vmax + 1e-12)
            assert np.all(state.positions >= rastrigin_problem.lower)
            assert np.all(state.positions <= rastrigin_problem.upper)

    def test_personal_bests_never_worsen(self, rastrigin_problem) -> None:
        """Personal bests improve monotonically and dominate current fitness."""
        pso = ParticleSwarmOptimization(rastrigin_problem, PSOParams(population_size=15), seed=3)
        pso.initialize_population()
        previous = pso.particles.personal_best_fitness

        for _ in range(10):
            pso.step()
            state = pso.particles
            assert np.all(state.personal_best_fitness >= previous)
            assert np.all(state.personal_best_fitness >= pso.population.fitness)
            previous = state.personal_best_fitness

    def test_best_is_best_personal_best(self, sphere_problem) -> None:
        """The global best equals the best personal best."""
        pso = ParticleSwarmOptimization(sphere_problem, seed=4)
        pso.run(15)

        assert pso.best.fitness == pytest.approx(np.max(pso.particles.personal_best_fitness))

    def test_particles_is_a_copy(self, sphere_problem) -> None:
        """Mutating the returned state does not affect the swarm."""
        pso = ParticleSwarmOptimization(sphere_problem, seed=5)
        pso.initialize_population()

        state = pso.particles
        state.positions[:] = 0.0

        assert not np.all(pso.particles.positions == 0.0)

    def test_topology_change_keeps_swarm(self, sphere_problem) -> None:
        """Switching topology applies from the next iteration."""
        pso = ParticleSwarmOptimization(sphere_problem, PSOParams(population_size=9), seed=6)
        pso.initialize_population()
        pso.step()
        before = pso.population.x

        pso.set_params(topology="vonNeumann")

        np.testing.assert_array_equal(pso.population.x, before)
        pso.step()
        assert pso.generation == 2

    def test_stops_at_max_generations(self, rastrigin_problem) -> None:
        """The iteration budget ends the run."""
        pso = ParticleSwarmOptimization(rastrigin_problem, PSOParams(max_generations=7), seed=7)

        pso.run()

        assert pso.generation == 7
        assert pso.has_converged()

    @pytest.mark.parametrize("topology", ["global", "ring", "vonNeumann"])
    def test_sphere(self, sphere_problem, topology: str) -> None:
        """Every topology approaches the Sphere optimum."""
        pso = ParticleSwarmOptimization(sphere_problem, PSOParams(topology=topology), seed=42)

        best = pso.run()

        assert sphere_problem.to_objective(best.fitness) < 1e-2
