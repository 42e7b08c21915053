"""The six step-wise optimization algorithms."""

from evo_arena.algorithms.annealing import SimulatedAnnealing
from evo_arena.algorithms.bee_colony import ArtificialBeeColony
from evo_arena.algorithms.de import DifferentialEvolution
from evo_arena.algorithms.es import EvolutionStrategy
from evo_arena.algorithms.ga import GeneticAlgorithm
from evo_arena.algorithms.pso import ParticleSwarmOptimization, SwarmState

__all__ = [
    "ArtificialBeeColony",
    "DifferentialEvolution",
    "EvolutionStrategy",
    "GeneticAlgorithm",
    "ParticleSwarmOptimization",
    "SimulatedAnnealing",
    "SwarmState",
]
