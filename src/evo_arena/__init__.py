"""evo-arena: step-wise evolutionary optimizers on continuous benchmark functions.

A pure numpy implementation of six optimizers (genetic algorithm, evolution
strategy, differential evolution, particle swarm, artificial bee colony and
simulated annealing) that can be advanced one generation at a time, so a
driver can inspect the population, the best individual and per-generation
statistics after every step.

Example (step by step):
    >>> from evo_arena import create_algorithm, create_problem
    >>> problem = create_problem("rastrigin", dimension=2)
    >>> algorithm = create_algorithm("de", problem, seed=42)
    >>> _ = algorithm.initialize_population()
    >>> for _ in range(10):
    ...     algorithm.step()
    >>> len(algorithm.stats.history)
    11

Example (run to completion):
    >>> from evo_arena import GeneticAlgorithm
    >>> sphere = create_problem("sphere")
    >>> best = GeneticAlgorithm(sphere, seed=42).run()
    >>> sphere.to_objective(best.fitness) < 0.1
    True
"""

from evo_arena.algorithms import (
    ArtificialBeeColony,
    DifferentialEvolution,
    EvolutionStrategy,
    GeneticAlgorithm,
    ParticleSwarmOptimization,
    SimulatedAnnealing,
)
from evo_arena.functions import FUNCTIONS, create_problem, get_problem_details, list_problems
from evo_arena.params import (
    ABCParams,
    DEParams,
    ESParams,
    GAParams,
    PSOParams,
    SAParams,
    merge_params,
    params_from_mapping,
)
from evo_arena.population import Individual, Population
from evo_arena.problem import Problem
from evo_arena.protocols import Algorithm, ParentSelector, SurvivorSelector
from evo_arena.registry import (
    ALGORITHMS,
    AlgorithmInfo,
    ParameterSpec,
    create_algorithm,
    get_algorithm_details,
    get_default_parameters,
    list_algorithms,
)
from evo_arena.results import RunResult
from evo_arena.runner import compare_algorithms, run_once, summarize
from evo_arena.simulation import Simulation
from evo_arena.stats import AlgorithmStats, FitnessHistory, StatsTracker, diversity

__all__ = [
    # Algorithms
    "GeneticAlgorithm",
    "EvolutionStrategy",
    "DifferentialEvolution",
    "ParticleSwarmOptimization",
    "ArtificialBeeColony",
    "SimulatedAnnealing",
    # Parameters
    "GAParams",
    "ESParams",
    "DEParams",
    "PSOParams",
    "ABCParams",
    "SAParams",
    "merge_params",
    "params_from_mapping",
    # Problems
    "Problem",
    "FUNCTIONS",
    "create_problem",
    "get_problem_details",
    "list_problems",
    # Registry
    "ALGORITHMS",
    "AlgorithmInfo",
    "ParameterSpec",
    "create_algorithm",
    "get_algorithm_details",
    "get_default_parameters",
    "list_algorithms",
    # Protocols
    "Algorithm",
    "ParentSelector",
    "SurvivorSelector",
    # Data structures
    "Individual",
    "Population",
    "AlgorithmStats",
    "FitnessHistory",
    "StatsTracker",
    "diversity",
    # Driving and comparing
    "Simulation",
    "RunResult",
    "run_once",
    "compare_algorithms",
    "summarize",
]
