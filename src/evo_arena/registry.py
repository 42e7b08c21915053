"""Static catalog of the available algorithms.

The catalog maps algorithm ids to their class, parameter dataclass and the
metadata a parameter form needs (ranges, steps, choices and which fields only
apply for certain choices). Lookups of unknown ids return None.

Example:
    >>> from evo_arena.functions import create_problem
    >>> from evo_arena.registry import create_algorithm, list_algorithms
    >>>
    >>> list_algorithms()
    ['abc', 'de', 'es', 'ga', 'pso', 'sa']
    >>> algorithm = create_algorithm("de", create_problem("sphere"), seed=7)
    >>> algorithm.params.strategy
    'rand/1'
    >>> create_algorithm("nope", create_problem("sphere")) is None
    True
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from evo_arena.algorithms import (
    ArtificialBeeColony,
    DifferentialEvolution,
    EvolutionStrategy,
    GeneticAlgorithm,
    ParticleSwarmOptimization,
    SimulatedAnnealing,
)
from evo_arena.params import (
    DE_STRATEGY_DONORS,
    ES_SELECTION_TYPES,
    PSO_TOPOLOGIES,
    SELECTION_METHODS,
    ABCParams,
    AlgorithmParams,
    DEParams,
    ESParams,
    GAParams,
    PSOParams,
    SAParams,
)
from evo_arena.problem import Problem
from evo_arena.protocols import Algorithm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParameterSpec:
    """Form metadata for one algorithm parameter.

    Attributes:
        name: Field name on the params dataclass.
        label: Human-readable label.
        kind: "int", "float" or "choice".
        default: Default value (matches the dataclass default).
        minimum: Smallest suggested value for numeric kinds.
        maximum: Largest suggested value for numeric kinds.
        step: Suggested increment for numeric kinds.
        options: Allowed values for the "choice" kind.
        visible_when: Optional (other_field, value) pair; the parameter only
            applies while other_field equals value.
        help: One-line description.
    """

    name: str
    label: str
    kind: str
    default: Any
    minimum: float | None = None
    maximum: float | None = None
    step: float | None = None
    options: tuple[str, ...] = ()
    visible_when: tuple[str, str] | None = None
    help: str = ""


@dataclass(frozen=True)
class AlgorithmInfo:
    """Catalog entry for one algorithm.

    Attributes:
        id: Short id used by create_algorithm.
        name: Display name.
        description: One-paragraph description.
        algorithm_class: The implementing class.
        params_class: The parameter dataclass.
        parameters: Form metadata for the algorithm-specific parameters.
        fixed_population_size: Population size the algorithm always uses, if any.
    """

    id: str
    name: str
    description: str
    algorithm_class: type
    params_class: type
    parameters: tuple[ParameterSpec, ...] = field(default_factory=tuple)
    fixed_population_size: int | None = None


def _common(default_population: int, default_generations: int) -> tuple[ParameterSpec, ...]:
    return (
        ParameterSpec(
            "population_size", "Population Size", "int", default_population, 1, 200, 1,
            help="Number of individuals kept each generation",
        ),
        ParameterSpec(
            "max_generations", "Max Generations", "int", default_generations, 1, 1000, 1,
            help="Generation budget for run()",
        ),
    )


ALGORITHMS: dict[str, AlgorithmInfo] = {
    "ga": AlgorithmInfo(
        id="ga",
        name="Genetic Algorithm",
        description=(
            "Generational GA with elitism, arithmetic crossover and Gaussian mutation. "
            "Parents are chosen by tournament, roulette wheel or linear rank selection."
        ),
        algorithm_class=GeneticAlgorithm,
        params_class=GAParams,
        parameters=_common(50, 100)
        + (
            ParameterSpec("crossover_rate", "Crossover Rate", "float", 0.8, 0.0, 1.0, 0.01,
                          help="Probability that a parent pair is recombined"),
            ParameterSpec("mutation_rate", "Mutation Rate", "float", 0.1, 0.0, 1.0, 0.01,
                          help="Per-gene probability of Gaussian mutation"),
            ParameterSpec("selection_method", "Selection Method", "choice", "tournament",
                          options=SELECTION_METHODS, help="Parent selection scheme"),
            ParameterSpec("tournament_size", "Tournament Size", "int", 3, 2, 10, 1,
                          visible_when=("selection_method", "tournament"),
                          help="Competitors per tournament"),
        ),
    ),
    "es": AlgorithmInfo(
        id="es",
        name="Evolution Strategy",
        description=(
            "(mu + lambda) or (mu, lambda) evolution strategy in which every individual "
            "carries self-adapting mutation step sizes."
        ),
        algorithm_class=EvolutionStrategy,
        params_class=ESParams,
        parameters=_common(10, 100)
        + (
            ParameterSpec("offspring_size", "Offspring (lambda)", "int", 40, 1, 400, 1,
                          help="Children created per generation"),
            ParameterSpec("selection_type", "Selection Type", "choice", "plus",
                          options=ES_SELECTION_TYPES, help="Plus keeps parents in the selection pool"),
            ParameterSpec("initial_step_size", "Initial Step Size", "float", 0.1, 0.001, 10.0, 0.001,
                          help="Mutation step size of the initial population"),
            ParameterSpec("convergence_threshold", "Convergence Threshold", "float", 1e-6, 0.0, 1.0, 1e-6,
                          help="Stop when diversity drops below this value"),
        ),
    ),
    "de": AlgorithmInfo(
        id="de",
        name="Differential Evolution",
        description=(
            "DE with rand/1, best/1, rand/2 and best/2 mutation, binomial crossover "
            "and greedy one-to-one replacement."
        ),
        algorithm_class=DifferentialEvolution,
        params_class=DEParams,
        parameters=_common(50, 100)
        + (
            ParameterSpec("differential_weight", "Differential Weight (F)", "float", 0.5, 0.0, 2.0, 0.01,
                          help="Scale of the difference vectors"),
            ParameterSpec("crossover_rate", "Crossover Rate (CR)", "float", 0.7, 0.0, 1.0, 0.01,
                          help="Per-gene probability of taking the mutant's value"),
            ParameterSpec("strategy", "Strategy", "choice", "rand/1",
                          options=tuple(DE_STRATEGY_DONORS), help="Base vector and number of differences"),
            ParameterSpec("convergence_threshold", "Convergence Threshold", "float", 1e-6, 0.0, 1.0, 1e-6,
                          help="Stop when diversity drops below this value"),
        ),
    ),
    "pso": AlgorithmInfo(
        id="pso",
        name="Particle Swarm Optimization",
        description=(
            "Inertia-weight PSO with velocity clamping and global, ring or von Neumann "
            "informant topologies."
        ),
        algorithm_class=ParticleSwarmOptimization,
        params_class=PSOParams,
        parameters=_common(50, 100)
        + (
            ParameterSpec("inertia_weight", "Inertia Weight (w)", "float", 0.7, 0.0, 1.5, 0.01,
                          help="Fraction of the previous velocity kept"),
            ParameterSpec("cognitive_coefficient", "Cognitive Coefficient (c1)", "float", 1.5, 0.0, 4.0, 0.1,
                          help="Attraction towards the personal best"),
            ParameterSpec("social_coefficient", "Social Coefficient (c2)", "float", 1.5, 0.0, 4.0, 0.1,
                          help="Attraction towards the informants' best"),
            ParameterSpec("max_velocity", "Max Velocity", "float", 0.1, 0.01, 1.0, 0.01,
                          help="Velocity clamp as a fraction of the mean bound range"),
            ParameterSpec("topology", "Topology", "choice", "global",
                          options=PSO_TOPOLOGIES, help="Which particles inform each other"),
            ParameterSpec("neighborhood_size", "Neighborhood Size", "int", 3, 1, 10, 1,
                          visible_when=("topology", "ring"),
                          help="Neighbours on each side in the ring"),
            ParameterSpec("convergence_threshold", "Convergence Threshold", "float", 1e-6, 0.0, 1.0, 1e-6,
                          help="Stop when diversity drops below this value"),
        ),
    ),
    "abc": AlgorithmInfo(
        id="abc",
        name="Artificial Bee Colony",
        description=(
            "Employed, onlooker and scout bee phases over a set of food sources; "
            "sources that stop improving are abandoned."
        ),
        algorithm_class=ArtificialBeeColony,
        params_class=ABCParams,
        parameters=_common(40, 100)
        + (
            ParameterSpec("limit", "Abandonment Limit", "int", 20, 1, 100, 1,
                          help="Failed trials before a source is abandoned"),
            ParameterSpec("scaling_factor", "Scaling Factor", "float", 0.5, 0.01, 2.0, 0.01,
                          help="Bound on the neighbour search step"),
            ParameterSpec("convergence_threshold", "Convergence Threshold", "float", 1e-4, 0.0, 1.0, 1e-5,
                          help="Stop when diversity drops below this value"),
        ),
    ),
    "sa": AlgorithmInfo(
        id="sa",
        name="Simulated Annealing",
        description=(
            "Single-solution search that accepts worse neighbours with a probability "
            "that shrinks as the temperature cools."
        ),
        algorithm_class=SimulatedAnnealing,
        params_class=SAParams,
        parameters=(
            ParameterSpec("max_generations", "Max Iterations", "int", 1000, 1, 10000, 1,
                          help="Iteration budget for run()"),
            ParameterSpec("initial_temperature", "Initial Temperature", "float", 100.0, 1.0, 1000.0, 1.0,
                          help="Temperature after initialization"),
            ParameterSpec("cooling_rate", "Cooling Rate", "float", 0.95, 0.8, 0.999, 0.001,
                          help="Geometric cooling factor per iteration"),
            ParameterSpec("neighborhood_size", "Neighborhood Size", "float", 0.1, 0.01, 1.0, 0.01,
                          help="Perturbation size as a fraction of each bound range"),
            ParameterSpec("min_temperature", "Min Temperature", "float", 0.01, 0.0, 10.0, 0.001,
                          help="Stop once the temperature drops below this value"),
        ),
        fixed_population_size=1,
    ),
}

# Ids accepted for backwards compatibility
ALIASES: dict[str, str] = {
    "genetic-algorithm": "ga",
    "evolution-strategy": "es",
    "differential-evolution": "de",
    "particle-swarm": "pso",
}


def _resolve(algorithm_id: str) -> AlgorithmInfo | None:
    return ALGORITHMS.get(ALIASES.get(algorithm_id, algorithm_id))


def list_algorithms() -> list[str]:
    """Return the canonical algorithm ids, sorted."""
    return sorted(ALGORITHMS)


def get_algorithm_details(algorithm_id: str) -> AlgorithmInfo | None:
    """Return the catalog entry for an id or alias, or None if unknown."""
    return _resolve(algorithm_id)


def get_default_parameters(algorithm_id: str) -> AlgorithmParams | None:
    """Return a default params instance for an id or alias, or None if unknown."""
    info = _resolve(algorithm_id)
    if info is None:
        return None
    return info.params_class()


def create_algorithm(
    algorithm_id: str,
    problem: Problem,
    params: AlgorithmParams | None = None,
    *,
    seed: int | None = None,
    history_limit: int | None = None,
) -> Algorithm | None:
    """Instantiate an algorithm by id.

    Args:
        algorithm_id: Canonical id ("ga", "es", "de", "pso", "abc", "sa") or a
            legacy alias such as "genetic-algorithm".
        problem: The problem to optimize.
        params: Optional parameters; must match the algorithm's params class.
        seed: Seed for the algorithm's random number generator.
        history_limit: Keep only the newest N statistics records.

    Returns:
        A new uninitialized algorithm, or None if the id is unknown.

    Raises:
        TypeError: If params is of the wrong type for the algorithm.
    """
    info = _resolve(algorithm_id)
    if info is None:
        logger.debug("Unknown algorithm id %r", algorithm_id)
        return None
    return info.algorithm_class(problem, params, seed=seed, history_limit=history_limit)
