"""Parameter sets for the evolutionary algorithms.

Each algorithm has its own immutable parameter dataclass. All of them share the
two common fields ``population_size`` and ``max_generations``; everything else
is algorithm-specific. Values are validated on construction, so an invalid
configuration fails before any step is taken.

Parameters usually arrive from a UI or a JSON document with camelCase keys
(``populationSize``, ``crossoverRate``, ``mu``, ``F``...). params_from_mapping()
converts such a mapping into the right dataclass, and merge_params() applies a
partial update and reports whether the population has to be rebuilt.

Example:
    >>> params = params_from_mapping(GAParams, {"populationSize": 20, "mutationRate": 0.2})
    >>> params.population_size, params.mutation_rate
    (20, 0.2)
    >>> new, needs_reset = merge_params(params, population_size=30)
    >>> needs_reset
    True
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

SELECTION_METHODS = ("tournament", "roulette", "rank")
ES_SELECTION_TYPES = ("plus", "comma")
PSO_TOPOLOGIES = ("global", "ring", "vonNeumann")

# Number of distinct donor vectors each DE strategy draws besides the target.
DE_STRATEGY_DONORS: dict[str, int] = {
    "rand/1": 3,
    "best/1": 2,
    "rand/2": 5,
    "best/2": 4,
}


def _check_positive_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


def _check_non_negative_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")


def _check_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value!r}")


def _check_positive(name: str, value: float) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")


def _check_choice(name: str, value: str, choices: tuple[str, ...]) -> None:
    if value not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}, got {value!r}")


@dataclass(frozen=True)
class GAParams:
    """Genetic algorithm parameters.

    Attributes:
        population_size: Number of individuals.
        max_generations: Generation budget; the GA converges when it is reached.
        crossover_rate: Probability that a parent pair is recombined.
        mutation_rate: Per-gene probability of Gaussian mutation.
        selection_method: "tournament", "roulette" or "rank".
        tournament_size: Competitors per tournament (tournament selection only).
    """

    population_size: int = 50
    max_generations: int = 100
    crossover_rate: float = 0.8
    mutation_rate: float = 0.1
    selection_method: str = "tournament"
    tournament_size: int = 3

    def __post_init__(self) -> None:
        _check_positive_int("population_size", self.population_size)
        _check_non_negative_int("max_generations", self.max_generations)
        _check_probability("crossover_rate", self.crossover_rate)
        _check_probability("mutation_rate", self.mutation_rate)
        _check_choice("selection_method", self.selection_method, SELECTION_METHODS)
        _check_positive_int("tournament_size", self.tournament_size)


@dataclass(frozen=True)
class ESParams:
    """Evolution strategy parameters.

    ``population_size`` is the number of parents (mu) and ``offspring_size`` the
    number of offspring (lambda) created per generation.

    Attributes:
        population_size: Parents kept each generation (mu).
        offspring_size: Offspring created each generation (lambda).
        max_generations: Default number of generations for run().
        selection_type: "plus" for (mu+lambda), "comma" for (mu,lambda).
        initial_step_size: Starting mutation step size for every dimension.
        convergence_threshold: Diversity below which the strategy has converged.
    """

    population_size: int = 10
    offspring_size: int = 40
    max_generations: int = 100
    selection_type: str = "plus"
    initial_step_size: float = 0.1
    convergence_threshold: float = 1e-6

    def __post_init__(self) -> None:
        _check_positive_int("population_size", self.population_size)
        _check_positive_int("offspring_size", self.offspring_size)
        _check_non_negative_int("max_generations", self.max_generations)
        _check_choice("selection_type", self.selection_type, ES_SELECTION_TYPES)
        _check_positive("initial_step_size", self.initial_step_size)
        if self.convergence_threshold < 0:
            raise ValueError(f"convergence_threshold must be non-negative, got {self.convergence_threshold!r}")
        if self.selection_type == "comma" and self.offspring_size < self.population_size:
            raise ValueError(
                f"comma selection needs offspring_size ({self.offspring_size}) >= "
                f"population_size ({self.population_size})"
            )

    @property
    def mu(self) -> int:
        return self.population_size

    @property
    def lambda_(self) -> int:
        return self.offspring_size


@dataclass(frozen=True)
class DEParams:
    """Differential evolution parameters.

    Attributes:
        population_size: Number of target vectors.
        max_generations: Default number of generations for run().
        differential_weight: Scaling factor F applied to difference vectors.
        crossover_rate: Binomial crossover probability CR.
        strategy: "rand/1", "best/1", "rand/2" or "best/2".
        convergence_threshold: Diversity below which DE has converged.
    """

    population_size: int = 50
    max_generations: int = 100
    differential_weight: float = 0.5
    crossover_rate: float = 0.7
    strategy: str = "rand/1"
    convergence_threshold: float = 1e-6

    def __post_init__(self) -> None:
        _check_positive_int("population_size", self.population_size)
        _check_non_negative_int("max_generations", self.max_generations)
        _check_positive("differential_weight", self.differential_weight)
        _check_probability("crossover_rate", self.crossover_rate)
        _check_choice("strategy", self.strategy, tuple(DE_STRATEGY_DONORS))
        if self.convergence_threshold < 0:
            raise ValueError(f"convergence_threshold must be non-negative, got {self.convergence_threshold!r}")
        required = DE_STRATEGY_DONORS[self.strategy] + 1
        if self.population_size < required:
            raise ValueError(
                f"strategy {self.strategy} needs population_size >= {required}, got {self.population_size}"
            )


@dataclass(frozen=True)
class PSOParams:
    """Particle swarm parameters.

    Attributes:
        population_size: Number of particles.
        max_generations: Iteration budget.
        inertia_weight: Inertia weight w.
        cognitive_coefficient: Attraction towards the personal best (c1).
        social_coefficient: Attraction towards the informants' best (c2).
        max_velocity: Velocity clamp as a fraction of the mean bound range.
        topology: "global", "ring" or "vonNeumann".
        neighborhood_size: Neighbours on each side for the ring topology.
        convergence_threshold: Diversity below which the swarm has converged.
    """

    population_size: int = 50
    max_generations: int = 100
    inertia_weight: float = 0.7
    cognitive_coefficient: float = 1.5
    social_coefficient: float = 1.5
    max_velocity: float = 0.1
    topology: str = "global"
    neighborhood_size: int = 3
    convergence_threshold: float = 1e-6

    def __post_init__(self) -> None:
        _check_positive_int("population_size", self.population_size)
        _check_non_negative_int("max_generations", self.max_generations)
        if self.inertia_weight < 0:
            raise ValueError(f"inertia_weight must be non-negative, got {self.inertia_weight!r}")
        if self.cognitive_coefficient < 0:
            raise ValueError(f"cognitive_coefficient must be non-negative, got {self.cognitive_coefficient!r}")
        if self.social_coefficient < 0:
            raise ValueError(f"social_coefficient must be non-negative, got {self.social_coefficient!r}")
        _check_positive("max_velocity", self.max_velocity)
        _check_choice("topology", self.topology, PSO_TOPOLOGIES)
        _check_positive_int("neighborhood_size", self.neighborhood_size)
        if self.convergence_threshold < 0:
            raise ValueError(f"convergence_threshold must be non-negative, got {self.convergence_threshold!r}")


@dataclass(frozen=True)
class ABCParams:
    """Artificial bee colony parameters.

    Attributes:
        population_size: Number of food sources (employed bees).
        max_generations: Generation budget.
        limit: Failed trials after which a food source is abandoned.
        scaling_factor: Bound on |phi| in the neighbour search.
        convergence_threshold: Diversity below which the colony has converged.
    """

    population_size: int = 40
    max_generations: int = 100
    limit: int = 20
    scaling_factor: float = 0.5
    convergence_threshold: float = 1e-4

    def __post_init__(self) -> None:
        _check_positive_int("population_size", self.population_size)
        if self.population_size < 2:
            raise ValueError(f"population_size must be at least 2 for partner selection, got {self.population_size}")
        _check_non_negative_int("max_generations", self.max_generations)
        _check_non_negative_int("limit", self.limit)
        _check_positive("scaling_factor", self.scaling_factor)
        if self.convergence_threshold < 0:
            raise ValueError(f"convergence_threshold must be non-negative, got {self.convergence_threshold!r}")


@dataclass(frozen=True)
class SAParams:
    """Simulated annealing parameters.

    Simulated annealing keeps a single solution, so ``population_size`` is a
    read-only property fixed at 1.

    Attributes:
        max_generations: Iteration budget.
        initial_temperature: Temperature after initialization or reset.
        cooling_rate: Geometric cooling factor applied every iteration.
        neighborhood_size: Perturbation size as a fraction of each bound range.
        min_temperature: Temperature below which the search has converged.
    """

    max_generations: int = 1000
    initial_temperature: float = 100.0
    cooling_rate: float = 0.95
    neighborhood_size: float = 0.1
    min_temperature: float = 0.01

    def __post_init__(self) -> None:
        _check_non_negative_int("max_generations", self.max_generations)
        _check_positive("initial_temperature", self.initial_temperature)
        if not 0.0 < self.cooling_rate <= 1.0:
            raise ValueError(f"cooling_rate must be in (0, 1], got {self.cooling_rate!r}")
        _check_positive("neighborhood_size", self.neighborhood_size)
        if self.min_temperature < 0:
            raise ValueError(f"min_temperature must be non-negative, got {self.min_temperature!r}")

    @property
    def population_size(self) -> int:
        return 1


AlgorithmParams = GAParams | ESParams | DEParams | PSOParams | ABCParams | SAParams

P = TypeVar("P", GAParams, ESParams, DEParams, PSOParams, ABCParams, SAParams)

# Keys that do not follow the plain camelCase -> snake_case rule.
_ALIASES: dict[type, dict[str, str]] = {
    ESParams: {"mu": "population_size", "lambda": "offspring_size", "lambda_": "offspring_size"},
    DEParams: {"F": "differential_weight", "CR": "crossover_rate", "f": "differential_weight", "cr": "crossover_rate"},
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def _to_field_name(cls: type, key: str) -> str:
    aliases = _ALIASES.get(cls, {})
    if key in aliases:
        return aliases[key]
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def params_from_mapping(cls: type[P], mapping: Mapping[str, Any]) -> P:
    """Build a parameter dataclass from a JSON/UI style mapping.

    Keys may be camelCase (``populationSize``) or snake_case
    (``population_size``); algorithm aliases such as ``mu``, ``lambda``, ``F``
    and ``CR`` are understood. Keys that do not name a field are ignored.

    Args:
        cls: The parameter dataclass to build (e.g. GAParams).
        mapping: Key/value pairs; missing fields keep their defaults.

    Returns:
        A validated instance of cls.

    Raises:
        ValueError: If a value fails validation.
    """
    field_names = {f.name for f in fields(cls)}
    kwargs: dict[str, Any] = {}
    for key, value in mapping.items():
        name = _to_field_name(cls, key)
        if name in field_names:
            kwargs[name] = value
        else:
            logger.debug("Ignoring parameter %r not used by %s", key, cls.__name__)
    return cls(**kwargs)


def merge_params(current: P, params: P | None = None, **changes: Any) -> tuple[P, bool]:
    """Apply a parameter update.

    Args:
        current: The parameters in effect.
        params: Optional full replacement of the same type as current.
        **changes: Individual field updates (aliases accepted), applied after params.

    Returns:
        Tuple of (new_params, needs_reinitialization). Re-initialization is
        needed when the population size changes.

    Raises:
        TypeError: If params is not the same type as current, or a change names
            an unknown field.
        ValueError: If the merged parameters fail validation.
    """
    cls = type(current)
    if params is not None and not isinstance(params, cls):
        raise TypeError(f"expected {cls.__name__}, got {type(params).__name__}")

    new = params if params is not None else current
    if changes:
        field_names = {f.name for f in fields(cls)}
        resolved: dict[str, Any] = {}
        for key, value in changes.items():
            name = _to_field_name(cls, key)
            if name not in field_names:
                raise TypeError(f"{cls.__name__} has no parameter {key!r}")
            resolved[name] = value
        new = replace(new, **resolved)

    return new, new.population_size != current.population_size
