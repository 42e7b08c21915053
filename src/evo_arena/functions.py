"""Benchmark functions for continuous single-objective optimization.

Every function here is a pure map from R^n to R and is minimized. All have a
global optimum value of 0:

- Sphere, Rastrigin, Ackley, Schwefel 2.22, Schwefel 1.2: at the origin
- Rosenbrock: at (1, 1, ..., 1)
- Step: anywhere in [-0.5, 0.5]^n

The FUNCTIONS catalog maps problem ids to their canonical bounds and metadata,
and create_problem() turns an id into a Problem of the requested dimension.

References:
    Yao, X., Liu, Y., & Lin, G. (1999). Evolutionary programming made faster.
    IEEE Transactions on Evolutionary Computation, 3(2), 82-102.
"""

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from evo_arena.problem import Problem


def sphere(x: np.ndarray) -> float:
    """Sphere: f(x) = sum(x_i^2).

    Continuous, convex and unimodal.
    """
    return float(np.sum(x * x))


def rastrigin(x: np.ndarray) -> float:
    """Rastrigin: f(x) = 10n + sum(x_i^2 - 10 cos(2 pi x_i)).

    Highly multimodal with a regular grid of local minima.
    """
    n = x.shape[0]
    return float(10.0 * n + np.sum(x * x - 10.0 * np.cos(2.0 * np.pi * x)))


def rosenbrock(x: np.ndarray) -> float:
    """Rosenbrock: f(x) = sum(100 (x_{i+1} - x_i^2)^2 + (x_i - 1)^2).

    The optimum lies inside a long, narrow, parabolic valley. For a single
    variable the sum is empty and the value is 0.
    """
    head, tail = x[:-1], x[1:]
    return float(np.sum(100.0 * (tail - head * head) ** 2 + (head - 1.0) ** 2))


def ackley(x: np.ndarray) -> float:
    """Ackley: nearly flat outer region with a deep hole at the centre."""
    n = x.shape[0]
    sum_sq = np.sum(x * x)
    sum_cos = np.sum(np.cos(2.0 * np.pi * x))
    return float(-20.0 * np.exp(-0.2 * np.sqrt(sum_sq / n)) - np.exp(sum_cos / n) + 20.0 + np.e)


def schwefel_2_22(x: np.ndarray) -> float:
    """Schwefel's problem 2.22: f(x) = sum|x_i| + prod|x_i|."""
    abs_x = np.abs(x)
    return float(np.sum(abs_x) + np.prod(abs_x))


def schwefel_1_2(x: np.ndarray) -> float:
    """Schwefel's problem 1.2: f(x) = sum_i (sum_{j<=i} x_j)^2.

    Unimodal but non-separable.
    """
    return float(np.sum(np.cumsum(x) ** 2))


def step(x: np.ndarray) -> float:
    """Step: f(x) = sum(|x_i + 0.5|^2)."""
    return float(np.sum(np.abs(x + 0.5) ** 2))


@dataclass(frozen=True)
class FunctionInfo:
    """Catalog entry for a benchmark function.

    Attributes:
        id: Problem identifier.
        name: Display name.
        description: One-paragraph description.
        formula: Plain-text formula.
        function: The objective map.
        bounds: Canonical (min, max) interval applied to every dimension.
        global_optimum: Optimal objective value.
        optimum_location: Human-readable location of the optimum.
        is_minimization: Always True for this catalog.
    """

    id: str
    name: str
    description: str
    formula: str
    function: Callable[[np.ndarray], float]
    bounds: tuple[float, float]
    global_optimum: float = 0.0
    optimum_location: str = "origin"
    is_minimization: bool = True


FUNCTIONS: dict[str, FunctionInfo] = {
    "sphere": FunctionInfo(
        id="sphere",
        name="Sphere",
        description="A simple, continuous, convex and unimodal function.",
        formula="f(x) = sum(x_i^2)",
        function=sphere,
        bounds=(-5.12, 5.12),
    ),
    "rastrigin": FunctionInfo(
        id="rastrigin",
        name="Rastrigin",
        description="A highly multimodal function with many regularly distributed local minima.",
        formula="f(x) = 10n + sum(x_i^2 - 10 cos(2 pi x_i))",
        function=rastrigin,
        bounds=(-5.12, 5.12),
    ),
    "rosenbrock": FunctionInfo(
        id="rosenbrock",
        name="Rosenbrock",
        description="A unimodal function whose optimum sits in a narrow curved valley.",
        formula="f(x) = sum(100 (x_{i+1} - x_i^2)^2 + (x_i - 1)^2)",
        function=rosenbrock,
        bounds=(-2.048, 2.048),
        optimum_location="(1, 1, ..., 1)",
    ),
    "ackley": FunctionInfo(
        id="ackley",
        name="Ackley",
        description="A multimodal function with a nearly flat outer region and a large hole at the centre.",
        formula="f(x) = -20 exp(-0.2 sqrt(sum(x_i^2)/n)) - exp(sum(cos(2 pi x_i))/n) + 20 + e",
        function=ackley,
        bounds=(-32.768, 32.768),
    ),
    "schwefel222": FunctionInfo(
        id="schwefel222",
        name="Schwefel 2.22",
        description="A unimodal function combining the sum and the product of absolute values.",
        formula="f(x) = sum|x_i| + prod|x_i|",
        function=schwefel_2_22,
        bounds=(-10.0, 10.0),
    ),
    "schwefel12": FunctionInfo(
        id="schwefel12",
        name="Schwefel 1.2",
        description="A unimodal, non-separable function with strong variable interdependencies.",
        formula="f(x) = sum_i (sum_{j<=i} x_j)^2",
        function=schwefel_1_2,
        bounds=(-100.0, 100.0),
    ),
    "step": FunctionInfo(
        id="step",
        name="Step",
        description="A discontinuous function made of flat plateaus.",
        formula="f(x) = sum(|x_i + 0.5|^2)",
        function=step,
        bounds=(-100.0, 100.0),
        optimum_location="[-0.5, 0.5]^n",
    ),
}


def create_problem(problem_id: str, dimension: int = 2) -> Problem | None:
    """Create a Problem instance for a catalog function.

    Args:
        problem_id: Identifier from FUNCTIONS (e.g. "sphere").
        dimension: Number of decision variables (default 2).

    Returns:
        A Problem with the function's canonical bounds repeated for every
        dimension, or None if the id is unknown.

    Raises:
        ValueError: If dimension is smaller than 1.

    Example:
        >>> problem = create_problem("rosenbrock", dimension=2)
        >>> problem.evaluate(np.array([1.0, 1.0]))
        0.0
        >>> create_problem("tsp") is None
        True
    """
    if dimension < 1:
        raise ValueError(f"dimension must be at least 1, got {dimension}")

    info = FUNCTIONS.get(problem_id)
    if info is None:
        return None

    return Problem(
        id=info.id,
        name=info.name,
        function=info.function,
        bounds=np.tile(np.array(info.bounds, dtype=np.float64), (dimension, 1)),
        is_minimization=info.is_minimization,
        description=info.description,
        global_optimum=info.global_optimum,
    )


def list_problems() -> list[str]:
    """Return the sorted ids of all catalog functions."""
    return sorted(FUNCTIONS.keys())


def get_problem_details(problem_id: str) -> FunctionInfo | None:
    """Return the catalog entry for a problem id, or None if unknown."""
    return FUNCTIONS.get(problem_id)
