"""Bounded continuous optimization problems.

This module provides the Problem class: an immutable definition of an
objective function over a box-bounded real vector space. Algorithms use it to
evaluate candidate solutions, sample random starting points, and repair
vectors that left the feasible region.

Fitness convention:
    Every algorithm in evo_arena stores fitness in *maximize form*. For a
    minimization problem the raw objective value is negated. Use
    Problem.to_fitness and Problem.to_objective to convert between the two.

Example:
    >>> import numpy as np
    >>> problem = Problem(
    ...     id="sphere",
    ...     name="Sphere",
    ...     function=lambda x: float(np.sum(x**2)),
    ...     bounds=np.array([[-5.12, 5.12], [-5.12, 5.12]]),
    ... )
    >>> problem.evaluate(np.array([1.0, 1.0]))
    2.0
    >>> problem.repair(np.array([10.0, -10.0]))
    array([ 5.12, -5.12])
"""

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class Problem:
    """Immutable objective function over a bounded real vector space.

    Attributes:
        id: Short identifier used by catalogs (e.g. "sphere").
        name: Human-readable name.
        function: Pure map from a vector of shape (dimension,) to a float.
        bounds: Per-dimension [min, max] pairs, shape (dimension, 2).
        is_minimization: Whether lower objective values are better.
        description: Free-form description for display.
        global_optimum: Known optimal objective value, or None if unknown.

    Example:
        >>> problem = Problem(
        ...     id="linear",
        ...     name="Linear",
        ...     function=lambda x: float(x.sum()),
        ...     bounds=np.array([[0.0, 1.0]] * 3),
        ... )
        >>> problem.dimension
        3
    """

    id: str
    name: str
    function: Callable[[np.ndarray], float]
    bounds: np.ndarray
    is_minimization: bool = True
    description: str = ""
    global_optimum: float | None = None

    def __post_init__(self) -> None:
        """Validate and copy bounds for immutability.

        Raises:
            TypeError: If bounds is not a numpy array.
            ValueError: If bounds is not of shape (dimension, 2), is empty, or
                has a lower bound above its upper bound.
        """
        if not isinstance(self.bounds, np.ndarray):
            raise TypeError(f"bounds must be a numpy array, got {type(self.bounds).__name__}")
        if self.bounds.ndim != 2 or self.bounds.shape[1] != 2:
            raise ValueError(f"bounds must have shape (dimension, 2), got {self.bounds.shape}")
        if self.bounds.shape[0] == 0:
            raise ValueError("bounds must describe at least one dimension")
        if np.any(self.bounds[:, 0] > self.bounds[:, 1]):
            raise ValueError("every lower bound must be <= its upper bound")

        bounds = self.bounds.astype(np.float64, copy=True)
        bounds.setflags(write=False)
        object.__setattr__(self, "bounds", bounds)

    @property
    def dimension(self) -> int:
        """Number of decision variables."""
        return self.bounds.shape[0]

    @property
    def lower(self) -> np.ndarray:
        """Lower bounds, shape (dimension,)."""
        return self.bounds[:, 0]

    @property
    def upper(self) -> np.ndarray:
        """Upper bounds, shape (dimension,)."""
        return self.bounds[:, 1]

    @property
    def ranges(self) -> np.ndarray:
        """Width of each dimension's feasible interval, shape (dimension,)."""
        return self.bounds[:, 1] - self.bounds[:, 0]

    def evaluate(self, vector: np.ndarray) -> float:
        """Evaluate the raw objective value of a vector.

        Args:
            vector: Candidate solution of shape (dimension,).

        Returns:
            The objective value as a Python float.

        Raises:
            ValueError: If the vector length does not match the problem dimension.
        """
        return float(self.function(self._as_solution(vector)))

    def generate_random_solution(self, rng: np.random.Generator | None = None) -> np.ndarray:
        """Sample a vector uniformly from the bounded box.

        Args:
            rng: Random number generator. If None, a fresh unseeded one is used.

        Returns:
            Array of shape (dimension,) inside the bounds.
        """
        if rng is None:
            rng = np.random.default_rng()
        return rng.uniform(self.lower, self.upper)

    def repair(self, vector: np.ndarray) -> np.ndarray:
        """Clamp each component of a vector into its bound.

        The input is never modified. repair(repair(v)) equals repair(v).

        Args:
            vector: Vector of shape (dimension,).

        Returns:
            New array with every component inside its [min, max] interval.

        Raises:
            ValueError: If the vector length does not match the problem dimension.
        """
        return np.clip(self._as_solution(vector), self.lower, self.upper)

    def is_in_bounds(self, vector: np.ndarray) -> bool:
        """Check whether a vector lies inside the bounded box.

        Returns False when the vector has the wrong length.
        """
        x = np.asarray(vector, dtype=np.float64)
        if x.ndim != 1 or x.shape[0] != self.dimension:
            return False
        return bool(np.all((x >= self.lower) & (x <= self.upper)))

    def to_fitness(self, value: float) -> float:
        """Convert a raw objective value to maximize-form fitness."""
        return -value if self.is_minimization else value

    def to_objective(self, fitness: float) -> float:
        """Convert maximize-form fitness back to the raw objective value."""
        return -fitness if self.is_minimization else fitness

    def _as_solution(self, vector: np.ndarray) -> np.ndarray:
        x = np.asarray(vector, dtype=np.float64)
        if x.ndim != 1 or x.shape[0] != self.dimension:
            raise ValueError(
                f"Solution dimension ({x.shape[0] if x.ndim == 1 else x.shape}) does not match "
                f"problem dimension ({self.dimension})"
            )
        return x
