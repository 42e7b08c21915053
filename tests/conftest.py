"""Shared test fixtures for evo-arena tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- sphere_problem, rastrigin_problem: 2D catalog problems
- maximize_problem: 1D maximization problem
- small_population: Hand-built population with known fitness ordering
"""

import numpy as np
import pytest

from evo_arena import Population, Problem, create_problem


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def sphere_problem() -> Problem:
    """2D Sphere on [-5.12, 5.12]^2."""
    return create_problem("sphere", dimension=2)


@pytest.fixture
def rastrigin_problem() -> Problem:
    """2D Rastrigin on [-5.12, 5.12]^2."""
    return create_problem("rastrigin", dimension=2)


@pytest.fixture
def maximize_problem() -> Problem:
    """1D maximization problem f(x) = x on [0, 10]; best at x = 10."""
    return Problem(
        id="linear-max",
        name="Linear maximization",
        function=lambda x: float(x[0]),
        bounds=np.array([[0.0, 10.0]]),
        is_minimization=False,
    )


@pytest.fixture
def small_population() -> Population:
    """Five individuals; index 3 is the fittest, index 1 the worst.

    Fitness is in maximize form, so these are negated Sphere values.
    """
    x = np.array([[1.0, 1.0], [3.0, 3.0], [2.0, 0.0], [0.0, 0.5], [1.0, 2.0]])
    fitness = -np.sum(x * x, axis=1)
    return Population(x=x, fitness=fitness)
