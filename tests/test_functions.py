"""Tests for the benchmark function library and catalog."""

import numpy as np
import pytest

from evo_arena.functions import (
    FUNCTIONS,
    ackley,
    create_problem,
    get_problem_details,
    list_problems,
    rastrigin,
    rosenbrock,
    schwefel_1_2,
    schwefel_2_22,
    sphere,
    step,
)

# =============================================================================
# Function values
# =============================================================================


class TestFunctionValues:
    """Known values of each benchmark function."""

    def test_sphere(self) -> None:
        """Sphere is the sum of squares."""
        assert sphere(np.array([1.0, 2.0, 3.0])) == pytest.approx(14.0)

    def test_rastrigin_optimum(self) -> None:
        """Rastrigin is 0 at the origin."""
        assert rastrigin(np.zeros(5)) == pytest.approx(0.0, abs=1e-12)

    def test_rastrigin_integer_point(self) -> None:
        """At integer points the cosine term cancels the 10n offset."""
        assert rastrigin(np.array([1.0, 2.0])) == pytest.approx(5.0)

    def test_rosenbrock_optimum(self) -> None:
        """Rosenbrock is 0 at (1, ..., 1)."""
        assert rosenbrock(np.ones(4)) == pytest.approx(0.0)

    def test_rosenbrock_origin(self) -> None:
        """Rosenbrock at the origin is n - 1."""
        assert rosenbrock(np.zeros(3)) == pytest.approx(2.0)

    def test_ackley_optimum(self) -> None:
        """Ackley is 0 at the origin."""
        assert ackley(np.zeros(3)) == pytest.approx(0.0, abs=1e-12)

    def test_ackley_positive_elsewhere(self) -> None:
        """Ackley is positive away from the origin."""
        assert ackley(np.array([1.0, -1.0])) > 0.0

    def test_schwefel_2_22(self) -> None:
        """Sum plus product of absolute values."""
        assert schwefel_2_22(np.array([1.0, -2.0, 3.0])) == pytest.approx(6.0 + 6.0)

    def test_schwefel_1_2(self) -> None:
        """Sum of squared prefix sums."""
        # Prefix sums: 1, 3, 6
        assert schwefel_1_2(np.array([1.0, 2.0, 3.0])) == pytest.approx(1.0 + 9.0 + 36.0)

    def test_step(self) -> None:
        """Squared shifted absolute values."""
        assert step(np.array([-0.5, 0.5])) == pytest.approx(1.0)

    @pytest.mark.parametrize("fn", [sphere, rastrigin, rosenbrock, ackley, schwefel_2_22, schwefel_1_2, step])
    def test_returns_python_float(self, fn) -> None:
        """Every function returns a Python float."""
        assert isinstance(fn(np.array([0.3, -0.7])), float)


# =============================================================================
# Catalog
# =============================================================================


class TestCatalog:
    """Tests for create_problem and catalog lookups."""

    def test_list_problems(self) -> None:
        """All seven ids are listed, sorted."""
        assert list_problems() == sorted(
            ["sphere", "rastrigin", "rosenbrock", "ackley", "schwefel222", "schwefel12", "step"]
        )

    @pytest.mark.parametrize(
        ("problem_id", "low", "high"),
        [
            ("sphere", -5.12, 5.12),
            ("rastrigin", -5.12, 5.12),
            ("rosenbrock", -2.048, 2.048),
            ("ackley", -32.768, 32.768),
            ("schwefel222", -10.0, 10.0),
            ("schwefel12", -100.0, 100.0),
            ("step", -100.0, 100.0),
        ],
    )
    def test_bounds(self, problem_id: str, low: float, high: float) -> None:
        """Canonical bounds are repeated for every dimension."""
        problem = create_problem(problem_id, dimension=3)

        assert problem.dimension == 3
        np.testing.assert_array_equal(problem.lower, [low] * 3)
        np.testing.assert_array_equal(problem.upper, [high] * 3)
        assert problem.is_minimization

    def test_default_dimension_is_two(self) -> None:
        """create_problem defaults to two dimensions."""
        assert create_problem("ackley").dimension == 2

    def test_unknown_id_returns_none(self) -> None:
        """Unknown ids return None instead of raising."""
        assert create_problem("tsp") is None

    def test_invalid_dimension_raises(self) -> None:
        """Dimension below 1 raises ValueError."""
        with pytest.raises(ValueError, match="dimension must be at least 1"):
            create_problem("sphere", dimension=0)

    def test_problem_evaluates_catalog_function(self) -> None:
        """The created problem evaluates the catalog function."""
        problem = create_problem("schwefel12", dimension=3)

        assert problem.evaluate(np.array([1.0, 2.0, 3.0])) == pytest.approx(46.0)

    def test_details(self) -> None:
        """Details carry name, formula and optimum."""
        info = get_problem_details("rosenbrock")

        assert info.name == "Rosenbrock"
        assert info.formula
        assert info.global_optimum == 0.0
        assert get_problem_details("nope") is None

    def test_catalog_ids_match_keys(self) -> None:
        """Every catalog entry is stored under its own id."""
        for key, info in FUNCTIONS.items():
            assert info.id == key
