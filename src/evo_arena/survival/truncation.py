"""Truncation survival selection."""

import numpy as np

from evo_arena.population import Population


def truncation_survival():
    """Create truncation survivor selector.

    Truncation survival keeps the k best individuals by fitness value.
    Higher fitness is better (maximize form).

    Returns:
        A SurvivorSelector callable.

    Example:
        >>> selector = truncation_survival()
        >>> indices = selector(pop, n_survivors=10)
    """

    def selector(
        pop: Population,
        n_survivors: int,
        **kwargs: int,
    ) -> np.ndarray:
        """Select survivors using truncation selection.

        Args:
            pop: Population to select survivors from.
            n_survivors: Number of survivors to select for the next generation.
            **kwargs: Unused; accepted for SurvivorSelector compatibility.

        Returns:
            Array of shape (n_survivors,) containing indices of selected
            survivors, ordered by fitness (best first).

        Raises:
            ValueError: If n_survivors is not positive or exceeds population size.

        Example:
            >>> x = np.array([[1, 2], [3, 4], [5, 6], [7, 8]])
            >>> pop = Population(x=x, fitness=np.array([-4.0, -2.0, -3.0, -1.0]))
            >>> selector = truncation_survival()
            >>> selector(pop, n_survivors=2)
            array([3, 1])
        """
        if n_survivors <= 0:
            raise ValueError(f"n_survivors must be positive, got {n_survivors}")
        if n_survivors > len(pop):
            raise ValueError(f"n_survivors ({n_survivors}) cannot exceed population size ({len(pop)})")

        # Stable sort on negated fitness: descending, earlier index first on ties
        sorted_indices = np.argsort(-pop.fitness, kind="stable")
        return sorted_indices[:n_survivors].astype(np.intp)

    return selector
