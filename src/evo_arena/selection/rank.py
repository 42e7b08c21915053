"""Linear rank selection."""

import numpy as np

from evo_arena.population import Population


def linear_rank():
    """Create a linear rank parent selector.

    Individuals are sorted by descending fitness and the individual at rank i
    (0 = best) of n is chosen with probability

        p_i = 2 (n - i) / (n (n + 1))

    so selection pressure depends only on ordering, not on fitness scale.

    Returns:
        A ParentSelector callable.

    Example:
        >>> selector = linear_rank()
        >>> parents = selector(pop, n_parents=20, rng=rng)
    """

    def selector(
        pop: Population,
        n_parents: int,
        rng: np.random.Generator,
    ) -> np.ndarray:
        """Select parents with probability decreasing linearly in rank.

        Args:
            pop: Population to select from.
            n_parents: Number of parents to select.
            rng: Random number generator for reproducibility.

        Returns:
            Array of selected parent indices with shape (n_parents,) and dtype np.intp.
        """
        n = len(pop)
        # Stable sort on negated fitness keeps earlier individuals first on ties
        order = np.argsort(-pop.fitness, kind="stable")
        probs = 2.0 * (n - np.arange(n)) / (n * (n + 1))

        ranks = rng.choice(n, size=n_parents, replace=True, p=probs)

        return order[ranks].astype(np.intp)

    return selector
