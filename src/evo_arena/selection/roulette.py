"""Roulette wheel (fitness-proportionate) selection."""

import numpy as np

from evo_arena.population import Population


def roulette_wheel():
    """Create a roulette wheel (fitness-proportionate) parent selector.

    Fitness values may be negative (minimization problems are negated), so
    they are shifted to be strictly positive before computing probabilities:

        weights_i = f_i - min(f) + 1
        p_i = weights_i / sum(weights_j)

    The +1 offset keeps the worst individual selectable and makes an
    all-equal population select uniformly. Individuals with non-finite fitness
    get zero weight, and the min is taken over finite values only. When no
    fitness is finite the draw is uniform.

    Returns:
        A ParentSelector callable that performs fitness-proportionate selection.

    Example:
        >>> selector = roulette_wheel()
        >>> parents = selector(pop, n_parents=20, rng=rng)
    """

    def selector(
        pop: Population,
        n_parents: int,
        rng: np.random.Generator,
    ) -> np.ndarray:
        """Select parents using fitness-proportionate (roulette wheel) selection.

        Args:
            pop: Population to select from.
            n_parents: Number of parents to select.
            rng: Random number generator for reproducibility.

        Returns:
            Array of selected parent indices with shape (n_parents,) and dtype np.intp.
        """
        fitness = pop.fitness
        finite = np.isfinite(fitness)
        if not np.any(finite):
            probs = np.full(len(pop), 1.0 / len(pop))
        else:
            weights = np.where(finite, fitness - np.min(fitness[finite]) + 1.0, 0.0)
            probs = weights / weights.sum()

        selected = rng.choice(len(pop), size=n_parents, replace=True, p=probs)

        return selected.astype(np.intp)

    return selector
