"""Fitness tournament selection."""

import numpy as np

from evo_arena.population import Population


def fitness_tournament(tournament_size: int = 3):
    """Create a fitness-based tournament parent selector.

    Each parent is the fittest of ``tournament_size`` individuals drawn
    uniformly with replacement. Higher fitness wins.

    Args:
        tournament_size: Number of individuals competing in each tournament (default: 3).

    Returns:
        A ParentSelector callable that selects parent indices based on fitness.

    Raises:
        ValueError: If tournament_size is not positive.

    Example:
        >>> selector = fitness_tournament(tournament_size=3)
        >>> parents = selector(pop, n_parents=20, rng=rng)
    """
    if tournament_size <= 0:
        raise ValueError(f"tournament_size must be positive, got {tournament_size}")

    def selector(
        pop: Population,
        n_parents: int,
        rng: np.random.Generator,
    ) -> np.ndarray:
        """Select parents using fitness tournament selection.

        Args:
            pop: Population to select from.
            n_parents: Number of parents to select.
            rng: Random number generator for reproducibility.

        Returns:
            Array of selected parent indices with shape (n_parents,) and dtype np.intp.
        """
        candidates = rng.integers(0, len(pop), size=(n_parents, tournament_size))

        # First candidate wins ties, as in a sequential strict comparison
        winners = np.argmax(pop.fitness[candidates], axis=1)

        return candidates[np.arange(n_parents), winners].astype(np.intp)

    return selector
