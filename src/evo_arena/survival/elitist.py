"""Elitist survival selection."""

import numpy as np

from evo_arena.population import Population


def elitist_survival(elite_count: int = 1):
    """Create elitist survivor selector.

    Elitist survival always keeps the best `elite_count` individuals from the
    parent population, filling remaining slots with the best offspring.

    Args:
        elite_count: Number of elite parents to preserve. Default is 1.

    Returns:
        A survivor selector function.

    Example:
        >>> selector = elitist_survival(elite_count=2)
        >>> indices = selector(combined_pop, n_survivors=10, parent_size=5)
    """
    if elite_count <= 0:
        raise ValueError(f"elite_count must be positive, got {elite_count}")

    def selector(
        pop: Population,
        n_survivors: int,
        **kwargs: int,
    ) -> np.ndarray:
        """Select survivors using elitist selection.

        Args:
            pop: Combined population (parents first, then offspring).
            n_survivors: Number of survivors to select for the next generation.
            **kwargs: Required keyword arguments:
                - parent_size: Number of parent individuals in the combined population.

        Returns:
            Array of shape (n_survivors,) containing indices of selected
            survivors. Elite parents come first, followed by the best offspring.

        Raises:
            ValueError: If n_survivors is invalid, if parent_size is missing or
                invalid, if elite_count exceeds parent_size or n_survivors, or if
                there are not enough offspring to fill the remaining slots.

        Example:
            >>> x = np.array([[1, 2], [3, 4], [5, 6], [7, 8], [9, 10], [11, 12]])
            >>> fitness = np.array([-2.0, -1.0, -4.0, -3.0, -0.5, -1.5])
            >>> pop = Population(x=x, fitness=fitness)  # 3 parents + 3 offspring
            >>> selector = elitist_survival(elite_count=1)
            >>> selector(pop, n_survivors=3, parent_size=3)
            array([1, 4, 5])
        """
        if n_survivors <= 0:
            raise ValueError(f"n_survivors must be positive, got {n_survivors}")
        if n_survivors > len(pop):
            raise ValueError(f"n_survivors ({n_survivors}) cannot exceed population size ({len(pop)})")

        parent_size = kwargs.get("parent_size")
        if parent_size is None:
            raise ValueError(
                "elitist survival requires 'parent_size' kwarg to distinguish "
                "parents from offspring in the combined population"
            )
        if not isinstance(parent_size, (int, np.integer)):
            raise ValueError(f"parent_size must be an integer, got {type(parent_size)}")
        if parent_size <= 0:
            raise ValueError(f"parent_size must be positive, got {parent_size}")
        if parent_size > len(pop):
            raise ValueError(f"parent_size ({parent_size}) cannot exceed population size ({len(pop)})")

        if elite_count > parent_size:
            raise ValueError(f"elite_count ({elite_count}) cannot exceed parent_size ({parent_size})")
        if elite_count > n_survivors:
            raise ValueError(f"elite_count ({elite_count}) cannot exceed n_survivors ({n_survivors})")

        n_offspring_needed = n_survivors - elite_count
        n_offspring = len(pop) - parent_size
        if n_offspring_needed > n_offspring:
            raise ValueError(
                f"need {n_offspring_needed} offspring to fill survivors, population has {n_offspring}"
            )

        parent_fitness = pop.fitness[:parent_size]
        offspring_fitness = pop.fitness[parent_size:]

        elite_indices = np.argsort(-parent_fitness, kind="stable")[:elite_count].astype(np.intp)
        if n_offspring_needed == 0:
            return elite_indices

        # Map offspring positions back to indices in the combined population
        offspring_sorted = np.argsort(-offspring_fitness, kind="stable")
        best_offspring_indices = (offspring_sorted[:n_offspring_needed] + parent_size).astype(np.intp)

        return np.concatenate([elite_indices, best_offspring_indices])

    return selector
