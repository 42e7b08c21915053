"""Recombination operators."""

import numpy as np


def arithmetic_crossover(
    p1: np.ndarray,
    p2: np.ndarray,
    rng: np.random.Generator,
) -> tuple[np.ndarray, np.ndarray]:
    """Blend two parents gene by gene into a complementary pair of children.

    For each gene an independent alpha ~ U(0, 1) is drawn and

        c1 = alpha * p1 + (1 - alpha) * p2
        c2 = (1 - alpha) * p1 + alpha * p2

    so every child gene lies between the two parent genes and c1 + c2 = p1 + p2.

    Args:
        p1: First parent, shape (dimension,).
        p2: Second parent, shape (dimension,).
        rng: Random number generator.

    Returns:
        Tuple (c1, c2) of new arrays.

    Example:
        >>> c1, c2 = arithmetic_crossover(np.zeros(3), np.ones(3), rng)
        >>> np.allclose(c1 + c2, 1.0)
        True
    """
    alpha = rng.random(p1.shape[0])
    c1 = alpha * p1 + (1.0 - alpha) * p2
    c2 = (1.0 - alpha) * p1 + alpha * p2
    return c1, c2


def binomial_crossover(
    target: np.ndarray,
    mutant: np.ndarray,
    crossover_rate: float,
    rng: np.random.Generator,
) -> np.ndarray:
    """Differential evolution binomial crossover.

    Each gene comes from the mutant with probability crossover_rate. One
    randomly chosen gene always comes from the mutant, so the trial differs
    from the target whenever the mutant does.

    Args:
        target: Target vector, shape (dimension,).
        mutant: Mutant vector, shape (dimension,).
        crossover_rate: Per-gene probability of taking the mutant's value.
        rng: Random number generator.

    Returns:
        The trial vector (new array).
    """
    n_vars = target.shape[0]
    mask = rng.random(n_vars) < crossover_rate
    mask[rng.integers(n_vars)] = True
    return np.where(mask, mutant, target)
