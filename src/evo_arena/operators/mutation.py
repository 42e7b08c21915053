"""Mutation operators."""

import numpy as np

MIN_STEP_SIZE = 1e-10


def gaussian_mutation(
    x: np.ndarray,
    rate: float,
    sigma: np.ndarray,
    lower: np.ndarray,
    upper: np.ndarray,
    rng: np.random.Generator,
) -> np.ndarray:
    """Add Gaussian noise to each gene with probability ``rate``.

    Args:
        x: Genotype, shape (dimension,).
        rate: Per-gene mutation probability.
        sigma: Standard deviation per gene, shape (dimension,) or scalar.
        lower: Lower bounds, shape (dimension,).
        upper: Upper bounds, shape (dimension,).
        rng: Random number generator.

    Returns:
        New genotype clipped to [lower, upper].

    Example:
        >>> ranges = problem.ranges
        >>> child = gaussian_mutation(x, 0.1, 0.1 * ranges, problem.lower, problem.upper, rng)
    """
    n_vars = x.shape[0]
    mask = rng.random(n_vars) < rate
    noise = rng.normal(0.0, 1.0, n_vars) * sigma
    return np.clip(np.where(mask, x + noise, x), lower, upper)


def self_adaptive_mutation(
    x: np.ndarray,
    step_sizes: np.ndarray,
    lower: np.ndarray,
    upper: np.ndarray,
    rng: np.random.Generator,
) -> tuple[np.ndarray, np.ndarray]:
    """Log-normal self-adaptive mutation for evolution strategies.

    The step sizes are first scaled by a single factor exp(tau * N(0, 1)) with
    tau = 1 / sqrt(dimension) and floored at MIN_STEP_SIZE. Each gene is then
    moved by its own step size times an independent N(0, 1) draw.

    Args:
        x: Parent genotype, shape (dimension,).
        step_sizes: Parent step sizes, shape (dimension,).
        lower: Lower bounds, shape (dimension,).
        upper: Upper bounds, shape (dimension,).
        rng: Random number generator.

    Returns:
        Tuple (child, child_step_sizes). The child is clipped to the bounds.
    """
    n_vars = x.shape[0]
    tau = 1.0 / np.sqrt(n_vars)
    new_steps = np.maximum(step_sizes * np.exp(tau * rng.normal()), MIN_STEP_SIZE)
    child = x + new_steps * rng.normal(0.0, 1.0, n_vars)
    return np.clip(child, lower, upper), new_steps
