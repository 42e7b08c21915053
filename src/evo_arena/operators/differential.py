"""Differential evolution mutation strategies.

Each strategy builds a mutant from a base vector and one or two scaled
difference vectors:

- rand/1: r1 + F (r2 - r3)
- best/1: best + F (r1 - r2)
- rand/2: r1 + F (r2 - r3) + F (r4 - r5)
- best/2: best + F (r1 - r2) + F (r3 - r4)

Donors r1..r5 are distinct population members different from the target.
"""

import numpy as np

from evo_arena.params import DE_STRATEGY_DONORS


def _rand_1(donors: np.ndarray, best: np.ndarray, f: float) -> np.ndarray:
    return donors[0] + f * (donors[1] - donors[2])


def _best_1(donors: np.ndarray, best: np.ndarray, f: float) -> np.ndarray:
    return best + f * (donors[0] - donors[1])


def _rand_2(donors: np.ndarray, best: np.ndarray, f: float) -> np.ndarray:
    return donors[0] + f * (donors[1] - donors[2]) + f * (donors[3] - donors[4])


def _best_2(donors: np.ndarray, best: np.ndarray, f: float) -> np.ndarray:
    return best + f * (donors[0] - donors[1]) + f * (donors[2] - donors[3])


DE_STRATEGIES = {
    "rand/1": _rand_1,
    "best/1": _best_1,
    "rand/2": _rand_2,
    "best/2": _best_2,
}


def pick_donors(
    n: int,
    target: int,
    count: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Draw ``count`` distinct indices from range(n), excluding ``target``.

    Raises:
        ValueError: If fewer than count indices are available.
    """
    if count > n - 1:
        raise ValueError(f"need {count} distinct donors besides the target, population has {n}")
    candidates = np.delete(np.arange(n), target)
    return rng.choice(candidates, size=count, replace=False)


def de_mutant(
    strategy: str,
    x: np.ndarray,
    target: int,
    best: np.ndarray,
    differential_weight: float,
    rng: np.random.Generator,
) -> np.ndarray:
    """Build the mutant vector for one target.

    Args:
        strategy: One of DE_STRATEGIES.
        x: Generation-start population genotypes, shape (n, dimension).
        target: Index of the target vector in x.
        best: Best genotype found so far, used by the best/* strategies.
        differential_weight: Scale factor F.
        rng: Random number generator.

    Returns:
        The mutant vector (not yet repaired).

    Raises:
        KeyError: If the strategy is unknown.
        ValueError: If the population is too small for the strategy.
    """
    if strategy not in DE_STRATEGIES:
        available = ", ".join(sorted(DE_STRATEGIES))
        raise KeyError(f"DE strategy '{strategy}' not found. Available strategies: {available}")
    donors = x[pick_donors(x.shape[0], target, DE_STRATEGY_DONORS[strategy], rng)]
    return DE_STRATEGIES[strategy](donors, best, differential_weight)
