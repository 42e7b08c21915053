"""Variation operators for real-valued genotypes.

All operators take the caller's random generator explicitly so that an
algorithm instance seeded once reproduces its whole run.
"""

from evo_arena.operators.crossover import arithmetic_crossover, binomial_crossover
from evo_arena.operators.differential import DE_STRATEGIES, de_mutant, pick_donors
from evo_arena.operators.mutation import MIN_STEP_SIZE, gaussian_mutation, self_adaptive_mutation

__all__ = [
    "DE_STRATEGIES",
    "MIN_STEP_SIZE",
    "arithmetic_crossover",
    "binomial_crossover",
    "de_mutant",
    "gaussian_mutation",
    "pick_donors",
    "self_adaptive_mutation",
]
