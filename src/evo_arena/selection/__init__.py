"""Parent selection strategies for the genetic algorithm."""

from evo_arena.protocols import ParentSelector
from evo_arena.selection.rank import linear_rank
from evo_arena.selection.roulette import roulette_wheel
from evo_arena.selection.tournament import fitness_tournament

SELECTIONS = {
    "tournament": fitness_tournament,
    "roulette": roulette_wheel,
    "rank": linear_rank,
}


def make_selector(method: str, tournament_size: int = 3) -> ParentSelector:
    """Build the parent selector named by a GA ``selection_method``.

    Raises:
        KeyError: If the method is unknown. Error message lists the available methods.
    """
    if method not in SELECTIONS:
        available = ", ".join(sorted(SELECTIONS))
        raise KeyError(f"Selection method '{method}' not found. Available methods: {available}")
    if method == "tournament":
        return fitness_tournament(tournament_size=tournament_size)
    return SELECTIONS[method]()


__all__ = ["SELECTIONS", "fitness_tournament", "linear_rank", "make_selector", "roulette_wheel"]
