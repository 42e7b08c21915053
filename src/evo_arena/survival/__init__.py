"""Survival strategies for evolutionary algorithms."""

from evo_arena.survival.elitist import elitist_survival
from evo_arena.survival.truncation import truncation_survival

__all__ = ["elitist_survival", "truncation_survival"]
