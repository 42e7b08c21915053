"""Population data structures shared by all algorithms.

This module provides the core data structures for representing candidate
solutions:

- Individual: A genotype paired with its maximize-form fitness
- Population: A struct-of-arrays representation of multiple individuals

Both classes are immutable (frozen dataclasses). Arrays are copied on
construction, so a Population handed out by an algorithm is a snapshot that
later steps cannot change.
"""

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class Individual:
    """A single candidate solution.

    Attributes:
        genotype: Real-valued decision vector, shape (dimension,).
        fitness: Fitness in maximize form (higher is better).

    Example:
        >>> ind = Individual(genotype=np.array([1.0, 2.0]), fitness=-5.0)
        >>> ind.genotype
        array([1., 2.])
    """

    genotype: np.ndarray
    fitness: float

    def __post_init__(self) -> None:
        """Validate the genotype and copy it for immutability.

        Raises:
            ValueError: If genotype is not one-dimensional.
        """
        genotype = np.array(self.genotype, dtype=np.float64)
        if genotype.ndim != 1:
            raise ValueError(f"genotype must be 1D, got shape {genotype.shape}")
        genotype.setflags(write=False)
        object.__setattr__(self, "genotype", genotype)
        object.__setattr__(self, "fitness", float(self.fitness))


@dataclass(frozen=True, eq=False)
class Population:
    """Immutable struct-of-arrays representation of a population.

    Attributes:
        x: Genotypes of all individuals, shape (n, dimension).
        fitness: Maximize-form fitness values, shape (n,).

    Example:
        >>> x = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        >>> pop = Population(x=x, fitness=np.array([-5.0, -25.0, -61.0]))
        >>> len(pop)
        3
        >>> pop.dimension
        2
        >>> pop.best_index
        0
    """

    x: np.ndarray
    fitness: np.ndarray

    def __post_init__(self) -> None:
        """Validate shapes and copy arrays for immutability.

        Raises:
            TypeError: If x or fitness is not a numpy array.
            ValueError: If array shapes are inconsistent or invalid.
        """
        if not isinstance(self.x, np.ndarray):
            raise TypeError(f"x must be a numpy array, got {type(self.x).__name__}")
        if self.x.ndim != 2:
            raise ValueError(f"x must be 2D, got shape {self.x.shape}")
        if not isinstance(self.fitness, np.ndarray):
            raise TypeError(f"fitness must be a numpy array, got {type(self.fitness).__name__}")
        if self.fitness.ndim != 1:
            raise ValueError(f"fitness must be 1D, got shape {self.fitness.shape}")
        if self.fitness.shape[0] != self.x.shape[0]:
            raise ValueError(
                f"fitness has {self.fitness.shape[0]} elements, expected {self.x.shape[0]} to match x"
            )

        x = self.x.astype(np.float64, copy=True)
        fitness = self.fitness.astype(np.float64, copy=True)
        x.setflags(write=False)
        fitness.setflags(write=False)
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "fitness", fitness)

    @classmethod
    def from_individuals(cls, individuals: list[Individual]) -> "Population":
        """Build a population from a non-empty list of individuals."""
        if not individuals:
            raise ValueError("cannot build a population from an empty list")
        return cls(
            x=np.stack([ind.genotype for ind in individuals]),
            fitness=np.array([ind.fitness for ind in individuals]),
        )

    def __len__(self) -> int:
        """Return the number of individuals in the population."""
        return self.x.shape[0]

    def __getitem__(self, idx: int) -> Individual:
        """Get a single individual.

        Args:
            idx: Index of the individual (supports negative indexing).

        Returns:
            Individual for the specified slot.

        Raises:
            TypeError: If idx is not an integer.
            IndexError: If idx is out of bounds.
        """
        if not isinstance(idx, (int, np.integer)):
            raise TypeError(f"indices must be integers, got {type(idx).__name__}")

        n = len(self)
        original_idx = idx
        if idx < 0:
            idx = n + idx
        if idx < 0 or idx >= n:
            raise IndexError(f"index {original_idx} is out of bounds for population with {n} individuals")

        return Individual(genotype=self.x[idx], fitness=self.fitness[idx])

    def __iter__(self) -> Iterator[Individual]:
        for i in range(len(self)):
            yield self[i]

    @property
    def dimension(self) -> int:
        """Number of decision variables per individual."""
        return self.x.shape[1]

    @property
    def best_index(self) -> int:
        """Index of the individual with the highest fitness (first on ties)."""
        return int(np.argmax(self.fitness))

    def best(self) -> Individual:
        """Return the individual with the highest fitness."""
        return self[self.best_index]

    def individuals(self) -> list[Individual]:
        """Return the population as a list of Individual objects."""
        return list(self)
