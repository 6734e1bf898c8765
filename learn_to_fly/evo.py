"""
Genetic algorithm: roulette-wheel selection, uniform crossover and
coin-flip signed mutation over flat gene vectors.

Strategies are plain objects bound once into a GeneticAlgorithm. Every
method that draws randomness takes the generator explicitly.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterator, List, Protocol, Sequence, TypeVar
import numpy as np
from loguru import logger

from .errors import CrossoverError, EmptyPopulation, SelectionError, ValidationError


@dataclass(eq=False)
class Chromosome:
    genes: np.ndarray

    def __post_init__(self):
        self.genes = np.asarray(self.genes, dtype=np.float64).ravel()

    def __len__(self) -> int:
        return self.genes.shape[0]

    def __iter__(self) -> Iterator[float]:
        return iter(self.genes.tolist())

    def __getitem__(self, idx):
        return self.genes[idx]


class Individual(Protocol):
    fitness: float
    chromosome: Chromosome


I = TypeVar("I", bound=Individual)


class SelectionMethod(ABC):
    @abstractmethod
    def select(self, rng: np.random.Generator, population: Sequence[I]) -> I:
        ...


class CrossoverMethod(ABC):
    @abstractmethod
    def mix(self, rng: np.random.Generator, a: Chromosome, b: Chromosome) -> Chromosome:
        ...


class MutationMethod(ABC):
    @abstractmethod
    def mutate(self, rng: np.random.Generator, child: Chromosome) -> None:
        ...


class RouletteWheelSelection(SelectionMethod):
    """Fitness-proportionate pick: P(i) = fitness_i / sum(fitness)."""

    def select(self, rng: np.random.Generator, population: Sequence[I]) -> I:
        if len(population) == 0:
            raise EmptyPopulation("cannot select from an empty population")

        fit = np.array([float(ind.fitness) for ind in population], dtype=np.float64)
        if not np.all(np.isfinite(fit)) or np.any(fit < 0):
            raise SelectionError(f"fitness values must be finite and non-negative: {fit.tolist()}")
        wheel = np.cumsum(fit)
        total = wheel[-1]
        if total <= 0:
            raise SelectionError("all fitness values are zero, no weighted pick possible")

        spin = rng.random() * total
        idx = int(np.searchsorted(wheel, spin, side="right"))
        return population[min(idx, len(population) - 1)]


class UniformCrossover(CrossoverMethod):
    def mix(self, rng: np.random.Generator, a: Chromosome, b: Chromosome) -> Chromosome:
        if len(a) != len(b):
            raise CrossoverError(f"parents differ in length: {len(a)} != {len(b)}")
        take_a = rng.random(len(a)) < 0.5
        return Chromosome(np.where(take_a, a.genes, b.genes))


class GaussianMutation(MutationMethod):
    """
    With probability `chance` per gene, add +/- coeff * U(0, 1) to it.
    The sign is a fair coin per gene.
    """

    def __init__(self, chance: float, coeff: float):
        if not 0.0 <= chance <= 1.0:
            raise ValidationError(f"mutation chance must be in [0, 1], got {chance}")
        self.chance = float(chance)
        self.coeff = float(coeff)

    def mutate(self, rng: np.random.Generator, child: Chromosome) -> None:
        n = len(child)
        mask = rng.random(n) < self.chance
        sign = np.where(rng.random(n) < 0.5, -1.0, 1.0)
        delta = sign * self.coeff * rng.random(n)
        child.genes[mask] += delta[mask]


class GeneticAlgorithm:
    def __init__(self, selection: SelectionMethod, crossover: CrossoverMethod, mutation: MutationMethod):
        self.selection = selection
        self.crossover = crossover
        self.mutation = mutation

    def evolve(
        self,
        population: Sequence[I],
        rng: np.random.Generator,
        create: Callable[[Chromosome], I],
    ) -> List[I]:
        """
        Breed a population of the same size. Parents are drawn independently
        (with replacement); `create` turns each child chromosome back into an
        individual. Any failure aborts the whole call.
        """
        if len(population) == 0:
            raise EmptyPopulation("cannot evolve an empty population")

        children: List[I] = []
        for _ in range(len(population)):
            parent_a = self.selection.select(rng, population).chromosome
            parent_b = self.selection.select(rng, population).chromosome
            child = self.crossover.mix(rng, parent_a, parent_b)
            self.mutation.mutate(rng, child)
            children.append(create(child))

        logger.debug("[GeneticAlgorithm] Bred {} individual(s)", len(children))
        return children
