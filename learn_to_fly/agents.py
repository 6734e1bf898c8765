"""
Animals: a body (position, heading, speed, score) steered by a brain that
reads an eye. Only the brain is heritable; AnimalIndividual is the view of
an animal the genetic algorithm breeds from.
"""
from dataclasses import dataclass, field
from typing import List, Optional
import numpy as np

from .evo import Chromosome
from .eye import Eye
from .network import NeuralNetwork

INITIAL_SPEED = 0.002


def brain_topology(eye: Eye) -> List[int]:
    # vision cells -> hidden -> [speed delta, rotation delta]
    return [eye.cells, 2 * eye.cells, 2]


def random_position(rng: np.random.Generator) -> np.ndarray:
    return rng.random(2)


def random_rotation(rng: np.random.Generator) -> float:
    return float(rng.uniform(0.0, 2 * np.pi))


@dataclass(eq=False)
class Animal:
    position: np.ndarray
    rotation: float
    brain: NeuralNetwork
    eye: Eye = field(default_factory=Eye)
    speed: float = INITIAL_SPEED
    score: int = 0

    @classmethod
    def random(cls, rng: np.random.Generator, eye: Optional[Eye] = None) -> "Animal":
        eye = eye or Eye()
        brain = NeuralNetwork.random(brain_topology(eye), rng)
        return cls(position=random_position(rng), rotation=random_rotation(rng), brain=brain, eye=eye)

    @classmethod
    def from_chromosome(cls, chromosome: Chromosome, rng: np.random.Generator, eye: Optional[Eye] = None) -> "Animal":
        """Newborn with an inherited brain, a fresh body and zero score."""
        eye = eye or Eye()
        brain = NeuralNetwork.from_weights(brain_topology(eye), chromosome.genes)
        return cls(position=random_position(rng), rotation=random_rotation(rng), brain=brain, eye=eye)

    def as_chromosome(self) -> Chromosome:
        return Chromosome(self.brain.weights())

    def heading(self) -> np.ndarray:
        return np.array([np.cos(self.rotation), np.sin(self.rotation)])


@dataclass(eq=False)
class AnimalIndividual:
    fitness: float
    chromosome: Chromosome

    @classmethod
    def from_animal(cls, animal: Animal) -> "AnimalIndividual":
        return cls(fitness=float(animal.score), chromosome=animal.as_chromosome())

    @classmethod
    def create(cls, chromosome: Chromosome) -> "AnimalIndividual":
        return cls(fitness=0.0, chromosome=chromosome)

    def into_animal(self, rng: np.random.Generator, eye: Optional[Eye] = None) -> Animal:
        return Animal.from_chromosome(self.chromosome, rng, eye)
