"""
World: the animals and food of one generation on the unit torus.

Renderers get a WorldView, an immutable copy of what they need to draw;
they never see the live objects.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple
import numpy as np

from .agents import Animal
from .eye import Eye


def wrap(values):
    """Wrap coordinates onto [0, 1)."""
    out = np.mod(values, 1.0)
    # mod of a tiny negative number rounds up to exactly 1.0
    return np.where(out >= 1.0, 0.0, out)


@dataclass(eq=False)
class Food:
    position: np.ndarray

    @classmethod
    def random(cls, rng: np.random.Generator) -> "Food":
        return cls(position=rng.random(2))


@dataclass(frozen=True)
class AnimalView:
    x: float
    y: float
    rotation: float


@dataclass(frozen=True)
class FoodView:
    x: float
    y: float


@dataclass(frozen=True)
class WorldView:
    animals: Tuple[AnimalView, ...]
    food: Tuple[FoodView, ...]


class World:
    def __init__(self, animals: List[Animal], food: List[Food]):
        self.animals = animals
        self.food = food

    @classmethod
    def random(cls, rng: np.random.Generator, n_animals: int, n_food: int, eye: Optional[Eye] = None) -> "World":
        animals = [Animal.random(rng, eye) for _ in range(n_animals)]
        food = [Food.random(rng) for _ in range(n_food)]
        return cls(animals, food)

    def food_positions(self) -> np.ndarray:
        if not self.food:
            return np.empty((0, 2), dtype=np.float64)
        return np.stack([f.position for f in self.food])

    def snapshot(self) -> WorldView:
        return WorldView(
            animals=tuple(
                AnimalView(float(a.position[0]), float(a.position[1]), float(a.rotation))
                for a in self.animals
            ),
            food=tuple(FoodView(float(f.position[0]), float(f.position[1])) for f in self.food),
        )
