"""
Simulation: owns the world and the genetic algorithm and advances them.

One `step` runs movement, food collisions and brains, in that order. Every
`generation_length` steps the population is replaced by its offspring and
the step returns the Statistics of the generation that just ended.
"""
from dataclasses import dataclass
from typing import List, Optional
import numpy as np
from loguru import logger

from .agents import Animal, AnimalIndividual
from .errors import ValidationError
from .evo import GaussianMutation, GeneticAlgorithm, RouletteWheelSelection, UniformCrossover
from .eye import CELLS, FOV_ANGLE, FOV_RANGE, Eye
from .stats import Statistics
from .world import World, WorldView, wrap

SPEED_MIN = 0.001
SPEED_MAX = 0.005
# max change per step the brain can apply
SPEED_ACCEL = 0.2
ROTATION_ACCEL = np.pi / 4
FOOD_CAPTURE_RADIUS = 0.01


@dataclass(frozen=True)
class SimulationConfig:
    animals: int = 40
    foods: int = 60
    mutation_chance: float = 0.01
    mutation_coeff: float = 0.3
    generation_length: int = 2500
    fov_range: float = FOV_RANGE
    fov_angle: float = FOV_ANGLE
    cells: int = CELLS

    def __post_init__(self):
        if self.animals < 0 or self.foods < 0:
            raise ValidationError(f"counts must be non-negative, got animals={self.animals} foods={self.foods}")
        if not 0.0 <= self.mutation_chance <= 1.0:
            raise ValidationError(f"mutation chance must be in [0, 1], got {self.mutation_chance}")
        if self.generation_length <= 0:
            raise ValidationError(f"generation length must be positive, got {self.generation_length}")

    def eye(self) -> Eye:
        return Eye(fov_range=self.fov_range, fov_angle=self.fov_angle, cells=self.cells)


class Simulation:
    def __init__(self, config: SimulationConfig, world: World, ga: GeneticAlgorithm):
        self.config = config
        self.eye = config.eye()
        self._world = world
        self.ga = ga
        self.age = 0
        self.generation = 0

    @classmethod
    def from_config(cls, rng: np.random.Generator, config: SimulationConfig) -> "Simulation":
        eye = config.eye()
        ga = GeneticAlgorithm(
            RouletteWheelSelection(),
            UniformCrossover(),
            GaussianMutation(config.mutation_chance, config.mutation_coeff),
        )
        world = World.random(rng, config.animals, config.foods, eye)
        logger.info(
            "[Simulation] New world: {} animal(s), {} food, generation length {}",
            config.animals, config.foods, config.generation_length,
        )
        return cls(config, world, ga)

    @classmethod
    def random(
        cls,
        rng: np.random.Generator,
        animals: int,
        foods: int,
        mutation_chance: float,
        mutation_coeff: float,
        generation_length: int,
    ) -> "Simulation":
        config = SimulationConfig(
            animals=animals,
            foods=foods,
            mutation_chance=mutation_chance,
            mutation_coeff=mutation_coeff,
            generation_length=generation_length,
        )
        return cls.from_config(rng, config)

    @staticmethod
    def reset(rng: np.random.Generator, config: SimulationConfig) -> "Simulation":
        """Start over with a new config; evolved brains are discarded."""
        return Simulation.from_config(rng, config)

    def world(self) -> WorldView:
        return self._world.snapshot()

    # ---------------------------------------------------------------------

    def step(self, rng: np.random.Generator) -> Optional[Statistics]:
        self.age += 1
        self._process_movements()
        self._process_collisions(rng)
        self._process_brains()

        if self.age >= self.config.generation_length:
            return self._evolve(rng)
        return None

    def train(self, rng: np.random.Generator) -> Statistics:
        """Step until the current generation ends."""
        while True:
            stats = self.step(rng)
            if stats is not None:
                return stats

    def evolve(self, rng: np.random.Generator) -> None:
        self._evolve(rng)

    # ---------------------------------------------------------------------

    def _process_movements(self) -> None:
        for animal in self._world.animals:
            animal.position = wrap(animal.position + animal.speed * animal.heading())

    def _process_collisions(self, rng: np.random.Generator) -> None:
        if not self._world.food:
            return
        for animal in self._world.animals:
            # positions are re-read per animal: food moved by an earlier animal can be caught again
            rel = self._world.food_positions() - animal.position
            caught = np.flatnonzero(np.hypot(rel[:, 0], rel[:, 1]) < FOOD_CAPTURE_RADIUS)
            for idx in caught:
                self._world.food[idx].position = rng.random(2)
                animal.score += 1

    def _process_brains(self) -> None:
        foods = self._world.food_positions()
        for animal in self._world.animals:
            vision = animal.eye.process_vision(animal.position, animal.rotation, foods)
            d_speed, d_rotation = animal.brain.propagate(vision)
            d_speed = float(np.clip(d_speed, -SPEED_ACCEL, SPEED_ACCEL))
            d_rotation = float(np.clip(d_rotation, -ROTATION_ACCEL, ROTATION_ACCEL))
            animal.speed = float(np.clip(animal.speed + d_speed, SPEED_MIN, SPEED_MAX))
            animal.rotation = animal.rotation + d_rotation

    def _evolve(self, rng: np.random.Generator) -> Statistics:
        population = [AnimalIndividual.from_animal(a) for a in self._world.animals]
        stats = Statistics.from_population(population)

        # nothing is committed until the whole generation is bred
        offspring = self.ga.evolve(population, rng, AnimalIndividual.create)
        animals: List[Animal] = [ind.into_animal(rng, self.eye) for ind in offspring]

        self._world.animals = animals
        self.age = 0
        self.generation += 1
        logger.info("[Simulation] Generation {} done: {}", self.generation, stats)
        return stats
