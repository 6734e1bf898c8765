from collections import Counter
from dataclasses import dataclass

import numpy as np
import pytest

from learn_to_fly.errors import CrossoverError, EmptyPopulation, SelectionError, ValidationError
from learn_to_fly.evo import (
    Chromosome,
    GaussianMutation,
    GeneticAlgorithm,
    RouletteWheelSelection,
    UniformCrossover,
)


@dataclass
class Bird:
    fitness: float
    chromosome: Chromosome

    @classmethod
    def create(cls, chromosome):
        return cls(fitness=0.0, chromosome=chromosome)


def _bird(fitness, genes=(0.0, 0.0, 0.0)):
    return Bird(fitness=fitness, chromosome=Chromosome(np.array(genes, dtype=float)))


def _histogram(seed, population, draws=10_000):
    rng = np.random.default_rng(seed)
    sel = RouletteWheelSelection()
    return Counter(sel.select(rng, population).fitness for _ in range(draws))


def test_roulette_frequencies_follow_fitness():
    population = [_bird(1.0), _bird(2.0), _bird(3.0), _bird(4.0)]
    hist = _histogram(42, population)

    assert sum(hist.values()) == 10_000
    for fitness in (1.0, 2.0, 3.0, 4.0):
        assert hist[fitness] / 10_000 == pytest.approx(fitness / 10.0, abs=0.03)


def test_roulette_histogram_regression():
    population = [_bird(2.0), _bird(1.0), _bird(4.0), _bird(3.0)]
    assert _histogram(7, population, draws=500) == {4.0: 205, 3.0: 157, 1.0: 38, 2.0: 100}


def test_roulette_never_picks_zero_fitness(rng):
    population = [_bird(0.0), _bird(5.0), _bird(0.0)]
    sel = RouletteWheelSelection()
    picks = {id(sel.select(rng, population)) for _ in range(200)}
    assert picks == {id(population[1])}


def test_roulette_rejects_empty_population(rng):
    with pytest.raises(EmptyPopulation):
        RouletteWheelSelection().select(rng, [])


@pytest.mark.parametrize("fitness", [[0.0, 0.0], [0.0], [-1.0, 3.0]])
def test_roulette_rejects_non_positive_weights(rng, fitness):
    with pytest.raises(SelectionError):
        RouletteWheelSelection().select(rng, [_bird(f) for f in fitness])


def test_uniform_crossover_takes_each_gene_from_a_parent(rng):
    a = Chromosome(np.arange(0.0, 100.0))
    b = Chromosome(-np.arange(0.0, 100.0) - 1.0)

    child = UniformCrossover().mix(rng, a, b)

    assert len(child) == 100
    from_a = sum(1 for i, g in enumerate(child) if g == a[i])
    from_b = sum(1 for i, g in enumerate(child) if g == b[i])
    assert from_a + from_b == 100
    # both parents contribute
    assert 0 < from_a < 100


def test_uniform_crossover_rejects_length_mismatch(rng):
    with pytest.raises(CrossoverError):
        UniformCrossover().mix(rng, Chromosome(np.zeros(3)), Chromosome(np.zeros(4)))


@pytest.mark.parametrize("chance", [-0.1, 1.5])
def test_mutation_chance_must_be_a_probability(chance):
    with pytest.raises(ValidationError):
        GaussianMutation(chance, 0.5)


def test_mutation_with_zero_chance_changes_nothing(rng):
    child = Chromosome(np.linspace(-1.0, 1.0, 50))
    before = child.genes.copy()

    GaussianMutation(0.0, 10.0).mutate(rng, child)

    assert np.array_equal(child.genes, before)


def test_mutation_with_full_chance_moves_every_gene_within_coeff(rng):
    child = Chromosome(np.zeros(200))

    GaussianMutation(1.0, 0.5).mutate(rng, child)

    assert np.all(np.abs(child.genes) <= 0.5)
    assert np.count_nonzero(child.genes) == 200
    # both signs show up
    assert np.any(child.genes > 0) and np.any(child.genes < 0)


def _ga(chance=0.5, coeff=0.1):
    return GeneticAlgorithm(RouletteWheelSelection(), UniformCrossover(), GaussianMutation(chance, coeff))


def test_evolve_keeps_population_size(rng):
    population = [_bird(1.0, [0.0, 0.0]), _bird(2.0, [1.0, 1.0]), _bird(3.0, [2.0, 2.0])]

    children = _ga().evolve(population, rng, Bird.create)

    assert len(children) == len(population)
    assert all(len(c.chromosome) == 2 for c in children)


def test_evolve_without_mutation_only_mixes_parent_genes(rng):
    population = [_bird(1.0, [1.0, 2.0, 3.0]), _bird(1.0, [4.0, 5.0, 6.0])]

    children = _ga(chance=0.0).evolve(population, rng, Bird.create)

    for child in children:
        for i, gene in enumerate(child.chromosome):
            assert gene in (population[0].chromosome[i], population[1].chromosome[i])


def test_evolve_rejects_empty_population(rng):
    with pytest.raises(EmptyPopulation):
        _ga().evolve([], rng, Bird.create)


def test_evolve_propagates_selection_failure(rng):
    created = []

    def create(chromosome):
        created.append(chromosome)
        return Bird.create(chromosome)

    with pytest.raises(SelectionError):
        _ga().evolve([_bird(0.0), _bird(0.0)], rng, create)
    assert created == []


def test_evolve_propagates_crossover_failure(rng):
    population = [_bird(1.0, [0.0, 0.0]), _bird(1.0, [0.0, 0.0, 0.0])]
    # with two equally fit parents of different length a mismatch turns up quickly
    with pytest.raises(CrossoverError):
        for _ in range(20):
            _ga().evolve(population, rng, Bird.create)
