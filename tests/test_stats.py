from dataclasses import dataclass

import pytest

from learn_to_fly.stats import Statistics


@dataclass
class Scored:
    fitness: float
    chromosome: object = None


def test_from_population():
    stats = Statistics.from_population([Scored(1.0), Scored(4.0), Scored(7.0)])

    assert stats.min_score == 1.0
    assert stats.max_score == 7.0
    assert stats.avg_score == pytest.approx(4.0)


def test_empty_population_is_all_zero():
    assert Statistics.from_population([]) == Statistics(0.0, 0.0, 0.0)


def test_str():
    assert str(Statistics(0.0, 1.5, 3.0)) == "min=0.00, max=3.00, avg=1.50"
