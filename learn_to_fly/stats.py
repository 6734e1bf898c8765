"""
Per-generation fitness summary.
"""
from dataclasses import dataclass
from typing import Sequence

from .evo import Individual


@dataclass(frozen=True)
class Statistics:
    min_score: float
    avg_score: float
    max_score: float

    @classmethod
    def from_population(cls, population: Sequence[Individual]) -> "Statistics":
        if not population:
            return cls(0.0, 0.0, 0.0)
        scores = [ind.fitness for ind in population]
        return cls(
            min_score=min(scores),
            avg_score=sum(scores) / len(scores),
            max_score=max(scores),
        )

    def __str__(self) -> str:
        return f"min={self.min_score:.2f}, max={self.max_score:.2f}, avg={self.avg_score:.2f}"
