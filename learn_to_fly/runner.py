"""
Runner: headless training loop.
This is the single entrypoint you can call from a script or notebook.
"""
from typing import List, Optional
import numpy as np
from tqdm import trange
from loguru import logger

from .simulation import Simulation, SimulationConfig
from .stats import Statistics


def train(generations: int = 20, seed: int = 7, config: Optional[SimulationConfig] = None) -> List[Statistics]:
    rng = np.random.default_rng(seed)
    sim = Simulation.from_config(rng, config or SimulationConfig())
    history: List[Statistics] = []
    for _ in trange(generations, desc="train"):
        history.append(sim.train(rng))
    if history:
        best = max(history, key=lambda s: s.avg_score)
        logger.info("[Runner] Best generation average: {:.2f}", best.avg_score)
    return history
