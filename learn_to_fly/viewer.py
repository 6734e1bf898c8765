"""
Viewer: live matplotlib window for a running simulation.

The viewer is a host, not part of the engine: it reads one WorldView per
frame and draws a triangle per animal and a dot per food item.

Controls:
  R = rebuild the simulation from scratch (evolved brains are lost)
  E = force a generation boundary now
  +/- = more / fewer steps per frame
"""
import time
from typing import Optional
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import PolyCollection
from matplotlib.ticker import NullLocator
from loguru import logger

from .simulation import Simulation, SimulationConfig
from .world import WorldView

BIRD_SIZE = 0.012


def _triangles(view: WorldView) -> np.ndarray:
    """One (3, 2) triangle per animal, tip pointing along its rotation."""
    if not view.animals:
        return np.empty((0, 3, 2))
    xy = np.array([[a.x, a.y] for a in view.animals])
    rot = np.array([a.rotation for a in view.animals])
    tris = []
    for angle, scale in ((0.0, 1.0), (2 * np.pi / 3, 0.6), (-2 * np.pi / 3, 0.6)):
        a = rot + angle
        tris.append(xy + BIRD_SIZE * scale * np.stack([np.cos(a), np.sin(a)], axis=1))
    return np.stack(tris, axis=1)


def _food_xy(view: WorldView) -> np.ndarray:
    if not view.food:
        return np.empty((0, 2))
    return np.array([[f.x, f.y] for f in view.food])


def run_live(
    config: Optional[SimulationConfig] = None,
    seed: int = 21,
    fps: int = 30,
    steps_per_frame: int = 1,
) -> None:
    config = config or SimulationConfig()
    rng = np.random.default_rng(seed)
    sim = Simulation.from_config(rng, config)

    fig, ax = plt.subplots(figsize=(6, 6))
    try: fig.canvas.manager.set_window_title("Learn to Fly")
    except AttributeError: pass

    ax.set_facecolor("#1e1e1e")
    ax.set_xlim(0, 1); ax.set_ylim(0, 1); ax.set_aspect("equal")
    ax.xaxis.set_major_locator(NullLocator()); ax.yaxis.set_major_locator(NullLocator())

    view = sim.world()
    birds = PolyCollection(_triangles(view), facecolors="#66bb6a", edgecolors="none")
    ax.add_collection(birds)
    food = ax.scatter(*_food_xy(view).T, s=12, c="#ef5350")
    hud = ax.text(0.01, 0.99, "", color="white", fontsize=8, va="top", transform=ax.transAxes)

    last_stats = None
    speed = max(1, int(steps_per_frame))
    delay = 1.0 / max(1, fps)

    def on_key(ev):
        nonlocal sim, last_stats, speed
        if ev.key in ("r", "R"):
            sim = Simulation.reset(rng, config)
            last_stats = None
        elif ev.key in ("e", "E"):
            sim.evolve(rng)
        elif ev.key in ("+", "="):
            speed = min(500, speed * 2)
        elif ev.key in ("-", "_"):
            speed = max(1, speed // 2)

    fig.canvas.mpl_connect("key_press_event", on_key)
    plt.tight_layout(); plt.pause(0.001)

    while plt.fignum_exists(fig.number):
        for _ in range(speed):
            stats = sim.step(rng)
            if stats is not None:
                last_stats = stats

        view = sim.world()
        birds.set_verts(_triangles(view))
        food.set_offsets(_food_xy(view))
        text = f"gen {sim.generation}  age {sim.age}/{config.generation_length}  x{speed}"
        if last_stats is not None:
            text += f"\nlast: {last_stats}"
        hud.set_text(text)

        plt.pause(0.001); time.sleep(delay)

    logger.info("[Viewer] Closed after {} generation(s)", sim.generation)
    plt.close(fig)
