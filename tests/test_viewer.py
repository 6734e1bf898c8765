import numpy as np
import pytest

import matplotlib
matplotlib.use("Agg")

from learn_to_fly.viewer import BIRD_SIZE, _food_xy, _triangles
from learn_to_fly.world import AnimalView, FoodView, WorldView


def test_triangle_tip_points_along_rotation():
    view = WorldView(animals=(AnimalView(0.5, 0.5, np.pi / 2),), food=())

    tris = _triangles(view)

    assert tris.shape == (1, 3, 2)
    assert tris[0, 0].tolist() == pytest.approx([0.5, 0.5 + BIRD_SIZE])


def test_empty_world_draws_nothing():
    view = WorldView(animals=(), food=())
    assert _triangles(view).shape == (0, 3, 2)
    assert _food_xy(view).shape == (0, 2)


def test_food_coordinates():
    view = WorldView(animals=(), food=(FoodView(0.1, 0.2), FoodView(0.3, 0.4)))
    assert _food_xy(view).tolist() == [[0.1, 0.2], [0.3, 0.4]]
