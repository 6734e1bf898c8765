"""
Eye: a stateless foveated sensor. The field of view is a cone of
`fov_angle` radians and `fov_range` length around the heading, split into
`cells` equal slices. Every visible point adds its closeness to the slice it
falls in.
"""
from dataclasses import dataclass
import numpy as np

from .errors import ValidationError

FOV_RANGE = 0.25
FOV_ANGLE = np.pi / 4
CELLS = 13


def wrap_angle(angle):
    """Map angles into [-pi, pi)."""
    return np.mod(np.asarray(angle) + np.pi, 2 * np.pi) - np.pi


@dataclass(frozen=True)
class Eye:
    fov_range: float = FOV_RANGE
    fov_angle: float = FOV_ANGLE
    cells: int = CELLS

    def __post_init__(self):
        if not 0.0 < self.fov_range <= 1.0:
            raise ValidationError(f"fov_range must be in (0, 1], got {self.fov_range}")
        if not self.fov_angle > 0.0:
            raise ValidationError(f"fov_angle must be positive, got {self.fov_angle}")
        if self.cells < 1:
            raise ValidationError(f"eye needs at least one cell, got {self.cells}")

    def process_vision(self, position: np.ndarray, rotation: float, points: np.ndarray) -> np.ndarray:
        """
        Return the activation of every cell for the given points (shape (n, 2)).
        Points out of range or out of the field of view are skipped; scanning
        always continues with the remaining points.
        """
        cells = np.zeros(self.cells, dtype=np.float64)
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if pts.shape[0] == 0:
            return cells

        rel = pts - np.asarray(position, dtype=np.float64)
        dist = np.hypot(rel[:, 0], rel[:, 1])
        # own position carries no direction
        near = (dist > 0.0) & (dist <= self.fov_range)

        angle = wrap_angle(np.arctan2(rel[:, 1], rel[:, 0]) - rotation)
        half = self.fov_angle / 2
        seen = near & (angle >= -half) & (angle <= half)
        if not seen.any():
            return cells

        idx = np.floor((angle[seen] + half) / self.fov_angle * self.cells).astype(int)
        idx = np.clip(idx, 0, self.cells - 1)
        energy = (self.fov_range - dist[seen]) / self.fov_range
        np.add.at(cells, idx, energy)
        return cells
