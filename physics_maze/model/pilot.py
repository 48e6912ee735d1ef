"""Autopilot steering the ball down the distance-field gradient."""

import numpy as np
from typing import Optional, Tuple

from .distance_field import DistanceField


class Autopilot:
    """
    Picks key presses that move the ball towards the next cell on the
    unique path to the goal.

    The desired velocity points at the centre of the next cell and is
    capped at max_speed; the key chosen is the one that best closes the
    gap between desired and current velocity on a single axis.
    """

    def __init__(self, field: DistanceField,
                 cell_width: float, cell_height: float,
                 velocity_step: float,
                 max_speed: Optional[float] = None,
                 gain: float = 3.0):
        self.field = field
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.velocity_step = velocity_step
        self.max_speed = max_speed if max_speed is not None else 4 * velocity_step
        self.gain = gain

    def cell_at(self, x: float, y: float) -> Tuple[int, int]:
        row = int(np.clip(y // self.cell_height, 0, self.field.rows - 1))
        col = int(np.clip(x // self.cell_width, 0, self.field.cols - 1))
        return row, col

    def target_for(self, x: float, y: float) -> Tuple[float, float]:
        """World-space centre of the next cell towards the goal."""
        row, col = self.field.next_step(*self.cell_at(x, y))
        return (col * self.cell_width + self.cell_width / 2,
                row * self.cell_height + self.cell_height / 2)

    def choose_key(self, position: Tuple[float, float],
                   velocity: Tuple[float, float]) -> Optional[str]:
        x, y = position
        tx, ty = self.target_for(x, y)

        desired = np.array([tx - x, ty - y]) * self.gain
        speed = np.linalg.norm(desired)
        if speed > self.max_speed:
            desired *= self.max_speed / speed

        diff = desired - np.asarray(velocity, dtype=float)
        axis = int(np.argmax(np.abs(diff)))
        if abs(diff[axis]) < self.velocity_step / 2:
            return None

        if axis == 0:
            return 'right' if diff[0] > 0 else 'left'
        return 'down' if diff[1] > 0 else 'up'
