"""Translate opening matrices into obstacle geometry."""

from dataclasses import dataclass
from typing import List, Tuple
import numpy as np

WALL_LABEL = 'wall'
BOUNDARY_LABEL = 'boundary'
GOAL_LABEL = 'goal'
BALL_LABEL = 'ball'


@dataclass(frozen=True)
class Obstacle:
    """Static rectangle placement. (x, y) is the centre in world space."""
    x: float
    y: float
    width: float
    height: float
    label: str
    kind: str  # "horizontal", "vertical", "boundary", "goal"


def cell_size(viewport_width: float, viewport_height: float,
              rows: int, cols: int) -> Tuple[float, float]:
    """Cell width and height for a viewport split into rows x cols."""
    if viewport_width <= 0 or viewport_height <= 0:
        raise ValueError(
            f"Viewport must be non-empty, got {viewport_width}x{viewport_height}")
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
    return viewport_width / cols, viewport_height / rows


def emit_boundary(width: float, height: float,
                  thickness: float = 2.0) -> List[Obstacle]:
    """Four thin walls around the viewport: top, bottom, left, right."""
    return [
        Obstacle(width / 2, 0, width, thickness, BOUNDARY_LABEL, 'boundary'),
        Obstacle(width / 2, height, width, thickness, BOUNDARY_LABEL, 'boundary'),
        Obstacle(0, height / 2, thickness, height, BOUNDARY_LABEL, 'boundary'),
        Obstacle(width, height / 2, thickness, height, BOUNDARY_LABEL, 'boundary'),
    ]


def emit_walls(verticals: np.ndarray, horizontals: np.ndarray,
               cell_width: float, cell_height: float,
               thickness: float = 10.0,
               boundary_thickness: float = 2.0) -> List[Obstacle]:
    """
    One static obstacle per closed edge, plus the viewport perimeter.

    Horizontal walls sit on the boundary below cell (r, c) and span one cell
    width; vertical walls sit on the boundary right of (r, c) and span one
    cell height. Output order is deterministic: horizontals row-major, then
    verticals row-major, then the perimeter.
    """
    rows = verticals.shape[0]
    cols = horizontals.shape[1]
    obstacles = []

    for row, col in np.argwhere(~horizontals).tolist():
        obstacles.append(Obstacle(
            x=col * cell_width + cell_width / 2,
            y=row * cell_height + cell_height,
            width=cell_width,
            height=thickness,
            label=WALL_LABEL,
            kind='horizontal',
        ))

    for row, col in np.argwhere(~verticals).tolist():
        obstacles.append(Obstacle(
            x=col * cell_width + cell_width,
            y=row * cell_height + cell_height / 2,
            width=thickness,
            height=cell_height,
            label=WALL_LABEL,
            kind='vertical',
        ))

    obstacles.extend(emit_boundary(cols * cell_width, rows * cell_height,
                                   boundary_thickness))
    return obstacles


def goal_placement(cell_width: float, cell_height: float,
                   cell: Tuple[int, int], scale: float = 0.7) -> Obstacle:
    """Goal rectangle centred in cell."""
    row, col = cell
    return Obstacle(
        x=col * cell_width + cell_width / 2,
        y=row * cell_height + cell_height / 2,
        width=cell_width * scale,
        height=cell_height * scale,
        label=GOAL_LABEL,
        kind='goal',
    )


def ball_placement(cell_width: float, cell_height: float,
                   cell: Tuple[int, int]) -> Tuple[float, float, float]:
    """Centre and radius of the player ball in cell."""
    row, col = cell
    radius = min(cell_width, cell_height) / 4
    return (col * cell_width + cell_width / 2,
            row * cell_height + cell_height / 2,
            radius)
