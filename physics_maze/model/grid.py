"""Grid model for maze generation."""

import numpy as np
from typing import Iterator, List, Tuple

# (row offset, column offset) per direction, in exploration order
DIRECTIONS = {
    'up': (-1, 0),
    'right': (0, 1),
    'down': (1, 0),
    'left': (0, -1),
}


class MazeGrid:
    """
    Visited-cell state and wall-opening matrices for an R x C maze.

    Coordinate convention: (row, col) everywhere, [row, col] for array indexing.

    verticals[r, c]   -> edge between (r, c) and (r, c + 1) is open
    horizontals[r, c] -> edge between (r, c) and (r + 1, c) is open
    """

    def __init__(self, rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols

        self.visited = np.zeros((rows, cols), dtype=bool)

        # False = wall present, True = carved
        self.verticals = np.zeros((rows, cols - 1), dtype=bool)
        self.horizontals = np.zeros((rows - 1, cols), dtype=bool)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise IndexError(
                f"Cell ({row}, {col}) outside {self.rows}x{self.cols} grid")

    def is_visited(self, row: int, col: int) -> bool:
        self._check_bounds(row, col)
        return bool(self.visited[row, col])

    def mark_visited(self, row: int, col: int) -> None:
        self._check_bounds(row, col)
        self.visited[row, col] = True

    def neighbors(self, row: int, col: int) -> List[Tuple[int, int, str]]:
        """Return in-grid 4-connected neighbours as (row, col, direction)."""
        self._check_bounds(row, col)
        result = []
        for direction, (dr, dc) in DIRECTIONS.items():
            nr, nc = row + dr, col + dc
            if self.in_bounds(nr, nc):
                result.append((nr, nc, direction))
        return result

    def open_edge(self, row: int, col: int, direction: str) -> None:
        """Carve the wall between (row, col) and its neighbour in direction."""
        dr, dc = DIRECTIONS[direction]
        self._check_bounds(row, col)
        self._check_bounds(row + dr, col + dc)

        # Stored against the lower-indexed cell along the axis
        if direction == 'left':
            self.verticals[row, col - 1] = True
        elif direction == 'right':
            self.verticals[row, col] = True
        elif direction == 'up':
            self.horizontals[row - 1, col] = True
        elif direction == 'down':
            self.horizontals[row, col] = True

    def freeze(self) -> None:
        """Make the grid read-only once generation has finished."""
        self.visited.flags.writeable = False
        self.verticals.flags.writeable = False
        self.horizontals.flags.writeable = False

    @property
    def frozen(self) -> bool:
        return not self.verticals.flags.writeable


def passable_neighbors(verticals: np.ndarray, horizontals: np.ndarray,
                       row: int, col: int) -> Iterator[Tuple[int, int]]:
    """Yield cells reachable from (row, col) through a single opened edge."""
    rows = verticals.shape[0]
    cols = horizontals.shape[1]

    if row > 0 and horizontals[row - 1, col]:
        yield row - 1, col
    if col < cols - 1 and verticals[row, col]:
        yield row, col + 1
    if row < rows - 1 and horizontals[row, col]:
        yield row + 1, col
    if col > 0 and verticals[row, col - 1]:
        yield row, col - 1
