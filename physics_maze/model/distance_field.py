"""Distance field over a carved maze."""

import numpy as np
from collections import deque
from typing import List, Tuple

from .grid import passable_neighbors


class DistanceField:
    """
    Hop counts from a source cell through opened edges.

    Unreachable cells hold -1. In a perfect maze every cell is reachable and
    the gradient leads along the unique path back to the source.
    """

    def __init__(self, verticals: np.ndarray, horizontals: np.ndarray):
        self.verticals = verticals
        self.horizontals = horizontals
        self.rows = verticals.shape[0]
        self.cols = horizontals.shape[1]
        self.field = np.full((self.rows, self.cols), -1, dtype=np.int64)
        self.source: Tuple[int, int] = (0, 0)

    def compute(self, source: Tuple[int, int]) -> np.ndarray:
        """Breadth-first expansion from source."""
        row, col = source
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Source {source} outside {self.rows}x{self.cols} grid")

        self.source = (row, col)
        self.field = np.full((self.rows, self.cols), -1, dtype=np.int64)
        self.field[row, col] = 0
        queue = deque([(row, col)])

        while queue:
            r, c = queue.popleft()
            dist = self.field[r, c]
            for nr, nc in passable_neighbors(self.verticals, self.horizontals, r, c):
                if self.field[nr, nc] < 0:
                    self.field[nr, nc] = dist + 1
                    queue.append((nr, nc))

        return self.field

    def get_value(self, row: int, col: int) -> int:
        return int(self.field[row, col])

    def all_reachable(self) -> bool:
        return bool(np.all(self.field >= 0))

    def next_step(self, row: int, col: int) -> Tuple[int, int]:
        """Neighbour one hop closer to the source; the cell itself at the source."""
        dist = self.field[row, col]
        if dist <= 0:
            return row, col
        for nr, nc in passable_neighbors(self.verticals, self.horizontals, row, col):
            if self.field[nr, nc] == dist - 1:
                return nr, nc
        return row, col

    def path_from(self, cell: Tuple[int, int]) -> List[Tuple[int, int]]:
        """Cells from cell to the source, inclusive. Empty if unreachable."""
        row, col = cell
        if self.field[row, col] < 0:
            return []
        path = [(row, col)]
        while self.field[row, col] > 0:
            row, col = self.next_step(row, col)
            path.append((row, col))
        return path
