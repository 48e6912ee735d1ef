"""Randomized depth-first maze generation."""

import logging
import numpy as np
from typing import List, Optional, Sequence, Tuple, TypeVar

from .grid import MazeGrid

T = TypeVar('T')

logger = logging.getLogger(__name__)


def shuffle(items: List[T], rng: np.random.Generator) -> List[T]:
    """
    In-place Fisher-Yates shuffle.

    Walks a counter down from len(items); each step swaps the last
    unprocessed element with a uniformly chosen one from the unprocessed
    prefix. Returns the same list for convenience.
    """
    counter = len(items)
    while counter > 0:
        index = int(rng.integers(counter))
        counter -= 1
        items[counter], items[index] = items[index], items[counter]
    return items


class _Frame:
    """One level of the depth-first walk: a cell and the neighbours left to try."""

    __slots__ = ('row', 'col', 'neighbors', 'cursor')

    def __init__(self, row: int, col: int, neighbors: List[Tuple[int, int, str]]):
        self.row = row
        self.col = col
        self.neighbors = neighbors
        self.cursor = 0


class MazeGenerator:
    """
    Carves a perfect maze into a MazeGrid.

    Uses an explicit stack of frames instead of recursion, so grids of any
    size are safe. The order of random draws matches the recursive
    formulation: a cell's neighbours are shuffled when the cell is entered.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def _enter(self, grid: MazeGrid, row: int, col: int) -> _Frame:
        grid.mark_visited(row, col)
        neighbors = shuffle(grid.neighbors(row, col), self.rng)
        return _Frame(row, col, neighbors)

    def generate(self, grid: MazeGrid, start_row: int,
                 start_col: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Run the depth-first carve from (start_row, start_col).

        Returns (verticals, horizontals). The grid is frozen afterwards.
        """
        if grid.is_visited(start_row, start_col):
            grid.freeze()
            return grid.verticals, grid.horizontals

        stack = [self._enter(grid, start_row, start_col)]
        carved = 0
        max_depth = 1

        while stack:
            frame = stack[-1]
            if frame.cursor >= len(frame.neighbors):
                # Dead end: backtrack
                stack.pop()
                continue

            next_row, next_col, direction = frame.neighbors[frame.cursor]
            frame.cursor += 1

            if grid.is_visited(next_row, next_col):
                continue

            grid.open_edge(frame.row, frame.col, direction)
            carved += 1
            stack.append(self._enter(grid, next_row, next_col))
            max_depth = max(max_depth, len(stack))

        grid.freeze()
        logger.debug("Carved %d edges on %dx%d grid from (%d, %d), max depth %d",
                     carved, grid.rows, grid.cols, start_row, start_col, max_depth)
        return grid.verticals, grid.horizontals


def count_open_edges(verticals: np.ndarray, horizontals: np.ndarray) -> int:
    """Number of carved passages."""
    return int(np.count_nonzero(verticals) + np.count_nonzero(horizontals))


def generate_maze(rows: int, cols: int,
                  start: Optional[Sequence[int]] = None,
                  rng: Optional[np.random.Generator] = None
                  ) -> Tuple[MazeGrid, Tuple[int, int]]:
    """
    Build and carve a rows x cols maze.

    A random start cell is drawn when none is given. Returns the frozen
    grid and the start cell used.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
    rng = rng if rng is not None else np.random.default_rng()

    if start is None:
        start = (int(rng.integers(rows)), int(rng.integers(cols)))
    start_row, start_col = int(start[0]), int(start[1])

    grid = MazeGrid(rows, cols)
    MazeGenerator(rng).generate(grid, start_row, start_col)
    return grid, (start_row, start_col)
