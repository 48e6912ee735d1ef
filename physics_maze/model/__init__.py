"""Model package for the physics maze game."""

from .state import BodySnapshot, FrameState
from .grid import MazeGrid, passable_neighbors
from .generator import MazeGenerator, shuffle, generate_maze, count_open_edges
from .walls import Obstacle, emit_walls, emit_boundary, goal_placement, ball_placement, cell_size
from .distance_field import DistanceField
from .win import SessionOutcome, WinCondition, SignalVictory, ReleaseWalls, SetGravity
from .pilot import Autopilot
from .engine import GameEngine

__all__ = [
    'BodySnapshot',
    'FrameState',
    'MazeGrid',
    'passable_neighbors',
    'MazeGenerator',
    'shuffle',
    'generate_maze',
    'count_open_edges',
    'Obstacle',
    'emit_walls',
    'emit_boundary',
    'goal_placement',
    'ball_placement',
    'cell_size',
    'DistanceField',
    'SessionOutcome',
    'WinCondition',
    'SignalVictory',
    'ReleaseWalls',
    'SetGravity',
    'Autopilot',
    'GameEngine',
]
