"""Game engine for the physics maze."""

import logging
import numpy as np
from collections import deque
from typing import Callable, List, Dict, Tuple, Optional, TYPE_CHECKING, Any

from .generator import generate_maze, count_open_edges
from .walls import (
    Obstacle, cell_size, emit_walls, goal_placement, ball_placement,
    WALL_LABEL, GOAL_LABEL, BALL_LABEL,
)
from .distance_field import DistanceField
from .win import WinCondition, Command, SignalVictory, ReleaseWalls, SetGravity
from .pilot import Autopilot
from .state import BodySnapshot, FrameState
from ..config import validate_config
from ..physics.world import PhysicsWorld, BodyHandle
from ..physics.pymunk_world import PymunkWorld
from ..physics.controls import Key, apply_key

if TYPE_CHECKING:
    from ..config import GameConfig

logger = logging.getLogger(__name__)


class GameEngine:
    """
    Orchestrates one maze session.

    Implements:
    1. Maze generation and wall emission
    2. Body creation in the physics world
    3. Input (scripted, autopilot or direct key presses)
    4. Win detection and the wall-release transition
    5. State snapshot generation
    """

    def __init__(self, config: "GameConfig", world: Optional[PhysicsWorld] = None):
        self.config = validate_config(config)
        self.current_step = 0
        self.rng = np.random.default_rng(config.seed)

        rows, cols = config.grid.rows, config.grid.cols
        self.cell_width, self.cell_height = cell_size(
            config.viewport.width, config.viewport.height, rows, cols)

        # Generate maze
        self.grid, self.generation_start = generate_maze(
            rows, cols, config.generation_start, self.rng)
        self.verticals = self.grid.verticals
        self.horizontals = self.grid.horizontals
        self.obstacles = emit_walls(
            self.verticals, self.horizontals,
            self.cell_width, self.cell_height,
            config.walls.thickness, config.walls.boundary_thickness
        )

        self.player_cell = config.player_cell
        self.goal_cell = config.goal_cell
        self.distance_field = DistanceField(self.verticals, self.horizontals)
        self.distance_field.compute(self.goal_cell)

        # Physics world
        if world is None:
            world = PymunkWorld(damping=config.physics.damping)
        self.world = world
        self.gravity = 0.0
        self.world.set_world_gravity(self.gravity)

        self.bodies: List[Tuple[Obstacle, BodyHandle]] = []
        self.goal: Optional[Obstacle] = None
        self.ball: BodyHandle = None
        self.ball_radius = 0.0
        self._setup_bodies()

        # Win condition
        self.win = WinCondition(
            win_gravity=config.physics.win_gravity,
            player_tag=BALL_LABEL,
            goal_tag=GOAL_LABEL,
            wall_tag=WALL_LABEL,
            sink=self._apply_command
        )
        self.world.on_collision_start(self.win)
        self._victory_listeners: List[Callable[[int], Any]] = []

        # Input
        self.velocity_step = config.input.velocity_step * config.physics.fps
        self._script = deque(config.input.script)
        self.pilot: Optional[Autopilot] = None
        if config.input.autopilot:
            self.pilot = Autopilot(
                self.distance_field, self.cell_width, self.cell_height,
                self.velocity_step
            )

        # Metrics tracking
        self.won_at_step: Optional[int] = None
        self.first_input_step: Optional[int] = None
        self.key_presses = 0
        self.released_walls = 0

        logger.debug("Maze %dx%d from %s: %d walls, solution %d cells",
                     rows, cols, self.generation_start, self.wall_count,
                     len(self.solution_path()))

    def _setup_bodies(self) -> None:
        """Add walls, goal and ball to the world."""
        for obstacle in self.obstacles:
            handle = self.world.create_static_rectangle(
                obstacle.x, obstacle.y, obstacle.width, obstacle.height,
                obstacle.label
            )
            self.world.add_to_world(handle)
            self.bodies.append((obstacle, handle))

        self.goal = goal_placement(self.cell_width, self.cell_height, self.goal_cell)
        handle = self.world.create_static_rectangle(
            self.goal.x, self.goal.y, self.goal.width, self.goal.height, GOAL_LABEL)
        self.world.add_to_world(handle)
        self.bodies.append((self.goal, handle))

        x, y, radius = ball_placement(self.cell_width, self.cell_height, self.player_cell)
        self.ball = self.world.create_dynamic_circle(x, y, radius, BALL_LABEL)
        self.ball_radius = radius
        self.world.add_to_world(self.ball)

    def _apply_command(self, command: Command) -> None:
        """Execute a win-transition command against the world."""
        if isinstance(command, SignalVictory):
            self.won_at_step = self.current_step
            for listener in self._victory_listeners:
                listener(self.current_step)
        elif isinstance(command, ReleaseWalls):
            for obstacle, handle in self.bodies:
                if obstacle.label == command.tag and self.world.is_static(handle):
                    self.world.set_body_static(handle, False)
                    self.released_walls += 1
            logger.debug("Released %d walls", self.released_walls)
        elif isinstance(command, SetGravity):
            self.gravity = command.y
            self.world.set_world_gravity(command.y)

    def on_victory(self, listener: Callable[[int], Any]) -> None:
        """Register a callback receiving the step at which the goal was reached."""
        self._victory_listeners.append(listener)

    @property
    def won(self) -> bool:
        return self.win.won

    @property
    def wall_count(self) -> int:
        return sum(1 for o in self.obstacles if o.label == WALL_LABEL)

    @property
    def open_edges(self) -> int:
        return count_open_edges(self.verticals, self.horizontals)

    def solution_path(self) -> List[Tuple[int, int]]:
        """Cells from the player's start cell to the goal."""
        return self.distance_field.path_from(self.player_cell)

    def press(self, key: Key) -> bool:
        """Apply a key press to the ball. Unbound keys are ignored."""
        accepted = apply_key(self.world, self.ball, key, self.velocity_step)
        if accepted:
            self.key_presses += 1
            if self.first_input_step is None:
                self.first_input_step = self.current_step
        return accepted

    def step(self) -> FrameState:
        """
        Execute one physics tick.

        1. Apply scripted key presses due at this step
        2. Ask the autopilot for a key press
        3. Step the world (collision handlers run here)
        4. Return current state snapshot
        """
        self.current_step += 1

        while self._script and self._script[0].step <= self.current_step:
            self.press(self._script.popleft().key)

        if (self.pilot is not None and not self.won
                and self.current_step % self.config.input.autopilot_interval == 0):
            x, y, _ = self.world.body_state(self.ball)
            key = self.pilot.choose_key((x, y), self.world.get_body_velocity(self.ball))
            if key is not None:
                self.press(key)

        self.world.step(1.0 / self.config.physics.fps)

        return self._create_state_snapshot()

    def _snapshot_body(self, obstacle: Obstacle, handle: BodyHandle) -> BodySnapshot:
        x, y, angle = self.world.body_state(handle)
        return BodySnapshot(
            label=obstacle.label,
            kind=obstacle.kind,
            x=x, y=y, angle=angle,
            width=obstacle.width,
            height=obstacle.height,
            static=self.world.is_static(handle)
        )

    def _create_state_snapshot(self) -> FrameState:
        """Create immutable snapshot of current game state."""
        x, y, angle = self.world.body_state(self.ball)
        ball = BodySnapshot(
            label=BALL_LABEL, kind='ball', x=x, y=y, angle=angle,
            width=2 * self.ball_radius, height=2 * self.ball_radius,
            static=False
        )
        return FrameState(
            step=self.current_step,
            ball=ball,
            ball_velocity=self.world.get_body_velocity(self.ball),
            bodies=[self._snapshot_body(o, h) for o, h in self.bodies],
            outcome=self.win.outcome.value,
            gravity=self.gravity
        )

    def is_finished(self) -> bool:
        """Check if the session should terminate."""
        if self.current_step >= self.config.max_steps:
            return True
        return (self.won_at_step is not None and
                self.current_step - self.won_at_step >= self.config.physics.post_win_steps)

    def get_summary(self) -> Dict:
        """Get summary statistics for the session."""
        return {
            'rows': self.config.grid.rows,
            'cols': self.config.grid.cols,
            'generation_start': self.generation_start,
            'player_cell': self.player_cell,
            'goal_cell': self.goal_cell,
            'open_edges': self.open_edges,
            'walls': self.wall_count,
            'solution_length': len(self.solution_path()),
            'total_steps': self.current_step,
            'key_presses': self.key_presses,
            'first_input_step': self.first_input_step,
            'won': self.won,
            'won_at_step': self.won_at_step,
            'released_walls': self.released_walls
        }
