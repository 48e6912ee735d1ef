"""Configuration dataclasses and YAML loader for the physics maze game."""

import numbers
from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Any, Optional
from pathlib import Path
import yaml

from .physics.controls import Key, resolve_key


class ConfigError(ValueError):
    """Invalid configuration, reported before the maze is generated."""


@dataclass
class GridConfig:
    rows: int
    cols: int


@dataclass
class ViewportConfig:
    width: float
    height: float


@dataclass
class WallConfig:
    thickness: float = 10.0
    boundary_thickness: float = 2.0


@dataclass
class PhysicsConfig:
    fps: int = 60
    damping: float = 0.55        # fraction of velocity kept per second
    win_gravity: float = 1000.0  # world units / s^2 after the win
    post_win_steps: int = 180    # keep simulating the collapse


@dataclass
class KeyPress:
    step: int
    key: Key


@dataclass
class InputConfig:
    velocity_step: float = 2.0   # units per tick, per key press
    script: List[KeyPress] = field(default_factory=list)
    autopilot: bool = False
    autopilot_interval: int = 4  # steps between autopilot key presses


@dataclass
class GameConfig:
    grid: GridConfig
    viewport: ViewportConfig
    walls: WallConfig
    physics: PhysicsConfig
    input: InputConfig
    max_steps: int

    # None = random generation start cell
    generation_start: Optional[Tuple[int, int]] = None
    player_cell: Tuple[int, int] = (0, 0)

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))

    @property
    def goal_cell(self) -> Tuple[int, int]:
        """Corner opposite the player's start cell."""
        row, col = self.player_cell
        return (self.grid.rows - 1 - row, self.grid.cols - 1 - col)


def _parse_cell(raw: Any, name: str) -> Optional[Tuple[int, int]]:
    """Parse [row, col]; None or "random" means no fixed cell."""
    if raw is None or raw == 'random':
        return None
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ConfigError(f"{name} must be [row, col] or 'random', got {raw!r}")
    try:
        return (int(raw[0]), int(raw[1]))
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must contain integers, got {raw!r}")


def _section(raw: Dict, name: str) -> Dict:
    """Return a top-level YAML section, treating a missing or empty one as {}."""
    section = raw.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' section must be a mapping, got {section!r}")
    return section


def _parse_script(script_raw: Any) -> List[KeyPress]:
    """Parse scripted key presses from raw YAML data."""
    if not isinstance(script_raw, list):
        raise ConfigError(f"input script must be a list, got {script_raw!r}")
    presses = []
    for entry in script_raw:
        if not isinstance(entry, dict) or 'key' not in entry or 'step' not in entry:
            raise ConfigError(f"Script entries need 'step' and 'key', got {entry!r}")
        key = entry['key']
        if not isinstance(key, (str, int)) or resolve_key(key) is None:
            raise ConfigError(f"Unknown key in input script: {key!r}")
        try:
            step = int(entry['step'])
        except (TypeError, ValueError):
            raise ConfigError(f"Script step must be an integer, got {entry['step']!r}")
        presses.append(KeyPress(step=step, key=key))
    return sorted(presses, key=lambda p: p.step)


def _check_type(value: Any, kind: type, name: str) -> None:
    # bool is an Integral, but `rows: true` is still a typo
    if isinstance(value, bool) or not isinstance(value, kind):
        expected = 'an integer' if kind is numbers.Integral else 'a number'
        raise ConfigError(f"{name} must be {expected}, got {value!r}")


def validate_config(config: GameConfig) -> GameConfig:
    """Reject configurations that cannot produce a maze."""
    for name, value in (('grid.rows', config.grid.rows),
                        ('grid.cols', config.grid.cols),
                        ('physics.fps', config.physics.fps),
                        ('physics.post_win_steps', config.physics.post_win_steps),
                        ('input.autopilot_interval', config.input.autopilot_interval),
                        ('max_steps', config.max_steps)):
        _check_type(value, numbers.Integral, name)
    for name, value in (('viewport.width', config.viewport.width),
                        ('viewport.height', config.viewport.height),
                        ('walls.thickness', config.walls.thickness),
                        ('walls.boundary_thickness', config.walls.boundary_thickness),
                        ('physics.damping', config.physics.damping),
                        ('physics.win_gravity', config.physics.win_gravity),
                        ('input.velocity_step', config.input.velocity_step)):
        _check_type(value, numbers.Real, name)
    if config.seed is not None:
        _check_type(config.seed, numbers.Integral, 'seed')

    if config.grid.rows <= 0 or config.grid.cols <= 0:
        raise ConfigError(
            f"Grid dimensions must be positive, got {config.grid.rows}x{config.grid.cols}")
    if config.viewport.width <= 0 or config.viewport.height <= 0:
        raise ConfigError(
            f"Viewport must be non-empty, got {config.viewport.width}x{config.viewport.height}")
    if config.walls.thickness <= 0 or config.walls.boundary_thickness <= 0:
        raise ConfigError("Wall thickness must be positive")
    if config.physics.fps <= 0:
        raise ConfigError(f"fps must be positive, got {config.physics.fps}")
    if config.max_steps < 0:
        raise ConfigError(f"max_steps must be >= 0, got {config.max_steps}")
    if config.input.autopilot_interval <= 0:
        raise ConfigError("autopilot_interval must be positive")

    for name, cell in (('generation_start', config.generation_start),
                       ('player_cell', config.player_cell)):
        if cell is None:
            continue
        row, col = cell
        if not (0 <= row < config.grid.rows and 0 <= col < config.grid.cols):
            raise ConfigError(
                f"{name} {cell} outside {config.grid.rows}x{config.grid.cols} grid")
    return config


def default_config() -> GameConfig:
    """15x15 maze on a 900x900 viewport."""
    return GameConfig(
        grid=GridConfig(rows=15, cols=15),
        viewport=ViewportConfig(width=900, height=900),
        walls=WallConfig(),
        physics=PhysicsConfig(),
        input=InputConfig(),
        max_steps=3600,
    )


def load_config(config_path: Path) -> GameConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Top level of {config_path} must be a mapping, got {raw!r}")

    defaults = default_config()

    # Parse grid config
    grid_raw = _section(raw, 'grid')
    grid = GridConfig(
        rows=grid_raw.get('rows', defaults.grid.rows),
        cols=grid_raw.get('cols', defaults.grid.cols)
    )

    viewport_raw = _section(raw, 'viewport')
    viewport = ViewportConfig(
        width=viewport_raw.get('width', defaults.viewport.width),
        height=viewport_raw.get('height', defaults.viewport.height)
    )

    walls_raw = _section(raw, 'walls')
    walls = WallConfig(
        thickness=walls_raw.get('thickness', 10.0),
        boundary_thickness=walls_raw.get('boundary_thickness', 2.0)
    )

    physics_raw = _section(raw, 'physics')
    physics = PhysicsConfig(
        fps=physics_raw.get('fps', 60),
        damping=physics_raw.get('damping', 0.55),
        win_gravity=physics_raw.get('win_gravity', 1000.0),
        post_win_steps=physics_raw.get('post_win_steps', 180)
    )

    input_raw = _section(raw, 'input')
    input_config = InputConfig(
        velocity_step=input_raw.get('velocity_step', 2.0),
        script=_parse_script(input_raw.get('script') or []),
        autopilot=input_raw.get('autopilot', False),
        autopilot_interval=input_raw.get('autopilot_interval', 4)
    )

    # Parse maze config
    maze_raw = _section(raw, 'maze')
    player_cell = _parse_cell(maze_raw.get('player_cell', [0, 0]), 'player_cell')
    if player_cell is None:
        raise ConfigError("player_cell must be a fixed [row, col]")

    # Parse export config (optional)
    export_raw = _section(raw, 'export')
    simulation_raw = _section(raw, 'simulation')

    return validate_config(GameConfig(
        grid=grid,
        viewport=viewport,
        walls=walls,
        physics=physics,
        input=input_config,
        max_steps=simulation_raw.get('max_steps', defaults.max_steps),
        generation_start=_parse_cell(maze_raw.get('start', 'random'), 'start'),
        player_cell=player_cell,
        csv_enabled=export_raw.get('csv', True),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False),
        seed=simulation_raw.get('seed')
    ))
