#!/usr/bin/env python3
"""
Physics Maze

Generates a perfect maze, builds it as a pymunk obstacle course and rolls a
ball through it. Reaching the goal releases every wall and turns on gravity.

Usage:
    physics-maze [--config configs/default.yaml] [options]

Examples:
    physics-maze --autopilot
    physics-maze --config configs/default.yaml --gif --out-dir results/
    physics-maze --rows 5 --cols 8 --seed 42 --no-csv --quiet
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import yaml

from physics_maze.config import (
    ConfigError, GameConfig, default_config, load_config, validate_config,
)
from physics_maze.model.engine import GameEngine
from physics_maze.model.state import FrameState
from physics_maze.export.csv_writer import CSVWriter
from physics_maze.export.visualizer import Visualizer
from physics_maze.export.reporter import Reporter


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Physics Maze',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    physics-maze --autopilot
    physics-maze --config configs/default.yaml --gif --out-dir results/
    physics-maze --rows 5 --cols 8 --seed 42 --no-csv --quiet
        """
    )

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file (default: built-in 15x15)')

    # Optional overrides
    parser.add_argument('--rows', type=int, default=None,
                        help='Override number of maze rows')
    parser.add_argument('--cols', type=int, default=None,
                        help='Override number of maze columns')
    parser.add_argument('--steps', type=int, default=None,
                        help='Override max simulation steps')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')
    parser.add_argument('--autopilot', action='store_true', default=False,
                        help='Steer the ball along the solution path')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV trajectory export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV trajectory export')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')
    parser.add_argument('--verbose', action='store_true', default=False,
                        help='Enable debug logging')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    return parser.parse_args(argv)


def apply_overrides(config: GameConfig, args: argparse.Namespace) -> GameConfig:
    """Fold CLI flags into the loaded configuration."""
    if args.rows is not None:
        config.grid.rows = args.rows
    if args.cols is not None:
        config.grid.cols = args.cols
    if args.steps is not None:
        config.max_steps = args.steps
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    config.gif_enabled = config.gif_enabled or args.gif
    config.input.autopilot = config.input.autopilot or args.autopilot
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir
    return validate_config(config)


def echo(config: GameConfig, message: str) -> None:
    if not config.quiet:
        print(message)


def run_session(engine: GameEngine, config: GameConfig,
                csv_writer: Optional[CSVWriter], visualizer: Visualizer,
                reporter: Reporter) -> Optional[FrameState]:
    """Step the engine until it finishes. Returns the last frame."""
    final_state = None
    try:
        while not engine.is_finished():
            state = engine.step()
            final_state = state

            if csv_writer:
                csv_writer.append(state)

            # Every 5th frame keeps GIFs small
            if config.gif_enabled and (state.step % 5 == 0 or engine.is_finished()):
                visualizer.buffer_frame(state)

            reporter.update(state)

            if state.step % config.physics.fps == 0 and not engine.won:
                echo(config, f"  t={state.step // config.physics.fps}s: ball at "
                             f"({state.ball.x:.0f}, {state.ball.y:.0f})")
    except KeyboardInterrupt:
        echo(config, "\nSession interrupted by user.")
    return final_state


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    try:
        config = load_config(args.config) if args.config else default_config()
        apply_overrides(config, args)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except (ConfigError, yaml.YAMLError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    echo(config, f"Generating {config.grid.rows}x{config.grid.cols} maze "
                 f"(max {config.max_steps} steps)...")
    engine = GameEngine(config)
    echo(config, f"  Carved from {engine.generation_start}, {engine.wall_count} walls, "
                 f"solution {len(engine.solution_path())} cells")
    engine.on_victory(
        lambda step: echo(config, f"\n  *** You won! (step {step}) ***\n"))

    csv_path = config.out_dir / 'trajectory.csv'
    csv_writer = CSVWriter(csv_path) if config.csv_enabled else None
    visualizer = Visualizer(config.viewport.width, config.viewport.height)
    reporter = Reporter(str(args.config) if args.config else None, config.seed)

    echo(config, "\nRolling...")
    if csv_writer:
        with csv_writer:
            final_state = run_session(engine, config, csv_writer, visualizer, reporter)
        echo(config, f"\nCSV saved: {csv_path} ({csv_writer.rows_written} rows)")
    else:
        final_state = run_session(engine, config, None, visualizer, reporter)

    if config.snapshot_enabled and final_state:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        echo(config, f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        gif_path = config.out_dir / 'session.gif'
        echo(config, f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path, fps=12)
        echo(config, f"Animation saved: {gif_path}")

    echo(config, reporter.generate_summary(
        engine.get_summary(),
        config.out_dir,
        config.csv_enabled,
        config.snapshot_enabled,
        config.gif_enabled
    ))
    return 0


if __name__ == '__main__':
    sys.exit(main())
