"""Summary report generation for the physics maze game."""

from typing import Dict, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import FrameState


class Reporter:
    """Tracks per-step progress and formats the end-of-session report."""

    def __init__(self, config_path: Optional[str], seed: Optional[int]):
        self.config_path = config_path
        self.seed = seed
        self.distance_travelled = 0.0
        self.peak_speed = 0.0
        self._prev_position: Optional[tuple] = None

    def update(self, state: "FrameState") -> None:
        """Accumulate ball movement per step."""
        position = (state.ball.x, state.ball.y)
        if self._prev_position is not None:
            dx = position[0] - self._prev_position[0]
            dy = position[1] - self._prev_position[1]
            self.distance_travelled += (dx * dx + dy * dy) ** 0.5
        self._prev_position = position

        vx, vy = state.ball_velocity
        self.peak_speed = max(self.peak_speed, (vx * vx + vy * vy) ** 0.5)

    def generate_summary(self, summary: Dict,
                         output_dir: Path,
                         csv_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        won = summary.get('won', False)
        if won:
            outcome = f"WON at step {summary['won_at_step']}"
        else:
            outcome = "not reached"
        first_input = summary.get('first_input_step')

        lines = [
            "",
            "=" * 80,
            "                        PHYSICS MAZE SESSION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path or '(defaults)'}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            "",
            "MAZE",
            "-" * 40,
            f"Grid:                  {summary['rows']} x {summary['cols']}",
            f"Generation Start:      {summary['generation_start']}",
            f"Player / Goal Cell:    {summary['player_cell']} -> {summary['goal_cell']}",
            f"Opened Edges:          {summary['open_edges']}",
            f"Wall Obstacles:        {summary['walls']}",
            f"Solution Length:       {summary['solution_length']} cells",
            "",
            "SESSION",
            "-" * 40,
            f"Total Steps:           {summary['total_steps']}",
            f"Key Presses:           {summary['key_presses']}",
            f"First Input Step:      {first_input if first_input is not None else '-'}",
            f"Distance Travelled:    {self.distance_travelled:.1f} units",
            f"Peak Speed:            {self.peak_speed:.1f} units/s",
            f"Goal:                  {outcome}",
            f"Walls Released:        {summary['released_walls']}",
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        # Output file paths
        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'trajectory.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'session.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
