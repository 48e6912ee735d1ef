"""State snapshot dataclasses for the physics maze game."""

from dataclasses import dataclass
from typing import List, Dict, Tuple


@dataclass(frozen=True)
class BodySnapshot:
    """Immutable snapshot of a body's pose at a given time step."""
    label: str
    kind: str      # "horizontal", "vertical", "boundary", "goal", "ball"
    x: float
    y: float
    angle: float
    width: float   # diameter for the ball
    height: float
    static: bool


@dataclass
class FrameState:
    """Complete snapshot of the game at a given time step."""
    step: int
    ball: BodySnapshot
    ball_velocity: Tuple[float, float]
    bodies: List[BodySnapshot]
    outcome: str   # "in_progress", "won"
    gravity: float

    def to_csv_rows(self) -> List[Dict]:
        """Convert to CSV-compatible format."""
        return [
            {
                "step": self.step,
                "x": round(self.ball.x, 3),
                "y": round(self.ball.y, 3),
                "vx": round(self.ball_velocity[0], 3),
                "vy": round(self.ball_velocity[1], 3),
                "outcome": self.outcome
            }
        ]
