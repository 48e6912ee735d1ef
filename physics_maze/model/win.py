"""Win-condition state machine."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class SessionOutcome(Enum):
    """Possible states for a session."""
    IN_PROGRESS = "in_progress"
    WON = "won"


@dataclass(frozen=True)
class SignalVictory:
    """Tell the presentation layer the player won."""


@dataclass(frozen=True)
class ReleaseWalls:
    """Switch every body carrying tag from static to dynamic."""
    tag: str = 'wall'


@dataclass(frozen=True)
class SetGravity:
    """Set the world's downward force."""
    y: float


Command = Union[SignalVictory, ReleaseWalls, SetGravity]
CommandSink = Callable[[Command], None]


class WinCondition:
    """
    Watches collision-start pairs for player/goal contact.

    IN_PROGRESS -> WON happens once; the commands for the transition are
    returned and, if a sink is attached, dispatched to it in order. Every
    later notification is a no-op.
    """

    def __init__(self, win_gravity: float = 1.0,
                 player_tag: str = 'ball', goal_tag: str = 'goal',
                 wall_tag: str = 'wall',
                 sink: Optional[CommandSink] = None):
        self.win_gravity = win_gravity
        self.player_tag = player_tag
        self.goal_tag = goal_tag
        self.wall_tag = wall_tag
        self.sink = sink
        self.outcome = SessionOutcome.IN_PROGRESS

    @property
    def won(self) -> bool:
        return self.outcome is SessionOutcome.WON

    def _is_win_pair(self, pair: Tuple[str, str]) -> bool:
        label_a, label_b = pair
        return {label_a, label_b} == {self.player_tag, self.goal_tag}

    def handle_collisions(self, pairs: Iterable[Tuple[str, str]]) -> List[Command]:
        if self.won:
            return []
        if not any(self._is_win_pair(pair) for pair in pairs):
            return []

        self.outcome = SessionOutcome.WON
        commands: List[Command] = [
            SignalVictory(),
            ReleaseWalls(tag=self.wall_tag),
            SetGravity(y=self.win_gravity),
        ]
        logger.info("Goal reached; releasing '%s' bodies", self.wall_tag)

        if self.sink is not None:
            for command in commands:
                self.sink(command)
        return commands

    # Lets the controller be passed straight to on_collision_start
    __call__ = handle_collisions
