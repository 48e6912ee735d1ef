"""Keyboard input mapping for the player ball."""

from typing import Dict, Optional, Tuple, Union

from .world import BodyHandle, PhysicsWorld

Key = Union[str, int]

# Screen-like axes: up is negative y
DIRECTION_VECTORS: Dict[str, Tuple[int, int]] = {
    'up': (0, -1),
    'right': (1, 0),
    'down': (0, 1),
    'left': (-1, 0),
}

# Key names (case-insensitive) and DOM key codes
KEY_BINDINGS: Dict[Key, str] = {
    'arrowup': 'up', 'w': 'up', 'up': 'up', 38: 'up', 87: 'up',
    'arrowright': 'right', 'd': 'right', 'right': 'right', 39: 'right', 68: 'right',
    'arrowdown': 'down', 's': 'down', 'down': 'down', 40: 'down', 83: 'down',
    'arrowleft': 'left', 'a': 'left', 'left': 'left', 37: 'left', 65: 'left',
}


def resolve_key(key: Key) -> Optional[str]:
    """Direction bound to key, or None for keys that do nothing."""
    if isinstance(key, str):
        key = key.strip().lower()
    return KEY_BINDINGS.get(key)


def velocity_delta(key: Key, step: float) -> Optional[Tuple[float, float]]:
    direction = resolve_key(key)
    if direction is None:
        return None
    dx, dy = DIRECTION_VECTORS[direction]
    return dx * step, dy * step


def apply_key(world: PhysicsWorld, ball: BodyHandle, key: Key,
              step: float) -> bool:
    """Nudge the ball's velocity for key. Returns False if the key is unbound."""
    delta = velocity_delta(key, step)
    if delta is None:
        return False
    vx, vy = world.get_body_velocity(ball)
    world.set_body_velocity(ball, (vx + delta[0], vy + delta[1]))
    return True
