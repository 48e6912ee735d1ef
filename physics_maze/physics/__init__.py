"""Physics package for the maze game."""

from .world import PhysicsWorld, BodyHandle
from .pymunk_world import PymunkWorld
from .controls import resolve_key, velocity_delta, apply_key

__all__ = [
    'PhysicsWorld',
    'BodyHandle',
    'PymunkWorld',
    'resolve_key',
    'velocity_delta',
    'apply_key',
]
