"""Interface to the physics collaborator."""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Tuple

BodyHandle = Any
CollisionHandler = Callable[[List[Tuple[str, str]]], Any]


class PhysicsWorld(ABC):
    """
    Minimal set of operations the game needs from a 2D physics engine.

    World coordinates are screen-like: x grows right, y grows down, so a
    positive gravity pulls bodies towards the bottom of the maze.
    Velocities are in world units per second.
    """

    @abstractmethod
    def create_static_rectangle(self, x: float, y: float, w: float, h: float,
                                label: str) -> BodyHandle:
        """Create a static box centred at (x, y). Not yet in the world."""

    @abstractmethod
    def create_dynamic_circle(self, x: float, y: float, r: float,
                              label: str) -> BodyHandle:
        """Create a dynamic circle centred at (x, y). Not yet in the world."""

    @abstractmethod
    def add_to_world(self, body: BodyHandle) -> None:
        ...

    @abstractmethod
    def set_body_static(self, body: BodyHandle, static: bool) -> None:
        ...

    @abstractmethod
    def is_static(self, body: BodyHandle) -> bool:
        ...

    @abstractmethod
    def set_body_velocity(self, body: BodyHandle,
                          velocity: Tuple[float, float]) -> None:
        ...

    @abstractmethod
    def get_body_velocity(self, body: BodyHandle) -> Tuple[float, float]:
        ...

    @abstractmethod
    def body_state(self, body: BodyHandle) -> Tuple[float, float, float]:
        """Return (x, y, angle) of the body's centre."""

    @abstractmethod
    def set_world_gravity(self, y: float) -> None:
        ...

    @abstractmethod
    def on_collision_start(self, handler: CollisionHandler) -> None:
        """Register handler for label pairs of contacts that began this step."""

    @abstractmethod
    def step(self, dt: float) -> None:
        """Advance the simulation and notify collision handlers."""
