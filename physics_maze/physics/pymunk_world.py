"""pymunk-backed physics world."""

import logging
from typing import Dict, List, Set, Tuple, FrozenSet

import pymunk

from .world import PhysicsWorld, CollisionHandler

logger = logging.getLogger(__name__)


class PymunkWorld(PhysicsWorld):
    """
    PhysicsWorld on top of a pymunk Space.

    Collision-start events are gathered after each space.step() from the
    first-contact arbiters of every dynamic body, so handlers run outside
    the solver and may freely change body types.
    """

    def __init__(self, damping: float = 1.0, friction: float = 0.1,
                 elasticity: float = 0.0, density: float = 1.0):
        self.space = pymunk.Space()
        self.space.gravity = (0, 0)
        self.space.damping = damping
        self.friction = friction
        self.elasticity = elasticity
        self.density = density

        self._shapes: Dict[pymunk.Body, pymunk.Shape] = {}
        self._labels: Dict[pymunk.Shape, str] = {}
        self._handlers: List[CollisionHandler] = []

    def _register(self, body: pymunk.Body, shape: pymunk.Shape,
                  label: str) -> pymunk.Body:
        shape.friction = self.friction
        shape.elasticity = self.elasticity
        # Density lets static bodies acquire mass when released
        shape.density = self.density
        self._shapes[body] = shape
        self._labels[shape] = label
        return body

    def create_static_rectangle(self, x, y, w, h, label):
        body = pymunk.Body(body_type=pymunk.Body.STATIC)
        body.position = (x, y)
        shape = pymunk.Poly.create_box(body, (w, h))
        return self._register(body, shape, label)

    def create_dynamic_circle(self, x, y, r, label):
        body = pymunk.Body()
        body.position = (x, y)
        shape = pymunk.Circle(body, r)
        return self._register(body, shape, label)

    def add_to_world(self, body):
        self.space.add(body, self._shapes[body])

    def set_body_static(self, body, static):
        body.body_type = pymunk.Body.STATIC if static else pymunk.Body.DYNAMIC
        if not static:
            body.activate()

    def is_static(self, body):
        return body.body_type == pymunk.Body.STATIC

    def set_body_velocity(self, body, velocity):
        body.velocity = tuple(velocity)

    def get_body_velocity(self, body):
        vx, vy = body.velocity
        return float(vx), float(vy)

    def body_state(self, body):
        x, y = body.position
        return float(x), float(y), float(body.angle)

    def set_world_gravity(self, y):
        self.space.gravity = (0, y)

    def label_of(self, body: pymunk.Body) -> str:
        return self._labels[self._shapes[body]]

    def on_collision_start(self, handler):
        self._handlers.append(handler)

    def _collect_started_pairs(self) -> List[Tuple[str, str]]:
        seen: Set[FrozenSet[int]] = set()
        pairs: List[Tuple[str, str]] = []

        def visit(arbiter):
            if not arbiter.is_first_contact:
                return
            shape_a, shape_b = arbiter.shapes
            key = frozenset((id(shape_a), id(shape_b)))
            if key in seen:
                return
            seen.add(key)
            pairs.append((self._labels.get(shape_a, ''),
                          self._labels.get(shape_b, '')))

        for body in self.space.bodies:
            if body.body_type == pymunk.Body.DYNAMIC:
                body.each_arbiter(visit)
        return pairs

    def step(self, dt):
        self.space.step(dt)
        pairs = self._collect_started_pairs()
        if not pairs:
            return
        logger.debug("Collision start: %s", pairs)
        for handler in list(self._handlers):
            handler(pairs)
