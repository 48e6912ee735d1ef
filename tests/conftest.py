"""Shared fixtures for physics maze tests."""

from typing import List, Tuple

import numpy as np
import pytest

from physics_maze.config import (
    GameConfig, GridConfig, ViewportConfig, WallConfig, PhysicsConfig, InputConfig,
)
from physics_maze.physics.world import PhysicsWorld


class FakeBody:
    def __init__(self, x, y, label, static, size):
        self.x = x
        self.y = y
        self.label = label
        self.static = static
        self.size = size
        self.velocity = (0.0, 0.0)
        self.in_world = False


class FakeWorld(PhysicsWorld):
    """Records calls and lets tests inject collision-start pairs."""

    def __init__(self):
        self.bodies: List[FakeBody] = []
        self.gravity = None
        self.handlers = []
        self.pending: List[Tuple[str, str]] = []
        self.static_calls = 0
        self.steps = 0

    def create_static_rectangle(self, x, y, w, h, label):
        return FakeBody(x, y, label, True, (w, h))

    def create_dynamic_circle(self, x, y, r, label):
        return FakeBody(x, y, label, False, (2 * r, 2 * r))

    def add_to_world(self, body):
        body.in_world = True
        self.bodies.append(body)

    def set_body_static(self, body, static):
        self.static_calls += 1
        body.static = static

    def is_static(self, body):
        return body.static

    def set_body_velocity(self, body, velocity):
        body.velocity = tuple(velocity)

    def get_body_velocity(self, body):
        return body.velocity

    def body_state(self, body):
        return body.x, body.y, 0.0

    def set_world_gravity(self, y):
        self.gravity = y

    def on_collision_start(self, handler):
        self.handlers.append(handler)

    def queue_collision(self, label_a, label_b):
        self.pending.append((label_a, label_b))

    def step(self, dt):
        self.steps += 1
        for body in self.bodies:
            if not body.static:
                body.x += body.velocity[0] * dt
                body.y += body.velocity[1] * dt
        pairs, self.pending = self.pending, []
        if pairs:
            for handler in self.handlers:
                handler(pairs)

    def labelled(self, label):
        return [b for b in self.bodies if b.label == label]


@pytest.fixture
def fake_world():
    return FakeWorld()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


def _make_config(rows=4, cols=5, **overrides) -> GameConfig:
    config = GameConfig(
        grid=GridConfig(rows=rows, cols=cols),
        viewport=ViewportConfig(width=cols * 100, height=rows * 100),
        walls=WallConfig(),
        physics=PhysicsConfig(post_win_steps=10),
        input=InputConfig(),
        max_steps=100,
        seed=42,
    )
    for name, value in overrides.items():
        setattr(config, name, value)
    return config


@pytest.fixture
def make_config():
    return _make_config


@pytest.fixture
def config():
    return _make_config()
