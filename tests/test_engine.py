import numpy as np
import pytest

from physics_maze.config import ConfigError, KeyPress
from physics_maze.model.engine import GameEngine


def test_bodies_match_emitted_obstacles(config, fake_world):
    engine = GameEngine(config, world=fake_world)

    walls = fake_world.labelled('wall')
    assert len(walls) == engine.wall_count
    assert len(fake_world.labelled('boundary')) == 4
    assert len(fake_world.labelled('goal')) == 1
    assert len(fake_world.labelled('ball')) == 1
    assert all(b.static for b in walls)
    assert all(b.in_world for b in fake_world.bodies)
    assert fake_world.gravity == 0.0
    assert engine.open_edges == config.grid.rows * config.grid.cols - 1


def test_goal_is_opposite_corner(config, fake_world):
    engine = GameEngine(config, world=fake_world)
    goal = fake_world.labelled('goal')[0]
    ball = fake_world.labelled('ball')[0]

    assert engine.goal_cell == (3, 4)
    assert (goal.x, goal.y) == (450, 350)
    assert (ball.x, ball.y) == (50, 50)


def test_solution_path_connects_player_and_goal(config, fake_world):
    engine = GameEngine(config, world=fake_world)
    path = engine.solution_path()
    assert path[0] == (0, 0)
    assert path[-1] == (3, 4)


def test_same_seed_same_maze(config, fake_world):
    a = GameEngine(config, world=fake_world)
    b = GameEngine(config, world=type(fake_world)())
    assert a.generation_start == b.generation_start
    np.testing.assert_array_equal(a.verticals, b.verticals)
    np.testing.assert_array_equal(a.horizontals, b.horizontals)


def test_invalid_config_rejected_before_generation(make_config, fake_world):
    with pytest.raises(ConfigError):
        GameEngine(make_config(rows=0), world=fake_world)
    assert fake_world.bodies == []


def test_press_scales_velocity_by_tick_rate(config, fake_world):
    engine = GameEngine(config, world=fake_world)
    ball = fake_world.labelled('ball')[0]

    assert engine.press('ArrowRight')
    assert not engine.press('Escape')
    assert ball.velocity == (120.0, 0.0)
    assert engine.key_presses == 1
    assert engine.first_input_step == 0


def test_scripted_presses_apply_on_their_step(config, fake_world):
    config.input.script = [KeyPress(step=1, key='d'), KeyPress(step=3, key='s')]
    engine = GameEngine(config, world=fake_world)
    ball = fake_world.labelled('ball')[0]

    engine.step()
    assert ball.velocity == (120.0, 0.0)
    engine.step()
    assert engine.key_presses == 1
    engine.step()
    assert ball.velocity == (120.0, 120.0)
    assert engine.first_input_step == 1


def test_win_releases_walls_and_enables_gravity(config, fake_world):
    engine = GameEngine(config, world=fake_world)
    victories = []
    engine.on_victory(victories.append)

    engine.step()
    fake_world.queue_collision('goal', 'ball')
    state = engine.step()

    assert engine.won
    assert engine.won_at_step == 2
    assert victories == [2]
    assert state.outcome == 'won'
    assert state.gravity == config.physics.win_gravity
    assert fake_world.gravity == config.physics.win_gravity
    assert not any(b.static for b in fake_world.labelled('wall'))
    assert all(b.static for b in fake_world.labelled('boundary'))
    assert all(b.static for b in fake_world.labelled('goal'))
    assert engine.released_walls == engine.wall_count


def test_repeated_goal_contact_does_not_repeat_release(config, fake_world):
    engine = GameEngine(config, world=fake_world)
    victories = []
    engine.on_victory(victories.append)

    fake_world.queue_collision('ball', 'goal')
    engine.step()
    calls = fake_world.static_calls

    for _ in range(3):
        fake_world.queue_collision('ball', 'goal')
        engine.step()

    assert fake_world.static_calls == calls
    assert victories == [1]
    assert engine.won_at_step == 1


def test_other_collisions_do_not_win(config, fake_world):
    engine = GameEngine(config, world=fake_world)
    fake_world.queue_collision('ball', 'wall')
    fake_world.queue_collision('ball', 'boundary')
    engine.step()
    assert not engine.won
    assert all(b.static for b in fake_world.labelled('wall'))


def test_finishes_after_post_win_steps(config, fake_world):
    engine = GameEngine(config, world=fake_world)
    fake_world.queue_collision('ball', 'goal')
    engine.step()
    for _ in range(config.physics.post_win_steps - 1):
        assert not engine.is_finished()
        engine.step()
    engine.step()
    assert engine.is_finished()
    assert engine.current_step == config.physics.post_win_steps + 1


def test_finishes_at_max_steps(make_config, fake_world):
    engine = GameEngine(make_config(max_steps=5), world=fake_world)
    steps = 0
    while not engine.is_finished():
        engine.step()
        steps += 1
    assert steps == 5
    assert not engine.won


def test_snapshot_contents(config, fake_world):
    engine = GameEngine(config, world=fake_world)
    engine.press('d')
    state = engine.step()

    assert state.step == 1
    assert state.outcome == 'in_progress'
    assert state.ball.x == pytest.approx(50 + 120.0 / 60)
    assert state.ball.width == pytest.approx(50)
    assert len(state.bodies) == len(engine.obstacles) + 1
    assert state.to_csv_rows() == [{
        'step': 1, 'x': 52.0, 'y': 50.0, 'vx': 120.0, 'vy': 0.0,
        'outcome': 'in_progress',
    }]


def test_autopilot_presses_keys(make_config, fake_world):
    config = make_config()
    config.input.autopilot = True
    engine = GameEngine(config, world=fake_world)
    for _ in range(config.input.autopilot_interval):
        engine.step()
    assert engine.key_presses == 1


def test_summary(config, fake_world):
    engine = GameEngine(config, world=fake_world)
    engine.step()
    summary = engine.get_summary()
    assert summary['rows'] == 4 and summary['cols'] == 5
    assert summary['open_edges'] == 19
    assert summary['total_steps'] == 1
    assert summary['won'] is False
    assert summary['solution_length'] == len(engine.solution_path())
