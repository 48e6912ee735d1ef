import csv

import numpy as np
import pytest

from physics_maze.export.csv_writer import CSVWriter
from physics_maze.export.reporter import Reporter
from physics_maze.export.visualizer import Visualizer, body_corners
from physics_maze.model.engine import GameEngine
from physics_maze.model.state import BodySnapshot


@pytest.fixture
def engine(config, fake_world):
    engine = GameEngine(config, world=fake_world)
    engine.press('d')
    return engine


def test_csv_writer_logs_one_row_per_step(tmp_path, engine):
    path = tmp_path / 'out' / 'trajectory.csv'
    with CSVWriter(path) as writer:
        for _ in range(3):
            writer.append(engine.step())

    with open(path, newline='') as f:
        rows = list(csv.DictReader(f))
    assert [r['step'] for r in rows] == ['1', '2', '3']
    assert rows[0]['outcome'] == 'in_progress'
    assert float(rows[0]['vx']) == pytest.approx(120.0)
    assert writer.rows_written == 3
    assert writer.closed


def test_csv_writer_opens_lazily_and_flushes(tmp_path, engine):
    path = tmp_path / 'trajectory.csv'
    writer = CSVWriter(path)
    assert writer.closed and not path.exists()

    writer.append(engine.step())
    assert not writer.closed
    with open(path, newline='') as f:
        assert len(list(csv.DictReader(f))) == 1

    writer.close()
    writer.close()
    assert writer.closed


def test_body_corners_rotate_about_center():
    body = BodySnapshot('wall', 'horizontal', 10, 20, np.pi / 2, 4, 2, False)
    corners = body_corners(body)
    np.testing.assert_allclose(corners.mean(axis=0), [10, 20])
    spans = corners.max(axis=0) - corners.min(axis=0)
    np.testing.assert_allclose(spans, [2, 4], atol=1e-9)


def test_snapshot_and_gif_written(tmp_path, engine, config):
    visualizer = Visualizer(config.viewport.width, config.viewport.height)
    state = engine.step()
    visualizer.buffer_frame(state)
    visualizer.buffer_frame(engine.step())

    visualizer.save_snapshot(state, tmp_path / 'final.png')
    visualizer.generate_gif(tmp_path / 'session.gif', fps=10)

    assert (tmp_path / 'final.png').stat().st_size > 0
    assert (tmp_path / 'session.gif').stat().st_size > 0


def test_report_mentions_outcome(tmp_path, engine, fake_world):
    reporter = Reporter('configs/default.yaml', 42)
    reporter.update(engine.step())
    fake_world.queue_collision('ball', 'goal')
    reporter.update(engine.step())

    report = reporter.generate_summary(engine.get_summary(), tmp_path, True, False, False)
    assert 'WON at step 2' in report
    assert 'Random Seed: 42' in report
    assert 'trajectory.csv' in report
    assert 'Snapshot:   (disabled)' in report
    assert reporter.distance_travelled == pytest.approx(2.0)
