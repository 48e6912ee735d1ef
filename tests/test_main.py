import csv

import pytest

from physics_maze.main import main


def test_headless_run_writes_outputs(tmp_path):
    status = main(['--rows', '3', '--cols', '4', '--steps', '20', '--seed', '5',
                   '--quiet', '--out-dir', str(tmp_path)])
    assert status == 0

    with open(tmp_path / 'trajectory.csv', newline='') as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 20
    assert (tmp_path / 'final_state.png').exists()


def test_exports_can_be_disabled(tmp_path):
    status = main(['--rows', '2', '--cols', '2', '--steps', '5', '--quiet',
                   '--no-csv', '--no-snapshot', '--out-dir', str(tmp_path)])
    assert status == 0
    assert list(tmp_path.iterdir()) == []


def test_report_printed(tmp_path, capsys):
    status = main(['--rows', '2', '--cols', '3', '--steps', '3', '--no-csv',
                   '--no-snapshot', '--out-dir', str(tmp_path)])
    assert status == 0
    out = capsys.readouterr().out
    assert 'PHYSICS MAZE SESSION REPORT' in out
    assert 'Grid:                  2 x 3' in out


def test_missing_config_file(tmp_path, capsys):
    assert main(['--config', str(tmp_path / 'missing.yaml')]) == 1
    assert 'not found' in capsys.readouterr().err


def test_bad_dimensions_rejected(tmp_path, capsys):
    assert main(['--rows', '0', '--quiet', '--out-dir', str(tmp_path)]) == 1
    assert 'Error loading config' in capsys.readouterr().err


def test_config_file_is_used(tmp_path):
    path = tmp_path / 'game.yaml'
    path.write_text(
        "grid: {rows: 2, cols: 2}\n"
        "viewport: {width: 200, height: 200}\n"
        "simulation: {max_steps: 4}\n"
        "export: {snapshot: false}\n"
    )
    out_dir = tmp_path / 'out'
    assert main(['--config', str(path), '--quiet', '--out-dir', str(out_dir)]) == 0
    with open(out_dir / 'trajectory.csv', newline='') as f:
        assert len(list(csv.DictReader(f))) == 4


@pytest.mark.parametrize("text", [
    "grid: {rows: two, cols: 3}\n",
    "input: {script: [{step: soon, key: d}]}\n",
    "just a string\n",
    "walls: {thickness: null}\n",
    "grid: [3, 4]\n",
    "simulation: {seed: abc}\n",
])
def test_malformed_config_values_exit_cleanly(tmp_path, capsys, text):
    path = tmp_path / 'bad.yaml'
    path.write_text(text)
    assert main(['--config', str(path), '--quiet', '--out-dir', str(tmp_path / 'out')]) == 1
    assert 'Error loading config' in capsys.readouterr().err
    assert not (tmp_path / 'out').exists()
