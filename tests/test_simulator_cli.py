"""
Simulator CLI Tests - end-to-end runs through simulator.main()
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from simulator import main, run_simulation, play_steps
from utils.logger import SimulatorLogger
from utils.scenario_loader import textbook_scenario


SCENARIOS_DIR = project_root / "scenarios"


def test_example_run(capsys):
    """--example prints the verdict and safe sequence."""
    assert main(['--example']) == 0

    out = capsys.readouterr().out
    assert "System State: Safe State" in out
    assert "Safe Sequence: P1 → P3 → P4 → P0 → P2" in out


def test_unsafe_scenario_exit_code(capsys):
    """An unsafe state is a normal result, not an error."""
    assert main(['--scenario', str(SCENARIOS_DIR / "unsafe.json")]) == 0

    out = capsys.readouterr().out
    assert "Unsafe State" in out
    assert "[WARNING] UNSAFE STATE" in out


def test_missing_scenario(capsys, tmp_path):
    assert main(['--scenario', str(tmp_path / "missing.json")]) == 1
    assert "[ERROR] Failed to load scenario" in capsys.readouterr().out


def test_source_required():
    with pytest.raises(SystemExit):
        main([])


def test_single_step(capsys):
    assert main(['--example', '--step', '2']) == 0
    assert "Step 2/10 (after execution)" in capsys.readouterr().out

    assert main(['--example', '--step', '11']) == 1
    assert "out of range" in capsys.readouterr().out


def test_all_steps(capsys):
    assert main(['--example', '--steps']) == 0
    out = capsys.readouterr().out
    assert "Step 1/10" in out
    assert "Step 10/10" in out


def test_play(capsys):
    assert main(['--example', '--play', '--delay', '0']) == 0
    out = capsys.readouterr().out

    assert "[1/10]" in out
    assert "[10/10]" in out
    assert ">>> P1 runs and releases [A=2, B=0, C=0]" in out


def test_export_and_log_file(tmp_path, capsys):
    export_path = tmp_path / "result.json"
    log_path = tmp_path / "run.log"

    code = main([
        '--example',
        '--export', str(export_path),
        '--log-file', str(log_path),
        '--verbose'
    ])
    assert code == 0

    data = json.loads(export_path.read_text(encoding='utf-8'))
    assert data['result']['sequence'] == [1, 3, 4, 0, 2]

    log = log_path.read_text(encoding='utf-8')
    assert log.startswith("Banker's Algorithm Log")
    assert "[DEBUG] System State:" in log
    assert "Result exported to" in capsys.readouterr().out


def test_run_simulation_returns_result(capsys):
    result = run_simulation(textbook_scenario())
    assert result.safe
    assert result.sequence == [1, 3, 4, 0, 2]


def test_play_steps_from_offset(capsys):
    state = textbook_scenario()
    result = run_simulation(state)
    capsys.readouterr()

    logger = SimulatorLogger()
    play_steps(result, state, logger, start=8)
    out = capsys.readouterr().out

    assert "[9/10]" in out
    assert "[10/10]" in out
    assert "[8/10]" not in out


def test_scenario_directory_exits_cleanly(capsys, tmp_path):
    assert main(['--scenario', str(tmp_path)]) == 1
    assert "[ERROR] Failed to load scenario" in capsys.readouterr().out


def test_scenario_bad_resources_exits_cleanly(capsys, tmp_path):
    path = tmp_path / "bad_resources.json"
    path.write_text(json.dumps({
        'resources': 5,
        'allocation': [[0]],
        'max': [[1]],
        'available': [1]
    }), encoding='utf-8')

    assert main(['--scenario', str(path)]) == 1
    assert "resource names" in capsys.readouterr().out


def test_unwritable_log_file(capsys, tmp_path):
    log_path = tmp_path / "no_such_dir" / "run.log"
    assert main(['--example', '--log-file', str(log_path)]) == 1
    assert "[ERROR] Cannot open log file" in capsys.readouterr().out


def test_unwritable_export(capsys, tmp_path):
    export_path = tmp_path / "no_such_dir" / "result.json"
    assert main(['--example', '--export', str(export_path)]) == 1
    assert "[ERROR] Cannot write export file" in capsys.readouterr().out


def test_play_from_step(capsys):
    """--play N starts the replay at step N."""
    assert main(['--example', '--play', '9', '--delay', '0']) == 0
    out = capsys.readouterr().out
    assert "[9/10]" in out
    assert "[10/10]" in out
    assert "[8/10]" not in out

    assert main(['--example', '--play', '11', '--delay', '0']) == 1
    assert "out of range" in capsys.readouterr().out
