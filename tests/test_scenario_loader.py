"""
Scenario Loader Tests - JSON scenario files and the built-in example
"""

import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from algorithms.safety import simulate_state
from models.system_state import InvalidInputError
from utils.scenario_loader import (
    load_scenario,
    scenario_from_dict,
    textbook_scenario,
    get_scenario_description,
    ScenarioLoadError,
)


SCENARIOS_DIR = project_root / "scenarios"


def _write(tmp_path, data, name="scenario.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding='utf-8')
    return str(path)


def test_bundled_textbook_scenario():
    """scenarios/textbook.json loads and is safe."""
    state = load_scenario(str(SCENARIOS_DIR / "textbook.json"))

    assert state.num_processes == 5
    assert state.resource_names == ["A", "B", "C"]
    assert "Textbook" in state.description

    result = simulate_state(state)
    assert result.safe
    assert result.sequence == [1, 3, 4, 0, 2]


def test_bundled_unsafe_scenario():
    """scenarios/unsafe.json derives Available from Total and stalls after P1."""
    state = load_scenario(str(SCENARIOS_DIR / "unsafe.json"))
    assert state.available_vector.tolist() == [1, 0]

    result = simulate_state(state)
    assert not result.safe
    assert result.sequence == [1]


def test_bundled_all_ready_scenario():
    state = load_scenario(str(SCENARIOS_DIR / "all_ready.json"))
    result = simulate_state(state)

    assert result.sequence == [0, 1, 2, 3]
    assert state.resource_names == ["CPU", "Disk", "Printer"]


def test_textbook_scenario_builtin():
    """Built-in example matches the bundled file."""
    builtin = textbook_scenario()
    bundled = load_scenario(str(SCENARIOS_DIR / "textbook.json"))

    assert builtin.allocation_matrix.tolist() == bundled.allocation_matrix.tolist()
    assert builtin.max_demand_matrix.tolist() == bundled.max_demand_matrix.tolist()
    assert builtin.available_vector.tolist() == bundled.available_vector.tolist()


def test_max_demand_alias():
    state = scenario_from_dict({
        'allocation': [[1, 0]],
        'max_demand': [[2, 2]],
        'available': [1, 2]
    })
    assert state.need_matrix.tolist() == [[1, 2]]
    assert state.resource_names == ["A", "B"]


def test_total_exceeded():
    """Allocations above the declared total are rejected."""
    try:
        scenario_from_dict({
            'allocation': [[2, 0], [2, 1]],
            'max': [[3, 1], [3, 1]],
            'total': [3, 2]
        })
        assert False, "Should have detected allocations above total"
    except ScenarioLoadError as e:
        assert "exceed total" in str(e)


def test_missing_fields(tmp_path):
    for missing in ('allocation', 'max', 'available'):
        data = {'allocation': [[0]], 'max': [[1]], 'available': [1]}
        del data[missing]
        path = _write(tmp_path, data)
        try:
            load_scenario(path)
            assert False, f"Should reject scenario without '{missing}'"
        except ScenarioLoadError as e:
            assert missing in str(e)


def test_invalid_matrices_chained(tmp_path):
    """Matrix violations surface as ScenarioLoadError chained from InvalidInputError."""
    path = _write(tmp_path, {'allocation': [[3]], 'max': [[1]], 'available': [1]})
    try:
        load_scenario(path)
        assert False, "Should reject max < allocation"
    except ScenarioLoadError as e:
        assert isinstance(e.__cause__, InvalidInputError)


def test_missing_file_and_bad_json(tmp_path):
    try:
        load_scenario(str(tmp_path / "nope.json"))
        assert False, "Should reject missing file"
    except ScenarioLoadError as e:
        assert "not found" in str(e)

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding='utf-8')
    try:
        load_scenario(str(bad))
        assert False, "Should reject invalid JSON"
    except ScenarioLoadError as e:
        assert "Invalid JSON" in str(e)


def test_non_object_scenario(tmp_path):
    path = _write(tmp_path, [1, 2, 3])
    try:
        load_scenario(path)
        assert False, "Should reject a top-level array"
    except ScenarioLoadError:
        pass


def test_scenario_description(tmp_path):
    assert "Unsafe" in get_scenario_description(str(SCENARIOS_DIR / "unsafe.json"))
    assert get_scenario_description(str(tmp_path / "missing.json")) == ''
    assert get_scenario_description(_write(tmp_path, {'allocation': []})) == ''


def test_unreadable_scenario_paths(tmp_path):
    """Directories and non-UTF-8 files surface as ScenarioLoadError."""
    try:
        load_scenario(str(tmp_path))
        assert False, "Should reject a directory"
    except ScenarioLoadError as e:
        assert "Cannot read scenario file" in str(e)

    binary = tmp_path / "utf16.json"
    binary.write_bytes(b'\xff\xfe{\x00}\x00')
    try:
        load_scenario(str(binary))
        assert False, "Should reject a file that is not UTF-8"
    except ScenarioLoadError as e:
        assert "UTF-8" in str(e)


def test_resources_must_be_a_list(tmp_path):
    """A non-list 'resources' field is a load error, not a TypeError."""
    for resources in (5, "ABC", [1, 2]):
        path = _write(tmp_path, {
            'resources': resources,
            'allocation': [[0, 1]],
            'max': [[1, 1]],
            'available': [1, 1]
        })
        try:
            load_scenario(path)
            assert False, f"Should reject resources={resources!r}"
        except ScenarioLoadError as e:
            assert isinstance(e.__cause__, InvalidInputError)
            assert "resource names" in str(e)
