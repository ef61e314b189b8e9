"""
Scenario Loader for the Banker's Algorithm Simulator.

Loads and validates JSON scenario files describing Allocation, Max and
Available (or Total) resources.
"""

import json
from typing import Dict, List, Any

from models.system_state import SystemState, InvalidInputError


class ScenarioLoadError(Exception):
    """Exception raised when scenario file cannot be loaded or is invalid."""
    pass


# Classic textbook example (Silberschatz, Chapter 7.5.3)
TEXTBOOK_ALLOCATION = [
    [0, 1, 0],
    [2, 0, 0],
    [3, 0, 2],
    [2, 1, 1],
    [0, 0, 2]
]

TEXTBOOK_MAX = [
    [7, 5, 3],
    [3, 2, 2],
    [9, 0, 2],
    [2, 2, 2],
    [4, 3, 3]
]

TEXTBOOK_AVAILABLE = [3, 3, 2]


def textbook_scenario() -> SystemState:
    """
    Build the built-in 5 process x 3 resource example.

    Returns:
        SystemState for the textbook example (safe, sequence P1 P3 P4 P0 P2)
    """
    return SystemState.from_matrices(
        TEXTBOOK_ALLOCATION,
        TEXTBOOK_MAX,
        TEXTBOOK_AVAILABLE,
        resource_names=["A", "B", "C"],
        description="Textbook example: 5 processes, 3 resource types"
    )


def load_scenario(file_path: str) -> SystemState:
    """
    Load scenario from JSON file.

    Args:
        file_path: Path to scenario JSON file

    Returns:
        Validated SystemState

    Raises:
        ScenarioLoadError: If file cannot be loaded or is invalid
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ScenarioLoadError(f"Scenario file not found: {file_path}")
    except json.JSONDecodeError as e:
        raise ScenarioLoadError(f"Invalid JSON in scenario file: {e}")
    except UnicodeDecodeError as e:
        raise ScenarioLoadError(f"Scenario file is not valid UTF-8: {e}")
    except OSError as e:
        raise ScenarioLoadError(f"Cannot read scenario file {file_path}: {e}")

    return scenario_from_dict(data)


def scenario_from_dict(data: Dict[str, Any]) -> SystemState:
    """
    Build a SystemState from decoded scenario data.

    Accepts 'max_demand' as an alias of 'max', and 'total' in place of
    'available' (Available = Total - sum(Allocation[:, r])).

    Args:
        data: Scenario dictionary

    Returns:
        Validated SystemState

    Raises:
        ScenarioLoadError: If fields are missing or matrices are invalid
    """
    if not isinstance(data, dict):
        raise ScenarioLoadError("Scenario must be a JSON object")

    # Validate required fields
    if 'allocation' not in data:
        raise ScenarioLoadError("Scenario missing 'allocation' field")
    if 'max' not in data and 'max_demand' not in data:
        raise ScenarioLoadError("Scenario missing 'max' field")
    if 'available' not in data and 'total' not in data:
        raise ScenarioLoadError("Scenario missing 'available' (or 'total') field")

    allocation = data['allocation']
    max_demand = data['max'] if 'max' in data else data['max_demand']

    if 'available' in data:
        available = data['available']
    else:
        available = _available_from_total(data['total'], allocation)

    try:
        return SystemState.from_matrices(
            allocation,
            max_demand,
            available,
            resource_names=data.get('resources'),
            description=data.get('description', '')
        )
    except InvalidInputError as e:
        raise ScenarioLoadError(f"Invalid scenario matrices: {e}") from e


def _available_from_total(total: List[int], allocation: List[List[int]]) -> List[int]:
    """
    Derive Available from Total and Allocation.

    Critical validation: For each resource r, sum(allocation[:,r]) <= total[r]

    Args:
        total: [R] total instances per resource type
        allocation: [P][R] allocation matrix

    Returns:
        [R] available vector

    Raises:
        ScenarioLoadError: If allocations exceed totals or shapes do not match
    """
    if not isinstance(total, list) or not isinstance(allocation, list):
        raise ScenarioLoadError("'total' and 'allocation' must be arrays")

    available = list(total)
    for i, row in enumerate(allocation):
        if not isinstance(row, list) or len(row) != len(total):
            raise ScenarioLoadError(
                f"allocation row {i} does not match the {len(total)} resource types in 'total'"
            )
        for j, amount in enumerate(row):
            if not isinstance(amount, int) or not isinstance(available[j], int):
                raise ScenarioLoadError(f"allocation row {i}, column {j}: non-integer entry")
            available[j] -= amount

    for j, amount in enumerate(available):
        if amount < 0:
            raise ScenarioLoadError(
                f"VALIDATION FAILED: Resource {j} allocations ({total[j] - amount}) "
                f"exceed total instances ({total[j]})"
            )

    return available


def get_scenario_description(file_path: str) -> str:
    """
    Get description from scenario file without full loading.

    Args:
        file_path: Path to scenario JSON file

    Returns:
        Description string, or empty string if not present
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return ''
    if not isinstance(data, dict):
        return ''
    return data.get('description', '')
