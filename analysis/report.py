"""
Text reports for the Banker's Algorithm Simulator.

Renders verdicts and individual step snapshots for the terminal, and
exports a finished run to JSON.
"""

import json
from typing import List, Optional

from models.snapshot import SafetyResult, StepSnapshot
from models.system_state import SystemState, default_resource_names


def format_verdict(result: SafetyResult) -> str:
    """Short system status: 'Safe State' or 'Unsafe State'."""
    return "Safe State" if result.safe else "Unsafe State"


def _format_row(row, prev_row=None) -> str:
    """Format a matrix row, annotating changes against the previous snapshot."""
    cells = []
    for j, value in enumerate(row):
        if prev_row is not None:
            diff = value - prev_row[j]
            if diff > 0:
                cells.append(f"{value}(+{diff})")
                continue
            if diff < 0:
                cells.append(f"{value}({diff})")
                continue
        cells.append(str(value))
    return "[" + ", ".join(cells) + "]"


def _format_matrix(title: str, matrix, prev_matrix=None) -> List[str]:
    lines = [f"{title}:"]
    for i, row in enumerate(matrix):
        prev_row = prev_matrix[i] if prev_matrix is not None else None
        lines.append(f"  P{i}: {_format_row(row, prev_row)}")
    return lines


def _format_vector(label: str, vector, resource_names: List[str]) -> str:
    cells = ", ".join(f"{name}={value}" for name, value in zip(resource_names, vector))
    return f"{label}: [{cells}]"


def format_step(
    steps: List[StepSnapshot],
    index: int,
    resource_names: Optional[List[str]] = None
) -> str:
    """
    Render one snapshot of a run.

    Shows the executed process with its maximum requirement, the allocation
    matrix (with +/- deltas against the previous snapshot), the need matrix,
    and the available and work vectors.

    Args:
        steps: Full snapshot trace
        index: Index of the snapshot to render
        resource_names: Optional resource labels (defaults to A, B, C, ...)

    Returns:
        Multi-line text block

    Raises:
        IndexError: If index is outside the trace
    """
    if index < 0 or index >= len(steps):
        raise IndexError(f"Step {index} out of range (0..{len(steps) - 1})")

    step = steps[index]
    prev = steps[index - 1] if index > 0 else None
    if resource_names is None:
        resource_names = default_resource_names(len(step.available))

    max_required = ", ".join(str(v) for v in step.max_required)
    phase = "after execution" if step.completed else "before execution"

    lines = [f"Step {index + 1}/{len(steps)} ({phase})"]
    lines.append(f"Process Executed: P{step.process} (Max Required: [{max_required}])")
    lines.append("")
    lines.extend(_format_matrix("Allocation Matrix", step.allocation, prev.allocation if prev else None))
    lines.append("")
    lines.extend(_format_matrix("Need Matrix", step.need))
    lines.append("")
    lines.append(_format_vector("Available", step.available, resource_names))
    lines.append(_format_vector("Work", step.work, resource_names))

    if step.requested is not None:
        lines.append(_format_vector("Requested", step.requested, resource_names))

    if step.completed:
        lines.append("")
        lines.append(f"Process P{step.process} completed and released resources.")

    return "\n".join(lines)


def format_summary(result: SafetyResult) -> str:
    """
    Summarize a run.

    Returns:
        Verdict, safe sequence and snapshot count
    """
    lines = [
        f"System State: {format_verdict(result)}",
        f"Safe Sequence: {result.format_sequence()}",
        f"Steps Recorded: {len(result.steps)}"
    ]
    if not result.safe and result.sequence:
        scheduled = ", ".join(f"P{pid}" for pid in result.sequence)
        lines.append(f"Scheduled before stall: {scheduled}")
    return "\n".join(lines)


def export_result(result: SafetyResult, file_path: str, state: Optional[SystemState] = None) -> None:
    """
    Write a run to a JSON file.

    Args:
        result: SafetyResult to export
        file_path: Destination path
        state: Optional input state, stored under 'input'
    """
    data = {}
    if state is not None:
        data['input'] = state.to_dict()
    data['result'] = result.to_dict()

    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
