"""
Banker's Algorithm safety simulation for the Simulator.

Runs the safety algorithm over a static set of input matrices and records
every intermediate state so the run can be replayed step by step.
"""

import numpy as np
from typing import Optional, Sequence

from models.snapshot import SafetyResult, StepSnapshot
from models.system_state import SystemState
from utils.logger import SimulatorLogger


def _compute_need(max_demand: np.ndarray, allocation: np.ndarray, finish: np.ndarray) -> np.ndarray:
    """Need = Max - Allocation, with rows of finished processes zeroed."""
    need = max_demand - allocation
    need[finish] = 0
    return need


def simulate_state(
    system_state: SystemState,
    logger: Optional[SimulatorLogger] = None
) -> SafetyResult:
    """
    Run the Banker's safety algorithm and record a snapshot trace.

    Algorithm:
    1. Initialize Work = Available, Finish = [False] * num_processes
    2. Scan processes in index order; for each i where Finish[i] == False
       and Need[i] <= Work:
       - record a "before" snapshot
       - Work += Allocation[i], Finish[i] = True, append i to the sequence
       - Available += Allocation[i], Allocation[i] = 0
       - recompute Need (finished rows become zero)
       - record an "after" snapshot carrying the need just satisfied
    3. Repeat full passes until every process finished or a pass makes no progress
    4. SAFE if every process finished, otherwise UNSAFE (partial trace kept)

    A pass keeps scanning from i + 1 after a process finishes, so the
    sequence follows first-eligible-pass order.

    Time Complexity: O(P²×R)

    Args:
        system_state: Validated input state (never modified)
        logger: Optional logger receiving a debug line per snapshot

    Returns:
        SafetyResult with verdict, safe sequence and snapshot trace
    """
    num_processes = system_state.num_processes

    # Working copies; the input state is never touched
    allocation = system_state.allocation_matrix.copy()
    max_demand = system_state.max_demand_matrix.copy()
    available = system_state.available_vector.copy()
    work = available.copy()
    finish = np.zeros(num_processes, dtype=bool)
    need = _compute_need(max_demand, allocation, finish)

    sequence = []
    steps = []

    made_progress = True
    while len(sequence) < num_processes and made_progress:
        made_progress = False

        for i in range(num_processes):
            if finish[i] or not np.all(need[i] <= work):
                continue

            steps.append(StepSnapshot.capture(i, allocation, need, available, work, completed=False))
            if logger:
                logger.log_snapshot(len(steps) - 1, steps[-1])

            # Process runs to completion and returns everything it holds
            work += allocation[i]
            finish[i] = True
            sequence.append(i)
            made_progress = True

            available += allocation[i]
            allocation[i] = 0

            requested = need[i].copy()
            need = _compute_need(max_demand, allocation, finish)

            steps.append(StepSnapshot.capture(
                i, allocation, need, available, work,
                completed=True,
                requested=requested
            ))
            if logger:
                logger.log_snapshot(len(steps) - 1, steps[-1])

    result = SafetyResult(
        safe=len(sequence) == num_processes,
        sequence=sequence,
        steps=steps
    )

    if logger:
        logger.log_verdict(result)

    return result


def simulate(
    allocation: Sequence[Sequence[int]],
    max_demand: Sequence[Sequence[int]],
    available: Sequence[int],
    logger: Optional[SimulatorLogger] = None
) -> SafetyResult:
    """
    Check whether a state is safe using Banker's Algorithm.

    Args:
        allocation: [P][R] resources currently held by each process
        max_demand: [P][R] maximum resources each process may request
        available: [R] free resource instances
        logger: Optional logger for a per-step trace

    Returns:
        SafetyResult(safe, sequence, steps)

    Raises:
        InvalidInputError: If the matrices are malformed (ragged, negative,
            mismatched dimensions, or max < allocation)

    References:
        Silberschatz, A., Galvin, P. B., & Gagne, G. (2018).
        Operating System Concepts (10th ed.). Chapter 7.5: Deadlock Avoidance.
    """
    system_state = SystemState.from_matrices(allocation, max_demand, available)
    return simulate_state(system_state, logger)
