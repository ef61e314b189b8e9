"""
Step snapshot model for the Banker's Algorithm Simulator.

Every step of a safety run is recorded as an immutable snapshot so the
whole run can be replayed (or exported) after the simulation has finished.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Vector = Tuple[int, ...]
Matrix = Tuple[Vector, ...]


def _freeze_vector(values: np.ndarray) -> Vector:
    return tuple(values.tolist())


def _freeze_matrix(values: np.ndarray) -> Matrix:
    return tuple(tuple(row) for row in values.tolist())


@dataclass(frozen=True)
class StepSnapshot:
    """
    State of the simulation at one moment of a process's turn.

    Each scheduled process produces two snapshots: one before it runs
    (completed=False) and one after it has released its resources
    (completed=True).

    Attributes:
        process: Index of the process handled at this step
        allocation: [P][R] Allocation matrix at this moment
        need: [P][R] Need matrix at this moment (finished rows are zero)
        available: [R] Available vector at this moment
        work: [R] Work vector at this moment
        completed: False for the pre-execution view, True for post-execution
        requested: [R] Need satisfied at this step (completion snapshots only)
    """
    process: int
    allocation: Matrix
    need: Matrix
    available: Vector
    work: Vector
    completed: bool = False
    requested: Optional[Vector] = None

    @classmethod
    def capture(
        cls,
        process: int,
        allocation: np.ndarray,
        need: np.ndarray,
        available: np.ndarray,
        work: np.ndarray,
        completed: bool = False,
        requested: Optional[np.ndarray] = None
    ) -> "StepSnapshot":
        """Copy the working arrays into a new snapshot."""
        return cls(
            process=process,
            allocation=_freeze_matrix(allocation),
            need=_freeze_matrix(need),
            available=_freeze_vector(available),
            work=_freeze_vector(work),
            completed=completed,
            requested=_freeze_vector(requested) if requested is not None else None
        )

    @property
    def max_required(self) -> Vector:
        """Allocation + Need of the handled process (its declared maximum before it finishes)."""
        return tuple(
            a + n for a, n in zip(self.allocation[self.process], self.need[self.process])
        )

    def to_dict(self) -> dict:
        """Serializable form; 'requested' only appears on completion snapshots."""
        data = {
            'process': self.process,
            'allocation': [list(row) for row in self.allocation],
            'need': [list(row) for row in self.need],
            'available': list(self.available),
            'work': list(self.work),
            'completed': self.completed,
        }
        if self.requested is not None:
            data['requested'] = list(self.requested)
        return data


@dataclass
class SafetyResult:
    """
    Outcome of a Banker's safety run.

    Attributes:
        safe: True if every process could be scheduled
        sequence: Process indices in the order they were declared eligible
        steps: Before/after snapshot pairs, one pair per scheduled process
    """
    safe: bool
    sequence: List[int] = field(default_factory=list)
    steps: List[StepSnapshot] = field(default_factory=list)

    def format_sequence(self) -> str:
        """Human-readable safe sequence, e.g. 'P1 → P3 → P4 → P0 → P2'."""
        if not self.safe:
            return "No Safe Sequence Found"
        return " → ".join(f"P{i}" for i in self.sequence)

    def to_dict(self) -> dict:
        """Serializable form of the whole result."""
        return {
            'safe': self.safe,
            'sequence': list(self.sequence),
            'steps': [step.to_dict() for step in self.steps]
        }
