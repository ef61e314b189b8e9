"""
System State model for the Banker's Algorithm Simulator.

Holds the three input matrices (Allocation, Max Demand, Available) required
by the safety algorithm and validates them before any simulation runs.
"""

import numpy as np
from typing import List, Optional, Sequence
from dataclasses import dataclass, field


class InvalidInputError(ValueError):
    """Exception raised when input matrices violate a Banker's Algorithm precondition."""
    pass


# Largest accepted matrix entry; keeps every entry and the released-resource sums
# well inside the int64 working arrays
MAX_ENTRY = np.iinfo(np.int32).max


def default_resource_names(num_resources: int) -> List[str]:
    """
    Build resource labels A, B, C, ... (R26, R27, ... past Z).

    Args:
        num_resources: Number of resource types

    Returns:
        List of resource labels
    """
    return [chr(65 + j) if j < 26 else f"R{j}" for j in range(num_resources)]


def _is_integer(value) -> bool:
    """Check for a plain or numpy integer (bools are rejected)."""
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def _check_vector(name: str, vector, length: int, row: Optional[int] = None) -> None:
    """Validate a single row/vector: list-shaped, right length, non-negative integers."""
    where = f"{name} row {row}" if row is not None else name

    if not isinstance(vector, (list, tuple, np.ndarray)):
        raise InvalidInputError(f"{where} must be a sequence of integers")

    if len(vector) != length:
        raise InvalidInputError(
            f"{where} has {len(vector)} entries, expected {length} "
            f"(one per resource type)"
        )

    for j, value in enumerate(vector):
        if not _is_integer(value):
            raise InvalidInputError(f"{where}, column {j}: {value!r} is not an integer")
        if value < 0:
            raise InvalidInputError(f"{where}, column {j}: {value} is negative")
        if value > MAX_ENTRY:
            raise InvalidInputError(
                f"{where}, column {j}: {value} exceeds the largest supported count ({MAX_ENTRY})"
            )


def validate_matrices(
    allocation: Sequence[Sequence[int]],
    max_demand: Sequence[Sequence[int]],
    available: Sequence[int]
) -> None:
    """
    Validate Banker's Algorithm input matrices.

    Checks (in order):
    1. Available is a vector of non-negative integers
    2. Allocation and Max Demand have the same number of rows
    3. Every row has one entry per resource type (len(available))
    4. All entries are non-negative integers
    5. Max[i][j] >= Allocation[i][j] for all i, j

    Args:
        allocation: [P][R] resources currently held by each process
        max_demand: [P][R] maximum resources each process may request
        available: [R] free resource instances

    Raises:
        InvalidInputError: Naming the first violated constraint
    """
    if not isinstance(available, (list, tuple, np.ndarray)):
        raise InvalidInputError("available must be a sequence of integers")
    num_resources = len(available)
    _check_vector("available", available, num_resources)

    for name, matrix in (("allocation", allocation), ("max", max_demand)):
        if not isinstance(matrix, (list, tuple, np.ndarray)):
            raise InvalidInputError(f"{name} must be a sequence of rows")

    if len(allocation) != len(max_demand):
        raise InvalidInputError(
            f"allocation has {len(allocation)} rows but max has {len(max_demand)} "
            f"(one row per process required in both)"
        )

    for i, (alloc_row, max_row) in enumerate(zip(allocation, max_demand)):
        _check_vector("allocation", alloc_row, num_resources, row=i)
        _check_vector("max", max_row, num_resources, row=i)

        for j in range(num_resources):
            if max_row[j] < alloc_row[j]:
                raise InvalidInputError(
                    f"P{i}: max[{i}][{j}] ({max_row[j]}) is less than "
                    f"allocation[{i}][{j}] ({alloc_row[j]})"
                )


@dataclass
class SystemState:
    """
    Input state for a Banker's Algorithm run.

    Attributes:
        allocation_matrix: [P][R] Current resources held by each process
        max_demand_matrix: [P][R] Maximum resource need declared by each process
        available_vector: [R] Free resource instances by type
        resource_names: [R] Display labels for resource types
        description: Free-text description of the scenario
    """
    allocation_matrix: np.ndarray
    max_demand_matrix: np.ndarray
    available_vector: np.ndarray
    resource_names: List[str] = field(default_factory=list)
    description: str = ""

    def __post_init__(self):
        """Fill in default resource labels."""
        if not self.resource_names:
            self.resource_names = default_resource_names(self.num_resources)

    @classmethod
    def from_matrices(
        cls,
        allocation: Sequence[Sequence[int]],
        max_demand: Sequence[Sequence[int]],
        available: Sequence[int],
        resource_names: Optional[List[str]] = None,
        description: str = ""
    ) -> "SystemState":
        """
        Validate input matrices and build a state from independent copies of them.

        Args:
            allocation: [P][R] allocation matrix
            max_demand: [P][R] max demand matrix
            available: [R] available vector
            resource_names: Optional [R] resource labels
            description: Optional scenario description

        Returns:
            SystemState owning its own numpy arrays

        Raises:
            InvalidInputError: If any precondition is violated
        """
        validate_matrices(allocation, max_demand, available)

        num_processes = len(allocation)
        num_resources = len(available)

        if resource_names is not None and (
            not isinstance(resource_names, (list, tuple))
            or not all(isinstance(name, str) for name in resource_names)
        ):
            raise InvalidInputError("resource names must be a list of strings")

        if resource_names is not None and len(resource_names) != num_resources:
            raise InvalidInputError(
                f"{len(resource_names)} resource names given for {num_resources} resource types"
            )

        # np.array always copies list input; reshape covers the n == 0 / m == 0 cases
        allocation_matrix = np.array(allocation, dtype=np.int64).reshape(num_processes, num_resources)
        max_demand_matrix = np.array(max_demand, dtype=np.int64).reshape(num_processes, num_resources)
        available_vector = np.array(available, dtype=np.int64).reshape(num_resources)

        return cls(
            allocation_matrix=allocation_matrix,
            max_demand_matrix=max_demand_matrix,
            available_vector=available_vector,
            resource_names=list(resource_names) if resource_names else [],
            description=description
        )

    @property
    def num_processes(self) -> int:
        """Number of processes in the system."""
        return self.allocation_matrix.shape[0]

    @property
    def num_resources(self) -> int:
        """Number of resource types in the system."""
        return self.available_vector.shape[0]

    @property
    def need_matrix(self) -> np.ndarray:
        """
        Get need matrix [P][R].
        Computed as: Need = Max - Allocation
        """
        return self.max_demand_matrix - self.allocation_matrix

    @property
    def total_vector(self) -> np.ndarray:
        """Total instances per resource type: Available + sum(Allocation[:, r])."""
        return self.available_vector + self.allocation_matrix.sum(axis=0)

    def to_dict(self) -> dict:
        """Serializable form of the input matrices (scenario file layout)."""
        return {
            'description': self.description,
            'resources': list(self.resource_names),
            'allocation': self.allocation_matrix.tolist(),
            'max': self.max_demand_matrix.tolist(),
            'available': self.available_vector.tolist()
        }

    def display(self) -> str:
        """
        Generate readable string representation of system state.

        Returns:
            Formatted string showing all matrices and vectors
        """
        output = []
        output.append("\n" + "="*60)
        output.append("SYSTEM STATE")
        output.append("="*60)

        if self.description:
            output.append(f"\n{self.description}")

        output.append(f"\nProcesses: {self.num_processes}, Resource types: {self.num_resources}")

        output.append("\nAvailable Resources:")
        output.append("  [" + ", ".join(
            f"{name}:{self.available_vector[j]:2}" for j, name in enumerate(self.resource_names)
        ) + "]")

        output.append("\nTotal Resources:")
        total = self.total_vector
        output.append("  [" + ", ".join(
            f"{name}:{total[j]:2}" for j, name in enumerate(self.resource_names)
        ) + "]")

        for title, matrix in (
            ("Allocation Matrix", self.allocation_matrix),
            ("Max Demand Matrix", self.max_demand_matrix),
            ("Need Matrix (Max - Allocation)", self.need_matrix),
        ):
            output.append(f"\n{title}:")
            output.append("       " + " ".join(f"{name:>3}" for name in self.resource_names))
            for i in range(self.num_processes):
                row = f"  P{i:<3}: "
                row += " ".join(f"{matrix[i][j]:3}" for j in range(self.num_resources))
                output.append(row)

        output.append("\n" + "="*60)
        return "\n".join(output)
