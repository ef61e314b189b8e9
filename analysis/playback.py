"""
Playback controller for the Banker's Algorithm Simulator.

Owns the replay position over a recorded snapshot trace so a front end can
step forward, step back, jump, or autoplay through a finished run.
"""

import time
from typing import Iterator, List, Optional, Tuple

from models.snapshot import StepSnapshot


class PlaybackController:
    """
    Replay state over a list of StepSnapshot objects.

    Attributes:
        steps: Loaded snapshot trace (empty until load_steps)
        current_index: Index of the snapshot on display
        last_transition: (previous, next) pair when the last move went forward
            onto a completion snapshot, i.e. a step whose resource flow should
            be animated; None otherwise
    """

    def __init__(self, steps: Optional[List[StepSnapshot]] = None):
        self.steps: List[StepSnapshot] = []
        self.current_index = 0
        self.last_transition: Optional[Tuple[StepSnapshot, StepSnapshot]] = None
        if steps:
            self.load_steps(steps)

    def load_steps(self, steps: List[StepSnapshot]) -> None:
        """Load a new trace and rewind to the first snapshot."""
        self.steps = list(steps)
        self.current_index = 0
        self.last_transition = None

    def reset(self) -> None:
        """Drop the loaded trace."""
        self.steps = []
        self.current_index = 0
        self.last_transition = None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def current_step(self) -> Optional[StepSnapshot]:
        """Snapshot on display, or None when nothing is loaded."""
        if not self.steps:
            return None
        return self.steps[self.current_index]

    @property
    def at_end(self) -> bool:
        return not self.steps or self.current_index == len(self.steps) - 1

    def show_step(self, index: int) -> StepSnapshot:
        """
        Jump to a snapshot.

        Args:
            index: Snapshot index

        Returns:
            The snapshot now on display

        Raises:
            IndexError: If index is outside the loaded trace
        """
        if index < 0 or index >= len(self.steps):
            raise IndexError(f"Step {index} out of range ({len(self.steps)} steps loaded)")

        previous = self.steps[self.current_index]
        target = self.steps[index]

        if target.completed and index > self.current_index:
            self.last_transition = (previous, target)
        else:
            self.last_transition = None

        self.current_index = index
        return target

    def next_step(self) -> Optional[StepSnapshot]:
        """Advance one snapshot; returns None (without moving) at the end."""
        if self.at_end:
            return None
        return self.show_step(self.current_index + 1)

    def prev_step(self) -> Optional[StepSnapshot]:
        """Go back one snapshot; returns None (without moving) at the start."""
        if not self.steps or self.current_index == 0:
            return None
        return self.show_step(self.current_index - 1)

    def position_label(self) -> str:
        """Position as 'k/N' (1-based), or '0' when nothing is loaded."""
        if not self.steps:
            return "0"
        return f"{self.current_index + 1}/{len(self.steps)}"

    def play(self, delay: float = 0.0) -> Iterator[StepSnapshot]:
        """
        Autoplay from the current snapshot to the end of the trace.

        Yields the current snapshot first, then each following one, sleeping
        `delay` seconds between snapshots. Stops after the last snapshot.

        Args:
            delay: Seconds to wait between snapshots
        """
        if not self.steps:
            return

        yield self.steps[self.current_index]
        while not self.at_end:
            if delay > 0:
                time.sleep(delay)
            yield self.next_step()
