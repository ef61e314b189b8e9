"""
Logger utility for the Banker's Algorithm Simulator.

Provides step-by-step logging with verbosity levels.
"""

from typing import Optional
from datetime import datetime


class SimulatorLogger:
    """
    Logger for simulation steps and verdicts.

    Format: "Step X: P3 ready (need=[0, 1, 1] <= work=[5, 3, 2])"
    """

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None, quiet: bool = False):
        """
        Initialize logger.

        Args:
            verbose: Enable verbose (debug) output
            log_file: Optional file path for logging
            quiet: Suppress console output (file output is unaffected)
        """
        self.verbose = verbose
        self.quiet = quiet
        self.log_file = log_file
        self.file_handle = None

        if self.log_file:
            self.file_handle = open(self.log_file, 'w', encoding='utf-8')
            self._write_header()

    def _write_header(self) -> None:
        """Write log file header."""
        if self.file_handle:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            self.file_handle.write(f"Banker's Algorithm Log - {timestamp}\n")
            self.file_handle.write("="*60 + "\n\n")

    def log(self, message: str, level: str = "info") -> None:
        """
        Log a message.

        Args:
            message: Message to log
            level: Log level (info, debug, warning, error)
        """
        if level == "debug" and not self.verbose:
            return

        formatted = self._format_message(message, level)

        if not self.quiet:
            print(formatted)

        if self.file_handle:
            self.file_handle.write(formatted + "\n")
            self.file_handle.flush()

    def _format_message(self, message: str, level: str) -> str:
        """Format message with level prefix."""
        if level == "error":
            return f"[ERROR] {message}"
        elif level == "warning":
            return f"[WARNING] {message}"
        elif level == "debug":
            return f"[DEBUG] {message}"
        else:
            return message

    def log_step(self, step: int, message: str, level: str = "info") -> None:
        """Log a simulation step message."""
        self.log(f"Step {step}: {message}", level)

    def log_snapshot(self, step: int, snapshot) -> None:
        """
        Log a recorded snapshot (debug level).

        Args:
            step: Index of the snapshot in the trace
            snapshot: StepSnapshot just recorded
        """
        pid = snapshot.process
        if snapshot.completed:
            message = (
                f"P{pid} finished, released allocation "
                f"(requested={list(snapshot.requested)}, work={list(snapshot.work)}, "
                f"available={list(snapshot.available)})"
            )
        else:
            message = (
                f"P{pid} ready (need={list(snapshot.need[pid])} <= work={list(snapshot.work)})"
            )
        self.log_step(step, message, "debug")

    def log_verdict(self, result) -> None:
        """
        Log the outcome of a safety run.

        Args:
            result: SafetyResult of the run
        """
        if result.safe:
            self.log(f"SAFE STATE - sequence: {result.format_sequence()}")
        else:
            scheduled = ", ".join(f"P{pid}" for pid in result.sequence) or "none"
            self.log(
                f"UNSAFE STATE - no safe sequence (scheduled before stall: {scheduled})",
                "warning"
            )

    def log_system_state(self, state_str: str) -> None:
        """
        Log system state display.

        Args:
            state_str: Formatted system state
        """
        if self.verbose:
            self.log(f"System State:\n{state_str}", "debug")

    def close(self) -> None:
        """Close log file if open."""
        if self.file_handle:
            self.file_handle.close()
            self.file_handle = None

    def __del__(self):
        """Cleanup on destruction."""
        self.close()
