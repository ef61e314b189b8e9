#!/usr/bin/env python3
"""
Banker's Algorithm Simulator
Main entry point for the simulation system.

Educational tool for demonstrating deadlock avoidance: checks whether a
resource allocation state is safe, derives a safe sequence, and replays
every intermediate state step by step.
"""

import argparse
import sys
from typing import Optional

from models.system_state import SystemState, InvalidInputError
from models.snapshot import SafetyResult
from utils.scenario_loader import load_scenario, textbook_scenario, ScenarioLoadError
from utils.logger import SimulatorLogger
from algorithms.safety import simulate_state
from analysis.playback import PlaybackController
from analysis.report import format_step, format_summary, export_result


def run_simulation(
    system_state: SystemState,
    verbose: bool = False,
    show_steps: bool = False,
    log_file: Optional[str] = None,
    logger: Optional[SimulatorLogger] = None
) -> SafetyResult:
    """
    Run the Banker's safety check on a system state and report the outcome.

    Args:
        system_state: Validated input state
        verbose: Enable verbose logging (system state and per-step debug lines)
        show_steps: Print every recorded snapshot after the verdict
        log_file: Optional log file path (ignored when a logger is given)
        logger: Existing logger to use

    Returns:
        SafetyResult of the run
    """
    owns_logger = logger is None
    if owns_logger:
        logger = SimulatorLogger(verbose=verbose, log_file=log_file)

    logger.log(f"\n{'='*60}")
    logger.log("BANKER'S ALGORITHM: SAFETY CHECK")
    logger.log(f"{'='*60}\n")

    _display_initial_state(system_state, logger)
    logger.log_system_state(system_state.display())

    result = simulate_state(system_state, logger)

    logger.log(f"\n{'-'*60}")
    logger.log(format_summary(result))
    logger.log(f"{'-'*60}")

    if show_steps:
        for index in range(len(result.steps)):
            logger.log(f"\n{format_step(result.steps, index, system_state.resource_names)}")

    if owns_logger:
        logger.close()
    return result


def play_steps(
    result: SafetyResult,
    system_state: SystemState,
    logger: SimulatorLogger,
    start: int = 0,
    delay: float = 0.0
) -> None:
    """
    Replay a run through the playback controller.

    Args:
        result: Finished run
        system_state: Input state (for resource labels)
        logger: Logger instance
        start: Snapshot index to start from
        delay: Seconds between snapshots
    """
    controller = PlaybackController(result.steps)
    if not controller.total_steps:
        logger.log("No steps recorded - nothing to replay", "warning")
        return

    controller.show_step(start)
    for _ in controller.play(delay):
        if controller.last_transition:
            before, after = controller.last_transition
            released = ", ".join(
                f"{name}={amount}"
                for name, amount in zip(system_state.resource_names, before.allocation[after.process])
            )
            logger.log(f"\n>>> P{after.process} runs and releases [{released}]")
        logger.log(f"\n[{controller.position_label()}]")
        logger.log(format_step(controller.steps, controller.current_index, system_state.resource_names))


def _display_initial_state(system_state: SystemState, logger: SimulatorLogger) -> None:
    """Display initial system state."""
    if system_state.description:
        logger.log(f"Scenario: {system_state.description}")

    logger.log(f"Resources: {', '.join(system_state.resource_names)}")
    logger.log(f"Available: {system_state.available_vector.tolist()}")

    logger.log("\nProcesses:")
    for i in range(system_state.num_processes):
        logger.log(
            f"  P{i}: allocation={system_state.allocation_matrix[i].tolist()}, "
            f"max={system_state.max_demand_matrix[i].tolist()}, "
            f"need={system_state.need_matrix[i].tolist()}"
        )


def main(argv=None):
    """Main entry point for the simulator."""
    parser = argparse.ArgumentParser(
        description="Banker's Algorithm Simulator"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--scenario',
        type=str,
        help='Path to scenario JSON file'
    )
    source.add_argument(
        '--example',
        action='store_true',
        help='Use the built-in textbook example (5 processes, 3 resources)'
    )

    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        '--steps',
        action='store_true',
        help='Print every recorded step after the verdict'
    )
    output.add_argument(
        '--step',
        type=int,
        metavar='N',
        help='Print only step N (1-based)'
    )
    output.add_argument(
        '--play',
        type=int,
        nargs='?',
        const=1,
        metavar='N',
        help='Replay the recorded steps one by one, starting at step N (default: 1)'
    )

    parser.add_argument(
        '--delay',
        type=float,
        default=1.0,
        help='Seconds between steps with --play (default: 1.0)'
    )
    parser.add_argument(
        '--export',
        type=str,
        metavar='PATH',
        help='Write input and result to a JSON file'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        help='Also write log output to this file'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args(argv)

    if args.delay < 0:
        parser.error('--delay must be non-negative')

    try:
        logger = SimulatorLogger(verbose=args.verbose, log_file=args.log_file)
    except OSError as e:
        SimulatorLogger().log(f"Cannot open log file {args.log_file}: {e}", "error")
        return 1

    try:
        if args.example:
            system_state = textbook_scenario()
        else:
            system_state = load_scenario(args.scenario)
    except (ScenarioLoadError, InvalidInputError) as e:
        logger.log(f"Failed to load scenario: {e}", "error")
        logger.close()
        return 1

    result = run_simulation(system_state, show_steps=args.steps, logger=logger)

    selected = args.step if args.step is not None else args.play
    if selected is not None and result.steps and not 1 <= selected <= len(result.steps):
        logger.log(f"Step {selected} out of range (1..{len(result.steps)})", "error")
        logger.close()
        return 1

    if args.step is not None:
        if not result.steps:
            logger.log("No steps recorded", "error")
            logger.close()
            return 1
        logger.log(f"\n{format_step(result.steps, args.step - 1, system_state.resource_names)}")

    if args.play is not None:
        play_steps(result, system_state, logger, start=args.play - 1, delay=args.delay)

    if args.export:
        try:
            export_result(result, args.export, system_state)
        except OSError as e:
            logger.log(f"Cannot write export file {args.export}: {e}", "error")
            logger.close()
            return 1
        logger.log(f"\nResult exported to {args.export}")

    logger.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
