"""
Launch Mission Simulation - CLI

Interactive mission console plus batch (Monte Carlo) mode. Mission events
are written to a log file; observer statuses are printed to the console.
"""

import argparse
import logging
import sys

from . import constants as C
from .commands import CommandProcessor
from .config import ConfigurationError
from .controller import MissionControlError, MissionController
from .montecarlo import run_monte_carlo
from .plotting import generate_all_plots
from .profiles import list_profiles, load_config

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Two-stage rocket launch mission simulator",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--profile", "-p",
        type=str,
        default=C.DEFAULT_PROFILE,
        help=f"Vehicle profile ({', '.join(list_profiles())}) or path to a JSON profile"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default="mission_log.txt",
        help="Mission log file (overwritten on each run)"
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=C.RUNNER_INTERVAL,
        help="Wall-clock seconds per simulated second after launch"
    )
    parser.add_argument(
        "--plot-dir",
        type=str,
        default=None,
        help="Write flight profile plots to this directory on exit"
    )
    parser.add_argument(
        "--monte-carlo",
        type=int,
        default=0,
        metavar="N",
        help="Fly N missions in batch mode and print statistics"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for batch mode"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Echo mission log records to the console"
    )
    return parser.parse_args(argv)


def configure_logging(log_file: str, verbose: bool = False) -> None:
    """Mission log to file at INFO, console at WARNING unless verbose."""
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    console = logging.StreamHandler()
    console.setLevel(logging.INFO if verbose else logging.WARNING)
    console.setFormatter(formatter)
    handlers = [console]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=logging.INFO, handlers=handlers, force=True)


def print_banner(profile: str) -> None:
    print(f"\n--- Rocket Launch Simulator ({profile} profile) ---")
    print("Type 'start_checks' to begin pre-launch sequence.")
    print("Type 'launch' to lift off after checks.")
    print("Type 'fast_forward X' to skip time (e.g., 'fast_forward 10').")
    print("Type 'status' for the current telemetry, 'reset' to start over.")
    print("Type 'exit' to quit.")


def run_interactive(processor: CommandProcessor, input_fn=input) -> None:
    """
    Read commands until 'exit' or end of input.

    The background runner is paused while a command is entered and executed.
    """
    controller = processor.controller

    def console_observer(status: str) -> None:
        print(f"\r-> {status}")
        # Only the terminal status matches the status string of an ended mission
        if not controller.state.mission_active and status == controller.status_string():
            print("Mission ended. Type 'reset' to fly again or 'exit' to quit.")

    controller.subscribe(console_observer)
    try:
        while True:
            runner = processor.runner
            if runner is not None and runner.is_alive:
                prompt = "\n--> Press Enter to issue a command..."
            else:
                prompt = "\nCommand: "

            try:
                line = input_fn(prompt).strip()
            except EOFError:
                break

            processor.pause()
            try:
                if not line and runner is not None and runner.is_alive:
                    line = input_fn("(Simulation Paused) Command: ").strip()
                if line.lower() == "exit":
                    logger.info("exit received. Simulation terminated by user.")
                    break
                if not line:
                    continue
                result = processor.execute(line)
                if isinstance(result, str):
                    print(result)
            except EOFError:
                break
            except MissionControlError as e:
                print(f"\n!!! Mission Control Error: {e}", file=sys.stderr)
            except ConfigurationError as e:
                print(f"\n!!! Configuration Error: {e}", file=sys.stderr)
            finally:
                processor.resume()
    finally:
        processor.shutdown()
        controller.unsubscribe(console_observer)


def main(argv=None) -> int:
    """Main execution flow."""
    args = parse_args(argv)
    configure_logging(args.log_file, args.verbose)

    try:
        if args.monte_carlo > 0:
            config = load_config(args.profile)
            logger.info(f"Starting Monte Carlo campaign: {args.monte_carlo} runs, seed={args.seed}")
            logging.getLogger("launch_sim.controller").setLevel(logging.WARNING)
            results = run_monte_carlo(config, n_runs=args.monte_carlo, seed=args.seed)
            print(results.summary())
            return 0

        controller = MissionController(profile=args.profile)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(f"\n[ERROR] {e}", file=sys.stderr)
        return 2

    processor = CommandProcessor(controller, interval=args.interval)
    print_banner(args.profile)
    run_interactive(processor)

    if args.plot_dir:
        paths = generate_all_plots(controller.flight_log, args.plot_dir)
        for path in paths:
            print(f"Plot written: {path}")

    print(f"\nSimulation terminated. Check '{args.log_file}' for the mission log.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
