"""
Launch Mission Simulation - Command Layer

Maps user commands onto MissionController operations and owns the
lifecycle of the background runner (created on launch, paused around
fast-forward, stopped on reset and shutdown).
"""

import logging
import re
from typing import Callable, Optional

from . import constants as C
from .controller import MissionControlError, MissionController
from .runner import BackgroundRunner

logger = logging.getLogger(__name__)

_FAST_FORWARD = re.compile(r"^fast_forward\s+(-?\d+)$", re.IGNORECASE)

COMMAND_HELP = (
    "start_checks | launch | fast_forward X | reset | status | exit"
)


class CommandProcessor:
    """
    Command front-end for one controller.

    Args:
        controller: Mission controller receiving the commands
        interval: Wall-clock seconds per background tick
        runner_factory: Callable(controller, interval) -> BackgroundRunner
    """

    def __init__(self, controller: MissionController, interval: float = C.RUNNER_INTERVAL,
                 runner_factory: Callable = BackgroundRunner):
        self.controller = controller
        self.interval = interval
        self._runner_factory = runner_factory
        self.runner: Optional[BackgroundRunner] = None

    def start_checks(self) -> bool:
        logger.info("start_checks received.")
        if self.controller.checks_complete:
            raise MissionControlError("Checks already completed. Type 'launch' to proceed.")
        if not self.controller.is_mission_active:
            raise MissionControlError("Mission is over. Type 'reset' to start again.")
        return self.controller.initiate_checks()

    def launch(self) -> None:
        logger.info("launch received.")
        self.controller.launch()
        self.runner = self._runner_factory(self.controller, self.interval)
        self.runner.start()

    def fast_forward(self, seconds: int) -> int:
        logger.info(f"fast_forward {seconds} received.")
        if self.controller.state.stage == 0:
            raise MissionControlError("Cannot fast_forward before launch.")
        if seconds <= 0:
            raise MissionControlError("Fast forward duration must be a positive number.")
        self.pause()
        try:
            return self.controller.advance(seconds)
        finally:
            self.resume()

    def reset(self) -> None:
        logger.info("reset received.")
        self.shutdown()
        self.controller.reset()

    def status(self) -> str:
        return self.controller.status_string()

    def pause(self) -> None:
        if self.runner is not None and self.runner.is_alive:
            self.runner.pause()

    def resume(self) -> None:
        if self.runner is not None and self.runner.is_alive:
            self.runner.resume()

    def shutdown(self) -> None:
        """Stop the background runner if there is one (idempotent)."""
        if self.runner is not None:
            self.runner.stop()
            self.runner = None

    def execute(self, line: str):
        """
        Parse and run one textual command.

        Returns:
            The command's result (status string for 'status', tick count for
            'fast_forward', None otherwise).

        Raises:
            MissionControlError: on an unknown or invalid command
        """
        command = line.strip()
        lowered = command.lower()

        if lowered == "start_checks":
            return self.start_checks()
        if lowered == "launch":
            return self.launch()
        if lowered == "reset":
            return self.reset()
        if lowered == "status":
            return self.status()

        match = _FAST_FORWARD.match(command)
        if match:
            return self.fast_forward(int(match.group(1)))

        raise MissionControlError(f"Invalid command '{command}'. Available: {COMMAND_HELP}.")
