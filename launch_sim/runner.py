"""
Launch Mission Simulation - Background Runner

A worker thread that advances a MissionController by one tick per fixed
wall-clock interval. The command caller can pause, resume and stop it.

The pause/resume handshake uses the controller's own condition variable, so
the worker never ticks while the caller holds the controller, and a paused
worker blocks instead of polling. The controller notifies the same condition
when the mission ends or is reset, which releases a paused worker so it can
exit. Cancellation is cooperative: pause and stop take effect between ticks.
"""

import logging
import threading
from typing import Optional

from . import constants as C
from .stages import Stage

logger = logging.getLogger(__name__)


class BackgroundRunner:
    """
    Drives ``controller.advance(1)`` every ``interval`` seconds until the
    mission ends or the runner is stopped.
    """

    def __init__(self, controller, interval: float = C.RUNNER_INTERVAL,
                 name: str = "mission-runner"):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval!r}")
        self.controller = controller
        self.interval = interval
        self.name = name
        self.ticks = 0
        self._condition = controller.changed
        self._running = False
        self._paused = False
        self._thread: Optional[threading.Thread] = None

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def is_paused(self) -> bool:
        return self._paused

    def start(self) -> None:
        with self._condition:
            if self._thread is not None:
                raise RuntimeError("Runner already started")
            self._running = True
            self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
            self._thread.start()

    def pause(self) -> None:
        """Stop ticking before the next tick fires. A tick in flight completes."""
        with self._condition:
            self._paused = True

    def resume(self) -> None:
        """Wake a paused worker immediately."""
        with self._condition:
            if self._paused:
                self._paused = False
                self._condition.notify_all()

    def stop(self, timeout: float = None) -> None:
        """
        Stop the worker (idempotent), releasing it if it is paused.

        Joins the worker unless called from the worker thread itself.
        """
        with self._condition:
            self._running = False
            self._condition.notify_all()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout if timeout is not None else 2.0 * max(self.interval, 1.0))

    def join(self, timeout: float = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _mission_over(self) -> bool:
        # A reset puts the controller back in Pre-Launch; the flight this worker drove is gone
        return (not self.controller.state.mission_active
                or self.controller.stage is Stage.PRELAUNCH)

    def _run(self) -> None:
        logger.info(f"Runner '{self.name}' started (interval={self.interval}s)")
        try:
            while True:
                with self._condition:
                    while self._running and self._paused and not self._mission_over():
                        self._condition.wait()
                    if not self._running or self._mission_over():
                        break
                    if self._condition.wait_for(
                            lambda: not self._running or self._mission_over(),
                            timeout=self.interval):
                        break
                    if self._paused:
                        continue
                    self.ticks += self.controller.advance(1)
        except Exception:
            logger.exception(f"Runner '{self.name}' crashed")
            raise
        finally:
            with self._condition:
                self._running = False
            logger.info(f"Runner '{self.name}' stopped after {self.ticks} ticks")
