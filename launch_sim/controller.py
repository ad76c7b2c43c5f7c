"""
Launch Mission Simulation - Mission Controller

The controller owns the vehicle configuration, the flight state and the
active mission stage. It exposes the operations issued by the command layer
(checks, launch, advance, reset), arbitrates success and failure, and fans
formatted status strings out to subscribed observers.

Notification policy:
  - Active status strings are emitted only when they differ from the last
    emitted message.
  - One-off event messages (checks, liftoff, separation, fuel leak, success,
    failure) are always emitted.
  - The terminal status is emitted exactly once per mission.

Every state-touching operation runs under a single re-entrant lock, so ticks
from the command caller and the background runner never interleave.
"""

from dataclasses import dataclass
from enum import Enum, auto
import logging
import threading
from typing import Callable, List, Optional

import numpy as np

from . import constants as C
from .config import FailureRates, VehicleConfig
from .profiles import load_config
from .stages import Stage, execute_logic
from .state import FlightState, create_initial_state
from .telemetry import FlightLog

logger = logging.getLogger(__name__)

Observer = Callable[[str], None]


class MissionControlError(Exception):
    """Raised when an operation is invoked in a state where it is not allowed."""
    pass


class OutcomeKind(Enum):
    IN_PROGRESS = auto()
    SUCCESS = auto()
    FAILURE = auto()


@dataclass(frozen=True)
class MissionOutcome:
    kind: OutcomeKind
    reason: Optional[str] = None

    @classmethod
    def from_state(cls, state: FlightState) -> 'MissionOutcome':
        if state.mission_active:
            return cls(OutcomeKind.IN_PROGRESS)
        if state.succeeded:
            return cls(OutcomeKind.SUCCESS)
        return cls(OutcomeKind.FAILURE, state.failure_reason)

    @property
    def is_terminal(self) -> bool:
        return self.kind is not OutcomeKind.IN_PROGRESS


class MissionController:
    """
    Runs one mission at a time for a named vehicle profile.

    Args:
        profile: Profile name passed to the loader (also used on reset)
        loader: Callable(profile) -> VehicleConfig; defaults to profiles.load_config
        rng: Random source with a ``random()`` method; defaults to numpy's default_rng()
        failure_rates: Stochastic failure probabilities
        log: Logger for mission events; defaults to this module's logger

    Raises:
        ConfigurationError: if the profile cannot be loaded
    """

    def __init__(self, profile: str = C.DEFAULT_PROFILE,
                 loader: Callable[[str], VehicleConfig] = None,
                 rng=None,
                 failure_rates: FailureRates = None,
                 log: logging.Logger = None):
        self.profile = profile
        self._loader = loader or load_config
        self.rng = rng if rng is not None else np.random.default_rng()
        self.failure_rates = failure_rates or FailureRates()
        self.log = log or logger
        self.lock = threading.RLock()
        # Notified on the shared lock when the mission ends or is replaced
        self.changed = threading.Condition(self.lock)
        self._observers: List[Observer] = []

        self._install(self._loader(profile))
        self.log.info(f"Mission controller initialized with profile '{profile}'")

    def _install(self, config: VehicleConfig) -> None:
        self.config = config
        self.state = create_initial_state(config)
        self.stage = Stage.PRELAUNCH
        self.checks_complete = False
        self.flight_log = FlightLog()
        self._last_status: Optional[str] = None
        self._terminal_notified = False

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def is_mission_active(self) -> bool:
        with self.lock:
            return self.state.mission_active

    @property
    def outcome(self) -> MissionOutcome:
        with self.lock:
            return MissionOutcome.from_state(self.state)

    @property
    def stage_name(self) -> str:
        return self.stage.display_name

    def snapshot(self) -> FlightState:
        """Consistent copy of the flight state."""
        with self.lock:
            return self.state.copy()

    def status_string(self) -> str:
        with self.lock:
            state = self.state
            if state.mission_active:
                return C.STATUS_FORMAT.format(
                    stage=state.stage,
                    fuel=state.fuel_percent,
                    altitude=state.altitude_km,
                    speed=state.speed_kmh,
                )
            if state.succeeded:
                return C.STATUS_SUCCESS
            if state.failure_reason:
                return f"{C.STATUS_FAILED}\nReason: {state.failure_reason}"
            return C.STATUS_FAILED

    # =========================================================================
    # Commands
    # =========================================================================

    def initiate_checks(self) -> bool:
        """
        Run the pre-launch checks.

        Ignored (logged) outside the pre-launch stage, after the checks already
        passed, or once the mission is over.

        Returns:
            True if the checks are complete afterwards.
        """
        with self.lock:
            self.log.info("Initiating pre-launch checks...")
            if self.stage is not Stage.PRELAUNCH or not self.state.mission_active:
                self.log.warning("Pre-launch checks can only be run in the Pre-Launch stage.")
                return False
            if self.checks_complete:
                self.log.warning("Pre-launch checks already complete.")
                return True
            execute_logic(Stage.PRELAUNCH, self)
            self._notify_terminal()
            return self.checks_complete

    def launch(self) -> None:
        """
        Lift off: enter stage 1 and emit the liftoff event.

        Raises:
            MissionControlError: before checks complete, after launch, or once
                the mission is over
        """
        with self.lock:
            if not self.state.mission_active:
                raise MissionControlError("Mission is over. Reset to fly again.")
            if not self.checks_complete:
                raise MissionControlError("Pre-launch checks not complete. Type 'start_checks' first.")
            if self.stage is not Stage.PRELAUNCH or self.state.stage != 0:
                raise MissionControlError("Launch already in progress or completed.")

            self.state.stage = 1
            self.state.burn_rate = self.config.stage1_burn_rate_kg_s
            self.transition_to(Stage.ASCENT_STAGE_1)
            self.log.info("Launch initiated. Entering Stage 1.")
            self.post_message(C.MSG_LIFTOFF)

    def advance(self, seconds: int = 1) -> int:
        """
        Run up to ``seconds`` ticks, stopping at the tick that ends the mission.

        A no-op once the mission is over.

        Returns:
            Number of ticks actually performed.

        Raises:
            MissionControlError: for a negative count, or before launch
        """
        if isinstance(seconds, bool) or not isinstance(seconds, (int, np.integer)) or seconds < 0:
            raise MissionControlError(f"Tick count must be a non-negative integer, got {seconds!r}")

        with self.lock:
            if not self.state.mission_active:
                return 0
            if self.stage is Stage.PRELAUNCH:
                raise MissionControlError("Cannot advance the simulation before launch.")

            ticks = 0
            for _ in range(int(seconds)):
                if not self.state.mission_active:
                    break
                execute_logic(self.stage, self)
                ticks += 1
                self.flight_log.append(self.state)
                self._notify_status()
            return ticks

    def reset(self, profile: str = None) -> None:
        """
        Discard the current mission and rebuild it from the profile loader.

        Raises:
            ConfigurationError: if the profile cannot be loaded; the current
                mission is left untouched in that case
        """
        with self.lock:
            name = profile or self.profile
            config = self._loader(name)
            self.profile = name
            self._install(config)
            self.changed.notify_all()
            self.log.info(f"Mission reset with profile '{name}'")

    def subscribe(self, observer: Observer) -> None:
        with self.lock:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        with self.lock:
            if observer in self._observers:
                self._observers.remove(observer)

    # =========================================================================
    # Stage callbacks
    # =========================================================================

    def _is_terminal(self) -> bool:
        return self.state.succeeded or self.state.failure_reason is not None

    def transition_to(self, stage: Stage) -> None:
        if stage.value <= self.stage.value:
            raise ValueError(f"Illegal stage transition {self.stage.name} -> {stage.name}")
        self.log.info(f"Stage transition {self.stage.display_name} -> {stage.display_name} "
                      f"at t={self.state.elapsed}s")
        self.stage = stage

    def mark_checks_complete(self) -> None:
        self.checks_complete = True
        self.log.info("Pre-launch checks passed. All systems go.")

    def fail_mission(self, reason: str) -> None:
        """Terminate the mission with a failure reason (first outcome wins)."""
        with self.lock:
            if self._is_terminal():
                return
            self.state.mission_active = False
            self.state.failure_reason = reason
            self.log.error(f"MISSION FAILED at t={self.state.elapsed}s: {reason}")
            self.post_message(C.MSG_FAILURE_PREFIX + reason)

    def complete_mission(self) -> None:
        """Terminate the mission through the success path (first outcome wins)."""
        with self.lock:
            if self._is_terminal():
                return
            self.state.mission_active = False
            self.state.succeeded = True
            self.log.info(f"Orbit achieved at t={self.state.elapsed}s, "
                          f"Alt={self.state.altitude_km:.1f}km, V={self.state.speed_kmh:.0f}km/h")
            self.post_message(C.MSG_ORBIT_ACHIEVED)

    def post_message(self, message: str) -> None:
        """Emit a one-off event message, bypassing de-duplication."""
        with self.lock:
            self._last_status = message
            self._emit(message)

    # =========================================================================
    # Notification
    # =========================================================================

    def _notify_status(self) -> None:
        if not self.state.mission_active:
            self._notify_terminal()
            return
        status = self.status_string()
        if status != self._last_status:
            self._last_status = status
            self._emit(status)

    def _notify_terminal(self) -> None:
        if self.state.mission_active or self._terminal_notified:
            return
        self._terminal_notified = True
        status = self.status_string()
        self._last_status = status
        self._emit(status)
        self.changed.notify_all()

    def _emit(self, message: str) -> None:
        for observer in list(self._observers):
            observer(message)
