"""
Launch Mission Simulation - Mission Stage State Machine

This module defines the discrete mission stages and the per-stage logic run
by the mission controller. Stages are plain enum members; their behavior is
selected through dispatch tables, so a transition is just a replacement of
the controller's current member.

Transitions are one-directional:
  PRELAUNCH -> ASCENT_STAGE_1 -> ASCENT_STAGE_2 -> terminal (success | failure)

Failure injection per stage (probabilities come from FailureRates, the random
source is the controller's injected generator):
  - PRELAUNCH:       system malfunction during checks (fatal)
  - ASCENT_STAGE_1:  engine flameout, once per tick (fatal)
  - ASCENT_STAGE_2:  fuel leak, once per tick until it occurs (non-fatal)

The controller argument is duck-typed; it must expose ``state``, ``config``,
``rng``, ``failure_rates``, ``fail_mission()``, ``complete_mission()``,
``transition_to()``, ``post_message()`` and ``mark_checks_complete()``.
"""

from enum import Enum
import logging

from . import constants as C
from .dynamics import activate_fuel_leak, separate_stage, targets_reached, tick

logger = logging.getLogger(__name__)


class Stage(Enum):
    PRELAUNCH = 0
    ASCENT_STAGE_1 = 1
    ASCENT_STAGE_2 = 2

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    Stage.PRELAUNCH: "Pre-Launch",
    Stage.ASCENT_STAGE_1: "Stage 1",
    Stage.ASCENT_STAGE_2: "Stage 2",
}


# =============================================================================
# PRE-LAUNCH
# =============================================================================

def _prelaunch_check_failure(controller) -> bool:
    if controller.rng.random() < controller.failure_rates.prelaunch_malfunction:
        controller.fail_mission(C.REASON_SYSTEM_MALFUNCTION)
        return True
    return False


def _prelaunch_execute(controller) -> None:
    """Run the pre-launch system checks (triggered by the checks command)."""
    if check_failure(Stage.PRELAUNCH, controller):
        return
    controller.mark_checks_complete()
    controller.post_message(C.MSG_CHECKS_GO)


# =============================================================================
# ASCENT STAGE 1
# =============================================================================

def _stage1_check_failure(controller) -> bool:
    if controller.rng.random() < controller.failure_rates.stage1_flameout:
        controller.fail_mission(C.REASON_ENGINE_FLAMEOUT)
        return True
    return False


def _stage1_execute(controller) -> None:
    state = controller.state
    tick(state, controller.config)

    if check_failure(Stage.ASCENT_STAGE_1, controller):
        return

    if state.separation_pending:
        separate_stage(state, controller.config)
        controller.transition_to(Stage.ASCENT_STAGE_2)
        controller.post_message(C.MSG_STAGE_SEPARATION)
        # Fuel can run out on the very tick that reaches separation altitude
        if not state.mission_active:
            controller.fail_mission(C.REASON_STAGE1_NON_OPERATIONAL)
        return

    if not state.mission_active:
        controller.fail_mission(C.REASON_STAGE1_NON_OPERATIONAL)


# =============================================================================
# ASCENT STAGE 2
# =============================================================================

def _stage2_check_failure(controller) -> bool:
    state = controller.state
    if state.fuel_leak_active:
        return False
    if controller.rng.random() < controller.failure_rates.stage2_fuel_leak:
        activate_fuel_leak(state)
        logger.warning(f"Fuel leak at t={state.elapsed}s, "
                       f"burn rate now {state.burn_rate:.1f} kg/s")
        controller.post_message(C.MSG_FUEL_LEAK)
    # A leak is never fatal by itself
    return False


def _stage2_execute(controller) -> None:
    state = controller.state
    tick(state, controller.config)

    check_failure(Stage.ASCENT_STAGE_2, controller)

    if targets_reached(state, controller.config):
        controller.complete_mission()
        return

    if not state.mission_active:
        controller.fail_mission(C.REASON_STAGE2_NON_OPERATIONAL)


# =============================================================================
# DISPATCH
# =============================================================================

_EXECUTE = {
    Stage.PRELAUNCH: _prelaunch_execute,
    Stage.ASCENT_STAGE_1: _stage1_execute,
    Stage.ASCENT_STAGE_2: _stage2_execute,
}

_CHECK_FAILURE = {
    Stage.PRELAUNCH: _prelaunch_check_failure,
    Stage.ASCENT_STAGE_1: _stage1_check_failure,
    Stage.ASCENT_STAGE_2: _stage2_check_failure,
}


def execute_logic(stage: Stage, controller) -> None:
    """Run one unit of the stage's logic (checks for PRELAUNCH, one tick otherwise)."""
    _EXECUTE[stage](controller)


def check_failure(stage: Stage, controller) -> bool:
    """Draw the stage's stochastic failure; True if it was fatal."""
    return _CHECK_FAILURE[stage](controller)
