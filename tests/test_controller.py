"""Tests for the mission controller: advancement, outcomes and notification."""
import logging

import pytest

from launch_sim import constants as C
from launch_sim.config import ConfigurationError, FailureRates, create_test_config
from launch_sim.controller import (
    MissionControlError,
    MissionController,
    MissionOutcome,
    OutcomeKind,
)
from launch_sim.stages import Stage


def _terminal_count(messages):
    return sum(1 for m in messages
               if m.startswith(C.STATUS_SUCCESS) or m.startswith(C.STATUS_FAILED))


# =============================================================================
# Construction and checks
# =============================================================================

def test_default_profile_controller():
    controller = MissionController(failure_rates=FailureRates(0.0, 0.0, 0.0))
    assert controller.config.initial_mass_kg > 0
    assert controller.stage is Stage.PRELAUNCH
    assert controller.stage_name == "Pre-Launch"
    assert controller.outcome == MissionOutcome(OutcomeKind.IN_PROGRESS)


def test_construction_fails_on_bad_profile():
    with pytest.raises(ConfigurationError):
        MissionController(profile="no-such-profile")


def test_initiate_checks(make_controller):
    controller = make_controller()
    assert controller.initiate_checks()
    assert controller.checks_complete
    # Repeated call is ignored
    assert controller.initiate_checks()
    assert controller.state.mission_active


def test_checks_malfunction_always_fails_with_rate_one(make_controller):
    for _ in range(5):
        controller = make_controller(rates=FailureRates(prelaunch_malfunction=1.0))
        messages = []
        controller.subscribe(messages.append)
        assert not controller.initiate_checks()
        assert not controller.checks_complete
        assert controller.outcome == MissionOutcome(OutcomeKind.FAILURE, C.REASON_SYSTEM_MALFUNCTION)
        assert messages[-1] == f"{C.STATUS_FAILED}\nReason: {C.REASON_SYSTEM_MALFUNCTION}"
        assert _terminal_count(messages) == 1


def test_checks_ignored_after_launch(launched):
    controller = launched()
    assert not controller.initiate_checks()
    assert controller.stage is Stage.ASCENT_STAGE_1


# =============================================================================
# Launch and usage errors
# =============================================================================

def test_launch_before_checks(make_controller):
    controller = make_controller()
    with pytest.raises(MissionControlError, match="checks not complete"):
        controller.launch()
    assert controller.stage is Stage.PRELAUNCH
    assert controller.state.stage == 0


def test_launch_twice(launched):
    controller = launched()
    with pytest.raises(MissionControlError, match="already"):
        controller.launch()


def test_launch_after_failed_checks(make_controller):
    controller = make_controller(rates=FailureRates(prelaunch_malfunction=1.0))
    controller.initiate_checks()
    with pytest.raises(MissionControlError):
        controller.launch()


def test_launch_emits_liftoff(make_controller):
    controller = make_controller()
    controller.initiate_checks()
    messages = []
    controller.subscribe(messages.append)
    controller.launch()
    assert messages == [C.MSG_LIFTOFF]
    assert controller.state.stage == 1
    assert controller.stage is Stage.ASCENT_STAGE_1


def test_advance_before_launch(make_controller):
    controller = make_controller()
    controller.initiate_checks()
    with pytest.raises(MissionControlError, match="before launch"):
        controller.advance(5)
    assert controller.state.elapsed == 0


def test_advance_negative(launched):
    controller = launched()
    with pytest.raises(MissionControlError):
        controller.advance(-1)
    assert controller.state.elapsed == 0


def test_advance_zero_is_noop(launched):
    controller = launched()
    assert controller.advance(0) == 0
    assert controller.state.elapsed == 0


# =============================================================================
# Advancement and outcomes
# =============================================================================

def test_advance_performs_requested_ticks(launched):
    controller = launched(stage_separation_altitude_m=5.0e7)
    assert controller.advance(7) == 7
    assert controller.state.elapsed == 7
    assert len(controller.flight_log) == 7


def test_success_with_failures_disabled(launched):
    controller = launched()
    ticks = controller.advance(100)
    state = controller.state
    assert controller.outcome.kind is OutcomeKind.SUCCESS
    assert ticks == state.elapsed
    assert 5 < ticks < 20
    assert state.altitude >= controller.config.target_altitude_m
    assert state.speed >= controller.config.target_speed_ms
    assert state.stage == 2


def test_advance_stops_at_terminal_tick_and_then_noop(launched):
    controller = launched()
    ticks = controller.advance(100)
    snapshot = controller.snapshot()
    assert controller.advance(50) == 0
    assert controller.snapshot() == snapshot
    assert ticks == snapshot.elapsed


def test_altitude_without_speed_is_failure(launched):
    controller = launched(target_speed_kmh=1.0e6)
    ticks = controller.advance(1000)
    state = controller.state
    assert ticks < 1000
    assert state.fuel == 0.0
    assert state.altitude >= controller.config.target_altitude_m
    assert controller.outcome == MissionOutcome(OutcomeKind.FAILURE, C.REASON_STAGE2_NON_OPERATIONAL)


def test_stage1_fuel_exhaustion(launched):
    controller = launched(stage_separation_altitude_m=5.0e7)
    ticks = controller.advance(1000)
    assert ticks == 300
    assert controller.state.stage == 1
    assert controller.outcome == MissionOutcome(OutcomeKind.FAILURE, C.REASON_STAGE1_NON_OPERATIONAL)


def test_ground_hold_then_exhaustion(launched):
    controller = launched(stage1_thrust_n=10000.0)
    ticks = controller.advance(1000)
    assert ticks == 300
    assert controller.state.altitude == 0.0
    assert controller.outcome.reason == C.REASON_STAGE1_NON_OPERATIONAL


def test_stage_only_moves_forward(launched):
    controller = launched()
    stages = []
    while controller.state.mission_active:
        controller.advance(1)
        stages.append(controller.state.stage)
    assert stages == sorted(stages)
    with pytest.raises(ValueError):
        controller.transition_to(Stage.ASCENT_STAGE_1)


def test_outcome_cannot_change_once_terminal(launched):
    controller = launched()
    controller.advance(100)
    controller.fail_mission("late failure")
    assert controller.outcome.kind is OutcomeKind.SUCCESS
    assert controller.state.failure_reason is None


def test_failure_cannot_become_success(launched):
    controller = launched(rates=FailureRates(0.0, 1.0, 0.0))
    controller.advance(10)
    controller.complete_mission()
    assert controller.outcome.kind is OutcomeKind.FAILURE
    assert not controller.state.succeeded


# =============================================================================
# Reset
# =============================================================================

def test_reset_restores_prelaunch(launched):
    controller = launched()
    controller.advance(100)
    controller.reset()
    assert controller.stage is Stage.PRELAUNCH
    assert controller.state.stage == 0
    assert controller.state.elapsed == 0
    assert controller.state.mission_active
    assert not controller.checks_complete
    assert len(controller.flight_log) == 0
    assert controller.outcome.kind is OutcomeKind.IN_PROGRESS


def test_reset_clears_dedup_state(launched):
    controller = launched(stage_separation_altitude_m=5.0e7)
    messages = []
    controller.subscribe(messages.append)
    controller.advance(1000)
    assert _terminal_count(messages) == 1
    controller.reset()
    controller.initiate_checks()
    controller.launch()
    controller.advance(1000)
    assert _terminal_count(messages) == 2


def test_reset_reloads_from_loader():
    configs = iter([create_test_config(), create_test_config(target_altitude_km=2.0)])
    controller = MissionController(loader=lambda _name: next(configs),
                                   failure_rates=FailureRates(0.0, 0.0, 0.0))
    assert controller.config.target_altitude_km == 1.0
    controller.reset()
    assert controller.config.target_altitude_km == 2.0


def test_reset_with_bad_profile_keeps_mission():
    def loader(name):
        if name != "test":
            raise ConfigurationError(f"Unknown profile '{name}'")
        return create_test_config()

    controller = MissionController(profile="test", loader=loader,
                                   failure_rates=FailureRates(0.0, 0.0, 0.0))
    controller.initiate_checks()
    controller.launch()
    controller.advance(3)
    with pytest.raises(ConfigurationError):
        controller.reset(profile="no-such-profile")
    assert controller.state.elapsed == 3
    assert controller.stage is Stage.ASCENT_STAGE_1
    assert controller.profile == "test"


# =============================================================================
# Status strings and notification
# =============================================================================

def test_status_string_active(launched):
    controller = launched()
    assert controller.status_string() == "Stage: 1, Fuel: 100.0%, Altitude: 0.0 km, Speed: 0 km/h"


def test_status_string_success(launched):
    controller = launched()
    controller.advance(100)
    assert controller.status_string() == C.STATUS_SUCCESS


def test_duplicate_active_statuses_suppressed(launched, scripted_rng):
    controller = launched(stage1_thrust_n=10000.0, stage1_burn_rate_kg_s=0.01)
    messages = []
    controller.subscribe(messages.append)
    assert controller.advance(10) == 10
    assert messages == ["Stage: 1, Fuel: 100.0%, Altitude: 0.0 km, Speed: 0 km/h"]


def test_terminal_emitted_once_after_suppressed_duplicates(launched, scripted_rng):
    rng = scripted_rng([0.0] + [0.9] * 5 + [0.0])
    controller = launched(rates=FailureRates(0.0, 0.5, 0.0), rng=rng,
                          stage1_thrust_n=10000.0, stage1_burn_rate_kg_s=0.01)
    messages = []
    controller.subscribe(messages.append)
    assert controller.advance(20) == 6
    controller.advance(20)
    assert messages == [
        "Stage: 1, Fuel: 100.0%, Altitude: 0.0 km, Speed: 0 km/h",
        C.MSG_FAILURE_PREFIX + C.REASON_ENGINE_FLAMEOUT,
        f"{C.STATUS_FAILED}\nReason: {C.REASON_ENGINE_FLAMEOUT}",
    ]


def test_success_notifications(launched):
    controller = launched()
    messages = []
    controller.subscribe(messages.append)
    controller.advance(100)
    assert messages.count(C.MSG_STAGE_SEPARATION) == 1
    assert messages[-2:] == [C.MSG_ORBIT_ACHIEVED, C.STATUS_SUCCESS]
    assert _terminal_count(messages) == 1
    # No consecutive duplicates among emitted messages
    assert all(a != b for a, b in zip(messages, messages[1:]))


def test_terminal_exactly_once_across_batches(launched):
    controller = launched(target_speed_kmh=1.0e6)
    messages = []
    controller.subscribe(messages.append)
    for _ in range(200):
        controller.advance(10)
    assert _terminal_count(messages) == 1


def test_multiple_observers_and_unsubscribe(launched):
    controller = launched()
    first, second = [], []
    controller.subscribe(first.append)
    controller.subscribe(second.append)
    controller.advance(1)
    controller.unsubscribe(second.append)
    controller.advance(1)
    assert len(first) == 2
    assert len(second) == 1
    # Unknown observers are ignored
    controller.unsubscribe(print)


def test_injected_logger_receives_failure(launched, caplog):
    mission_log = logging.getLogger("test.mission")
    controller = launched(rates=FailureRates(0.0, 1.0, 0.0))
    controller.log = mission_log
    with caplog.at_level(logging.ERROR, logger="test.mission"):
        controller.advance(1)
    assert any(C.REASON_ENGINE_FLAMEOUT in r.getMessage() for r in caplog.records)
