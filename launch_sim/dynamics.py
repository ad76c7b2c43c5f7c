"""
Launch Mission Simulation - Flight Model

Advances the flight state by one simulated second using a vertical force
balance (thrust - gravity - drag) and explicit Euler integration with a
1 s step. Stage changes are not performed here: the model only raises
``separation_pending`` and the mission stage logic acts on it.

Execution order per tick:
  1. Burn fuel, recompute mass
  2. Forces at the current altitude and speed
  3. Ground hold if the vehicle cannot lift off yet
  4. Integrate speed, then altitude (clamped at the surface)
  5. Separation marker and fuel exhaustion
"""

import logging

from . import constants as C
from .config import VehicleConfig
from .forces import compute_net_force
from .state import FlightState

logger = logging.getLogger(__name__)


def compute_mass(state: FlightState, config: VehicleConfig) -> float:
    """Total mass: upper-stack structure (+ stage-1 structure in stage 1) + fuel."""
    mass = config.dry_mass_kg + state.fuel
    if state.stage == 1:
        mass += config.stage1_dry_mass_kg
    return mass


def burn_fuel(state: FlightState, dt: float = C.DT) -> float:
    """Consume fuel for one step; returns the amount burned (kg)."""
    burned = min(state.fuel, state.burn_rate * dt)
    state.fuel -= burned
    return burned


def tick(state: FlightState, config: VehicleConfig) -> None:
    """
    Advance the vehicle by exactly one simulated second.

    No-op once the mission is over or before liftoff (stage 0). While sitting
    on the ground with a net-negative force the clock still advances (and fuel
    still burns) but no motion is integrated.
    """
    if not state.mission_active or state.stage == 0:
        return

    dt = C.DT
    burn_fuel(state, dt)
    state.mass = compute_mass(state, config)

    net_force = compute_net_force(state.mass, state.speed, state.altitude,
                                  state.stage, config)

    if net_force < 0.0 and state.altitude <= 0.0:
        state.elapsed += 1
        _check_fuel_exhausted(state)
        return

    acceleration = net_force / state.mass
    state.speed += acceleration * dt

    if state.altitude + state.speed * dt < 0.0:
        state.altitude = 0.0
        state.speed = 0.0
    else:
        state.altitude += state.speed * dt

    state.elapsed += 1

    if state.stage == 1 and state.altitude >= config.stage_separation_altitude_m:
        state.separation_pending = True

    _check_fuel_exhausted(state)


def _check_fuel_exhausted(state: FlightState) -> None:
    if state.fuel <= 0.0:
        state.fuel = 0.0
        state.mission_active = False
        logger.debug(f"Fuel exhausted at t={state.elapsed}s, alt={state.altitude_km:.1f}km")


def separate_stage(state: FlightState, config: VehicleConfig) -> bool:
    """
    Drop the stage-1 structure and switch to the stage-2 engine.

    Returns:
        True if a separation happened (only possible from stage 1).
    """
    if state.stage != 1:
        return False
    state.stage = 2
    state.burn_rate = config.stage2_burn_rate_kg_s
    state.separation_pending = False
    state.mass = compute_mass(state, config)
    logger.info(f"Stage separation at t={state.elapsed}s, "
                f"Alt={state.altitude_km:.1f}km, V={state.speed:.0f}m/s")
    return True


def activate_fuel_leak(state: FlightState) -> bool:
    """Permanently multiply the burn rate. Returns False if a leak was already active."""
    if state.fuel_leak_active:
        return False
    state.fuel_leak_active = True
    state.burn_rate *= C.FUEL_LEAK_BURN_FACTOR
    return True


def targets_reached(state: FlightState, config: VehicleConfig) -> bool:
    """True when both target altitude and target speed are met simultaneously."""
    return (state.altitude >= config.target_altitude_m and
            state.speed >= config.target_speed_ms)
