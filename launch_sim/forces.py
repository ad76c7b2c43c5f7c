"""
Launch Mission Simulation - Force Computations

This module implements the vertical force balance:
- Inverse-square gravity
- Exponential atmosphere density
- Aerodynamic drag
- Stage thrust

All functions are pure and operate on scalars.
"""

import numpy as np

from . import constants as C
from .config import VehicleConfig


def compute_gravity_acceleration(altitude: float) -> float:
    """
    Gravitational acceleration at altitude.

        g = G * M_earth / (R_earth + h)^2

    Args:
        altitude: Altitude above the surface (m)

    Returns:
        Acceleration magnitude (m/s^2)
    """
    r = C.R_EARTH + max(0.0, altitude)
    return C.MU_EARTH / (r * r)


def compute_gravity_force(mass: float, altitude: float) -> float:
    """Weight of the vehicle at altitude (N)."""
    return mass * compute_gravity_acceleration(altitude)


def compute_air_density(altitude: float) -> float:
    """
    Exponential atmosphere.

        rho = rho_0 * exp(-h / H)

    Negative altitude is treated as sea level.
    """
    h = max(0.0, float(altitude))
    return float(C.RHO_0 * np.exp(-h / C.H_SCALE))


def compute_drag_force(speed: float, altitude: float) -> float:
    """
    Aerodynamic drag magnitude.

        D = 0.5 * rho * v^2 * Cd * A

    The model is vertical-only; the caller subtracts drag from the force
    balance regardless of the direction of travel.
    """
    rho = compute_air_density(altitude)
    return 0.5 * rho * speed * speed * C.DRAG_COEFFICIENT * C.CROSS_SECTION_AREA


def compute_thrust(stage: int, config: VehicleConfig) -> float:
    """Engine thrust for the active stage (0 before launch)."""
    if stage == 1:
        return config.stage1_thrust_n
    if stage == 2:
        return config.stage2_thrust_n
    return 0.0


def compute_net_force(mass: float, speed: float, altitude: float,
                      stage: int, config: VehicleConfig) -> float:
    """Net vertical force: thrust - gravity - drag (N)."""
    thrust = compute_thrust(stage, config)
    gravity = compute_gravity_force(mass, altitude)
    drag = compute_drag_force(speed, altitude)
    return thrust - gravity - drag
