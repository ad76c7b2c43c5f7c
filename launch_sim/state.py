"""
Launch Mission Simulation - Flight State

This module defines the single mutable flight state owned by the mission
controller. It is only advanced through dynamics.tick() and is replaced
wholesale (never rewound) when a mission is reset.
"""

from dataclasses import dataclass, replace
from typing import Optional

from . import constants as C
from .config import VehicleConfig


@dataclass
class FlightState:
    """
    Mutable vehicle state for one mission.

    Attributes:
        mass: Current total vehicle mass (kg)
        fuel: Fuel remaining (kg)
        altitude: Altitude above the surface (m), never negative
        speed: Vertical speed (m/s)
        stage: 0 = pre-launch, 1 = first powered ascent, 2 = second powered ascent
        elapsed: Simulated seconds since liftoff
        burn_rate: Current fuel burn rate (kg/s), doubled by a fuel leak
        mission_active: False once the mission reached a terminal outcome
        fuel_leak_active: True after a stage-2 fuel leak
        separation_pending: Raised by the flight model when stage 1 reaches
            the separation altitude; consumed by the stage-1 logic
        succeeded: True if the mission ended through the success path
        failure_reason: Reason captured when the mission failed
    """

    mass: float
    fuel: float
    fuel_capacity: float
    altitude: float = 0.0
    speed: float = 0.0
    stage: int = 0
    elapsed: int = 0
    burn_rate: float = 0.0
    mission_active: bool = True
    fuel_leak_active: bool = False
    separation_pending: bool = False
    succeeded: bool = False
    failure_reason: Optional[str] = None

    def copy(self) -> 'FlightState':
        return replace(self)

    @property
    def fuel_percent(self) -> float:
        """Fuel remaining as a percentage of the loaded fuel."""
        if self.fuel_capacity <= 0:
            return 0.0
        return self.fuel / self.fuel_capacity * 100.0

    @property
    def altitude_km(self) -> float:
        return self.altitude / C.M_PER_KM

    @property
    def speed_kmh(self) -> float:
        return self.speed * C.MS_TO_KMH

    def __str__(self) -> str:
        return (
            f"FlightState(t={self.elapsed}s, stage={self.stage}, "
            f"alt={self.altitude_km:.2f}km, v={self.speed:.1f}m/s, "
            f"fuel={self.fuel:.1f}kg, m={self.mass:.1f}kg)"
        )


def create_initial_state(config: VehicleConfig) -> FlightState:
    """
    Create the on-pad state for a freshly loaded vehicle.

    Returns:
        FlightState at rest on the ground, stage 0, fully fuelled.
    """
    return FlightState(
        mass=config.initial_mass_kg,
        fuel=config.fuel_mass_kg,
        fuel_capacity=config.fuel_mass_kg,
        burn_rate=config.stage1_burn_rate_kg_s,
    )
