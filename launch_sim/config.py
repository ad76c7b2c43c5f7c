"""
Launch Mission Simulation - Configuration

This module provides the immutable VehicleConfig produced by the profile
loader, and the FailureRates used to inject stochastic failures. Both are
frozen dataclasses validated on construction so that the flight model can
assume internally consistent inputs.
"""

from dataclasses import dataclass, fields

from . import constants as C


class ConfigurationError(Exception):
    """Raised when a vehicle profile is missing, malformed or physically invalid."""
    pass


@dataclass(frozen=True)
class VehicleConfig:
    """
    Static description of one vehicle and its mission targets.

    Masses, thrust and burn rates are SI. Mission targets follow the profile
    convention: altitude in km, speed in km/h.

    The structural mass of the upper stack is ``initial_mass_kg - fuel_mass_kg``;
    the stage-1 structure (``stage1_dry_mass_kg``) is carried on top of it until
    separation.
    """

    initial_mass_kg: float
    fuel_mass_kg: float
    stage1_dry_mass_kg: float
    stage1_thrust_n: float
    stage2_thrust_n: float
    stage1_burn_rate_kg_s: float
    stage2_burn_rate_kg_s: float
    stage_separation_altitude_m: float
    target_altitude_km: float
    target_speed_kmh: float

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{f.name} must be numeric, got {value!r}")
            if not value > 0:
                raise ConfigurationError(f"{f.name} must be positive, got {value!r}")
        if self.fuel_mass_kg >= self.initial_mass_kg:
            raise ConfigurationError(
                f"Fuel mass ({self.fuel_mass_kg:.1f} kg) must be less than "
                f"the initial mass ({self.initial_mass_kg:.1f} kg)"
            )
        if self.stage1_dry_mass_kg >= self.initial_mass_kg:
            raise ConfigurationError(
                f"Stage 1 dry mass ({self.stage1_dry_mass_kg:.1f} kg) must be less than "
                f"the initial mass ({self.initial_mass_kg:.1f} kg)"
            )

    @property
    def dry_mass_kg(self) -> float:
        """Upper-stack structural mass (kg)."""
        return self.initial_mass_kg - self.fuel_mass_kg

    @property
    def target_altitude_m(self) -> float:
        return self.target_altitude_km * C.M_PER_KM

    @property
    def target_speed_ms(self) -> float:
        return self.target_speed_kmh / C.MS_TO_KMH

    @classmethod
    def field_names(cls) -> tuple:
        return tuple(f.name for f in fields(cls))


@dataclass(frozen=True)
class FailureRates:
    """Per-invocation failure probabilities for each mission stage."""

    prelaunch_malfunction: float = C.P_PRELAUNCH_MALFUNCTION
    stage1_flameout: float = C.P_STAGE1_FLAMEOUT
    stage2_fuel_leak: float = C.P_STAGE2_FUEL_LEAK

    def __post_init__(self):
        for f in fields(self):
            p = getattr(self, f.name)
            if not 0.0 <= p <= 1.0:
                raise ConfigurationError(f"{f.name} must be within [0, 1], got {p!r}")


def create_deterministic_rates() -> FailureRates:
    """FailureRates with every stochastic failure disabled."""
    return FailureRates(prelaunch_malfunction=0.0, stage1_flameout=0.0, stage2_fuel_leak=0.0)


def create_test_config(**overrides) -> VehicleConfig:
    """Create a small, fast-flying vehicle suitable for testing.

    With failures disabled this vehicle separates after ~6 ticks and reaches
    its targets a few ticks later. Any VehicleConfig field can be overridden.
    """
    defaults = dict(
        initial_mass_kg=10000.0,
        fuel_mass_kg=6000.0,
        stage1_dry_mass_kg=1000.0,
        stage1_thrust_n=400000.0,
        stage2_thrust_n=200000.0,
        stage1_burn_rate_kg_s=20.0,
        stage2_burn_rate_kg_s=10.0,
        stage_separation_altitude_m=500.0,
        target_altitude_km=1.0,
        target_speed_kmh=360.0,
    )
    defaults.update(overrides)
    return VehicleConfig(**defaults)
