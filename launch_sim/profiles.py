"""
Launch Mission Simulation - Vehicle Profiles

Named vehicle profiles and the loader that turns a profile into a validated
VehicleConfig. A profile is either one of the built-in names below or a path
to a JSON file containing an object with the VehicleConfig field names.
"""

import json
import logging
import os
from typing import Dict, List, Mapping

from .config import ConfigurationError, VehicleConfig

logger = logging.getLogger(__name__)


# Two-stage vertical ascent to a low orbit altitude
LEO_PROFILE = {
    "initial_mass_kg": 550000.0,
    "fuel_mass_kg": 450000.0,
    "stage1_dry_mass_kg": 25000.0,
    "stage1_thrust_n": 7.6e6,
    "stage2_thrust_n": 2.5e6,
    "stage1_burn_rate_kg_s": 2500.0,
    "stage2_burn_rate_kg_s": 800.0,
    "stage_separation_altitude_m": 70000.0,
    "target_altitude_km": 200.0,
    "target_speed_kmh": 7000.0,
}

# Small sounding rocket: short burn, low targets
SUBORBITAL_PROFILE = {
    "initial_mass_kg": 12000.0,
    "fuel_mass_kg": 8000.0,
    "stage1_dry_mass_kg": 1500.0,
    "stage1_thrust_n": 300000.0,
    "stage2_thrust_n": 150000.0,
    "stage1_burn_rate_kg_s": 60.0,
    "stage2_burn_rate_kg_s": 20.0,
    "stage_separation_altitude_m": 20000.0,
    "target_altitude_km": 100.0,
    "target_speed_kmh": 3000.0,
}

PROFILES: Dict[str, Mapping[str, float]] = {
    "leo": LEO_PROFILE,
    "suborbital": SUBORBITAL_PROFILE,
}


def list_profiles() -> List[str]:
    """Names of the built-in profiles."""
    return sorted(PROFILES)


def config_from_mapping(data: Mapping, source: str = "<mapping>") -> VehicleConfig:
    """
    Build a VehicleConfig from a profile mapping.

    Every VehicleConfig field must be present and numeric (numeric strings are
    accepted, as a properties-style profile would store them). Unknown keys are
    ignored with a warning.

    Raises:
        ConfigurationError: on a missing key, a non-numeric value, or a
            physically invalid combination.
    """
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Profile '{source}' must be a JSON object")

    values = {}
    for name in VehicleConfig.field_names():
        if name not in data or data[name] is None:
            raise ConfigurationError(f"Profile '{source}' is missing key '{name}'")
        raw = data[name]
        if isinstance(raw, bool):
            raise ConfigurationError(f"Profile '{source}': '{name}' is not numeric ({raw!r})")
        try:
            values[name] = float(raw)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Profile '{source}': '{name}' is not numeric ({raw!r})"
            ) from e

    extra = set(data) - set(values)
    if extra:
        logger.warning(f"Profile '{source}' has unknown keys ignored: {sorted(extra)}")

    return VehicleConfig(**values)


def load_profile_file(path: str) -> VehicleConfig:
    """Load a VehicleConfig from a JSON profile file."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Cannot find profile file: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Error reading profile file {path}: {e}") from e
    return config_from_mapping(data, source=path)


def load_config(name: str) -> VehicleConfig:
    """
    Resolve a profile name into a validated VehicleConfig.

    Args:
        name: Built-in profile name (case-insensitive) or path to a .json file

    Raises:
        ConfigurationError: if the profile cannot be found or is invalid
    """
    key = name.strip().lower()
    if key in PROFILES:
        config = config_from_mapping(PROFILES[key], source=key)
    elif name.endswith(".json") or os.path.sep in name:
        config = load_profile_file(name)
    else:
        raise ConfigurationError(
            f"Unknown profile '{name}'. Available: {', '.join(list_profiles())}"
        )
    logger.debug(f"Loaded profile '{name}': {config}")
    return config
