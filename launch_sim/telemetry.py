"""
Launch Mission Simulation - Telemetry Log

Per-tick flight telemetry recorded by the mission controller, used for
plotting and batch statistics.
"""

from dataclasses import dataclass, field
from typing import List

from .state import FlightState


@dataclass
class FlightLog:
    """Container for logged flight data (one sample per tick)."""
    time: List[int] = field(default_factory=list)
    altitude: List[float] = field(default_factory=list)  # km
    speed: List[float] = field(default_factory=list)  # km/h
    fuel_percent: List[float] = field(default_factory=list)
    mass: List[float] = field(default_factory=list)  # kg
    stage: List[int] = field(default_factory=list)

    def append(self, state: FlightState) -> None:
        """Log data from the current tick."""
        self.time.append(state.elapsed)
        self.altitude.append(state.altitude_km)
        self.speed.append(state.speed_kmh)
        self.fuel_percent.append(state.fuel_percent)
        self.mass.append(state.mass)
        self.stage.append(state.stage)

    def clear(self) -> None:
        for values in (self.time, self.altitude, self.speed,
                       self.fuel_percent, self.mass, self.stage):
            values.clear()

    def __len__(self) -> int:
        return len(self.time)

    @property
    def max_altitude(self) -> float:
        return max(self.altitude, default=0.0)

    @property
    def max_speed(self) -> float:
        return max(self.speed, default=0.0)

    def separation_time(self):
        """Elapsed time of the first stage-2 sample, or None."""
        for t, s in zip(self.time, self.stage):
            if s == 2:
                return t
        return None
