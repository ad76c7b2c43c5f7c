"""
Launch Mission Simulation - Monte Carlo Mission Campaign

Flies the same vehicle many times, one mission after another, each with its
own seeded random source, to estimate how often the stochastic failure
modes end a mission.
"""

from collections import Counter
from dataclasses import dataclass, field
import time
from typing import Dict, List, Optional

import numpy as np

from . import constants as C
from .config import FailureRates, VehicleConfig
from .controller import MissionController, OutcomeKind


@dataclass
class MCRunResult:
    """Result from a single mission."""
    run_index: int
    seed: int
    outcome: OutcomeKind
    reason: Optional[str]
    flight_time_s: int
    final_altitude_km: float
    final_speed_kmh: float
    max_altitude_km: float
    fuel_leak: bool


@dataclass
class MCResults:
    """Aggregated results from a Monte Carlo campaign."""
    runs: List[MCRunResult] = field(default_factory=list)
    config: Optional[VehicleConfig] = None
    wall_time_s: float = 0.0

    @property
    def n_runs(self) -> int:
        return len(self.runs)

    @property
    def n_success(self) -> int:
        return sum(1 for r in self.runs if r.outcome is OutcomeKind.SUCCESS)

    @property
    def success_rate(self) -> float:
        return self.n_success / self.n_runs if self.runs else 0.0

    def failure_reasons(self) -> Dict[str, int]:
        return dict(Counter(r.reason for r in self.runs
                            if r.outcome is OutcomeKind.FAILURE))

    def get_statistic(self, attr: str) -> dict:
        """Compute mean/std/min/max for a scalar attribute across runs."""
        values = [getattr(r, attr) for r in self.runs]
        if not values:
            return {'mean': 0, 'std': 0, 'min': 0, 'max': 0}
        arr = np.array(values, dtype=float)
        return {
            'mean': float(np.mean(arr)),
            'std': float(np.std(arr)),
            'min': float(np.min(arr)),
            'max': float(np.max(arr)),
        }

    def summary(self) -> str:
        lines = [f"Monte Carlo Results: {self.n_runs} runs in {self.wall_time_s:.1f}s",
                 f"  success rate: {self.success_rate * 100:.1f}% "
                 f"({self.n_success}/{self.n_runs})"]
        for reason, count in sorted(self.failure_reasons().items(), key=lambda kv: -kv[1]):
            lines.append(f"  failure '{reason}': {count}")
        for attr in ['flight_time_s', 'final_altitude_km', 'max_altitude_km']:
            stats = self.get_statistic(attr)
            lines.append(f"  {attr:20s}: mean={stats['mean']:.2f} std={stats['std']:.2f} "
                         f"min={stats['min']:.2f} max={stats['max']:.2f}")
        return '\n'.join(lines)


def fly_mission(controller: MissionController, max_ticks: int = C.MAX_MISSION_TICKS) -> None:
    """Run checks, launch and fast-forward a fresh controller to completion."""
    if not controller.initiate_checks():
        return
    controller.launch()
    controller.advance(max_ticks)


def run_monte_carlo(config: VehicleConfig,
                    n_runs: int = 100,
                    seed: int = 42,
                    failure_rates: FailureRates = None,
                    max_ticks: int = C.MAX_MISSION_TICKS,
                    verbose: bool = False) -> MCResults:
    """
    Fly ``n_runs`` independent missions of one vehicle.

    Args:
        config: Vehicle to fly
        n_runs: Number of missions
        seed: Master random seed; each run draws its own seed from it
        failure_rates: Failure probabilities (defaults to FailureRates())
        max_ticks: Tick cap per mission
        verbose: Print progress

    Returns:
        MCResults with per-run data and statistics
    """
    rng = np.random.default_rng(seed)
    results = MCResults(config=config)
    start = time.time()

    for i in range(n_runs):
        run_seed = int(rng.integers(0, 2**31))
        controller = MissionController(
            profile=f"mc-{i}",
            loader=lambda _name: config,
            rng=np.random.default_rng(run_seed),
            failure_rates=failure_rates,
        )
        fly_mission(controller, max_ticks)

        state = controller.state
        outcome = controller.outcome
        results.runs.append(MCRunResult(
            run_index=i,
            seed=run_seed,
            outcome=outcome.kind,
            reason=outcome.reason,
            flight_time_s=state.elapsed,
            final_altitude_km=state.altitude_km,
            final_speed_kmh=state.speed_kmh,
            max_altitude_km=controller.flight_log.max_altitude,
            fuel_leak=state.fuel_leak_active,
        ))

        if verbose and (i + 1) % max(1, n_runs // 10) == 0:
            elapsed = time.time() - start
            print(f"  MC run {i+1}/{n_runs} ({elapsed:.1f}s)")

    results.wall_time_s = time.time() - start

    if verbose:
        print(results.summary())

    return results
