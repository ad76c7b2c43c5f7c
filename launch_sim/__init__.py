"""
Launch Mission Simulation Package

A discrete-time, vertical-only simulation of a two-stage rocket mission,
driven by a stage state machine with stochastic failure injection and run
either in batch ("fast-forward") or by a pausable background worker.

Modules:
    - constants: Physical constants, failure probabilities, message texts
    - config: VehicleConfig / FailureRates dataclasses and validation
    - profiles: Named vehicle profiles and the profile loader
    - state: Mutable flight state
    - forces: Gravity, atmosphere, drag and thrust
    - dynamics: One-second flight model tick
    - stages: Mission stage state machine
    - controller: Mission controller and observer notification
    - runner: Background worker with pause/resume/stop
    - commands: Command layer
    - telemetry: Per-tick flight log
    - plotting: Flight profile plots
    - montecarlo: Repeated-mission statistics
    - cli: Interactive console entry point
"""

from .config import ConfigurationError, FailureRates, VehicleConfig, create_test_config
from .controller import MissionControlError, MissionController, MissionOutcome, OutcomeKind
from .profiles import load_config, list_profiles
from .runner import BackgroundRunner
from .stages import Stage
from .state import FlightState, create_initial_state

__version__ = "1.0.0"

__all__ = [
    'ConfigurationError',
    'FailureRates',
    'VehicleConfig',
    'create_test_config',
    'MissionControlError',
    'MissionController',
    'MissionOutcome',
    'OutcomeKind',
    'load_config',
    'list_profiles',
    'BackgroundRunner',
    'Stage',
    'FlightState',
    'create_initial_state',
]
