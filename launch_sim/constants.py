"""
Launch Mission Simulation - Physical Constants and Mission Parameters

This module defines the physical constants of the vertical ascent model,
the default failure-injection probabilities, and the fixed message texts
emitted to mission observers.
"""

# =============================================================================
# EARTH PARAMETERS
# =============================================================================

# Universal gravitational constant (m^3 kg^-1 s^-2)
G = 6.67430e-11

# Earth mass (kg)
M_EARTH = 5.972e24

# Earth mean radius (m)
R_EARTH = 6.371e6

# Gravitational parameter (m^3/s^2)
MU_EARTH = G * M_EARTH

# Atmospheric parameters (exponential model)
RHO_0 = 1.225  # Sea level density (kg/m^3)
H_SCALE = 8500.0  # Scale height (m)

# =============================================================================
# AERODYNAMIC PARAMETERS
# =============================================================================

DRAG_COEFFICIENT = 0.5  # Cd (constant for the whole flight)
CROSS_SECTION_AREA = 10.5  # Reference cross-sectional area (m^2)

# =============================================================================
# SIMULATION PARAMETERS
# =============================================================================

# Integration step (s). One tick is one simulated second.
DT = 1.0

# Wall-clock pacing of the background runner (s per tick)
RUNNER_INTERVAL = 1.0

# Upper bound used by batch tools (Monte Carlo) when running to completion
MAX_MISSION_TICKS = 5000

# Unit conversions
MS_TO_KMH = 3.6
M_PER_KM = 1000.0

# =============================================================================
# FAILURE INJECTION (per invocation / per tick)
# =============================================================================

P_PRELAUNCH_MALFUNCTION = 0.006  # 0.6% per checks run
P_STAGE1_FLAMEOUT = 0.001        # 0.1% per second in stage 1
P_STAGE2_FUEL_LEAK = 0.005       # 0.5% per second in stage 2 (non-fatal)

# Fuel leak multiplies the current burn rate once
FUEL_LEAK_BURN_FACTOR = 2.0

# =============================================================================
# FAILURE REASONS AND OBSERVER MESSAGES
# =============================================================================

REASON_SYSTEM_MALFUNCTION = "system malfunction"
REASON_ENGINE_FLAMEOUT = "catastrophic engine flameout"
REASON_STAGE1_NON_OPERATIONAL = "stage 1 non-operational"
REASON_STAGE2_NON_OPERATIONAL = "stage 2 non-operational"

MSG_CHECKS_GO = "All systems are 'Go' for launch."
MSG_LIFTOFF = "Launch initiated. T-minus zero!"
MSG_STAGE_SEPARATION = "Stage 1 complete. Separating stage. Entering Stage 2."
MSG_FUEL_LEAK = "WARNING: Fuel Leak Detected! Fuel consumption rate has increased."
MSG_ORBIT_ACHIEVED = "Orbit achieved! Mission successful."
MSG_FAILURE_PREFIX = "FAILURE: "

STATUS_SUCCESS = "--- MISSION SUCCESSFUL ---"
STATUS_FAILED = "--- MISSION FAILED ---"
STATUS_FORMAT = "Stage: {stage}, Fuel: {fuel:.1f}%, Altitude: {altitude:.1f} km, Speed: {speed:.0f} km/h"

# Default profile used by the CLI and the controller
DEFAULT_PROFILE = "leo"
