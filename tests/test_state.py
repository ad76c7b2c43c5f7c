import pytest

from launch_sim import constants as C
from launch_sim.config import create_test_config
from launch_sim.state import FlightState, create_initial_state


@pytest.fixture
def initial_state():
    return create_initial_state(create_test_config())


def test_create_initial_state(initial_state):
    cfg = create_test_config()
    assert initial_state.mass == cfg.initial_mass_kg
    assert initial_state.fuel == cfg.fuel_mass_kg
    assert initial_state.altitude == 0.0
    assert initial_state.speed == 0.0
    assert initial_state.stage == 0
    assert initial_state.elapsed == 0
    assert initial_state.burn_rate == cfg.stage1_burn_rate_kg_s
    assert initial_state.mission_active is True
    assert initial_state.fuel_leak_active is False
    assert initial_state.failure_reason is None


def test_derived_units():
    s = FlightState(mass=1.0, fuel=250.0, fuel_capacity=1000.0, altitude=12500.0, speed=100.0)
    assert s.fuel_percent == pytest.approx(25.0)
    assert s.altitude_km == pytest.approx(12.5)
    assert s.speed_kmh == pytest.approx(100.0 * C.MS_TO_KMH)


def test_copy_is_independent(initial_state):
    s2 = initial_state.copy()
    s2.altitude = 10.0
    s2.mission_active = False
    assert initial_state.altitude == 0.0
    assert initial_state.mission_active is True


def test_str(initial_state):
    s = str(initial_state)
    assert "FlightState(" in s
    assert "alt=" in s
    assert "fuel=" in s
