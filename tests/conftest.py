"""Shared fixtures for the launch simulation tests."""
import pytest

from launch_sim.config import create_deterministic_rates, create_test_config
from launch_sim.controller import MissionController


class ScriptedRNG:
    """Random source returning scripted values, then a fixed default."""

    def __init__(self, values=(), default=0.99):
        self.values = list(values)
        self.default = default
        self.calls = 0

    def random(self):
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default


@pytest.fixture
def scripted_rng():
    return ScriptedRNG


@pytest.fixture
def make_controller():
    """Factory for a controller flying the small test vehicle.

    Failures are disabled unless ``rates`` is given.
    """
    def _make(rates=None, rng=None, **overrides):
        config = create_test_config(**overrides)
        return MissionController(
            profile="test",
            loader=lambda _name: config,
            rng=rng if rng is not None else ScriptedRNG(),
            failure_rates=rates or create_deterministic_rates(),
        )
    return _make


@pytest.fixture
def launched(make_controller):
    """Factory returning a controller that already passed checks and lifted off."""
    def _make(**kwargs):
        controller = make_controller(**kwargs)
        assert controller.initiate_checks()
        controller.launch()
        return controller
    return _make
