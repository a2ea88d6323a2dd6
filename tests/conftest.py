"""
Pytest configuration and shared fixtures.
"""

import pytest

from freightsim.config import Config, RoutingSettings
from freightsim.core.clock import SimulationClock
from freightsim.core.events import EventStore


@pytest.fixture
def clock():
    """A fresh clock at tick 0."""
    return SimulationClock()


@pytest.fixture
def store(clock):
    """Lenient event store bound to the clock."""
    return EventStore(clock=clock)


@pytest.fixture
def strict_store(clock):
    """Event store that rejects past and unroutable events."""
    return EventStore(clock=clock, strict=True)


@pytest.fixture
def routing():
    """Stock routing: b direct in 5, port in 1, ships to "A" in 4."""
    return RoutingSettings()


@pytest.fixture
def config():
    """Stock configuration."""
    return Config()


@pytest.fixture
def fixed_config():
    """Configuration whose ships sail to the real destination "a"."""
    cfg = Config()
    cfg.routing.ship_destination = "a"
    return cfg
