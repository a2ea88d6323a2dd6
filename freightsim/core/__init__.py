"""Core simulation engine components."""

from freightsim.core.clock import SimulationClock
from freightsim.core.errors import (
    DuplicateActorError,
    InvalidScheduleError,
    InvalidTopologyError,
    SimulationError,
    SimulationStalledError,
    UnknownLocationError,
)
from freightsim.core.events import Event, EventStore

# Engine imported lazily to avoid circular imports
# Use: from freightsim.core.engine import SimulationEngine, run_simulation

__all__ = [
    "SimulationClock",
    "Event",
    "EventStore",
    "SimulationError",
    "InvalidScheduleError",
    "UnknownLocationError",
    "DuplicateActorError",
    "InvalidTopologyError",
    "SimulationStalledError",
]
