"""Error types raised by the simulation engine."""

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from freightsim.core.events import Event


class SimulationError(Exception):
    """Base class for simulation failures."""


class InvalidScheduleError(SimulationError):
    """An event was scheduled for a tick that has already passed."""

    def __init__(self, event: "Event", current_tick: int):
        self.event = event
        self.current_tick = current_tick
        super().__init__(
            f"Cannot schedule event at tick {event.time} for {event.location!r}: "
            f"clock is already at tick {current_tick}"
        )


class UnknownLocationError(SimulationError):
    """An event was scheduled for a location with no registered actor."""

    def __init__(self, event: "Event", known_locations: Iterable[str]):
        self.event = event
        self.known_locations = sorted(known_locations)
        super().__init__(
            f"No actor registered for location {event.location!r} "
            f"(known: {', '.join(self.known_locations) or 'none'})"
        )


class DuplicateActorError(SimulationError):
    """Two actors tried to claim the same identifier."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"An actor is already registered as {identifier!r}")


class SimulationStalledError(SimulationError):
    """The driver hit its tick limit before the stop condition held."""

    def __init__(self, tick: int, max_ticks: int):
        self.tick = tick
        self.max_ticks = max_ticks
        super().__init__(
            f"Stop condition still unmet after {max_ticks} ticks (clock at {tick})"
        )


class InvalidTopologyError(SimulationError):
    """The configured network cannot be wired as described."""
