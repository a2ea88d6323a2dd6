"""Future events and the store that holds them."""

from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from freightsim.core.errors import (
    DuplicateActorError,
    InvalidScheduleError,
    UnknownLocationError,
)
from freightsim.observation.logger import SimulationLogger

if TYPE_CHECKING:
    from freightsim.core.clock import SimulationClock
    from freightsim.network.models import Shipment


@dataclass(frozen=True)
class Event:
    """Something that happens at ``location`` when the clock reaches ``time``.

    With cargo it is a shipment arriving on ``carrier``; without cargo it is
    the empty carrier coming back.
    """

    location: str
    carrier: str
    time: int
    cargo: "Shipment | None" = None

    @property
    def is_return(self) -> bool:
        """Whether this is an empty carrier returning."""
        return self.cargo is None

    def __str__(self) -> str:
        what = self.cargo.id if self.cargo is not None else "empty"
        return f"Event(t={self.time}, {self.carrier} -> {self.location}, {what})"


class EventStore:
    """Append-only store of scheduled events, indexed by tick.

    Events are never removed. In strict mode ``schedule`` rejects events in
    the past or for locations no actor has registered; otherwise it accepts
    everything and only warns about unknown locations.
    """

    def __init__(
        self,
        clock: "SimulationClock | None" = None,
        strict: bool = False,
    ):
        self._clock = clock
        self._strict = strict
        self._events: list[Event] = []
        self._by_tick: dict[int, list[Event]] = defaultdict(list)
        self._locations: set[str] = set()
        self._sim_logger = SimulationLogger()

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def locations(self) -> frozenset[str]:
        """Identifiers of every registered actor."""
        return frozenset(self._locations)

    def __len__(self) -> int:
        return len(self._events)

    def register_location(self, identifier: str) -> None:
        """Claim ``identifier`` as an event location.

        Raises:
            DuplicateActorError: If another actor already holds it
        """
        if identifier in self._locations:
            raise DuplicateActorError(identifier)
        self._locations.add(identifier)

    def validate(self, event: Event) -> None:
        """Check an event against the strict-mode rules without storing it.

        Does nothing in lenient mode.

        Raises:
            InvalidScheduleError: Strict mode, event time before the current tick
            UnknownLocationError: Strict mode, no actor at the event location
        """
        if not self._strict:
            return
        if self._clock is not None and event.time < self._clock.current_tick:
            raise InvalidScheduleError(event, self._clock.current_tick)
        if event.location not in self._locations:
            raise UnknownLocationError(event, self._locations)

    def schedule(self, event: Event) -> None:
        """Append an event to the store.

        Raises:
            InvalidScheduleError: Strict mode, event time before the current tick
            UnknownLocationError: Strict mode, no actor at the event location
        """
        self.validate(event)
        if not self._strict and event.location not in self._locations:
            self._sim_logger.unroutable(event.location, event.carrier, event.time)

        self._events.append(event)
        self._by_tick[event.time].append(event)

    def events_at(self, time: int) -> list[Event]:
        """All events due at ``time``, in the order they were scheduled."""
        if time not in self._by_tick:
            return []
        return list(self._by_tick[time])

    def pending(self, after_tick: int) -> int:
        """Number of events due strictly after ``after_tick``."""
        return sum(
            len(events) for tick, events in self._by_tick.items() if tick > after_tick
        )

    def all_events(self) -> list[Event]:
        """Every stored event in insertion order."""
        return list(self._events)
