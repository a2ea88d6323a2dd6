"""Actors of the logistics network.

Every actor subscribes to the shared clock when it is built and reacts to each
tick in the same way: fetch the events due now, keep the ones addressed to its
own identifier, then update local state and schedule follow-up events. Actors
never look at each other; the event store is the only thing they share.

Queues and carrier pools are stacks. The most recently queued shipment and the
most recently returned carrier are always used first.
"""

from typing import Iterable

from freightsim.config import RoutingSettings
from freightsim.core.clock import SimulationClock
from freightsim.core.errors import SimulationError
from freightsim.core.events import Event, EventStore
from freightsim.network.models import Shipment
from freightsim.observation.logger import SimulationLogger


class Actor:
    """Base for anything that can receive events at a location."""

    def __init__(self, identifier: str, clock: SimulationClock, event_store: EventStore):
        self.identifier = identifier
        self.clock = clock
        self.event_store = event_store
        self._sim_logger = SimulationLogger()

        self.event_store.register_location(identifier)
        self.clock.subscribe(self.on_tick)

    def due_events(self) -> list[Event]:
        """Events at this actor's location for the current tick."""
        return [
            event
            for event in self.event_store.events_at(self.clock.current_tick)
            if event.location == self.identifier
        ]

    def on_tick(self) -> None:
        """React to the clock reaching a new tick."""
        raise NotImplementedError

    def snapshot(self) -> dict:
        """Local state as plain data."""
        return {"identifier": self.identifier}

    def _send_out(self, carrier: str, shipment: Shipment, next_hop: str, duration: int) -> None:
        """Schedule a loaded trip and the carrier's empty return.

        The cargo lands at ``next_hop`` after ``duration`` ticks and the
        carrier is back here after twice that. Both events are checked before
        either is stored, so a rejected trip leaves the store untouched.
        """
        now = self.clock.current_tick
        leg = Event(location=next_hop, carrier=carrier, time=now + duration, cargo=shipment)
        back = Event(location=self.identifier, carrier=carrier, time=now + 2 * duration)
        self.event_store.validate(leg)
        self.event_store.validate(back)
        self.event_store.schedule(leg)
        self.event_store.schedule(back)
        self._sim_logger.dispatched(
            origin=self.identifier,
            carrier=carrier,
            shipment_id=shipment.id,
            next_hop=next_hop,
            arrival=now + duration,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identifier!r})"


class EndDestination(Actor):
    """Terminal node that collects every shipment delivered to it."""

    def __init__(self, identifier: str, clock: SimulationClock, event_store: EventStore):
        self.shipments_received: list[Shipment | None] = []
        super().__init__(identifier, clock, event_store)

    def on_tick(self) -> None:
        # Filtering is by location only: an empty arrival is recorded too.
        for event in self.due_events():
            self.shipments_received.append(event.cargo)
            self._sim_logger.delivered(
                destination=self.identifier,
                shipment_id=event.cargo.id if event.cargo is not None else None,
                tick=self.clock.current_tick,
            )

    def snapshot(self) -> dict:
        return {
            "identifier": self.identifier,
            "received": [s.id if s is not None else None for s in self.shipments_received],
        }


class Factory(Actor):
    """Origin of all shipments; sends them out by truck.

    Shipments for the direct destination are trucked straight there. Anything
    else goes to the port.
    """

    def __init__(
        self,
        identifier: str,
        clock: SimulationClock,
        event_store: EventStore,
        trucks: Iterable[str],
        shipments: Iterable[Shipment],
        routing: RoutingSettings | None = None,
    ):
        self.available_trucks: list[str] = list(trucks)
        self.shipment_queue: list[Shipment] = list(shipments)
        self.routing = routing or RoutingSettings()
        self.dispatch_count = 0
        super().__init__(identifier, clock, event_store)

    def route(self, shipment: Shipment) -> tuple[str, int]:
        """Next hop and trip duration for ``shipment``."""
        if shipment.destination == self.routing.direct_destination:
            return shipment.destination, self.routing.direct_duration
        return self.routing.port_id, self.routing.port_duration

    def on_tick(self) -> None:
        for event in self.due_events():
            if event.is_return:
                self.available_trucks.append(event.carrier)

        while self.shipment_queue and self.available_trucks:
            shipment = self.shipment_queue.pop()
            truck = self.available_trucks.pop()
            next_hop, duration = self.route(shipment)
            try:
                self._send_out(truck, shipment, next_hop, duration)
            except SimulationError:
                self.shipment_queue.append(shipment)
                self.available_trucks.append(truck)
                raise
            self.dispatch_count += 1

    def snapshot(self) -> dict:
        return {
            "identifier": self.identifier,
            "queued": [s.id for s in self.shipment_queue],
            "carriers": list(self.available_trucks),
            "dispatched": self.dispatch_count,
        }


class Port(Actor):
    """Transfers truck cargo onto ships.

    Every ship sails to ``routing.ship_destination``, whatever the shipment's
    final destination is.
    """

    def __init__(
        self,
        identifier: str,
        clock: SimulationClock,
        event_store: EventStore,
        ships: Iterable[str],
        routing: RoutingSettings | None = None,
    ):
        self.available_ships: list[str] = list(ships)
        self.cargo_to_be_shipped: list[Shipment] = []
        self.routing = routing or RoutingSettings()
        self.dispatch_count = 0
        super().__init__(identifier, clock, event_store)

    def on_tick(self) -> None:
        due = self.due_events()

        # Returning ships
        for event in due:
            if event.is_return:
                self.available_ships.append(event.carrier)

        # Cargo dropped off by trucks
        for event in due:
            if not event.is_return:
                self.cargo_to_be_shipped.append(event.cargo)

        while self.cargo_to_be_shipped and self.available_ships:
            shipment = self.cargo_to_be_shipped.pop()
            ship = self.available_ships.pop()
            try:
                self._send_out(
                    ship, shipment, self.routing.ship_destination, self.routing.ship_duration
                )
            except SimulationError:
                self.cargo_to_be_shipped.append(shipment)
                self.available_ships.append(ship)
                raise
            self.dispatch_count += 1

    def snapshot(self) -> dict:
        return {
            "identifier": self.identifier,
            "queued": [s.id for s in self.cargo_to_be_shipped],
            "carriers": list(self.available_ships),
            "dispatched": self.dispatch_count,
        }
