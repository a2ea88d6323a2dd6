"""Wiring of the default factory -> port -> destination network."""

from dataclasses import dataclass, field

from freightsim.config import Config, get_config
from freightsim.core.clock import SimulationClock
from freightsim.core.errors import InvalidTopologyError
from freightsim.core.events import EventStore
from freightsim.network.actors import Actor, EndDestination, Factory, Port
from freightsim.network.models import Shipment

# Destinations that always exist, in construction order.
DEFAULT_DESTINATIONS = ("b", "a")


@dataclass
class Network:
    """A fully wired network sharing one clock and one event store."""

    clock: SimulationClock
    event_store: EventStore
    factory: Factory
    port: Port
    destinations: dict[str, EndDestination] = field(default_factory=dict)
    initial_shipments: list[Shipment] = field(default_factory=list)

    @property
    def actors(self) -> list[Actor]:
        """All actors in subscription order."""
        return [*self.destinations.values(), self.factory, self.port]

    def received(self, identifier: str) -> int:
        """Number of deliveries recorded at a destination."""
        return len(self.destinations[identifier].shipments_received)

    def deliveries(self) -> dict[str, int]:
        return {ident: len(d.shipments_received) for ident, d in self.destinations.items()}

    def snapshot(self) -> dict:
        return {
            "tick": self.clock.current_tick,
            "actors": {actor.identifier: actor.snapshot() for actor in self.actors},
        }


def build_network(
    config: Config | None = None,
    clock: SimulationClock | None = None,
    event_store: EventStore | None = None,
) -> Network:
    """Build the network described by ``config.simulation``.

    Args:
        config: Configuration to use (default: global config)
        clock: Existing clock to attach to (default: a new one)
        event_store: Existing store to attach to (default: a new one)

    Returns:
        The wired network, not yet started

    Raises:
        InvalidTopologyError: If a destination or the factory reuses the
            identifier of another hub
    """
    config = config or get_config()
    sim = config.simulation

    clock = clock or SimulationClock()
    if event_store is None:
        event_store = EventStore(clock=clock, strict=sim.strict_scheduling)

    destination_ids = list(DEFAULT_DESTINATIONS)
    for ident in sim.shipments:
        if ident not in destination_ids:
            destination_ids.append(ident)

    hubs = {"factory": sim.factory_id, "port": config.routing.port_id}
    if hubs["factory"] == hubs["port"]:
        raise InvalidTopologyError(
            f"Factory and port cannot share the identifier {hubs['port']!r}"
        )
    for ident in destination_ids:
        for role, hub_id in hubs.items():
            if ident == hub_id:
                raise InvalidTopologyError(
                    f"Destination {ident!r} clashes with the {role} identifier; "
                    f"shipments cannot be addressed to the {role}"
                )

    destinations = {
        ident: EndDestination(ident, clock, event_store) for ident in destination_ids
    }
    shipments = [Shipment(destination=ident) for ident in sim.shipments]

    factory = Factory(
        sim.factory_id,
        clock,
        event_store,
        trucks=sim.trucks,
        shipments=shipments,
        routing=config.routing,
    )
    port = Port(
        config.routing.port_id,
        clock,
        event_store,
        ships=sim.ships,
        routing=config.routing,
    )

    return Network(
        clock=clock,
        event_store=event_store,
        factory=factory,
        port=port,
        destinations=destinations,
        initial_shipments=shipments,
    )
