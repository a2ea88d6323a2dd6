"""Actors and wiring of the logistics network."""

from freightsim.network.actors import Actor, EndDestination, Factory, Port
from freightsim.network.models import Shipment
from freightsim.network.topology import Network, build_network

__all__ = [
    "Actor",
    "EndDestination",
    "Factory",
    "Port",
    "Shipment",
    "Network",
    "build_network",
]
