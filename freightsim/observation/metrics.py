"""Metrics collection for Freightsim.

Tracks per-tick counters over a run.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from freightsim.observation.logger import get_logger

if TYPE_CHECKING:
    from freightsim.network.topology import Network

logger = get_logger("freightsim.metrics")


@dataclass
class TickSample:
    """Network counters after all actors reacted to one tick."""

    tick: int
    events_scheduled: int
    in_flight: int
    deliveries: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "tick": self.tick,
            "events_scheduled": self.events_scheduled,
            "in_flight": self.in_flight,
            "deliveries": dict(self.deliveries),
        }


@dataclass
class SimulationMetrics:
    """Metrics for a whole run."""

    samples: list[TickSample] = field(default_factory=list)
    first_delivery: dict[str, int] = field(default_factory=dict)

    @property
    def ticks_observed(self) -> int:
        return len(self.samples)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        last = self.samples[-1] if self.samples else None
        return {
            "ticks_observed": self.ticks_observed,
            "events_scheduled": last.events_scheduled if last else 0,
            "in_flight": last.in_flight if last else 0,
            "deliveries": dict(last.deliveries) if last else {},
            "first_delivery": dict(self.first_delivery),
        }


class MetricsCollector:
    """Samples the network once per tick.

    Must be attached after every actor so that it sees the tick's final
    state.
    """

    def __init__(self, network: "Network"):
        self._network = network
        self._metrics = SimulationMetrics()
        network.clock.subscribe(self.sample)

    @property
    def metrics(self) -> SimulationMetrics:
        """Current metrics."""
        return self._metrics

    def sample(self) -> None:
        """Record the counters for the current tick."""
        tick = self._network.clock.current_tick
        store = self._network.event_store
        deliveries = self._network.deliveries()

        for ident, count in deliveries.items():
            if count and ident not in self._metrics.first_delivery:
                self._metrics.first_delivery[ident] = tick

        self._metrics.samples.append(TickSample(
            tick=tick,
            events_scheduled=len(store),
            in_flight=store.pending(tick),
            deliveries=deliveries,
        ))
        logger.debug("tick_sampled", tick=tick, in_flight=store.pending(tick))
