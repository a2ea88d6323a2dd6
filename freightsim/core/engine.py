"""Simulation Engine - drives the clock until a stop condition holds."""

from typing import Callable, Literal

from freightsim.config import Config, get_config
from freightsim.core.errors import SimulationStalledError
from freightsim.network.topology import Network, build_network
from freightsim.observation.logger import SimulationLogger
from freightsim.observation.metrics import MetricsCollector

StopCondition = Callable[[Network], bool]

# Deliveries the stock network is expected to make.
DEFAULT_TARGETS = {"a": 1, "b": 2}


def deliveries_reached(
    targets: dict[str, int],
    require: Literal["all", "any"] = "all",
) -> StopCondition:
    """Build a stop condition on delivery counts.

    Args:
        targets: Minimum deliveries per destination identifier
        require: "all" stops once every target is met, "any" once one is

    Returns:
        Predicate over a network
    """
    if require not in ("all", "any"):
        raise ValueError(f"require must be 'all' or 'any', got {require!r}")
    combine = all if require == "all" else any

    def condition(network: Network) -> bool:
        counts = network.deliveries()
        return combine(counts.get(ident, 0) >= n for ident, n in targets.items())

    return condition


class SimulationEngine:
    """Runs a network tick by tick.

    The engine owns no simulation state of its own; it only advances the
    network's clock and checks the stop condition between ticks.
    """

    def __init__(
        self,
        network: Network | None = None,
        config: Config | None = None,
        collect_metrics: bool = True,
    ):
        self._config = config or get_config()
        self._network = network or build_network(self._config)
        self._sim_logger = SimulationLogger()
        self._metrics = MetricsCollector(self._network) if collect_metrics else None

    @property
    def network(self) -> Network:
        return self._network

    @property
    def elapsed(self) -> int:
        """Ticks elapsed since the first reaction round."""
        return self._network.clock.current_tick

    def run(self, until: StopCondition, max_ticks: int | None = None) -> int:
        """Advance the clock until ``until(network)`` holds.

        The condition is checked after the initial reaction round and after
        every advance.

        Args:
            until: Stop condition
            max_ticks: Tick limit (default from config)

        Returns:
            Elapsed ticks

        Raises:
            ValueError: If max_ticks is below 1
            SimulationStalledError: If the limit is reached first
        """
        if max_ticks is None:
            max_ticks = self._config.simulation.max_ticks
        if max_ticks < 1:
            raise ValueError(f"max_ticks must be at least 1, got {max_ticks}")
        clock = self._network.clock

        self._sim_logger.started(
            len(self._network.actors),
            strict=self._network.event_store.strict,
            max_ticks=max_ticks,
        )
        clock.start()

        while not until(self._network):
            if clock.current_tick >= max_ticks:
                self._sim_logger.stalled(clock.current_tick, max_ticks)
                raise SimulationStalledError(clock.current_tick, max_ticks)
            tick = clock.advance()
            self._sim_logger.tick_advanced(
                tick, len(self._network.event_store.events_at(tick))
            )

        self._sim_logger.finished(self.elapsed, deliveries=self._network.deliveries())
        return self.elapsed

    def get_metrics(self) -> dict:
        """Get simulation metrics.

        Returns:
            Metrics dictionary
        """
        network = self._network
        metrics = {
            "elapsed": self.elapsed,
            "clock": network.clock.status(),
            "events_scheduled": len(network.event_store),
            "deliveries": network.deliveries(),
            "dispatches": {
                network.factory.identifier: network.factory.dispatch_count,
                network.port.identifier: network.port.dispatch_count,
            },
        }
        if self._metrics is not None:
            metrics["ticks"] = self._metrics.metrics.to_dict()
        return metrics


def run_simulation(
    targets: dict[str, int] | None = None,
    require: Literal["all", "any"] = "all",
    max_ticks: int | None = None,
    config: Config | None = None,
) -> SimulationEngine:
    """Convenience function to build and run the configured network.

    Returns:
        The engine after completion
    """
    config = config or get_config()
    engine = SimulationEngine(config=config)
    engine.run(deliveries_reached(targets or DEFAULT_TARGETS, require), max_ticks)
    return engine
