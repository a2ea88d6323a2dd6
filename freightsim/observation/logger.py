"""Structured logging for Freightsim."""

import logging
import sys

import structlog

from freightsim.config import get_config

# Log level name to numeric mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def _level_filter(min_level: str):
    """Create a filter that drops logs below min_level."""
    min_numeric = LOG_LEVELS.get(min_level, logging.INFO)

    def filter_by_level(logger, method_name, event_dict):
        level_name = method_name.upper()
        level_numeric = LOG_LEVELS.get(level_name, logging.INFO)
        if level_numeric < min_numeric:
            raise structlog.DropEvent
        return event_dict

    return filter_by_level


def setup_logging(level: str | None = None) -> structlog.stdlib.BoundLogger:
    """Configure structured logging for the simulation.

    Args:
        level: Minimum level to emit (default from config)
    """
    level = level or get_config().log_level

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        _level_filter(level),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if sys.stderr.isatty():
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger("freightsim")


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger("freightsim")


class SimulationLogger:
    """Logger for simulation-wide events."""

    def __init__(self):
        self._logger = get_logger("freightsim.simulation")

    def started(self, actors: int, **kwargs) -> None:
        """Log simulation start."""
        self._logger.info("simulation_started", actors=actors, **kwargs)

    def tick_advanced(self, tick: int, due_events: int) -> None:
        """Log a clock advance."""
        self._logger.debug("tick_advanced", tick=tick, due_events=due_events)

    def dispatched(
        self, origin: str, carrier: str, shipment_id: str, next_hop: str, arrival: int
    ) -> None:
        """Log a carrier leaving with cargo."""
        self._logger.debug(
            "dispatched",
            origin=origin,
            carrier=carrier,
            shipment_id=shipment_id,
            next_hop=next_hop,
            arrival=arrival,
        )

    def delivered(self, destination: str, shipment_id: str | None, tick: int) -> None:
        """Log a shipment reaching its final destination."""
        self._logger.info(
            "delivered", destination=destination, shipment_id=shipment_id, tick=tick
        )

    def unroutable(self, location: str, carrier: str, time: int) -> None:
        """Log an event scheduled for a location nobody listens on."""
        self._logger.warning(
            "event_unroutable", location=location, carrier=carrier, time=time
        )

    def finished(self, elapsed: int, **kwargs) -> None:
        """Log simulation completion."""
        self._logger.info("simulation_finished", elapsed=elapsed, **kwargs)

    def stalled(self, tick: int, max_ticks: int) -> None:
        """Log a run that hit its tick limit."""
        self._logger.error("simulation_stalled", tick=tick, max_ticks=max_ticks)

    def error(self, message: str, **kwargs) -> None:
        """Log a simulation error."""
        self._logger.error(message, **kwargs)
