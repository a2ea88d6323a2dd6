"""Observation and logging components for Freightsim."""

from freightsim.observation.logger import (
    setup_logging,
    get_logger,
    SimulationLogger,
)
from freightsim.observation.metrics import MetricsCollector, SimulationMetrics

__all__ = [
    "setup_logging",
    "get_logger",
    "SimulationLogger",
    "MetricsCollector",
    "SimulationMetrics",
]
