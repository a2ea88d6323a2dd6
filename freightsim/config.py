"""Configuration management for Freightsim."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RoutingSettings(BaseSettings):
    """Leg durations and next hops used by the factory and the port."""

    model_config = SettingsConfigDict(env_prefix="ROUTE_")

    port_id: str = "port"
    direct_destination: str = "b"  # Trucked straight from the factory
    direct_duration: int = Field(default=5, ge=1)
    port_duration: int = Field(default=1, ge=1)
    ship_duration: int = Field(default=4, ge=1)
    # Ships only ever sail to this location. Destinations are registered
    # lowercase, so the default never matches one.
    ship_destination: str = "A"


class SimulationSettings(BaseSettings):
    """Engine parameters and the initial network stock."""

    model_config = SettingsConfigDict(env_prefix="SIM_")

    max_ticks: int = Field(default=1000, ge=1)
    strict_scheduling: bool = False

    factory_id: str = "factory"
    trucks: list[str] = Field(default_factory=lambda: ["truck-1", "truck-2"])
    ships: list[str] = Field(default_factory=lambda: ["ship-1"])
    # Destination ids in queue order; the last one leaves first.
    shipments: list[str] = Field(default_factory=lambda: ["a", "b", "b"])


class Config(BaseSettings):
    """Main configuration container."""

    model_config = SettingsConfigDict(
        env_prefix="FREIGHTSIM_",
        env_nested_delimiter="__",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-configurations
    routing: RoutingSettings = Field(default_factory=RoutingSettings)
    simulation: SimulationSettings = Field(default_factory=SimulationSettings)


# Global configuration instance
config = Config()


def get_config() -> Config:
    """Get the global configuration instance."""
    return config


def reload_config() -> Config:
    """Reload configuration from environment."""
    global config
    config = Config()
    return config
