"""Data models for Freightsim."""

import uuid

from pydantic import BaseModel, ConfigDict, Field


class Shipment(BaseModel):
    """A unit of goods bound for one end destination.

    ``destination`` is the identifier of the receiving actor, not the actor
    itself.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:8])
    destination: str
