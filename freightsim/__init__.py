"""Freightsim: discrete-event simulation of a small logistics network."""

__version__ = "0.1.0"
