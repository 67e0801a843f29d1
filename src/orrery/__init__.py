"""Rotating solar-system board core: coordinates, reachability and rotation."""

__version__ = "0.1.0"
