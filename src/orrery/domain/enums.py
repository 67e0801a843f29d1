"""Enumerations for the Orrery domain."""

from __future__ import annotations

from enum import StrEnum


class Ring(StrEnum):
    """Concentric board rings, innermost first."""

    FIXED = "fixed"
    LEVEL1 = "level1"
    LEVEL2 = "level2"
    LEVEL3 = "level3"

    @property
    def level(self) -> int:
        """Rotation level of the ring; 0 for the fixed ring."""
        return _RING_LEVELS[self]

    @property
    def rotates(self) -> bool:
        return self is not Ring.FIXED


_RING_LEVELS: dict[Ring, int] = {
    Ring.FIXED: 0,
    Ring.LEVEL1: 1,
    Ring.LEVEL2: 2,
    Ring.LEVEL3: 3,
}


class ObjectCategory(StrEnum):
    """Kinds of celestial objects printed on (or added to) the board."""

    SUN = "sun"
    EARTH = "earth"
    PLANET = "planet"
    MOON = "moon"
    ASTEROID_FIELD = "asteroid_field"
    COMET = "comet"
    EMPTY = "empty"


class Surcharge(StrEnum):
    """Named movement surcharges that an effect may waive."""

    ASTEROID_EXIT = "asteroid_exit"
    SAME_RING = "same_ring"
