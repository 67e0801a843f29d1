"""Dataclasses describing the board's addresses, objects and tokens.

Everything here is an immutable value. Positions are stored in a ring's own
(native) frame; absolute positions are always derived on demand from a
``RotationState`` (see :mod:`orrery.domain.coordinates`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NewType

from orrery.errors import OutOfBoundsCell
from orrery.utils.sector_math import SLOT_BY_LABEL

from .enums import ObjectCategory, Ring

# --- Strongly typed identifiers -------------------------------------------------

ObjectID = NewType("ObjectID", str)
ProbeID = NewType("ProbeID", str)
PlayerID = NewType("PlayerID", str)


def _coerce_ring(ring: Ring | str) -> Ring:
    if isinstance(ring, Ring):
        return ring
    try:
        return Ring(ring)
    except ValueError as exc:
        raise OutOfBoundsCell(f"Unknown ring {ring!r}") from exc


def _check_sector(sector: int) -> int:
    if isinstance(sector, bool) or sector not in SLOT_BY_LABEL:
        raise OutOfBoundsCell(f"Sector must be between 1 and 8, got {sector!r}")
    return sector


# --- Addresses ------------------------------------------------------------------


@dataclass(frozen=True, slots=True, order=True)
class CellAddress:
    """A (ring, sector label) pair; validated on construction."""

    ring: Ring
    sector: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "ring", _coerce_ring(self.ring))
        _check_sector(self.sector)

    def __str__(self) -> str:
        return f"{self.ring.value}:{self.sector}"


@dataclass(frozen=True, slots=True)
class NativePosition:
    """A token's address in its ring's own, unrotated frame.

    Written once when the token enters a cell and never rewritten by rotation.
    """

    ring: Ring
    sector: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "ring", _coerce_ring(self.ring))
        _check_sector(self.sector)

    @property
    def level(self) -> int:
        return self.ring.level


# --- Catalog entries ------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CelestialObject:
    """Catalog entry for anything printed on, or added to, a ring."""

    id: ObjectID
    name: str
    category: ObjectCategory
    ring: Ring
    sector: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "ring", _coerce_ring(self.ring))
        object.__setattr__(self, "category", ObjectCategory(self.category))
        _check_sector(self.sector)

    @property
    def level(self) -> int:
        return self.ring.level

    @property
    def is_present(self) -> bool:
        """False for placeholder slots that carry no real object."""
        return self.category is not ObjectCategory.EMPTY

    @property
    def native(self) -> NativePosition:
        return NativePosition(self.ring, self.sector)


@dataclass(frozen=True, slots=True)
class AbsolutePosition:
    """Where a cataloged object sits under a given rotation."""

    object_id: ObjectID
    ring: Ring
    native_sector: int
    absolute_sector: int
    is_present: bool

    @property
    def address(self) -> CellAddress:
        return CellAddress(self.ring, self.absolute_sector)


@dataclass(frozen=True, slots=True)
class Cell:
    """State of one absolute board address under a given rotation."""

    ring: Ring
    sector: int
    native_sector: int
    has_asteroid_field: bool
    has_comet: bool
    objects: tuple[CelestialObject, ...] = ()

    @property
    def address(self) -> CellAddress:
        return CellAddress(self.ring, self.sector)

    @property
    def object_ids(self) -> tuple[ObjectID, ...]:
        return tuple(obj.id for obj in self.objects)

    @property
    def has_planet(self) -> bool:
        return any(obj.category is ObjectCategory.PLANET for obj in self.objects)

    @property
    def has_earth(self) -> bool:
        return any(obj.category is ObjectCategory.EARTH for obj in self.objects)


# --- Tokens ---------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Probe:
    """A player's probe on the board."""

    id: ProbeID
    owner_id: PlayerID
    native: NativePosition
