"""Absolute positions, cell lookup and adjacency on the rotating board.

Objects and probes are stored in their ring's native frame. Everything in this
module derives absolute addresses from that native frame and a
``RotationState``:

    absolute slot = (native slot + ring angle / 45) mod 8

The fixed ring never turns, so its native and absolute addresses coincide.
All functions are pure.
"""

from __future__ import annotations

from collections.abc import Iterable

from orrery.domain.catalog import all_cataloged_objects, find_object
from orrery.domain.enums import ObjectCategory, Ring
from orrery.domain.models import (
    AbsolutePosition,
    CelestialObject,
    Cell,
    CellAddress,
    NativePosition,
)
from orrery.domain.rules_config import DEFAULT_RULES, RulesConfig
from orrery.errors import OutOfBoundsCell
from orrery.utils.sector_math import LABELS_BY_ANGLE, RotationState, neighbor_labels, rotate_label

__all__ = [
    "absolute_position",
    "absolute_sector_for_probe",
    "adjacent_cells",
    "all_cataloged_objects",
    "all_cells",
    "cell_at",
    "native_sector_for_absolute",
    "object_position",
    "objects_at",
]


def _rotate(ring: Ring, sector: int, rotation: RotationState, direction: int) -> int:
    if not ring.rotates:
        return sector
    steps = rotation.steps_for_level(ring.level)
    return rotate_label(sector, direction * steps)


def absolute_position(
    obj: CelestialObject,
    rotation: RotationState,
    extra_objects: Iterable[CelestialObject] = (),  # noqa: ARG001
) -> AbsolutePosition:
    """Resolve where a cataloged object currently sits.

    ``extra_objects`` is accepted so callers can pass the same lookup context
    everywhere; an object's own position does not depend on other objects.
    """

    return AbsolutePosition(
        object_id=obj.id,
        ring=obj.ring,
        native_sector=obj.sector,
        absolute_sector=_rotate(obj.ring, obj.sector, rotation, 1),
        is_present=obj.is_present,
    )


def absolute_sector_for_probe(native: NativePosition, rotation: RotationState) -> int:
    """Return the absolute sector label of a probe's native position."""

    return _rotate(native.ring, native.sector, rotation, 1)


def native_sector_for_absolute(ring: Ring | str, sector: int, rotation: RotationState) -> int:
    """Return the native sector label currently shown at an absolute address."""

    address = CellAddress(ring, sector)
    return _rotate(address.ring, address.sector, rotation, -1)


def object_position(
    object_id: str,
    rotation: RotationState,
    extra_objects: Iterable[CelestialObject] = (),
) -> AbsolutePosition:
    """Look up an object by id and resolve its absolute position."""

    extras = tuple(extra_objects)
    return absolute_position(find_object(object_id, extras), rotation, extras)


def objects_at(
    ring: Ring | str,
    sector: int,
    rotation: RotationState,
    extra_objects: Iterable[CelestialObject] = (),
) -> tuple[CelestialObject, ...]:
    """Return every present object whose absolute position is the address."""

    address = CellAddress(ring, sector)
    extras = tuple(extra_objects)
    return tuple(
        obj
        for obj in all_cataloged_objects(extras)
        if obj.is_present and absolute_position(obj, rotation, extras).address == address
    )


def cell_at(
    ring: Ring | str,
    sector: int,
    rotation: RotationState,
    extra_objects: Iterable[CelestialObject] = (),
) -> Cell:
    """Describe the cell at an absolute address.

    Terrain belongs to the ring's native slot, so the flags follow the slot as
    the ring turns; only the absolute label reporting them changes.

    Raises:
        OutOfBoundsCell: If the address is not on the board
    """

    address = CellAddress(ring, sector)
    extras = tuple(extra_objects)
    native_sector = native_sector_for_absolute(address.ring, address.sector, rotation)

    native_terrain = {
        obj.category
        for obj in all_cataloged_objects(extras)
        if obj.ring == address.ring and obj.sector == native_sector
    }

    return Cell(
        ring=address.ring,
        sector=address.sector,
        native_sector=native_sector,
        has_asteroid_field=ObjectCategory.ASTEROID_FIELD in native_terrain,
        has_comet=ObjectCategory.COMET in native_terrain,
        objects=objects_at(address.ring, address.sector, rotation, extras),
    )


def all_cells(
    rotation: RotationState,
    extra_objects: Iterable[CelestialObject] = (),
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> dict[CellAddress, Cell]:
    """Return every cell on the board, ring by ring in angular order."""

    extras = tuple(extra_objects)
    cells: dict[CellAddress, Cell] = {}
    for ring in rules.board.radial_order:
        for sector in LABELS_BY_ANGLE:
            cell = cell_at(ring, sector, rotation, extras)
            cells[cell.address] = cell
    return cells


def adjacent_cells(
    ring: Ring | str,
    sector: int,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[CellAddress]:
    """Find the cells adjacent to an absolute address.

    Same-ring neighbours (one slot either way) come first, followed by the
    same sector label on each radially neighbouring ring. The innermost and
    outermost rings have a single radial neighbour.

    Raises:
        OutOfBoundsCell: If the address is not on the board
    """

    origin = CellAddress(ring, sector)
    order = rules.board.radial_order
    if origin.ring not in order:
        raise OutOfBoundsCell(f"Ring {origin.ring.value!r} is not part of the board layout")

    neighbors = [CellAddress(origin.ring, label) for label in neighbor_labels(origin.sector)]

    index = order.index(origin.ring)
    for radial_index in (index - 1, index + 1):
        if 0 <= radial_index < len(order):
            neighbors.append(CellAddress(order[radial_index], origin.sector))

    return neighbors
