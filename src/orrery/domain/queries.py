"""Read-only questions asked about a board by missions and card effects."""

from __future__ import annotations

from orrery.domain.board import BoardState, probe_address, probe_addresses
from orrery.domain.coordinates import cell_at, object_position, objects_at
from orrery.domain.enums import ObjectCategory
from orrery.domain.models import CelestialObject, ProbeID
from orrery.domain.pathfinding import NO_MODIFIERS, CostModifiers, movement_distance
from orrery.domain.rules_config import DEFAULT_RULES, RulesConfig


def probes_on_asteroid_fields(board: BoardState) -> list[ProbeID]:
    """Probes whose current cell carries an asteroid field."""

    return [
        probe_id
        for probe_id, address in probe_addresses(board).items()
        if cell_at(address.ring, address.sector, board.rotation, board.extra_objects).has_asteroid_field
    ]


def probes_on_comets(board: BoardState) -> list[ProbeID]:
    """Probes whose current cell carries a comet."""

    return [
        probe_id
        for probe_id, address in probe_addresses(board).items()
        if cell_at(address.ring, address.sector, board.rotation, board.extra_objects).has_comet
    ]


def probes_on_object(board: BoardState, object_id: str) -> list[ProbeID]:
    """Probes standing on the same absolute cell as an object."""

    target = object_position(object_id, board.rotation, board.extra_objects).address
    return [
        probe_id for probe_id, address in probe_addresses(board).items() if address == target
    ]


def objects_sharing_sector(
    board: BoardState,
    object_id: str,
    *,
    category: ObjectCategory | str | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[CelestialObject]:
    """Objects on any ring whose absolute sector matches the given object's.

    Used for checks such as "which planets currently line up with Earth".
    The reference object itself is excluded.

    Example:
        >>> board = BoardState()
        >>> [obj.id for obj in objects_sharing_sector(board, "earth", category="planet")]
        ['mars']
    """

    wanted = ObjectCategory(category) if category is not None else None
    sector = object_position(object_id, board.rotation, board.extra_objects).absolute_sector

    found: list[CelestialObject] = []
    for ring in rules.board.radial_order:
        for obj in objects_at(ring, sector, board.rotation, board.extra_objects):
            if obj.id == object_id:
                continue
            if wanted is not None and obj.category is not wanted:
                continue
            found.append(obj)
    return found


def probes_at_distance_from(
    board: BoardState,
    object_id: str,
    min_cost: int,
    modifiers: CostModifiers = NO_MODIFIERS,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[ProbeID]:
    """Probes whose cheapest route from an object costs at least ``min_cost``.

    The route is priced from the object's cell outwards, with the same edge
    costs a probe leaving that cell would pay.
    """

    origin = object_position(object_id, board.rotation, board.extra_objects).address
    result: list[ProbeID] = []
    for probe in board.probes:
        distance = movement_distance(
            origin,
            probe_address(board, probe.id),
            board.rotation,
            modifiers,
            extra_objects=board.extra_objects,
            rules=rules,
        )
        if distance is not None and distance >= min_cost:
            result.append(probe.id)
    return result
