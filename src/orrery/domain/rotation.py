"""Ring rotation for the rotating board.

Rotating level L turns every ring from level 1 up to L by one notch
(-45 degrees) at the same time, then advances the "next level" pointer
1 -> 2 -> 3 -> 1. Only the ``RotationState`` changes: probes keep their
native coordinates, so their absolute addresses move with their ring.

Bonuses that a rotation may trigger (free movement, media coverage) are not
applied here. Each probe's before/after address is returned as data for the
caller to act on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from orrery.domain.board import BoardState
from orrery.domain.coordinates import absolute_sector_for_probe, objects_at
from orrery.domain.models import CelestialObject, CellAddress, ObjectID, PlayerID, Probe, ProbeID
from orrery.domain.rules_config import DEFAULT_RULES, RulesConfig
from orrery.utils.sector_math import RotationState, check_rotation_level

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProbeShift:
    """A probe's absolute address before and after a rotation.

    ``joined_objects`` and ``left_objects`` compare the objects lined up in the
    probe's absolute sector across every ring, which is what a rotation changes.
    """

    probe_id: ProbeID
    owner_id: PlayerID
    before: CellAddress
    after: CellAddress
    joined_objects: tuple[ObjectID, ...] = ()
    left_objects: tuple[ObjectID, ...] = ()

    @property
    def moved(self) -> bool:
        return self.before != self.after


@dataclass(frozen=True, slots=True)
class RotationOutcome:
    """Everything a caller needs after one rotation."""

    board: BoardState
    level: int
    old_rotation: RotationState
    new_rotation: RotationState
    events: tuple[ProbeShift, ...] = ()

    @property
    def moved_probes(self) -> tuple[ProbeShift, ...]:
        return tuple(event for event in self.events if event.moved)


def rotated_state(
    rotation: RotationState,
    level: int,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> RotationState:
    """Return the rotation after turning ``level`` and every level below it."""

    check_rotation_level(level)
    step = rules.rotation.step_degrees
    angles = list(rotation.as_tuple())
    for index in range(level):
        angles[index] += step
    return RotationState(*angles)


def apply_rotation(
    board: BoardState,
    level: int,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> RotationOutcome:
    """Rotate the board at ``level``.

    Args:
        board: Board to rotate; it is not modified
        level: 1, 2 or 3
        rules: Rule constants

    Returns:
        RotationOutcome with the new board, both rotation states and one
        ProbeShift per probe

    Raises:
        InvalidRotationLevel: If level is not 1, 2 or 3
    """

    check_rotation_level(level)

    old_rotation = board.rotation
    new_rotation = rotated_state(old_rotation, level, rules=rules)
    next_level = level % rules.rotation.level_count + 1
    rotated_board = replace(board, rotation=new_rotation, next_level=next_level)

    extras = board.extra_objects
    events = tuple(
        _probe_shift(probe, old_rotation, new_rotation, extras, rules) for probe in board.probes
    )

    logger.info(
        "rotated level %s: %s -> %s (next level %s)",
        level,
        old_rotation.as_tuple(),
        new_rotation.as_tuple(),
        next_level,
    )
    for event in events:
        logger.debug("probe %s: %s -> %s", event.probe_id, event.before, event.after)

    return RotationOutcome(
        board=rotated_board,
        level=level,
        old_rotation=old_rotation,
        new_rotation=new_rotation,
        events=events,
    )


def rotate_next(board: BoardState, *, rules: RulesConfig = DEFAULT_RULES) -> RotationOutcome:
    """Rotate the level named by the board's pointer (first Pass of a round)."""

    return apply_rotation(board, board.next_level, rules=rules)


def _probe_shift(
    probe: Probe,
    old_rotation: RotationState,
    new_rotation: RotationState,
    extra_objects: tuple[CelestialObject, ...],
    rules: RulesConfig,
) -> ProbeShift:
    ring = probe.native.ring
    before = CellAddress(ring, absolute_sector_for_probe(probe.native, old_rotation))
    after = CellAddress(ring, absolute_sector_for_probe(probe.native, new_rotation))

    before_objects = _sector_objects(before.sector, old_rotation, extra_objects, rules)
    after_objects = _sector_objects(after.sector, new_rotation, extra_objects, rules)
    before_ids = {obj.id for obj in before_objects}
    after_ids = {obj.id for obj in after_objects}

    return ProbeShift(
        probe_id=probe.id,
        owner_id=probe.owner_id,
        before=before,
        after=after,
        joined_objects=tuple(obj.id for obj in after_objects if obj.id not in before_ids),
        left_objects=tuple(obj.id for obj in before_objects if obj.id not in after_ids),
    )


def _sector_objects(
    sector: int,
    rotation: RotationState,
    extra_objects: tuple[CelestialObject, ...],
    rules: RulesConfig,
) -> list[CelestialObject]:
    return [
        obj
        for ring in rules.board.radial_order
        for obj in objects_at(ring, sector, rotation, extra_objects)
    ]
