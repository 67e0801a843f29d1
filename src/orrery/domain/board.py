"""Board state, setup and probe placement.

``BoardState`` is an immutable snapshot: every function here returns a new
board. Probes keep the native coordinates they were given when they entered a
cell; their absolute addresses are re-derived from the current rotation.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from orrery.domain.catalog import ObjectRegistry
from orrery.domain.coordinates import (
    absolute_sector_for_probe,
    native_sector_for_absolute,
    object_position,
)
from orrery.domain.enums import Ring
from orrery.domain.models import (
    CelestialObject,
    CellAddress,
    NativePosition,
    PlayerID,
    Probe,
    ProbeID,
)
from orrery.domain.rules_config import DEFAULT_RULES, RulesConfig
from orrery.errors import DuplicateProbe, UnknownProbe
from orrery.utils.rng import draw, sector_seed
from orrery.utils.sector_math import (
    DEGREES_PER_SLOT,
    LABELS_BY_ANGLE,
    ROTATING_LEVELS,
    RotationState,
    check_rotation_level,
    slot_from_label,
)


@dataclass(frozen=True, slots=True)
class BoardState:
    """Snapshot of the rotating board.

    Attributes:
        rotation: Current angles of the rotating rings
        next_level: Level turned by the next round-triggered rotation
        probes: Probes currently on the board
        registry: Objects added to the board during play
    """

    rotation: RotationState = field(default_factory=RotationState)
    next_level: int = 1
    probes: tuple[Probe, ...] = ()
    registry: ObjectRegistry = field(default_factory=ObjectRegistry)

    def __post_init__(self) -> None:
        check_rotation_level(self.next_level)

    @property
    def extra_objects(self) -> tuple[CelestialObject, ...]:
        return self.registry.extras

    def probe(self, probe_id: str) -> Probe:
        for probe in self.probes:
            if probe.id == probe_id:
                return probe
        raise UnknownProbe(f"No probe with id {probe_id!r} on the board")


# --- Setup ----------------------------------------------------------------------


def create_board(rotation: RotationState | None = None, *, next_level: int = 1) -> BoardState:
    """Create an empty board at the given rotation (all rings at 0 by default)."""

    if rotation is None:
        rotation = RotationState()
    return BoardState(rotation=rotation, next_level=next_level)


def initial_rotation_from_sectors(
    level1_sector: int,
    level2_sector: int,
    level3_sector: int,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> RotationState:
    """Derive starting angles from the sector each rotating plate starts on.

    Each plate's angle is its starting sector's slot times 45 degrees; the
    level 2 plate sits one notch behind.

    Example:
        >>> initial_rotation_from_sectors(1, 1, 1).as_tuple()
        (0, 315, 0)
    """

    return RotationState(
        slot_from_label(level1_sector) * DEGREES_PER_SLOT,
        slot_from_label(level2_sector) * DEGREES_PER_SLOT
        + rules.rotation.initial_level2_offset_degrees,
        slot_from_label(level3_sector) * DEGREES_PER_SLOT,
    )


def randomized_board(seed: str, *, rules: RulesConfig = DEFAULT_RULES) -> BoardState:
    """Set up a board whose starting sectors are drawn from ``seed``."""

    sectors = [
        draw(sector_seed(seed, level), LABELS_BY_ANGLE).value
        for level in ROTATING_LEVELS
    ]
    rotation = initial_rotation_from_sectors(*sectors, rules=rules)
    return create_board(rotation)


# --- Objects --------------------------------------------------------------------


def inject_object(board: BoardState, obj: CelestialObject) -> BoardState:
    """Return a board whose registry also holds ``obj``."""

    return replace(board, registry=board.registry.with_object(obj))


# --- Probes ---------------------------------------------------------------------


def probe_address(board: BoardState, probe_id: str) -> CellAddress:
    """Absolute address of a probe under the board's current rotation."""

    probe = board.probe(probe_id)
    return CellAddress(probe.native.ring, absolute_sector_for_probe(probe.native, board.rotation))


def probe_addresses(board: BoardState) -> dict[ProbeID, CellAddress]:
    return {probe.id: probe_address(board, probe.id) for probe in board.probes}


def place_probe(
    board: BoardState,
    probe_id: str,
    owner_id: str,
    ring: Ring | str,
    sector: int,
) -> BoardState:
    """Put a new probe on an absolute address, storing its native position."""

    if any(probe.id == probe_id for probe in board.probes):
        raise DuplicateProbe(f"Probe {probe_id!r} is already on the board")

    address = CellAddress(ring, sector)
    native = NativePosition(
        address.ring, native_sector_for_absolute(address.ring, address.sector, board.rotation)
    )
    probe = Probe(id=ProbeID(probe_id), owner_id=PlayerID(owner_id), native=native)
    return replace(board, probes=(*board.probes, probe))


def launch_probe(
    board: BoardState,
    probe_id: str,
    owner_id: str,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> BoardState:
    """Place a new probe on Earth's current address."""

    earth = object_position(rules.board.earth_object_id, board.rotation, board.extra_objects)
    return place_probe(board, probe_id, owner_id, earth.ring, earth.absolute_sector)


def move_probe(board: BoardState, probe_id: str, ring: Ring | str, sector: int) -> BoardState:
    """Move a probe to an absolute address.

    The destination's native coordinates are stored; whether the move is
    affordable or allowed is for the caller to decide.
    """

    current = board.probe(probe_id)
    address = CellAddress(ring, sector)
    native = NativePosition(
        address.ring, native_sector_for_absolute(address.ring, address.sector, board.rotation)
    )
    moved = replace(current, native=native)
    return replace(
        board,
        probes=tuple(moved if probe.id == probe_id else probe for probe in board.probes),
    )


def remove_probe(board: BoardState, probe_id: str) -> BoardState:
    """Take a probe off the board (e.g. when it lands or goes into orbit)."""

    board.probe(probe_id)
    return replace(board, probes=tuple(probe for probe in board.probes if probe.id != probe_id))
