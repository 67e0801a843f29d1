"""Runtime primitives backing the Orrery HTTP API."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

from orrery.config import Settings, get_settings
from orrery.domain import board as boards
from orrery.domain.coordinates import absolute_position
from orrery.domain.models import CelestialObject, Cell, CellAddress
from orrery.domain.pathfinding import (
    NO_MODIFIERS,
    CostModifiers,
    MoveCheck,
    ReachabilityMap,
    check_destination,
    reachable_from,
)
from orrery.domain.rotation import ProbeShift, RotationOutcome, apply_rotation
from orrery.domain.rules_config import DEFAULT_RULES, RulesConfig
from orrery.utils.sector_math import RotationState, make_rotation_state

logger = logging.getLogger(__name__)


def build_board(settings: Settings, *, rules: RulesConfig = DEFAULT_RULES) -> boards.BoardState:
    """Set up the starting board described by the settings."""

    if settings.setup_seed is not None:
        board = boards.randomized_board(settings.setup_seed, rules=rules)
        board = replace(board, next_level=settings.initial_rotation_level)
    else:
        rotation = make_rotation_state(
            settings.initial_level1_angle,
            settings.initial_level2_angle,
            settings.initial_level3_angle,
        )
        board = boards.create_board(rotation, next_level=settings.initial_rotation_level)

    logger.info(
        "board set up at %s (next level %s)", board.rotation.as_tuple(), board.next_level
    )
    return board


class BoardService:
    """Holds the current board and serializes every change to it.

    Boards are immutable, so readers take the current snapshot without the
    lock; rotations and probe changes replace it while holding the lock.
    """

    def __init__(self, board: boards.BoardState, *, rules: RulesConfig = DEFAULT_RULES) -> None:
        self._board = board
        self._rules = rules
        self._lock = asyncio.Lock()

    @property
    def board(self) -> boards.BoardState:
        return self._board

    async def rotate(self, level: int | None = None) -> RotationOutcome:
        async with self._lock:
            target = self._board.next_level if level is None else level
            outcome = apply_rotation(self._board, target, rules=self._rules)
            self._board = outcome.board
            return outcome

    async def add_probe(
        self,
        probe_id: str,
        owner_id: str,
        address: CellAddress | None = None,
    ) -> CellAddress:
        async with self._lock:
            if address is None:
                board = boards.launch_probe(self._board, probe_id, owner_id, rules=self._rules)
            else:
                board = boards.place_probe(
                    self._board, probe_id, owner_id, address.ring, address.sector
                )
            self._board = board
            return boards.probe_address(board, probe_id)

    async def move_probe(
        self,
        probe_id: str,
        destination: CellAddress,
        budget: int,
        modifiers: CostModifiers = NO_MODIFIERS,
    ) -> MoveCheck:
        """Move a probe if the destination is affordable; otherwise leave it."""

        async with self._lock:
            board = self._board
            origin = boards.probe_address(board, probe_id)
            check = check_destination(
                origin,
                destination,
                budget,
                board.rotation,
                modifiers,
                extra_objects=board.extra_objects,
                rules=self._rules,
            )
            if not check.valid:
                logger.warning(
                    "rejected move of probe %s from %s to %s (budget %s, minimal cost %s)",
                    probe_id,
                    origin,
                    destination,
                    budget,
                    check.cost,
                )
                return check
            self._board = boards.move_probe(board, probe_id, destination.ring, destination.sector)
            return check

    def reachability(
        self,
        origin: CellAddress,
        budget: int,
        modifiers: CostModifiers = NO_MODIFIERS,
    ) -> ReachabilityMap:
        board = self._board
        return reachable_from(
            origin.ring,
            origin.sector,
            budget,
            board.rotation,
            modifiers,
            extra_objects=board.extra_objects,
            rules=self._rules,
        )

    # --- Serialization -----------------------------------------------------------

    @staticmethod
    def to_address_dict(address: CellAddress) -> dict[str, object]:
        return {"ring": address.ring.value, "sector": address.sector}

    @staticmethod
    def to_rotation_dict(rotation: RotationState) -> dict[str, int]:
        return {"level1": rotation.level1, "level2": rotation.level2, "level3": rotation.level3}

    def to_board_dict(self) -> dict[str, object]:
        board = self._board
        addresses = boards.probe_addresses(board)
        return {
            "rotation": self.to_rotation_dict(board.rotation),
            "next_level": board.next_level,
            "probes": [
                {
                    "id": probe.id,
                    "owner_id": probe.owner_id,
                    "native_sector": probe.native.sector,
                    **self.to_address_dict(addresses[probe.id]),
                }
                for probe in board.probes
            ],
        }

    def to_object_dict(self, obj: CelestialObject) -> dict[str, object]:
        position = absolute_position(obj, self._board.rotation)
        return {
            "id": obj.id,
            "name": obj.name,
            "category": obj.category.value,
            "ring": obj.ring.value,
            "native_sector": position.native_sector,
            "absolute_sector": position.absolute_sector,
            "is_present": position.is_present,
        }

    @staticmethod
    def to_cell_dict(cell: Cell) -> dict[str, object]:
        return {
            "ring": cell.ring.value,
            "sector": cell.sector,
            "native_sector": cell.native_sector,
            "has_asteroid_field": cell.has_asteroid_field,
            "has_comet": cell.has_comet,
            "objects": list(cell.object_ids),
        }

    def to_shift_dict(self, shift: ProbeShift) -> dict[str, object]:
        return {
            "probe_id": shift.probe_id,
            "owner_id": shift.owner_id,
            "before": self.to_address_dict(shift.before),
            "after": self.to_address_dict(shift.after),
            "joined_objects": list(shift.joined_objects),
            "left_objects": list(shift.left_objects),
        }


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        rules: RulesConfig = DEFAULT_RULES,
        board: boards.BoardState | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.rules = rules
        if board is None:
            board = build_board(self.settings, rules=rules)
        self.boards = BoardService(board, rules=rules)

    async def shutdown(self) -> None:
        logger.info("api state shut down at %s", self.boards.board.rotation.as_tuple())


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
