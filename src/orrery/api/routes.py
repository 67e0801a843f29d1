"""HTTP routes for the Orrery API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from orrery.api.runtime import ApiState
from orrery.domain.coordinates import adjacent_cells, cell_at
from orrery.domain.enums import Ring, Surcharge
from orrery.domain.models import CellAddress
from orrery.domain.pathfinding import CostModifiers, budget_from
from orrery.errors import (
    BoardError,
    DuplicateObject,
    DuplicateProbe,
    UnknownObject,
    UnknownProbe,
)

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


def _http_error(exc: BoardError) -> HTTPException:
    if isinstance(exc, UnknownProbe | UnknownObject):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, DuplicateProbe | DuplicateObject):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    return HTTPException(status_code=code, detail=str(exc))


class Address(BaseModel):
    ring: Ring
    sector: int = Field(ge=1, le=8)

    def to_domain(self) -> CellAddress:
        return CellAddress(self.ring, self.sector)


class RotationAngles(BaseModel):
    level1: int
    level2: int
    level3: int


class ProbeSummary(Address):
    id: str
    owner_id: str
    native_sector: int


class BoardSummary(BaseModel):
    rotation: RotationAngles
    next_level: int
    probes: list[ProbeSummary]


class ObjectSummary(BaseModel):
    id: str
    name: str
    category: str
    ring: str
    native_sector: int
    absolute_sector: int
    is_present: bool


class CellSummary(BaseModel):
    ring: str
    sector: int
    native_sector: int
    has_asteroid_field: bool
    has_comet: bool
    objects: list[str]


class ModifiersRequest(BaseModel):
    waived: list[Surcharge] = Field(default_factory=list)
    asteroid_exit_reduction: int = Field(default=0, ge=0)
    same_ring_surcharge: int = Field(default=0, ge=0)
    movement_discount: int = Field(default=0, ge=0)

    def to_domain(self) -> CostModifiers:
        return CostModifiers(
            waived=frozenset(self.waived),
            asteroid_exit_reduction=self.asteroid_exit_reduction,
            same_ring_surcharge=self.same_ring_surcharge,
            movement_discount=self.movement_discount,
        )


class ReachabilityRequest(BaseModel):
    origin: Address
    budget: int = Field(ge=0)
    energy: int = Field(default=0, ge=0, description="Energy spent on extra movement")
    modifiers: ModifiersRequest = Field(default_factory=ModifiersRequest)


class ReachableCell(Address):
    cost: int


class ReachabilityResponse(BaseModel):
    origin: Address
    budget: int
    cells: list[ReachableCell]


class RotationRequest(BaseModel):
    level: int | None = Field(default=None, ge=1, le=3)


class ProbeShiftSummary(BaseModel):
    probe_id: str
    owner_id: str
    before: Address
    after: Address
    joined_objects: list[str]
    left_objects: list[str]


class RotationResponse(BaseModel):
    level: int
    old_rotation: RotationAngles
    new_rotation: RotationAngles
    next_level: int
    events: list[ProbeShiftSummary]


class ProbeCreateRequest(BaseModel):
    probe_id: str = Field(min_length=1)
    owner_id: str = Field(min_length=1)
    at: Address | None = None


class ProbeMoveRequest(BaseModel):
    destination: Address
    budget: int = Field(ge=0)
    modifiers: ModifiersRequest = Field(default_factory=ModifiersRequest)


class ProbeMoveResponse(BaseModel):
    probe_id: str
    position: Address
    cost: int


@router.get("/health", tags=["board"])
async def health(state: ApiStateDep) -> dict[str, object]:
    board = state.boards.board
    return {
        "status": "ok",
        "rules_version": state.settings.rules_version,
        "next_level": board.next_level,
        "probe_count": len(board.probes),
    }


@router.get("/board", response_model=BoardSummary, tags=["board"])
async def get_board(state: ApiStateDep) -> BoardSummary:
    return BoardSummary.model_validate(state.boards.to_board_dict())


@router.get("/objects", response_model=list[ObjectSummary], tags=["board"])
async def list_objects(state: ApiStateDep) -> list[ObjectSummary]:
    objects = state.boards.board.registry.all_objects()
    return [ObjectSummary.model_validate(state.boards.to_object_dict(obj)) for obj in objects]


@router.get("/cells/{ring}/{sector}", response_model=CellSummary, tags=["board"])
async def get_cell(ring: str, sector: int, state: ApiStateDep) -> CellSummary:
    board = state.boards.board
    try:
        cell = cell_at(ring, sector, board.rotation, board.extra_objects)
    except BoardError as exc:
        raise _http_error(exc) from exc
    return CellSummary.model_validate(state.boards.to_cell_dict(cell))


@router.get(
    "/cells/{ring}/{sector}/adjacent", response_model=list[Address], tags=["movement"]
)
async def get_adjacent_cells(ring: str, sector: int, state: ApiStateDep) -> list[Address]:
    try:
        neighbors = adjacent_cells(ring, sector, rules=state.rules)
    except BoardError as exc:
        raise _http_error(exc) from exc
    return [Address.model_validate(state.boards.to_address_dict(n)) for n in neighbors]


@router.post("/reachability", response_model=ReachabilityResponse, tags=["movement"])
async def reachability(payload: ReachabilityRequest, state: ApiStateDep) -> ReachabilityResponse:
    budget = budget_from(payload.budget, payload.energy, rules=state.rules)
    try:
        result = state.boards.reachability(
            payload.origin.to_domain(), budget, payload.modifiers.to_domain()
        )
    except BoardError as exc:
        raise _http_error(exc) from exc
    cells = [
        ReachableCell(ring=address.ring, sector=address.sector, cost=cost)
        for address, cost in sorted(result.costs.items(), key=lambda item: (item[1], item[0]))
    ]
    return ReachabilityResponse(origin=payload.origin, budget=budget, cells=cells)


@router.post("/rotations", response_model=RotationResponse, tags=["rotation"])
async def rotate(payload: RotationRequest, state: ApiStateDep) -> RotationResponse:
    try:
        outcome = await state.boards.rotate(payload.level)
    except BoardError as exc:
        raise _http_error(exc) from exc
    service = state.boards
    return RotationResponse.model_validate(
        {
            "level": outcome.level,
            "old_rotation": service.to_rotation_dict(outcome.old_rotation),
            "new_rotation": service.to_rotation_dict(outcome.new_rotation),
            "next_level": outcome.board.next_level,
            "events": [service.to_shift_dict(event) for event in outcome.events],
        }
    )


@router.post(
    "/probes", response_model=Address, status_code=status.HTTP_201_CREATED, tags=["probes"]
)
async def create_probe(payload: ProbeCreateRequest, state: ApiStateDep) -> Address:
    try:
        at = payload.at.to_domain() if payload.at is not None else None
        address = await state.boards.add_probe(payload.probe_id, payload.owner_id, at)
    except BoardError as exc:
        raise _http_error(exc) from exc
    return Address.model_validate(state.boards.to_address_dict(address))


@router.post("/probes/{probe_id}/move", response_model=ProbeMoveResponse, tags=["probes"])
async def move_probe(
    probe_id: str, payload: ProbeMoveRequest, state: ApiStateDep
) -> ProbeMoveResponse:
    try:
        check = await state.boards.move_probe(
            probe_id,
            payload.destination.to_domain(),
            payload.budget,
            payload.modifiers.to_domain(),
        )
    except BoardError as exc:
        raise _http_error(exc) from exc

    if not check.valid:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "message": "destination not reachable within budget",
                "budget": payload.budget,
                "minimal_cost": check.cost,
            },
        )
    return ProbeMoveResponse(probe_id=probe_id, position=payload.destination, cost=check.cost)
