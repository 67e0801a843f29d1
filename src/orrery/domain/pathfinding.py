"""Budgeted reachability for probe movement.

This module implements Dijkstra pathfinding over the board's adjacency graph.
Nodes are absolute cell addresses under one ``RotationState``; edges come from
:func:`orrery.domain.coordinates.adjacent_cells`. Leaving an asteroid field
costs extra, so the search is a priority search rather than a plain BFS.

Surcharges and bonuses granted by cards or technologies are not looked up
here; callers describe the ones that apply this turn in a ``CostModifiers``.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from heapq import heappop, heappush

from orrery.domain.coordinates import adjacent_cells, all_cells
from orrery.domain.enums import Ring, Surcharge
from orrery.domain.models import CelestialObject, Cell, CellAddress
from orrery.domain.rules_config import DEFAULT_RULES, RulesConfig
from orrery.utils.sector_math import RotationState

SAME_RING_RANK = 0
CROSS_RING_RANK = 1


@dataclass(frozen=True, slots=True)
class CostModifiers:
    """Movement surcharges and bonuses active for the acting player this turn.

    Attributes:
        waived: Surcharges ignored entirely
        asteroid_exit_reduction: Points removed from the asteroid exit surcharge
        same_ring_surcharge: Extra cost for same-ring steps imposed by an effect
        movement_discount: Points removed from every step
    """

    waived: frozenset[Surcharge] = frozenset()
    asteroid_exit_reduction: int = 0
    same_ring_surcharge: int = 0
    movement_discount: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "waived", frozenset(Surcharge(s) for s in self.waived))
        for name in ("asteroid_exit_reduction", "same_ring_surcharge", "movement_discount"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    def waives(self, surcharge: Surcharge) -> bool:
        return surcharge in self.waived


NO_MODIFIERS = CostModifiers()
IGNORE_ASTEROID_EXIT = CostModifiers(waived=frozenset({Surcharge.ASTEROID_EXIT}))


@dataclass(frozen=True, slots=True)
class UnreachableDestination:
    """Negative answer to "can I reach this cell within my budget?".

    Attributes:
        destination: Requested cell
        budget: Budget the request was checked against
        minimal_cost: Cheapest cost to get there, or None if disconnected
    """

    destination: CellAddress
    budget: int
    minimal_cost: int | None


@dataclass(frozen=True, slots=True)
class MoveCheck:
    """Result of validating a proposed destination against a budget."""

    valid: bool
    cost: int | None = None
    reason: UnreachableDestination | None = None


@dataclass(frozen=True, slots=True, eq=False)
class ReachabilityMap:
    """Cells reachable from an origin with their exact minimal cost.

    ``costs`` is ordered by settle order, which is deterministic for a fixed
    input.
    """

    origin: CellAddress
    budget: int | None
    costs: Mapping[CellAddress, int] = field(default_factory=dict)
    previous: Mapping[CellAddress, CellAddress] = field(default_factory=dict)

    def __contains__(self, address: object) -> bool:
        return address in self.costs

    def __len__(self) -> int:
        return len(self.costs)

    def __iter__(self) -> Iterator[CellAddress]:
        return iter(self.costs)

    def cost_to(self, address: CellAddress) -> int | None:
        return self.costs.get(address)

    def path_to(self, address: CellAddress) -> list[CellAddress] | None:
        """Return the cheapest path from the origin, both ends included."""

        if address not in self.costs:
            return None
        path = [address]
        current = address
        while current != self.origin:
            current = self.previous[current]
            path.append(current)
        path.reverse()
        return path

    def destinations(self) -> list[CellAddress]:
        """Every reachable cell except the origin, in settle order."""

        return [address for address in self.costs if address != self.origin]

    def as_dict(self) -> dict[CellAddress, int]:
        return dict(self.costs)


def edge_cost(
    source: Cell,
    same_ring: bool,
    modifiers: CostModifiers = NO_MODIFIERS,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Cost of one step out of ``source``.

    Base cost plus the asteroid exit surcharge (minus reductions, unless
    waived) plus any same-ring surcharge, minus the discount. Never below the
    minimum edge cost.
    """

    movement = rules.movement
    cost = movement.base_edge_cost

    if source.has_asteroid_field and not modifiers.waives(Surcharge.ASTEROID_EXIT):
        cost += max(0, movement.asteroid_exit_surcharge - modifiers.asteroid_exit_reduction)

    if same_ring and not modifiers.waives(Surcharge.SAME_RING):
        cost += modifiers.same_ring_surcharge

    cost -= modifiers.movement_discount
    return max(movement.min_edge_cost, cost)


def _search(
    origin: CellAddress,
    budget: int | None,
    rotation: RotationState,
    modifiers: CostModifiers,
    extra_objects: tuple[CelestialObject, ...],
    rules: RulesConfig,
    target: CellAddress | None = None,
) -> ReachabilityMap:
    cells = all_cells(rotation, extra_objects, rules=rules)

    # Priority queue: (cost, edge rank, push order, address)
    pq: list[tuple[int, int, int, CellAddress]] = [(0, SAME_RING_RANK, 0, origin)]
    pushes = 1
    best_cost: dict[CellAddress, int] = {origin: 0}
    came_from: dict[CellAddress, CellAddress] = {}
    settled: dict[CellAddress, int] = {}

    while pq:
        current_cost, _, _, current = heappop(pq)

        if current in settled:
            continue
        settled[current] = current_cost

        if current == target:
            break

        source = cells[current]
        for neighbor in adjacent_cells(current.ring, current.sector, rules=rules):
            if neighbor in settled:
                continue

            same_ring = neighbor.ring == current.ring
            new_cost = current_cost + edge_cost(source, same_ring, modifiers, rules=rules)
            if budget is not None and new_cost > budget:
                continue

            if neighbor not in best_cost or new_cost < best_cost[neighbor]:
                best_cost[neighbor] = new_cost
                came_from[neighbor] = current
                rank = SAME_RING_RANK if same_ring else CROSS_RING_RANK
                heappush(pq, (new_cost, rank, pushes, neighbor))
                pushes += 1

    previous = {address: came_from[address] for address in settled if address != origin}
    return ReachabilityMap(origin=origin, budget=budget, costs=settled, previous=previous)


def budget_from(movements: int, energy: int = 0, *, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Total movement budget from free movements plus energy spent on movement.

    Examples:
        >>> budget_from(2, 3)
        5
    """

    if movements < 0 or energy < 0:
        raise ValueError(f"movements and energy must be non-negative, got {movements}, {energy}")
    return movements + energy * rules.movement.movements_per_energy


def reachable_from(  # noqa: PLR0913
    origin_ring: Ring | str,
    origin_sector: int,
    budget: int,
    rotation: RotationState,
    modifiers: CostModifiers = NO_MODIFIERS,
    *,
    extra_objects: Iterable[CelestialObject] = (),
    rules: RulesConfig = DEFAULT_RULES,
) -> ReachabilityMap:
    """Find every cell reachable from an origin within a movement budget.

    Args:
        origin_ring: Ring of the starting cell
        origin_sector: Absolute sector label of the starting cell
        budget: Maximum total movement cost
        rotation: Current rotation of the rings
        modifiers: Surcharges and bonuses active for the acting player
        extra_objects: Objects added to the board during play
        rules: Rule constants

    Returns:
        ReachabilityMap holding exactly the cells whose minimal cost is within
        budget, each with that minimal cost; the origin is always present at 0

    Raises:
        OutOfBoundsCell: If the origin is not on the board
        ValueError: If the budget is negative
    """

    if budget < 0:
        raise ValueError(f"budget must be non-negative, got {budget}")

    origin = CellAddress(origin_ring, origin_sector)
    return _search(origin, budget, rotation, modifiers, tuple(extra_objects), rules)


def movement_distance(  # noqa: PLR0913
    origin: CellAddress,
    destination: CellAddress,
    rotation: RotationState,
    modifiers: CostModifiers = NO_MODIFIERS,
    *,
    extra_objects: Iterable[CelestialObject] = (),
    rules: RulesConfig = DEFAULT_RULES,
) -> int | None:
    """Minimal movement cost between two cells, ignoring any budget."""

    result = _search(
        origin, None, rotation, modifiers, tuple(extra_objects), rules, target=destination
    )
    return result.cost_to(destination)


def check_destination(  # noqa: PLR0913
    origin: CellAddress,
    destination: CellAddress,
    budget: int,
    rotation: RotationState,
    modifiers: CostModifiers = NO_MODIFIERS,
    *,
    extra_objects: Iterable[CelestialObject] = (),
    rules: RulesConfig = DEFAULT_RULES,
) -> MoveCheck:
    """Validate a proposed destination against the remaining budget.

    An unaffordable destination is an ordinary negative result carrying an
    ``UnreachableDestination``; nothing is raised and nothing changes.
    """

    extras = tuple(extra_objects)
    reachable = reachable_from(
        origin.ring,
        origin.sector,
        budget,
        rotation,
        modifiers,
        extra_objects=extras,
        rules=rules,
    )
    cost = reachable.cost_to(destination)
    if cost is not None:
        return MoveCheck(valid=True, cost=cost)

    minimal = movement_distance(
        origin, destination, rotation, modifiers, extra_objects=extras, rules=rules
    )
    return MoveCheck(
        valid=False,
        cost=minimal,
        reason=UnreachableDestination(destination=destination, budget=budget, minimal_cost=minimal),
    )
