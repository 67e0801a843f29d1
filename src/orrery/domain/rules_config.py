"""Declarative rule configuration for the board core."""

from __future__ import annotations

from dataclasses import dataclass

from orrery.domain.enums import Ring


@dataclass(frozen=True, slots=True)
class MovementRules:
    """Probe movement costs."""

    base_edge_cost: int = 1
    asteroid_exit_surcharge: int = 1
    min_edge_cost: int = 1
    # Spent energy converts to extra movement points at this rate
    movements_per_energy: int = 1


@dataclass(frozen=True, slots=True)
class RotationRules:
    """How a single rotation turns the rings."""

    step_degrees: int = -45  # counter-clockwise
    level_count: int = 3
    # The level 2 plate starts one notch behind its printed starting sector
    initial_level2_offset_degrees: int = -45


@dataclass(frozen=True, slots=True)
class BoardRules:
    """Board geometry that is configuration rather than arithmetic."""

    # Rings in radial order; only consecutive entries are adjacent
    radial_order: tuple[Ring, ...] = (Ring.FIXED, Ring.LEVEL1, Ring.LEVEL2, Ring.LEVEL3)
    earth_object_id: str = "earth"


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    movement: MovementRules = MovementRules()
    rotation: RotationRules = RotationRules()
    board: BoardRules = BoardRules()


DEFAULT_RULES = RulesConfig()
