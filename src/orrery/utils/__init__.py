"""Utility functions for the Orrery board core."""

from orrery.utils.rng import Draw, draw, sector_seed
from orrery.utils.sector_math import (
    RotationState,
    label_from_slot,
    make_rotation_state,
    rotate_label,
    slot_from_label,
)

__all__ = [
    "Draw",
    "RotationState",
    "draw",
    "label_from_slot",
    "make_rotation_state",
    "rotate_label",
    "sector_seed",
    "slot_from_label",
]
