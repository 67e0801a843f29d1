"""
Sector arithmetic for the rotating solar-system board.

Every ring of the board is cut into 8 wedges of 45 degrees. The physical
board prints a label (1-8) on each wedge, but the printed order does not
follow increasing angle, so we keep two coordinate systems:

1. Sector labels (1-8) - what players read on the board
   - Used for storage, display and every public query
   - Non-monotonic in angle

2. Angular slots (0-7) - what rotation arithmetic works with
   - slot * 45 degrees is the wedge's native angle
   - Rotating a ring by n notches is a modular addition: (slot + n) mod 8

The translation between the two is a literal fact about the printed board
(``SLOT_BY_LABEL``); it is not derived from a formula.

Rotation angles are held in a ``RotationState`` snapshot. Angles are always
normalized into [0, 360) and must sit on a 45 degree notch.
"""

from __future__ import annotations

from dataclasses import dataclass

from orrery.errors import InvalidAngle, InvalidRotationLevel, OutOfBoundsCell

SECTOR_COUNT = 8
DEGREES_PER_SLOT = 360 // SECTOR_COUNT
ROTATING_LEVELS: tuple[int, ...] = (1, 2, 3)

# Printed label -> angular slot, as laid out on the physical board
SLOT_BY_LABEL: dict[int, int] = {1: 0, 8: 1, 7: 2, 6: 3, 5: 4, 4: 5, 3: 6, 2: 7}
LABEL_BY_SLOT: dict[int, int] = {slot: label for label, slot in SLOT_BY_LABEL.items()}

# Labels in increasing angular order (slot 0 first)
LABELS_BY_ANGLE: tuple[int, ...] = tuple(LABEL_BY_SLOT[slot] for slot in range(SECTOR_COUNT))


def _normalize_angle(angle: int) -> int:
    if isinstance(angle, bool) or not isinstance(angle, int | float):
        raise InvalidAngle(f"Rotation angle must be a number, got {angle!r}")
    normalized = angle % 360
    if normalized % DEGREES_PER_SLOT != 0:
        raise InvalidAngle(
            f"Rotation angle must be a multiple of {DEGREES_PER_SLOT} degrees, got {angle}"
        )
    return int(normalized)


@dataclass(frozen=True, slots=True)
class RotationState:
    """
    Snapshot of the three rotating rings' angles.

    Attributes:
        level1: Angle of the level 1 ring in degrees
        level2: Angle of the level 2 ring in degrees
        level3: Angle of the level 3 ring in degrees

    Angles are normalized modulo 360 on construction, so two states built
    from equivalent angles compare equal. A new snapshot is produced for every
    rotation; instances are never mutated.

    Example:
        >>> RotationState(-45, -45, 0) == RotationState(315, 315, 0)
        True
        >>> RotationState(0, 0, 0).steps_for_level(0)
        0
    """

    level1: int = 0
    level2: int = 0
    level3: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "level1", _normalize_angle(self.level1))
        object.__setattr__(self, "level2", _normalize_angle(self.level2))
        object.__setattr__(self, "level3", _normalize_angle(self.level3))

    def angle_for_level(self, level: int) -> int:
        """Return the angle for a ring level; level 0 is the fixed ring."""
        if level == 0:
            return 0
        if level == 1:
            return self.level1
        if level == 2:
            return self.level2
        if level == 3:
            return self.level3
        raise OutOfBoundsCell(f"Ring level must be between 0 and 3, got {level}")

    def steps_for_level(self, level: int) -> int:
        """Return how many 45 degree notches a ring level has turned (0-7)."""
        return self.angle_for_level(level) // DEGREES_PER_SLOT

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.level1, self.level2, self.level3)


def make_rotation_state(level1: int, level2: int, level3: int) -> RotationState:
    """
    Build a RotationState from raw angles.

    Args:
        level1: Angle of the level 1 ring (any integer, e.g. -45)
        level2: Angle of the level 2 ring
        level3: Angle of the level 3 ring

    Returns:
        A normalized RotationState

    Raises:
        InvalidAngle: If an angle is not a multiple of 45 after normalization

    Example:
        >>> make_rotation_state(-45, 405, 0).as_tuple()
        (315, 45, 0)
    """
    return RotationState(level1, level2, level3)


def slot_from_label(label: int) -> int:
    """
    Convert a printed sector label (1-8) to its angular slot (0-7).

    Raises:
        OutOfBoundsCell: If the label is not printed on the board
    """
    if isinstance(label, bool) or label not in SLOT_BY_LABEL:
        raise OutOfBoundsCell(f"Sector label must be between 1 and {SECTOR_COUNT}, got {label!r}")
    return SLOT_BY_LABEL[label]


def label_from_slot(slot: int) -> int:
    """
    Convert an angular slot (0-7) back to its printed sector label.

    Raises:
        OutOfBoundsCell: If the slot is outside 0-7
    """
    if isinstance(slot, bool) or slot not in LABEL_BY_SLOT:
        raise OutOfBoundsCell(f"Angular slot must be between 0 and {SECTOR_COUNT - 1}, got {slot!r}")
    return LABEL_BY_SLOT[slot]


def rotate_label(label: int, steps: int) -> int:
    """
    Turn a sector label by a number of angular notches.

    Positive steps move towards higher slots (which means lower printed
    labels); negative steps move the other way.

    Example:
        >>> rotate_label(3, -1)
        4
        >>> rotate_label(1, 1)
        8
    """
    slot = slot_from_label(label)
    return label_from_slot((slot + steps) % SECTOR_COUNT)


def neighbor_labels(label: int) -> tuple[int, int]:
    """Return the labels one slot below and one slot above the given label."""
    return rotate_label(label, -1), rotate_label(label, 1)


def check_rotation_level(level: int) -> int:
    """
    Validate a rotating ring level.

    Raises:
        InvalidRotationLevel: If level is not 1, 2 or 3
    """
    if isinstance(level, bool) or level not in ROTATING_LEVELS:
        raise InvalidRotationLevel(f"Rotation level must be one of {ROTATING_LEVELS}, got {level!r}")
    return level
