"""Golden reachability fixture: Earth's neighbourhood on a turned board.

The board is reached from the printed orientation by rotating level 1 and then
level 2, which leaves the rings at (270, 315, 0). Under that rotation the
asteroid fields sit at fixed 3, level 1 sectors 6 and 7, level 2 sectors 4 and
7, and level 3 sector 7.
"""

import pytest

from orrery.domain import board as boards
from orrery.domain.coordinates import cell_at
from orrery.domain.enums import Ring
from orrery.domain.models import CellAddress
from orrery.domain.pathfinding import check_destination, reachable_from
from orrery.domain.rotation import rotate_next
from orrery.utils.sector_math import LABELS_BY_ANGLE, RotationState

EXPECTED_FROM_EARTH_BUDGET_3 = {
    ("fixed", 1): 0,
    ("fixed", 2): 1,
    ("fixed", 8): 1,
    ("level1", 1): 1,
    ("fixed", 3): 2,
    ("fixed", 7): 2,
    ("level1", 2): 2,
    ("level1", 8): 2,
    ("level2", 1): 2,
    ("fixed", 6): 3,
    ("level1", 3): 3,
    ("level1", 7): 3,
    ("level2", 2): 3,
    ("level2", 8): 3,
    ("level3", 1): 3,
}


@pytest.fixture
def turned_board():
    board = boards.launch_probe(boards.create_board(), "p1", "alice")
    board = rotate_next(board).board
    return rotate_next(board).board


def test_board_rotation(turned_board):
    assert turned_board.rotation == RotationState(270, 315, 0)
    assert turned_board.next_level == 3


def test_asteroid_layout(turned_board):
    flagged = {
        (ring.value, label)
        for ring in Ring
        for label in LABELS_BY_ANGLE
        if cell_at(ring, label, turned_board.rotation).has_asteroid_field
    }
    assert flagged == {
        ("fixed", 3),
        ("level1", 6),
        ("level1", 7),
        ("level2", 4),
        ("level2", 7),
        ("level3", 7),
    }


def test_reachability_from_earth(turned_board):
    origin = boards.probe_address(turned_board, "p1")
    result = reachable_from(origin.ring, origin.sector, 3, turned_board.rotation)

    actual = {(address.ring.value, address.sector): cost for address, cost in result.costs.items()}
    assert actual == EXPECTED_FROM_EARTH_BUDGET_3
    assert len(result) == 15


def test_asteroid_exit_blocks_the_far_side(turned_board):
    """Fixed 4 lies past the fixed asteroid field and costs 4 from Earth."""
    origin = CellAddress(Ring.FIXED, 1)
    check = check_destination(origin, CellAddress(Ring.FIXED, 4), 3, turned_board.rotation)

    assert not check.valid
    assert check.reason is not None
    assert check.reason.minimal_cost == 4
