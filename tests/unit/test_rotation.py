"""Tests for applying ring rotations to a board."""

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from orrery.domain import board as boards
from orrery.domain.enums import Ring
from orrery.domain.models import CellAddress, NativePosition
from orrery.domain.rotation import apply_rotation, rotate_next, rotated_state
from orrery.errors import InvalidRotationLevel
from orrery.utils.sector_math import RotationState


class TestRotatedState:
    def test_level_one_turns_only_level_one(self):
        assert rotated_state(RotationState(), 1).as_tuple() == (315, 0, 0)

    def test_level_three_turns_everything(self):
        assert rotated_state(RotationState(), 3).as_tuple() == (315, 315, 315)

    def test_invalid_level(self):
        with pytest.raises(InvalidRotationLevel):
            rotated_state(RotationState(), 0)


class TestApplyRotation:
    """Tests for apply_rotation and rotate_next."""

    def test_level_two_compounds(self):
        """Rotating level 2 turns levels 1 and 2 and advances the pointer to 3."""
        board = boards.create_board(next_level=2)
        outcome = apply_rotation(board, 2)

        assert outcome.new_rotation == RotationState(-45, -45, 0)
        assert outcome.new_rotation.as_tuple() == (315, 315, 0)
        assert outcome.old_rotation == RotationState()
        assert outcome.board.next_level == 3
        assert outcome.level == 2

    def test_original_board_is_untouched(self):
        board = boards.create_board()
        apply_rotation(board, 3)
        assert board.rotation == RotationState()
        assert board.next_level == 1

    @pytest.mark.parametrize("level", [0, 4, -1])
    def test_invalid_level_raises(self, level):
        board = boards.create_board()
        with pytest.raises(InvalidRotationLevel):
            apply_rotation(board, level)

    @pytest.mark.parametrize("level,expected", [(1, 2), (2, 3), (3, 1)])
    def test_pointer_cycles(self, level, expected):
        outcome = apply_rotation(boards.create_board(), level)
        assert outcome.board.next_level == expected

    def test_rotate_next_uses_pointer(self):
        board = boards.create_board(next_level=3)
        outcome = rotate_next(board)
        assert outcome.level == 3
        assert outcome.board.next_level == 1

    def test_pointer_sequence(self):
        board = boards.create_board()
        levels = []
        for _ in range(6):
            outcome = rotate_next(board)
            levels.append(outcome.level)
            board = outcome.board
        assert levels == [1, 2, 3, 1, 2, 3]
        assert board.rotation.as_tuple() == (90, 180, 270)

    @given(st.integers(min_value=0, max_value=16))
    def test_k_level_one_rotations(self, k):
        """Property: k level-1 rotations leave level 1 at -45k mod 360."""
        board = boards.create_board()
        for _ in range(k):
            board = apply_rotation(board, 1).board
        assert board.rotation.as_tuple() == ((-45 * k) % 360, 0, 0)


class TestProbeShifts:
    """Tests for the per-probe events returned by a rotation."""

    def test_probe_keeps_native_position(self):
        board = boards.place_probe(boards.create_board(), "p1", "alice", Ring.LEVEL1, 3)
        outcome = apply_rotation(board, 1)

        assert outcome.board.probe("p1").native == NativePosition(Ring.LEVEL1, 3)
        assert boards.probe_address(outcome.board, "p1") == CellAddress(Ring.LEVEL1, 4)

        (event,) = outcome.events
        assert event.before == CellAddress(Ring.LEVEL1, 3)
        assert event.after == CellAddress(Ring.LEVEL1, 4)
        assert event.moved
        assert outcome.moved_probes == (event,)

    def test_fixed_probe_does_not_move(self):
        board = boards.launch_probe(boards.create_board(), "p1", "alice")
        outcome = apply_rotation(board, 3)
        (event,) = outcome.events
        assert not event.moved
        assert outcome.moved_probes == ()

    def test_sector_alignment_changes(self):
        """Turning level 2 swaps Mars for the level 2 comet in Earth's sector."""
        board = boards.launch_probe(boards.create_board(), "p1", "alice")
        (event,) = apply_rotation(board, 2).events

        assert event.joined_objects == ("comet-level2-8",)
        assert event.left_objects == ("mars",)

    def test_joined_and_left_follow_ring_order(self):
        """Turning every ring empties fixed 6's sector from the inside out."""
        board = boards.place_probe(boards.create_board(), "p1", "alice", Ring.FIXED, 6)
        (event,) = apply_rotation(board, 3).events

        assert event.joined_objects == ("asteroid-level1-5",)
        assert event.left_objects == ("venus", "asteroid-level2-6", "uranus")

    def test_probe_on_ring_above_level_is_untouched(self):
        board = boards.place_probe(boards.create_board(), "p1", "alice", Ring.LEVEL3, 6)
        (event,) = apply_rotation(board, 2).events
        assert event.before == event.after == CellAddress(Ring.LEVEL3, 6)

    def test_rotation_is_logged(self, caplog):
        board = boards.launch_probe(boards.create_board(), "p1", "alice")
        with caplog.at_level(logging.DEBUG, logger="orrery.domain.rotation"):
            apply_rotation(board, 1)

        messages = [record.getMessage() for record in caplog.records]
        assert "rotated level 1: (0, 0, 0) -> (315, 0, 0) (next level 2)" in messages
        assert "probe p1: fixed:1 -> fixed:1" in messages
