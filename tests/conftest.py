"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`orrery` package without requiring an editable install in CI, and provides
the board fixtures shared by unit and integration tests.
"""

import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from orrery.utils.sector_math import RotationState, make_rotation_state  # noqa: E402


@pytest.fixture
def zero_rotation() -> RotationState:
    """All rotating rings at their printed orientation."""
    return RotationState()


@pytest.fixture
def turned_rotation() -> RotationState:
    """Level 1 turned twice and level 2 once (rotate 1, then rotate 2)."""
    return make_rotation_state(-90, -45, 0)
