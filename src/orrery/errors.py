"""Exceptions raised by the Orrery board core.

Every failure is a local validation outcome: nothing here is raised after a
partial update, because board state is immutable and every operation returns a
fresh value.
"""


class BoardError(ValueError):
    """Base class for board validation failures."""


class InvalidAngle(BoardError):
    """Raised when a rotation angle is not a multiple of 45 degrees."""


class InvalidRotationLevel(BoardError):
    """Raised when a rotation is requested for a level outside {1, 2, 3}."""


class OutOfBoundsCell(BoardError):
    """Raised when a (ring, sector) pair does not name a modeled address."""


class UnknownObject(BoardError):
    """Raised when a celestial object id is not cataloged."""


class DuplicateObject(BoardError):
    """Raised when registering an object whose id is already cataloged."""


class UnknownProbe(BoardError):
    """Raised when a probe id is not on the board."""


class DuplicateProbe(BoardError):
    """Raised when placing a probe whose id is already on the board."""
