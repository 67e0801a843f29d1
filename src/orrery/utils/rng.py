"""Seeded draws for randomized board setup.

A table that wants a random starting board supplies one setup seed. Each
rotating plate gets its own derived seed, so the three starting sectors are
independent of each other and the whole setup can be rebuilt from that one
string.

Examples:
    >>> sector_seed("table-4", 2)
    'table-4:level2_sector'
    >>> draw(sector_seed("table-4", 2), [1, 8, 7]).value in [1, 8, 7]
    True
"""

import hashlib
import random
from collections.abc import Sequence
from typing import Any, NamedTuple


class Draw(NamedTuple):
    """One seeded pick: the seed it came from, the index and the picked value."""

    seed: str
    index: int
    value: Any


def sector_seed(setup_seed: str, level: int) -> str:
    """Seed for the starting sector of one rotating plate.

    Raises:
        ValueError: If the setup seed is blank
    """
    if not setup_seed.strip():
        raise ValueError("setup seed must not be blank")
    return f"{setup_seed}:level{level}_sector"


def _stable_int(seed: str) -> int:
    # First 8 bytes of SHA-256; Python's hash() is salted per process
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=False)


def draw(seed: str, options: Sequence[Any]) -> Draw:
    """Pick one of ``options``; the same seed and options always give the same pick.

    Raises:
        ValueError: If there is nothing to pick from
    """
    if not options:
        raise ValueError("cannot draw from an empty sequence")

    index = random.Random(_stable_int(seed)).randrange(len(options))
    return Draw(seed=seed, index=index, value=options[index])
