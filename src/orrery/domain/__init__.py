"""Domain model for the Orrery board core.

This package holds every rule of the rotating solar-system board as pure,
in-memory code. It exposes:

* Dataclasses for addresses, cataloged objects, cells and probes (see
  :mod:`models`).
* Enumerations and strongly-typed identifiers used across the rules layer.
* Rule constants (see :mod:`rules_config`).
* Pure rule functions: coordinates and adjacency, budgeted reachability,
  ring rotation, board setup and the read-only queries built on them.

Nothing here performs I/O; the HTTP adapter in :mod:`orrery.api` keeps the
current board and serializes rotations against queries.
"""

from . import (
    board,
    catalog,
    coordinates,
    enums,
    models,
    pathfinding,
    queries,
    rotation,
    rules_config,
)

__all__ = [
    "board",
    "catalog",
    "coordinates",
    "enums",
    "models",
    "pathfinding",
    "queries",
    "rotation",
    "rules_config",
]
