"""Static board catalog and the registry for objects added during play.

The static catalog is the printed board: every object's native (ring, sector)
address. Objects introduced later by card or technology effects go into an
``ObjectRegistry`` instead, which is append-only and keyed by id, so the
printed layout itself is never modified.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from orrery.errors import DuplicateObject, UnknownObject

from .enums import ObjectCategory, Ring
from .models import CelestialObject, ObjectID


def _obj(object_id: str, name: str, category: ObjectCategory, ring: Ring, sector: int):
    return CelestialObject(
        id=ObjectID(object_id),
        name=name,
        category=category,
        ring=ring,
        sector=sector,
    )


# --- Printed board ----------------------------------------------------------------

FIXED_OBJECTS: tuple[CelestialObject, ...] = (
    _obj("earth", "Earth", ObjectCategory.EARTH, Ring.FIXED, 1),
    _obj("asteroid-fixed-3", "Asteroids", ObjectCategory.ASTEROID_FIELD, Ring.FIXED, 3),
    _obj("sun", "Sun", ObjectCategory.SUN, Ring.FIXED, 5),
    _obj("comet-fixed-7", "Comet", ObjectCategory.COMET, Ring.FIXED, 7),
)

LEVEL1_OBJECTS: tuple[CelestialObject, ...] = (
    _obj("mercury", "Mercury", ObjectCategory.PLANET, Ring.LEVEL1, 2),
    _obj("empty-level1-3", "Empty", ObjectCategory.EMPTY, Ring.LEVEL1, 3),
    _obj("asteroid-level1-4", "Asteroids", ObjectCategory.ASTEROID_FIELD, Ring.LEVEL1, 4),
    _obj("asteroid-level1-5", "Asteroids", ObjectCategory.ASTEROID_FIELD, Ring.LEVEL1, 5),
    _obj("venus", "Venus", ObjectCategory.PLANET, Ring.LEVEL1, 6),
    _obj("empty-level1-7", "Empty", ObjectCategory.EMPTY, Ring.LEVEL1, 7),
)

LEVEL2_OBJECTS: tuple[CelestialObject, ...] = (
    _obj("mars", "Mars", ObjectCategory.PLANET, Ring.LEVEL2, 1),
    _obj("asteroid-level2-3", "Asteroids", ObjectCategory.ASTEROID_FIELD, Ring.LEVEL2, 3),
    _obj("empty-level2-5", "Empty", ObjectCategory.EMPTY, Ring.LEVEL2, 5),
    _obj("asteroid-level2-6", "Asteroids", ObjectCategory.ASTEROID_FIELD, Ring.LEVEL2, 6),
    _obj("comet-level2-8", "Comet", ObjectCategory.COMET, Ring.LEVEL2, 8),
)

LEVEL3_OBJECTS: tuple[CelestialObject, ...] = (
    _obj("empty-level3-1", "Empty", ObjectCategory.EMPTY, Ring.LEVEL3, 1),
    _obj("jupiter", "Jupiter", ObjectCategory.PLANET, Ring.LEVEL3, 2),
    _obj("comet-level3-3", "Comet", ObjectCategory.COMET, Ring.LEVEL3, 3),
    _obj("saturn", "Saturn", ObjectCategory.PLANET, Ring.LEVEL3, 4),
    _obj("empty-level3-5", "Empty", ObjectCategory.EMPTY, Ring.LEVEL3, 5),
    _obj("uranus", "Uranus", ObjectCategory.PLANET, Ring.LEVEL3, 6),
    _obj("asteroid-level3-7", "Asteroids", ObjectCategory.ASTEROID_FIELD, Ring.LEVEL3, 7),
    _obj("neptune", "Neptune", ObjectCategory.PLANET, Ring.LEVEL3, 8),
)

STATIC_CATALOG: tuple[CelestialObject, ...] = (
    FIXED_OBJECTS + LEVEL1_OBJECTS + LEVEL2_OBJECTS + LEVEL3_OBJECTS
)

_STATIC_BY_ID: dict[ObjectID, CelestialObject] = {obj.id: obj for obj in STATIC_CATALOG}


def all_cataloged_objects(
    extra_objects: Iterable[CelestialObject] = (),
) -> list[CelestialObject]:
    """Return the printed catalog followed by any objects added during play."""

    return [*STATIC_CATALOG, *extra_objects]


def find_object(
    object_id: str,
    extra_objects: Iterable[CelestialObject] = (),
) -> CelestialObject:
    """Look up a cataloged object by id or raise ``UnknownObject``."""

    obj = _STATIC_BY_ID.get(ObjectID(object_id))
    if obj is not None:
        return obj
    for extra in extra_objects:
        if extra.id == object_id:
            return extra
    raise UnknownObject(f"No celestial object with id {object_id!r}")


@dataclass(frozen=True, slots=True)
class ObjectRegistry:
    """Append-only, id-keyed collection of objects added after setup."""

    extras: tuple[CelestialObject, ...] = ()

    def __iter__(self) -> Iterator[CelestialObject]:
        return iter(self.extras)

    def __len__(self) -> int:
        return len(self.extras)

    def __contains__(self, object_id: object) -> bool:
        return object_id in _STATIC_BY_ID or any(obj.id == object_id for obj in self.extras)

    def with_object(self, obj: CelestialObject) -> ObjectRegistry:
        """Return a registry that also holds ``obj``."""

        if obj.id in self:
            raise DuplicateObject(f"Celestial object {obj.id!r} is already cataloged")
        return ObjectRegistry(extras=(*self.extras, obj))

    def get(self, object_id: str) -> CelestialObject:
        return find_object(object_id, self.extras)

    def all_objects(self) -> list[CelestialObject]:
        return all_cataloged_objects(self.extras)
