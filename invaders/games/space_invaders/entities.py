"""
Entity registry for the Space Invaders simulation.

Holds every live simulation object (ship, invaders, bullets) under a stable
integer handle. Other components keep handles, never the entities themselves,
and check membership before acting on one.
"""

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from itertools import count
from typing import Dict, Iterator, List, Optional, Any

import numpy as np


class EntityKind(IntEnum):
    """Category tag of a simulation object."""
    SHIP = 0
    INVADER = 1
    SHIP_BULLET = 2
    INVADER_BULLET = 3


class InvaderType(IntEnum):
    """Invader look, cycling by formation row."""
    A = 0
    B = 1
    C = 2


class PhysicsCategory(IntFlag):
    """Collision category bits handed to the collision source."""
    NONE = 0
    INVADER = 0x1 << 0
    SHIP_BULLET = 0x1 << 1
    SHIP = 0x1 << 2
    SCENE_EDGE = 0x1 << 3
    INVADER_BULLET = 0x1 << 4


CATEGORY_BY_KIND: Dict[EntityKind, PhysicsCategory] = {
    EntityKind.SHIP: PhysicsCategory.SHIP,
    EntityKind.INVADER: PhysicsCategory.INVADER,
    EntityKind.SHIP_BULLET: PhysicsCategory.SHIP_BULLET,
    EntityKind.INVADER_BULLET: PhysicsCategory.INVADER_BULLET,
}

# Which categories each kind wants begin-contact reports for
CONTACT_TEST_MASKS: Dict[EntityKind, PhysicsCategory] = {
    EntityKind.SHIP: PhysicsCategory.INVADER,
    EntityKind.INVADER: PhysicsCategory.NONE,
    EntityKind.SHIP_BULLET: PhysicsCategory.INVADER,
    EntityKind.INVADER_BULLET: PhysicsCategory.SHIP,
}

# Which categories physically block each kind (the ship stops at the edges)
COLLISION_MASKS: Dict[EntityKind, PhysicsCategory] = {
    EntityKind.SHIP: PhysicsCategory.SCENE_EDGE,
    EntityKind.INVADER: PhysicsCategory.NONE,
    EntityKind.SHIP_BULLET: PhysicsCategory.NONE,
    EntityKind.INVADER_BULLET: PhysicsCategory.NONE,
}


@dataclass
class BoundingBox:
    """Axis-aligned box, centre-based."""
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def bottom(self) -> float:
        return self.y - self.height / 2

    @property
    def top(self) -> float:
        return self.y + self.height / 2

    def overlaps(self, other: "BoundingBox") -> bool:
        """AABB overlap test (touching edges do not count)."""
        return (
            abs(self.x - other.x) < (self.width + other.width) / 2
            and abs(self.y - other.y) < (self.height + other.height) / 2
        )


@dataclass
class Entity:
    """A live simulation object."""
    id: int
    kind: EntityKind
    box: BoundingBox
    alive: bool = True
    invader_type: Optional[InvaderType] = None

    @property
    def category(self) -> PhysicsCategory:
        return CATEGORY_BY_KIND[self.kind]

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "kind": int(self.kind),
            "x": self.box.x,
            "y": self.box.y,
            "width": self.box.width,
            "height": self.box.height,
        }
        if self.invader_type is not None:
            data["type"] = int(self.invader_type)
        return data


class EntityRegistry:
    """
    Exclusive owner of all live entities.

    Entities are kept in spawn order, which is the natural enumeration order
    every scan over the registry uses. Removal is immediate; a removed
    handle is never reused within the registry's lifetime.
    """

    def __init__(self):
        self._entities: Dict[int, Entity] = {}
        self._ids = count(1)

    def spawn(
        self,
        kind: EntityKind,
        x: float,
        y: float,
        width: float,
        height: float,
        invader_type: Optional[InvaderType] = None,
    ) -> Entity:
        """Create an entity and return it."""
        entity = Entity(
            id=next(self._ids),
            kind=kind,
            box=BoundingBox(x, y, width, height),
            invader_type=invader_type,
        )
        self._entities[entity.id] = entity
        return entity

    def remove(self, entity_id: int) -> bool:
        """
        Remove an entity from the registry.

        Returns:
            True if the entity was present, False if it was already gone
        """
        entity = self._entities.pop(entity_id, None)
        if entity is None:
            return False
        entity.alive = False
        return True

    def get(self, entity_id: int) -> Optional[Entity]:
        return self._entities.get(entity_id)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities.values()))

    def of_kind(self, kind: EntityKind) -> List[Entity]:
        """All live entities of a kind, in spawn order."""
        return [e for e in self._entities.values() if e.kind == kind]

    def first(self, kind: EntityKind) -> Optional[Entity]:
        for entity in self._entities.values():
            if entity.kind == kind:
                return entity
        return None

    def count(self, kind: EntityKind) -> int:
        return sum(1 for e in self._entities.values() if e.kind == kind)

    def bounds(self, kind: EntityKind) -> np.ndarray:
        """
        Read-only snapshot of the boxes of one kind.

        Returns:
            Array of shape (n, 4) with columns (x, y, width, height). The
            array is not writeable and does not alias registry state.
        """
        rows = [
            (e.box.x, e.box.y, e.box.width, e.box.height)
            for e in self._entities.values()
            if e.kind == kind
        ]
        snapshot = np.array(rows, dtype=np.float64).reshape(-1, 4)
        snapshot.flags.writeable = False
        return snapshot
