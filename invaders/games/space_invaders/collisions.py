"""
Reference collision source.

Stands in for a physics engine: after each tick it scans the registry for
overlapping boxes whose categories are set up to report contacts, and hands
every newly begun contact to a delegate (normally ContactResolver.submit).
Pairs that stay overlapping are reported once, when they begin touching.
"""

from itertools import combinations
from typing import Callable, FrozenSet, Set

from .contacts import ContactEvent
from .entities import CONTACT_TEST_MASKS, Entity, EntityRegistry

ContactDelegate = Callable[[ContactEvent], None]


def reports_contact(a: Entity, b: Entity) -> bool:
    """Whether either body's contact-test mask covers the other's category."""
    return bool(
        (CONTACT_TEST_MASKS[a.kind] & b.category)
        or (CONTACT_TEST_MASKS[b.kind] & a.category)
    )


class OverlapDetector:
    """Begin-contact detector over axis-aligned boxes."""

    def __init__(self, delegate: ContactDelegate):
        self.delegate = delegate
        self._touching: Set[FrozenSet[int]] = set()

    def scan(self, registry: EntityRegistry, now: float) -> int:
        """
        Report contacts that began since the previous scan.

        Returns:
            Number of contacts reported
        """
        touching: Set[FrozenSet[int]] = set()
        reported = 0

        for a, b in combinations(list(registry), 2):
            if not reports_contact(a, b) or not a.box.overlaps(b.box):
                continue
            pair = frozenset((a.id, b.id))
            touching.add(pair)
            if pair not in self._touching:
                self.delegate(ContactEvent(a.id, b.id, now))
                reported += 1

        self._touching = touching
        return reported