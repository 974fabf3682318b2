"""
Deferred contact resolution.

The collision source reports contacts as they are detected; the resolver
queues them and applies the game rules once per tick in drain(). Queued
events whose entities are already gone are stale and get dropped, so the
same physical contact reported twice only counts once.
"""

import logging
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Optional, Tuple

from .config import SpaceInvadersConfig
from .entities import Entity, EntityKind, EntityRegistry
from .scoring import ScoreTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContactEvent:
    """Two entities that began touching at a given tick time."""
    first: int
    second: int
    timestamp: float


@dataclass(frozen=True)
class ContactRule:
    """A game rule applied to a pair of entity kinds."""
    name: str
    kinds: FrozenSet[EntityKind]
    destroys: FrozenSet[EntityKind]
    points: int = 0


def default_rules(config: SpaceInvadersConfig) -> Tuple[ContactRule, ...]:
    """Contact rules in precedence order; the first match wins."""
    return (
        ContactRule(
            name="ship_hit",
            kinds=frozenset((EntityKind.SHIP, EntityKind.INVADER_BULLET)),
            destroys=frozenset((EntityKind.SHIP, EntityKind.INVADER_BULLET)),
        ),
        ContactRule(
            name="invader_hit",
            kinds=frozenset((EntityKind.INVADER, EntityKind.SHIP_BULLET)),
            destroys=frozenset((EntityKind.INVADER, EntityKind.SHIP_BULLET)),
            points=config.invader_kill_points,
        ),
        ContactRule(
            name="ship_rammed",
            kinds=frozenset((EntityKind.INVADER, EntityKind.SHIP)),
            destroys=frozenset((EntityKind.SHIP,)),
        ),
    )


@dataclass
class Resolution:
    """Outcome of applying one contact event."""
    event: ContactEvent
    rule: ContactRule
    destroyed: List[int]
    points: int


ResolutionListener = Callable[[Resolution], None]


class ContactResolver:
    """
    Queues contact events and applies them exactly once per event.

    submit() may be called at any time, including from inside drain();
    events submitted during a drain wait for the next one.
    """

    def __init__(
        self,
        registry: EntityRegistry,
        score: ScoreTracker,
        config: SpaceInvadersConfig,
        rules: Optional[Tuple[ContactRule, ...]] = None,
        listeners: Optional[List[ResolutionListener]] = None,
    ):
        self.registry = registry
        self.score = score
        self.rules = rules if rules is not None else default_rules(config)
        self._queue: List[ContactEvent] = []
        self.listeners: List[ResolutionListener] = list(listeners or [])

    @property
    def pending(self) -> int:
        return len(self._queue)

    def add_listener(self, listener: ResolutionListener) -> None:
        """Register a callback for every applied contact (sound cues, effects)."""
        self.listeners.append(listener)

    def submit(self, event: ContactEvent) -> None:
        self._queue.append(event)

    def drain(self, now: float) -> List[Resolution]:
        """
        Apply every currently queued event, then empty the queue.

        Args:
            now: Current simulation time

        Returns:
            The contacts that were applied, in queue order
        """
        queued, self._queue = self._queue, []
        applied: List[Resolution] = []

        for event in queued:
            first = self.registry.get(event.first)
            second = self.registry.get(event.second)
            if first is None or second is None or first is second:
                continue  # stale

            rule = self._match(first, second)
            if rule is None:
                continue

            resolution = self._apply(event, rule, (first, second))
            applied.append(resolution)
            for listener in self.listeners:
                listener(resolution)

        if applied:
            logger.debug("Applied %d contact(s) at t=%.3f", len(applied), now)
        return applied

    def _match(self, first: Entity, second: Entity) -> Optional[ContactRule]:
        kinds = frozenset((first.kind, second.kind))
        for rule in self.rules:
            if rule.kinds == kinds:
                return rule
        return None

    def _apply(
        self, event: ContactEvent, rule: ContactRule, entities: Tuple[Entity, Entity]
    ) -> Resolution:
        destroyed = []
        for entity in entities:
            if entity.kind in rule.destroys and self.registry.remove(entity.id):
                destroyed.append(entity.id)
        if rule.points:
            self.score.credit(rule.points)
        return Resolution(event=event, rule=rule, destroyed=destroyed, points=rule.points)
