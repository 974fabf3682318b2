"""
Bullet spawning, travel and retirement.

Each side may have at most one bullet in flight. A bullet travels in a
straight line from its spawn point to a fixed destination over a fixed
duration and is retired on arrival, unless a contact removes it first.
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .config import SpaceInvadersConfig
from .entities import Entity, EntityKind, EntityRegistry
from .formation import InvaderFormation

logger = logging.getLogger(__name__)


@dataclass
class BulletFlight:
    """Travel plan of one bullet."""
    entity_id: int
    kind: EntityKind
    origin: Tuple[float, float]
    destination: Tuple[float, float]
    launched_at: float
    duration: float

    def progress(self, now: float) -> float:
        """Fraction of the trip completed, clamped to [0, 1]."""
        return max(0.0, min(1.0, (now - self.launched_at) / self.duration))

    def position_at(self, now: float) -> Tuple[float, float]:
        t = self.progress(now)
        return (
            self.origin[0] + (self.destination[0] - self.origin[0]) * t,
            self.origin[1] + (self.destination[1] - self.origin[1]) * t,
        )

    def arrived(self, now: float) -> bool:
        return now - self.launched_at >= self.duration


class BulletSubsystem:
    """
    Spawns, advances and retires ship and invader bullets.

    Spawn requests while a bullet of the same kind is alive are ignored.
    The random source picking the invader shooter is injectable so that
    tests can make it deterministic.
    """

    def __init__(
        self,
        registry: EntityRegistry,
        formation: InvaderFormation,
        config: SpaceInvadersConfig,
        rng: Optional[random.Random] = None,
    ):
        self.registry = registry
        self.formation = formation
        self.config = config
        self.rng = rng or random.Random()
        self.flights: Dict[int, BulletFlight] = {}
        self._now = 0.0

    def live_bullet(self, kind: EntityKind) -> Optional[Entity]:
        """The bullet of a kind currently in flight, if any."""
        return self.registry.first(kind)

    def spawn_ship_bullet(self, now: Optional[float] = None) -> Optional[Entity]:
        """
        Fire from just above the ship towards the top of the playfield.

        Args:
            now: Launch time, defaults to the time of the last tick

        Returns:
            The new bullet, or None if the request was ignored
        """
        if now is None:
            now = self._now
        if self.live_bullet(EntityKind.SHIP_BULLET) is not None:
            return None
        ship = self.registry.first(EntityKind.SHIP)
        if ship is None:
            return None

        half = self.config.bullet_height / 2
        origin = (ship.box.x, ship.box.y + ship.box.height - half)
        destination = (ship.box.x, self.config.height + half)
        return self._launch(
            EntityKind.SHIP_BULLET, origin, destination, now, self.config.ship_bullet_duration
        )

    def spawn_invader_bullet(self, now: float) -> Optional[Entity]:
        """
        Fire from a uniformly chosen live invader towards the bottom.

        Returns:
            The new bullet, or None if the request was ignored
        """
        self._now = max(self._now, now)
        if self.live_bullet(EntityKind.INVADER_BULLET) is not None:
            return None
        invaders = self.formation.live_invaders()
        if not invaders:
            return None

        shooter = invaders[self.rng.randrange(len(invaders))]
        half = self.config.bullet_height / 2
        origin = (shooter.box.x, shooter.box.bottom + half)
        destination = (shooter.box.x, -half)
        return self._launch(
            EntityKind.INVADER_BULLET, origin, destination, now, self.config.invader_bullet_duration
        )

    def _launch(
        self,
        kind: EntityKind,
        origin: Tuple[float, float],
        destination: Tuple[float, float],
        now: float,
        duration: float,
    ) -> Entity:
        bullet = self.registry.spawn(
            kind,
            x=origin[0],
            y=origin[1],
            width=self.config.bullet_width,
            height=self.config.bullet_height,
        )
        self.flights[bullet.id] = BulletFlight(
            entity_id=bullet.id,
            kind=kind,
            origin=origin,
            destination=destination,
            launched_at=now,
            duration=duration,
        )
        logger.debug("Spawned %s %d at (%.1f, %.1f)", kind.name, bullet.id, *origin)
        return bullet

    def tick(self, now: float) -> None:
        """Advance bullets in flight and retire the ones that arrived."""
        self._now = max(self._now, now)
        for entity_id, flight in list(self.flights.items()):
            bullet = self.registry.get(entity_id)
            if bullet is None:
                # Removed by a contact; the slot is already free
                del self.flights[entity_id]
                continue
            bullet.box.x, bullet.box.y = flight.position_at(now)
            if flight.arrived(now):
                self.registry.remove(entity_id)
                del self.flights[entity_id]
