"""
Space Invaders Game Core - Per-frame combat simulation implementing GameInterface.

One call to step() is one simulation tick:
    round check -> formation move -> ship move -> bullets -> contacts
followed by a collision scan whose contacts are applied on the next tick.
"""

import logging
import random
from typing import Dict, Any, Optional, Tuple

from ...core.collaborators import HighScoreStore, SceneRouter
from ...core.game_interface import GameInterface, GameMetadata
from .bullets import BulletSubsystem
from .collisions import OverlapDetector
from .config import SpaceInvadersConfig
from .contacts import ContactResolver
from .entities import COLLISION_MASKS, Entity, EntityKind, PhysicsCategory
from .formation import FormationController
from .round import RoundController, RoundOutcome, SimulationState

logger = logging.getLogger(__name__)


class SpaceInvadersGame(GameInterface):
    """
    Core Space Invaders simulation.

    The player ship moves horizontally along the bottom and fires upward;
    a formation of invaders marches side to side, dropping a row at each
    edge, and fires downward. The round ends when either side is wiped out
    or the invaders breach the floor line.

    Collaborators:
        router: told the outcome once when the round ends
        score_store: offered the final score once when the round ends
        rng: random source for picking invader shooters
    """

    @classmethod
    def get_metadata(cls) -> GameMetadata:
        """Return metadata about Space Invaders game."""
        return GameMetadata(
            name="Space Invaders",
            id="space_invaders",
            description="Single-screen arcade shooter - stop the invaders before they land",
            version="1.0.0",
            min_players=1,
            max_players=1,
            supports_human=True,
        )

    def __init__(
        self,
        config: Optional[SpaceInvadersConfig] = None,
        rng: Optional[random.Random] = None,
        router: Optional[SceneRouter] = None,
        score_store: Optional[HighScoreStore] = None,
        detect_collisions: bool = True,
    ):
        """
        Initialize the game.

        Args:
            config: Simulation constants, defaults to SpaceInvadersConfig()
            rng: Random source for invader fire, defaults to an unseeded Random
            router: Scene collaborator receiving the round outcome
            score_store: Persistence collaborator receiving the final score
            detect_collisions: Run the built-in overlap detector after each
                tick. Disable to feed contacts from another source.
        """
        self.config = config or SpaceInvadersConfig()
        self.rng = rng or random.Random()
        self.router = router
        self.score_store = score_store
        self.detect_collisions = detect_collisions

        self.velocity: float = 0.0
        self.tap_queue: int = 0
        self.frame_count: int = 0
        self.paused: bool = False
        self._clock_origin: Optional[float] = None
        self._paused_at: Optional[float] = None
        self._sim_now: float = 0.0
        self.state: Optional[SimulationState] = None
        self.contacts: Optional[ContactResolver] = None

        self.reset()

    def reset(self) -> Dict[str, Any]:
        """
        Start a new round and return its initial state.

        Simulation time restarts at zero with the first step() after reset.
        Score and contact listeners carry over to the new round.
        """
        score = self.state.score if self.state is not None else None
        listeners = self.contacts.listeners if self.contacts is not None else None
        self.state = SimulationState.create(self.config, score=score)
        self.formation = FormationController(self.state.formation, self.config)
        self.bullets = BulletSubsystem(
            self.state.registry, self.state.formation, self.config, rng=self.rng
        )
        self.contacts = ContactResolver(
            self.state.registry, self.state.score, self.config, listeners=listeners
        )
        self.round = RoundController(
            self.state, self.config, router=self.router, score_store=self.score_store
        )
        self.detector: Optional[OverlapDetector] = (
            OverlapDetector(self.contacts.submit) if self.detect_collisions else None
        )

        self.velocity = 0.0
        self.tap_queue = 0
        self.frame_count = 0
        self.paused = False
        self._clock_origin = None
        self._paused_at = None
        self._sim_now = 0.0

        logger.info(
            "Round started: %dx%d invaders", self.config.invader_rows, self.config.invader_cols
        )
        return self.get_state()

    # Input

    def set_velocity(self, velocity: float) -> None:
        """Set the normalized horizontal velocity, clamped to [-1, 1]."""
        self.velocity = max(-1.0, min(1.0, float(velocity)))

    def queue_fire(self) -> None:
        """Queue one fire tap; consumed in the bullet phase of the next tick."""
        self.tap_queue += 1

    # Clock

    def pause(self, now: float) -> None:
        """Freeze the simulation until resume()."""
        if not self.paused:
            self.paused = True
            self._paused_at = now

    def resume(self, now: float) -> None:
        """Continue the simulation as if no time passed while paused."""
        if not self.paused:
            return
        if self._clock_origin is not None and self._paused_at is not None:
            self._clock_origin += now - self._paused_at
        self.paused = False
        self._paused_at = None

    def _to_sim_time(self, now: float) -> float:
        if self._clock_origin is None:
            self._clock_origin = now
        return now - self._clock_origin

    # Simulation

    @property
    def outcome(self) -> RoundOutcome:
        return self.round.outcome

    @property
    def game_over(self) -> bool:
        return self.round.is_terminal

    def step(self, now: float) -> Tuple[Dict[str, Any], bool, Dict[str, Any]]:
        """
        Run one simulation tick.

        Args:
            now: Driver clock in seconds. Only differences matter.

        Returns:
            Tuple of (state, done, info)
        """
        if self.paused or self.round.is_terminal:
            return self.get_state(), self.round.is_terminal, self._info(0)

        sim_now = self._to_sim_time(now)
        self._sim_now = sim_now

        if self.round.evaluate(sim_now).is_terminal:
            self.tap_queue = 0
            return self.get_state(), True, self._info(0)

        self.formation.advance(sim_now)
        self._move_ship()

        while self.tap_queue > 0:
            self.tap_queue -= 1
            self.bullets.spawn_ship_bullet(sim_now)
        if self.config.invader_fire_enabled:
            self.bullets.spawn_invader_bullet(sim_now)
        self.bullets.tick(sim_now)

        applied = self.contacts.drain(sim_now)

        if self.detector is not None:
            self.detector.scan(self.state.registry, sim_now)

        self.frame_count += 1
        return self.get_state(), False, self._info(len(applied))

    def _move_ship(self) -> None:
        ship = self.ship
        if ship is None or self.velocity == 0.0:
            return
        half = ship.box.width / 2
        x = ship.box.x - self.velocity * self.config.ship_speed_factor
        if COLLISION_MASKS[ship.kind] & PhysicsCategory.SCENE_EDGE:
            x = max(half, min(self.config.width - half, x))
        ship.box.x = x

    def _info(self, contacts: int) -> Dict[str, Any]:
        return {
            "score": self.state.score.total,
            "outcome": self.round.outcome.value,
            "contacts": contacts,
        }

    # Read-only views

    @property
    def ship(self) -> Optional[Entity]:
        return self.state.registry.first(EntityKind.SHIP)

    def get_score(self) -> int:
        """Get current game score."""
        return self.state.score.total

    def get_state(self) -> Dict[str, Any]:
        """Get current game state for rendering."""
        registry = self.state.registry
        ship = self.ship
        ship_bullet = self.bullets.live_bullet(EntityKind.SHIP_BULLET)
        invader_bullet = self.bullets.live_bullet(EntityKind.INVADER_BULLET)
        invaders = self.state.formation.live_invaders()
        return {
            "ship": ship.to_dict() if ship else None,
            "invaders": [inv.to_dict() for inv in invaders],
            "ship_bullet": ship_bullet.to_dict() if ship_bullet else None,
            "invader_bullet": invader_bullet.to_dict() if invader_bullet else None,
            "movement_state": self.formation.state.value,
            "move_interval": self.formation.move_interval,
            "formation_steps": self.formation.step_count,
            "score": self.state.score.total,
            "outcome": self.round.outcome.value,
            "game_over": self.round.is_terminal,
            "paused": self.paused,
            "time": self._sim_now,
            "frame": self.frame_count,
            "width": self.config.width,
            "height": self.config.height,
            "floor_height": self.config.floor_height,
            "invaders_alive": len(invaders),
            "total_invaders": self.config.total_invaders,
            "entities": len(registry),
        }
