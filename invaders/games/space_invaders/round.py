"""
Round state and terminal condition checks.

The round controller owns the simulation state of one round and decides,
at the start of every tick, whether the round is still in progress. Loss
checks run before the win check: a ship destroyed in the same tick the
formation empties is a loss.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...core.collaborators import HighScoreStore, SceneRouter
from .config import SpaceInvadersConfig
from .entities import EntityKind, EntityRegistry
from .formation import InvaderFormation
from .scoring import ScoreTracker

logger = logging.getLogger(__name__)


class RoundOutcome(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self is not RoundOutcome.IN_PROGRESS


@dataclass
class SimulationState:
    """Everything a round mutates. Renderers only ever get snapshots of it."""
    registry: EntityRegistry
    formation: InvaderFormation
    score: ScoreTracker

    @classmethod
    def create(
        cls, config: SpaceInvadersConfig, score: Optional[ScoreTracker] = None
    ) -> "SimulationState":
        """
        Fresh state with the ship and a full formation spawned.

        Args:
            config: Simulation constants
            score: Tracker to carry over from a previous round; it is reset
                to zero and keeps its listeners
        """
        registry = EntityRegistry()
        formation = InvaderFormation.spawn(registry, config)
        registry.spawn(
            EntityKind.SHIP,
            x=config.width / 2,
            y=config.ship_y,
            width=config.ship_width,
            height=config.ship_height,
        )
        if score is None:
            score = ScoreTracker()
        else:
            score.reset()
        return cls(registry=registry, formation=formation, score=score)


class RoundController:
    """
    Evaluates terminal conditions and reports the outcome once.

    Once the round is WON or LOST the outcome is frozen; later evaluations
    return it without re-checking or re-notifying.
    """

    def __init__(
        self,
        state: SimulationState,
        config: SpaceInvadersConfig,
        router: Optional[SceneRouter] = None,
        score_store: Optional[HighScoreStore] = None,
    ):
        self.state = state
        self.config = config
        self.router = router
        self.score_store = score_store
        self.outcome = RoundOutcome.IN_PROGRESS
        self.ended_at: Optional[float] = None
        self.new_best = False

    @property
    def is_terminal(self) -> bool:
        return self.outcome.is_terminal

    def evaluate(self, now: float) -> RoundOutcome:
        """Check terminal conditions, ending the round if one holds."""
        if self.is_terminal:
            return self.outcome

        outcome = self._check()
        if outcome.is_terminal:
            self._end(outcome, now)
        return self.outcome

    def _check(self) -> RoundOutcome:
        registry = self.state.registry
        formation = self.state.formation

        if registry.first(EntityKind.SHIP) is None:
            return RoundOutcome.LOST

        lowest = formation.lowest_edge()
        if lowest is not None and lowest <= self.config.floor_height:
            return RoundOutcome.LOST

        if formation.is_empty():
            return RoundOutcome.WON

        return RoundOutcome.IN_PROGRESS

    def _end(self, outcome: RoundOutcome, now: float) -> None:
        self.outcome = outcome
        self.ended_at = now
        final_score = self.state.score.total
        logger.info("Round %s at t=%.2f with score %d", outcome.value, now, final_score)

        if self.router is not None:
            self.router.present_outcome(outcome)
        if self.score_store is not None:
            self.new_best = self.score_store.offer(final_score)
            if self.new_best:
                logger.info("New best score %d", final_score)
