"""
Space Invaders game module for Invaders.

This module auto-registers the Space Invaders game when imported.
"""

from ..registry import GameRegistry
from .game import SpaceInvadersGame
from .renderer import SpaceInvadersRenderer
from .config import SpaceInvadersConfig
from .entities import EntityKind, EntityRegistry, InvaderType, PhysicsCategory
from .formation import FormationController, InvaderFormation, MovementState
from .bullets import BulletSubsystem
from .contacts import ContactEvent, ContactResolver
from .collisions import OverlapDetector
from .scoring import ScoreTracker
from .round import RoundController, RoundOutcome, SimulationState

# Auto-register Space Invaders game when this module is imported
GameRegistry.register(
    game_class=SpaceInvadersGame,
    renderer_class=SpaceInvadersRenderer,
)

__all__ = [
    "SpaceInvadersGame",
    "SpaceInvadersRenderer",
    "SpaceInvadersConfig",
    "EntityKind",
    "EntityRegistry",
    "InvaderType",
    "PhysicsCategory",
    "FormationController",
    "InvaderFormation",
    "MovementState",
    "BulletSubsystem",
    "ContactEvent",
    "ContactResolver",
    "OverlapDetector",
    "ScoreTracker",
    "RoundController",
    "RoundOutcome",
    "SimulationState",
]
