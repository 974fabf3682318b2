"""
Core abstractions for Invaders.

Provides abstract interfaces that games, renderers and the collaborators
around the simulation must implement.
"""

from .game_interface import GameInterface, GameMetadata
from .renderer_interface import RendererInterface
from .collaborators import SceneRouter, HighScoreStore

__all__ = [
    'GameInterface',
    'GameMetadata',
    'RendererInterface',
    'SceneRouter',
    'HighScoreStore',
]
