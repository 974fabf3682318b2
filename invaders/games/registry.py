"""
Game registry for Invaders.

Games register their game and renderer classes when their package is
imported; scripts then create both by game id.
"""

from dataclasses import dataclass
from typing import Dict, Type

from ..core.game_interface import GameInterface, GameMetadata
from ..core.renderer_interface import RendererInterface


@dataclass(frozen=True)
class RegisteredGame:
    """Classes and metadata registered under one game id."""
    game_class: Type[GameInterface]
    renderer_class: Type[RendererInterface]
    metadata: GameMetadata


class GameRegistry:
    """Lookup table from game id to its registered classes."""

    _games: Dict[str, RegisteredGame] = {}

    @classmethod
    def register(
        cls,
        game_class: Type[GameInterface],
        renderer_class: Type[RendererInterface],
    ) -> None:
        """Register a game under the id in its metadata."""
        metadata = game_class.get_metadata()
        cls._games[metadata.id] = RegisteredGame(game_class, renderer_class, metadata)

    @classmethod
    def _lookup(cls, game_id: str) -> RegisteredGame:
        entry = cls._games.get(game_id)
        if entry is None:
            known = ", ".join(sorted(cls._games)) or "none"
            raise ValueError(f"Unknown game: {game_id} (registered: {known})")
        return entry

    @classmethod
    def create_game(cls, game_id: str, **kwargs) -> GameInterface:
        """
        Create a game instance.

        Args:
            game_id: The game identifier
            **kwargs: Arguments to pass to the game constructor

        Raises:
            ValueError: If no game is registered under game_id
        """
        return cls._lookup(game_id).game_class(**kwargs)

    @classmethod
    def create_renderer(cls, game_id: str, **kwargs) -> RendererInterface:
        """
        Create the renderer registered for a game.

        Raises:
            ValueError: If no game is registered under game_id
        """
        return cls._lookup(game_id).renderer_class(**kwargs)
