"""
Abstract game interface for Invaders.

All games must implement GameInterface and provide GameMetadata.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, Tuple


@dataclass
class GameMetadata:
    """Metadata describing a game."""

    name: str                           # Display name (e.g., "Space Invaders")
    id: str                             # Unique identifier (e.g., "space_invaders")
    description: str                    # Brief description for UI
    version: str = "1.0.0"              # Game version
    min_players: int = 1                # Minimum players
    max_players: int = 1                # Maximum players
    supports_human: bool = True         # Can humans play?


class GameInterface(ABC):
    """
    Abstract base class for all games in Invaders.

    Games own the simulation state and advance it once per rendered frame.
    Input, presentation and persistence live outside the game and talk to it
    through the methods below.
    """

    @classmethod
    @abstractmethod
    def get_metadata(cls) -> GameMetadata:
        """
        Return metadata about this game.

        Returns:
            GameMetadata describing the game
        """
        pass

    @abstractmethod
    def reset(self) -> Dict[str, Any]:
        """
        Start a new round.

        Returns:
            Initial game state dictionary
        """
        pass

    @abstractmethod
    def step(self, now: float) -> Tuple[Dict[str, Any], bool, Dict[str, Any]]:
        """
        Advance the simulation by one tick.

        Args:
            now: Current simulation time in seconds

        Returns:
            Tuple of (state, done, info)
            - state: Current game state dictionary
            - done: Whether the round has reached a terminal outcome
            - info: Additional information dictionary
        """
        pass

    @abstractmethod
    def get_state(self) -> Dict[str, Any]:
        """
        Get a read-only view of the current game state for rendering.

        Returns:
            Dictionary containing all state needed for rendering
        """
        pass

    @abstractmethod
    def set_velocity(self, velocity: float) -> None:
        """
        Set the normalized horizontal velocity of the player.

        Args:
            velocity: Value in [-1, 1] produced by the input device
        """
        pass

    @abstractmethod
    def queue_fire(self) -> None:
        """Queue one discrete fire input for the next tick."""
        pass

    def get_score(self) -> int:
        """
        Get the current score.

        Returns:
            Current game score
        """
        return 0
