"""
Games module for Invaders.

Import this module to populate the GameRegistry.
"""

from .registry import GameRegistry

# Import game modules to trigger registration
# Each game's __init__.py calls GameRegistry.register()
from . import space_invaders

__all__ = [
    'GameRegistry',
]
