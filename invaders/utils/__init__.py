"""
Utilities for Invaders: configuration, logging and high score persistence.
"""

from .config_loader import Config, load_config, load_game_config, save_config
from .high_scores import JsonHighScoreStore, MemoryHighScoreStore
from .logging_setup import setup_logging

__all__ = [
    'Config',
    'load_config',
    'load_game_config',
    'save_config',
    'JsonHighScoreStore',
    'MemoryHighScoreStore',
    'setup_logging',
]
