"""
Pytest configuration and fixtures for Invaders tests.

This module sets up pygame mocking to allow testing the renderer
without requiring a display or actual pygame initialization.
"""

import random
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest


# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def create_mock_pygame():
    """Create a mock of the parts of pygame the project touches."""
    mock_pygame = MagicMock()

    mock_pygame.init.return_value = (6, 0)  # (success, fail) count
    mock_pygame.quit.return_value = None

    # Display
    mock_surface = MagicMock()
    mock_surface.get_width.return_value = 384
    mock_surface.get_height.return_value = 512
    mock_pygame.display.set_mode.return_value = mock_surface

    # Fonts
    mock_text = MagicMock()
    mock_text.get_width.return_value = 100
    mock_text.get_height.return_value = 30
    mock_font = MagicMock()
    mock_font.render.return_value = mock_text
    mock_pygame.font.Font.return_value = mock_font

    # Drawing
    mock_pygame.draw.rect.return_value = None
    mock_pygame.draw.line.return_value = None

    # Events
    mock_pygame.event.get.return_value = []

    # Constants
    mock_pygame.QUIT = 256
    mock_pygame.KEYDOWN = 768
    mock_pygame.K_ESCAPE = 27
    mock_pygame.K_SPACE = 32
    mock_pygame.K_LEFT = 276
    mock_pygame.K_RIGHT = 275
    mock_pygame.K_a = 97
    mock_pygame.K_d = 100
    mock_pygame.K_p = 112
    mock_pygame.K_r = 114

    # Time
    mock_clock = MagicMock()
    mock_clock.tick.return_value = 16  # ~60fps
    mock_pygame.time.Clock.return_value = mock_clock
    mock_pygame.time.get_ticks.return_value = 0

    # Rect
    def make_rect(*args):
        x, y, width, height = (list(args) + [0, 0, 0, 0])[:4]
        return MagicMock(
            x=x, y=y, width=width, height=height,
            right=x + width, bottom=y + height,
        )

    mock_pygame.Rect = MagicMock(side_effect=make_rect)
    mock_pygame.Surface.return_value = mock_surface

    return mock_pygame


@pytest.fixture(scope="session", autouse=True)
def mock_pygame_module():
    """
    Session-scoped fixture that mocks pygame before any imports.

    This runs automatically for all tests and ensures pygame
    is mocked before any project modules are imported.
    """
    mock_pygame = create_mock_pygame()

    # Store original module if it exists
    original_pygame = sys.modules.get('pygame')

    # Install mock
    sys.modules['pygame'] = mock_pygame

    yield mock_pygame

    # Restore original (or remove mock)
    if original_pygame:
        sys.modules['pygame'] = original_pygame
    else:
        del sys.modules['pygame']


@pytest.fixture
def mock_surface(mock_pygame_module):
    """Provide a mock pygame surface."""
    surface = MagicMock()
    surface.get_width.return_value = 384
    surface.get_height.return_value = 512
    return surface


@pytest.fixture
def rng():
    """Seeded random source for deterministic invader fire."""
    return random.Random(1234)


@pytest.fixture
def config(mock_pygame_module):
    """Default simulation config."""
    from invaders.games.space_invaders.config import SpaceInvadersConfig

    return SpaceInvadersConfig()


@pytest.fixture
def quiet_config(mock_pygame_module):
    """Config with invader fire switched off, for tests that script every bullet."""
    from invaders.games.space_invaders.config import SpaceInvadersConfig

    return SpaceInvadersConfig(invader_fire_enabled=False)


@pytest.fixture
def sim_state(config):
    """Fresh simulation state: ship plus a full formation."""
    from invaders.games.space_invaders.round import SimulationState

    return SimulationState.create(config)


@pytest.fixture
def sample_config():
    """Provide sample configuration data for config loader tests."""
    return {
        'game': {
            'invader_rows': 3,
            'invader_cols': 4,
            'initial_move_interval': 0.5,
        },
        'visualization': {
            'window_width': 400,
            'window_height': 600,
        },
        'logging': {
            'level': 'DEBUG',
        },
    }
