"""
Space Invaders Game Renderer - Pygame-based visualization implementing RendererInterface.
Draws the state snapshot returned by SpaceInvadersGame.get_state().
"""

import pygame
from typing import Dict, Any, Tuple, List, Optional

from ...core.renderer_interface import RendererInterface


BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GREEN = (0, 255, 0)
RED = (255, 0, 0)
CYAN = (0, 255, 255)
MAGENTA = (255, 0, 255)
YELLOW = (255, 255, 0)

SHIP_COLOR = GREEN
SHIP_BULLET_COLOR = GREEN
INVADER_BULLET_COLOR = MAGENTA
FLOOR_COLOR = (40, 40, 40)
HUD_COLOR = RED
TEXT_COLOR = WHITE

# Indexed by InvaderType
INVADER_COLORS = [MAGENTA, CYAN, YELLOW]


class SpaceInvadersRenderer(RendererInterface):
    """
    Renders Space Invaders using Pygame, implementing RendererInterface.

    The simulation's y axis points up; the renderer flips it to screen space.
    """

    def __init__(self, width: int = 768, height: int = 1024):
        """
        Initialize the renderer.

        Args:
            width: Playfield width in simulation units
            height: Playfield height in simulation units
        """
        self._base_width = width
        self._base_height = height
        self._scale = 1.0
        self._offset_x = 0
        self._offset_y = 0
        self._render_width = width
        self._render_height = height
        self._font: Optional[pygame.font.Font] = None

    def get_preferred_size(self) -> Tuple[int, int]:
        """Get the preferred render size (half scale fits most screens)."""
        return (self._base_width // 2, self._base_height // 2)

    def set_render_area(self, x: int, y: int, width: int, height: int) -> None:
        """Set the area where this renderer should draw."""
        self._offset_x = x
        self._offset_y = y
        self._scale = min(width / self._base_width, height / self._base_height)
        self._render_width = int(self._base_width * self._scale)
        self._render_height = int(self._base_height * self._scale)
        self._font = None  # Rebuilt at the new scale

    def _to_screen(self, x: float, y: float) -> Tuple[int, int]:
        """Map a simulation point to screen pixels."""
        return (
            int(self._offset_x + x * self._scale),
            int(self._offset_y + (self._base_height - y) * self._scale),
        )

    def _box_rect(self, entity: Dict[str, Any]) -> "pygame.Rect":
        """Screen rectangle of an entity's bounding box."""
        width = entity.get("width", 0)
        height = entity.get("height", 0)
        left, top = self._to_screen(entity.get("x", 0) - width / 2, entity.get("y", 0) + height / 2)
        return pygame.Rect(
            left,
            top,
            max(1, int(width * self._scale)),
            max(1, int(height * self._scale)),
        )

    def render(self, game_state: Dict[str, Any], surface: pygame.Surface) -> None:
        """
        Render the game state to a surface.

        Args:
            game_state: Dictionary containing game state
            surface: Pygame surface to draw on
        """
        bg_rect = pygame.Rect(
            self._offset_x,
            self._offset_y,
            self._render_width,
            self._render_height,
        )
        pygame.draw.rect(surface, BLACK, bg_rect)

        self._draw_floor(surface, game_state.get("floor_height", 0))
        self._draw_invaders(
            surface, game_state.get("invaders", []), game_state.get("formation_steps", 0)
        )

        ship = game_state.get("ship")
        if ship:
            pygame.draw.rect(surface, SHIP_COLOR, self._box_rect(ship))

        ship_bullet = game_state.get("ship_bullet")
        if ship_bullet:
            pygame.draw.rect(surface, SHIP_BULLET_COLOR, self._box_rect(ship_bullet))

        invader_bullet = game_state.get("invader_bullet")
        if invader_bullet:
            pygame.draw.rect(surface, INVADER_BULLET_COLOR, self._box_rect(invader_bullet))

        self._draw_hud(surface, game_state.get("score", 0))

        if game_state.get("game_over", False):
            self._draw_banner(surface, game_state.get("outcome", "lost"))
        elif game_state.get("paused", False):
            self._draw_text_centered(surface, "PAUSED", 0, TEXT_COLOR)

    def _draw_floor(self, surface: pygame.Surface, floor_height: float) -> None:
        """Draw the breach line."""
        start = self._to_screen(0, floor_height)
        end = self._to_screen(self._base_width, floor_height)
        pygame.draw.line(surface, FLOOR_COLOR, start, end, 1)

    def _draw_invaders(
        self, surface: pygame.Surface, invaders: List[Dict[str, Any]], steps: int
    ) -> None:
        """Draw all live invaders, alternating between two poses each formation step."""
        pose = steps % 2
        for invader in invaders:
            color = INVADER_COLORS[invader.get("type", 0) % len(INVADER_COLORS)]
            rect = self._box_rect(invader)
            pygame.draw.rect(surface, color, rect)

            # Legs alternate between spread and tucked
            leg = max(1, rect.height // 4)
            inset = 0 if pose == 0 else max(1, rect.width // 4)
            pygame.draw.rect(surface, BLACK, (rect.x + inset, rect.bottom - leg, leg, leg))
            pygame.draw.rect(
                surface, BLACK, (rect.right - inset - leg, rect.bottom - leg, leg, leg)
            )

    def _get_font(self) -> "pygame.font.Font":
        if self._font is None:
            self._font = pygame.font.Font(None, max(12, int(48 * self._scale)))
        return self._font

    def _draw_hud(self, surface: pygame.Surface, score: int) -> None:
        """Draw the score at the top of the playfield."""
        text = self._get_font().render(f"SCORE {score:04d}", True, HUD_COLOR)
        x = self._offset_x + self._render_width // 2 - text.get_width() // 2
        y = self._offset_y + int(60 * self._scale)
        surface.blit(text, (x, y))

    def _draw_banner(self, surface: pygame.Surface, outcome: str) -> None:
        """Draw the end-of-round banner."""
        if outcome == "won":
            self._draw_text_centered(surface, "YOU WIN", 0, GREEN)
        else:
            self._draw_text_centered(surface, "GAME OVER", 0, RED)

    def _draw_text_centered(self, surface: pygame.Surface, message: str, dy: int, color) -> None:
        text = self._get_font().render(message, True, color)
        x = self._offset_x + self._render_width // 2 - text.get_width() // 2
        y = self._offset_y + self._render_height // 2 - text.get_height() // 2 + dy
        surface.blit(text, (x, y))
