#!/usr/bin/env python3
"""
Human Play Mode - Play Space Invaders yourself.

Controls:
    Left/Right or A/D: Move the ship
    Space: Fire
    P: Pause / resume
    R: Restart round
    ESC: Quit
"""
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pygame
from invaders.core.collaborators import SceneRouter
from invaders.games.registry import GameRegistry
from invaders.utils.config_loader import load_game_config
from invaders.utils.high_scores import JsonHighScoreStore, MemoryHighScoreStore
from invaders.utils.logging_setup import setup_logging

GAME_ID = "space_invaders"


class ConsoleRouter(SceneRouter):
    """Announces the round outcome on the console."""

    def present_outcome(self, outcome) -> None:
        print(f"[Round] {outcome.value.upper()}")


def keyboard_velocity(keys) -> float:
    """
    Normalized horizontal velocity from the keyboard.

    The simulation moves the ship by -velocity, so left is positive.
    """
    velocity = 0.0
    if keys[pygame.K_LEFT] or keys[pygame.K_a]:
        velocity += 1.0
    if keys[pygame.K_RIGHT] or keys[pygame.K_d]:
        velocity -= 1.0
    return velocity


def main():
    """Main entry point for human play mode."""
    config = load_game_config(GAME_ID)
    setup_logging(config.logging)

    if config.high_scores.enabled:
        store = JsonHighScoreStore(config.high_scores.path)
    else:
        store = MemoryHighScoreStore()

    game = GameRegistry.create_game(
        GAME_ID,
        config=config.game,
        router=ConsoleRouter(),
        score_store=store,
    )
    renderer = GameRegistry.create_renderer(
        GAME_ID, width=int(config.game.width), height=int(config.game.height)
    )

    pygame.init()
    window_size = (config.visualization.window_width, config.visualization.window_height)
    surface = pygame.display.set_mode(window_size)
    pygame.display.set_caption("Space Invaders - Human Mode")
    renderer.set_render_area(0, 0, *window_size)

    print("\n" + "=" * 50)
    print("Space Invaders - Human Mode")
    print("=" * 50)
    print("Controls:")
    print("  Left/Right or A/D: Move")
    print("  Space: Fire")
    print("  P: Pause")
    print("  R: Restart")
    print("  ESC: Quit")
    print(f"High Score: {store.get_best()}")
    print("=" * 50 + "\n")

    running = True
    clock = pygame.time.Clock()

    while running:
        now = pygame.time.get_ticks() / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    game.reset()
                elif event.key == pygame.K_p:
                    if game.paused:
                        game.resume(now)
                    else:
                        game.pause(now)
                elif event.key == pygame.K_SPACE:
                    game.queue_fire()

        game.set_velocity(keyboard_velocity(pygame.key.get_pressed()))
        state, _, _ = game.step(now)

        surface.fill((0, 0, 0))
        renderer.render(state, surface)
        pygame.display.flip()
        clock.tick(config.visualization.render_fps)

    pygame.quit()
    print(f"\nFinal Score: {game.get_score()} | High Score: {store.get_best()}")


if __name__ == "__main__":
    main()
