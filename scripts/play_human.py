#!/usr/bin/env python3
"""
Human Play Mode - Play Bubble Shooter yourself.

Controls:
    Left click: Aim (hold) and fire (release)
    Right click, or click below the danger line: Swap colours
    P: Pause
    M: Mute
    ESC: Menu while playing, otherwise quit
"""
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pygame
from bobble.core.services import MemoryPersistence
from bobble.games.registry import GameRegistry
from bobble.games.bubble_shooter import GamePhase
from bobble.games.bubble_shooter.audio import PygameAudio
from bobble.games.bubble_shooter.game import PRIMARY_BUTTON, SECONDARY_BUTTON
from bobble.games.bubble_shooter.persistence import JsonFilePersistence
from bobble.games.bubble_shooter.viewport import Viewport
from bobble.utils.config_loader import load_game_config

GAME_ID = "bubble_shooter"

# pygame mouse button numbers -> pointer buttons
MOUSE_BUTTONS = {1: PRIMARY_BUTTON, 3: SECONDARY_BUTTON}


def main():
    """Main entry point for human play mode."""
    config = load_game_config(GAME_ID)
    game_config = GameRegistry.build_config(GAME_ID, config.game)
    vis = config.visualization

    if config.logging.verbose:
        print(f"[Config] Window {vis.window_width}x{vis.window_height} at {vis.render_fps} fps")
        print(f"[Config] Game settings: {game_config.to_dict()}")

    pygame.init()
    screen = pygame.display.set_mode((vis.window_width, vis.window_height), pygame.RESIZABLE)
    pygame.display.set_caption("Bubble Shooter")

    audio = None
    if config.audio.enabled:
        audio = PygameAudio(config.audio.assets_dir, config.audio.volume)

    if config.persistence.enabled:
        persistence = JsonFilePersistence(config.persistence.save_path)
    else:
        persistence = MemoryPersistence()

    viewport = Viewport(
        vis.window_width, vis.window_height,
        world_height=game_config.level_height,
        padding_bottom=vis.padding_bottom,
    )
    game = GameRegistry.create_game(
        GAME_ID, config=game_config, audio=audio, persistence=persistence, viewport=viewport,
    )
    renderer = GameRegistry.create_renderer(
        GAME_ID, width=vis.window_width, height=vis.window_height, padding_bottom=vis.padding_bottom,
    )

    print("\n" + "=" * 50)
    print("Bubble Shooter - Human Mode")
    print("=" * 50)
    print("Controls:")
    print("  Left click: Aim and fire")
    print("  Right click: Swap colours")
    print("  P: Pause   M: Mute")
    print("  ESC: Menu / Quit")
    print("=" * 50 + "\n")

    running = True
    clock = pygame.time.Clock()
    fps_font = pygame.font.Font(None, 24)

    while running:
        dt = clock.tick(vis.render_fps)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    if game.phase == GamePhase.IDLE:
                        game.open_menu()
                    else:
                        running = False
                elif event.key == pygame.K_p:
                    game.toggle_pause()
                elif event.key == pygame.K_m:
                    game.toggle_mute()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in MOUSE_BUTTONS:
                game.pointer_down(*event.pos, MOUSE_BUTTONS[event.button])

            elif event.type == pygame.MOUSEMOTION:
                game.pointer_move(*event.pos, 1 if event.buttons[0] else 0)

            elif event.type == pygame.MOUSEBUTTONUP and event.button in MOUSE_BUTTONS:
                game.pointer_up(*event.pos, MOUSE_BUTTONS[event.button])

            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                viewport.resize(event.w, event.h)
                renderer.set_render_area(0, 0, event.w, event.h)

            elif event.type == pygame.WINDOWFOCUSLOST:
                game.set_hidden(True)

            elif event.type == pygame.WINDOWFOCUSGAINED:
                game.set_hidden(False)

        game.update(dt)
        renderer.render(game.get_state(), screen)

        if vis.show_fps:
            fps_text = fps_font.render(f"{clock.get_fps():.0f} fps", True, (150, 150, 150))
            screen.blit(fps_text, (5, screen.get_height() - 25))

        pygame.display.flip()

    print(f"Final score: {game.get_score()} (level {game.board.difficulty})")
    pygame.quit()


if __name__ == "__main__":
    main()
