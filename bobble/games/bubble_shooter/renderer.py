"""
Bubble Shooter Renderer - Pygame-based visualization implementing RendererInterface.
"""

import math
import pygame
from typing import Dict, Any, List, Optional, Tuple

from ...core.renderer_interface import RendererInterface
from .entities import EntityKind
from .viewport import Viewport


# Colors
BACKGROUND_COLOR = (24, 26, 40)
WALL_COLOR = (50, 54, 80)
DANGER_COLOR = (200, 60, 60)
TRAJECTORY_COLOR = (200, 200, 220)
TEXT_COLOR = (235, 235, 235)
OVERLAY_COLOR = (10, 10, 20)
BUTTON_COLOR = (70, 90, 150)
BUTTON_TEXT_COLOR = (250, 250, 250)

# Indexed by ball colour type
BALL_COLORS: List[Tuple[int, int, int]] = [
    (230, 70, 70),    # red
    (240, 150, 50),   # orange
    (70, 120, 230),   # blue
    (80, 200, 100),   # green
    (160, 90, 210),   # purple
    (240, 220, 70),   # yellow
    (70, 210, 220),   # cyan
    (240, 130, 190),  # pink
]

OVERLAY_TEXT = {
    "START": "Tap to start",
    "WIN": "Level cleared!",
    "FAIL": "Too low! Try again",
}

BUTTON_LABELS = {
    "continue": "Continue",
    "new_game": "New game",
    "menu": "=",
    "pause": "||",
    "mute": "M",
}

NEXT_PREVIEW_POS = (-7.0, 95.0)


def blend(color: Tuple[int, int, int], alpha: float,
          background: Tuple[int, int, int] = BACKGROUND_COLOR) -> Tuple[int, int, int]:
    """Mix a colour toward the background for faded entities."""
    alpha = max(0.0, min(1.0, alpha))
    return tuple(int(b + (c - b) * alpha) for c, b in zip(color, background))


class BubbleShooterRenderer(RendererInterface):
    """
    Renders the Bubble Shooter game using Pygame, implementing RendererInterface.

    World coordinates from the state dictionary are mapped to pixels through
    a Viewport sized to the render area.
    """

    def __init__(self, width: int = 450, height: int = 1000, padding_bottom: float = 0.0):
        """
        Initialize the renderer.

        Args:
            width: Render area width in pixels
            height: Render area height in pixels
            padding_bottom: Pixels reserved below the board for host UI
        """
        self._offset_x = 0
        self._offset_y = 0
        self.viewport = Viewport(width, height, padding_bottom=padding_bottom)
        self._font: Optional[pygame.font.Font] = None
        self._large_font: Optional[pygame.font.Font] = None

    def get_preferred_size(self) -> Tuple[int, int]:
        """Get the preferred render size."""
        return (int(self.viewport.width), int(self.viewport.height))

    def set_render_area(self, x: int, y: int, width: int, height: int) -> None:
        """Set the area where this renderer should draw."""
        self._offset_x = x
        self._offset_y = y
        self.viewport.resize(width, height)
        self._font = None
        self._large_font = None

    def _to_screen(self, x: float, y: float) -> Tuple[int, int]:
        sx, sy = self.viewport.world_to_screen(x, y)
        return (int(self._offset_x + sx), int(self._offset_y + sy))

    def _to_pixels(self, size: float) -> int:
        return max(1, int(self.viewport.size_world_to_screen(size, size)[0]))

    def _fonts(self) -> None:
        if self._font is None:
            self._font = pygame.font.Font(None, self._to_pixels(4))
            self._large_font = pygame.font.Font(None, self._to_pixels(7))

    def render(self, game_state: Dict[str, Any], surface: pygame.Surface) -> None:
        """
        Render the game state to a surface.

        Args:
            game_state: Dictionary from BubbleShooterGame.get_state()
            surface: Pygame surface to draw on
        """
        self._fonts()
        world_height = game_state.get("level_height", self.viewport.world_height)
        if world_height != self.viewport.world_height:
            self.viewport.world_height = world_height

        self._draw_background(surface, game_state)

        for entity in game_state["entities"]:
            self._draw_entity(surface, entity)

        self._draw_trajectory(surface, game_state.get("trajectory", []))
        self._draw_next_preview(surface, game_state)
        self._draw_hud(surface, game_state)
        self._draw_overlay(surface, game_state)

        for button in game_state.get("buttons", []):
            self._draw_button(surface, button)

    def _draw_background(self, surface: pygame.Surface, game_state: Dict[str, Any]) -> None:
        surface.fill(BACKGROUND_COLOR)

        half_width = game_state["level_width"] / 2
        height = game_state["level_height"]
        for x in (-half_width, half_width):
            pygame.draw.line(surface, WALL_COLOR, self._to_screen(x, 0), self._to_screen(x, height), 2)

        danger = game_state["danger_line"]
        pygame.draw.line(
            surface, DANGER_COLOR,
            self._to_screen(-half_width, danger), self._to_screen(half_width, danger), 1,
        )

    def _draw_entity(self, surface: pygame.Surface, entity: Dict[str, Any]) -> None:
        """Draw one entity; grid balls include their wobble offset."""
        color = BALL_COLORS[entity["color"] % len(BALL_COLORS)]
        color = blend(color, entity.get("alpha", 1.0))
        x = entity["x"] + entity.get("offset_x", 0.0)
        y = entity["y"] + entity.get("offset_y", 0.0)
        center = self._to_screen(x, y)
        radius = self._to_pixels(entity["radius"])

        pygame.draw.circle(surface, color, center, radius)

        kind = entity["kind"]
        if kind == EntityKind.PARTICLE:
            return

        # Highlight
        highlight = blend((255, 255, 255), 0.35, color)
        pygame.draw.circle(
            surface, highlight,
            (center[0] - radius // 3, center[1] - radius // 3), max(1, radius // 3),
        )

        if kind == EntityKind.PROJECTILE:
            # Spin marker
            angle = entity.get("angle", 0.0)
            tip = (
                int(center[0] + math.cos(angle) * radius * 0.7),
                int(center[1] + math.sin(angle) * radius * 0.7),
            )
            pygame.draw.line(surface, TEXT_COLOR, center, tip, 2)

    def _draw_trajectory(self, surface: pygame.Surface, points: List[List[float]]) -> None:
        dot_radius = self._to_pixels(0.5)
        for x, y in points:
            pygame.draw.circle(surface, TRAJECTORY_COLOR, self._to_screen(x, y), dot_radius)

    def _draw_next_preview(self, surface: pygame.Surface, game_state: Dict[str, Any]) -> None:
        next_type = game_state.get("next_projectile_type")
        if next_type is None or game_state.get("projectile") is None:
            return
        color = BALL_COLORS[next_type % len(BALL_COLORS)]
        radius = self._to_pixels(game_state["ball_radius"] * 0.6)
        pygame.draw.circle(surface, color, self._to_screen(*NEXT_PREVIEW_POS), radius)

    def _draw_hud(self, surface: pygame.Surface, game_state: Dict[str, Any]) -> None:
        """Score (six digits) and level number."""
        half_width = game_state["level_width"] / 2

        score_text = self._font.render(f"{game_state['score']:06d}", True, TEXT_COLOR)
        score_rect = score_text.get_rect()
        score_rect.topright = self._to_screen(half_width - 1, 3)
        surface.blit(score_text, score_rect)

        level_text = self._font.render(f"Level {game_state['difficulty']}", True, TEXT_COLOR)
        level_rect = level_text.get_rect()
        level_rect.topright = self._to_screen(half_width - 1, 8)
        surface.blit(level_text, level_rect)

    def _draw_overlay(self, surface: pygame.Surface, game_state: Dict[str, Any]) -> None:
        phase = game_state["phase_name"]
        if game_state.get("paused"):
            message = "Paused"
        else:
            message = OVERLAY_TEXT.get(phase)
        if message is None:
            return

        text = self._large_font.render(message, True, TEXT_COLOR)
        text_rect = text.get_rect()
        text_rect.center = self._to_screen(0, game_state["level_height"] / 2)

        backdrop = pygame.Rect(0, 0, int(self.viewport.width), self._to_pixels(12))
        backdrop.center = text_rect.center
        pygame.draw.rect(surface, OVERLAY_COLOR, backdrop)
        surface.blit(text, text_rect)

    def _draw_button(self, surface: pygame.Surface, button: Dict[str, Any]) -> None:
        left, top = self._to_screen(button["x"], button["y"])
        width, height = self.viewport.size_world_to_screen(button["width"], button["height"])
        rect = pygame.Rect(left, top, int(width), int(height))
        pygame.draw.rect(surface, BUTTON_COLOR, rect, border_radius=6)

        label = self._font.render(BUTTON_LABELS.get(button["name"], button["name"]), True, BUTTON_TEXT_COLOR)
        label_rect = label.get_rect()
        label_rect.center = rect.center
        surface.blit(label, label_rect)
