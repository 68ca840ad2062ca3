"""
Bubble Shooter game module for Bobble.

This module auto-registers the Bubble Shooter game when imported.
"""

from ..registry import GameRegistry
from .game import BubbleShooterGame, GamePhase
from .env import BubbleShooterEnv
from .renderer import BubbleShooterRenderer
from .config import BubbleShooterConfig
from .board import BoardState
from .resolution import TurnResult, resolve_turn

# Auto-register Bubble Shooter when this module is imported
GameRegistry.register(
    game_class=BubbleShooterGame,
    env_class=BubbleShooterEnv,
    renderer_class=BubbleShooterRenderer,
    config_class=BubbleShooterConfig
)

__all__ = [
    'BubbleShooterGame',
    'BubbleShooterEnv',
    'BubbleShooterRenderer',
    'BubbleShooterConfig',
    'BoardState',
    'GamePhase',
    'TurnResult',
    'resolve_turn',
]
