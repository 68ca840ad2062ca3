"""
Core abstractions for Bobble.

Provides the interfaces games, environments, renderers and host services implement.
"""

from .game_interface import GameInterface, GameMetadata
from .env_interface import EnvInterface
from .renderer_interface import RendererInterface
from .services import (
    AudioInterface,
    PersistenceInterface,
    PlatformInterface,
    NullAudio,
    NullPlatform,
    MemoryPersistence,
)

__all__ = [
    'GameInterface',
    'GameMetadata',
    'EnvInterface',
    'RendererInterface',
    'AudioInterface',
    'PersistenceInterface',
    'PlatformInterface',
    'NullAudio',
    'NullPlatform',
    'MemoryPersistence',
]
