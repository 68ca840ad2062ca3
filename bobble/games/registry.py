"""
Game registry for Bobble.

Central registry for discovering and instantiating games.
Games register themselves when their module is imported.
"""

from typing import Dict, Type, List, Optional, Any
from ..core.game_interface import GameInterface, GameMetadata
from ..core.env_interface import EnvInterface
from ..core.renderer_interface import RendererInterface


class GameRegistry:
    """
    Central registry for all available games.

    Games register themselves by calling GameRegistry.register() in their
    __init__.py.
    """

    _games: Dict[str, Dict[str, Any]] = {}

    @classmethod
    def register(
        cls,
        game_class: Type[GameInterface],
        env_class: Type[EnvInterface],
        renderer_class: Type[RendererInterface],
        config_class: Optional[Type] = None
    ) -> None:
        """
        Register a game with the registry.

        Args:
            game_class: The game implementation class
            env_class: The environment wrapper class
            renderer_class: The renderer class
            config_class: Optional game-specific config class
        """
        metadata = game_class.get_metadata()
        cls._games[metadata.id] = {
            'game_class': game_class,
            'env_class': env_class,
            'renderer_class': renderer_class,
            'config_class': config_class,
            'metadata': metadata
        }

    @classmethod
    def get_game(cls, game_id: str) -> Optional[Dict[str, Any]]:
        """
        Get game components by ID.

        Args:
            game_id: The game identifier

        Returns:
            Dictionary with game classes, or None if not found
        """
        return cls._games.get(game_id)

    @classmethod
    def list_games(cls) -> List[GameMetadata]:
        """
        List all registered games.

        Returns:
            List of GameMetadata for all registered games
        """
        return [g['metadata'] for g in cls._games.values()]

    @classmethod
    def is_available(cls, game_id: str) -> bool:
        """
        Check if a game is registered.

        Args:
            game_id: The game identifier

        Returns:
            True if game is registered, False otherwise
        """
        return game_id in cls._games

    @classmethod
    def create_game(cls, game_id: str, **kwargs) -> GameInterface:
        """
        Create a game instance.

        Args:
            game_id: The game identifier
            **kwargs: Arguments to pass to the game constructor

        Returns:
            Game instance

        Raises:
            ValueError: If game is not registered
        """
        game_data = cls._games.get(game_id)
        if not game_data:
            raise ValueError(f"Unknown game: {game_id}")
        return game_data['game_class'](**kwargs)

    @classmethod
    def create_env(cls, game_id: str, **kwargs) -> EnvInterface:
        """
        Create an environment instance for a game.

        Args:
            game_id: The game identifier
            **kwargs: Arguments to pass to the environment constructor

        Returns:
            Environment instance

        Raises:
            ValueError: If game is not registered
        """
        game_data = cls._games.get(game_id)
        if not game_data:
            raise ValueError(f"Unknown game: {game_id}")
        return game_data['env_class'](**kwargs)

    @classmethod
    def create_renderer(cls, game_id: str, **kwargs) -> RendererInterface:
        """
        Create a renderer instance for a game.

        Args:
            game_id: The game identifier
            **kwargs: Arguments to pass to the renderer constructor

        Returns:
            Renderer instance

        Raises:
            ValueError: If game is not registered
        """
        game_data = cls._games.get(game_id)
        if not game_data:
            raise ValueError(f"Unknown game: {game_id}")
        return game_data['renderer_class'](**kwargs)

    @classmethod
    def build_config(cls, game_id: str, data: Optional[Dict[str, Any]] = None) -> Any:
        """
        Build a game's config object from a raw settings dictionary.

        Args:
            game_id: The game identifier
            data: The ``game`` section of the loaded YAML config

        Returns:
            Config instance, or None if the game has no config class

        Raises:
            ValueError: If game is not registered
        """
        game_data = cls._games.get(game_id)
        if not game_data:
            raise ValueError(f"Unknown game: {game_id}")
        config_class = game_data.get('config_class')
        if config_class is None:
            return None
        return config_class.from_dict(data or {})

    @classmethod
    def get_config_class(cls, game_id: str) -> Optional[Type]:
        """
        Get the config class for a game.

        Args:
            game_id: The game identifier

        Returns:
            Config class or None
        """
        game_data = cls._games.get(game_id)
        if game_data:
            return game_data.get('config_class')
        return None

    @classmethod
    def get_metadata(cls, game_id: str) -> Optional[GameMetadata]:
        """
        Get metadata for a game.

        Args:
            game_id: The game identifier

        Returns:
            GameMetadata or None if not found
        """
        game_data = cls._games.get(game_id)
        if game_data:
            return game_data.get('metadata')
        return None
