"""
Abstract game interface for Bobble.

All games must implement GameInterface and provide GameMetadata.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, Tuple, List


@dataclass
class GameMetadata:
    """Metadata describing a game."""

    name: str                           # Display name (e.g., "Bubble Shooter")
    id: str                             # Unique identifier (e.g., "bubble_shooter")
    description: str                    # Brief description for menus and logs
    version: str = "1.0.0"              # Game version
    min_players: int = 1                # Minimum players
    max_players: int = 1                # Maximum players
    supports_human: bool = True         # Can humans play?


class GameInterface(ABC):
    """
    Abstract base class for all games in Bobble.

    A game owns its rules and state. Real-time hosts drive it with
    ``update(dt)``; agents drive it with ``step(action)``, which may run
    many frames internally.
    """

    @classmethod
    @abstractmethod
    def get_metadata(cls) -> GameMetadata:
        """
        Return metadata about this game.

        Returns:
            GameMetadata describing the game
        """
        pass

    @abstractmethod
    def reset(self) -> Dict[str, Any]:
        """
        Reset the game to initial state.

        Returns:
            Initial game state dictionary
        """
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """
        Advance the simulation by one display frame.

        Args:
            dt: Milliseconds elapsed since the previous frame
        """
        pass

    @abstractmethod
    def step(self, action: int) -> Tuple[Dict[str, Any], float, bool, Dict[str, Any]]:
        """
        Execute one decision with the given action.

        Args:
            action: The action to take (game-specific encoding)

        Returns:
            Tuple of (state, reward, done, info)
            - state: Current game state dictionary
            - reward: Reward for this step
            - done: Whether the level ended
            - info: Additional information dictionary
        """
        pass

    @abstractmethod
    def get_state(self) -> Dict[str, Any]:
        """
        Get the current game state for rendering.

        Returns:
            Dictionary containing all state needed for rendering
        """
        pass

    @abstractmethod
    def is_valid_action(self, action: int) -> bool:
        """
        Check if an action is valid.

        Args:
            action: The action to check

        Returns:
            True if action is valid, False otherwise
        """
        pass

    @property
    @abstractmethod
    def action_space_size(self) -> int:
        """
        Number of possible actions in this game.

        Returns:
            Size of the action space
        """
        pass

    @property
    @abstractmethod
    def action_names(self) -> List[str]:
        """
        Human-readable names for each action.

        Returns:
            List of action names indexed by action number
        """
        pass

    # Optional recording support
    def start_recording(self) -> None:
        """Start recording game frames for replay."""
        pass

    def stop_recording(self) -> List[Dict[str, Any]]:
        """
        Stop recording and return recorded frames.

        Returns:
            List of frame dictionaries
        """
        return []

    def get_score(self) -> int:
        """
        Get the current score.

        Returns:
            Current game score
        """
        return 0
