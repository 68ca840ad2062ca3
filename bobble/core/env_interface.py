"""
Abstract environment interface for Bobble.

Gives agents and evaluation scripts a Gym-like view of a game.
"""

from abc import ABC, abstractmethod
from typing import Tuple, Dict, Any, List, Optional
import numpy as np


class EnvInterface(ABC):
    """
    Abstract environment interface (Gym-like).

    Environments wrap games and encode their state as fixed-size vectors.
    """

    @property
    @abstractmethod
    def state_size(self) -> int:
        """Length of the observation vector."""
        pass

    @property
    @abstractmethod
    def action_size(self) -> int:
        """Number of possible actions."""
        pass

    @abstractmethod
    def reset(self, record: bool = False) -> np.ndarray:
        """
        Start a new episode.

        Args:
            record: Whether to record this episode for replay

        Returns:
            Initial observation as numpy array
        """
        pass

    @abstractmethod
    def step(self, action: int) -> Tuple[np.ndarray, float, bool, Dict[str, Any]]:
        """
        Execute one environment step.

        Returns:
            Tuple of (observation, reward, done, info)
        """
        pass

    @abstractmethod
    def get_game_state(self) -> Dict[str, Any]:
        """Raw game state for rendering."""
        pass

    def get_replay(self) -> List[Dict[str, Any]]:
        """Recorded frames if recording was enabled."""
        return []

    def close(self) -> None:
        pass

    def seed(self, seed: Optional[int] = None) -> None:
        """
        Set random seed for reproducibility.

        Args:
            seed: Random seed value
        """
        pass
