"""
Bubble Shooter Environment - Gym-like wrapper implementing EnvInterface.
Encodes the board as a coarse colour grid plus projectile features.
"""

import random
import numpy as np
from typing import Tuple, Dict, Any, List, Optional

from ...core.env_interface import EnvInterface
from .config import BubbleShooterConfig
from .game import BubbleShooterGame

GRID_ROWS = 10
GRID_COLS = 9


class BubbleShooterEnv(EnvInterface):
    """
    Gym-like environment wrapper for the Bubble Shooter game.

    - reset() -> initial observation
    - step(action) -> (next_observation, reward, done, info)

    Each episode is one level. Actions fire at one of ``aim_actions`` angles
    or swap colours; a fire runs until the board settles.
    """

    def __init__(
        self,
        config: Optional[BubbleShooterConfig] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the environment.

        Args:
            config: Game configuration (defaults used when omitted)
            seed: Optional seed for level generation
        """
        self.config = config or BubbleShooterConfig()
        self.game = BubbleShooterGame(self.config, seed=seed)

    @property
    def state_size(self) -> int:
        """Grid cells, two colour one-hots, lowest edge and difficulty."""
        return GRID_ROWS * GRID_COLS + 2 * self.config.palette_size + 2

    @property
    def action_size(self) -> int:
        return self.game.action_space_size

    def reset(self, record: bool = False) -> np.ndarray:
        """
        Reset environment and return the initial observation.

        Args:
            record: If True, start recording for replay

        Returns:
            Initial observation as numpy array
        """
        self.game.reset()
        if record:
            self.game.start_recording()
        return self._get_state()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, Dict[str, Any]]:
        """
        Execute action and return results.

        Args:
            action: 0..aim_actions-1 fires, aim_actions swaps

        Returns:
            Tuple of (next_state, reward, done, info)
        """
        _, reward, done, info = self.game.step(action)
        return self._get_state(), reward, done, info

    def _get_state(self) -> np.ndarray:
        """
        Encode the board as a feature vector.

        Features:
        [0-89]: Ball colour per cell, (colour + 1) / palette, 0 for empty.
                10 rows over y in [0, 90), 9 columns over the level width
        [90-97]: Loaded projectile colour (one-hot)
        [98-105]: Next projectile colour (one-hot)
        [106]: Lowest ball edge / 90
        [107]: Difficulty / 20

        Returns:
            State as numpy array of shape (state_size,)
        """
        config = self.config
        board = self.game.board
        palette = config.palette_size

        grid = np.zeros((GRID_ROWS, GRID_COLS), dtype=np.float32)
        cell_height = config.danger_line / GRID_ROWS
        cell_width = config.level_width / GRID_COLS
        for ball in board.balls():
            if not 0 <= ball.y < config.danger_line:
                continue
            row = int(ball.y // cell_height)
            col = int((ball.x + config.level_width / 2) // cell_width)
            col = min(max(col, 0), GRID_COLS - 1)
            grid[row, col] = (ball.color + 1) / palette

        loaded = np.zeros(palette, dtype=np.float32)
        if board.projectile is not None:
            loaded[board.projectile.color % palette] = 1.0

        upcoming = np.zeros(palette, dtype=np.float32)
        upcoming[board.next_projectile_type % palette] = 1.0

        extras = np.array([
            board.lowest_ball_edge() / config.danger_line,
            board.difficulty / 20.0,
        ], dtype=np.float32)

        return np.concatenate([grid.ravel(), loaded, upcoming, extras])

    def get_game_state(self) -> Dict[str, Any]:
        """
        Get raw game state for visualization.

        Returns:
            Dictionary containing full game state
        """
        return self.game.get_state()

    def get_replay(self) -> List[Dict[str, Any]]:
        """
        Get the recorded game history.

        Returns:
            List of game state dictionaries
        """
        return self.game.stop_recording()

    def get_score(self) -> int:
        """Get current game score."""
        return self.game.get_score()

    def is_recording(self) -> bool:
        """Check if game is being recorded."""
        return self.game.recording

    def seed(self, seed: Optional[int] = None) -> None:
        """Reseed level generation and colour picks."""
        self.game.rng.seed(seed)

    def sample_action(self) -> int:
        """Uniformly random action."""
        return random.randrange(self.action_size)
