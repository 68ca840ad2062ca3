"""
Tests for the Bubble Shooter environment wrapper.
"""

import numpy as np
import pytest


class TestBubbleShooterEnv:
    """Tests for observation encoding and the Gym-like API."""

    def test_sizes(self, mock_pygame_module):
        from bobble.games.bubble_shooter.env import BubbleShooterEnv

        env = BubbleShooterEnv(seed=1)

        assert env.state_size == 108
        assert env.action_size == 16

    def test_reset_observation(self, mock_pygame_module):
        from bobble.games.bubble_shooter.env import BubbleShooterEnv

        env = BubbleShooterEnv(seed=1)
        obs = env.reset()

        assert obs.shape == (env.state_size,)
        assert obs.dtype == np.float32
        assert np.all(obs >= 0.0)
        assert np.all(obs <= 1.0)
        assert obs[107] == pytest.approx(1 / 20)

    def test_grid_cell_encoding(self, mock_pygame_module, place_ball):
        from bobble.games.bubble_shooter.entities import EntityKind
        from bobble.games.bubble_shooter.env import BubbleShooterEnv

        env = BubbleShooterEnv(seed=1)
        env.reset()
        board = env.game.board
        board.entities = [e for e in board.entities if e.kind == EntityKind.PROJECTILE]
        place_ball(board, 0, 2, color=3)  # (0, 20): row 2, column 4

        obs = env._get_state()

        assert obs[2 * 9 + 4] == pytest.approx(4 / 8)
        assert np.count_nonzero(obs[:90]) == 1
        assert obs[106] == pytest.approx(24 / 90)

    def test_projectile_one_hots(self, mock_pygame_module):
        from bobble.games.bubble_shooter.env import BubbleShooterEnv

        env = BubbleShooterEnv(seed=1)
        env.reset()
        env.game.board.projectile.color = 5
        env.game.board.next_projectile_type = 2

        obs = env._get_state()

        assert obs[90 + 5] == 1.0
        assert obs[90:98].sum() == 1.0
        assert obs[98 + 2] == 1.0
        assert obs[98:106].sum() == 1.0

    def test_step(self, mock_pygame_module):
        from bobble.games.bubble_shooter.env import BubbleShooterEnv

        env = BubbleShooterEnv(seed=1)
        env.reset()

        obs, reward, done, info = env.step(7)

        assert obs.shape == (108,)
        assert isinstance(reward, float)
        assert isinstance(done, bool)
        assert "score" in info

    def test_seeded_envs_match(self, mock_pygame_module):
        from bobble.games.bubble_shooter.env import BubbleShooterEnv

        a = BubbleShooterEnv(seed=9)
        b = BubbleShooterEnv(seed=9)

        np.testing.assert_array_equal(a.reset(), b.reset())

    def test_replay_recording(self, mock_pygame_module):
        from bobble.games.bubble_shooter.env import BubbleShooterEnv

        env = BubbleShooterEnv(seed=1)
        env.reset(record=True)
        assert env.is_recording()

        env.step(7)
        replay = env.get_replay()

        assert len(replay) > 1
        assert "entities" in replay[0]
        assert not env.is_recording()

    def test_game_state_passthrough(self, mock_pygame_module):
        from bobble.games.bubble_shooter.env import BubbleShooterEnv

        env = BubbleShooterEnv(seed=1)
        env.reset()

        state = env.get_game_state()

        assert state["score"] == env.get_score()
        assert state["balls_remaining"] == 27

    def test_seed_resets_generator(self, mock_pygame_module):
        from bobble.games.bubble_shooter.env import BubbleShooterEnv

        env = BubbleShooterEnv(seed=1)
        env.seed(42)
        first = env.reset()
        env.seed(42)
        second = env.reset()

        np.testing.assert_array_equal(first, second)

    def test_sample_action_in_range(self, mock_pygame_module):
        from bobble.games.bubble_shooter.env import BubbleShooterEnv

        env = BubbleShooterEnv(seed=1)

        for _ in range(50):
            assert env.game.is_valid_action(env.sample_action())
