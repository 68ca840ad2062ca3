"""
Tests for infrastructure components (GameRegistry, config loading,
persistence, sound pools and the viewport).

These tests verify that core infrastructure works correctly.
"""

import json

import pytest
from pathlib import Path

CONFIG_DIR = Path(__file__).parent.parent / "config"


class TestGameRegistry:
    """Tests for the GameRegistry class."""

    def test_registry_list_games(self, mock_pygame_module):
        """Test that registry lists available games."""
        from bobble.games.registry import GameRegistry

        games = GameRegistry.list_games()

        assert isinstance(games, list)
        game_ids = [g.id for g in games]
        assert 'bubble_shooter' in game_ids

    def test_registry_get_game(self, mock_pygame_module):
        """Test getting game components from registry."""
        from bobble.games.registry import GameRegistry
        from bobble.games.bubble_shooter import (
            BubbleShooterConfig,
            BubbleShooterEnv,
            BubbleShooterGame,
            BubbleShooterRenderer,
        )

        game_data = GameRegistry.get_game('bubble_shooter')

        assert game_data['game_class'] is BubbleShooterGame
        assert game_data['env_class'] is BubbleShooterEnv
        assert game_data['renderer_class'] is BubbleShooterRenderer
        assert game_data['config_class'] is BubbleShooterConfig

    def test_registry_unknown_game(self, mock_pygame_module):
        """Test that unknown games are reported, not guessed."""
        from bobble.games.registry import GameRegistry

        assert GameRegistry.get_game('nonexistent_game') is None
        assert not GameRegistry.is_available('nonexistent_game')
        assert GameRegistry.get_metadata('nonexistent_game') is None

        with pytest.raises(ValueError):
            GameRegistry.create_game('nonexistent_game')
        with pytest.raises(ValueError):
            GameRegistry.build_config('nonexistent_game', {})

    def test_registry_create_env(self, mock_pygame_module):
        """Test creating an environment through the registry."""
        from bobble.games.registry import GameRegistry

        env = GameRegistry.create_env('bubble_shooter', seed=3)

        assert env.reset().shape == (env.state_size,)

    def test_registry_build_config(self, mock_pygame_module):
        """Test that raw settings become a game config object."""
        from bobble.games.registry import GameRegistry

        config = GameRegistry.build_config('bubble_shooter', {'danger_line': 80})

        assert config.danger_line == 80
        assert config.ball_radius == 4.0

    def test_registry_create_game_and_renderer(self, mock_pygame_module):
        """Test building the playable pieces the way the play script does."""
        from bobble.games.registry import GameRegistry
        from bobble.games.bubble_shooter import BubbleShooterGame, BubbleShooterRenderer
        from bobble.games.bubble_shooter.viewport import Viewport

        viewport = Viewport(300, 600, padding_bottom=40)
        game = GameRegistry.create_game('bubble_shooter', seed=4, viewport=viewport)
        renderer = GameRegistry.create_renderer(
            'bubble_shooter', width=300, height=600, padding_bottom=40)

        assert isinstance(game, BubbleShooterGame)
        assert game.viewport is viewport
        assert isinstance(renderer, BubbleShooterRenderer)
        assert renderer.get_preferred_size() == (300, 600)
        assert renderer.viewport.offset_y == -40

        with pytest.raises(ValueError):
            GameRegistry.create_renderer('nonexistent_game')

    def test_metadata(self, mock_pygame_module):
        from bobble.games.registry import GameRegistry

        metadata = GameRegistry.get_metadata('bubble_shooter')

        assert metadata.name == "Bubble Shooter"
        assert metadata.supports_human


class TestBubbleShooterConfig:
    """Tests for the game config dataclass."""

    def test_from_dict_ignores_unknown_keys(self):
        from bobble.games.bubble_shooter.config import BubbleShooterConfig

        config = BubbleShooterConfig.from_dict({
            'projectile_speed': 0.1,
            'rewards': {'win': 10.0},
            'bogus': 1,
        })

        assert config.projectile_speed == 0.1
        assert config.reward_win == 10.0
        assert config.reward_fail == -50.0

    def test_to_dict_round_trip(self):
        from bobble.games.bubble_shooter.config import BubbleShooterConfig

        config = BubbleShooterConfig(magnet_strength=10.0, reward_shot=-1.0)

        assert BubbleShooterConfig.from_dict(config.to_dict()) == config

    @pytest.mark.parametrize("overrides", [
        {'ball_radius': 0},
        {'palette_size': 0},
        {'level_width': 6},
        {'aim_origin_y': 90},
        {'aim_actions': 0},
    ])
    def test_validate_rejects(self, overrides):
        from bobble.games.bubble_shooter.config import BubbleShooterConfig

        with pytest.raises(ValueError):
            BubbleShooterConfig(**overrides).validate()

    def test_game_validates_config(self, mock_pygame_module):
        from bobble.games.bubble_shooter.config import BubbleShooterConfig
        from bobble.games.bubble_shooter.game import BubbleShooterGame

        with pytest.raises(ValueError):
            BubbleShooterGame(BubbleShooterConfig(ball_radius=-1))


class TestConfigLoader:
    """Tests for configuration loading."""

    def test_load_game_config(self):
        """Test loading the shipped game config."""
        from bobble.utils.config_loader import load_game_config

        config = load_game_config('bubble_shooter', CONFIG_DIR)

        assert config.game['danger_line'] == 90
        assert config.game['rewards']['win'] == 50.0
        # Game file overrides the default save path
        assert config.persistence.save_path == 'saves/bubble_shooter.json'
        # Defaults survive the merge
        assert config.visualization.window_width == 450
        assert config.audio.volume == 0.2

    def test_game_overrides_default(self, tmp_path):
        from bobble.utils.config_loader import load_game_config

        (tmp_path / "games").mkdir()
        (tmp_path / "default.yaml").write_text(
            "visualization:\n  window_width: 300\n  render_fps: 30\n"
        )
        (tmp_path / "games" / "demo.yaml").write_text(
            "visualization:\n  render_fps: 120\ngame:\n  ball_radius: 5\n"
        )

        config = load_game_config('demo', tmp_path)

        assert config.visualization.window_width == 300
        assert config.visualization.render_fps == 120
        assert config.game == {'ball_radius': 5}

    def test_missing_config_uses_defaults(self, tmp_path, capsys):
        from bobble.utils.config_loader import load_game_config

        config = load_game_config('nothing', tmp_path)

        assert config.game == {}
        assert config.visualization.window_height == 1000
        assert "[Config]" in capsys.readouterr().out

    def test_save_and_load(self, tmp_path):
        from bobble.utils.config_loader import Config, load_config, save_config

        config = Config(game={'danger_line': 70})
        config.audio.enabled = False
        path = tmp_path / "nested" / "out.yaml"

        save_config(config, str(path))
        loaded = load_config(str(path))

        assert loaded.game == {'danger_line': 70}
        assert loaded.audio.enabled is False

    def test_load_missing_file(self, tmp_path):
        from bobble.utils.config_loader import load_config

        config = load_config(str(tmp_path / "absent.yaml"))

        assert config.logging.verbose is False

    def test_list_available_games(self):
        from bobble.utils.config_loader import list_available_games

        assert list_available_games(CONFIG_DIR) == ['bubble_shooter']

    def test_deep_merge_does_not_mutate(self):
        from bobble.utils.config_loader import _deep_merge

        base = {'a': {'b': 1, 'c': 2}}
        merged = _deep_merge(base, {'a': {'b': 5}})

        assert merged == {'a': {'b': 5, 'c': 2}}
        assert base == {'a': {'b': 1, 'c': 2}}


class TestPersistence:
    """Tests for the save-data backends."""

    def test_json_round_trip(self, tmp_path):
        from bobble.games.bubble_shooter.persistence import JsonFilePersistence

        path = tmp_path / "saves" / "progress.json"
        JsonFilePersistence(path).save_progress(4, 120)

        store = JsonFilePersistence(path)
        assert store.get_last_difficulty() == 4
        assert store.get_last_score() == 120
        assert json.loads(path.read_text()) == {'last_difficulty': 4, 'last_score': 120}

    def test_missing_file_is_fresh(self, tmp_path):
        from bobble.games.bubble_shooter.persistence import JsonFilePersistence

        store = JsonFilePersistence(tmp_path / "none.json")

        assert store.get_last_difficulty() == 0
        assert store.get_last_score() == 0

    def test_corrupt_file_is_fresh(self, tmp_path, capsys):
        from bobble.games.bubble_shooter.persistence import JsonFilePersistence

        path = tmp_path / "bad.json"
        path.write_text("{not json")

        store = JsonFilePersistence(path)

        assert store.get_last_difficulty() == 0
        assert "[Persistence]" in capsys.readouterr().out

    def test_non_numeric_values(self, tmp_path):
        from bobble.games.bubble_shooter.persistence import JsonFilePersistence

        path = tmp_path / "odd.json"
        path.write_text('{"last_difficulty": "three", "last_score": null}')

        store = JsonFilePersistence(path)

        assert store.get_last_difficulty() == 0
        assert store.get_last_score() == 0

    def test_memory_persistence(self):
        from bobble.core.services import MemoryPersistence

        store = MemoryPersistence(difficulty=2)
        store.save_progress(3, 40)

        assert store.snapshot() == (3, 40)
        assert store.get_last_difficulty() == 3


class TestSoundBank:
    """Tests for round-robin sound pools."""

    def test_round_robin(self, recording_audio):
        from bobble.games.bubble_shooter.sounds import SoundBank

        bank = SoundBank(recording_audio, {'meow': ['a', 'b']})

        handles = [bank.play_meow() for _ in range(3)]

        assert handles == ['a', 'b', 'a']
        assert recording_audio.played == [('a', 0.0), ('b', 0.0), ('a', 0.0)]

    def test_delay_is_passed_through(self, recording_audio):
        from bobble.games.bubble_shooter.sounds import SoundBank

        bank = SoundBank(recording_audio)
        bank.play_impact(delay_ms=75)

        assert recording_audio.played == [('impactGlass_light_000', 75)]

    def test_muted(self, recording_audio):
        from bobble.games.bubble_shooter.sounds import SoundBank

        bank = SoundBank(recording_audio)
        bank.muted = True

        assert bank.play_meow() is None
        assert recording_audio.played == []

    def test_unknown_and_empty_pools(self, recording_audio):
        from bobble.games.bubble_shooter.sounds import SoundBank

        bank = SoundBank(recording_audio, {'impact': []})

        assert bank.play_impact() is None
        assert bank.play_meow() is None
        assert recording_audio.played == []

    def test_default_pools(self):
        from bobble.games.bubble_shooter.sounds import IMPACT_SOUNDS, MEOW_SOUNDS

        assert len(IMPACT_SOUNDS) == 10
        assert MEOW_SOUNDS[0] == 'meow1'
        assert MEOW_SOUNDS[-1] == 'meow19'


class TestViewport:
    """Tests for the world/screen transform."""

    def test_world_to_screen(self):
        from bobble.games.bubble_shooter.viewport import Viewport

        viewport = Viewport(450, 1000)

        assert viewport.scale == 10
        assert viewport.world_to_screen(0, 0) == (225, 0)
        assert viewport.world_to_screen(-22.5, 100) == (0, 1000)

    def test_screen_to_world_inverts(self):
        from bobble.games.bubble_shooter.viewport import Viewport

        viewport = Viewport(450, 1000, padding_bottom=20)

        assert viewport.world_to_screen(0, 50) == (225, 480)
        assert viewport.screen_to_world(225, 480) == (0, 50)

    def test_sizes(self):
        from bobble.games.bubble_shooter.viewport import Viewport

        viewport = Viewport(450, 1000)

        assert viewport.size_world_to_screen(4, 8) == (40, 80)
        assert viewport.size_screen_to_world(40, 80) == (4, 8)

    def test_resize(self):
        from bobble.games.bubble_shooter.viewport import Viewport

        viewport = Viewport(450, 1000)
        viewport.resize(225, 500)

        assert viewport.scale == 5
        assert viewport.offset_x == 112.5
