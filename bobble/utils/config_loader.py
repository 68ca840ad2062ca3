"""
Configuration Loader - Load configuration from YAML.

Supports hierarchical configuration:
- config/default.yaml - Global settings
- config/games/{game_id}.yaml - Per-game settings

Game-specific settings override defaults. The ``game`` section is kept as a
raw dictionary and handed to the game's own config class (for example
``BubbleShooterConfig.from_dict``).
"""
import yaml
from pathlib import Path
from typing import Optional, Any, Dict, List
from dataclasses import dataclass, field, asdict
from copy import deepcopy


@dataclass
class VisualizationConfig:
    """Window settings."""
    window_width: int = 450
    window_height: int = 1000
    render_fps: int = 60
    padding_bottom: float = 0.0
    show_fps: bool = False


@dataclass
class AudioConfig:
    """Sound settings."""
    enabled: bool = True
    assets_dir: str = "assets/sounds"
    volume: float = 0.2


@dataclass
class PersistenceConfig:
    """Save file settings."""
    enabled: bool = True
    save_path: str = "saves/bubble_shooter.json"


@dataclass
class LoggingConfig:
    """Console output settings."""
    verbose: bool = False


@dataclass
class Config:
    """Complete application configuration."""
    game: Dict[str, Any] = field(default_factory=dict)
    visualization: VisualizationConfig = field(default_factory=VisualizationConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    persistence: PersistenceConfig = field(default_factory=PersistenceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _dict_to_dataclass(data: dict, cls: type) -> Any:
    """Convert a dictionary to a dataclass instance."""
    if not data:
        return cls()

    # Get the fields that the dataclass expects
    field_names = {f.name for f in cls.__dataclass_fields__.values()}

    # Filter to only include valid fields
    filtered_data = {k: v for k, v in data.items() if k in field_names}

    return cls(**filtered_data)


def _build_config(data: Dict[str, Any]) -> Config:
    """Build a Config from a parsed YAML mapping."""
    config = Config()

    if isinstance(data.get('game'), dict):
        config.game = deepcopy(data['game'])

    if 'visualization' in data:
        config.visualization = _dict_to_dataclass(data['visualization'], VisualizationConfig)

    if 'audio' in data:
        config.audio = _dict_to_dataclass(data['audio'], AudioConfig)

    if 'persistence' in data:
        config.persistence = _dict_to_dataclass(data['persistence'], PersistenceConfig)

    if 'logging' in data:
        config.logging = _dict_to_dataclass(data['logging'], LoggingConfig)

    return config


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from a single YAML file.

    Args:
        config_path: Path to config file (defaults to config/default.yaml)

    Returns:
        Config object with all settings
    """
    if config_path is None:
        config_path = str(_find_config_dir() / "default.yaml")

    if not Path(config_path).exists():
        print(f"[Config] No config file at {config_path}, using defaults")
        return Config()

    data = _load_yaml_file(Path(config_path))
    return _build_config(data)


def save_config(config: Config, config_path: str):
    """
    Save configuration to a YAML file.

    Args:
        config: Config object to save
        config_path: Path to save to
    """
    data = asdict(config)

    Path(config_path).parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries, with override values taking precedence.

    Args:
        base: Base dictionary
        override: Dictionary with values to override

    Returns:
        Merged dictionary
    """
    result = deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


def _find_config_dir() -> Path:
    """Find the config directory."""
    possible_paths = [
        Path("config"),
        Path(__file__).parent.parent.parent / "config",
    ]

    for path in possible_paths:
        if path.exists() and path.is_dir():
            return path

    # Fallback to project root config folder
    return Path(__file__).parent.parent.parent / "config"


def _load_yaml_file(path: Path) -> Dict:
    """Load a YAML file, returning empty dict if not found."""
    if not path.exists():
        return {}

    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    return data if isinstance(data, dict) else {}


def load_game_config(game_id: str, config_dir: Optional[Path] = None) -> Config:
    """
    Load configuration for a specific game.

    Merges default settings with game-specific settings.
    Game settings override defaults.

    Args:
        game_id: The game identifier (e.g., "bubble_shooter")
        config_dir: Directory holding default.yaml and games/ (searched when omitted)

    Returns:
        Config object with merged settings
    """
    if config_dir is None:
        config_dir = _find_config_dir()

    default_data = _load_yaml_file(config_dir / "default.yaml")
    game_data = _load_yaml_file(config_dir / "games" / f"{game_id}.yaml")

    # Merge configs (game overrides default)
    merged_data = _deep_merge(default_data, game_data)

    if not merged_data:
        print(f"[Config] No config found for game '{game_id}', using defaults")
        return Config()

    return _build_config(merged_data)


def list_available_games(config_dir: Optional[Path] = None) -> List[str]:
    """
    List all games that have configuration files.

    Returns:
        List of game IDs
    """
    if config_dir is None:
        config_dir = _find_config_dir()
    games_dir = config_dir / "games"

    if not games_dir.exists():
        return []

    return sorted(
        p.stem for p in games_dir.glob("*.yaml")
        if p.is_file()
    )
