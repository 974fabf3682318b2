"""
Configuration Loader - Load and validate configuration from YAML.

Supports hierarchical configuration:
- config/default.yaml - Global settings
- config/games/{game_id}.yaml - Per-game settings

Game-specific settings override defaults.
"""
import logging
import yaml
from pathlib import Path
from typing import Optional, Any, Dict
from dataclasses import dataclass, field, asdict
from copy import deepcopy

from ..games.space_invaders.config import SpaceInvadersConfig

logger = logging.getLogger(__name__)


@dataclass
class VisualizationConfig:
    """Visualization settings."""
    window_width: int = 384
    window_height: int = 512
    render_fps: int = 60


@dataclass
class HighScoreConfig:
    """High score persistence settings."""
    enabled: bool = True
    path: str = "data/high_score.json"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class Config:
    """Complete application configuration."""
    game: SpaceInvadersConfig = field(default_factory=SpaceInvadersConfig)
    visualization: VisualizationConfig = field(default_factory=VisualizationConfig)
    high_scores: HighScoreConfig = field(default_factory=HighScoreConfig)
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


def _build_config(data: Dict) -> Config:
    """Build a Config object from parsed YAML data."""
    config = Config()

    if 'game' in data:
        config.game = SpaceInvadersConfig.from_dict(data['game'])

    if 'visualization' in data:
        config.visualization = _dict_to_dataclass(data['visualization'], VisualizationConfig)

    if 'high_scores' in data:
        config.high_scores = _dict_to_dataclass(data['high_scores'], HighScoreConfig)

    if 'logging' in data:
        config.logging = _dict_to_dataclass(data['logging'], LoggingConfig)

    return config


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to config file (defaults to project root config.yaml)

    Returns:
        Config object with all settings
    """
    # Find config file
    if config_path is None:
        possible_paths = [
            Path("config.yaml"),
            Path(__file__).parent.parent.parent / "config.yaml",
        ]

        for path in possible_paths:
            if path.exists():
                config_path = str(path)
                break

    if config_path is None or not Path(config_path).exists():
        logger.info("No config file found, using defaults")
        return Config()

    data = _load_yaml_file(Path(config_path))
    if not data:
        return Config()

    return _build_config(data)


def save_config(config: Config, config_path: str):
    """
    Save configuration to a YAML file.

    Args:
        config: Config object to save
        config_path: Path to save to
    """
    data = asdict(config)

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

    return data if data else {}


def load_game_config(game_id: str, config_dir: Optional[Path] = None) -> Config:
    """
    Load configuration for a specific game.

    Merges default settings with game-specific settings.
    Game settings override defaults.

    Args:
        game_id: The game identifier (e.g., "space_invaders")
        config_dir: Directory holding default.yaml and games/ (searched if omitted)

    Returns:
        Config object with merged settings
    """
    config_dir = config_dir or _find_config_dir()

    default_data = _load_yaml_file(config_dir / "default.yaml")
    game_data = _load_yaml_file(config_dir / "games" / f"{game_id}.yaml")

    # Merge configs (game overrides default)
    merged_data = _deep_merge(default_data, game_data)

    if not merged_data:
        logger.info("No config found for game '%s', using defaults", game_id)
        return Config()

    return _build_config(merged_data)


def list_available_games(config_dir: Optional[Path] = None) -> list:
    """
    List all games that have configuration files.

    Returns:
        List of game IDs
    """
    games_dir = (config_dir or _find_config_dir()) / "games"

    if not games_dir.exists():
        return []

    return sorted(
        p.stem for p in games_dir.glob("*.yaml")
        if p.is_file()
    )
