"""
Tests for infrastructure components (GameRegistry, config loading,
high score stores, logging setup, score tracking).

These tests verify that core infrastructure works correctly.
"""

import json
import logging
from pathlib import Path

import pytest
import yaml


class TestGameRegistry:
    """Tests for the GameRegistry class."""

    def test_registry_create_unknown_raises(self, mock_pygame_module):
        """Test creating an unregistered game raises ValueError naming the known ids."""
        from invaders.games.registry import GameRegistry

        with pytest.raises(ValueError, match="Unknown game: nonexistent.*space_invaders"):
            GameRegistry.create_game('nonexistent')
        with pytest.raises(ValueError, match="Unknown game"):
            GameRegistry.create_renderer('nonexistent')

    def test_registry_create_renderer(self, mock_pygame_module):
        """Test creating the renderer through the registry."""
        from invaders.games.registry import GameRegistry
        from invaders.games.space_invaders import SpaceInvadersRenderer

        renderer = GameRegistry.create_renderer('space_invaders', width=400, height=600)

        assert isinstance(renderer, SpaceInvadersRenderer)
        assert renderer.get_preferred_size() == (200, 300)

    def test_registry_create_game_with_kwargs(self, mock_pygame_module):
        """Test constructor arguments are passed through."""
        from invaders.games.registry import GameRegistry
        from invaders.games.space_invaders import SpaceInvadersConfig

        game = GameRegistry.create_game(
            'space_invaders', config=SpaceInvadersConfig(invader_rows=2, invader_cols=3)
        )

        assert game.get_state()['invaders_alive'] == 6

    def test_register_keys_by_metadata_id(self, mock_pygame_module):
        """Test registration uses the id from the game's metadata."""
        from invaders.games.registry import GameRegistry
        from invaders.games.space_invaders import SpaceInvadersGame, SpaceInvadersRenderer

        entry = GameRegistry._games['space_invaders']

        assert entry.game_class is SpaceInvadersGame
        assert entry.renderer_class is SpaceInvadersRenderer
        assert entry.metadata.name == 'Space Invaders'


class TestGameConfig:
    """Tests for SpaceInvadersConfig validation."""

    def test_defaults(self, config):
        """Test default formation size."""
        assert config.total_invaders == 50
        assert config.to_dict()['invader_cols'] == 10

    @pytest.mark.parametrize("overrides", [
        {'invader_rows': 0},
        {'invader_cols': -1},
        {'width': 0},
        {'initial_move_interval': 0},
        {'ship_bullet_duration': -1.0},
        {'speed_up_factor': 0},
    ])
    def test_invalid_values_rejected(self, mock_pygame_module, overrides):
        """Test nonsensical constants raise ValueError."""
        from invaders.games.space_invaders.config import SpaceInvadersConfig

        with pytest.raises(ValueError):
            SpaceInvadersConfig(**overrides)

    def test_from_dict_ignores_unknown_keys(self, mock_pygame_module):
        """Test unknown keys in config data are dropped."""
        from invaders.games.space_invaders.config import SpaceInvadersConfig

        config = SpaceInvadersConfig.from_dict({'invader_rows': 2, 'lives': 3})

        assert config.invader_rows == 2
        assert not hasattr(config, 'lives')


class TestConfigLoading:
    """Tests for YAML configuration loading."""

    def test_load_config_from_file(self, mock_pygame_module, tmp_path, sample_config):
        """Test loading a config file."""
        from invaders.utils.config_loader import load_config

        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump(sample_config))

        config = load_config(str(path))

        assert config.game.invader_rows == 3
        assert config.game.invader_cols == 4
        assert config.game.initial_move_interval == 0.5
        assert config.game.march_step == 10.0
        assert config.visualization.window_width == 400
        assert config.logging.level == 'DEBUG'

    def test_load_config_missing_file(self, mock_pygame_module, tmp_path):
        """Test a missing config file gives defaults."""
        from invaders.utils.config_loader import load_config

        config = load_config(str(tmp_path / "missing.yaml"))

        assert config.game.total_invaders == 50
        assert config.high_scores.enabled is True

    def test_game_config_overrides_default(self, mock_pygame_module, tmp_path):
        """Test per-game settings override the defaults."""
        from invaders.utils.config_loader import load_game_config

        (tmp_path / "games").mkdir()
        (tmp_path / "default.yaml").write_text(yaml.dump({
            'visualization': {'window_width': 300, 'render_fps': 30},
            'game': {'march_step': 5.0, 'drop_distance': 20.0},
        }))
        (tmp_path / "games" / "space_invaders.yaml").write_text(yaml.dump({
            'visualization': {'render_fps': 50},
            'game': {'march_step': 8.0},
        }))

        config = load_game_config('space_invaders', config_dir=tmp_path)

        assert config.visualization.window_width == 300
        assert config.visualization.render_fps == 50
        assert config.game.march_step == 8.0
        assert config.game.drop_distance == 20.0

    def test_game_config_empty_dir(self, mock_pygame_module, tmp_path):
        """Test an empty config directory gives defaults."""
        from invaders.utils.config_loader import load_game_config

        config = load_game_config('space_invaders', config_dir=tmp_path)

        assert config.game.invader_rows == 5

    def test_shipped_game_config(self, mock_pygame_module):
        """Test the shipped config files load."""
        from invaders.utils.config_loader import list_available_games, load_game_config

        config_dir = Path(__file__).parent.parent / "config"
        config = load_game_config('space_invaders', config_dir=config_dir)

        assert 'space_invaders' in list_available_games(config_dir)
        assert config.game.total_invaders == 50
        assert config.game.speed_up_factor == pytest.approx(0.8)

    def test_save_and_reload(self, mock_pygame_module, tmp_path):
        """Test a saved config loads back the same."""
        from invaders.utils.config_loader import Config, load_config, save_config

        config = Config()
        config.game.invader_rows = 4
        config.logging.level = 'WARNING'
        path = tmp_path / "saved.yaml"

        save_config(config, str(path))
        loaded = load_config(str(path))

        assert loaded.game.invader_rows == 4
        assert loaded.logging.level == 'WARNING'

    def test_list_available_games(self, mock_pygame_module, tmp_path):
        """Test games are listed from config/games."""
        from invaders.utils.config_loader import list_available_games

        (tmp_path / "games").mkdir()
        (tmp_path / "games" / "b_game.yaml").write_text("{}")
        (tmp_path / "games" / "a_game.yaml").write_text("{}")

        assert list_available_games(tmp_path) == ['a_game', 'b_game']
        assert list_available_games(tmp_path / "nowhere") == []


class TestHighScoreStores:
    """Tests for high score persistence."""

    def test_json_store_starts_at_zero(self, mock_pygame_module, tmp_path):
        """Test a missing file means no best score yet."""
        from invaders.utils.high_scores import JsonHighScoreStore

        assert JsonHighScoreStore(str(tmp_path / "best.json")).get_best() == 0

    def test_json_store_keeps_higher_score(self, mock_pygame_module, tmp_path):
        """Test only better scores replace the stored best."""
        from invaders.utils.high_scores import JsonHighScoreStore

        path = tmp_path / "nested" / "best.json"
        store = JsonHighScoreStore(str(path))

        assert store.offer(300) is True
        assert store.offer(200) is False
        assert store.offer(300) is False
        assert json.loads(path.read_text()) == {"best": 300}
        assert JsonHighScoreStore(str(path)).get_best() == 300

    def test_json_store_corrupt_file(self, mock_pygame_module, tmp_path, caplog):
        """Test an unreadable file counts as no best score."""
        from invaders.utils.high_scores import JsonHighScoreStore

        path = tmp_path / "best.json"
        path.write_text("not json")

        with caplog.at_level(logging.WARNING):
            assert JsonHighScoreStore(str(path)).get_best() == 0
        assert "unreadable" in caplog.text

    @pytest.mark.parametrize("content", ['{"best": null}', '{"best": [1]}', '[300]'])
    def test_json_store_wrong_shape(self, mock_pygame_module, tmp_path, content):
        """Test valid JSON holding no usable best score counts as no best score."""
        from invaders.utils.high_scores import JsonHighScoreStore

        path = tmp_path / "best.json"
        path.write_text(content)
        store = JsonHighScoreStore(str(path))

        assert store.get_best() == 0
        assert store.offer(100) is True
        assert json.loads(path.read_text()) == {"best": 100}

    def test_wrong_shape_file_does_not_break_round_end(self, mock_pygame_module, tmp_path):
        """Test a round still ends cleanly and saves its score over a bad file."""
        from invaders.games.space_invaders.game import SpaceInvadersGame
        from invaders.utils.high_scores import JsonHighScoreStore

        path = tmp_path / "best.json"
        path.write_text('{"best": [1]}')
        store = JsonHighScoreStore(str(path))
        game = SpaceInvadersGame(score_store=store)
        game.step(0.0)
        game.state.score.credit(200)
        game.state.registry.remove(game.ship.id)

        _, done, _ = game.step(0.1)

        assert done is True
        assert game.round.new_best is True
        assert store.get_best() == 200

    def test_memory_store(self, mock_pygame_module):
        """Test the in-memory store."""
        from invaders.utils.high_scores import MemoryHighScoreStore

        store = MemoryHighScoreStore(best=100)

        assert store.offer(50) is False
        assert store.offer(150) is True
        assert store.get_best() == 150


class TestLoggingSetup:
    """Tests for logging configuration."""

    def test_log_file_written(self, mock_pygame_module, tmp_path):
        """Test log records reach the configured file."""
        from invaders.utils.config_loader import LoggingConfig
        from invaders.utils.logging_setup import setup_logging

        log_file = tmp_path / "logs" / "invaders.log"
        setup_logging(LoggingConfig(level='DEBUG', log_file=str(log_file)))
        try:
            logging.getLogger('invaders.test').debug("hello from the test")
            for handler in logging.getLogger().handlers:
                handler.flush()

            assert "hello from the test" in log_file.read_text()
            assert logging.getLogger().level == logging.DEBUG
        finally:
            root = logging.getLogger()
            root.setLevel(logging.WARNING)
            for handler in list(root.handlers):
                handler.close()
                root.removeHandler(handler)


class TestScoreTracker:
    """Tests for the running score."""

    def test_credit_adds_points(self, mock_pygame_module):
        """Test credits accumulate and listeners see each new total."""
        from invaders.games.space_invaders.scoring import ScoreTracker

        score = ScoreTracker()
        seen = []
        score.add_listener(seen.append)

        score.credit(100)
        score.credit(0)
        score.credit(100)

        assert score.total == 200
        assert seen == [100, 200]

    def test_negative_credit_rejected(self, mock_pygame_module):
        """Test the score cannot go down."""
        from invaders.games.space_invaders.scoring import ScoreTracker

        score = ScoreTracker()
        score.credit(100)

        with pytest.raises(ValueError):
            score.credit(-50)
        assert score.total == 100

    def test_reset_zeroes_and_keeps_listeners(self, mock_pygame_module):
        """Test reset tells listeners about the zero and keeps them attached."""
        from invaders.games.space_invaders.scoring import ScoreTracker

        score = ScoreTracker()
        seen = []
        score.add_listener(seen.append)
        score.credit(300)

        score.reset()
        score.credit(100)

        assert score.total == 100
        assert seen == [300, 0, 100]
