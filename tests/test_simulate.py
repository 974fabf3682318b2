"""
Tests for the headless simulation script.
"""

import importlib.util
import random
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).parent.parent / "scripts" / "simulate.py"


@pytest.fixture
def simulate(mock_pygame_module):
    """Load scripts/simulate.py as a module."""
    spec = importlib.util.spec_from_file_location("simulate_script", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestSummarize:
    """Tests for round statistics."""

    def test_cut_off_rounds_counted_as_unfinished(self, simulate):
        """Test rounds stopped by the time limit still add up to the total."""
        rounds = [
            {"score": 500, "outcome": "won", "seconds": 40.0},
            {"score": 100, "outcome": "lost", "seconds": 12.0},
            {"score": 300, "outcome": "in_progress", "seconds": 5.0},
        ]

        results = simulate.summarize(rounds)

        assert results["rounds"] == 3
        assert (results["won"], results["lost"], results["unfinished"]) == (1, 1, 1)
        assert results["won"] + results["lost"] + results["unfinished"] == results["rounds"]
        assert results["scores"]["max"] == 500
        assert results["scores"]["median"] == 300

    def test_no_rounds(self, simulate):
        """Test an empty run gives zeroed statistics."""
        results = simulate.summarize([])

        assert results["unfinished"] == 0
        assert results["scores"]["mean"] == 0


class TestRunRound:
    """Tests for the scripted pilot."""

    def test_time_limit_leaves_round_in_progress(self, simulate, quiet_config):
        """Test a round cut off by the time limit reports in_progress."""
        from invaders.games.space_invaders.game import SpaceInvadersGame

        game = SpaceInvadersGame(config=quiet_config, rng=random.Random(3))

        result = simulate.run_round(game, random.Random(3), max_seconds=0.5)

        assert result["outcome"] == "in_progress"
        assert simulate.summarize([result])["unfinished"] == 1
