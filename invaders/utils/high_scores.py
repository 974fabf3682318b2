"""
High score persistence.

The simulation offers its final score to a HighScoreStore at round end;
these stores keep it only when it beats the stored best.
"""

import json
import logging
from pathlib import Path

from ..core.collaborators import HighScoreStore

logger = logging.getLogger(__name__)


class MemoryHighScoreStore(HighScoreStore):
    """Keeps the best score for the lifetime of the process."""

    def __init__(self, best: int = 0):
        self._best = best

    def get_best(self) -> int:
        return self._best

    def save_best(self, score: int) -> None:
        self._best = score


class JsonHighScoreStore(HighScoreStore):
    """Keeps the best score in a small JSON file."""

    def __init__(self, path: str):
        self.path = Path(path)

    def get_best(self) -> int:
        if not self.path.exists():
            return 0
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
            return int(data.get("best", 0))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable high score file %s: %s", self.path, e)
            return 0

    def save_best(self, score: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump({"best": score}, f)
