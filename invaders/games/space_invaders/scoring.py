"""
Score tracking for a round.
"""

from typing import Callable, List

ScoreListener = Callable[[int], None]


class ScoreTracker:
    """Running score of the current round. Only ever goes up."""

    def __init__(self):
        self._total = 0
        self._listeners: List[ScoreListener] = []

    @property
    def total(self) -> int:
        return self._total

    def add_listener(self, listener: ScoreListener) -> None:
        """Register a callback receiving the new total whenever it changes."""
        self._listeners.append(listener)

    def credit(self, points: int) -> int:
        """
        Add points to the running total.

        Args:
            points: Non-negative number of points

        Returns:
            The new total

        Raises:
            ValueError: If points is negative
        """
        if points < 0:
            raise ValueError(f"Score credits must be non-negative, got {points}")
        if points:
            self._total += points
            for listener in self._listeners:
                listener(self._total)
        return self._total

    def reset(self) -> None:
        """Zero the total for a new round. Listeners stay attached and see the 0."""
        self._total = 0
        for listener in self._listeners:
            listener(self._total)
