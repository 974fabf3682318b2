"""
Collaborator interfaces for Invaders.

The simulation reports to the outside world through these contracts. It
never presents scenes or touches storage itself.
"""

from abc import ABC, abstractmethod


class SceneRouter(ABC):
    """
    Receives the terminal outcome of a round.

    Implementations decide what to show next (a game over screen, a
    victory screen, a transition back to the start menu).
    """

    @abstractmethod
    def present_outcome(self, outcome) -> None:
        """
        Called exactly once when a round ends.

        Args:
            outcome: The terminal RoundOutcome (WON or LOST)
        """
        pass


class HighScoreStore(ABC):
    """
    Persists the best score across rounds.

    The simulation offers the final score at round end; the store decides
    whether it is worth keeping.
    """

    @abstractmethod
    def get_best(self) -> int:
        """
        Get the stored best score.

        Returns:
            Best score so far, 0 if none is stored
        """
        pass

    @abstractmethod
    def save_best(self, score: int) -> None:
        """
        Unconditionally store a new best score.

        Args:
            score: Score to store
        """
        pass

    def offer(self, score: int) -> bool:
        """
        Offer a final score, storing it only if it beats the current best.

        Args:
            score: Final score of a round

        Returns:
            True if the score was stored as the new best
        """
        if score > self.get_best():
            self.save_best(score)
            return True
        return False
