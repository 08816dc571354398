"""
Best-score bookkeeping for finished games.

Scores are kept in memory per board layout and owned by the
application shell, never by the board itself.
"""
from dataclasses import dataclass
from typing import Dict, Optional

from .board import BoardConfig


@dataclass(frozen=True)
class ScoreKey:
    """Board layout a score belongs to."""

    width: int
    height: int
    num_mines: int

    @classmethod
    def from_config(cls, config: BoardConfig) -> "ScoreKey":
        """Build the key for a board configuration."""
        return cls(config.width, config.height, config.num_mines)


@dataclass(frozen=True)
class BestScore:
    """Fastest time and fewest clicks recorded for one layout."""

    seconds: float
    clicks: int


class HighScoreStore:
    """In-memory mapping from board layout to its best score."""

    def __init__(self) -> None:
        """Create an empty store."""
        self._scores: Dict[ScoreKey, BestScore] = {}

    def record(self, key: ScoreKey, seconds: float, clicks: int) -> bool:
        """
        Record a won game.

        Time and clicks are tracked independently, so a slow game with
        few clicks can still improve the click record.

        Returns:
            True if either record improved.
        """
        if seconds < 0 or clicks < 0:
            raise ValueError("Scores cannot be negative")

        current = self._scores.get(key)
        if current is None:
            self._scores[key] = BestScore(seconds, clicks)
            return True

        best = BestScore(min(current.seconds, seconds), min(current.clicks, clicks))
        if best == current:
            return False
        self._scores[key] = best
        return True

    def best(self, key: ScoreKey) -> Optional[BestScore]:
        """Get the best score for a layout, or None if never won."""
        return self._scores.get(key)

    def __contains__(self, key: object) -> bool:
        """Check if a layout has a recorded win."""
        return key in self._scores

    def __len__(self) -> int:
        """Number of layouts with a recorded win."""
        return len(self._scores)
