"""Leaderboard client interface and record models.

The leaderboard is append-only: scores are inserted and read back ranked,
never updated or deleted. Lower scores rank higher.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, Field


class LeaderboardError(RuntimeError):
    """Raised when the leaderboard cannot be read."""


class ScoreEntry(BaseModel):
    """One persisted leaderboard row."""

    id: int
    player_name: str = Field(min_length=1)
    score: int
    created_at: datetime

    def __str__(self) -> str:
        return f"{self.player_name}: {self.score}"


@dataclass
class SubmitResult:
    """Result of a score submission."""

    success: bool
    reason: str = ""
    entry: ScoreEntry | None = None


def rank_entries(entries: list[ScoreEntry], n: int) -> list[ScoreEntry]:
    """Sort entries best first and keep at most n.

    Ties on score go to the older entry.
    """
    if n < 1:
        return []
    ranked = sorted(entries, key=lambda e: (e.score, e.created_at, e.id))
    return ranked[:n]


class LeaderboardClient(ABC):
    """Abstract base class for leaderboard backends.

    Implementations must not raise from submit(); transport problems are
    reported through SubmitResult so the round-complete flow never breaks.
    """

    @abstractmethod
    def submit(self, player_name: str, score: int) -> SubmitResult:
        """Insert a score.

        Args:
            player_name: Non-empty player name
            score: Final score (lower is better)

        Returns:
            SubmitResult
        """
        pass

    @abstractmethod
    def fetch_top(self, n: int) -> list[ScoreEntry]:
        """Read the best scores.

        Args:
            n: Maximum number of entries

        Returns:
            Entries ascending by score, at most n

        Raises:
            LeaderboardError: If the store cannot be read
        """
        pass

    @staticmethod
    def check_name(player_name: str) -> str | None:
        """Get the cleaned player name, or None if it is blank."""
        name = player_name.strip()
        return name or None
