"""Process-local leaderboard."""

from datetime import datetime, timezone

from .base import LeaderboardClient, ScoreEntry, SubmitResult, rank_entries


class InMemoryLeaderboard(LeaderboardClient):
    """Leaderboard kept in a list, lost when the process exits."""

    def __init__(self) -> None:
        self._entries: list[ScoreEntry] = []

    def submit(self, player_name: str, score: int) -> SubmitResult:
        name = self.check_name(player_name)
        if name is None:
            return SubmitResult(success=False, reason="Player name is empty")

        entry = ScoreEntry(
            id=len(self._entries) + 1,
            player_name=name,
            score=score,
            created_at=datetime.now(timezone.utc),
        )
        self._entries.append(entry)
        return SubmitResult(success=True, entry=entry)

    def fetch_top(self, n: int) -> list[ScoreEntry]:
        return rank_entries(self._entries, n)

    def __len__(self) -> int:
        return len(self._entries)
