"""Append-only JSONL leaderboard file."""

import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from .base import (
    LeaderboardClient,
    LeaderboardError,
    ScoreEntry,
    SubmitResult,
    rank_entries,
)

logger = logging.getLogger(__name__)


class JsonlLeaderboard(LeaderboardClient):
    """Leaderboard stored as one JSON object per line.

    Rows are only ever appended, mirroring the insert-only table policy.
    """

    def __init__(self, path: Path | str):
        """Initialize file leaderboard.

        Args:
            path: JSONL file (created on first submit)
        """
        self.path = Path(path)

    def submit(self, player_name: str, score: int) -> SubmitResult:
        name = self.check_name(player_name)
        if name is None:
            return SubmitResult(success=False, reason="Player name is empty")

        try:
            entry = ScoreEntry(
                id=self._count_rows() + 1,
                player_name=name,
                score=score,
                created_at=datetime.now(timezone.utc),
            )
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(entry.model_dump_json() + "\n")
        except OSError as e:
            logger.warning(f"Could not write score to {self.path}: {e}")
            return SubmitResult(success=False, reason=str(e))

        logger.debug(f"Saved score {score} for {name} to {self.path}")
        return SubmitResult(success=True, entry=entry)

    def fetch_top(self, n: int) -> list[ScoreEntry]:
        return rank_entries(self._load_entries(), n)

    def _count_rows(self) -> int:
        if not self.path.exists():
            return 0
        with open(self.path, encoding="utf-8") as f:
            return sum(1 for line in f if line.strip())

    def _load_entries(self) -> list[ScoreEntry]:
        """Load all rows, skipping lines that do not parse."""
        if not self.path.exists():
            return []

        entries: list[ScoreEntry] = []
        try:
            with open(self.path, encoding="utf-8") as f:
                for line_num, line in enumerate(f, 1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        entries.append(ScoreEntry.model_validate_json(line))
                    except ValidationError:
                        logger.warning(f"Skipping malformed row {line_num} in {self.path}")
        except OSError as e:
            raise LeaderboardError(f"Could not read {self.path}: {e}") from e

        return entries
