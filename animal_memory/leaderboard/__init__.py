"""Leaderboard clients."""

from animal_memory.config import LeaderboardConfig

from .base import LeaderboardClient, LeaderboardError, ScoreEntry, SubmitResult, rank_entries
from .file_store import JsonlLeaderboard
from .memory import InMemoryLeaderboard
from .supabase import SupabaseLeaderboard


def create_leaderboard(config: LeaderboardConfig | None = None) -> LeaderboardClient:
    """Create the leaderboard backend selected in config."""
    config = config or LeaderboardConfig()
    if config.backend == "memory":
        return InMemoryLeaderboard()
    if config.backend == "supabase":
        return SupabaseLeaderboard(
            url=config.url,
            api_key=config.api_key,
            table=config.table,
            timeout=config.timeout,
        )
    return JsonlLeaderboard(config.path)


__all__ = [
    "LeaderboardClient",
    "LeaderboardError",
    "ScoreEntry",
    "SubmitResult",
    "rank_entries",
    "InMemoryLeaderboard",
    "JsonlLeaderboard",
    "SupabaseLeaderboard",
    "create_leaderboard",
]
