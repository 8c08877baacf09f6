"""Supabase (PostgREST) leaderboard client.

Expects the table created by::

    CREATE TABLE leaderboard (
        id BIGSERIAL PRIMARY KEY,
        player_name TEXT NOT NULL,
        score INTEGER NOT NULL,
        created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
    );

with row level security allowing anonymous SELECT and INSERT only.
"""

import logging

import requests
from pydantic import ValidationError

from .base import LeaderboardClient, LeaderboardError, ScoreEntry, SubmitResult

logger = logging.getLogger(__name__)

SELECT_COLUMNS = "id,player_name,score,created_at"


class SupabaseLeaderboard(LeaderboardClient):
    """Leaderboard backed by a Supabase REST endpoint."""

    def __init__(
        self,
        url: str,
        api_key: str,
        table: str = "leaderboard",
        timeout: float = 5.0,
        session: requests.Session | None = None,
    ):
        """Initialize client.

        Args:
            url: Project URL (e.g. https://xyz.supabase.co)
            api_key: Anonymous API key
            table: Table name
            timeout: Request timeout in seconds
            session: HTTP session (creates one if not provided)
        """
        if not url:
            raise ValueError("Supabase URL is required")
        self.endpoint = f"{url.rstrip('/')}/rest/v1/{table}"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        })

    def submit(self, player_name: str, score: int) -> SubmitResult:
        name = self.check_name(player_name)
        if name is None:
            return SubmitResult(success=False, reason="Player name is empty")

        try:
            r = self.session.post(
                self.endpoint,
                json={"player_name": name, "score": score},
                headers={"Prefer": "return=minimal"},
                timeout=self.timeout,
            )
            r.raise_for_status()
        except requests.RequestException as e:
            logger.warning(f"Score submission failed: {e}")
            return SubmitResult(success=False, reason=str(e))

        logger.debug(f"Submitted score {score} for {name}")
        return SubmitResult(success=True)

    def fetch_top(self, n: int) -> list[ScoreEntry]:
        if n < 1:
            return []

        try:
            r = self.session.get(
                self.endpoint,
                params={
                    "select": SELECT_COLUMNS,
                    "order": "score.asc,created_at.asc",
                    "limit": n,
                },
                timeout=self.timeout,
            )
            r.raise_for_status()
            rows = r.json()
        except (requests.RequestException, ValueError) as e:
            raise LeaderboardError(f"Could not fetch leaderboard: {e}") from e

        try:
            return [ScoreEntry.model_validate(row) for row in rows][:n]
        except (ValidationError, TypeError) as e:
            raise LeaderboardError(f"Unexpected leaderboard rows: {e}") from e
