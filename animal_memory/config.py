"""Configuration management."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field


class GameConfig(BaseModel):
    """Game configuration."""

    num_pairs: int = Field(default=8, ge=1)
    seed: int | None = None  # Fixed shuffle for reproducible rounds


class TimingConfig(BaseModel):
    """Timing configuration."""

    # Seconds both faces stay visible before a pair is judged
    mismatch_delay: float = Field(default=1.0, gt=0)


class ScoringConfig(BaseModel):
    """Scoring weights (lower score is better)."""

    move_weight: int = Field(default=10, ge=1)
    second_weight: int = Field(default=1, ge=1)


class LeaderboardConfig(BaseModel):
    """Leaderboard backend configuration."""

    backend: Literal["memory", "file", "supabase"] = "file"
    path: str = "leaderboard.jsonl"

    # Supabase REST
    url: str = ""
    api_key: str = ""
    table: str = "leaderboard"
    timeout: float = 5.0

    top_n: int = Field(default=10, ge=1)


class RoundLogConfig(BaseModel):
    """Round event log configuration."""

    enabled: bool = False
    output_path: str = "logs"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    round_log: RoundLogConfig = RoundLogConfig()


class Config(BaseModel):
    """Root configuration."""

    game: GameConfig = GameConfig()
    timing: TimingConfig = TimingConfig()
    scoring: ScoringConfig = ScoringConfig()
    leaderboard: LeaderboardConfig = LeaderboardConfig()
    logging: LoggingConfig = LoggingConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
