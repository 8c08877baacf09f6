"""Round logger for event replay."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

from animal_memory.config import RoundLogConfig
from animal_memory.models.card import VisualState
from animal_memory.models.round_state import Round

from .formatters import format_layout, format_states

if TYPE_CHECKING:
    from animal_memory.game.engine import Resolution


class RoundLogger:
    """Logger for round events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    """

    def __init__(self, config: RoundLogConfig | None = None, output_path: str | None = None):
        """Initialize round logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
            output_path: Log file path (overrides config.output_path)
        """
        self.config = config or RoundLogConfig()
        self.output_path = output_path or self.config.output_path
        self._file: TextIO | None = None

    def __enter__(self) -> "RoundLogger":
        """Context manager entry."""
        if self.config.enabled and self.output_path:
            path = Path(self.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_round_start(self, round_num: int, round_: Round) -> None:
        """Log round start with the dealt layout."""
        self._write({
            "type": "round_start",
            "timestamp": datetime.now().isoformat(),
            "round": round_num,
            "layout": format_layout(round_),
        })

    def log_reveal(self, round_num: int, card_id: int, symbol_id: str) -> None:
        """Log an accepted reveal."""
        self._write({
            "type": "reveal",
            "round": round_num,
            "card": card_id,
            "symbol": symbol_id,
        })

    def log_resolve(
        self,
        round_num: int,
        resolution: Resolution,
        states: list[VisualState],
    ) -> None:
        """Log a pair comparison.

        Args:
            round_num: Round number.
            resolution: Outcome from the engine.
            states: Visual states after the comparison.
        """
        self._write({
            "type": "resolve",
            "round": round_num,
            "cards": [resolution.first_id, resolution.second_id],
            "match": resolution.is_match,
            "moves": resolution.move_count,
            "matched_pairs": resolution.matched_pairs,
            "states": format_states(states),
        })

    def log_round_end(self, round_num: int, moves: int, elapsed: float, score: int) -> None:
        """Log round completion with the final score."""
        self._write({
            "type": "round_end",
            "round": round_num,
            "moves": moves,
            "elapsed": round(elapsed, 3),
            "score": score,
        })

    def log_submit(self, round_num: int, saved: bool, reason: str = "") -> None:
        """Log the leaderboard submission outcome."""
        record: dict[str, Any] = {
            "type": "submit",
            "round": round_num,
            "saved": saved,
        }
        if reason:
            record["reason"] = reason
        self._write(record)
