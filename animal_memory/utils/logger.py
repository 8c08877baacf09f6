"""Logging utilities and board display."""

import logging
import sys
from typing import TYPE_CHECKING

from animal_memory.models.card import ANIMALS_BY_ID, Card, VisualState

if TYPE_CHECKING:
    from animal_memory.game.controller import RoundOutcome
    from animal_memory.game.engine import Resolution
    from animal_memory.leaderboard import ScoreEntry
    from animal_memory.models.round_state import Round


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def card_face(card: Card) -> str:
    """Get the text shown for a card.

    Decided by visual state alone: hidden cards show their grid number.
    """
    if card.visual_state == VisualState.HIDDEN:
        return f"{card.id:>3}"
    animal = ANIMALS_BY_ID.get(card.symbol_id)
    glyph = animal.glyph if animal else card.symbol_id[:3].upper()
    if card.visual_state == VisualState.REVEALED:
        return f"*{glyph}*"
    return f" {glyph} "


class BoardDisplay:
    """Display the board and results to stdout."""

    def __init__(self, columns: int = 4):
        """Initialize display.

        Args:
            columns: Cards per grid row
        """
        self.columns = max(1, columns)

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 40)

    def print_board(self, round_: "Round") -> None:
        """Print the grid and counters."""
        print()
        cards = round_.cards
        for start in range(0, len(cards), self.columns):
            row = cards[start:start + self.columns]
            print("  ".join(f"[{card_face(c):^5}]" for c in row))
        print(
            f"Moves: {round_.move_count}  "
            f"Pairs: {round_.matched_pairs}/{round_.total_symbols}"
        )

    def print_resolution(self, resolution: "Resolution") -> None:
        """Print the result of a pair comparison."""
        if resolution.is_match:
            print(f"  -> Match! {resolution.first_symbol}")
        else:
            print(
                f"  -> No match ({resolution.first_symbol} / {resolution.second_symbol})"
            )

    def print_outcome(self, outcome: "RoundOutcome") -> None:
        """Print the final score and whether it was saved."""
        self.print_separator()
        print(f"All pairs found, {outcome.player_name}!")
        print(f"Moves: {outcome.moves}  Time: {outcome.elapsed:.1f}s  Score: {outcome.score}")
        if outcome.saved is None:
            print("Score still saving...")
        elif not outcome.saved:
            print("Score not saved")
        self.print_separator()

    def print_leaderboard(self, entries: list["ScoreEntry"]) -> None:
        """Print ranked leaderboard entries (lower score is better)."""
        self.print_separator()
        print("LEADERBOARD")
        self.print_separator()
        if not entries:
            print("  No scores yet")
            return
        for rank, entry in enumerate(entries, 1):
            print(f"  #{rank}: {entry.player_name} - {entry.score}")
