"""Card state engine for a memory round."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from animal_memory.models.card import VisualState
from animal_memory.models.round_state import MAX_PENDING, Round, RoundStatus

from .validator import MoveResult, MoveValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Outcome of comparing the two pending cards."""

    first_id: int
    second_id: int
    first_symbol: str
    second_symbol: str
    is_match: bool
    move_count: int
    matched_pairs: int
    is_won: bool


class CardStateEngine:
    """Owns the card states of one round.

    The engine is synchronous and performs no I/O. Callers insert any display
    delay between the second reveal and resolve_pending().
    """

    def __init__(self, round_: Round, validator: MoveValidator | None = None):
        """Initialize engine.

        Args:
            round_: Round to drive (must already pass validate_deal)
            validator: MoveValidator instance (creates one if not provided)
        """
        self.round = round_
        self.validator = validator or MoveValidator()

    @property
    def pending_count(self) -> int:
        return len(self.round.pending_reveals)

    def reveal(self, card_id: int) -> MoveResult:
        """Turn a hidden card face up.

        Invalid requests leave the round untouched and return an invalid
        MoveResult instead of raising, since they come from ordinary rapid input.

        Args:
            card_id: Card to reveal

        Returns:
            MoveResult
        """
        result = self.validator.validate_reveal(self.round, card_id)
        if not result.is_valid:
            logger.debug(f"Rejected reveal of card {card_id}: {result.error_message}")
            return result

        card = self.round.require(card_id)
        card.visual_state = VisualState.REVEALED
        self.round.pending_reveals.append(card_id)

        logger.debug(f"Revealed card {card_id} ({card.symbol_id})")
        return result

    def resolve_pending(self) -> Resolution | None:
        """Judge the two pending cards.

        A match locks both cards as MATCHED, a mismatch turns both back to
        HIDDEN. Either way the move counter advances by one. With fewer than two
        pending cards this is a no-op.

        Returns:
            Resolution, or None when nothing was resolved
        """
        if self.pending_count != MAX_PENDING:
            return None

        first_id, second_id = self.round.pending_reveals
        first = self.round.require(first_id)
        second = self.round.require(second_id)

        is_match = first.symbol_id == second.symbol_id
        if is_match:
            first.visual_state = VisualState.MATCHED
            second.visual_state = VisualState.MATCHED
            self.round.matched_pairs += 1
        else:
            first.visual_state = VisualState.HIDDEN
            second.visual_state = VisualState.HIDDEN

        self.round.pending_reveals.clear()
        self.round.move_count += 1

        if self.round.matched_pairs == self.round.total_symbols:
            self.round.status = RoundStatus.WON
            logger.info(f"Round won in {self.round.move_count} moves")

        outcome = "match" if is_match else "mismatch"
        logger.debug(
            f"Move {self.round.move_count}: cards {first_id},{second_id} {outcome}"
        )

        return Resolution(
            first_id=first_id,
            second_id=second_id,
            first_symbol=first.symbol_id,
            second_symbol=second.symbol_id,
            is_match=is_match,
            move_count=self.round.move_count,
            matched_pairs=self.round.matched_pairs,
            is_won=self.is_won(),
        )

    def is_won(self) -> bool:
        """Check if every pair has been matched."""
        return self.round.status == RoundStatus.WON

    def snapshot(self) -> list[VisualState]:
        """Get the visual state of every card in grid order."""
        return [c.visual_state for c in self.round.cards]
