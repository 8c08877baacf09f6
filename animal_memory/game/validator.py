"""Move validation for reveal requests."""

from dataclasses import dataclass
from enum import Enum

from animal_memory.models.card import VisualState
from animal_memory.models.round_state import MAX_PENDING, Round, RoundStatus


class MoveError(str, Enum):
    """Reason a reveal was rejected."""

    UNKNOWN_CARD = "unknown_card"
    NOT_HIDDEN = "not_hidden"
    TOO_MANY_REVEALED = "too_many_revealed"
    ROUND_OVER = "round_over"


@dataclass
class MoveResult:
    """Result of a reveal request.

    An invalid result is the engine's InvalidMove signal: state is unchanged.
    """

    is_valid: bool
    card_id: int = -1
    error: MoveError | None = None
    error_message: str = ""

    @classmethod
    def invalid(cls, card_id: int, error: MoveError, message: str) -> "MoveResult":
        return cls(is_valid=False, card_id=card_id, error=error, error_message=message)


class MoveValidator:
    """Validates reveal requests against a round."""

    def validate_reveal(self, round_: Round, card_id: int) -> MoveResult:
        """Validate revealing a card.

        Args:
            round_: Current round
            card_id: Card the player selected

        Returns:
            MoveResult
        """
        if round_.status == RoundStatus.WON:
            return MoveResult.invalid(card_id, MoveError.ROUND_OVER, "Round is already won")

        card = round_.card(card_id)
        if card is None:
            return MoveResult.invalid(
                card_id, MoveError.UNKNOWN_CARD, f"No card with id {card_id}"
            )

        if card.visual_state != VisualState.HIDDEN:
            return MoveResult.invalid(
                card_id,
                MoveError.NOT_HIDDEN,
                f"Card {card_id} is {card.visual_state.value}",
            )

        if len(round_.pending_reveals) >= MAX_PENDING:
            return MoveResult.invalid(
                card_id,
                MoveError.TOO_MANY_REVEALED,
                f"Already {len(round_.pending_reveals)} cards revealed",
            )

        return MoveResult(is_valid=True, card_id=card_id)
