"""Round state models."""

import random
from collections import Counter
from enum import Enum

from pydantic import BaseModel, Field

from .card import Card, DealError, create_deck

# Maximum number of cards face up and unjudged at once
MAX_PENDING = 2


class RoundStatus(str, Enum):
    """Progress of a round."""

    IN_PROGRESS = "in_progress"
    WON = "won"


class Round(BaseModel):
    """State of one play session, from deal to all pairs matched."""

    cards: list[Card] = Field(default_factory=list)
    pending_reveals: list[int] = Field(default_factory=list)
    move_count: int = 0
    matched_pairs: int = 0
    status: RoundStatus = RoundStatus.IN_PROGRESS

    @classmethod
    def deal(
        cls,
        symbol_ids: list[str],
        rng: random.Random | None = None,
    ) -> "Round":
        """Pair every symbol twice, shuffle and build a fresh round.

        Args:
            symbol_ids: Distinct symbols to deal.
            rng: Random source (module random if not provided)

        Returns:
            New Round with all cards hidden.

        Raises:
            DealError: If symbols are empty or repeated.
        """
        if len(set(symbol_ids)) != len(symbol_ids):
            raise DealError(f"Symbols must be distinct: {symbol_ids}")

        layout = list(symbol_ids) * 2
        (rng or random).shuffle(layout)
        return cls.from_layout(layout)

    @classmethod
    def from_layout(cls, layout: list[str]) -> "Round":
        """Build a round from an explicit symbol layout.

        Raises:
            DealError: If the layout is empty, odd, or a symbol is not paired.
        """
        cards = create_deck(layout)
        round_ = cls(cards=cards)
        round_.validate_deal()
        return round_

    @property
    def total_symbols(self) -> int:
        return len(self.cards) // 2

    def validate_deal(self) -> None:
        """Check the deal invariants.

        Raises:
            DealError: On any malformed layout.
        """
        if not self.cards:
            raise DealError("Round has no cards")
        if len(self.cards) % 2 != 0:
            raise DealError(f"Card count must be even, got {len(self.cards)}")

        ids = [c.id for c in self.cards]
        if len(set(ids)) != len(ids):
            raise DealError("Card ids must be unique")

        counts = Counter(c.symbol_id for c in self.cards)
        unpaired = sorted(s for s, n in counts.items() if n != 2)
        if unpaired:
            raise DealError(f"Symbols not dealt exactly twice: {unpaired}")

    def card(self, card_id: int) -> Card | None:
        """Get a card by id (None if unknown)."""
        for c in self.cards:
            if c.id == card_id:
                return c
        return None

    def require(self, card_id: int) -> Card:
        """Get a card by id.

        Raises:
            KeyError: If no card has this id.
        """
        card = self.card(card_id)
        if card is None:
            raise KeyError(f"Unknown card {card_id}")
        return card

    def layout(self) -> list[str]:
        """Get the symbol id at each grid position."""
        return [c.symbol_id for c in self.cards]

    def __str__(self) -> str:
        parts = [
            f"Round: {len(self.cards)} cards",
            f"moves={self.move_count}",
            f"pairs={self.matched_pairs}/{self.total_symbols}",
        ]
        if self.status == RoundStatus.WON:
            parts.append("[WON]")
        return " ".join(parts)
