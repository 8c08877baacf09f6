"""Game models."""

from .card import ANIMALS, Animal, Card, DealError, VisualState, create_deck, get_animals
from .round_state import MAX_PENDING, Round, RoundStatus

__all__ = [
    "ANIMALS",
    "Animal",
    "Card",
    "DealError",
    "VisualState",
    "create_deck",
    "get_animals",
    "MAX_PENDING",
    "Round",
    "RoundStatus",
]
