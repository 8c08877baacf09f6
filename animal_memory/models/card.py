"""Card and animal symbol models."""

from enum import Enum

from pydantic import BaseModel


class DealError(ValueError):
    """Raised when a round layout cannot be dealt."""


class VisualState(str, Enum):
    """What a card currently shows.

    This is the only attribute that decides which face is rendered.
    """

    HIDDEN = "hidden"  # Back face
    REVEALED = "revealed"  # Face up, not yet judged
    MATCHED = "matched"  # Face up for the rest of the round


class Animal(BaseModel, frozen=True):
    """One symbol of the animal set."""

    id: str
    name: str
    glyph: str
    sound: str


ANIMALS: tuple[Animal, ...] = (
    Animal(id="dog", name="Dog", glyph="DOG", sound="dog.mp3"),
    Animal(id="cat", name="Cat", glyph="CAT", sound="cat.mp3"),
    Animal(id="cow", name="Cow", glyph="COW", sound="cow.mp3"),
    Animal(id="duck", name="Duck", glyph="DCK", sound="duck.mp3"),
    Animal(id="frog", name="Frog", glyph="FRG", sound="frog.mp3"),
    Animal(id="horse", name="Horse", glyph="HRS", sound="horse.mp3"),
    Animal(id="lion", name="Lion", glyph="LIO", sound="lion.mp3"),
    Animal(id="pig", name="Pig", glyph="PIG", sound="pig.mp3"),
)

ANIMALS_BY_ID: dict[str, Animal] = {a.id: a for a in ANIMALS}


class Card(BaseModel):
    """Single tile on the grid."""

    id: int  # Grid position
    symbol_id: str
    visual_state: VisualState = VisualState.HIDDEN

    @property
    def is_hidden(self) -> bool:
        return self.visual_state == VisualState.HIDDEN

    @property
    def is_matched(self) -> bool:
        return self.visual_state == VisualState.MATCHED

    @property
    def face_visible(self) -> bool:
        """Check if the animal face is shown (derived from visual state only)."""
        return self.visual_state != VisualState.HIDDEN

    def __str__(self) -> str:
        if not self.face_visible:
            return f"#{self.id}[?]"
        return f"#{self.id}[{self.symbol_id}]"

    def __repr__(self) -> str:
        return (
            f"Card(id={self.id}, symbol_id={self.symbol_id!r}, "
            f"state={self.visual_state.name})"
        )


def get_animals(count: int) -> list[Animal]:
    """Get the first ``count`` animals of the fixed set.

    Args:
        count: Number of pairs wanted.

    Returns:
        List of animals.

    Raises:
        DealError: If count is outside 1..len(ANIMALS).
    """
    if count < 1 or count > len(ANIMALS):
        raise DealError(f"Number of pairs must be between 1 and {len(ANIMALS)}, got {count}")
    return list(ANIMALS[:count])


def create_deck(layout: list[str]) -> list[Card]:
    """Create hidden cards from a symbol layout.

    Args:
        layout: Symbol id for each grid position, in order.

    Returns:
        Cards whose ids are their grid positions.
    """
    return [Card(id=i, symbol_id=symbol_id) for i, symbol_id in enumerate(layout)]
