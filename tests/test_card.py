"""Tests for card and round models."""

import random

import pytest

from animal_memory.models.card import (
    ANIMALS,
    Card,
    DealError,
    VisualState,
    create_deck,
    get_animals,
)
from animal_memory.models.round_state import Round, RoundStatus


class TestCard:
    """Tests for Card class."""

    def test_new_card_is_hidden(self):
        """Test that a new card starts face down."""
        card = Card(id=0, symbol_id="dog")
        assert card.visual_state == VisualState.HIDDEN
        assert card.is_hidden
        assert not card.face_visible

    def test_face_visible_follows_visual_state(self):
        """Test that the shown face depends on visual state only."""
        card = Card(id=0, symbol_id="dog")

        card.visual_state = VisualState.REVEALED
        assert card.face_visible
        assert not card.is_matched

        card.visual_state = VisualState.MATCHED
        assert card.face_visible
        assert card.is_matched

    def test_card_string(self):
        """Test card string hides the symbol while face down."""
        card = Card(id=3, symbol_id="cat")
        assert "cat" not in str(card)

        card.visual_state = VisualState.MATCHED
        assert "cat" in str(card)


class TestAnimals:
    """Tests for the animal set."""

    def test_animal_ids_unique(self):
        """Test that every animal has a distinct id."""
        ids = [a.id for a in ANIMALS]
        assert len(ids) == len(set(ids))

    def test_get_animals(self):
        """Test taking the first animals."""
        animals = get_animals(3)
        assert [a.id for a in animals] == [a.id for a in ANIMALS[:3]]

    @pytest.mark.parametrize("count", [0, -1, len(ANIMALS) + 1])
    def test_get_animals_out_of_range(self, count):
        """Test that impossible pair counts are rejected."""
        with pytest.raises(DealError):
            get_animals(count)


class TestCreateDeck:
    """Tests for create_deck function."""

    def test_ids_are_positions(self):
        """Test that card ids match grid positions."""
        cards = create_deck(["dog", "cat", "dog", "cat"])
        assert [c.id for c in cards] == [0, 1, 2, 3]
        assert [c.symbol_id for c in cards] == ["dog", "cat", "dog", "cat"]
        assert all(c.is_hidden for c in cards)


class TestRoundDeal:
    """Tests for dealing rounds."""

    def test_every_symbol_twice(self):
        """Test that each symbol appears in exactly two cards."""
        symbols = [a.id for a in ANIMALS]
        round_ = Round.deal(symbols, random.Random(7))

        assert len(round_.cards) == 2 * len(symbols)
        for symbol in symbols:
            assert sum(1 for c in round_.cards if c.symbol_id == symbol) == 2

    def test_deal_many_seeds(self):
        """Test the pairing invariant across many shuffles."""
        symbols = ["dog", "cat", "cow"]
        for seed in range(50):
            round_ = Round.deal(symbols, random.Random(seed))
            assert sorted(round_.layout()) == sorted(symbols * 2)

    def test_deal_is_reproducible(self):
        """Test that the same seed gives the same layout."""
        symbols = ["dog", "cat", "cow", "pig"]
        first = Round.deal(symbols, random.Random(42))
        second = Round.deal(symbols, random.Random(42))
        assert first.layout() == second.layout()

    def test_fresh_round_state(self):
        """Test initial counters and status."""
        round_ = Round.deal(["dog", "cat"], random.Random(1))
        assert round_.pending_reveals == []
        assert round_.move_count == 0
        assert round_.matched_pairs == 0
        assert round_.status == RoundStatus.IN_PROGRESS
        assert round_.total_symbols == 2

    def test_deal_rejects_repeated_symbols(self):
        """Test that a symbol cannot be requested twice."""
        with pytest.raises(DealError):
            Round.deal(["dog", "dog"])

    def test_deal_rejects_empty(self):
        """Test that a round needs at least one pair."""
        with pytest.raises(DealError):
            Round.deal([])


class TestRoundFromLayout:
    """Tests for explicit layouts."""

    def test_valid_layout(self):
        """Test building the documented four-card layout."""
        round_ = Round.from_layout(["A", "B", "A", "B"])
        assert round_.layout() == ["A", "B", "A", "B"]
        assert round_.total_symbols == 2

    def test_odd_count(self):
        """Test that an odd card count aborts setup."""
        with pytest.raises(DealError, match="even"):
            Round.from_layout(["A", "B", "A"])

    def test_unpaired_symbol(self):
        """Test that a symbol appearing four times is not accepted."""
        with pytest.raises(DealError, match="exactly twice"):
            Round.from_layout(["A", "A", "A", "A"])

    def test_single_symbol_per_pair(self):
        """Test that two singletons are rejected."""
        with pytest.raises(DealError):
            Round.from_layout(["A", "B"])

    def test_duplicate_ids(self):
        """Test that hand-built rounds with clashing ids fail validation."""
        round_ = Round(cards=[
            Card(id=0, symbol_id="A"),
            Card(id=0, symbol_id="A"),
        ])
        with pytest.raises(DealError, match="unique"):
            round_.validate_deal()

    def test_card_lookup(self):
        """Test finding cards by id."""
        round_ = Round.from_layout(["A", "B", "A", "B"])
        card = round_.card(2)
        assert card is not None
        assert card.symbol_id == "A"
        assert round_.card(99) is None

    def test_require_card(self):
        """Test the lookup that raises for unknown ids."""
        round_ = Round.from_layout(["A", "B", "A", "B"])
        assert round_.require(1).symbol_id == "B"
        with pytest.raises(KeyError):
            round_.require(99)
