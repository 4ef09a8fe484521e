"""Tests for card models."""

import pytest

from cribbage_engine.cards import Card, Rank, Suit, create_deck, parse_cards, shuffle_deck


class TestSuit:
    def test_suit_symbols(self):
        assert Suit.CLUBS.symbol == "♣"
        assert Suit.DIAMONDS.symbol == "♦"
        assert Suit.HEARTS.symbol == "♥"
        assert Suit.SPADES.symbol == "♠"

    def test_suit_letters(self):
        assert [suit.letter for suit in Suit] == ["C", "D", "H", "S"]


class TestRank:
    def test_rank_values(self):
        assert Rank.ACE.value == 1
        assert Rank.TEN.value == 10
        assert Rank.JACK.value == 11
        assert Rank.KING.value == 13

    def test_rank_symbols(self):
        assert Rank.ACE.symbol == "A"
        assert Rank.TEN.symbol == "10"
        assert Rank.JACK.symbol == "J"
        assert Rank.QUEEN.symbol == "Q"
        assert Rank.KING.symbol == "K"


class TestCard:
    def test_card_singleton(self):
        """Same rank/suit should return same instance."""
        assert Card(Rank.ACE, Suit.SPADES) is Card(Rank.ACE, Suit.SPADES)

    def test_card_string(self):
        assert str(Card(Rank.TEN, Suit.HEARTS)) == "10♥"

    def test_card_repr(self):
        assert repr(Card(Rank.ACE, Suit.SPADES)) == "Card(ACE, SPADES)"

    def test_counting_values(self):
        assert Card(Rank.ACE, Suit.CLUBS).value == 1
        assert Card(Rank.NINE, Suit.CLUBS).value == 9
        assert Card(Rank.TEN, Suit.CLUBS).value == 10
        assert Card(Rank.JACK, Suit.CLUBS).value == 10
        assert Card(Rank.QUEEN, Suit.CLUBS).value == 10
        assert Card(Rank.KING, Suit.CLUBS).value == 10

    def test_is_jack(self):
        assert Card(Rank.JACK, Suit.HEARTS).is_jack
        assert not Card(Rank.QUEEN, Suit.HEARTS).is_jack

    def test_card_ordering(self):
        """Cards should be ordered by rank, then suit."""
        ace_clubs = Card(Rank.ACE, Suit.CLUBS)
        ace_spades = Card(Rank.ACE, Suit.SPADES)
        two_clubs = Card(Rank.TWO, Suit.CLUBS)

        assert ace_clubs < ace_spades
        assert ace_spades < two_clubs

    def test_card_hash(self):
        card_set = {Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.CLUBS)}
        assert len(card_set) == 2


class TestParse:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("5H", Card(Rank.FIVE, Suit.HEARTS)),
            ("10♠", Card(Rank.TEN, Suit.SPADES)),
            ("TD", Card(Rank.TEN, Suit.DIAMONDS)),
            ("qc", Card(Rank.QUEEN, Suit.CLUBS)),
            (" AS ", Card(Rank.ACE, Suit.SPADES)),
        ],
    )
    def test_parse(self, text, expected):
        assert Card.parse(text) == expected

    @pytest.mark.parametrize("text", ["", "5", "1H", "5X", "11S"])
    def test_parse_rejects_garbage(self, text):
        with pytest.raises(ValueError):
            Card.parse(text)

    def test_parse_cards(self):
        assert parse_cards("5S, 5C 5H JD") == (
            Card(Rank.FIVE, Suit.SPADES),
            Card(Rank.FIVE, Suit.CLUBS),
            Card(Rank.FIVE, Suit.HEARTS),
            Card(Rank.JACK, Suit.DIAMONDS),
        )

    def test_str_round_trips_through_parse(self):
        for card in create_deck():
            assert Card.parse(str(card)) is card


class TestDeck:
    def test_create_deck(self):
        deck = create_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

    def test_shuffle_deck_deterministic(self):
        deck = create_deck()
        assert shuffle_deck(deck, seed=42) == shuffle_deck(deck, seed=42)

    def test_shuffle_deck_different_seeds(self):
        deck = create_deck()
        assert shuffle_deck(deck, seed=42) != shuffle_deck(deck, seed=43)

    def test_shuffle_is_a_permutation(self):
        deck = create_deck()
        shuffled = shuffle_deck(deck, seed="7:1")
        assert sorted(shuffled) == sorted(deck)
        assert deck == create_deck()  # Original untouched
