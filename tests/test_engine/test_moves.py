"""Tests for move types."""

import pytest

from cribbage_engine.cards import Card, Rank, Suit
from cribbage_engine.moves import CallGo, Discard, MoveType, PlayCard


class TestMoveTypes:
    def test_discard(self):
        cards = (Card(Rank.KING, Suit.SPADES), Card(Rank.QUEEN, Suit.HEARTS))
        move = Discard(player=0, cards=cards)
        assert move.move_type == MoveType.DISCARD
        assert move.cards == cards
        assert str(move) == "Player 0 discards K♠ Q♥ to the crib"

    def test_play_card(self):
        move = PlayCard(player=1, card=Card(Rank.FIVE, Suit.CLUBS))
        assert move.move_type == MoveType.PLAY_CARD
        assert str(move) == "Player 1 plays 5♣"

    def test_call_go(self):
        move = CallGo(player=1)
        assert move.move_type == MoveType.CALL_GO
        assert str(move) == "Player 1 says go"


class TestMoveEquality:
    def test_equal_moves(self):
        card = Card(Rank.ACE, Suit.CLUBS)
        assert PlayCard(player=0, card=card) == PlayCard(player=0, card=card)

    def test_player_matters(self):
        assert CallGo(player=0) != CallGo(player=1)

    def test_moves_are_hashable(self):
        card = Card(Rank.ACE, Suit.CLUBS)
        moves = {PlayCard(player=0, card=card), PlayCard(player=0, card=card), CallGo(player=0)}
        assert len(moves) == 2


class TestImmutability:
    def test_moves_are_frozen(self):
        move = CallGo(player=0)
        with pytest.raises(AttributeError):
            move.player = 1
