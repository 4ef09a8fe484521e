"""Tests for move generation and validation."""

import pytest

from cribbage_engine.cards import Card, parse_cards
from cribbage_engine.errors import (
    GameAlreadyOverError,
    InvalidMoveError,
    PeggingOverflowError,
)
from cribbage_engine.executor import advance, submit_move
from cribbage_engine.move_generator import (
    acting_players,
    generate_legal_moves,
    playable_cards,
    validate_move,
)
from cribbage_engine.moves import CallGo, Discard, PlayCard
from cribbage_engine.state import (
    GameState,
    PeggingState,
    Phase,
    PlayerState,
    RoundState,
    new_game,
)


def dealt_state() -> GameState:
    return advance(new_game(seed=42))


def pegging_state(
    hand0: str, hand1: str, sequence: str = "", current_player: int = 1
) -> GameState:
    """Dealer is player 0; player 1 leads."""
    return GameState(
        players=(PlayerState(hand=parse_cards(hand0)), PlayerState(hand=parse_cards(hand1))),
        round=RoundState(
            deck=(),
            starter=Card.parse("2S"),
            pegging=PeggingState(current_player=current_player, sequence=parse_cards(sequence)),
        ),
        dealer=0,
        phase=Phase.PEGGING,
    )


class TestActingPlayers:
    def test_nobody_acts_while_dealing(self):
        assert acting_players(new_game(seed=1)) == ()

    def test_both_players_discard(self):
        state = dealt_state()
        assert acting_players(state) == (state.pone, state.dealer)

    def test_player_drops_out_after_discarding(self):
        state = dealt_state()
        hand = state.pone_state.hand
        state = submit_move(state, Discard(player=state.pone, cards=hand[:2]))
        assert acting_players(state) == (state.dealer,)

    def test_current_player_while_pegging(self):
        assert acting_players(pegging_state("KS", "5H")) == (1,)

    def test_nobody_after_game_over(self):
        state = pegging_state("KS", "5H").with_winner(0)
        assert acting_players(state) == ()


class TestDiscardMoves:
    def test_fifteen_discards_per_player(self):
        state = dealt_state()
        moves = generate_legal_moves(state)
        assert len(moves) == 30
        assert all(isinstance(m, Discard) for m in moves)

    def test_filter_by_player(self):
        state = dealt_state()
        moves = generate_legal_moves(state, player=state.dealer)
        assert len(moves) == 15
        assert all(m.player == state.dealer for m in moves)

    def test_no_moves_in_automatic_phases(self):
        assert generate_legal_moves(new_game(seed=1)) == []


class TestPeggingMoves:
    def test_playable_cards(self):
        state = pegging_state("KS", "9H 5D 2C", sequence="KD QC")
        assert playable_cards(state, 1) == parse_cards("9H 5D 2C")

    def test_only_cards_under_thirty_one(self):
        state = pegging_state("KS", "9H 5D 2C", sequence="KD QC 3S")
        moves = generate_legal_moves(state)
        assert moves == [PlayCard(player=1, card=Card.parse("5D")), PlayCard(player=1, card=Card.parse("2C"))]

    def test_go_when_nothing_fits(self):
        state = pegging_state("KS", "9H 8D", sequence="KD QC 5S")
        assert generate_legal_moves(state) == [CallGo(player=1)]


class TestValidateDiscard:
    def test_valid(self):
        state = dealt_state()
        validate_move(state, Discard(player=0, cards=state.players[0].hand[:2]))

    def test_wrong_count(self):
        state = dealt_state()
        with pytest.raises(InvalidMoveError):
            validate_move(state, Discard(player=0, cards=state.players[0].hand[:1]))
        with pytest.raises(InvalidMoveError):
            validate_move(state, Discard(player=0, cards=state.players[0].hand[:3]))

    def test_card_not_owned(self):
        state = dealt_state()
        other = state.players[1].hand[0]
        with pytest.raises(InvalidMoveError, match="not in hand"):
            validate_move(state, Discard(player=0, cards=(state.players[0].hand[0], other)))

    def test_same_card_twice(self):
        state = dealt_state()
        card = state.players[0].hand[0]
        with pytest.raises(InvalidMoveError):
            validate_move(state, Discard(player=0, cards=(card, card)))

    def test_discard_twice(self):
        state = dealt_state()
        state = submit_move(state, Discard(player=0, cards=state.players[0].hand[:2]))
        with pytest.raises(InvalidMoveError, match="already discarded"):
            validate_move(state, Discard(player=0, cards=state.players[0].hand[:2]))

    def test_wrong_phase(self):
        state = pegging_state("KS QS", "5H 6H")
        with pytest.raises(InvalidMoveError):
            validate_move(state, Discard(player=0, cards=parse_cards("KS QS")))

    def test_unknown_player(self):
        state = dealt_state()
        with pytest.raises(InvalidMoveError):
            validate_move(state, Discard(player=2, cards=state.players[0].hand[:2]))


class TestValidatePegging:
    def test_wrong_turn(self):
        state = pegging_state("KS", "5H")
        with pytest.raises(InvalidMoveError, match="turn"):
            validate_move(state, PlayCard(player=0, card=Card.parse("KS")))

    def test_card_not_in_hand(self):
        state = pegging_state("KS", "5H")
        with pytest.raises(InvalidMoveError):
            validate_move(state, PlayCard(player=1, card=Card.parse("KS")))

    def test_overflow(self):
        state = pegging_state("KS", "9H", sequence="KD QC 5S")
        with pytest.raises(PeggingOverflowError):
            validate_move(state, PlayCard(player=1, card=Card.parse("9H")))

    def test_go_not_allowed_with_playable_card(self):
        state = pegging_state("KS", "9H AC", sequence="KD QC 5S")
        with pytest.raises(InvalidMoveError, match="able to play"):
            validate_move(state, CallGo(player=1))

    def test_go_allowed(self):
        state = pegging_state("KS", "9H", sequence="KD QC 5S")
        validate_move(state, CallGo(player=1))

    def test_play_in_discarding_phase(self):
        state = dealt_state()
        with pytest.raises(InvalidMoveError):
            validate_move(state, PlayCard(player=state.pone, card=state.pone_state.hand[0]))

    def test_game_over(self):
        state = pegging_state("KS", "5H").with_winner(0)
        with pytest.raises(GameAlreadyOverError):
            validate_move(state, PlayCard(player=1, card=Card.parse("5H")))
