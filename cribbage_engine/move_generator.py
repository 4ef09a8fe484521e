"""Legal move generation and move validation for Cribbage."""

from __future__ import annotations

from itertools import combinations

from cribbage_engine.cards import Card
from cribbage_engine.errors import (
    GameAlreadyOverError,
    InvalidMoveError,
    PeggingOverflowError,
)
from cribbage_engine.moves import CallGo, Discard, Move, PlayCard
from cribbage_engine.scoring import MAX_COUNT
from cribbage_engine.state import DISCARD_COUNT, HAND_SIZE, GameState, Phase

# Phases that advance without a player decision.
AUTOMATIC_PHASES = frozenset({Phase.DEALING, Phase.CUTTING, Phase.COUNTING, Phase.ROUND_END})


def acting_players(state: GameState) -> tuple[int, ...]:
    """Players who may submit a move right now.

    While discarding both players act independently (pone listed first);
    during pegging only the player whose turn it is.
    """
    if state.is_game_over:
        return ()

    match state.phase:
        case Phase.DISCARDING:
            return tuple(
                i for i in (state.pone, state.dealer)
                if len(state.players[i].hand) == HAND_SIZE
            )
        case Phase.PEGGING:
            return (state.round.pegging.current_player,)

    return ()


def playable_cards(state: GameState, player: int) -> tuple[Card, ...]:
    """Cards in the player's hand that keep the count at 31 or under."""
    pegging = state.round.pegging
    if pegging is None:
        return ()
    room = MAX_COUNT - pegging.count
    return tuple(card for card in state.players[player].hand if card.value <= room)


def generate_legal_moves(state: GameState, player: int | None = None) -> list[Move]:
    """Generate all legal moves for the current game state.

    Args:
        state: Current game state.
        player: Restrict to one player's moves. By default moves for every
            acting player are returned.

    Returns:
        List of legal moves. Empty in automatic phases and after game over.
    """
    moves: list[Move] = []

    for acting in acting_players(state):
        if player is not None and acting != player:
            continue

        match state.phase:
            case Phase.DISCARDING:
                moves.extend(_generate_discard_moves(state, acting))
            case Phase.PEGGING:
                moves.extend(_generate_pegging_moves(state, acting))

    return moves


def _generate_discard_moves(state: GameState, player: int) -> list[Move]:
    """Every way to choose two cards for the crib (15 from six cards)."""
    hand = state.players[player].hand
    return [Discard(player=player, cards=combo) for combo in combinations(hand, DISCARD_COUNT)]


def _generate_pegging_moves(state: GameState, player: int) -> list[Move]:
    """Every card that fits under 31, or go when none does."""
    cards = playable_cards(state, player)
    if not cards:
        return [CallGo(player=player)]
    return [PlayCard(player=player, card=card) for card in cards]


def validate_move(state: GameState, move: Move) -> None:
    """Check a move against the current phase, turn and hand.

    Raises:
        GameAlreadyOverError: If the game has ended.
        InvalidMoveError: For wrong phase, wrong turn, cards not held,
            a bad discard, or go while a card can still be played.
        PeggingOverflowError: If a played card would take the count past 31.
    """
    if state.is_game_over:
        raise GameAlreadyOverError(f"Game is already over, player {state.winner} won")
    if move.player not in (0, 1):
        raise InvalidMoveError(f"No such player: {move.player}")

    match move:
        case Discard():
            _validate_discard(state, move)
        case PlayCard():
            _validate_play(state, move)
        case CallGo():
            _validate_go(state, move)
        case _:
            raise InvalidMoveError(f"Unknown move type: {type(move)}")


def _validate_discard(state: GameState, move: Discard) -> None:
    if state.phase != Phase.DISCARDING:
        raise InvalidMoveError(f"Cannot discard during {state.phase.name}")

    hand = state.players[move.player].hand
    if len(hand) != HAND_SIZE:
        raise InvalidMoveError(f"Player {move.player} has already discarded")
    if len(move.cards) != DISCARD_COUNT:
        raise InvalidMoveError(
            f"Must discard exactly {DISCARD_COUNT} cards, got {len(move.cards)}"
        )
    if len(set(move.cards)) != len(move.cards):
        raise InvalidMoveError("Cannot discard the same card twice")
    for card in move.cards:
        if card not in hand:
            raise InvalidMoveError(f"Card {card} not in hand")


def _validate_pegging_turn(state: GameState, move: Move) -> None:
    if state.phase != Phase.PEGGING:
        raise InvalidMoveError(f"Cannot {move.move_type.name.lower()} during {state.phase.name}")

    current = state.round.pegging.current_player
    if move.player != current:
        raise InvalidMoveError(f"Not player {move.player}'s turn, waiting for player {current}")


def _validate_play(state: GameState, move: PlayCard) -> None:
    _validate_pegging_turn(state, move)

    player = state.players[move.player]
    if move.card not in player.hand:
        if move.card in player.played:
            raise InvalidMoveError(f"Card {move.card} has already been played")
        raise InvalidMoveError(f"Card {move.card} not in hand")

    count = state.round.pegging.count + move.card.value
    if count > MAX_COUNT:
        raise PeggingOverflowError(
            f"Playing {move.card} would make the count {count}, over {MAX_COUNT}"
        )


def _validate_go(state: GameState, move: CallGo) -> None:
    _validate_pegging_turn(state, move)

    cards = playable_cards(state, move.player)
    if cards:
        playable = ", ".join(str(card) for card in cards)
        raise InvalidMoveError(f"Cannot say go while able to play: {playable}")
