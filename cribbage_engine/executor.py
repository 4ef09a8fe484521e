"""Move execution and phase transitions for Cribbage."""

from __future__ import annotations

import logging

from cribbage_engine.cards import create_deck, shuffle_deck
from cribbage_engine.errors import GameAlreadyOverError, InvalidMoveError
from cribbage_engine.move_generator import AUTOMATIC_PHASES, validate_move
from cribbage_engine.moves import CallGo, Discard, Move, PlayCard
from cribbage_engine.scoring import (
    MAX_COUNT,
    ScoreBreakdown,
    score_go,
    score_hand,
    score_heels,
    score_pegging_play,
)
from cribbage_engine.state import (
    HAND_SIZE,
    KEPT_SIZE,
    CountingStage,
    GameState,
    PeggingState,
    Phase,
    PlayerState,
    RoundState,
    ScoreEvent,
    ScoreReason,
    round_seed,
)

logger = logging.getLogger(__name__)


def submit_move(state: GameState, move: Move) -> GameState:
    """Apply a player's move and return the new game state.

    Args:
        state: Current game state.
        move: Move to apply.

    Returns:
        New game state after the move. ``state`` itself is never modified.

    Raises:
        InvalidMoveError: If the move is not legal in this phase or turn.
        PeggingOverflowError: If a played card would take the count past 31.
        GameAlreadyOverError: If the game has already been won.
    """
    validate_move(state, move)
    logger.debug(f"Round {state.round_number}: {move}")

    match move:
        case Discard():
            return _execute_discard(state, move)
        case PlayCard():
            return _execute_play_card(state, move)
        case CallGo():
            return _execute_call_go(state, move)
        case _:
            raise InvalidMoveError(f"Unknown move type: {type(move)}")


def advance(state: GameState) -> GameState:
    """Perform the next transition that needs no player decision.

    DEALING deals both hands, CUTTING turns the starter, each COUNTING step
    scores one of pone's hand, dealer's hand and the crib, and ROUND_END
    passes the deal.

    Raises:
        InvalidMoveError: If the current phase is waiting on a player.
        GameAlreadyOverError: If the game has already been won.
    """
    if state.is_game_over:
        raise GameAlreadyOverError(f"Game is already over, player {state.winner} won")

    match state.phase:
        case Phase.DEALING:
            return _deal(state)
        case Phase.CUTTING:
            return _cut(state)
        case Phase.COUNTING:
            return _count_next(state)
        case Phase.ROUND_END:
            return _end_round(state)

    raise InvalidMoveError(f"{state.phase.name} is waiting for a player move")


def advance_until_decision(state: GameState) -> GameState:
    """Advance through automatic phases until a player must act or the game ends."""
    while not state.is_game_over and state.phase in AUTOMATIC_PHASES:
        state = advance(state)
    return state


def current_phase(state: GameState) -> Phase:
    """Phase the game is in."""
    return state.phase


def scores(state: GameState) -> tuple[int, int]:
    """Scores of player 0 and player 1."""
    return state.scores


def _award(
    state: GameState,
    player: int,
    breakdown: ScoreBreakdown,
    reason: ScoreReason,
    record_empty: bool = False,
) -> GameState:
    """Add points to a player's score, ending the game at the winning score."""
    if breakdown.total == 0 and not record_empty:
        return state

    winning_score = state.config.winning_score
    player_state = state.players[player]
    new_score = min(player_state.score + breakdown.total, winning_score)
    event = ScoreEvent(
        player=player,
        reason=reason,
        points=new_score - player_state.score,
        breakdown=breakdown,
    )
    logger.debug(f"Player {player} scores {event.points} ({reason.name}): {breakdown}")

    new_state = state.with_player(player, player_state.with_score(new_score)).with_round(
        state.round.with_event(event)
    )

    if new_score >= winning_score:
        logger.info(f"Player {player} wins with {new_score} in round {state.round_number}")
        return new_state.with_winner(player)

    return new_state


def _deal(state: GameState) -> GameState:
    """Deal six cards to each player, one at a time, pone first."""
    deck = state.round.deck
    order = (state.pone, state.dealer)
    hands: tuple[list, list] = ([], [])
    for i in range(HAND_SIZE * 2):
        hands[order[i % 2]].append(deck[i])

    players = (
        PlayerState(score=state.players[0].score, hand=tuple(sorted(hands[0]))),
        PlayerState(score=state.players[1].score, hand=tuple(sorted(hands[1]))),
    )
    logger.debug(f"Round {state.round_number}: player {state.dealer} deals")

    return (
        state.with_players(players)
        .with_round(state.round.with_deck(deck[HAND_SIZE * 2:]))
        .with_phase(Phase.DISCARDING)
    )


def _execute_discard(state: GameState, move: Discard) -> GameState:
    """Move two cards from a player's hand into the crib."""
    player = state.players[move.player]
    new_hand = tuple(c for c in player.hand if c not in move.cards)
    new_state = state.with_player(move.player, player.with_hand(new_hand)).with_round(
        state.round.with_crib(state.round.crib + tuple(move.cards))
    )

    if all(len(p.hand) == KEPT_SIZE for p in new_state.players):
        return new_state.with_phase(Phase.CUTTING)
    return new_state


def _cut(state: GameState) -> GameState:
    """Turn the starter; a Jack gives the dealer two for his heels."""
    starter = state.round.deck[0]
    new_round = (
        state.round.with_deck(state.round.deck[1:])
        .with_starter(starter)
        .with_pegging(PeggingState(current_player=state.pone))
    )
    logger.debug(f"Round {state.round_number}: starter is {starter}")

    new_state = _award(
        state.with_round(new_round), state.dealer, score_heels(starter), ScoreReason.HEELS
    )
    if new_state.is_game_over:
        return new_state

    return new_state.with_phase(Phase.PEGGING)


def _execute_play_card(state: GameState, move: PlayCard) -> GameState:
    """Peg a card onto the count and score it."""
    pegging = state.round.pegging
    breakdown = score_pegging_play(pegging.sequence, move.card)

    player = state.players[move.player]
    new_player = player.with_hand(tuple(c for c in player.hand if c != move.card)).with_played(
        player.played + (move.card,)
    )
    new_state = state.with_player(move.player, new_player).with_round(
        state.round.with_pegging(pegging.with_play(move.player, move.card))
    )

    new_state = _award(new_state, move.player, breakdown, ScoreReason.PEGGING)
    if new_state.is_game_over:
        return new_state

    return _next_pegging_turn(new_state)


def _execute_call_go(state: GameState, move: CallGo) -> GameState:
    """Record that a player cannot play on this count."""
    pegging = state.round.pegging
    new_state = state.with_round(state.round.with_pegging(pegging.with_go(move.player)))
    return _next_pegging_turn(new_state)


def _can_continue(state: GameState, player: int) -> bool:
    """Whether the player may still act on the current count."""
    pegging = state.round.pegging
    return state.players[player].has_cards and player not in pegging.go_players


def _next_pegging_turn(state: GameState) -> GameState:
    """Pass the turn after a play or go, resetting the count when nobody can go on.

    The opponent plays next unless they have said go or have no cards, in
    which case the same player continues.
    """
    pegging = state.round.pegging

    if pegging.count == MAX_COUNT:
        return _end_sequence(state, award_go=False)

    actor = pegging.current_player
    for candidate in (1 - actor, actor):
        if _can_continue(state, candidate):
            return state.with_round(
                state.round.with_pegging(pegging.with_current_player(candidate))
            )

    return _end_sequence(state, award_go=True)


def _end_sequence(state: GameState, award_go: bool) -> GameState:
    """Close the current count and start a new one, or move on to counting."""
    pegging = state.round.pegging
    last_player = pegging.last_player

    if award_go and last_player is not None:
        state = _award(
            state,
            last_player,
            score_go(pegging.count, pegging.sequence[-1] if pegging.sequence else None),
            ScoreReason.GO,
        )
        if state.is_game_over:
            return state

    if not any(p.has_cards for p in state.players):
        logger.debug(f"Round {state.round_number}: play finished, counting hands")
        return state.with_round(
            state.round.with_pegging(pegging.reset(state.pone)).with_counting_stage(
                CountingStage.PONE_HAND
            )
        ).with_phase(Phase.COUNTING)

    # The player after the one who played last leads the next count.
    leader = state.pone if last_player is None else 1 - last_player
    if not state.players[leader].has_cards:
        leader = 1 - leader

    return state.with_round(state.round.with_pegging(pegging.reset(leader)))


def _count_next(state: GameState) -> GameState:
    """Score the next hand in counting order: pone, dealer, crib.

    The game ends as soon as a count reaches the winning score; hands later
    in the order are not counted.
    """
    stage = state.round.counting_stage
    starter = state.round.starter

    match stage:
        case CountingStage.PONE_HAND:
            player = state.pone
            breakdown = score_hand(state.pone_state.counting_hand, starter)
            reason = ScoreReason.HAND
        case CountingStage.DEALER_HAND:
            player = state.dealer
            breakdown = score_hand(state.dealer_state.counting_hand, starter)
            reason = ScoreReason.HAND
        case _:
            player = state.dealer
            breakdown = score_hand(state.round.crib, starter, is_crib=True)
            reason = ScoreReason.CRIB

    new_state = _award(state, player, breakdown, reason, record_empty=True)
    if new_state.is_game_over:
        return new_state

    if stage == CountingStage.CRIB:
        return new_state.with_phase(Phase.ROUND_END)
    return new_state.with_round(
        new_state.round.with_counting_stage(CountingStage(stage + 1))
    )


def _end_round(state: GameState) -> GameState:
    """Gather the cards, pass the deal and shuffle for the next round."""
    winning_score = state.config.winning_score
    for i, player in enumerate(state.players):
        if player.score >= winning_score:
            return state.with_winner(i)

    round_number = state.round_number + 1
    deck = shuffle_deck(create_deck(), round_seed(state.seed, round_number))
    players = (
        PlayerState(score=state.players[0].score),
        PlayerState(score=state.players[1].score),
    )
    logger.debug(f"Round {state.round_number} over, scores {state.scores}")

    return GameState(
        players=players,
        round=RoundState(deck=tuple(deck)),
        dealer=1 - state.dealer,
        phase=Phase.DEALING,
        round_number=round_number,
        seed=state.seed,
        config=state.config,
    )
