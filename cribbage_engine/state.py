"""Immutable game state models for Cribbage."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from cribbage_engine.cards import Card, create_deck, shuffle_deck
from cribbage_engine.config import DEFAULT_CONFIG, GameConfig
from cribbage_engine.errors import ConfigError

if TYPE_CHECKING:
    from cribbage_engine.scoring import ScoreBreakdown

HAND_SIZE = 6  # Cards dealt to each player
DISCARD_COUNT = 2  # Cards each player gives to the crib
KEPT_SIZE = HAND_SIZE - DISCARD_COUNT


class Phase(IntEnum):
    """Current phase of the game."""

    DEALING = auto()  # Cards about to be dealt
    DISCARDING = auto()  # Both players choose two cards for the crib
    CUTTING = auto()  # Starter about to be cut
    PEGGING = auto()  # Players alternate playing cards onto the count
    COUNTING = auto()  # Hands and crib scored: pone, dealer, crib
    ROUND_END = auto()  # Deal passes to the other player
    GAME_OVER = auto()  # Someone reached the winning score


class CountingStage(IntEnum):
    """Which hand is scored next during counting (order matters)."""

    PONE_HAND = 0
    DEALER_HAND = 1
    CRIB = 2


class ScoreReason(IntEnum):
    """Occasion on which points were pegged."""

    PEGGING = auto()  # Card played during the play
    GO = auto()  # Last card before the count reset
    HEELS = auto()  # Jack cut as starter
    HAND = auto()  # Hand counted in the show
    CRIB = auto()  # Crib counted for the dealer


@dataclass(frozen=True, slots=True)
class ScoreEvent:
    """Points applied to a player's score.

    Attributes:
        player: 0 or 1, who received the points
        reason: When the points were earned
        points: Points actually added (may be less than the breakdown
            total when the score is capped at the winning score)
        breakdown: Itemised scoring combinations
    """

    player: int
    reason: ScoreReason
    points: int
    breakdown: ScoreBreakdown


@dataclass(frozen=True, slots=True)
class PlayerState:
    """State of a single player.

    Attributes:
        score: Points pegged so far this game
        hand: Cards still held (6 after the deal, 4 after discarding,
            shrinking as cards are pegged)
        played: Cards already played during this round's pegging
    """

    score: int = 0
    hand: tuple[Card, ...] = ()
    played: tuple[Card, ...] = ()

    @property
    def counting_hand(self) -> tuple[Card, ...]:
        """The four kept cards, whether or not they have been pegged."""
        return tuple(sorted(self.hand + self.played))

    @property
    def has_cards(self) -> bool:
        return len(self.hand) > 0

    def with_score(self, score: int) -> PlayerState:
        """Return new state with updated score."""
        return replace(self, score=score)

    def with_hand(self, hand: tuple[Card, ...]) -> PlayerState:
        """Return new state with updated hand."""
        return replace(self, hand=hand)

    def with_played(self, played: tuple[Card, ...]) -> PlayerState:
        """Return new state with updated played cards."""
        return replace(self, played=played)


@dataclass(frozen=True, slots=True)
class PeggingState:
    """State of the play.

    Attributes:
        sequence: Cards played since the count last reset, oldest first
        current_player: 0 or 1, who must play or say go
        last_player: Who played the most recent card of this sequence
        go_players: Players who said go since the count last reset
        completed: Earlier sequences of this round, kept for display
    """

    current_player: int
    sequence: tuple[Card, ...] = ()
    last_player: int | None = None
    go_players: frozenset[int] = frozenset()
    completed: tuple[tuple[Card, ...], ...] = ()

    @property
    def count(self) -> int:
        """Running total of the current sequence."""
        return sum(card.value for card in self.sequence)

    def with_play(self, player: int, card: Card) -> PeggingState:
        """Return new state with a card added to the sequence."""
        return replace(self, sequence=self.sequence + (card,), last_player=player)

    def with_go(self, player: int) -> PeggingState:
        """Return new state with the player marked as having said go."""
        return replace(self, go_players=self.go_players | {player})

    def with_current_player(self, current_player: int) -> PeggingState:
        """Return new state with updated current player."""
        return replace(self, current_player=current_player)

    def reset(self, leader: int) -> PeggingState:
        """Start a new sequence led by ``leader``."""
        return PeggingState(
            current_player=leader,
            completed=self.completed + (self.sequence,),
        )


@dataclass(frozen=True, slots=True)
class RoundState:
    """Everything belonging to one deal.

    Attributes:
        deck: Cards not dealt (the starter is cut from here)
        crib: Discards, scored for the dealer
        starter: Card cut after discarding
        pegging: Present once the play has started
        counting_stage: Next hand to score during counting
        events: Points awarded during this round, in order
    """

    deck: tuple[Card, ...]
    crib: tuple[Card, ...] = ()
    starter: Card | None = None
    pegging: PeggingState | None = None
    counting_stage: CountingStage = CountingStage.PONE_HAND
    events: tuple[ScoreEvent, ...] = ()

    def with_deck(self, deck: tuple[Card, ...]) -> RoundState:
        """Return new state with updated deck."""
        return replace(self, deck=deck)

    def with_crib(self, crib: tuple[Card, ...]) -> RoundState:
        """Return new state with updated crib."""
        return replace(self, crib=crib)

    def with_starter(self, starter: Card) -> RoundState:
        """Return new state with the starter cut."""
        return replace(self, starter=starter)

    def with_pegging(self, pegging: PeggingState | None) -> RoundState:
        """Return new state with updated pegging state."""
        return replace(self, pegging=pegging)

    def with_counting_stage(self, counting_stage: CountingStage) -> RoundState:
        """Return new state with updated counting stage."""
        return replace(self, counting_stage=counting_stage)

    def with_event(self, event: ScoreEvent) -> RoundState:
        """Return new state with a score event appended."""
        return replace(self, events=self.events + (event,))


@dataclass(frozen=True, slots=True)
class GameState:
    """Complete immutable game state.

    Attributes:
        players: Tuple of two PlayerStates (index 0 and 1)
        round: The deal in progress
        dealer: 0 or 1, who owns the crib this round
        phase: Current game phase
        round_number: Current deal (starts at 1)
        seed: Seed used to shuffle each deal, or None for fresh randomness
        config: Rule configuration
        winner: 0, 1, or None if game ongoing
    """

    players: tuple[PlayerState, PlayerState]
    round: RoundState
    dealer: int
    phase: Phase = Phase.DEALING
    round_number: int = 1
    seed: int | None = None
    config: GameConfig = DEFAULT_CONFIG
    winner: int | None = None

    @property
    def pone(self) -> int:
        """The non-dealer, who leads the play and counts first."""
        return 1 - self.dealer

    @property
    def dealer_state(self) -> PlayerState:
        return self.players[self.dealer]

    @property
    def pone_state(self) -> PlayerState:
        return self.players[self.pone]

    @property
    def is_game_over(self) -> bool:
        """Whether the game has ended."""
        return self.winner is not None

    @property
    def scores(self) -> tuple[int, int]:
        return (self.players[0].score, self.players[1].score)

    def with_players(self, players: tuple[PlayerState, PlayerState]) -> GameState:
        """Return new state with updated players."""
        return replace(self, players=players)

    def with_player(self, index: int, player: PlayerState) -> GameState:
        """Return new state with one player replaced."""
        players = list(self.players)
        players[index] = player
        return replace(self, players=(players[0], players[1]))

    def with_round(self, round_state: RoundState) -> GameState:
        """Return new state with updated round."""
        return replace(self, round=round_state)

    def with_phase(self, phase: Phase) -> GameState:
        """Return new state with updated phase."""
        return replace(self, phase=phase)

    def with_winner(self, winner: int) -> GameState:
        """Return new state with winner set."""
        return replace(self, winner=winner, phase=Phase.GAME_OVER)


def round_seed(seed: int | None, round_number: int) -> str | None:
    """Seed for shuffling a given deal, derived from the game seed."""
    if seed is None:
        return None
    return f"{seed}:{round_number}"


def cut_for_deal(seed: int | None = None) -> tuple[int, tuple[Card, Card]]:
    """Choose the first dealer by cutting cards.

    Each player cuts one card from a shuffled deck; the higher card (by rank,
    then suit) deals.

    Returns:
        Tuple of (dealer, (player 0's card, player 1's card)).
    """
    deck = shuffle_deck(create_deck(), None if seed is None else f"{seed}:cut")
    # Player 1 cuts from the middle of what is left after player 0's cut.
    cuts = (deck[0], deck[len(deck) // 2])
    dealer = 0 if cuts[0] > cuts[1] else 1
    return dealer, cuts


def new_game(
    seed: int | None = None,
    config: GameConfig | None = None,
    deck: list[Card] | None = None,
    dealer: int | None = None,
) -> GameState:
    """Create the initial game state, ready to deal.

    Args:
        seed: Random seed for the cut and for shuffling every deal.
        config: Rule configuration. Defaults to a game to 121.
        deck: Optional pre-ordered deck for the first deal. Later deals are
            shuffled from ``seed``.
        dealer: Force the first dealer instead of cutting for it.

    Returns:
        Game state in the DEALING phase with both scores at zero.

    Raises:
        ConfigError: If the deck is not the 52 distinct cards of a full
            pack, or the dealer is not 0 or 1.
    """
    config = config or DEFAULT_CONFIG

    if deck is None:
        deck = shuffle_deck(create_deck(), round_seed(seed, 1))
    elif len(set(deck)) != len(deck):
        raise ConfigError("Deck contains duplicate cards")
    elif set(deck) != set(create_deck()):
        raise ConfigError(f"Deck must hold all 52 cards, got {len(deck)}")

    if dealer is None:
        dealer = cut_for_deal(seed)[0] if config.cut_for_deal else 0
    elif dealer not in (0, 1):
        raise ConfigError(f"Dealer must be 0 or 1, got {dealer}")

    return GameState(
        players=(PlayerState(), PlayerState()),
        round=RoundState(deck=tuple(deck)),
        dealer=dealer,
        phase=Phase.DEALING,
        seed=seed,
        config=config,
    )
