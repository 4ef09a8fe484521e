"""Scoring engine for Cribbage.

Two contracts live here:

* Counting: ``score_hand`` evaluates four cards (a hand or the crib) plus the
  starter by enumerating every subset of the five cards.
* Pegging: ``score_pegging_play`` evaluates the card just played against the
  cards played since the last reset of the count.

Every function is pure. Results are returned as a ``ScoreBreakdown`` made of
tagged ``ScoreItem`` entries so callers can see where each point came from.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import IntEnum, auto
from itertools import combinations

from cribbage_engine.cards import Card
from cribbage_engine.errors import MalformedHandError, PeggingOverflowError

# Cards in a counted hand or crib, not including the starter.
COUNTED_HAND_SIZE = 4

# 5-5-5-J with the fifth five cut as starter (J matching its suit).
MAX_HAND_SCORE = 29

MAX_COUNT = 31
FIFTEEN = 15
MIN_RUN_LENGTH = 3


class ScoreCategory(IntEnum):
    """Why points were awarded."""

    FIFTEEN = auto()  # Cards summing to 15
    PAIR = auto()  # Same rank (pairs royal counted as several pairs)
    RUN = auto()  # Consecutive ranks
    FLUSH = auto()  # Hand (and possibly starter) share a suit
    NOBS = auto()  # Jack in hand matching the starter's suit
    HEELS = auto()  # Starter is a Jack, dealer pegs 2
    THIRTY_ONE = auto()  # Pegging count reached exactly 31
    GO = auto()  # Last card before the count resets


@dataclass(frozen=True, slots=True)
class ScoreItem:
    """A single scoring combination.

    Attributes:
        category: What kind of combination this is.
        points: Points awarded for it.
        cards: The cards that make up the combination.
    """

    category: ScoreCategory
    points: int
    cards: tuple[Card, ...] = ()

    def __str__(self) -> str:
        name = self.category.name.lower().replace("_", " ")
        if not self.cards:
            return f"{name} for {self.points}"
        cards = " ".join(str(card) for card in self.cards)
        return f"{name} for {self.points} ({cards})"


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """Ordered collection of scoring items with a total."""

    items: tuple[ScoreItem, ...] = ()

    @property
    def total(self) -> int:
        return sum(item.points for item in self.items)

    def points_for(self, category: ScoreCategory) -> int:
        """Total points awarded under one category."""
        return sum(item.points for item in self.items if item.category == category)

    def count(self, category: ScoreCategory) -> int:
        """Number of separate combinations scored under one category."""
        return sum(1 for item in self.items if item.category == category)

    def __iter__(self) -> Iterator[ScoreItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        if not self.items:
            return "0"
        return "; ".join(str(item) for item in self.items) + f" = {self.total}"


def _is_run(cards: Iterable[Card]) -> bool:
    """Whether the cards have distinct, consecutive ranks in some order."""
    ranks = sorted(card.rank for card in cards)
    return all(high - low == 1 for low, high in zip(ranks, ranks[1:]))


def score_fifteens(cards: Sequence[Card]) -> tuple[ScoreItem, ...]:
    """Two points for every subset of two or more cards summing to 15."""
    items = []
    for size in range(2, len(cards) + 1):
        for combo in combinations(cards, size):
            if sum(card.value for card in combo) == FIFTEEN:
                items.append(ScoreItem(ScoreCategory.FIFTEEN, 2, combo))
    return tuple(items)


def score_pairs(cards: Sequence[Card]) -> tuple[ScoreItem, ...]:
    """Two points for every unordered pair of cards sharing a rank.

    Three of a kind yields three pairs and four of a kind six.
    """
    return tuple(
        ScoreItem(ScoreCategory.PAIR, 2, (first, second))
        for first, second in combinations(cards, 2)
        if first.rank == second.rank
    )


def score_runs(cards: Sequence[Card]) -> tuple[ScoreItem, ...]:
    """Runs of the longest length present, one item per distinct combination.

    A duplicated rank inside a run produces one run per duplicate, so
    3-4-4-5 scores two runs of three. Shorter runs contained in a longer one
    are not scored.
    """
    ordered = sorted(cards)
    for length in range(len(ordered), MIN_RUN_LENGTH - 1, -1):
        runs = [combo for combo in combinations(ordered, length) if _is_run(combo)]
        if runs:
            return tuple(ScoreItem(ScoreCategory.RUN, length, combo) for combo in runs)
    return ()


def score_flush(hand: Sequence[Card], starter: Card, is_crib: bool = False) -> tuple[ScoreItem, ...]:
    """Four for a hand of one suit, five if the starter matches too.

    The crib only scores the five-card flush.
    """
    suits = {card.suit for card in hand}
    if len(suits) != 1:
        return ()
    if starter.suit in suits:
        return (ScoreItem(ScoreCategory.FLUSH, 5, tuple(hand) + (starter,)),)
    if is_crib:
        return ()
    return (ScoreItem(ScoreCategory.FLUSH, len(hand), tuple(hand)),)


def score_nobs(hand: Sequence[Card], starter: Card) -> tuple[ScoreItem, ...]:
    """One for the Jack in hand of the same suit as the starter."""
    return tuple(
        ScoreItem(ScoreCategory.NOBS, 1, (card,))
        for card in hand
        if card.is_jack and card.suit == starter.suit
    )


def score_hand(cards: Sequence[Card], starter: Card, is_crib: bool = False) -> ScoreBreakdown:
    """Score four cards plus the starter.

    Args:
        cards: Exactly four cards, a hand or the crib.
        starter: The card cut after discarding.
        is_crib: Whether ``cards`` is the crib (affects flushes only).

    Returns:
        Breakdown of fifteens, pairs, runs, flush and nobs.

    Raises:
        MalformedHandError: If there are not exactly four distinct cards or
            the starter also appears among them.
    """
    cards = tuple(cards)
    if len(cards) != COUNTED_HAND_SIZE:
        raise MalformedHandError(
            f"Expected {COUNTED_HAND_SIZE} cards to score, got {len(cards)}"
        )
    if len(set(cards) | {starter}) != COUNTED_HAND_SIZE + 1:
        raise MalformedHandError("Hand and starter must be five distinct cards")

    all_cards = cards + (starter,)
    return ScoreBreakdown(
        score_fifteens(all_cards)
        + score_pairs(all_cards)
        + score_runs(all_cards)
        + score_flush(cards, starter, is_crib)
        + score_nobs(cards, starter)
    )


def score_crib(cards: Sequence[Card], starter: Card) -> ScoreBreakdown:
    """Score the crib (flush must include the starter)."""
    return score_hand(cards, starter, is_crib=True)


def score_heels(starter: Card) -> ScoreBreakdown:
    """Two for the dealer when the starter is a Jack ("his heels")."""
    if starter.is_jack:
        return ScoreBreakdown((ScoreItem(ScoreCategory.HEELS, 2, (starter,)),))
    return ScoreBreakdown()


def pegging_count(sequence: Iterable[Card]) -> int:
    """Running count of a pegging sequence."""
    return sum(card.value for card in sequence)


def _score_trailing_pairs(played: Sequence[Card]) -> tuple[ScoreItem, ...]:
    last = played[-1]
    matching = 1
    for card in reversed(played[:-1]):
        if card.rank != last.rank or matching == 4:
            break
        matching += 1
    if matching < 2:
        return ()
    pairs = matching * (matching - 1) // 2
    return (ScoreItem(ScoreCategory.PAIR, 2 * pairs, tuple(played[-matching:])),)


def _score_trailing_run(played: Sequence[Card]) -> tuple[ScoreItem, ...]:
    for length in range(len(played), MIN_RUN_LENGTH - 1, -1):
        window = tuple(played[-length:])
        if _is_run(window):
            return (ScoreItem(ScoreCategory.RUN, length, window),)
    return ()


def score_pegging_play(sequence: Sequence[Card], card: Card) -> ScoreBreakdown:
    """Score the card just played during pegging.

    Args:
        sequence: Cards played since the count last reset, oldest first,
            not including ``card``.
        card: The card being played.

    Returns:
        Points for the player who played ``card``: 15 and 31 for two each,
        trailing pairs (2, 6 or 12), and the longest trailing run.

    Raises:
        PeggingOverflowError: If the play takes the count past 31.
        MalformedHandError: If ``card`` was already played in this sequence.
    """
    if card in sequence:
        raise MalformedHandError(f"{card} has already been played")
    count = pegging_count(sequence) + card.value
    if count > MAX_COUNT:
        raise PeggingOverflowError(
            f"Playing {card} would make the count {count}, over {MAX_COUNT}"
        )

    played = tuple(sequence) + (card,)
    items: list[ScoreItem] = []
    if count == FIFTEEN:
        items.append(ScoreItem(ScoreCategory.FIFTEEN, 2, played))
    elif count == MAX_COUNT:
        items.append(ScoreItem(ScoreCategory.THIRTY_ONE, 2, played))
    items.extend(_score_trailing_pairs(played))
    items.extend(_score_trailing_run(played))
    return ScoreBreakdown(tuple(items))


def score_go(count: int, last_card: Card | None = None) -> ScoreBreakdown:
    """Point for the last card played before the count resets.

    A series that stopped at exactly 31 already earned two points through
    ``ScoreCategory.THIRTY_ONE`` when the card was played, so nothing more is
    awarded here in that case.
    """
    if count > MAX_COUNT:
        raise PeggingOverflowError(f"Count {count} is over {MAX_COUNT}")
    if count == MAX_COUNT or count == 0:
        return ScoreBreakdown()
    cards = (last_card,) if last_card is not None else ()
    return ScoreBreakdown((ScoreItem(ScoreCategory.GO, 1, cards),))
