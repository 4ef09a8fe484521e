"""Card, Suit, and Rank models for Cribbage."""

from __future__ import annotations

import random
from enum import IntEnum
from functools import total_ordering
from typing import ClassVar


class Suit(IntEnum):
    """Card suits. Only compared for flushes, nobs and the cut for deal."""

    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        return "♣♦♥♠"[self]

    @property
    def letter(self) -> str:
        return self.name[0]


class Rank(IntEnum):
    """Card ranks (Ace=1 through King=13)."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        if 2 <= self <= 10:
            return str(self.value)
        return self.name[0]


_SUIT_LOOKUP = {suit.letter: suit for suit in Suit} | {suit.symbol: suit for suit in Suit}
_RANK_LOOKUP = {rank.symbol: rank for rank in Rank} | {"T": Rank.TEN}


@total_ordering
class Card:
    """A playing card with Cribbage-specific properties.

    Cards are immutable and comparable. Comparison is first by rank,
    then by suit.
    """

    __slots__ = ("_rank", "_suit")

    # Pre-computed card instances for the standard 52-card deck
    _instances: ClassVar[dict[tuple[Rank, Suit], Card]] = {}

    def __new__(cls, rank: Rank, suit: Suit) -> Card:
        key = (Rank(rank), Suit(suit))
        if key not in cls._instances:
            instance = object.__new__(cls)
            instance._rank = key[0]
            instance._suit = key[1]
            cls._instances[key] = instance
        return cls._instances[key]

    @classmethod
    def parse(cls, text: str) -> Card:
        """Parse a card from text such as ``"5H"``, ``"10♠"`` or ``"qd"``.

        Raises:
            ValueError: If the text does not name a card.
        """
        cleaned = text.strip().upper()
        if len(cleaned) < 2:
            raise ValueError(f"Cannot parse card: {text!r}")
        rank = _RANK_LOOKUP.get(cleaned[:-1])
        suit = _SUIT_LOOKUP.get(cleaned[-1])
        if rank is None or suit is None:
            raise ValueError(f"Cannot parse card: {text!r}")
        return cls(rank, suit)

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def value(self) -> int:
        """Counting value: face value for A-10, 10 for J, Q, K."""
        return min(self._rank.value, 10)

    @property
    def is_jack(self) -> bool:
        return self._rank == Rank.JACK

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self._rank == other._rank and self._suit == other._suit

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        if self._rank != other._rank:
            return self._rank < other._rank
        return self._suit < other._suit

    def __hash__(self) -> int:
        return hash((self._rank, self._suit))

    def __reduce__(self) -> tuple:
        """Support pickling for multiprocessing."""
        return (Card, (self._rank, self._suit))

    def __repr__(self) -> str:
        return f"Card({self._rank.name}, {self._suit.name})"

    def __str__(self) -> str:
        return f"{self._rank.symbol}{self._suit.symbol}"


def parse_cards(text: str) -> tuple[Card, ...]:
    """Parse a whitespace or comma separated list of cards."""
    return tuple(Card.parse(token) for token in text.replace(",", " ").split())


def create_deck() -> list[Card]:
    """Create a standard 52-card deck."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle_deck(deck: list[Card], seed: int | str | None = None) -> list[Card]:
    """Return a shuffled copy of the deck."""
    rng = random.Random(seed)
    shuffled = list(deck)
    rng.shuffle(shuffled)
    return shuffled
