"""Move types for Cribbage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cribbage_engine.cards import Card


class MoveType(IntEnum):
    """Type of move."""

    DISCARD = auto()  # Put two cards into the crib
    PLAY_CARD = auto()  # Peg a card onto the count
    CALL_GO = auto()  # No card can be played without passing 31


@dataclass(frozen=True, slots=True)
class Move(ABC):
    """Base class for all moves.

    Every move names the player (0 or 1) submitting it, since both players
    act independently while discarding.
    """

    player: int

    @property
    @abstractmethod
    def move_type(self) -> MoveType:
        """The type of this move."""
        ...

    @abstractmethod
    def __str__(self) -> str:
        """Human-readable move description."""
        ...


@dataclass(frozen=True, slots=True)
class Discard(Move):
    """Discard two cards from a six-card hand into the crib."""

    cards: tuple[Card, ...]

    @property
    def move_type(self) -> MoveType:
        return MoveType.DISCARD

    def __str__(self) -> str:
        cards = " ".join(str(card) for card in self.cards)
        return f"Player {self.player} discards {cards} to the crib"


@dataclass(frozen=True, slots=True)
class PlayCard(Move):
    """Play a card during pegging."""

    card: Card

    @property
    def move_type(self) -> MoveType:
        return MoveType.PLAY_CARD

    def __str__(self) -> str:
        return f"Player {self.player} plays {self.card}"


@dataclass(frozen=True, slots=True)
class CallGo(Move):
    """Say "go": no card in hand fits under 31."""

    @property
    def move_type(self) -> MoveType:
        return MoveType.CALL_GO

    def __str__(self) -> str:
        return f"Player {self.player} says go"
