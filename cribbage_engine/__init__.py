"""Cribbage game engine."""

from cribbage_engine.cards import Card, Rank, Suit
from cribbage_engine.config import GameConfig
from cribbage_engine.errors import (
    ConfigError,
    CribbageError,
    GameAlreadyOverError,
    InvalidMoveError,
    MalformedHandError,
    MoveError,
    PeggingOverflowError,
)
from cribbage_engine.executor import (
    advance,
    advance_until_decision,
    current_phase,
    scores,
    submit_move,
)
from cribbage_engine.moves import CallGo, Discard, Move, PlayCard
from cribbage_engine.scoring import ScoreBreakdown, ScoreCategory, ScoreItem, score_hand
from cribbage_engine.state import GameState, Phase, PlayerState, ScoreEvent, new_game

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "GameConfig",
    "CribbageError",
    "ConfigError",
    "MoveError",
    "InvalidMoveError",
    "PeggingOverflowError",
    "GameAlreadyOverError",
    "MalformedHandError",
    "GameState",
    "PlayerState",
    "Phase",
    "ScoreEvent",
    "new_game",
    "submit_move",
    "advance",
    "advance_until_decision",
    "current_phase",
    "scores",
    "Move",
    "Discard",
    "PlayCard",
    "CallGo",
    "ScoreBreakdown",
    "ScoreCategory",
    "ScoreItem",
    "score_hand",
]
