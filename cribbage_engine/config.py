"""Game configuration for Cribbage."""

from __future__ import annotations

from dataclasses import dataclass

from cribbage_engine.errors import ConfigError

# Traditional game to 121 ("twice around the board" plus the final hole).
DEFAULT_WINNING_SCORE = 121


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Configurable rules for a two-player game.

    Attributes:
        winning_score: Points needed to win. Scores are capped at this value.
        cut_for_deal: Whether the first dealer is chosen by cutting cards.
            When False, player 0 deals first.
    """

    winning_score: int = DEFAULT_WINNING_SCORE
    cut_for_deal: bool = True

    def __post_init__(self) -> None:
        if self.winning_score <= 0:
            raise ConfigError(f"winning_score must be positive: {self.winning_score}")


DEFAULT_CONFIG = GameConfig()
