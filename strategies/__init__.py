"""Move-selection strategies that drive a Cribbage game."""

from strategies.base import Strategy
from strategies.random_strategy import RandomStrategy

__all__ = [
    "Strategy",
    "RandomStrategy",
]
