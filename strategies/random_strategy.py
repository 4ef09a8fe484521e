"""Uniformly random baseline player."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from cribbage_engine.errors import InvalidMoveError
from strategies.base import Strategy

if TYPE_CHECKING:
    from cribbage_engine.moves import Move
    from cribbage_engine.state import GameState


class RandomStrategy(Strategy):
    """Picks any legal discard or pegging card with equal probability.

    With a fixed seed the choices are reseeded at the start of every game
    from the game seed and seat, so a game replays identically no matter
    how many games the same instance played before it.
    """

    def __init__(self, seed: int | None = None):
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return "Random"

    def on_game_start(self, state: GameState, player_index: int) -> None:
        if self._seed is not None:
            self._rng = random.Random(f"{self._seed}:{state.seed}:{player_index}")

    def select_move(self, state: GameState, legal_moves: list[Move]) -> Move:
        if not legal_moves:
            raise InvalidMoveError(f"No legal moves in {state.phase.name}")
        return self._rng.choice(legal_moves)
