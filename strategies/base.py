"""Base strategy interface for Cribbage players."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cribbage_engine.moves import Move
    from cribbage_engine.state import GameState, ScoreEvent


class Strategy(ABC):
    """Abstract base class for player strategies.

    A strategy only chooses among the legal moves it is offered; legality
    and scoring are enforced by the engine.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this strategy."""
        ...

    @abstractmethod
    def select_move(self, state: GameState, legal_moves: list[Move]) -> Move:
        """Select a move from the list of legal moves.

        Args:
            state: Current game state.
            legal_moves: Legal moves for the player this strategy controls.

        Returns:
            The selected move.
        """
        ...

    def on_game_start(self, state: GameState, player_index: int) -> None:
        """Called when a game starts.

        Override to initialize per-game state.

        Args:
            state: Initial game state.
            player_index: Which player this strategy controls (0 or 1).
        """
        pass

    def on_game_end(self, state: GameState, winner: int | None) -> None:
        """Called when a game ends.

        Args:
            state: Final game state.
            winner: 0, 1, or None if the game was abandoned.
        """
        pass

    def on_move_made(self, state: GameState, move: Move, player: int) -> None:
        """Called after any move is made (by either player).

        Args:
            state: State after the move.
            move: The move that was made.
            player: Which player made the move.
        """
        pass

    def on_score(self, state: GameState, event: ScoreEvent) -> None:
        """Called for every score event, including automatic ones like counting."""
        pass
