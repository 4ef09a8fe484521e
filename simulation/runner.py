"""Game runner for Cribbage simulations."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from cribbage_engine.config import GameConfig
from cribbage_engine.executor import advance, submit_move
from cribbage_engine.move_generator import AUTOMATIC_PHASES, acting_players, generate_legal_moves
from cribbage_engine.state import new_game

if TYPE_CHECKING:
    from cribbage_engine.state import GameState, ScoreEvent
    from strategies.base import Strategy

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    game_id: str
    winner: int | None  # 0, 1, or None if the step limit was hit
    rounds: int
    final_scores: tuple[int, int]
    player_strategies: tuple[str, str]
    seed: int | None
    duration_ms: float
    move_count: int


@dataclass
class MoveRecord:
    """Record of a single player move."""

    round_number: int
    phase: str
    player: int
    move: str
    scores_after: tuple[int, int]


@dataclass
class GameLog:
    """Complete log of a game."""

    game_id: str
    timestamp: str
    seed: int | None
    player_strategies: tuple[str, str]
    moves: list[MoveRecord] = field(default_factory=list)
    score_events: list[ScoreEvent] = field(default_factory=list)
    result: GameResult | None = None


class GameRunner:
    """Runs Cribbage games between two strategies.

    The runner plays the part of the external driver: it advances automatic
    phases (deal, cut, counting, end of round) and asks the acting player's
    strategy for every decision.
    """

    def __init__(
        self,
        strategy0: Strategy,
        strategy1: Strategy,
        config: GameConfig | None = None,
        max_steps: int = 5000,
        log_moves: bool = True,
    ):
        """Initialize the game runner.

        Args:
            strategy0: Strategy for player 0.
            strategy1: Strategy for player 1.
            config: Rule configuration passed to every game.
            max_steps: Maximum transitions before abandoning a game.
            log_moves: Whether to log individual moves.
        """
        self.strategies = (strategy0, strategy1)
        self.config = config
        self.max_steps = max_steps
        self.log_moves = log_moves

    def run_game(self, seed: int | None = None) -> tuple[GameResult, GameLog | None]:
        """Run a single game.

        Args:
            seed: Random seed for reproducibility.

        Returns:
            Tuple of (result, log). Log is None if log_moves is False.
        """
        start_time = time.perf_counter()
        game_id = str(uuid.uuid4())

        state = new_game(seed=seed, config=self.config)

        for i, strategy in enumerate(self.strategies):
            strategy.on_game_start(state, i)

        game_log = None
        if self.log_moves:
            game_log = GameLog(
                game_id=game_id,
                timestamp=datetime.now().isoformat(),
                seed=seed,
                player_strategies=(self.strategies[0].name, self.strategies[1].name),
            )

        move_count = 0
        steps = 0

        while not state.is_game_over and steps < self.max_steps:
            steps += 1

            if state.phase in AUTOMATIC_PHASES:
                new_state = advance(state)
                self._report_scores(state, new_state, game_log)
                state = new_state
                continue

            acting_player = acting_players(state)[0]
            legal_moves = generate_legal_moves(state, player=acting_player)

            strategy = self.strategies[acting_player]
            move = strategy.select_move(state, legal_moves)

            new_state = submit_move(state, move)
            move_count += 1

            if game_log:
                game_log.moves.append(
                    MoveRecord(
                        round_number=state.round_number,
                        phase=state.phase.name,
                        player=acting_player,
                        move=str(move),
                        scores_after=new_state.scores,
                    )
                )

            for s in self.strategies:
                s.on_move_made(new_state, move, acting_player)

            self._report_scores(state, new_state, game_log)
            state = new_state

        if not state.is_game_over:
            logger.warning(f"Game {game_id} abandoned after {steps} steps")

        duration_ms = (time.perf_counter() - start_time) * 1000

        result = GameResult(
            game_id=game_id,
            winner=state.winner,
            rounds=state.round_number,
            final_scores=state.scores,
            player_strategies=(self.strategies[0].name, self.strategies[1].name),
            seed=seed,
            duration_ms=duration_ms,
            move_count=move_count,
        )
        logger.info(
            f"Game {game_id}: winner={result.winner} scores={result.final_scores} "
            f"rounds={result.rounds} moves={move_count}"
        )

        if game_log:
            game_log.result = result

        for strategy in self.strategies:
            strategy.on_game_end(state, state.winner)

        return result, game_log

    def _report_scores(
        self, before: GameState, after: GameState, game_log: GameLog | None
    ) -> None:
        """Forward score events produced by one transition."""
        if after.round_number != before.round_number:
            return
        for event in after.round.events[len(before.round.events):]:
            if game_log:
                game_log.score_events.append(event)
            for strategy in self.strategies:
                strategy.on_score(after, event)


def run_batch(
    strategy0: Strategy,
    strategy1: Strategy,
    num_games: int,
    start_seed: int = 0,
    config: GameConfig | None = None,
) -> list[GameResult]:
    """Run multiple games.

    Args:
        strategy0: Strategy for player 0.
        strategy1: Strategy for player 1.
        num_games: Number of games to run.
        start_seed: Starting seed (incremented for each game).
        config: Rule configuration for every game.

    Returns:
        List of game results.
    """
    runner = GameRunner(strategy0, strategy1, config=config, log_moves=False)
    results = []

    for i in range(num_games):
        result, _ = runner.run_game(seed=start_seed + i)
        results.append(result)

    return results
