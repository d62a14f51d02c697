"""
Game State - A whole game as seen by the engine.

The board alone is enough to resolve a move; GameState adds whose turn
it is and whether the game has finished, so drivers can chain moves
without re-deriving the next player from each outcome.

All transitions return a new state.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from .board import Board, INITIAL_SEEDS, Player, create_initial_board, scores, validate_board

if TYPE_CHECKING:
    from .outcome import MoveOutcome, MoveResult


class GamePhase(Enum):
    """High-level game phases."""
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameState:
    """Board plus acting player and phase."""
    board: Board
    current_player: Player = Player.P1
    phase: GamePhase = GamePhase.PLAYING
    turn_number: int = 0  # Accepted moves so far
    last_outcome: MoveOutcome | None = None

    @classmethod
    def initial(
        cls,
        first_player: Player = Player.P1,
        seeds_per_house: int = INITIAL_SEEDS,
    ) -> GameState:
        return cls(board=create_initial_board(seeds_per_house), current_player=first_player)

    @classmethod
    def from_board(cls, board, current_player: Player = Player.P1) -> GameState:
        """Resume from an arbitrary board (validated)."""
        return cls(board=validate_board(board), current_player=current_player)

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def scores(self) -> tuple[int, int]:
        return scores(self.board)

    @property
    def winner(self) -> Player | None:
        """Winner once the game is over; None mid-game or on a draw."""
        if not self.is_over:
            return None
        p1, p2 = self.scores
        if p1 == p2:
            return None
        return Player.P1 if p1 > p2 else Player.P2

    def after(self, result: MoveResult) -> GameState:
        """Successor state for an accepted move."""
        if not result.success:
            raise ValueError("Cannot advance state with a failed move")
        outcome = result.outcome
        if outcome.is_game_over:
            return replace(
                self,
                board=result.board,
                phase=GamePhase.GAME_OVER,
                turn_number=self.turn_number + 1,
                last_outcome=outcome,
            )
        return replace(
            self,
            board=result.board,
            current_player=outcome.next_player,
            turn_number=self.turn_number + 1,
            last_outcome=outcome,
        )

    def with_turn(self, player: Player) -> GameState:
        """Hand the move to `player` without touching the board."""
        return replace(self, current_player=player)
