"""
Engine Core - Deterministic board model and turn resolution.

The engine:
1. Describes the 16-pit board and who owns which pit
2. Validates a requested move
3. Sows, relays and captures until the turn settles
4. Reports the outcome (extra turn, pass, capture, game over)
"""

from .board import (
    BOARD_SIZE,
    HOUSES_PER_PLAYER,
    INITIAL_SEEDS,
    P1_STORE,
    P2_STORE,
    Board,
    Player,
    all_houses_empty,
    any_side_empty,
    collect_remaining,
    create_initial_board,
    format_board,
    house_owner,
    house_range,
    is_own_house,
    is_store,
    next_index,
    opposite,
    scores,
    store_index,
    validate_board,
)
from .errors import EngineError, BoardInvariantError, RelayLimitError
from .outcome import (
    EventKind,
    MoveErrorCode,
    MoveOutcome,
    MoveResult,
    OutcomeKind,
    SowEvent,
    SowObserver,
)
from .engine import TurnEngine, apply_move, legal_moves, predict_landing
from .state import GamePhase, GameState

__all__ = [
    "BOARD_SIZE",
    "HOUSES_PER_PLAYER",
    "INITIAL_SEEDS",
    "P1_STORE",
    "P2_STORE",
    "Board",
    "Player",
    "all_houses_empty",
    "any_side_empty",
    "collect_remaining",
    "create_initial_board",
    "format_board",
    "house_owner",
    "house_range",
    "is_own_house",
    "is_store",
    "next_index",
    "opposite",
    "scores",
    "store_index",
    "validate_board",
    "EngineError",
    "BoardInvariantError",
    "RelayLimitError",
    "EventKind",
    "MoveErrorCode",
    "MoveOutcome",
    "MoveResult",
    "OutcomeKind",
    "SowEvent",
    "SowObserver",
    "TurnEngine",
    "apply_move",
    "legal_moves",
    "predict_landing",
    "GamePhase",
    "GameState",
]
