"""
Move Outcomes - Results, outcome tags and sowing events.

Every call to the turn engine yields one MoveResult:
1. A failure (invalid move) with an error code and no board
2. A success with the new board and exactly one MoveOutcome

SowEvents describe the intermediate frames of a turn for drivers that
animate the sowing. They are informational only.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from .board import Board, Player


class OutcomeKind(Enum):
    """How a resolved turn ended."""
    EXTRA_TURN = "extra_turn"  # Last seed in own store, same player again
    CAPTURED = "captured"  # Shooting capture, turn passes
    PASS_TURN = "pass_turn"
    GAME_OVER = "game_over"  # Remaining seeds already collected


class MoveErrorCode(str, Enum):
    """Reasons a move is rejected."""
    PIT_OUT_OF_RANGE = "PIT_OUT_OF_RANGE"
    NOT_OWN_HOUSE = "NOT_OWN_HOUSE"
    EMPTY_PIT = "EMPTY_PIT"
    GAME_OVER = "GAME_OVER"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    SESSION_INACTIVE = "SESSION_INACTIVE"


class EventKind(Enum):
    """Atomic steps of a turn, in the order a driver would animate them."""
    PICK_UP = "pick_up"
    SOW = "sow"
    RELAY = "relay"
    CAPTURE = "capture"
    COLLECT = "collect"


@dataclass(frozen=True)
class SowEvent:
    """
    Snapshot taken right after one atomic step.

    `index` is the pit that step modified last: the sown pit for SOW, the
    emptied pit for PICK_UP/RELAY, the mover's store for CAPTURE and -1
    for COLLECT (every house changes at once).
    """
    kind: EventKind
    board: Board
    index: int
    hand: int = 0


SowObserver = Callable[[SowEvent], Any]


@dataclass(frozen=True)
class MoveOutcome:
    """
    Outcome tag of one logical turn.

    `next_player` is who moves next; None once the game is over.
    """
    kind: OutcomeKind
    next_player: Player | None
    captured: int = 0
    p1_score: int | None = None
    p2_score: int | None = None

    @classmethod
    def extra_turn(cls, player: Player) -> MoveOutcome:
        return cls(kind=OutcomeKind.EXTRA_TURN, next_player=player)

    @classmethod
    def capture(cls, player: Player, amount: int) -> MoveOutcome:
        return cls(kind=OutcomeKind.CAPTURED, next_player=player.opponent, captured=amount)

    @classmethod
    def pass_turn(cls, player: Player) -> MoveOutcome:
        return cls(kind=OutcomeKind.PASS_TURN, next_player=player.opponent)

    @classmethod
    def game_over(cls, p1_score: int, p2_score: int) -> MoveOutcome:
        return cls(
            kind=OutcomeKind.GAME_OVER,
            next_player=None,
            p1_score=p1_score,
            p2_score=p2_score,
        )

    @property
    def is_game_over(self) -> bool:
        return self.kind == OutcomeKind.GAME_OVER

    @property
    def winner(self) -> Player | None:
        """Winning player after GAME_OVER; None on a draw or mid-game."""
        if not self.is_game_over:
            return None
        if self.p1_score > self.p2_score:
            return Player.P1
        if self.p2_score > self.p1_score:
            return Player.P2
        return None

    @property
    def is_draw(self) -> bool:
        return self.is_game_over and self.p1_score == self.p2_score


@dataclass
class MoveResult:
    """
    Result of applying a move.

    Contains:
    - Whether the move was accepted
    - New board and outcome (if accepted)
    - Error and error code (if rejected)
    - Intermediate events and readable changes (for the driver)
    """
    success: bool
    board: Board | None = None
    outcome: MoveOutcome | None = None
    error: str | None = None
    error_code: MoveErrorCode | None = None

    landing_pit: int | None = None
    relays: int = 0

    # For UI/presentation
    events: list[SowEvent] = field(default_factory=list)
    state_changes: list[str] = field(default_factory=list)

    # Set by TurnEngine.play
    new_state: Any | None = None  # GameState

    @classmethod
    def failure(cls, error: str, error_code: MoveErrorCode) -> MoveResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def resolved(
        cls,
        board: Board,
        outcome: MoveOutcome,
        landing_pit: int,
        relays: int = 0,
        events: list[SowEvent] | None = None,
        changes: list[str] | None = None,
    ) -> MoveResult:
        """Create a success result for a fully resolved turn."""
        return cls(
            success=True,
            board=board,
            outcome=outcome,
            landing_pit=landing_pit,
            relays=relays,
            events=events or [],
            state_changes=changes or [],
        )
