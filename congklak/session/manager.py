"""
Session Manager - Creates and manages local game sessions.

A session is one play-through at a single board (hot-seat):
- Holds the current GameState
- Times each player's decision and keeps a TurnLog
- Runs the turn clock: an expired turn passes without an engine call
- Keeps the status message a UI would show

PERSISTENCE RULES:
- Sessions are in-memory only
- Ending a session drops its state
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
import logging
import os
import time
import uuid

from ..engine_core.board import Player
from ..engine_core.engine import TurnEngine
from ..engine_core.outcome import MoveErrorCode, MoveResult, OutcomeKind
from ..engine_core.state import GameState
from .turn_log import TurnLog, TurnStats, summarize_turns

logger = logging.getLogger(__name__)

DEFAULT_TURN_SECONDS = float(os.getenv("CONGKLAK_TURN_SECONDS", "5"))


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Game completed
    ABANDONED = "abandoned"  # Players quit


def turn_message(player: Player) -> str:
    return f"{player.label}'s turn"


def outcome_message(result: MoveResult, mover: Player) -> str:
    """Status line for an accepted move."""
    outcome = result.outcome
    if outcome.kind == OutcomeKind.GAME_OVER:
        winner = outcome.winner
        if winner is None:
            return "Game over! It's a draw!"
        return f"Game over! {winner.label} wins!"
    if outcome.kind == OutcomeKind.EXTRA_TURN:
        return f"Landed in the store! {mover.label} goes again."
    if outcome.kind == OutcomeKind.CAPTURED:
        return f"Shot! {mover.label} captured {outcome.captured} seeds."
    return turn_message(outcome.next_player)


@dataclass
class Session:
    """
    An ephemeral game session.

    `clock` returns seconds from a monotonic source; tests inject a fake.
    """
    session_id: str
    created_at: float
    game_state: GameState
    engine: TurnEngine = field(default_factory=TurnEngine)

    state: SessionState = SessionState.ACTIVE
    turn_time_limit: float = DEFAULT_TURN_SECONDS
    clock: Callable[[], float] = time.monotonic

    started_at: float | None = None
    turn_started_at: float | None = None
    ended_at: float | None = None
    turn_logs: list[TurnLog] = field(default_factory=list)
    message: str = ""

    def __post_init__(self):
        now = self.clock()
        if self.started_at is None:
            self.started_at = now
        if self.turn_started_at is None:
            self.turn_started_at = now
        if not self.message:
            self.message = turn_message(self.game_state.current_player)

    @property
    def current_player(self) -> Player:
        return self.game_state.current_player

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def play(self, pit: int) -> MoveResult:
        """
        Play `pit` for the acting player.

        The decision time is logged only when the engine accepts the move.
        """
        if not self.is_active():
            return MoveResult.failure(
                f"Session is {self.state.value}", MoveErrorCode.SESSION_INACTIVE,
            )
        mover = self.current_player
        result = self.engine.play(self.game_state, pit)
        if not result.success:
            return result

        now = self.clock()
        self.turn_logs.append(TurnLog.record(mover, now - self.turn_started_at))
        self.game_state = result.new_state
        self.turn_started_at = now
        self.message = outcome_message(result, mover)

        if self.game_state.is_over:
            self.state = SessionState.GAME_OVER
            self.ended_at = now
        return result

    def time_left(self) -> float:
        """Seconds remaining on the turn clock (never negative)."""
        if not self.is_active():
            return 0.0
        return max(0.0, self.turn_time_limit - (self.clock() - self.turn_started_at))

    def is_turn_expired(self) -> bool:
        return self.is_active() and self.time_left() <= 0

    def expire_turn(self) -> None:
        """Turn clock ran out: log a full turn and pass without moving."""
        if not self.is_active():
            return
        expired = self.current_player
        self.turn_logs.append(TurnLog.record(expired, self.turn_time_limit))
        self.game_state = self.game_state.with_turn(expired.opponent)
        self.turn_started_at = self.clock()
        self.message = f"Time's up! {turn_message(expired.opponent)}"
        logger.info("Session %s: %s ran out of time", self.session_id, expired.value)

    def elapsed(self) -> float:
        """Total game time in seconds; frozen once the game ends."""
        end = self.ended_at if self.ended_at is not None else self.clock()
        return end - self.started_at

    def stats(self) -> dict[Player, TurnStats]:
        return summarize_turns(self.turn_logs)


class SessionManager:
    """
    Manages game sessions.

    No persistence - sessions are in-memory only.
    """

    def __init__(self, engine: TurnEngine | None = None):
        self._sessions: dict[str, Session] = {}
        self.engine = engine or TurnEngine()

    def create_session(
        self,
        first_player: Player = Player.P1,
        turn_time_limit: float | None = None,
        clock: Callable[[], float] | None = None,
    ) -> Session:
        """Start a new game from the initial board."""
        session = Session(
            session_id=str(uuid.uuid4()),
            created_at=time.time(),
            game_state=GameState.initial(first_player),
            engine=self.engine,
            turn_time_limit=turn_time_limit if turn_time_limit is not None else DEFAULT_TURN_SECONDS,
            clock=clock or time.monotonic,
        )
        self._sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """Remove a session; returns False if it did not exist."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        if reason != "completed" and session.is_active():
            session.state = SessionState.ABANDONED
        session.turn_logs.clear()
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """Drop finished sessions older than max_age; returns how many went."""
        current_time = time.time()
        to_remove = [
            sid for sid, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
