"""
Session Module - Local driver for hot-seat play.

A session represents one play-through of a game:
- Created when players start a game
- Holds the current game state
- Times turns and keeps the turn log
- Dropped when the game ends

Sessions are EPHEMERAL: nothing is written to disk.
"""

from .manager import SessionManager, Session, SessionState, DEFAULT_TURN_SECONDS
from .turn_log import TurnLog, TurnStats, summarize_turns

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "DEFAULT_TURN_SECONDS",
    "TurnLog",
    "TurnStats",
    "summarize_turns",
]
