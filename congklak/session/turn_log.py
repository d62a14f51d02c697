"""
Turn Log - Per-turn decision times and the statistics built from them.

The engine never reads these. A driver appends one TurnLog per accepted
move (or expired turn) and summarizes them at the end of a game.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime

from ..engine_core.board import Player


@dataclass(frozen=True)
class TurnLog:
    """How long a player thought before acting."""
    player: Player
    duration: float  # seconds, 2 decimals
    timestamp: str  # wall clock HH:MM:SS

    @classmethod
    def record(cls, player: Player, duration: float, now: datetime | None = None) -> TurnLog:
        now = now or datetime.now()
        return cls(
            player=player,
            duration=round(duration, 2),
            timestamp=now.strftime("%H:%M:%S"),
        )


@dataclass(frozen=True)
class TurnStats:
    """Aggregated decision time for one player."""
    player: Player
    turns: int
    total: float
    average: float


def summarize_turns(logs: list[TurnLog]) -> dict[Player, TurnStats]:
    """Per-player turn count, total and average duration (0 when no turns)."""
    stats = {}
    for player in Player:
        durations = [log.duration for log in logs if log.player == player]
        total = round(sum(durations), 2)
        average = round(total / len(durations), 2) if durations else 0.0
        stats[player] = TurnStats(
            player=player,
            turns=len(durations),
            total=total,
            average=average,
        )
    return stats
