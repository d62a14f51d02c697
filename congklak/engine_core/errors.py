"""
Engine errors.

Only contract violations are exceptions. A rejected move is a normal
MoveResult failure and never raises.
"""


class EngineError(Exception):
    """Base class for engine contract violations."""


class BoardInvariantError(EngineError):
    """Raised when a board breaks the pit-array contract."""


class RelayLimitError(EngineError):
    """Raised when a single turn exceeds the relay safety limit."""

    def __init__(self, relays: int, start_pit: int):
        self.relays = relays
        self.start_pit = start_pit
        super().__init__(
            f"Turn from pit {start_pit} exceeded {relays} relays without settling"
        )
