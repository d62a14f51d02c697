"""
Pytest fixtures for Congklak tests.
"""

import pytest

from ..engine_core.board import create_initial_board
from ..engine_core.engine import TurnEngine
from ..engine_core.state import GameState


class FakeClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def initial_board():
    """Starting position: 7 seeds in every house."""
    return create_initial_board()


@pytest.fixture
def engine() -> TurnEngine:
    return TurnEngine()


@pytest.fixture
def recorded_events():
    """Observer that stores every SowEvent it sees."""
    events = []
    return events


@pytest.fixture
def recording_engine(recorded_events) -> TurnEngine:
    return TurnEngine(observers=[recorded_events.append])


@pytest.fixture
def initial_state() -> GameState:
    return GameState.initial()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def capture_board():
    """P1 sowing 2 seeds from pit 1 ends in empty pit 3; pit 11 faces it with 5."""
    return [1, 2, 0, 0, 1, 1, 1, 0, 1, 1, 1, 5, 1, 1, 1, 0]


@pytest.fixture
def relay_board():
    """P1 pit 0 holds 16 seeds: one full lap, then three relays into the store."""
    return [16, 0, 0, 0, 0, 0, 0, 0, 1, 1, 1, 1, 1, 1, 1, 0]
