"""
Board Model - Pit layout, ownership rules and board-wide helpers.

Layout (16 pits, sown forward with wrap-around):
    0-6   Player 1 houses
    7     Player 1 store
    8-14  Player 2 houses
    15    Player 2 store

Boards are plain tuples of non-negative ints. Every helper here is pure
and returns a new tuple instead of mutating its input.
"""

from __future__ import annotations
from enum import Enum
from typing import Sequence

from .errors import BoardInvariantError

BOARD_SIZE = 16
HOUSES_PER_PLAYER = 7
INITIAL_SEEDS = 7

P1_STORE = 7
P2_STORE = 15

Board = tuple[int, ...]


class Player(str, Enum):
    """The two seats at the board."""
    P1 = "P1"  # Bottom row
    P2 = "P2"  # Top row

    @property
    def opponent(self) -> Player:
        return Player.P2 if self is Player.P1 else Player.P1

    @property
    def label(self) -> str:
        """Display name used in driver messages."""
        return "Player 1" if self is Player.P1 else "Player 2"


def house_range(player: Player) -> tuple[int, int]:
    """Inclusive (low, high) indices of the player's houses."""
    if player is Player.P1:
        return 0, HOUSES_PER_PLAYER - 1
    return P1_STORE + 1, P1_STORE + HOUSES_PER_PLAYER


def store_index(player: Player) -> int:
    return P1_STORE if player is Player.P1 else P2_STORE


def is_store(index: int) -> bool:
    return index in (P1_STORE, P2_STORE)


def is_own_house(player: Player, index: int) -> bool:
    low, high = house_range(player)
    return low <= index <= high


def house_owner(index: int) -> Player | None:
    """Owner of a house pit, or None for stores and out-of-range indices."""
    for player in Player:
        if is_own_house(player, index):
            return player
    return None


def opposite(index: int) -> int:
    """
    Index of the house facing `index` across the board (0 <-> 14, 6 <-> 8).

    Precondition: `index` is a house pit.
    """
    if house_owner(index) is None:
        raise ValueError(f"Pit {index} is not a house")
    return 2 * HOUSES_PER_PLAYER - index


def next_index(index: int) -> int:
    return (index + 1) % BOARD_SIZE


def house_indices(player: Player) -> range:
    low, high = house_range(player)
    return range(low, high + 1)


def all_houses_empty(player: Player, board: Sequence[int]) -> bool:
    return all(board[i] == 0 for i in house_indices(player))


def any_side_empty(board: Sequence[int]) -> bool:
    """True when either player's whole house row is empty (end condition)."""
    return any(all_houses_empty(player, board) for player in Player)


def collect_remaining(board: Sequence[int]) -> Board:
    """
    Move every seed left in a player's houses into that player's store.

    Idempotent: a board whose houses are already empty comes back unchanged.
    """
    pits = list(board)
    for player in Player:
        store = store_index(player)
        for i in house_indices(player):
            pits[store] += pits[i]
            pits[i] = 0
    return tuple(pits)


def scores(board: Sequence[int]) -> tuple[int, int]:
    """(Player 1 store, Player 2 store)."""
    return board[P1_STORE], board[P2_STORE]


def create_initial_board(seeds_per_house: int = INITIAL_SEEDS) -> Board:
    """Starting position: every house holds the same count, stores empty."""
    if seeds_per_house < 1:
        raise ValueError("seeds_per_house must be >= 1")
    return tuple(0 if is_store(i) else seeds_per_house for i in range(BOARD_SIZE))


def validate_board(board: Sequence[int]) -> Board:
    """
    Check the board contract and return it as an immutable tuple.

    Raises BoardInvariantError on a wrong length, a non-integer pit or a
    negative seed count. These are programming errors, not game outcomes.
    """
    if len(board) != BOARD_SIZE:
        raise BoardInvariantError(
            f"Board must have {BOARD_SIZE} pits, got {len(board)}"
        )
    for i, seeds in enumerate(board):
        if isinstance(seeds, bool) or not isinstance(seeds, int):
            raise BoardInvariantError(f"Pit {i} holds a non-integer value: {seeds!r}")
        if seeds < 0:
            raise BoardInvariantError(f"Pit {i} holds a negative seed count: {seeds}")
    return tuple(board)


def format_board(board: Sequence[int]) -> str:
    """
    Human-readable two-row rendering, Player 2's row reversed on top.

        [15]  14 13 12 11 10  9  8
              0  1  2  3  4  5  6  [7]
    """
    low2, high2 = house_range(Player.P2)
    low1, high1 = house_range(Player.P1)
    top = " ".join(f"{board[i]:>2}" for i in range(high2, low2 - 1, -1))
    bottom = " ".join(f"{board[i]:>2}" for i in range(low1, high1 + 1))
    return "\n".join([
        f"[{board[P2_STORE]:>2}] {top}",
        f"     {bottom} [{board[P1_STORE]:>2}]",
    ])
