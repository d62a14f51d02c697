"""
Turn Engine - Resolves one logical turn from a chosen pit.

A turn is a single synchronous computation:
1. Pick up every seed in the starting house
2. Sow forward one seed per pit, skipping the opponent's store
3. Resolve the landing pit:
   - own store      -> extra turn
   - non-empty pit  -> relay: pick the pit up and keep sowing
   - own empty house with a loaded opposite house -> capture
   - anything else  -> the seed stays
4. End the game (collecting leftovers) when either house row is empty

Design principles:
- Pure: the caller's board is never mutated, a new tuple comes back
- Validates before applying; rejected moves are MoveResult failures
- Iterative relay loop, no recursion
- Observers see every intermediate frame but cannot change the result
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import Sequence, TYPE_CHECKING

from .board import (
    BOARD_SIZE,
    Board,
    Player,
    any_side_empty,
    collect_remaining,
    house_indices,
    house_owner,
    is_own_house,
    next_index,
    opposite,
    scores,
    store_index,
    validate_board,
)
from .errors import RelayLimitError
from .outcome import (
    EventKind,
    MoveErrorCode,
    MoveOutcome,
    MoveResult,
    SowEvent,
    SowObserver,
)

if TYPE_CHECKING:
    from .state import GameState

logger = logging.getLogger(__name__)

# Safety limit on relay pick-ups in a single turn
MAX_RELAYS = 10_000


@dataclass
class TurnEngine:
    """
    Applies moves to boards.

    Stateless apart from the registered observers; one engine can serve
    any number of independent games.
    """
    observers: list[SowObserver] = field(default_factory=list)
    max_relays: int = MAX_RELAYS

    def apply_move(
        self,
        board: Sequence[int],
        player: Player,
        start_pit: int,
        observer: SowObserver | None = None,
    ) -> MoveResult:
        """
        Resolve a full turn for `player` starting at `start_pit`.

        `observer` is called for this move only, after the registered ones.

        Returns a MoveResult with the new board and outcome, or a failure
        when the move is not legal. Raises BoardInvariantError if the board
        itself is malformed.
        """
        board = validate_board(board)

        error = self._validate_move(board, player, start_pit)
        if error:
            logger.debug("Rejected %s move from pit %s: %s", player.value, start_pit, error.value)
            return MoveResult.failure(_ERROR_MESSAGES[error].format(pit=start_pit), error)

        return _Turn(self, board, player, start_pit, observer).run()

    def play(self, state: GameState, start_pit: int, player: Player | None = None) -> MoveResult:
        """
        Apply a move to a whole game state.

        `player` defaults to the state's acting player; passing someone
        else is rejected with NOT_YOUR_TURN. On success the result carries
        the successor state in `new_state`.
        """
        if state.is_over:
            return MoveResult.failure("Game is over - no moves allowed", MoveErrorCode.GAME_OVER)

        mover = player or state.current_player
        if mover != state.current_player:
            return MoveResult.failure(f"Not {mover.label}'s turn", MoveErrorCode.NOT_YOUR_TURN)

        result = self.apply_move(state.board, mover, start_pit)
        if result.success:
            result.new_state = state.after(result)
        return result

    def _validate_move(self, board: Board, player: Player, start_pit: int) -> MoveErrorCode | None:
        """
        Validate that a move is legal on this board.

        Returns an error code if invalid, None if valid.
        """
        if any_side_empty(board):
            return MoveErrorCode.GAME_OVER
        if not 0 <= start_pit < BOARD_SIZE:
            return MoveErrorCode.PIT_OUT_OF_RANGE
        if not is_own_house(player, start_pit):
            return MoveErrorCode.NOT_OWN_HOUSE
        if board[start_pit] == 0:
            return MoveErrorCode.EMPTY_PIT
        return None

    def _notify(self, event: SowEvent, extra: SowObserver | None = None) -> None:
        for observer in self.observers:
            observer(event)
        if extra is not None:
            extra(event)


_ERROR_MESSAGES = {
    MoveErrorCode.GAME_OVER: "Game is over - no moves allowed",
    MoveErrorCode.PIT_OUT_OF_RANGE: "Pit {pit} is outside the board",
    MoveErrorCode.NOT_OWN_HOUSE: "Pit {pit} is not one of your houses",
    MoveErrorCode.EMPTY_PIT: "Pit {pit} is empty",
}


class _Turn:
    """Working state of one turn while it is being resolved."""

    def __init__(
        self,
        engine: TurnEngine,
        board: Board,
        player: Player,
        start_pit: int,
        observer: SowObserver | None = None,
    ):
        self.engine = engine
        self.player = player
        self.start_pit = start_pit
        self.observer = observer
        self.pits = list(board)
        self.own_store = store_index(player)
        self.skip_store = store_index(player.opponent)
        self.events: list[SowEvent] = []
        self.changes: list[str] = []

    def run(self) -> MoveResult:
        hand = self._pick_up(self.start_pit, EventKind.PICK_UP)
        self.changes.append(f"{self.player.label} picked up {hand} seeds from pit {self.start_pit}")

        index = self.start_pit
        relays = 0
        captured = 0
        while True:
            index = self._sow(index, hand)

            if index == self.own_store:
                break

            if self.pits[index] > 1:
                relays += 1
                if relays > self.engine.max_relays:
                    raise RelayLimitError(self.engine.max_relays, self.start_pit)
                hand = self._pick_up(index, EventKind.RELAY)
                logger.debug("Relay #%d from pit %d with %d seeds", relays, index, hand)
                self.changes.append(f"Relay: picked up {hand} seeds from pit {index}")
                continue

            # Exactly one seed: the pit was empty before it landed
            if is_own_house(self.player, index):
                captured = self._capture(index)
            break

        board = tuple(self.pits)
        if any_side_empty(board):
            return self._finish_game(board, index, relays)

        if index == self.own_store:
            outcome = MoveOutcome.extra_turn(self.player)
            self.changes.append(f"{self.player.label} landed in their store and moves again")
        elif captured:
            outcome = MoveOutcome.capture(self.player, captured)
        else:
            outcome = MoveOutcome.pass_turn(self.player)
            self.changes.append(f"Turn passes to {self.player.opponent.label}")

        return MoveResult.resolved(
            board, outcome, landing_pit=index, relays=relays,
            events=self.events, changes=self.changes,
        )

    def _pick_up(self, index: int, kind: EventKind) -> int:
        hand = self.pits[index]
        self.pits[index] = 0
        self._emit(kind, index, hand)
        return hand

    def _sow(self, index: int, hand: int) -> int:
        """Drop `hand` seeds forward from `index`; returns the landing pit."""
        while hand > 0:
            index = next_index(index)
            if index == self.skip_store:
                continue
            self.pits[index] += 1
            hand -= 1
            self._emit(EventKind.SOW, index, hand)
        return index

    def _capture(self, index: int) -> int:
        facing = opposite(index)
        if self.pits[facing] == 0:
            return 0
        amount = self.pits[facing] + self.pits[index]
        self.pits[facing] = 0
        self.pits[index] = 0
        self.pits[self.own_store] += amount
        self._emit(EventKind.CAPTURE, self.own_store, 0)
        logger.debug("%s captured %d seeds at pit %d", self.player.value, amount, index)
        self.changes.append(
            f"Shot! {self.player.label} captured {amount} seeds from pits {index} and {facing}"
        )
        return amount

    def _finish_game(self, board: Board, index: int, relays: int) -> MoveResult:
        final = collect_remaining(board)
        self.pits = list(final)
        self._emit(EventKind.COLLECT, -1, 0)
        p1_score, p2_score = scores(final)
        outcome = MoveOutcome.game_over(p1_score, p2_score)
        logger.info("Game over: P1 %d - P2 %d", p1_score, p2_score)
        self.changes.append(f"Game over: {p1_score} - {p2_score}")
        return MoveResult.resolved(
            final, outcome, landing_pit=index, relays=relays,
            events=self.events, changes=self.changes,
        )

    def _emit(self, kind: EventKind, index: int, hand: int) -> None:
        event = SowEvent(kind=kind, board=tuple(self.pits), index=index, hand=hand)
        self.events.append(event)
        self.engine._notify(event, self.observer)


_default_engine = TurnEngine()


def apply_move(
    board: Sequence[int],
    player: Player,
    start_pit: int,
    observer: SowObserver | None = None,
) -> MoveResult:
    """Convenience function to resolve a move, optionally observing each step."""
    return _default_engine.apply_move(board, player, start_pit, observer)


def predict_landing(start_pit: int, seeds: int) -> int:
    """
    Where the last seed of a single sowing pass from `start_pit` falls.

    No relay and no capture are resolved. The sower is the owner of
    `start_pit`, so the other player's store is skipped.
    """
    owner = house_owner(start_pit)
    if owner is None:
        raise ValueError(f"Pit {start_pit} is not a house")
    if seeds < 0:
        raise ValueError("seeds must be >= 0")

    skip = store_index(owner.opponent)
    index = start_pit
    remaining = seeds
    while remaining > 0:
        index = next_index(index)
        if index == skip:
            continue
        remaining -= 1
    return index


def legal_moves(board: Sequence[int], player: Player) -> list[int]:
    """Non-empty houses the player may start from; empty once the game is over."""
    board = validate_board(board)
    if any_side_empty(board):
        return []
    return [i for i in house_indices(player) if board[i] > 0]

