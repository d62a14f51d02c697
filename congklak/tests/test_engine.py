"""
Tests for the turn engine.

Tests:
- Sowing and opponent-store skipping
- Relays, captures, extra turns and passes
- Game-over priority and final collection
- Rejected moves and contract violations
- Landing prediction and legal moves
"""

import random

import pytest

from ..engine_core.board import BOARD_SIZE, P1_STORE, P2_STORE, Player, create_initial_board
from ..engine_core.engine import TurnEngine, apply_move, legal_moves, predict_landing
from ..engine_core.errors import BoardInvariantError, RelayLimitError
from ..engine_core.outcome import EventKind, MoveErrorCode, OutcomeKind
from ..engine_core.state import GameState


class TestOpeningMoves:
    """Moves from the starting position."""

    def test_p1_first_pit_lands_in_store(self, initial_board):
        """Seven seeds from pit 0 end exactly in the P1 store."""
        result = apply_move(initial_board, Player.P1, 0)

        assert result.success
        assert result.board == (0, 8, 8, 8, 8, 8, 8, 1, 7, 7, 7, 7, 7, 7, 7, 0)
        assert result.outcome.kind == OutcomeKind.EXTRA_TURN
        assert result.outcome.next_player is Player.P1
        assert result.landing_pit == P1_STORE
        assert result.relays == 0

    def test_p2_first_pit_lands_in_store(self, initial_board):
        result = apply_move(initial_board, Player.P2, 8)

        assert result.success
        assert result.board == (7, 7, 7, 7, 7, 7, 7, 0, 0, 8, 8, 8, 8, 8, 8, 1)
        assert result.outcome.kind == OutcomeKind.EXTRA_TURN
        assert result.outcome.next_player is Player.P2

    @pytest.mark.parametrize("player", list(Player))
    def test_every_opening_move_conserves_seeds(self, initial_board, player):
        for pit in legal_moves(initial_board, player):
            result = apply_move(initial_board, player, pit)
            assert result.success
            assert sum(result.board) == sum(initial_board)
            assert all(seeds >= 0 for seeds in result.board)

    def test_caller_board_untouched(self, initial_board):
        board = list(initial_board)
        apply_move(board, Player.P1, 3)
        assert board == list(initial_board)


class TestRandomPlay:
    """Seeded random games from the opening position."""

    MAX_MOVES = 5000

    @pytest.mark.parametrize("seed", range(20))
    def test_seeds_conserved_until_collection(self, engine, seed):
        rng = random.Random(seed)
        state = GameState.initial()
        total = sum(state.board)

        for _ in range(self.MAX_MOVES):
            if state.is_over:
                break
            pit = rng.choice(legal_moves(state.board, state.current_player))
            result = engine.play(state, pit)

            assert result.success
            assert sum(result.board) == total
            assert all(seeds >= 0 for seeds in result.board)
            state = result.new_state

        assert state.is_over
        assert state.last_outcome.kind == OutcomeKind.GAME_OVER
        for i in range(BOARD_SIZE):
            if i not in (P1_STORE, P2_STORE):
                assert state.board[i] == 0
        assert sum(state.scores) == total
        assert (state.last_outcome.p1_score, state.last_outcome.p2_score) == state.scores


class TestStoreSkip:
    """The opponent's store is invisible to the sower."""

    def test_full_lap_skips_p2_store(self, recording_engine, recorded_events, relay_board):
        """16 seeds from pit 0 fill every pit but 15 once, then pit 1 again."""
        recording_engine.apply_move(relay_board, Player.P1, 0)

        first_pass = [e.index for e in recorded_events if e.kind == EventKind.SOW][:16]
        assert first_pass == [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 0, 1]
        assert all(e.index != P2_STORE for e in recorded_events if e.kind == EventKind.SOW)

    def test_p2_never_sows_into_p1_store(self, recorded_events, recording_engine):
        board = [1, 1, 1, 1, 1, 1, 1, 3, 1, 1, 1, 1, 1, 1, 10, 0]
        result = recording_engine.apply_move(board, Player.P2, 14)

        assert result.success
        sown = {e.index for e in recorded_events if e.kind == EventKind.SOW}
        assert P1_STORE not in sown
        assert result.board[P1_STORE] == 3


class TestRelay:
    """Landing in an occupied pit picks it up and keeps sowing."""

    def test_three_relays_into_own_store(self, relay_board):
        result = apply_move(relay_board, Player.P1, 0)

        assert result.success
        assert result.relays == 3
        assert result.board == (1, 0, 2, 0, 2, 0, 2, 2, 2, 2, 2, 2, 2, 2, 2, 0)
        assert result.outcome.kind == OutcomeKind.EXTRA_TURN
        assert sum(result.board) == sum(relay_board)

    def test_long_relay_chain_ends_in_pass(self):
        """Seven relays around the board, settling in an own empty house."""
        board = [1, 1, 1, 1, 1, 1, 1, 0, 2, 1, 1, 1, 1, 1, 1, 0]
        result = apply_move(board, Player.P1, 5)

        assert result.success
        assert result.relays == 7
        assert result.landing_pit == 6
        assert result.board == (0, 2, 0, 2, 0, 1, 1, 1, 0, 2, 2, 0, 2, 0, 2, 0)
        # Opposite pit 8 was emptied by an earlier relay: no capture
        assert result.outcome.kind == OutcomeKind.PASS_TURN
        assert result.outcome.next_player is Player.P2

    def test_relay_events_emitted(self, relay_board, recorded_events, recording_engine):
        recording_engine.apply_move(relay_board, Player.P1, 0)

        relays = [e for e in recorded_events if e.kind == EventKind.RELAY]
        assert [e.index for e in relays] == [1, 3, 5]
        assert all(e.hand == 2 for e in relays)
        assert all(e.board[e.index] == 0 for e in relays)

    def test_relay_limit(self, relay_board):
        """The safety guard raises instead of looping forever."""
        engine = TurnEngine(max_relays=2)
        with pytest.raises(RelayLimitError):
            engine.apply_move(relay_board, Player.P1, 0)


class TestCapture:
    """Shooting: last seed in an own empty house facing a loaded house."""

    def test_capture_opposite(self, capture_board):
        result = apply_move(capture_board, Player.P1, 1)

        assert result.success
        assert result.board[3] == 0
        assert result.board[11] == 0
        assert result.board[P1_STORE] == 6
        assert result.board == (1, 0, 1, 0, 1, 1, 1, 6, 1, 1, 1, 0, 1, 1, 1, 0)
        assert result.outcome.kind == OutcomeKind.CAPTURED
        assert result.outcome.captured == 6
        assert result.outcome.next_player is Player.P2

    def test_no_capture_when_opposite_empty(self, capture_board):
        board = list(capture_board)
        board[11] = 0
        result = apply_move(board, Player.P1, 1)

        assert result.success
        assert result.board == (1, 0, 1, 1, 1, 1, 1, 0, 1, 1, 1, 0, 1, 1, 1, 0)
        assert result.outcome.kind == OutcomeKind.PASS_TURN

    def test_p2_capture(self):
        board = [1, 1, 1, 4, 1, 1, 1, 0, 1, 2, 0, 0, 1, 1, 1, 0]
        result = apply_move(board, Player.P2, 9)

        assert result.success
        assert result.board == (1, 1, 1, 0, 1, 1, 1, 0, 1, 0, 1, 0, 1, 1, 1, 5)
        assert result.outcome.kind == OutcomeKind.CAPTURED
        assert result.outcome.captured == 5
        assert result.outcome.next_player is Player.P1

    def test_no_capture_on_opponent_side(self):
        """An empty pit on the other side just keeps the seed."""
        board = [1, 1, 1, 1, 1, 1, 2, 0, 0, 1, 1, 1, 1, 1, 1, 0]
        result = apply_move(board, Player.P1, 6)

        assert result.success
        assert result.board == (1, 1, 1, 1, 1, 1, 0, 1, 1, 1, 1, 1, 1, 1, 1, 0)
        assert result.landing_pit == 8
        assert result.outcome.kind == OutcomeKind.PASS_TURN
        assert result.outcome.next_player is Player.P2

    def test_capture_event(self, capture_board, recorded_events, recording_engine):
        recording_engine.apply_move(capture_board, Player.P1, 1)

        captures = [e for e in recorded_events if e.kind == EventKind.CAPTURE]
        assert len(captures) == 1
        assert captures[0].index == P1_STORE
        assert captures[0].board[P1_STORE] == 6


class TestGameOver:
    """End of game and final collection."""

    def test_game_over_beats_extra_turn(self):
        """Last house emptied into the own store ends the game."""
        board = [0, 0, 0, 0, 0, 0, 1, 3, 2, 2, 2, 2, 2, 2, 2, 4]
        result = apply_move(board, Player.P1, 6)

        assert result.success
        assert result.landing_pit == P1_STORE
        assert result.outcome.kind == OutcomeKind.GAME_OVER
        assert result.outcome.next_player is None
        assert result.board == (0, 0, 0, 0, 0, 0, 0, 4, 0, 0, 0, 0, 0, 0, 0, 18)
        assert (result.outcome.p1_score, result.outcome.p2_score) == (4, 18)
        assert result.outcome.winner is Player.P2
        assert not result.outcome.is_draw

    def test_capture_that_empties_opponent_ends_game(self):
        """P2's only seeds get shot: collection runs, capture tag is replaced."""
        board = [1, 2, 0, 0, 0, 0, 0, 0, 0, 0, 0, 5, 0, 0, 0, 10]
        result = apply_move(board, Player.P1, 1)

        assert result.outcome.kind == OutcomeKind.GAME_OVER
        assert result.board == (0, 0, 0, 0, 0, 0, 0, 8, 0, 0, 0, 0, 0, 0, 0, 10)
        assert result.outcome.winner is Player.P2

    def test_draw(self):
        board = [0, 0, 0, 0, 0, 0, 1, 9, 5, 0, 0, 0, 0, 0, 0, 5]
        result = apply_move(board, Player.P1, 6)

        assert result.outcome.kind == OutcomeKind.GAME_OVER
        assert (result.outcome.p1_score, result.outcome.p2_score) == (10, 10)
        assert result.outcome.winner is None
        assert result.outcome.is_draw

    def test_collect_event_is_last(self, recorded_events, recording_engine):
        board = [0, 0, 0, 0, 0, 0, 1, 3, 2, 2, 2, 2, 2, 2, 2, 4]
        recording_engine.apply_move(board, Player.P1, 6)

        assert recorded_events[-1].kind == EventKind.COLLECT
        assert recorded_events[-1].board == (0, 0, 0, 0, 0, 0, 0, 4, 0, 0, 0, 0, 0, 0, 0, 18)

    def test_move_after_game_over_rejected(self):
        board = [0, 0, 0, 0, 0, 0, 0, 40, 3, 0, 0, 0, 0, 0, 0, 10]
        result = apply_move(board, Player.P2, 8)

        assert not result.success
        assert result.error_code == MoveErrorCode.GAME_OVER
        assert result.board is None


class TestInvalidMoves:
    """Caller errors come back as failures without touching the board."""

    @pytest.mark.parametrize("pit", [-1, 16, 99])
    def test_out_of_range(self, initial_board, pit):
        result = apply_move(initial_board, Player.P1, pit)
        assert not result.success
        assert result.error_code == MoveErrorCode.PIT_OUT_OF_RANGE

    @pytest.mark.parametrize("player,pit", [
        (Player.P1, 7),
        (Player.P1, 15),
        (Player.P1, 8),
        (Player.P2, 15),
        (Player.P2, 0),
    ])
    def test_not_own_house(self, initial_board, player, pit):
        result = apply_move(initial_board, player, pit)
        assert not result.success
        assert result.error_code == MoveErrorCode.NOT_OWN_HOUSE
        assert result.outcome is None

    def test_empty_pit(self):
        board = [0, 1, 1, 1, 1, 1, 1, 0, 1, 1, 1, 1, 1, 1, 1, 0]
        result = apply_move(board, Player.P1, 0)
        assert not result.success
        assert result.error_code == MoveErrorCode.EMPTY_PIT
        assert "empty" in result.error.lower()

    def test_invalid_move_reports_no_events(self, initial_board, recorded_events, recording_engine):
        recording_engine.apply_move(initial_board, Player.P1, 9)
        assert recorded_events == []


class TestContractViolations:
    """Malformed boards raise instead of producing a result."""

    def test_wrong_length(self):
        with pytest.raises(BoardInvariantError):
            apply_move([7] * 15, Player.P1, 0)

    def test_negative_seeds(self, initial_board):
        board = list(initial_board)
        board[9] = -2
        with pytest.raises(BoardInvariantError):
            apply_move(board, Player.P1, 0)


class TestObserver:
    """Observers see every frame and never change the result."""

    def test_observer_does_not_change_result(self, initial_board):
        seen = []
        plain = apply_move(initial_board, Player.P1, 2)
        observed = apply_move(initial_board, Player.P1, 2, observer=seen.append)

        assert observed.board == plain.board
        assert observed.outcome == plain.outcome
        assert seen == observed.events

    def test_frames_for_simple_move(self, initial_board):
        seen = []
        apply_move(initial_board, Player.P1, 0, observer=seen.append)

        assert seen[0].kind == EventKind.PICK_UP
        assert seen[0].index == 0
        assert seen[0].hand == 7
        sows = seen[1:]
        assert [e.index for e in sows] == [1, 2, 3, 4, 5, 6, 7]
        assert [e.hand for e in sows] == [6, 5, 4, 3, 2, 1, 0]
        assert sows[-1].board == (0, 8, 8, 8, 8, 8, 8, 1, 7, 7, 7, 7, 7, 7, 7, 0)

    def test_registered_and_per_call_observers(self, initial_board):
        registered, per_call = [], []
        engine = TurnEngine(observers=[registered.append])
        engine.apply_move(initial_board, Player.P1, 0, observer=per_call.append)

        assert registered == per_call
        assert len(registered) == 8


class TestPredictLanding:
    """Single-pass landing preview."""

    def test_opening_moves(self):
        assert predict_landing(0, 7) == P1_STORE
        assert predict_landing(8, 7) == P2_STORE

    def test_p1_skips_p2_store(self):
        assert predict_landing(6, 10) == 1
        assert predict_landing(0, 16) == 1

    def test_p2_skips_p1_store(self):
        assert predict_landing(14, 3) == 1
        assert predict_landing(14, 10) == 9

    def test_zero_seeds_stays(self):
        assert predict_landing(5, 0) == 5

    def test_symmetric_between_players(self):
        """P2's preview is P1's shifted by eight pits."""
        for pit in range(0, 7):
            for seeds in range(0, 40):
                p1 = predict_landing(pit, seeds)
                p2 = predict_landing(pit + 8, seeds)
                assert p2 == (p1 + 8) % 16

    def test_matches_engine_without_relay(self, initial_board):
        """On the opening board, pit 0 never relays: preview equals landing."""
        result = apply_move(initial_board, Player.P1, 0)
        assert predict_landing(0, initial_board[0]) == result.landing_pit

    @pytest.mark.parametrize("pit", [P1_STORE, P2_STORE, -1, 16])
    def test_rejects_non_house(self, pit):
        with pytest.raises(ValueError):
            predict_landing(pit, 3)

    def test_rejects_negative_seeds(self):
        with pytest.raises(ValueError):
            predict_landing(0, -1)


class TestLegalMoves:

    def test_opening(self, initial_board):
        assert legal_moves(initial_board, Player.P1) == [0, 1, 2, 3, 4, 5, 6]
        assert legal_moves(initial_board, Player.P2) == [8, 9, 10, 11, 12, 13, 14]

    def test_skips_empty_houses(self):
        board = [0, 3, 0, 0, 1, 0, 0, 5, 1, 0, 0, 0, 0, 0, 2, 0]
        assert legal_moves(board, Player.P1) == [1, 4]
        assert legal_moves(board, Player.P2) == [8, 14]

    def test_none_once_over(self):
        board = [0, 0, 0, 0, 0, 0, 0, 5, 1, 0, 0, 0, 0, 0, 2, 0]
        assert legal_moves(board, Player.P2) == []

    def test_legal_moves_are_accepted(self):
        board = create_initial_board(2)
        for player in Player:
            for pit in legal_moves(board, player):
                assert apply_move(board, player, pit).success
