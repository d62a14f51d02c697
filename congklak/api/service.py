"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Formats results for the driver
3. Maps rejected moves to structured errors

This layer is framework-agnostic (the FastAPI app and the CLI both use it).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Union

from .schemas import (
    # Requests
    MoveRequest,
    PreviewRequest,
    LegalMovesRequest,
    # Responses
    MoveResponse,
    PreviewResponse,
    LegalMovesResponse,
    BoardConfigResponse,
    ErrorResponse,
    # Shared
    OutcomeInfo,
    SowEventInfo,
    ErrorCode,
)
from ..engine_core.board import (
    BOARD_SIZE,
    HOUSES_PER_PLAYER,
    INITIAL_SEEDS,
    P1_STORE,
    P2_STORE,
    Player,
    any_side_empty,
    create_initial_board,
    house_range,
)
from ..engine_core.engine import TurnEngine, legal_moves, predict_landing
from ..engine_core.outcome import MoveOutcome, MoveResult


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        response = service.apply_move(MoveRequest(board=..., player="P1", pit=0))
    """
    engine: TurnEngine = field(default_factory=TurnEngine)

    def board_config(self) -> BoardConfigResponse:
        """Initial board and the layout constants."""
        return BoardConfigResponse(
            board=list(create_initial_board()),
            board_size=BOARD_SIZE,
            houses_per_player=HOUSES_PER_PLAYER,
            initial_seeds=INITIAL_SEEDS,
            p1_store=P1_STORE,
            p2_store=P2_STORE,
            p1_houses=house_range(Player.P1),
            p2_houses=house_range(Player.P2),
        )

    def apply_move(self, request: MoveRequest) -> Union[MoveResponse, ErrorResponse]:
        """Resolve a move; rejected moves come back as INVALID_MOVE."""
        result = self.engine.apply_move(request.board, request.player, request.pit)
        if not result.success:
            return ErrorResponse(
                error=result.error,
                error_code=ErrorCode.INVALID_MOVE,
                details={"reason": result.error_code.value, "pit": request.pit},
            )
        return self._move_response(result, include_events=request.include_events)

    def preview(self, request: PreviewRequest) -> Union[PreviewResponse, ErrorResponse]:
        """Landing pit of one sowing pass, without relay or capture."""
        try:
            landing = predict_landing(request.pit, request.seeds)
        except ValueError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.INVALID_PIT,
                details={"pit": request.pit},
            )
        return PreviewResponse(pit=request.pit, seeds=request.seeds, landing_pit=landing)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        return LegalMovesResponse(
            player=request.player,
            pits=legal_moves(request.board, request.player),
            game_over=any_side_empty(request.board),
        )

    def _move_response(self, result: MoveResult, include_events: bool = False) -> MoveResponse:
        events = None
        if include_events:
            events = [
                SowEventInfo(
                    kind=event.kind.value,
                    board=list(event.board),
                    index=event.index,
                    hand=event.hand,
                )
                for event in result.events
            ]
        return MoveResponse(
            board=list(result.board),
            outcome=outcome_info(result.outcome),
            landing_pit=result.landing_pit,
            relays=result.relays,
            state_changes=result.state_changes,
            events=events,
        )


def outcome_info(outcome: MoveOutcome) -> OutcomeInfo:
    return OutcomeInfo(
        kind=outcome.kind.value,
        next_player=outcome.next_player,
        captured=outcome.captured,
        p1_score=outcome.p1_score,
        p2_score=outcome.p2_score,
        winner=outcome.winner,
        is_draw=outcome.is_draw,
    )
