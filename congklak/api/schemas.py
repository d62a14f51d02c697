"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a browser driver and the engine.
The API is stateless: every request carries the full board.

Error Codes:
- INVALID_MOVE: The engine rejected the move (see details.reason)
- INVALID_PIT: A preview was requested from a store or off-board pit
- VALIDATION_ERROR: Request body failed schema validation
- INTERNAL_ERROR: Engine contract violation
"""

from enum import Enum
from typing import Annotated, Optional, Any
from pydantic import BaseModel, Field

from ..engine_core.board import BOARD_SIZE, Player

Seeds = Annotated[int, Field(ge=0)]
BoardList = Annotated[
    list[Seeds],
    Field(min_length=BOARD_SIZE, max_length=BOARD_SIZE, description="16 pit counts"),
]


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_MOVE = "INVALID_MOVE"
    INVALID_PIT = "INVALID_PIT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class OutcomeKindSchema(str, Enum):
    """Outcome tags as they appear on the wire."""
    EXTRA_TURN = "extra_turn"
    CAPTURED = "captured"
    PASS_TURN = "pass_turn"
    GAME_OVER = "game_over"


# =============================================================================
# Shared Models
# =============================================================================

class OutcomeInfo(BaseModel):
    """Outcome of a resolved move."""
    kind: OutcomeKindSchema
    next_player: Optional[Player] = Field(None, description="Who moves next; null after game over")
    captured: int = 0
    p1_score: Optional[int] = None
    p2_score: Optional[int] = None
    winner: Optional[Player] = Field(None, description="Null mid-game or on a draw")
    is_draw: bool = False


class SowEventInfo(BaseModel):
    """One intermediate frame for animation."""
    kind: str
    board: list[int]
    index: int
    hand: int = 0


# =============================================================================
# Request Models
# =============================================================================

class MoveRequest(BaseModel):
    """Apply one move to a board."""
    board: BoardList
    player: Player
    pit: int = Field(..., description="Starting house index")
    include_events: bool = Field(False, description="Return every intermediate frame")


class PreviewRequest(BaseModel):
    """Preview where a single sowing pass ends."""
    pit: int
    seeds: Seeds


class LegalMovesRequest(BaseModel):
    """List the houses a player may start from."""
    board: BoardList
    player: Player


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class MoveResponse(BaseModel):
    """Resolved move."""
    success: bool = True
    board: list[int]
    outcome: OutcomeInfo
    landing_pit: int
    relays: int = 0
    state_changes: list[str] = Field(default_factory=list)
    events: Optional[list[SowEventInfo]] = None
    api_version: str = "v1"


class PreviewResponse(BaseModel):
    """Landing pit of a single sowing pass."""
    pit: int
    seeds: int
    landing_pit: int
    api_version: str = "v1"


class LegalMovesResponse(BaseModel):
    """Playable houses for a player."""
    player: Player
    pits: list[int] = Field(default_factory=list)
    game_over: bool = False
    api_version: str = "v1"


class BoardConfigResponse(BaseModel):
    """Board constants shared with the driver."""
    board: list[int]
    board_size: int
    houses_per_player: int
    initial_seeds: int
    p1_store: int
    p2_store: int
    p1_houses: tuple[int, int]
    p2_houses: tuple[int, int]
    api_version: str = "v1"


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
