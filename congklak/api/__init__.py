"""
API Module - HTTP interface for a browser driver.

Exposes the engine via a stateless REST API:
1. Fetch the initial board and layout constants
2. Resolve moves
3. Preview landing pits
4. List legal moves

The driver owns turn order, timing and display.
"""

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
    HealthResponse,
    # Shared
    OutcomeInfo,
    SowEventInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "MoveRequest",
    "PreviewRequest",
    "LegalMovesRequest",
    # Responses
    "MoveResponse",
    "PreviewResponse",
    "LegalMovesResponse",
    "BoardConfigResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "OutcomeInfo",
    "SowEventInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
