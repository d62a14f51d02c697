"""
FastAPI Application - REST API for a browser driver.

Endpoints:
    GET    /health                  Health check
    GET    /api/v1/board            Initial board and layout constants
    POST   /api/v1/moves            Resolve one move
    POST   /api/v1/preview          Landing pit of a single sowing pass
    POST   /api/v1/legal-moves      Playable houses for a player

The API holds no game state. The driver sends the board with every
request and keeps whatever it needs (current player, turn clock, logs).
"""

from typing import Union
import logging
import os

from .. import __version__
from ..logging_utils import configure_logging

# Environment configuration
CONGKLAK_ENV = os.getenv("CONGKLAK_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    from fastapi import FastAPI
    from fastapi.encoders import jsonable_encoder
    from fastapi.exceptions import RequestValidationError
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse

    from .service import APIService
    from .schemas import (
        # Request models
        MoveRequest,
        PreviewRequest,
        LegalMovesRequest,
        # Response models
        MoveResponse,
        PreviewResponse,
        LegalMovesResponse,
        BoardConfigResponse,
        ErrorResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )
    from ..engine_core.errors import EngineError

    configure_logging()

    app = FastAPI(
        title="Congklak Engine API",
        description="""
Rules engine for the two-player Congklak seed-sowing game.

## Moves

`POST /api/v1/moves` resolves a whole turn: sowing, relays and a possible
capture. The `outcome.kind` tells the driver what happens next:

| Kind | Next |
|------|------|
| `extra_turn` | Same player moves again |
| `captured` | Capture happened, turn passes |
| `pass_turn` | Turn passes |
| `game_over` | Leftover seeds collected, scores final |

## Error Codes

| Code | Description |
|------|-------------|
| `INVALID_MOVE` | Move rejected, `details.reason` says why |
| `INVALID_PIT` | Preview requested from a store or off-board pit |
| `VALIDATION_ERROR` | Request body failed schema validation |
| `INTERNAL_ERROR` | Engine contract violation |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(response: ErrorResponse, status_code: int = 400) -> JSONResponse:
        """Serialize an ErrorResponse with the given status."""
        return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request, exc: RequestValidationError) -> JSONResponse:
        return make_error_response(
            ErrorResponse(
                error="Request validation failed",
                error_code=ErrorCode.VALIDATION_ERROR,
                details={"errors": jsonable_encoder(exc.errors())},
            ),
            status_code=422,
        )

    @app.exception_handler(EngineError)
    async def engine_error_handler(request, exc: EngineError) -> JSONResponse:
        logger.error("Engine contract violation on %s: %s", request.url.path, exc)
        return make_error_response(
            ErrorResponse(error=str(exc), error_code=ErrorCode.INTERNAL_ERROR),
            status_code=500,
        )

    # =========================================================================
    # Board Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/board",
        response_model=BoardConfigResponse,
        tags=["Board"],
        summary="Initial board and layout constants",
    )
    async def board_config() -> BoardConfigResponse:
        """Starting position plus every constant the driver needs."""
        return api_service.board_config()

    @app.post(
        "/api/v1/legal-moves",
        response_model=LegalMovesResponse,
        tags=["Board"],
        summary="Playable houses for a player",
    )
    async def legal_moves(request: LegalMovesRequest) -> LegalMovesResponse:
        return api_service.legal_moves(request)

    # =========================================================================
    # Move Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/moves",
        response_model=MoveResponse,
        responses={400: {"model": ErrorResponse, "description": "Move rejected"}},
        tags=["Moves"],
        summary="Resolve one move",
    )
    async def apply_move(request: MoveRequest) -> Union[MoveResponse, JSONResponse]:
        """
        Resolve a full turn from `pit` for `player`.

        The returned board already includes every relay and capture.
        """
        response = api_service.apply_move(request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/preview",
        response_model=PreviewResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Moves"],
        summary="Preview the landing pit",
    )
    async def preview(request: PreviewRequest) -> Union[PreviewResponse, JSONResponse]:
        """Where the last seed of a single pass falls (no relay, no capture)."""
        response = api_service.preview(request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # System Endpoints
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="congklak-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Congklak Engine API",
            "version": __version__,
            "env": CONGKLAK_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
