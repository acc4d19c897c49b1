"""
FastAPI Application - REST API for running simulations.

Endpoints:
    GET    /api/v1/health        Health check
    GET    /api/v1/strategies    List strategy names usable in player_configs
    POST   /api/v1/simulations   Run a batch of games and return aggregates

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Union
import os

from .. import __version__

# Environment configuration
BARTER_MAX_RUNS = int(os.getenv("BARTER_MAX_RUNS", "10000"))


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional SimulationService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import SimulationService
    from .schemas import (
        SimulationRequest,
        SimulationResponse,
        StrategyListResponse,
        HealthResponse,
        ErrorResponse,
        ErrorCode,
    )
    from ..errors import ConfigurationError, InvariantViolation

    app = FastAPI(
        title="Barter Simulator API",
        description="Simulate batches of the bartering board game and summarize the outcomes.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    api_service = service or SimulationService(max_runs=BARTER_MAX_RUNS)

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Union[list[str], None] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    # =========================================================================
    # Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["Health"],
    )
    def health() -> HealthResponse:
        return HealthResponse(version=__version__)

    @app.get(
        "/api/v1/strategies",
        response_model=StrategyListResponse,
        tags=["Simulation"],
        summary="List registered strategies",
    )
    def list_strategies() -> StrategyListResponse:
        return api_service.list_strategies()

    @app.post(
        "/api/v1/simulations",
        response_model=SimulationResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid rules or configuration"},
            500: {"model": ErrorResponse, "description": "A strategy broke the protocol"},
        },
        tags=["Simulation"],
        summary="Run a batch of simulated games",
    )
    def run_simulation(request: SimulationRequest) -> Union[SimulationResponse, JSONResponse]:
        """
        Run `config.num_runs` games and return the win histogram,
        turn-count statistics and per-seat score statistics.
        """
        try:
            return api_service.run(request)
        except ConfigurationError as e:
            return make_error_response(ErrorCode.INVALID_CONFIG, str(e), details=e.errors)
        except InvariantViolation as e:
            return make_error_response(ErrorCode.INVARIANT_VIOLATION, str(e), status_code=500)

    return app
