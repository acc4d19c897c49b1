"""
Pydantic Schemas for API - Request/response models for OpenAPI.

Error Codes:
- INVALID_CONFIG: Rules, simulation config or roster rejected
- INVARIANT_VIOLATION: A strategy broke the trade protocol during play
- INTERNAL_ERROR: Anything else
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from ..config import GameRules, SimConfig


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_CONFIG = "INVALID_CONFIG"
    INVARIANT_VIOLATION = "INVARIANT_VIOLATION"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class StatsInfo(BaseModel):
    """Summary statistics. Null fields mean no observations."""
    count: int = 0
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    var: Optional[float] = Field(None, description="Population variance")

    model_config = {"from_attributes": True}


class GameResultInfo(BaseModel):
    """Outcome of one game."""
    turns: int
    winner: int
    scores: list[float]

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class SimulationRequest(BaseModel):
    """Run a batch of games. Every field is optional."""
    rules: GameRules = Field(default_factory=GameRules)
    config: SimConfig = Field(default_factory=SimConfig)
    include_results: bool = Field(False, description="Return every GameResult")


# =============================================================================
# Response Models
# =============================================================================

class SimulationResponse(BaseModel):
    """Aggregated results of a simulation."""
    num_runs: int
    wins_by_player: dict[int, int]
    turn_stats: StatsInfo
    score_stats: list[StatsInfo] = Field(default_factory=list)
    results: Optional[list[GameResultInfo]] = None


class StrategyListResponse(BaseModel):
    """Registered strategy names."""
    strategies: list[str]
    default: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[list[str]] = None
