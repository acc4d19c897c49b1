"""
API Module - HTTP interface to the simulator.

Lets a balance-tuning dashboard or notebook:
1. List the available strategies
2. Submit rules and a simulation config
3. Receive the win histogram and game-length statistics
"""

from .schemas import (
    ErrorCode,
    ErrorResponse,
    GameResultInfo,
    HealthResponse,
    SimulationRequest,
    SimulationResponse,
    StatsInfo,
    StrategyListResponse,
)
from .service import SimulationService
from .app import create_app

__all__ = [
    "ErrorCode",
    "ErrorResponse",
    "GameResultInfo",
    "HealthResponse",
    "SimulationRequest",
    "SimulationResponse",
    "StatsInfo",
    "StrategyListResponse",
    "SimulationService",
    "create_app",
]
