"""
Engine Core - Deterministic game state and the turn state machine.

The engine is the runtime that:
1. Generates a seeded start state
2. Draws for the lead each turn
3. Runs the alternating proposal/acceptance rounds
4. Settles accepted trades under strict holding checks
5. Produces a GameResult snapshot
"""

from .state import (
    CATEGORIES,
    GOODS_CATEGORIES,
    MONEY,
    Good,
    PlayerState,
    Trade,
    GameState,
    GameResult,
)
from .setup import generate_deck, generate_preferences_deck, generate_players, generate_start_state
from .engine import TurnEngine, play, settle_trade

__all__ = [
    "CATEGORIES",
    "GOODS_CATEGORIES",
    "MONEY",
    "Good",
    "PlayerState",
    "Trade",
    "GameState",
    "GameResult",
    "generate_deck",
    "generate_preferences_deck",
    "generate_players",
    "generate_start_state",
    "TurnEngine",
    "play",
    "settle_trade",
]
