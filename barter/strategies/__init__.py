"""
Strategies module - Player implementations and the registry.

Provides:
- PlayerStrategy: Interface every seat implementation satisfies
- NoTradesStrategy: Never trades (default seat filler)
- GreedyTrader: Mutually beneficial swaps
- RandomTrader: Random affordable swaps
- RealPlayerCLI: Human player on the terminal
- StrategyRegistry: Name -> factory table used to build rosters
"""

from .base import PlayerStrategy, StrategyConfig, NoTradesStrategy, can_afford, reserve
from .greedy import GreedyTrader, GreedyConfig
from .random_trader import RandomTrader, RandomConfig
from .interactive import RealPlayerCLI
from .registry import StrategyRegistry, BUILTIN_STRATEGIES, default_registry, build_roster

__all__ = [
    "PlayerStrategy",
    "StrategyConfig",
    "NoTradesStrategy",
    "can_afford",
    "reserve",
    "GreedyTrader",
    "GreedyConfig",
    "RandomTrader",
    "RandomConfig",
    "RealPlayerCLI",
    "StrategyRegistry",
    "BUILTIN_STRATEGIES",
    "default_registry",
    "build_roster",
]
