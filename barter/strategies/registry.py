"""
Strategy Registry - Maps config names to strategy factories.

A registry is an explicit object built at startup and handed to whatever
builds rosters. Names only matter at the configuration boundary; once a
roster is built the engine deals with PlayerStrategy instances.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Sequence

from .base import NoTradesStrategy, PlayerStrategy
from .greedy import GreedyTrader
from .interactive import RealPlayerCLI
from .random_trader import RandomTrader
from ..config import DEFAULT_PLAYER_TYPE
from ..errors import ConfigurationError, StrategyConfigError

if TYPE_CHECKING:
    from ..config import PlayerConfig


logger = logging.getLogger(__name__)

StrategyFactory = Callable[[], PlayerStrategy]


@dataclass
class StrategyRegistry:
    """
    Name-keyed table of zero-argument strategy factories.

    Usage:
        registry = default_registry()
        registry.register("MyStrategy", MyStrategy)
        roster = build_roster(registry, config.player_configs, config.num_players)
    """
    _factories: dict[str, StrategyFactory] = field(default_factory=dict)

    def register(self, name: str, factory: StrategyFactory, replace: bool = False) -> None:
        """Add a factory under name. Re-registering needs replace=True."""
        if name in self._factories and not replace:
            raise ValueError(f"Strategy already registered: {name}")
        self._factories[name] = factory

    def create(self, name: str) -> PlayerStrategy:
        """Construct a fresh, uninitialized strategy."""
        try:
            factory = self._factories[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown player_type '{name}' (registered: {', '.join(self.names())})"
            ) from None
        return factory()

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)


BUILTIN_STRATEGIES: dict[str, StrategyFactory] = {
    DEFAULT_PLAYER_TYPE: NoTradesStrategy,
    "GreedyTrader": GreedyTrader,
    "RandomTrader": RandomTrader,
    "RealPlayerCLI": RealPlayerCLI,
}


def default_registry() -> StrategyRegistry:
    """Create a registry holding the built-in strategies."""
    registry = StrategyRegistry()
    for name, factory in BUILTIN_STRATEGIES.items():
        registry.register(name, factory)
    return registry


def build_roster(
    registry: StrategyRegistry,
    player_configs: Sequence[PlayerConfig],
    num_players: int,
) -> list[PlayerStrategy]:
    """
    Create and initialize one strategy per seat.

    Seats without a config entry get the default never-trade strategy.
    Every problem is collected and raised as a single ConfigurationError
    so nothing runs on a half-valid roster.
    """
    if len(player_configs) > num_players:
        raise ConfigurationError(
            f"{len(player_configs)} player_configs given for {num_players} players"
        )

    errors: list[str] = []
    roster: list[PlayerStrategy] = []
    for seat in range(num_players):
        if seat < len(player_configs):
            name = player_configs[seat].player_type
            payload = player_configs[seat].config
        else:
            name, payload = DEFAULT_PLAYER_TYPE, None

        try:
            strategy = registry.create(name)
            strategy.init(seat, payload)
        except StrategyConfigError as e:
            errors.extend(f"player {seat} ({name}): {err}" for err in e.errors)
            continue
        except ConfigurationError as e:
            errors.extend(f"player {seat}: {err}" for err in e.errors)
            continue
        roster.append(strategy)

    if errors:
        raise ConfigurationError(errors)

    logger.debug("Roster: %s", ", ".join(s.get_name() for s in roster))
    return roster
