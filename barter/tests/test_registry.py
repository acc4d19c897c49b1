"""
Tests for the strategy registry and roster building.
"""

import pytest

from .conftest import ScriptedStrategy
from ..config import DEFAULT_PLAYER_TYPE, PlayerConfig
from ..errors import ConfigurationError
from ..strategies import (
    GreedyTrader,
    NoTradesStrategy,
    RandomTrader,
    RealPlayerCLI,
    StrategyRegistry,
    build_roster,
    default_registry,
)


class TestRegistry:
    """Tests for StrategyRegistry."""

    def test_builtins_registered(self, registry):
        """The default registry knows every built-in strategy."""
        assert registry.names() == ["GreedyTrader", "PlayerNoTrades", "RandomTrader", "RealPlayerCLI"]
        assert DEFAULT_PLAYER_TYPE in registry

    def test_create_returns_fresh_instances(self, registry):
        """Every create() call builds a new object."""
        first = registry.create("GreedyTrader")
        second = registry.create("GreedyTrader")
        assert isinstance(first, GreedyTrader)
        assert first is not second

    def test_unknown_name(self, registry):
        """Unknown names are configuration errors listing what exists."""
        with pytest.raises(ConfigurationError) as exc_info:
            registry.create("SmartTrader")
        assert "SmartTrader" in str(exc_info.value)
        assert "GreedyTrader" in str(exc_info.value)

    def test_duplicate_registration_rejected(self, registry):
        """Registering a taken name needs replace=True."""
        with pytest.raises(ValueError):
            registry.register("GreedyTrader", RandomTrader)

        registry.register("GreedyTrader", RandomTrader, replace=True)
        assert isinstance(registry.create("GreedyTrader"), RandomTrader)

    def test_registries_are_independent(self):
        """Registering on one registry does not leak into another."""
        first = default_registry()
        second = default_registry()
        first.register("Scripted", ScriptedStrategy)

        assert "Scripted" in first
        assert "Scripted" not in second
        assert len(first) == len(second) + 1

    def test_empty_registry(self):
        """A bare registry has nothing in it."""
        registry = StrategyRegistry()
        assert len(registry) == 0
        with pytest.raises(ConfigurationError):
            registry.create(DEFAULT_PLAYER_TYPE)


class TestBuildRoster:
    """Tests for build_roster."""

    def test_missing_seats_get_default(self, registry):
        """Seats beyond player_configs never trade."""
        roster = build_roster(registry, [PlayerConfig(player_type="GreedyTrader")], 3)

        assert [type(s) for s in roster] == [GreedyTrader, NoTradesStrategy, NoTradesStrategy]
        assert [s.player_id for s in roster] == [0, 1, 2]

    def test_payload_reaches_strategy(self, registry):
        """Each seat is initialized with its own payload."""
        roster = build_roster(
            registry,
            [
                PlayerConfig(player_type="RandomTrader", config={"seed": 3}),
                PlayerConfig(player_type="RandomTrader", config={"seed": 4}),
            ],
            2,
        )
        assert [s.config.seed for s in roster] == [3, 4]

    def test_custom_strategy(self, registry):
        """Registered third-party strategies can take a seat."""
        registry.register("Scripted", ScriptedStrategy)
        roster = build_roster(registry, [PlayerConfig(player_type="Scripted")], 2)

        assert isinstance(roster[0], ScriptedStrategy)
        assert roster[0].resets == 1

    def test_interactive_strategy_is_buildable(self, registry):
        """The terminal player is an ordinary registry entry."""
        roster = build_roster(registry, [PlayerConfig(player_type="RealPlayerCLI")], 2)
        assert isinstance(roster[0], RealPlayerCLI)

    def test_all_errors_reported_together(self, registry):
        """Every bad seat is reported in a single error."""
        with pytest.raises(ConfigurationError) as exc_info:
            build_roster(
                registry,
                [
                    PlayerConfig(player_type="Nope"),
                    PlayerConfig(player_type="GreedyTrader", config={"min_gain": -5}),
                    PlayerConfig(player_type="RandomTrader", config={"seed": 1}),
                ],
                3,
            )

        errors = exc_info.value.errors
        assert len(errors) == 2
        assert errors[0].startswith("player 0:")
        assert errors[1].startswith("player 1 (GreedyTrader):")

    def test_too_many_configs(self, registry):
        """More configs than seats is rejected."""
        configs = [PlayerConfig(player_type=DEFAULT_PLAYER_TYPE)] * 3
        with pytest.raises(ConfigurationError):
            build_roster(registry, configs, 2)
