"""
Pytest fixtures for Barter tests.
"""

import pytest
from typing import Callable, Optional

from ..config import GameRules, SimConfig
from ..engine_core.state import CATEGORIES, MONEY, GameState, Good, PlayerState, Trade
from ..strategies.base import PlayerStrategy
from ..strategies.registry import default_registry


DEFAULT_TEST_PREFERENCES = {
    MONEY: 1.0,
    "cars": 1.0,
    "clothing": 2.0,
    "food": 2.0,
    "art": 5.0,
    "travel": 10.0,
}


class ScriptedStrategy(PlayerStrategy):
    """
    Strategy driven by canned answers, recording every call.

    lead_proposals and non_lead_proposals are consumed one entry per
    call; once exhausted the strategy goes quiet.
    """

    def __init__(
        self,
        lead_proposals: Optional[list] = None,
        non_lead_proposals: Optional[list] = None,
        lead_decisions: Optional[Callable[[GameState], list]] = None,
        non_lead_decision=False,
    ):
        super().__init__()
        self.lead_proposals = list(lead_proposals or [])
        self.non_lead_proposals = list(non_lead_proposals or [])
        self.lead_decisions = lead_decisions
        self.non_lead_decision = non_lead_decision
        self.calls: list[tuple[str, int, int]] = []
        self.resets = 0

    def reset(self) -> None:
        self.resets += 1

    def _record(self, name: str, state: GameState) -> None:
        self.calls.append((name, state.current_turn, state.current_round))

    def propose_trades_as_lead(self, state):
        self._record("propose_lead", state)
        return self.lead_proposals.pop(0) if self.lead_proposals else {}

    def propose_trade_as_non_lead(self, state):
        self._record("propose_non_lead", state)
        return self.non_lead_proposals.pop(0) if self.non_lead_proposals else None

    def accept_trades_as_lead(self, state):
        self._record("accept_lead", state)
        if self.lead_decisions is None:
            return [False] * len(state.current_proposals)
        return self.lead_decisions(state)

    def accept_trades_as_non_lead(self, state, trade):
        self._record("accept_non_lead", state)
        if callable(self.non_lead_decision):
            return self.non_lead_decision(state, trade)
        return self.non_lead_decision

    def call_names(self) -> list[str]:
        return [name for name, _, _ in self.calls]


def make_state(
    holdings: list[dict],
    deck: Optional[list[str]] = None,
    preferences: Optional[list[dict]] = None,
) -> GameState:
    """Hand-built state. The deck is drawn from the end of the list."""
    players = []
    for seat, held in enumerate(holdings):
        goods = {category: 0.0 for category in CATEGORIES}
        goods.update({c: float(v) for c, v in held.items()})
        prefs = dict(preferences[seat]) if preferences else dict(DEFAULT_TEST_PREFERENCES)
        players.append(PlayerState(preferences=prefs, goods=goods))
    return GameState(
        deck=[Good(category=c) for c in (deck or [])],
        players=players,
    )


def init_roster(strategies: list[PlayerStrategy]) -> list[PlayerStrategy]:
    for seat, strategy in enumerate(strategies):
        strategy.init(seat)
    return strategies


@pytest.fixture
def rules() -> GameRules:
    """Default rules."""
    return GameRules()


@pytest.fixture
def quiet_config() -> SimConfig:
    """Seeded config with visualization off."""
    return SimConfig(
        deck_shuffle_seed=7,
        preferences_seed=3,
        num_players=2,
        num_runs=5,
        turn_pause_millis=0,
        hide_game_state=True,
    )


@pytest.fixture
def registry():
    """Fresh registry with the built-in strategies."""
    return default_registry()


@pytest.fixture
def swap_trade() -> Callable[..., Trade]:
    """Factory for simple swaps."""
    return Trade.swap
