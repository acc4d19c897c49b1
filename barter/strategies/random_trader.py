"""
Random Trader - Offers and accepts affordable swaps at random.

Used for:
- Stress testing the engine's conservation checks
- Baseline comparison against smarter strategies

The generator is rebuilt from the configured seed on every reset(), so a
seeded RandomTrader plays identically in every run. A seed of 0 draws a
fresh non-reproducible generator instead.
"""

from __future__ import annotations
import random
from typing import TYPE_CHECKING, Optional

from pydantic import Field

from .base import PlayerStrategy, StrategyConfig, can_afford, reserve
from ..engine_core.state import CATEGORIES, Trade

if TYPE_CHECKING:
    from ..engine_core.state import GameState, GoodsSet, PlayerId


class RandomConfig(StrategyConfig):
    """Configuration for RandomTrader."""
    seed: int = Field(0, ge=0)
    propose_probability: float = Field(0.5, ge=0.0, le=1.0)
    accept_probability: float = Field(0.5, ge=0.0, le=1.0)
    units: float = Field(1.0, gt=0)


class RandomTrader(PlayerStrategy):
    """
    Random policy - proposes and accepts uniformly at random.

    With propose_probability = 1 a random lead never goes quiet; pair it
    with the max_rounds_per_turn rule.
    """

    config_model = RandomConfig

    def __init__(self):
        super().__init__()
        self.rng = random.Random()

    def reset(self) -> None:
        self.rng = random.Random(self.config.seed or None)

    def propose_trades_as_lead(self, state: GameState) -> dict[PlayerId, Trade]:
        working = dict(state.player_state(self.player_id).goods)
        proposals: dict[PlayerId, Trade] = {}

        for target in range(state.num_players):
            if target == self.player_id:
                continue
            if self.rng.random() >= self.config.propose_probability:
                continue
            trade = self._random_swap(state, target, working)
            if trade is not None:
                reserve(working, trade, self.player_id)
                proposals[target] = trade
        return proposals

    def propose_trade_as_non_lead(self, state: GameState) -> Optional[Trade]:
        if self.rng.random() >= self.config.propose_probability:
            return None
        working = dict(state.player_state(self.player_id).goods)
        return self._random_swap(state, state.lead, working)

    def accept_trades_as_lead(self, state: GameState) -> list[bool]:
        working = dict(state.player_state(self.player_id).goods)
        decisions = []
        for _, trade in state.sorted_proposals():
            accepted = (
                self.rng.random() < self.config.accept_probability
                and can_afford(working, trade, self.player_id)
            )
            if accepted:
                reserve(working, trade, self.player_id)
            decisions.append(accepted)
        return decisions

    def accept_trades_as_non_lead(self, state: GameState, trade: Trade) -> bool:
        roll = self.rng.random()
        holdings = state.player_state(self.player_id).goods
        return roll < self.config.accept_probability and can_afford(holdings, trade, self.player_id)

    def _random_swap(
        self,
        state: GameState,
        target: PlayerId,
        working: GoodsSet,
    ) -> Optional[Trade]:
        units = self.config.units
        their_goods = state.player_state(target).goods

        gives = [c for c in CATEGORIES if working.get(c, 0.0) > units]
        if not gives:
            return None
        give = self.rng.choice(gives)

        takes = [c for c in CATEGORIES if c != give and their_goods.get(c, 0.0) > units]
        if not takes:
            return None
        take = self.rng.choice(takes)

        return Trade.swap(self.player_id, target, give, take, units)
