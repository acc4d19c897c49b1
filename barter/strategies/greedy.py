"""
Greedy Trader - Proposes swaps that help both sides.

Preferences are public, so the trader can tell which one-for-one swap
raises its own score the most while still raising the counterparty's.
Every settled greedy trade strictly increases total welfare, and the
trader never repeats an offer within a turn, so a table of greedy
traders always reaches a turn where the lead has nothing left to offer.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional

from pydantic import Field

from .base import PlayerStrategy, StrategyConfig, can_afford, reserve
from ..engine_core.state import CATEGORIES, Trade

if TYPE_CHECKING:
    from ..engine_core.state import GameState, GoodsSet, PlayerId


class GreedyConfig(StrategyConfig):
    """Configuration for GreedyTrader."""
    min_gain: float = Field(0.0, ge=0, description="Smallest own score gain worth trading for")
    units: float = Field(1.0, gt=0, description="Quantity moved each way in a swap")


class GreedyTrader(PlayerStrategy):
    """
    Greedy policy - always offers its best mutually beneficial swap.

    Accepts any affordable trade that raises its own score by at least
    min_gain (and by more than zero).
    """

    config_model = GreedyConfig

    def __init__(self):
        super().__init__()
        self._offer_turn = -1
        self._offered: set[tuple[int, str, str]] = set()

    def reset(self) -> None:
        self._offer_turn = -1
        self._offered = set()

    def propose_trades_as_lead(self, state: GameState) -> dict[PlayerId, Trade]:
        working = dict(state.player_state(self.player_id).goods)
        proposals: dict[PlayerId, Trade] = {}

        for target in range(state.num_players):
            if target == self.player_id:
                continue
            trade = self._best_swap(state, target, working)
            if trade is not None:
                reserve(working, trade, self.player_id)
                proposals[target] = trade
        return proposals

    def propose_trade_as_non_lead(self, state: GameState) -> Optional[Trade]:
        working = dict(state.player_state(self.player_id).goods)
        return self._best_swap(state, state.lead, working)

    def accept_trades_as_lead(self, state: GameState) -> list[bool]:
        working = dict(state.player_state(self.player_id).goods)
        decisions = []
        for _, trade in state.sorted_proposals():
            accepted = self._wants(state, trade) and can_afford(working, trade, self.player_id)
            if accepted:
                reserve(working, trade, self.player_id)
            decisions.append(accepted)
        return decisions

    def accept_trades_as_non_lead(self, state: GameState, trade: Trade) -> bool:
        holdings = state.player_state(self.player_id).goods
        return self._wants(state, trade) and can_afford(holdings, trade, self.player_id)

    def _wants(self, state: GameState, trade: Trade) -> bool:
        gain = trade.value_for(self.player_id, state.player_state(self.player_id).preferences)
        return gain > 0 and gain >= self.config.min_gain

    def _best_swap(
        self,
        state: GameState,
        target: PlayerId,
        working: GoodsSet,
    ) -> Optional[Trade]:
        """Best new swap with target that both sides gain from, or None."""
        if state.current_turn != self._offer_turn:
            self._offer_turn = state.current_turn
            self._offered = set()

        units = self.config.units
        mine = state.player_state(self.player_id).preferences
        theirs = state.player_state(target).preferences
        their_goods = state.player_state(target).goods

        best: Optional[tuple[float, float, str, str]] = None
        for give in CATEGORIES:
            if not working.get(give, 0.0) > units:
                continue
            for take in CATEGORIES:
                if take == give or not their_goods.get(take, 0.0) > units:
                    continue
                if (target, give, take) in self._offered:
                    continue
                my_gain = (mine.get(take, 0.0) - mine.get(give, 0.0)) * units
                their_gain = (theirs.get(give, 0.0) - theirs.get(take, 0.0)) * units
                if my_gain <= 0 or my_gain < self.config.min_gain or their_gain <= 0:
                    continue
                if best is None or (my_gain, their_gain) > best[:2]:
                    best = (my_gain, their_gain, give, take)

        if best is None:
            return None

        _, _, give, take = best
        self._offered.add((target, give, take))
        return Trade.swap(self.player_id, target, give, take, units)
