"""
Interactive CLI player - Lets a human take a seat.

The human is shown the table and asked yes/no questions and per-category
quantities on the terminal. Quantities are bounded so that every
proposal can be fulfilled; trades the human could not fulfill are
rejected without asking.
"""

from __future__ import annotations
import json
from typing import TYPE_CHECKING, Callable, Optional

from .base import PlayerStrategy, can_afford, reserve
from ..engine_core.state import CATEGORIES, Trade

if TYPE_CHECKING:
    from ..engine_core.state import GameState, GoodsSet, PlayerId


class RealPlayerCLI(PlayerStrategy):
    """
    Human player on stdin/stdout.

    input_fn and output_fn are swappable for testing.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        super().__init__()
        self.input_fn = input_fn
        self.output_fn = output_fn

    # =========================================================================
    # Prompts
    # =========================================================================

    def print_table_state(self, state: GameState) -> None:
        self.output_fn(
            f"\nHere's the table right now (turn {state.current_turn}, round {state.current_round}):"
        )
        for player_id, player in enumerate(state.players):
            if player_id == state.lead:
                tag = "[lead]"
            elif player_id == self.player_id:
                tag = "[ you]"
            else:
                tag = "      "
            self.output_fn(f"Player {player_id} {tag}: {json.dumps(player.goods, sort_keys=True)}")

        me = state.player_state(self.player_id)
        self.output_fn(f"Your point values: {json.dumps(me.preferences, sort_keys=True)}")
        self.output_fn(f"Your score: {me.score():g}\n")

    def ask_yes_no(self, prompt: str) -> bool:
        while True:
            answer = self.input_fn(f"{prompt} [y/n] ").strip().lower()
            if answer in ("y", "yes"):
                return True
            if answer in ("n", "no"):
                return False
            self.output_fn("Please answer y or n.")

    def ask_quantity(self, prompt: str, maximum: int) -> int:
        while True:
            answer = self.input_fn(f"{prompt} (0-{maximum}) ").strip()
            if not answer:
                return 0
            try:
                value = int(answer)
            except ValueError:
                self.output_fn("Please enter a whole number.")
                continue
            if 0 <= value <= maximum:
                return value
            self.output_fn(f"Please enter a number between 0 and {maximum}.")

    def ask_goods(self, prompt: str, holdings: GoodsSet) -> GoodsSet:
        """
        Ask how many of each category to move out of holdings.

        The maximum offered leaves at least part of a unit behind, since
        settlement needs the source to hold strictly more than it gives.
        """
        self.output_fn(prompt)
        result: GoodsSet = {}
        for category in CATEGORIES:
            held = holdings.get(category, 0.0)
            maximum = int(held) - 1 if float(held).is_integer() else int(held)
            if maximum <= 0:
                continue
            count = self.ask_quantity(f"  {category}?", maximum)
            if count:
                result[category] = float(count)
        return result

    def describe_trade(self, trade: Trade) -> str:
        return (
            f"Player {trade.proposer} gives {json.dumps(trade.from_proposer, sort_keys=True)}, "
            f"player {trade.accepter} gives {json.dumps(trade.from_accepter, sort_keys=True)}"
        )

    # =========================================================================
    # Strategy interface
    # =========================================================================

    def propose_trades_as_lead(self, state: GameState) -> dict[PlayerId, Trade]:
        self.print_table_state(state)
        working = dict(state.player_state(self.player_id).goods)
        proposals: dict[PlayerId, Trade] = {}

        for target in range(state.num_players):
            if target == self.player_id:
                continue
            if not self.ask_yes_no(f"Do you want to propose a trade to player {target}?"):
                continue
            trade = self._build_trade(state, target, working)
            if trade is not None:
                reserve(working, trade, self.player_id)
                proposals[target] = trade
        return proposals

    def propose_trade_as_non_lead(self, state: GameState) -> Optional[Trade]:
        self.print_table_state(state)
        if not self.ask_yes_no(f"Do you want to trade with player {state.lead}?"):
            return None
        working = dict(state.player_state(self.player_id).goods)
        return self._build_trade(state, state.lead, working)

    def accept_trades_as_lead(self, state: GameState) -> list[bool]:
        self.print_table_state(state)
        working = dict(state.player_state(self.player_id).goods)
        decisions = []
        for _, trade in state.sorted_proposals():
            self.output_fn(self.describe_trade(trade))
            if not can_afford(working, trade, self.player_id):
                self.output_fn("You can't fulfill this trade; rejecting it.")
                decisions.append(False)
                continue
            accepted = self.ask_yes_no("Do you want to make the trade?")
            if accepted:
                reserve(working, trade, self.player_id)
            decisions.append(accepted)
        return decisions

    def accept_trades_as_non_lead(self, state: GameState, trade: Trade) -> bool:
        self.print_table_state(state)
        self.output_fn(self.describe_trade(trade))
        if not can_afford(state.player_state(self.player_id).goods, trade, self.player_id):
            self.output_fn("You can't fulfill this trade; rejecting it.")
            return False
        return self.ask_yes_no("Do you want to make the trade?")

    def _build_trade(
        self,
        state: GameState,
        target: PlayerId,
        working: GoodsSet,
    ) -> Optional[Trade]:
        wanted = self.ask_goods("Which goods do you want?", state.player_state(target).goods)
        offered = self.ask_goods("Which goods will you give?", working)
        if not wanted and not offered:
            return None
        return Trade(
            proposer=self.player_id,
            accepter=target,
            from_proposer=offered,
            from_accepter=wanted,
        )
