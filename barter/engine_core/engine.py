"""
Turn Engine - Drives one game through turns and trading rounds.

The engine is the single point of state mutation during play.

Turn flow:
1. Lead draws the top card of the deck
2. Rounds repeat until the lead goes quiet:
   - Victory check on the lead's score
   - Even round: lead proposes to any number of other seats,
     each addressee accepts or rejects its own trade
   - Odd round: every other seat may propose one trade to the lead,
     the lead answers all of them at once
   - Accepted trades settle immediately
3. Lead passes to the next seat

The game ends on victory, an empty deck, or max_turns.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from .state import CATEGORIES, GameResult, GameState, PlayerId, Trade
from ..errors import ProtocolError, SettlementError

if TYPE_CHECKING:
    from ..config import GameRules
    from ..strategies.base import PlayerStrategy


logger = logging.getLogger(__name__)

RoundHook = Callable[[GameState], None]


def settle_trade(state: GameState, trade: Trade) -> None:
    """
    Apply an accepted trade to both players' holdings.

    Every nonzero entry requires its source side to hold strictly more
    than the amount moved. Entries are checked against the running
    holdings in order (proposer side first, each in category order). The
    trade applies atomically: on a violation nothing changes and
    SettlementError is raised.
    """
    unknown = trade.categories - set(CATEGORIES)
    if unknown:
        raise SettlementError(f"Trade names unknown categories: {sorted(unknown)}")

    holdings = {
        trade.proposer: dict(state.players[trade.proposer].goods),
        trade.accepter: dict(state.players[trade.accepter].goods),
    }
    sides = (
        (trade.proposer, trade.accepter, trade.from_proposer),
        (trade.accepter, trade.proposer, trade.from_accepter),
    )
    for giver, receiver, amounts in sides:
        for category in CATEGORIES:
            amount = amounts.get(category, 0.0)
            if amount == 0:
                continue
            source = giver if amount > 0 else receiver
            held = holdings[source].get(category, 0.0)
            if not held > abs(amount):
                raise SettlementError(
                    f"Player {source} holds {held} {category}, "
                    f"needs more than {abs(amount)} to settle {trade.to_dict()}"
                )
            holdings[giver][category] = holdings[giver].get(category, 0.0) - amount
            holdings[receiver][category] = holdings[receiver].get(category, 0.0) + amount

    state.players[trade.proposer].goods = holdings[trade.proposer]
    state.players[trade.accepter].goods = holdings[trade.accepter]


def _check_trade(trade: object, proposer: PlayerId, accepter: PlayerId) -> Trade:
    """Validate that a submitted trade is addressed the way the protocol requires."""
    if not isinstance(trade, Trade):
        raise ProtocolError(f"Player {proposer} submitted {type(trade).__name__}, not a Trade")
    if trade.proposer != proposer or trade.accepter != accepter:
        raise ProtocolError(
            f"Trade {trade.proposer}->{trade.accepter} submitted where "
            f"{proposer}->{accepter} was expected"
        )
    unknown = trade.categories - set(CATEGORIES)
    if unknown:
        raise ProtocolError(f"Trade from player {proposer} names unknown categories: {sorted(unknown)}")
    return trade


def _check_decision(decision: object, player_id: PlayerId) -> bool:
    if not isinstance(decision, bool):
        raise ProtocolError(
            f"Player {player_id} answered with {type(decision).__name__}, not a bool"
        )
    return decision


def _holdings(state: GameState) -> tuple:
    return (len(state.deck), tuple(tuple(sorted(p.goods.items())) for p in state.players))


def _check_untouched(state: GameState, before: tuple) -> None:
    """Strategies read the state; only settlement may change holdings."""
    if _holdings(state) != before:
        raise ProtocolError(
            f"Holdings changed outside settlement on turn {state.current_turn} "
            f"round {state.current_round}"
        )


@dataclass
class TurnEngine:
    """
    Plays games under a fixed set of rules.

    Stateless between games - all game state is in GameState.
    before_round is called at the start of every round, before the
    victory check. It is meant for visualization only.
    """
    rules: GameRules
    before_round: Optional[RoundHook] = None

    def play(self, state: GameState, roster: Sequence[PlayerStrategy]) -> GameResult:
        """Run a game to completion and return its result."""
        if len(roster) != state.num_players:
            raise ValueError(
                f"Roster has {len(roster)} strategies for {state.num_players} players"
            )

        while state.current_turn < self.rules.max_turns and state.deck:
            self._start_lead_turn(state)
            if self._play_rounds(state, roster):
                logger.debug(
                    "Player %d reached %.1f points on turn %d",
                    state.lead, state.lead_player_state.score(), state.current_turn,
                )
                break
            self._end_lead_turn(state)

        return GameResult.from_state(state)

    # =========================================================================
    # Turn structure
    # =========================================================================

    def _start_lead_turn(self, state: GameState) -> None:
        good = state.deck.pop()
        lead = state.lead_player_state
        lead.goods[good.category] = lead.goods.get(good.category, 0.0) + 1

    def _end_lead_turn(self, state: GameState) -> None:
        if state.current_proposals:
            raise ProtocolError(
                f"{len(state.current_proposals)} proposal(s) unresolved at end of turn "
                f"{state.current_turn}"
            )
        if state.current_trades:
            state.past_trades[state.current_turn] = state.current_trades
            state.current_trades = []

        state.lead = (state.lead + 1) % state.num_players
        state.current_turn += 1
        state.current_round = 0
        logger.debug("Turn %d: lead passes to player %d", state.current_turn, state.lead)

    def _play_rounds(self, state: GameState, roster: Sequence[PlayerStrategy]) -> bool:
        """
        Run trading rounds for the current lead.

        Returns True if the lead has won, False when trading is over.
        """
        max_rounds = self.rules.max_rounds_per_turn

        while True:
            if self.before_round is not None:
                self.before_round(state)

            if state.lead_player_state.score() >= self.rules.victory_threshold:
                return True

            if max_rounds is not None and state.current_round >= max_rounds:
                logger.warning(
                    "Turn %d hit the limit of %d trading rounds",
                    state.current_turn, max_rounds,
                )
                return False

            before = _holdings(state)
            lead_initiates = state.current_round % 2 == 0
            if lead_initiates:
                proposals = self._collect_lead_proposals(state, roster)
            else:
                proposals = self._collect_non_lead_proposals(state, roster)

            # The lead going quiet is the only voluntary end of trading
            if lead_initiates and state.current_round > 0 and not proposals:
                _check_untouched(state, before)
                return False

            state.current_proposals = proposals
            if lead_initiates:
                decisions = self._collect_non_lead_decisions(state, roster)
            else:
                decisions = self._collect_lead_decisions(state, roster)

            _check_untouched(state, before)
            self._end_round(state, decisions)

    def _end_round(self, state: GameState, decisions: list[bool]) -> None:
        proposals = state.sorted_proposals()
        state.current_proposals = {}

        for (player_id, trade), accepted in zip(proposals, decisions):
            if not accepted:
                continue
            settle_trade(state, trade)
            state.current_trades.append(trade)
            logger.debug(
                "Turn %d round %d: settled %d->%d %s / %s",
                state.current_turn, state.current_round,
                trade.proposer, trade.accepter, trade.from_proposer, trade.from_accepter,
            )

        logger.debug(
            "Turn %d round %d: %d proposal(s), %d accepted",
            state.current_turn, state.current_round, len(proposals), sum(decisions),
        )
        state.current_round += 1

    # =========================================================================
    # Proposals
    # =========================================================================

    def _collect_lead_proposals(
        self, state: GameState, roster: Sequence[PlayerStrategy]
    ) -> dict[PlayerId, Trade]:
        proposed = roster[state.lead].propose_trades_as_lead(state) or {}

        proposals: dict[PlayerId, Trade] = {}
        for target, trade in proposed.items():
            valid_seat = isinstance(target, int) and 0 <= target < state.num_players
            if not valid_seat or target == state.lead:
                raise ProtocolError(f"Lead {state.lead} proposed a trade to invalid seat {target}")
            proposals[target] = _check_trade(trade, state.lead, target)
        return proposals

    def _collect_non_lead_proposals(
        self, state: GameState, roster: Sequence[PlayerStrategy]
    ) -> dict[PlayerId, Trade]:
        proposals: dict[PlayerId, Trade] = {}
        for player_id, strategy in enumerate(roster):
            if player_id == state.lead:
                continue
            trade = strategy.propose_trade_as_non_lead(state)
            if trade is not None:
                proposals[player_id] = _check_trade(trade, player_id, state.lead)
        return proposals

    # =========================================================================
    # Decisions
    # =========================================================================

    def _collect_non_lead_decisions(
        self, state: GameState, roster: Sequence[PlayerStrategy]
    ) -> list[bool]:
        proposals = state.current_proposals
        decisions = []
        try:
            for player_id, trade in sorted(proposals.items()):
                # Each addressee sees only its own trade
                state.current_proposals = {player_id: trade}
                decision = roster[player_id].accept_trades_as_non_lead(state, trade)
                decisions.append(_check_decision(decision, player_id))
        finally:
            state.current_proposals = proposals
        return decisions

    def _collect_lead_decisions(
        self, state: GameState, roster: Sequence[PlayerStrategy]
    ) -> list[bool]:
        decisions = list(roster[state.lead].accept_trades_as_lead(state))
        if len(decisions) != len(state.current_proposals):
            raise ProtocolError(
                f"Lead {state.lead} answered {len(decisions)} of "
                f"{len(state.current_proposals)} proposals"
            )
        return [_check_decision(decision, state.lead) for decision in decisions]


def play(
    state: GameState,
    rules: GameRules,
    roster: Sequence[PlayerStrategy],
    before_round: Optional[RoundHook] = None,
) -> GameResult:
    """
    Convenience function to play one game.

    Creates a TurnEngine and runs it on the given state.
    """
    return TurnEngine(rules=rules, before_round=before_round).play(state, roster)
