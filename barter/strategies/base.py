"""
Player Strategy - Interface every seat implementation satisfies.

A strategy is created from a zero-argument factory, initialized once
with its seat and configuration payload, and reset between runs. During
play the engine calls it at four points:
- Lead, even round: propose trades to other seats
- Non-lead, odd round: maybe propose one trade to the lead
- Lead, odd round: accept or reject every pending proposal
- Non-lead, even round: accept or reject the lead's trade

Contract: a strategy only proposes or accepts trades it can fulfill,
counting every trade it has outstanding at the same time. The state
passed to every hook is read-only; the engine raises ProtocolError if a
strategy changes any holdings. While deciding on the lead's offer a
non-lead seat sees only its own trade in current_proposals.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import StrategyConfigError

if TYPE_CHECKING:
    from ..engine_core.state import GameState, GoodsSet, PlayerId, Trade


class StrategyConfig(BaseModel):
    """Base for per-strategy configuration. Unknown keys are rejected."""
    model_config = ConfigDict(extra="forbid")


class PlayerStrategy(ABC):
    """
    Abstract base class for player strategies.

    Subclasses set config_model to a StrategyConfig subclass describing
    their payload, and override reset() if they hold per-run state.
    """

    config_model: type[StrategyConfig] = StrategyConfig

    def __init__(self):
        self.player_id: Optional[PlayerId] = None
        self.config: StrategyConfig = self.config_model()

    def init(self, player_id: PlayerId, config: Any = None) -> None:
        """
        One-time setup for a seat.

        Raises StrategyConfigError if the payload does not match
        config_model.
        """
        self.player_id = player_id
        self.config = self.parse_config(config)
        self.reset()

    @classmethod
    def parse_config(cls, payload: Any) -> StrategyConfig:
        """Validate a raw payload against this strategy's config model."""
        try:
            return cls.config_model.model_validate(payload if payload is not None else {})
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err.get('loc', ())) or '<root>'}: {err.get('msg')}"
                for err in e.errors()
            ]
            raise StrategyConfigError(errors) from e

    def reset(self) -> None:
        """Return to the state right after init(). Called between runs."""

    @abstractmethod
    def propose_trades_as_lead(self, state: GameState) -> dict[PlayerId, Trade]:
        """
        Propose at most one trade per other seat.

        Returns:
            Mapping of target seat to a Trade with this seat as proposer
        """
        pass

    @abstractmethod
    def propose_trade_as_non_lead(self, state: GameState) -> Optional[Trade]:
        """Propose at most one trade to the lead, or None."""
        pass

    @abstractmethod
    def accept_trades_as_lead(self, state: GameState) -> list[bool]:
        """
        Decide on every pending proposal.

        Returns:
            One bool per entry of state.sorted_proposals(), in that order
        """
        pass

    @abstractmethod
    def accept_trades_as_non_lead(self, state: GameState, trade: Trade) -> bool:
        """Accept or reject the single trade the lead addressed to this seat."""
        pass

    def get_name(self) -> str:
        """Get the strategy's name/identifier."""
        return self.__class__.__name__


def can_afford(holdings: GoodsSet, trade: Trade, player_id: PlayerId) -> bool:
    """True if player_id holds strictly more than everything it would give."""
    return all(
        holdings.get(category, 0.0) > amount
        for category, amount in trade.outgoing(player_id).items()
    )


def reserve(holdings: GoodsSet, trade: Trade, player_id: PlayerId) -> None:
    """Deduct a trade's outgoing goods from a working copy of holdings."""
    for category, amount in trade.outgoing(player_id).items():
        holdings[category] = holdings.get(category, 0.0) - amount


class NoTradesStrategy(PlayerStrategy):
    """
    Never proposes, never accepts.

    Used for:
    - Seats with no configured strategy
    - Baseline comparison
    """

    def propose_trades_as_lead(self, state: GameState) -> dict[PlayerId, Trade]:
        return {}

    def propose_trade_as_non_lead(self, state: GameState) -> Optional[Trade]:
        return None

    def accept_trades_as_lead(self, state: GameState) -> list[bool]:
        return [False] * len(state.current_proposals)

    def accept_trades_as_non_lead(self, state: GameState, trade: Trade) -> bool:
        return False
