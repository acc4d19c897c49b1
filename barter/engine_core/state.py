"""
Game State - Passive containers for one bartering game.

Design principles:
- Plain data: no behavior beyond scoring and read-only views
- Mutated in place by the TurnEngine only
- Serializable: to_dict() feeds the console printer and the API
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any


MONEY = "money"

# Fixed category vocabulary. Order matters: it is the iteration order used
# for deck building, preference dealing and settlement.
CATEGORIES: tuple[str, ...] = (MONEY, "cars", "clothing", "food", "art", "travel")

# Categories that appear in the deck and receive shuffled preference weights.
GOODS_CATEGORIES: tuple[str, ...] = CATEGORIES[1:]

Preferences = dict[str, float]
GoodsSet = dict[str, float]
PlayerId = int


@dataclass(frozen=True)
class Good:
    """A single card in the deck. Only its category matters."""
    category: str


@dataclass
class PlayerState:
    """
    Holdings and scoring weights for one seat.

    goods always has an entry for every category in CATEGORIES.
    """
    preferences: Preferences
    goods: GoodsSet = field(default_factory=dict)

    def score(self) -> float:
        """Preference-weighted sum of current holdings."""
        return sum(
            count * self.preferences.get(category, 0.0)
            for category, count in self.goods.items()
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "preferences": dict(self.preferences),
            "goods": dict(self.goods),
            "score": self.score(),
        }


@dataclass
class Trade:
    """
    A bilateral exchange proposal.

    Each side carries a signed quantity map. A positive amount means that
    side gives the goods away on settlement; a negative amount means that
    side receives them.
    """
    proposer: PlayerId
    accepter: PlayerId
    from_proposer: GoodsSet = field(default_factory=dict)
    from_accepter: GoodsSet = field(default_factory=dict)

    @classmethod
    def swap(
        cls,
        proposer: PlayerId,
        accepter: PlayerId,
        give: str,
        take: str,
        units: float = 1.0,
    ) -> Trade:
        """Build a plain swap: proposer gives `give`, receives `take`."""
        return cls(
            proposer=proposer,
            accepter=accepter,
            from_proposer={give: units},
            from_accepter={take: units},
        )

    @property
    def categories(self) -> set[str]:
        return set(self.from_proposer) | set(self.from_accepter)

    def outgoing(self, player_id: PlayerId) -> GoodsSet:
        """
        Total quantity per category the given side gives away.

        Incoming goods are ignored, so a side that holds strictly more
        than each outgoing total can always settle the trade.
        """
        if player_id == self.proposer:
            own, other = self.from_proposer, self.from_accepter
        elif player_id == self.accepter:
            own, other = self.from_accepter, self.from_proposer
        else:
            return {}

        totals: GoodsSet = {}
        for category, amount in own.items():
            if amount > 0:
                totals[category] = totals.get(category, 0.0) + amount
        for category, amount in other.items():
            if amount < 0:
                totals[category] = totals.get(category, 0.0) - amount
        return totals

    def net_change(self, player_id: PlayerId) -> GoodsSet:
        """Net change in holdings for one side if this trade settles."""
        if player_id == self.proposer:
            outgoing, incoming = self.from_proposer, self.from_accepter
        elif player_id == self.accepter:
            outgoing, incoming = self.from_accepter, self.from_proposer
        else:
            return {}

        change: GoodsSet = {}
        for category, amount in outgoing.items():
            change[category] = change.get(category, 0.0) - amount
        for category, amount in incoming.items():
            change[category] = change.get(category, 0.0) + amount
        return {c: v for c, v in change.items() if v != 0}

    def value_for(self, player_id: PlayerId, preferences: Preferences) -> float:
        """Score delta the given side would see if this trade settles."""
        return sum(
            amount * preferences.get(category, 0.0)
            for category, amount in self.net_change(player_id).items()
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "proposer": self.proposer,
            "accepter": self.accepter,
            "from_proposer": dict(self.from_proposer),
            "from_accepter": dict(self.from_accepter),
        }


@dataclass
class GameState:
    """
    Complete state of one game.

    lead is the seat whose turn it is. current_turn increments each time
    the lead changes; current_round increments each time a batch of
    proposals is resolved and resets at lead change. The lead proposes
    on even rounds.
    """
    deck: list[Good] = field(default_factory=list)
    players: list[PlayerState] = field(default_factory=list)
    lead: PlayerId = 0
    current_turn: int = 0
    current_round: int = 0

    # One slot per player id; drained every round
    current_proposals: dict[PlayerId, Trade] = field(default_factory=dict)

    # Settled this turn
    current_trades: list[Trade] = field(default_factory=list)
    # turn -> settled trades, only for turns that had any
    past_trades: dict[int, list[Trade]] = field(default_factory=dict)

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def lead_player_state(self) -> PlayerState:
        return self.players[self.lead]

    def player_state(self, player_id: PlayerId) -> PlayerState:
        return self.players[player_id]

    def scores(self) -> list[float]:
        return [player.score() for player in self.players]

    def deck_count(self, category: str) -> int:
        return sum(1 for good in self.deck if good.category == category)

    def category_totals(self) -> dict[str, float]:
        """Held plus undrawn quantity per category. Constant for a game."""
        totals = {category: float(self.deck_count(category)) for category in CATEGORIES}
        for player in self.players:
            for category, count in player.goods.items():
                totals[category] = totals.get(category, 0.0) + count
        return totals

    def sorted_proposals(self) -> list[tuple[PlayerId, Trade]]:
        """Current proposals in ascending player id order."""
        return sorted(self.current_proposals.items())

    def to_dict(self) -> dict[str, Any]:
        return {
            "deck_remaining": len(self.deck),
            "lead": self.lead,
            "current_turn": self.current_turn,
            "current_round": self.current_round,
            "players": [player.to_dict() for player in self.players],
            "current_proposals": {
                str(pid): trade.to_dict() for pid, trade in self.sorted_proposals()
            },
            "current_trades": [trade.to_dict() for trade in self.current_trades],
            "past_trades": {
                str(turn): [trade.to_dict() for trade in trades]
                for turn, trades in sorted(self.past_trades.items())
            },
        }


@dataclass
class GameResult:
    """Snapshot extracted when a game ends."""
    turns: int
    winner: PlayerId
    scores: list[float]

    @classmethod
    def from_state(cls, state: GameState) -> GameResult:
        scores = state.scores()
        # Strict comparison keeps the lowest index on ties
        winner = 0
        for player_id, score in enumerate(scores):
            if score > scores[winner]:
                winner = player_id
        return cls(turns=state.current_turn, winner=winner, scores=scores)

    def to_dict(self) -> dict[str, Any]:
        return {"turns": self.turns, "winner": self.winner, "scores": list(self.scores)}
