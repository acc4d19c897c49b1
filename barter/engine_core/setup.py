"""
Game Setup - Creates the initial state of one game.

This module handles:
- Building and shuffling the deck
- Dealing preference cards
- Starting cash with the per-seat fairness offset

Each random stream is created here, used for exactly one step and then
dropped. A seed of 0 means a fresh, non-reproducible source.
"""

from __future__ import annotations
import random
from typing import TYPE_CHECKING

from .state import (
    CATEGORIES,
    GOODS_CATEGORIES,
    MONEY,
    GameState,
    Good,
    PlayerState,
    Preferences,
)
from ..config import SEAT_MONEY_OFFSETS

if TYPE_CHECKING:
    from ..config import GameRules, SimConfig


# Non-money weights on every preference card, in some order
PREFERENCE_WEIGHTS: tuple[int, ...] = (1, 2, 2, 5, 10)


def make_rng(seed: int) -> random.Random:
    """Seeded generator, or an OS-seeded one for seed 0."""
    if seed == 0:
        return random.Random()
    return random.Random(seed)


def generate_deck(config: SimConfig, rules: GameRules) -> list[Good]:
    """
    Build the deck from the goods categories and shuffle it.

    Each category gets deck_size // 5 cards, so the deck can come out
    slightly smaller than deck_size.
    """
    rng = make_rng(config.deck_shuffle_seed)
    per_category = rules.deck_size // len(GOODS_CATEGORIES)

    deck = [
        Good(category=category)
        for category in GOODS_CATEGORIES
        for _ in range(per_category)
    ]
    rng.shuffle(deck)
    return deck


def generate_preferences_deck(config: SimConfig) -> list[Preferences]:
    """
    Deal one preference card per player.

    Money is always worth 1. The other weights are a permutation of
    PREFERENCE_WEIGHTS; the permutation is reshuffled in place for each
    card so successive cards depend on the ones before.
    """
    rng = make_rng(config.preferences_seed)
    values = list(PREFERENCE_WEIGHTS)

    deck: list[Preferences] = []
    for _ in range(config.num_players):
        rng.shuffle(values)
        preferences: Preferences = {MONEY: 1.0}
        for category, weight in zip(GOODS_CATEGORIES, values):
            preferences[category] = float(weight)
        deck.append(preferences)
    return deck


def generate_players(
    config: SimConfig,
    rules: GameRules,
    preferences_deck: list[Preferences],
) -> list[PlayerState]:
    """Seat the players, drawing preference cards from the top of the deck."""
    # TODO: the offset only balances two players well; find integer
    # offsets that offset first-mover advantage for larger tables.
    preferences_deck = list(preferences_deck)
    players = []
    for seat in range(config.num_players):
        preferences = preferences_deck.pop()
        goods = {category: 0.0 for category in CATEGORIES}
        goods[MONEY] = rules.start_money + SEAT_MONEY_OFFSETS[seat] * seat
        players.append(PlayerState(preferences=preferences, goods=goods))
    return players


def generate_start_state(config: SimConfig, rules: GameRules) -> GameState:
    """Create a fresh GameState ready for the first lead draw."""
    preferences_deck = generate_preferences_deck(config)
    return GameState(
        players=generate_players(config, rules, preferences_deck),
        deck=generate_deck(config, rules),
    )
