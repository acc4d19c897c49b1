"""
Simulation Runner - Plays many independent games and aggregates them.

Each run gets a fresh start state generated from the configured seeds,
and every strategy is reset() before it starts, so runs share nothing.
Results fold into a win histogram and streaming statistics over game
length and per-seat score.
"""

from __future__ import annotations
import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Sequence, TextIO

from .display import make_round_hook
from .stats import Stats, StatsAccumulator
from ..engine_core.engine import TurnEngine
from ..engine_core.setup import generate_start_state
from ..strategies.registry import StrategyRegistry, build_roster, default_registry

if TYPE_CHECKING:
    from ..config import GameRules, SimConfig
    from ..engine_core.engine import RoundHook
    from ..engine_core.state import GameResult
    from ..strategies.base import PlayerStrategy


logger = logging.getLogger(__name__)


@dataclass
class SimulationReport:
    """Aggregate outcome of a batch of runs."""
    results: list[GameResult]
    wins_by_player: dict[int, int]
    turn_stats: Stats
    score_stats: list[Stats] = field(default_factory=list)

    @property
    def num_runs(self) -> int:
        return len(self.results)

    def to_dict(self, include_results: bool = False) -> dict[str, Any]:
        data: dict[str, Any] = {
            "num_runs": self.num_runs,
            "wins_by_player": {str(k): v for k, v in sorted(self.wins_by_player.items())},
            "turn_stats": self.turn_stats.to_dict(),
            "score_stats": [s.to_dict() for s in self.score_stats],
        }
        if include_results:
            data["results"] = [r.to_dict() for r in self.results]
        return data


@dataclass
class _Batch:
    """Results of a contiguous slice of runs, plus their partial stats."""
    results: list[GameResult] = field(default_factory=list)
    turns: StatsAccumulator = field(default_factory=StatsAccumulator)
    scores: list[StatsAccumulator] = field(default_factory=list)

    def add(self, result: GameResult) -> None:
        self.results.append(result)
        self.turns.add(result.turns)
        while len(self.scores) < len(result.scores):
            self.scores.append(StatsAccumulator())
        for acc, score in zip(self.scores, result.scores):
            acc.add(score)


def play_runs(
    rules: GameRules,
    config: SimConfig,
    roster: Sequence[PlayerStrategy],
    num_runs: int,
    before_round: Optional[RoundHook] = None,
) -> list[GameResult]:
    """Play num_runs games with an already built roster."""
    return _play_batch(rules, config, roster, num_runs, before_round).results


def _play_batch(
    rules: GameRules,
    config: SimConfig,
    roster: Sequence[PlayerStrategy],
    num_runs: int,
    before_round: Optional[RoundHook] = None,
) -> _Batch:
    engine = TurnEngine(rules=rules, before_round=before_round)
    batch = _Batch()
    for run in range(num_runs):
        for strategy in roster:
            strategy.reset()
        state = generate_start_state(config, rules)
        result = engine.play(state, roster)
        logger.debug(
            "Run %d: player %d won after %d turns, scores %s",
            run, result.winner, result.turns, result.scores,
        )
        batch.add(result)
    return batch


def _run_worker_batch(
    rules: GameRules,
    config: SimConfig,
    registry: StrategyRegistry,
    num_runs: int,
) -> _Batch:
    """Process pool entry point: each worker builds its own roster."""
    roster = build_roster(registry, config.player_configs, config.num_players)
    return _play_batch(rules, config, roster, num_runs)


def _split_runs(num_runs: int, workers: int) -> list[int]:
    base, extra = divmod(num_runs, workers)
    sizes = [base + (1 if i < extra else 0) for i in range(workers)]
    return [size for size in sizes if size > 0]


def run_simulation(
    rules: GameRules,
    config: SimConfig,
    registry: Optional[StrategyRegistry] = None,
    visualize: bool = True,
    workers: int = 1,
    stream: Optional[TextIO] = None,
) -> SimulationReport:
    """
    Play config.num_runs games and aggregate the results.

    Args:
        rules: Game rules
        config: Seeds, table size, run count and seat strategies
        registry: Strategy table (default_registry() if not provided)
        visualize: Honor turn_pause_millis / hide_game_state
        workers: Process count; above 1 disables visualization
        stream: Where the state printer writes (stdout if not provided)

    Raises:
        ConfigurationError: before any game is played, if the roster is invalid
    """
    if workers < 1:
        raise ValueError("workers must be >= 1")

    registry = registry or default_registry()
    roster = build_roster(registry, config.player_configs, config.num_players)

    logger.info(
        "Simulating %d run(s), %d players, threshold %g, start money %g, deck %d, max turns %d",
        config.num_runs, config.num_players, rules.victory_threshold,
        rules.start_money, rules.deck_size, rules.max_turns,
    )

    if workers > 1 and config.num_runs > 1:
        sizes = _split_runs(config.num_runs, workers)
        with ProcessPoolExecutor(max_workers=len(sizes)) as pool:
            futures = [
                pool.submit(_run_worker_batch, rules, config, registry, size)
                for size in sizes
            ]
            batches = [future.result() for future in futures]
    else:
        hook = make_round_hook(config, stream) if visualize else None
        batches = [_play_batch(rules, config, roster, config.num_runs, hook)]

    results: list[GameResult] = []
    turns = StatsAccumulator()
    scores = [StatsAccumulator() for _ in range(config.num_players)]
    for batch in batches:
        results.extend(batch.results)
        turns.merge(batch.turns)
        for acc, partial in zip(scores, batch.scores):
            acc.merge(partial)

    wins_by_player = {seat: 0 for seat in range(config.num_players)}
    for result in results:
        wins_by_player[result.winner] += 1

    report = SimulationReport(
        results=results,
        wins_by_player=wins_by_player,
        turn_stats=turns.summary(),
        score_stats=[acc.summary() for acc in scores],
    )
    logger.info("Wins by player: %s; turn stats: %s", wins_by_player, report.turn_stats)
    return report
