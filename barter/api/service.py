"""
API Service - Layer between the HTTP app and the simulator.

Framework-agnostic: translates request models into run_simulation calls
and reports back as response models. Never visualizes.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    GameResultInfo,
    SimulationRequest,
    SimulationResponse,
    StatsInfo,
    StrategyListResponse,
)
from ..config import DEFAULT_PLAYER_TYPE
from ..errors import ConfigurationError
from ..simulation import run_simulation
from ..strategies import StrategyRegistry, default_registry


# Strategies that block on a terminal cannot run behind the API
INTERACTIVE_STRATEGIES = frozenset({"RealPlayerCLI"})


@dataclass
class SimulationService:
    """
    Runs simulations on behalf of API callers.

    Usage:
        service = SimulationService()
        response = service.run(SimulationRequest(config=SimConfig(num_runs=10)))
    """
    registry: StrategyRegistry = field(default_factory=default_registry)
    max_runs: int = 10000

    def list_strategies(self) -> StrategyListResponse:
        names = [n for n in self.registry.names() if n not in INTERACTIVE_STRATEGIES]
        return StrategyListResponse(strategies=names, default=DEFAULT_PLAYER_TYPE)

    def run(self, request: SimulationRequest) -> SimulationResponse:
        """
        Run the requested batch.

        Raises:
            ConfigurationError: too many runs, an interactive or unknown
                strategy, or a bad strategy payload
        """
        config = request.config
        errors = []
        if config.num_runs > self.max_runs:
            errors.append(f"num_runs {config.num_runs} exceeds the limit of {self.max_runs}")
        for seat, player in enumerate(config.player_configs):
            if player.player_type in INTERACTIVE_STRATEGIES:
                errors.append(f"player {seat}: {player.player_type} needs a terminal")
        if errors:
            raise ConfigurationError(errors)

        report = run_simulation(request.rules, config, registry=self.registry, visualize=False)

        results = None
        if request.include_results:
            results = [GameResultInfo(**r.to_dict()) for r in report.results]

        return SimulationResponse(
            num_runs=report.num_runs,
            wins_by_player=report.wins_by_player,
            turn_stats=StatsInfo(**report.turn_stats.to_dict()),
            score_stats=[StatsInfo(**s.to_dict()) for s in report.score_stats],
            results=results,
        )
