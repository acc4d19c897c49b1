"""
Simulation Module - Batches of independent games.

A simulation:
- Builds the roster once and validates it before any game runs
- Resets every strategy between runs
- Folds results into a win histogram and streaming statistics
"""

from .stats import Stats, StatsAccumulator
from .display import format_state, make_round_hook
from .runner import SimulationReport, play_runs, run_simulation

__all__ = [
    "Stats",
    "StatsAccumulator",
    "format_state",
    "make_round_hook",
    "SimulationReport",
    "play_runs",
    "run_simulation",
]
