"""
Console visualization hooks.

Neither hook touches the game: one prints the state, the other waits.
The engine calls them at the start of every round.
"""

from __future__ import annotations
import json
import sys
import time
from typing import TYPE_CHECKING, Callable, Optional, TextIO

if TYPE_CHECKING:
    from ..config import SimConfig
    from ..engine_core.engine import RoundHook
    from ..engine_core.state import GameState


def format_state(state: GameState) -> str:
    """Pretty-print a game state as indented JSON."""
    return json.dumps(state.to_dict(), indent=2, sort_keys=True)


def make_round_hook(
    config: SimConfig,
    stream: Optional[TextIO] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Optional[RoundHook]:
    """
    Build the per-round hook described by the config.

    Returns None when the config asks for neither pacing nor printing.
    """
    pause_seconds = config.turn_pause_millis / 1000.0
    show_state = not config.hide_game_state
    if pause_seconds <= 0 and not show_state:
        return None

    def before_round(state: GameState) -> None:
        if pause_seconds > 0:
            sleep(pause_seconds)
        if show_state:
            print(format_state(state), file=stream or sys.stdout)

    return before_round
