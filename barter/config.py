"""
Configuration models - Game rules and simulation settings.

Both files are optional JSON documents. Every field has a default, so a
partial document (or none at all) is valid. Unknown keys are ignored.

GameRules:
    victory_threshold  Points the lead needs at round start to win (50)
    start_money        Cash dealt to every seat (10)
    deck_size          Cards in the deck, split evenly over goods (500)
    max_turns          Hard cap on turns per game (1000)
    max_rounds_per_turn  Optional cap on trading rounds per turn (None)

SimConfig:
    deck_shuffle_seed  Deck shuffle seed, 0 for non-reproducible (0)
    preferences_seed   Preference deal seed, 0 for non-reproducible (1)
    num_players        Seats at the table (2)
    num_runs           Games to simulate (100)
    player_configs     Strategy per seat; missing seats never trade
    turn_pause_millis  Visualization pacing between rounds (500)
    hide_game_state    Suppress the per-round state dump (False)
"""

from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from .errors import ConfigurationError


# Extra starting money per seat to offset first-mover advantage. The seat
# index multiplies the offset, so seat 1 of a 2-player game gets +2.
SEAT_MONEY_OFFSETS: tuple[float, ...] = (0.0, 2.0, 0.0, 0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0, 1.0)

MAX_PLAYERS = len(SEAT_MONEY_OFFSETS)

DEFAULT_PLAYER_TYPE = "PlayerNoTrades"


class GameRules(BaseModel):
    """Rules of one game."""
    victory_threshold: float = Field(50.0, gt=0)
    start_money: float = Field(10.0, ge=0)
    deck_size: int = Field(500, ge=0)
    max_turns: int = Field(1000, ge=0)
    max_rounds_per_turn: Optional[int] = Field(None, ge=1)


class PlayerConfig(BaseModel):
    """Strategy assignment for one seat."""
    player_type: str
    config: Any = None


class SimConfig(BaseModel):
    """Settings for a batch of simulated games."""
    deck_shuffle_seed: int = Field(0, ge=0)
    preferences_seed: int = Field(1, ge=0)
    num_players: int = Field(2, ge=1, le=MAX_PLAYERS)
    num_runs: int = Field(100, ge=0)
    player_configs: list[PlayerConfig] = Field(default_factory=list)
    turn_pause_millis: int = Field(500, ge=0)
    hide_game_state: bool = False

    @model_validator(mode="after")
    def _check_player_configs(self) -> SimConfig:
        if len(self.player_configs) > self.num_players:
            raise ValueError(
                f"{len(self.player_configs)} player_configs given for {self.num_players} players"
            )
        return self


def _format_validation_errors(exc: ValidationError) -> list[str]:
    errors = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or "<root>"
        errors.append(f"{location}: {err.get('msg', 'invalid value')}")
    return errors


def parse_rules(data: dict[str, Any] | None) -> GameRules:
    """Validate a rules mapping, raising ConfigurationError on bad input."""
    try:
        return GameRules.model_validate(data or {})
    except ValidationError as e:
        raise ConfigurationError(_format_validation_errors(e)) from e


def parse_sim_config(data: dict[str, Any] | None) -> SimConfig:
    """Validate a simulation config mapping, raising ConfigurationError on bad input."""
    try:
        return SimConfig.model_validate(data or {})
    except ValidationError as e:
        raise ConfigurationError(_format_validation_errors(e)) from e


def _read_json(path: Union[str, Path]) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"File not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path}: invalid JSON ({e.msg} at line {e.lineno})") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object at top level")
    return data


def load_rules(path: Union[str, Path, None] = None) -> GameRules:
    """Load GameRules from a JSON file. None gives the defaults."""
    if path is None:
        return GameRules()
    return parse_rules(_read_json(path))


def load_sim_config(path: Union[str, Path, None] = None) -> SimConfig:
    """Load SimConfig from a JSON file. None gives the defaults."""
    if path is None:
        return SimConfig()
    return parse_sim_config(_read_json(path))
