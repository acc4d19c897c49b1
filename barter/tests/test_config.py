"""
Tests for configuration loading and validation.
"""

import json

import pytest

from ..config import (
    MAX_PLAYERS,
    GameRules,
    SimConfig,
    load_rules,
    load_sim_config,
    parse_rules,
    parse_sim_config,
)
from ..errors import ConfigurationError


def write_json(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data) if not isinstance(data, str) else data)
    return path


class TestDefaults:
    """Tests for default values."""

    def test_rules_defaults(self):
        """No file means default rules."""
        rules = load_rules()
        assert rules == GameRules()
        assert rules.victory_threshold == 50.0
        assert rules.start_money == 10.0
        assert rules.deck_size == 500
        assert rules.max_turns == 1000
        assert rules.max_rounds_per_turn is None

    def test_sim_defaults(self):
        """No file means default simulation settings."""
        config = load_sim_config()
        assert config.deck_shuffle_seed == 0
        assert config.preferences_seed == 1
        assert config.num_players == 2
        assert config.num_runs == 100
        assert config.player_configs == []
        assert config.turn_pause_millis == 500
        assert config.hide_game_state is False

    def test_partial_document(self):
        """Missing keys take their defaults."""
        rules = parse_rules({"victory_threshold": 30})
        assert rules.victory_threshold == 30.0
        assert rules.deck_size == 500

    def test_unknown_keys_ignored(self):
        """Unrecognized keys are not an error."""
        config = parse_sim_config({"num_runs": 3, "colour": "blue"})
        assert config.num_runs == 3


class TestValidation:
    """Tests for rejected configurations."""

    def test_too_many_player_configs(self):
        """More player_configs than seats is rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_sim_config({
                "num_players": 1,
                "player_configs": [{"player_type": "PlayerNoTrades"}] * 2,
            })
        assert "player_configs" in str(exc_info.value)

    def test_table_size_bounds(self):
        """num_players must fit the seat offset table."""
        parse_sim_config({"num_players": MAX_PLAYERS})
        with pytest.raises(ConfigurationError):
            parse_sim_config({"num_players": MAX_PLAYERS + 1})
        with pytest.raises(ConfigurationError):
            parse_sim_config({"num_players": 0})

    def test_errors_are_collected(self):
        """Every bad field is reported with its location."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_rules({"victory_threshold": 0, "deck_size": -1})

        errors = exc_info.value.errors
        assert len(errors) == 2
        assert any(e.startswith("victory_threshold:") for e in errors)
        assert any(e.startswith("deck_size:") for e in errors)

    def test_player_type_required(self):
        """A player config without player_type is rejected."""
        with pytest.raises(ConfigurationError):
            parse_sim_config({"player_configs": [{"config": {}}]})

    def test_round_cap_must_be_positive(self):
        """max_rounds_per_turn of 0 would stop every turn at once."""
        with pytest.raises(ConfigurationError):
            parse_rules({"max_rounds_per_turn": 0})


class TestFiles:
    """Tests for reading configuration files."""

    def test_load_from_file(self, tmp_path):
        """A JSON file is parsed into the model."""
        path = write_json(tmp_path, "sim.json", {
            "num_players": 3,
            "num_runs": 7,
            "player_configs": [{"player_type": "GreedyTrader", "config": {"min_gain": 1}}],
        })
        config = load_sim_config(path)

        assert config.num_players == 3
        assert config.player_configs[0].player_type == "GreedyTrader"
        assert config.player_configs[0].config == {"min_gain": 1}

    def test_load_rules_from_str_path(self, tmp_path):
        """String paths work too."""
        path = write_json(tmp_path, "rules.json", {"max_turns": 10})
        assert load_rules(str(path)).max_turns == 10

    def test_missing_file(self, tmp_path):
        """A missing file is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_rules(tmp_path / "nope.json")
        assert "not found" in str(exc_info.value)

    def test_invalid_json(self, tmp_path):
        """Malformed JSON is a configuration error."""
        path = write_json(tmp_path, "bad.json", "{not json")
        with pytest.raises(ConfigurationError) as exc_info:
            load_sim_config(path)
        assert "invalid JSON" in str(exc_info.value)

    def test_top_level_must_be_object(self, tmp_path):
        """A JSON list is not a config document."""
        path = write_json(tmp_path, "list.json", [1, 2])
        with pytest.raises(ConfigurationError):
            load_rules(path)

    def test_wrong_type_in_file(self, tmp_path):
        """Type errors in a file are reported by field."""
        path = write_json(tmp_path, "sim.json", {"num_runs": "many"})
        with pytest.raises(ConfigurationError) as exc_info:
            load_sim_config(path)
        assert exc_info.value.errors[0].startswith("num_runs:")

    def test_sample_configs_are_valid(self):
        """The shipped sample configs load."""
        from pathlib import Path

        root = Path(__file__).resolve().parents[2] / "configs"
        assert load_rules(root / "rules.json").victory_threshold > 0
        assert load_sim_config(root / "sim.json").player_configs
