"""Tests for search input parsing and config files."""

import json

import pytest

from rivercross.config import SearchConfig, load_config, parse_count, parse_delay
from rivercross.errors import ConfigurationError


class TestParse:

    def test_defaults(self):
        cfg = SearchConfig()
        assert (cfg.cannibals, cfg.missionaries, cfg.max_iterations, cfg.delay) == (3, 3, 30, 0.0)

    def test_strings_and_ints(self):
        cfg = SearchConfig.parse("2", 4, " 10 ", "0.5")
        assert cfg == SearchConfig(cannibals=2, missionaries=4, max_iterations=10, delay=0.5)

    def test_zero_cap_allowed(self):
        assert SearchConfig.parse(3, 3, 0).max_iterations == 0

    def test_integral_float_accepted(self):
        assert parse_count("cannibals", 3.0) == 3

    @pytest.mark.parametrize("value", ["abc", "", "3.5", 2.5, -1, "-4", True, None, [3]])
    def test_rejected_counts(self, value):
        with pytest.raises(ConfigurationError):
            parse_count("cannibals", value)

    @pytest.mark.parametrize("value", ["fast", -0.1, float("nan"), float("inf"), "inf", "-inf", False])
    def test_rejected_delay(self, value):
        with pytest.raises(ConfigurationError):
            parse_delay(value)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            SearchConfig.parse(3, "many", 30)

    def test_validate_catches_direct_assignment(self):
        cfg = SearchConfig()
        cfg.missionaries = -2
        with pytest.raises(ConfigurationError):
            cfg.validate()


class TestFiles:

    def test_round_trip_dict(self):
        cfg = SearchConfig(cannibals=1, missionaries=5, max_iterations=40, delay=0.25)
        assert SearchConfig.from_dict(cfg.to_dict()) == cfg

    def test_partial_dict_uses_defaults(self):
        assert SearchConfig.from_dict({"cannibals": 2}) == SearchConfig(cannibals=2)

    def test_unknown_keys_rejected(self):
        with pytest.raises(ConfigurationError, match="boat_size"):
            SearchConfig.from_dict({"boat_size": 3})

    def test_load_config(self, tmp_path):
        p = tmp_path / "cfg.json"
        p.write_text(json.dumps({"cannibals": "1", "missionaries": 5, "max_iterations": 30}))
        assert load_config(p) == SearchConfig(cannibals=1, missionaries=5, max_iterations=30)

    def test_load_config_errors(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "missing.json")
        bad = tmp_path / "bad.json"
        bad.write_text("{not json")
        with pytest.raises(ConfigurationError):
            load_config(bad)
        arr = tmp_path / "arr.json"
        arr.write_text("[1, 2]")
        with pytest.raises(ConfigurationError):
            load_config(arr)
