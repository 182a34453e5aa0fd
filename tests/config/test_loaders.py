"""Tests for TOML configuration loaders."""

import tomllib
from pathlib import Path

import pytest

from bgubench.config.loaders import deep_merge_dict, load_toml


class TestLoadToml:
    """Tests for load_toml function."""

    def test_load_valid_toml(self, tmp_path: Path):
        config_file = tmp_path / "bgubench.toml"
        config_file.write_text("[filter]\ns_sigma = 8\nepsilon = 1e-3\n")

        assert load_toml(config_file) == {"filter": {"s_sigma": 8, "epsilon": 1e-3}}

    def test_load_toml_with_str_path(self, tmp_path: Path):
        config_file = tmp_path / "bgubench.toml"
        config_file.write_text('[operators.filter]\nmanual = "pkg.mod:bgu"\n')

        assert load_toml(str(config_file)) == {"operators": {"filter": {"manual": "pkg.mod:bgu"}}}

    def test_load_nonexistent_file(self, tmp_path: Path):
        missing = tmp_path / "missing.toml"

        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            load_toml(missing)

    def test_load_invalid_toml(self, tmp_path: Path):
        config_file = tmp_path / "invalid.toml"
        config_file.write_text("[filter\ns_sigma = ")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_toml(config_file)


class TestDeepMergeDict:
    """Tests for deep_merge_dict function."""

    def test_override_wins(self):
        assert deep_merge_dict({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_tables_are_merged(self):
        base = {"filter": {"s_sigma": 16, "epsilon": 1e-4}, "bench": {"samples": 1}}
        override = {"filter": {"epsilon": 1e-3}}

        assert deep_merge_dict(base, override) == {
            "filter": {"s_sigma": 16, "epsilon": 1e-3},
            "bench": {"samples": 1},
        }

    def test_non_dict_replaces_dict(self):
        assert deep_merge_dict({"a": {"b": 1}}, {"a": 5}) == {"a": 5}

    def test_inputs_not_mutated(self):
        base = {"a": {"b": 1}}
        deep_merge_dict(base, {"a": {"c": 2}})
        assert base == {"a": {"b": 1}}
