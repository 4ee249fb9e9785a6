"""Tests for Config loading and dot-path access."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from domainpattern.config import Config
from domainpattern.errors import ConfigError, ConfigNotFoundError


class TestConfigGet:
    """Tests for dot-path lookups."""

    def test_nested_key(self) -> None:
        config = Config({"patterns": {"separator": "/"}})
        assert config.get("patterns.separator") == "/"

    def test_missing_key_returns_default(self) -> None:
        config = Config({"patterns": {}})
        assert config.get("patterns.separator") is None
        assert config.get("patterns.separator", ".") == "."
        assert config.get("other.key", 3) == 3

    def test_non_mapping_intermediate_returns_default(self) -> None:
        config = Config({"patterns": "flat"})
        assert config.get("patterns.separator", "x") == "x"

    def test_empty_config(self) -> None:
        assert Config().get("anything") is None


class TestConfigSection:
    """Tests for section() lookups."""

    def test_section_copy(self) -> None:
        data = {"patterns": {"max_segments": 4}}
        section = Config(data).section("patterns")
        assert section == {"max_segments": 4}
        section["max_segments"] = 9
        assert data["patterns"]["max_segments"] == 4

    def test_missing_section_is_empty(self) -> None:
        assert Config({}).section("patterns") == {}

    def test_null_section_is_empty(self) -> None:
        assert Config({"patterns": None}).section("patterns") == {}

    def test_non_mapping_section_raises(self) -> None:
        with pytest.raises(ConfigError):
            Config({"patterns": [1, 2]}).section("patterns")


class TestConfigLoad:
    """Tests for loading configuration from YAML."""

    def test_load_valid_yaml(self, config_yaml: str) -> None:
        config = Config.load(config_yaml)
        assert config.get("patterns.separator") == "/"
        assert config.get("patterns.max_wildcard_run") == 3
        assert config.path == config_yaml

    def test_load_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            Config.load(str(tmp_path / "nope.yaml"))

    def test_load_invalid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("{{invalid yaml:")
        with pytest.raises(ConfigError) as exc_info:
            Config.load(str(yaml_file))
        assert isinstance(exc_info.value.cause, yaml.YAMLError)

    def test_load_non_mapping(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            Config.load(str(yaml_file))

    def test_load_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        config = Config.load(str(yaml_file))
        assert config.get("patterns") is None
