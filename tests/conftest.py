"""Shared test fixtures for the domainpattern test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

# === Fixtures ===


@pytest.fixture
def rules_yaml(tmp_path: Path) -> str:
    """Write a sample rule set YAML file and return its path."""
    content = """
default_effect: deny
rules:
  - patterns: ["**.internal.example.com"]
    effect: deny
    description: "internal hosts"
  - patterns: ["**.example.com", "example.org"]
    effect: allow
    description: "public hosts"
"""
    yaml_file = tmp_path / "rules.yaml"
    yaml_file.write_text(content)
    return str(yaml_file)


@pytest.fixture
def config_yaml(tmp_path: Path) -> str:
    """Write a sample configuration YAML file and return its path."""
    content = """
patterns:
  separator: "/"
  max_wildcard_run: 3
  max_segments: 16
"""
    yaml_file = tmp_path / "config.yaml"
    yaml_file.write_text(content)
    return str(yaml_file)
