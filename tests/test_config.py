"""Tests for tsnd.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from tsnd.config import (
    DEFAULT_CONFIG_TEMPLATE,
    ConfigError,
    DetectorOptions,
    DetectorRules,
    load_config,
    merge_options,
)
from tsnd.models import DeclarationKind


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, DetectorOptions)
    assert config.target == "auto"
    assert config.include_internal is False
    assert config.include_patterns == ["**/*.ts", "**/*.tsx"]
    assert "**/node_modules/**" in config.exclude_patterns
    assert config.ignore_types == []
    assert config.ignore_names == []
    assert config.rules == DetectorRules()
    assert config.rules.allow_same_file_overloads is True
    assert config.rules.allow_cross_module_duplicates is False
    assert config.rules.max_duplicates_per_name == 0


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".tsnd.yml"
    config_file.write_text(
        """
target: tsx
include_internal: true
exclude_patterns:
  - "**/*.custom.ts"
include_patterns: ["**/*.tsx"]
ignore_types: [function]
ignore_names:
  - test
rules:
  allow_same_file_overloads: false
  allow_cross_module_duplicates: true
  max_duplicates_per_name: 5
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.target == "tsx"
    assert config.include_internal is True
    assert config.exclude_patterns == ["**/*.custom.ts"]
    assert config.include_patterns == ["**/*.tsx"]
    assert config.ignore_types == [DeclarationKind.FUNCTION]
    assert config.ignore_names == ["test"]
    assert config.rules.allow_same_file_overloads is False
    assert config.rules.allow_cross_module_duplicates is True
    assert config.rules.max_duplicates_per_name == 5


def test_load_config_accepts_custom_file_name(tmp_path: Path) -> None:
    config_file = tmp_path / "custom.yml"
    config_file.write_text("include_internal: true\n", encoding="utf-8")

    assert load_config(config_file).include_internal is True


def test_partial_config_keeps_remaining_defaults(tmp_path: Path) -> None:
    (tmp_path / ".tsnd.yml").write_text(
        "exclude_patterns: ['**/*.custom.ts']\nrules:\n  max_duplicates_per_name: 3\n",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.exclude_patterns == ["**/*.custom.ts"]
    assert config.include_patterns == ["**/*.ts", "**/*.tsx"]
    assert config.rules.max_duplicates_per_name == 3
    assert config.rules.allow_same_file_overloads is True
    assert config.rules.allow_cross_module_duplicates is False


def test_invalid_yaml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".tsnd.yml").write_text("rules: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_mapping_root_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".tsnd.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_target_raises_config_error() -> None:
    with pytest.raises(ConfigError):
        merge_options({"target": "coffeescript"})


def test_negative_cap_normalised_to_unlimited() -> None:
    options = merge_options({"rules": {"max_duplicates_per_name": -4}})
    assert options.rules.max_duplicates_per_name == 0


def test_unknown_ignore_types_are_dropped() -> None:
    options = merge_options({"ignore_types": ["Class", "widget", "enum", "class"]})
    assert options.ignore_types == [DeclarationKind.CLASS, DeclarationKind.ENUM]


def test_merge_options_overrides_base_shallowly() -> None:
    base = merge_options({"ignore_names": ["a"], "rules": {"allow_cross_module_duplicates": True}})

    merged = merge_options({"ignore_names": ["b"], "rules": {"max_duplicates_per_name": 2}}, base)

    assert merged.ignore_names == ["b"]
    assert merged.rules.allow_cross_module_duplicates is True
    assert merged.rules.max_duplicates_per_name == 2


def test_default_template_round_trips(tmp_path: Path) -> None:
    (tmp_path / ".tsnd.yml").write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")

    config = load_config(tmp_path)

    assert config.ignore_names == ["index", "default"]
    assert config.rules.max_duplicates_per_name == 2
