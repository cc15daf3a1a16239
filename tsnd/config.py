"""Configuration loading for tsnd (.tsnd.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .logging import get_logger
from .models import DeclarationKind

CONFIG_FILENAME = ".tsnd.yml"

TARGETS = ("auto", "typescript", "tsx")

DEFAULT_INCLUDE_PATTERNS = ["**/*.ts", "**/*.tsx"]
DEFAULT_EXCLUDE_PATTERNS = [
    "**/*.test.ts",
    "**/*.spec.ts",
    "**/*.d.ts",
    "**/node_modules/**",
    "**/dist/**",
]

DEFAULT_CONFIG_TEMPLATE = """\
# tsnd configuration
target: auto
include_internal: false
include_patterns:
  - "**/*.ts"
  - "**/*.tsx"
exclude_patterns:
  - "**/*.test.ts"
  - "**/*.spec.ts"
  - "**/*.d.ts"
  - "**/node_modules/**"
  - "**/dist/**"
ignore_types: []
ignore_names: [index, default]
rules:
  allow_same_file_overloads: true
  allow_cross_module_duplicates: false
  max_duplicates_per_name: 2
"""

logger = get_logger("config")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class DetectorRules:
    """Tolerance rules applied to every group of same-key declarations."""

    allow_same_file_overloads: bool = True
    allow_cross_module_duplicates: bool = False
    max_duplicates_per_name: int = 0


@dataclass(frozen=True)
class DetectorOptions:
    """Fully resolved settings for one detection run."""

    target: str = "auto"
    include_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE_PATTERNS))
    exclude_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    include_internal: bool = False
    ignore_types: List[DeclarationKind] = field(default_factory=list)
    ignore_names: List[str] = field(default_factory=list)
    rules: DetectorRules = field(default_factory=DetectorRules)


def load_config(config_path: Path) -> DetectorOptions:
    """Load options from disk, falling back to defaults when no file exists."""
    config_file = _resolve_config_path(config_path)

    if not config_file.exists():
        logger.info("No configuration found at %s; using defaults", config_file)
        return DetectorOptions()

    logger.info("Reading configuration from %s", config_file)
    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")
    return merge_options(data)


def merge_options(
    overrides: Mapping[str, Any], base: DetectorOptions | None = None
) -> DetectorOptions:
    """Merge user overrides over ``base`` (defaults when omitted).

    Top-level values replace the base outright; ``rules`` is merged key by key
    so a partial rules mapping keeps the remaining rule defaults.
    """
    options = base or DetectorOptions()
    changes: Dict[str, Any] = {}

    if "target" in overrides:
        target = _as_str(overrides.get("target"))
        if target is None or target.lower() not in TARGETS:
            allowed = ", ".join(TARGETS)
            raise ConfigError(f"Unknown target {overrides.get('target')!r}; expected one of {allowed}")
        changes["target"] = target.lower()
    if "include_patterns" in overrides:
        changes["include_patterns"] = _as_str_list(overrides.get("include_patterns"))
    if "exclude_patterns" in overrides:
        changes["exclude_patterns"] = _as_str_list(overrides.get("exclude_patterns"))
    if "include_internal" in overrides:
        include_internal = _as_bool(overrides.get("include_internal"))
        if include_internal is not None:
            changes["include_internal"] = include_internal
    if "ignore_types" in overrides:
        changes["ignore_types"] = _as_kind_list(overrides.get("ignore_types"))
    if "ignore_names" in overrides:
        changes["ignore_names"] = _as_str_list(overrides.get("ignore_names"))

    rules_data = _as_dict(overrides.get("rules"))
    if rules_data:
        changes["rules"] = _merge_rules(options.rules, rules_data)

    return replace(options, **changes)


def _merge_rules(base: DetectorRules, data: Mapping[str, Any]) -> DetectorRules:
    changes: Dict[str, Any] = {}
    for key in ("allow_same_file_overloads", "allow_cross_module_duplicates"):
        if key in data:
            value = _as_bool(data.get(key))
            if value is not None:
                changes[key] = value
    if "max_duplicates_per_name" in data:
        changes["max_duplicates_per_name"] = _as_cap(data.get("max_duplicates_per_name"))
    return replace(base, **changes)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_cap(value: Any) -> int:
    # 0 means unlimited; anything unusable collapses to that.
    if isinstance(value, bool):
        cap = 0
    elif isinstance(value, int):
        cap = value
    elif isinstance(value, str):
        try:
            cap = int(value)
        except ValueError:
            cap = 0
    else:
        cap = 0
    if cap < 0:
        logger.warning("max_duplicates_per_name must not be negative; treating %d as unlimited", cap)
        return 0
    return cap


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


def _as_kind_list(value: Any) -> List[DeclarationKind]:
    kinds: List[DeclarationKind] = []
    for item in _as_str_list(value):
        try:
            kind = DeclarationKind(item.strip().lower())
        except ValueError:
            logger.warning("Ignoring unknown declaration kind %r in ignore_types", item)
            continue
        if kind not in kinds:
            kinds.append(kind)
    return kinds


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_CONFIG_TEMPLATE",
    "DetectorOptions",
    "DetectorRules",
    "TARGETS",
    "load_config",
    "merge_options",
]
