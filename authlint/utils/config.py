"""Analyzer settings loaded from an optional YAML file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from authlint.severity import Severity

from .fileio import read_yaml_file

DEFAULT_CONFIG_FILENAME = ".authlint.yaml"
KNOWN_KEYS = {"exclude", "fail_on", "suggest_fixes"}


class ConfigError(ValueError):
    """Raised when the settings file is malformed."""


@dataclass(frozen=True)
class AnalyzerConfig:
    exclude: Tuple[str, ...] = field(default_factory=tuple)
    fail_on: Severity = Severity.WARNING
    suggest_fixes: bool = False


def load_config(path: Path) -> AnalyzerConfig:
    """Load settings from ``path``; a missing file yields the defaults."""

    try:
        data = read_yaml_file(path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"{path}: cannot read settings: {exc}") from exc
    if data is None:
        return AnalyzerConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a YAML mapping at top level")
    return parse_config(data, source=str(path))


def parse_config(data: Dict[str, Any], source: str = "<config>") -> AnalyzerConfig:
    unknown = sorted(set(data) - KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source}: unknown keys: {', '.join(unknown)}")

    exclude = data.get("exclude", [])
    if isinstance(exclude, str):
        exclude = [exclude]
    if not isinstance(exclude, list) or not all(isinstance(item, str) for item in exclude):
        raise ConfigError(f"{source}: 'exclude' must be a list of glob patterns")

    try:
        fail_on = Severity.parse(data.get("fail_on", Severity.WARNING.value))
    except ValueError as exc:
        raise ConfigError(f"{source}: {exc}") from exc

    suggest_fixes = data.get("suggest_fixes", False)
    if not isinstance(suggest_fixes, bool):
        raise ConfigError(f"{source}: 'suggest_fixes' must be true or false")

    return AnalyzerConfig(exclude=tuple(exclude), fail_on=fail_on, suggest_fixes=suggest_fixes)
