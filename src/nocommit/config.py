"""Configuration management for nocommit."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml  # type: ignore

from nocommit.models import ForbiddenPattern

CONFIG_FILENAME = ".nocommit.yml"

_DEFAULT_CONFIG = {
    "patterns": [
        {
            "pattern": r"\bnocommit\b",
            "ignore_case": True,
            "description": "nocommit marker",
        },
    ],
    "patterns_file": None,
    "report_all": False,
    "exclusions": {
        "paths": [],
    },
}


class ConfigError(Exception):
    """Raised when the configuration cannot be loaded or a pattern is invalid."""


@dataclass
class PatternSpec:
    """A forbidden pattern as written in the configuration."""

    pattern: str
    ignore_case: bool = False
    description: str = ""


@dataclass
class NoCommitConfig:
    """Full nocommit configuration loaded from `.nocommit.yml`."""

    patterns: list[PatternSpec] = field(default_factory=list)
    patterns_file: str | None = None
    report_all: bool = False
    excluded_paths: list[str] = field(default_factory=list)
    base_dir: Path = field(default_factory=Path)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> NoCommitConfig:
        """Load configuration from a YAML file, falling back to defaults.

        Search order:
        1. Explicit ``config_path`` argument (must exist)
        2. ``.nocommit.yml`` in the current directory
        3. Built-in defaults
        """
        raw: dict[str, Any] = dict(_DEFAULT_CONFIG)
        base_dir = Path(".")

        if config_path and not Path(config_path).exists():
            raise ConfigError(f"config file not found: {config_path}")

        search_paths: list[Path] = []
        if config_path:
            search_paths.append(Path(config_path))
        search_paths.append(Path(CONFIG_FILENAME))

        for path in search_paths:
            if path.exists():
                try:
                    with open(path, encoding="utf-8") as f:
                        loaded = yaml.safe_load(f)
                except (OSError, yaml.YAMLError) as e:
                    raise ConfigError(f"cannot read {path}: {e}") from e
                if loaded is not None and not isinstance(loaded, dict):
                    raise ConfigError(f"{path} must contain a mapping at the top level")
                if loaded:
                    raw = _deep_merge(raw, loaded)
                base_dir = path.parent
                break

        return cls._from_raw(raw, base_dir)

    @classmethod
    def _from_raw(cls, raw: dict[str, Any], base_dir: Path | None = None) -> NoCommitConfig:
        """Build config from a raw dict (merged defaults + user overrides)."""
        cfg = cls()
        if base_dir is not None:
            cfg.base_dir = base_dir

        patterns_raw = raw.get("patterns") or []
        if not isinstance(patterns_raw, list):
            raise ConfigError("'patterns' must be a list")
        cfg.patterns = [_pattern_spec(entry) for entry in patterns_raw]

        patterns_file = raw.get("patterns_file", cfg.patterns_file)
        if patterns_file is not None and not isinstance(patterns_file, str):
            raise ConfigError("'patterns_file' must be a string")
        cfg.patterns_file = patterns_file
        cfg.report_all = bool(raw.get("report_all", cfg.report_all))

        # Exclusions
        exclusions = raw.get("exclusions") or {}
        if not isinstance(exclusions, dict):
            raise ConfigError("'exclusions' must be a mapping")
        paths = exclusions.get("paths") or []
        # A bare string would be iterated as one-character globs
        if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
            raise ConfigError("'exclusions.paths' must be a list of strings")
        cfg.excluded_paths = paths

        return cfg

    def pattern_specs(self) -> list[PatternSpec]:
        """All configured patterns: inline ones first, then those from ``patterns_file``."""
        specs = list(self.patterns)
        if self.patterns_file:
            specs.extend(load_patterns_file(self.base_dir / self.patterns_file))
        return specs


def _pattern_spec(entry: Any) -> PatternSpec:
    if isinstance(entry, str):
        return PatternSpec(pattern=entry)
    if isinstance(entry, dict) and isinstance(entry.get("pattern"), str):
        return PatternSpec(
            pattern=entry["pattern"],
            ignore_case=bool(entry.get("ignore_case", False)),
            description=str(entry.get("description", "")),
        )
    raise ConfigError(f"invalid pattern entry: {entry!r}")


def load_patterns_file(path: str | Path) -> list[PatternSpec]:
    """Read one regex per line; blank lines and ``#`` comments are skipped."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read patterns file {path}: {e.strerror}") from e

    specs: list[PatternSpec] = []
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        specs.append(PatternSpec(pattern=stripped))
    return specs


def compile_patterns(specs: list[PatternSpec]) -> list[ForbiddenPattern]:
    """Compile pattern specs into ForbiddenPatterns, rejecting invalid regexes."""
    compiled: list[ForbiddenPattern] = []
    for spec in specs:
        try:
            compiled.append(
                ForbiddenPattern.compile(
                    spec.pattern, ignore_case=spec.ignore_case, description=spec.description
                )
            )
        except re.error as e:
            raise ConfigError(f"invalid forbidden pattern {spec.pattern!r}: {e}") from e
    return compiled


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep-merge override dict into base dict."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
