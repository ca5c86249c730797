"""Load and merge configuration from .devtime.toml, env vars, and action inputs."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from devtime.config.schema import (
    OUTPUT_FORMATS,
    SKILL_LEVELS,
    DevTimeConfig,
    EstimationConfig,
    FilterConfig,
    GitHubConfig,
    OutputConfig,
)
from devtime.diff.engine import parse_ignore_patterns

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".devtime.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _env(*names: str) -> Optional[str]:
    """Return the first non-blank value among env vars *names*.

    GitHub Actions exposes ``with:`` inputs as ``INPUT_<NAME>``, upper-cased
    with hyphens kept, so both spellings are looked up.
    """
    for name in names:
        val = os.environ.get(name)
        if val and val.strip():
            return val.strip()
    return None


def resolve_skill_levels(levels: Iterable[str]) -> List[str]:
    """Keep the recognised skill levels, in order. Raises if none remain."""
    valid = [lvl for lvl in (s.strip() for s in levels) if lvl in SKILL_LEVELS]
    if not valid:
        raise ConfigError(
            "No valid skill levels provided. Valid options: " + ", ".join(SKILL_LEVELS)
        )
    return valid


def _merge_env_overrides(cfg: DevTimeConfig) -> None:
    """Apply environment variable and GitHub Actions input overrides."""
    if val := _env("OPENROUTER_API_KEY", "INPUT_OPENROUTER-API-KEY"):
        cfg.estimation.api_key = val
    if val := _env("GITHUB_TOKEN", "INPUT_GITHUB-TOKEN"):
        cfg.github.token = val
    if val := _env("DEVTIME_MODEL", "INPUT_MODEL"):
        cfg.estimation.model = val
    if val := _env("DEVTIME_SKILL_LEVELS", "INPUT_SKILL-LEVELS"):
        cfg.estimation.skill_levels = [s.strip() for s in val.split(",")]
    if val := _env("DEVTIME_IGNORE_PATTERNS", "INPUT_IGNORE-PATTERNS"):
        cfg.filter.ignore_patterns.extend(parse_ignore_patterns(val))
    if val := _env("DEVTIME_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
        else:
            logger.warning("Ignoring invalid DEVTIME_FORMAT=%r", val)
    if val := _env("DEVTIME_MAX_DIFF_CHARS"):
        try:
            cfg.github.max_diff_chars = int(val)
        except ValueError:
            logger.warning("Ignoring non-integer DEVTIME_MAX_DIFF_CHARS=%r", val)


# Expected TOML value shape per field: "str", "int", "number", "bool", "str-list"
_FIELD_KINDS: Dict[str, Dict[str, str]] = {
    "estimation": {
        "model": "str",
        "skill_levels": "str-list",
        "temperature": "number",
        "max_tokens": "int",
        "base_url": "str",
    },
    "filter": {"ignore_patterns": "str-list"},
    "github": {"api_url": "str", "max_diff_chars": "int"},
    "output": {"format": "str", "show_summary": "bool"},
}

_KIND_NAMES = {
    "str": "a string",
    "int": "an integer",
    "number": "a number",
    "bool": "true or false",
    "str-list": "a list of strings",
}


def _check_kind(value: Any, kind: str) -> bool:
    # TOML booleans are ints to Python; they never count as numbers here
    if kind == "bool":
        return isinstance(value, bool)
    if isinstance(value, bool):
        return False
    if kind == "str":
        return isinstance(value, str)
    if kind == "int":
        return isinstance(value, int)
    if kind == "number":
        return isinstance(value, (int, float))
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def _build_section(data: Dict[str, Any], cls: type, section: str, *, secret: Iterable[str] = ()):
    """Build a dataclass from a TOML section dict, ignoring unknown and secret keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)} - set(secret)
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    kinds = _FIELD_KINDS.get(section, {})
    for key, value in filtered.items():
        kind = kinds.get(key)
        if kind is not None and not _check_kind(value, kind):
            raise ConfigError(f"[{section}] {key} must be {_KIND_NAMES[kind]}")
    return cls(**filtered)


def _validate(cfg: DevTimeConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid output format {cfg.output.format!r}. "
            f"Valid options: {', '.join(OUTPUT_FORMATS)}"
        )
    if cfg.github.max_diff_chars <= 0:
        raise ConfigError("[github] max_diff_chars must be positive")
    cfg.estimation.skill_levels = resolve_skill_levels(cfg.estimation.skill_levels)


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> DevTimeConfig:
    """Load, validate, and return a DevTimeConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = DevTimeConfig()
    else:
        logger.debug("Loading config from %s", config_path)
        raw = _parse_toml(config_path)
        cfg = DevTimeConfig(
            version=raw.get("version", "1.0"),
            estimation=_build_section(raw, EstimationConfig, "estimation", secret=("api_key",)),
            filter=_build_section(raw, FilterConfig, "filter"),
            github=_build_section(raw, GitHubConfig, "github", secret=("token",)),
            output=_build_section(raw, OutputConfig, "output"),
        )

    _merge_env_overrides(cfg)
    _validate(cfg)
    return cfg
