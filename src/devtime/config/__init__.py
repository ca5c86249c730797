"""Configuration loading, schema, and defaults."""

from devtime.config.loader import ConfigError, load_config, resolve_skill_levels
from devtime.config.schema import SKILL_LEVELS, DevTimeConfig, SkillLevel

__all__ = [
    "ConfigError",
    "DevTimeConfig",
    "SKILL_LEVELS",
    "SkillLevel",
    "load_config",
    "resolve_skill_levels",
]
