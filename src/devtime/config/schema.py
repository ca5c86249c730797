"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

SkillLevel = Literal["Junior", "Senior", "Expert"]
OutputFormat = Literal["terminal", "json", "markdown"]

SKILL_LEVELS: tuple[str, ...] = ("Junior", "Senior", "Expert")
OUTPUT_FORMATS: tuple[str, ...] = ("terminal", "json", "markdown")

DEFAULT_MODEL = "meta-llama/llama-3.2-3b-instruct:free"
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
GITHUB_API_URL = "https://api.github.com"


@dataclass
class EstimationConfig:
    model: str = DEFAULT_MODEL
    skill_levels: List[str] = field(default_factory=lambda: list(SKILL_LEVELS))
    temperature: float = 0.1
    max_tokens: int = 2000
    base_url: str = OPENROUTER_BASE_URL
    api_key: Optional[str] = None  # env only, never read from the TOML file


@dataclass
class FilterConfig:
    ignore_patterns: List[str] = field(default_factory=list)


@dataclass
class GitHubConfig:
    api_url: str = GITHUB_API_URL
    max_diff_chars: int = 10000
    token: Optional[str] = None  # env only


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class DevTimeConfig:
    version: str = "1.0"
    estimation: EstimationConfig = field(default_factory=EstimationConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
