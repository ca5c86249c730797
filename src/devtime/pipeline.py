"""End-to-end estimation pipeline: filter the diff, prompt the model."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from devtime.config.schema import DevTimeConfig
from devtime.diff.engine import filter_diff_by_patterns
from devtime.diff.glob import compile_all, matches_any
from devtime.diff.models import FileCategory, FilterResult
from devtime.estimation.client import OpenRouterClient
from devtime.estimation.models import EstimationRequest, EstimationResult, EstimatorSettings
from devtime.estimation.prompt import build_prompt, summarize_changes
from devtime.output.comment import category_counts_line

logger = logging.getLogger(__name__)


@dataclass
class EstimationRun:
    """Everything a reporter needs after one pass through the pipeline."""

    filter_result: FilterResult
    estimation: EstimationResult
    skill_levels: List[str]


def settings_from_config(cfg: DevTimeConfig) -> EstimatorSettings:
    """Build client settings from config. The API key must already be resolved."""
    est = cfg.estimation
    return EstimatorSettings(
        api_key=est.api_key or "",
        model=est.model,
        base_url=est.base_url,
        temperature=est.temperature,
        max_tokens=est.max_tokens,
    )


def ignored_files(result: FilterResult, patterns: Sequence[str]) -> List[str]:
    """Filenames from the analysis that an ignore pattern excluded."""
    matchers = compile_all(patterns)
    return [
        name
        for category in FileCategory
        for name in result.file_type_analysis.bucket(category)
        if matches_any(name, matchers)
    ]


def run_estimation(
    diff_text: str,
    ignore_patterns: Sequence[str],
    skill_levels: Sequence[str],
    client: OpenRouterClient,
) -> EstimationRun:
    """Filter *diff_text* and ask *client* for an estimate of what remains."""
    result = filter_diff_by_patterns(diff_text, ignore_patterns)
    stats = result.filtered_stats
    logger.info(
        "Filtered diff: +%d -%d across %d files",
        stats.additions,
        stats.deletions,
        stats.changed_files,
    )
    logger.info("File types: %s", category_counts_line(result.file_type_analysis))

    changes = summarize_changes(stats, result.filtered_diff)
    prompt = build_prompt(changes, skill_levels, result.file_type_analysis)

    logger.info("Requesting estimation from %s...", client.model)
    estimation = client.estimate(
        EstimationRequest(pr_changes=changes, skill_levels=list(skill_levels), prompt=prompt)
    )
    if not estimation.ok:
        assert estimation.failure is not None
        logger.error(
            "Estimation failed (%s): %s",
            estimation.failure.kind.value,
            estimation.failure.detail or estimation.failure.message,
        )

    return EstimationRun(
        filter_result=result,
        estimation=estimation,
        skill_levels=list(skill_levels),
    )
