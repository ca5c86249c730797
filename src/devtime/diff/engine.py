"""Diff filter engine — the pure core of the estimator.

``filter_diff_by_patterns`` walks the file sections of a diff in order,
classifies every file, drops the ones matching an ignore pattern and
recomputes the change statistics over what is left.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from devtime.diff.classifier import categorize
from devtime.diff.counter import count_lines
from devtime.diff.glob import compile_all, matches_any
from devtime.diff.models import FileTypeAnalysis, FilterResult, FilterStats
from devtime.diff.segmenter import segment


def parse_ignore_patterns(value: Optional[str]) -> List[str]:
    """Split a comma-separated pattern list, trimming and dropping blanks."""
    if not value or not value.strip():
        return []
    return [p.strip() for p in value.split(",") if p.strip()]


def filter_diff_by_patterns(
    diff_text: Optional[str],
    ignore_patterns: Sequence[str],
) -> FilterResult:
    """Filter *diff_text* by *ignore_patterns*.

    Every parsed file is classified, ignored or not. Only retained sections
    contribute to ``filtered_diff`` and ``filtered_stats``. An empty pattern
    list retains everything but still runs the full pipeline.
    """
    if not diff_text:
        return FilterResult()

    matchers = compile_all(ignore_patterns)
    analysis = FileTypeAnalysis()
    kept: List[str] = []
    additions = 0
    deletions = 0

    for section in segment(diff_text):
        categorize(section.filename, analysis)

        if matches_any(section.filename, matchers):
            continue

        counts = count_lines(section)
        additions += counts.additions
        deletions += counts.deletions
        kept.append(section.text)

    return FilterResult(
        filtered_diff="".join(kept),
        filtered_stats=FilterStats(
            additions=additions,
            deletions=deletions,
            changed_files=len(kept),
        ),
        file_type_analysis=analysis,
    )
