"""Diff filtering core — segmentation, glob matching, counting, classification."""

from devtime.diff.classifier import categorize, classify
from devtime.diff.counter import LineCounts, count_lines
from devtime.diff.engine import filter_diff_by_patterns, parse_ignore_patterns
from devtime.diff.glob import GlobMatcher, compile_pattern
from devtime.diff.models import (
    FileCategory,
    FileSection,
    FileTypeAnalysis,
    FilterResult,
    FilterStats,
)
from devtime.diff.segmenter import segment

__all__ = [
    "FileCategory",
    "FileSection",
    "FileTypeAnalysis",
    "FilterResult",
    "FilterStats",
    "GlobMatcher",
    "LineCounts",
    "categorize",
    "classify",
    "compile_pattern",
    "count_lines",
    "filter_diff_by_patterns",
    "parse_ignore_patterns",
    "segment",
]
