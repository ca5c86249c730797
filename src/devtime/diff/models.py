"""Data models for diff filtering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class FileCategory(str, Enum):
    CONFIG = "config"
    CODE = "code"
    TEST = "test"
    DOCUMENTATION = "documentation"
    BUILD = "build"
    OTHER = "other"


@dataclass(frozen=True)
class FileSection:
    """The slice of a diff belonging to exactly one file."""

    filename: str  # the b/ path (after the change)
    text: str  # raw section text, verbatim
    old_filename: Optional[str] = None

    @property
    def lines(self) -> List[str]:
        return self.text.split("\n")

    @property
    def header(self) -> str:
        return self.lines[0]


@dataclass(frozen=True)
class FilterStats:
    additions: int = 0
    deletions: int = 0
    changed_files: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "additions": self.additions,
            "deletions": self.deletions,
            "changedFiles": self.changed_files,
        }


@dataclass
class FileTypeAnalysis:
    """Every parsed filename, partitioned by category in first-seen order."""

    config_files: List[str] = field(default_factory=list)
    code_files: List[str] = field(default_factory=list)
    test_files: List[str] = field(default_factory=list)
    documentation_files: List[str] = field(default_factory=list)
    build_files: List[str] = field(default_factory=list)
    other_files: List[str] = field(default_factory=list)

    def bucket(self, category: FileCategory) -> List[str]:
        """Return the list that holds files of *category*."""
        return {
            FileCategory.CONFIG: self.config_files,
            FileCategory.CODE: self.code_files,
            FileCategory.TEST: self.test_files,
            FileCategory.DOCUMENTATION: self.documentation_files,
            FileCategory.BUILD: self.build_files,
            FileCategory.OTHER: self.other_files,
        }[category]

    @property
    def total_files(self) -> int:
        return sum(len(self.bucket(c)) for c in FileCategory)

    def counts(self) -> Dict[FileCategory, int]:
        return {c: len(self.bucket(c)) for c in FileCategory}

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "configFiles": list(self.config_files),
            "codeFiles": list(self.code_files),
            "testFiles": list(self.test_files),
            "documentationFiles": list(self.documentation_files),
            "buildFiles": list(self.build_files),
            "otherFiles": list(self.other_files),
        }


@dataclass
class FilterResult:
    """Output of ``filter_diff_by_patterns``."""

    filtered_diff: str = ""
    filtered_stats: FilterStats = field(default_factory=FilterStats)
    file_type_analysis: FileTypeAnalysis = field(default_factory=FileTypeAnalysis)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filteredDiff": self.filtered_diff,
            "filteredStats": self.filtered_stats.to_dict(),
            "fileTypeAnalysis": self.file_type_analysis.to_dict(),
        }
