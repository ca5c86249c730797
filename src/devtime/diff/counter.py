"""Added/removed line counting for a single file section."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from devtime.diff.models import FileSection


@dataclass(frozen=True)
class LineCounts:
    additions: int = 0
    deletions: int = 0


def count_lines(section: Union[FileSection, str]) -> LineCounts:
    """Count content lines added and removed in *section*.

    ``+++``/``---`` file headers are not content; hunk headers, context and
    metadata lines are ignored.
    """
    text = section.text if isinstance(section, FileSection) else section
    additions = 0
    deletions = 0
    for line in text.split("\n"):
        if line.startswith("+") and not line.startswith("+++"):
            additions += 1
        elif line.startswith("-") and not line.startswith("---"):
            deletions += 1
    return LineCounts(additions=additions, deletions=deletions)
