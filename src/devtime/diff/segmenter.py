"""Split unified diff text into per-file sections.

A section starts at every line that begins with ``diff --git ``. Fragments
whose first line is not a well-formed ``diff --git a/<old> b/<new>`` header
are dropped without error.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional

from devtime.diff.models import FileSection

_SECTION_BOUNDARY_RE = re.compile(r"(?=^diff --git )", re.MULTILINE)
_DIFF_HEADER_RE = re.compile(r"^diff --git a/(.+?) b/(.+?)(?:\s|$)")


def split_sections(diff_text: str) -> List[str]:
    """Return the raw, non-blank fragments of *diff_text* in order."""
    return [frag for frag in _SECTION_BOUNDARY_RE.split(diff_text) if frag.strip()]


def parse_section(fragment: str) -> Optional[FileSection]:
    """Build a FileSection from *fragment*, or None if its header is malformed."""
    header = fragment.split("\n", 1)[0]
    m = _DIFF_HEADER_RE.match(header)
    if m is None:
        return None
    return FileSection(filename=m.group(2), old_filename=m.group(1), text=fragment)


def iter_sections(diff_text: str) -> Iterator[FileSection]:
    for fragment in split_sections(diff_text):
        section = parse_section(fragment)
        if section is not None:
            yield section


def segment(diff_text: str) -> List[FileSection]:
    """Parse *diff_text* into FileSections, skipping unparseable fragments."""
    if not diff_text:
        return []
    return list(iter_sections(diff_text))
