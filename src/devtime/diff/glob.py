"""Restricted glob patterns, compiled to whole-filename regular expressions.

Supported syntax:
  - ``*``  any run of characters except ``/``
  - ``**`` any run of characters, ``/`` included
  - ``?``  exactly one character

Every other regex metacharacter is matched literally. Matching is
case-sensitive and always uses ``/`` as the separator, whatever the host OS.
"""

from __future__ import annotations

import re
from typing import Iterable, List

_REGEX_SPECIAL_RE = re.compile(r"[.+^${}()|\[\]\\]")
_DOUBLESTAR = ":::DOUBLESTAR:::"


def translate(pattern: str) -> str:
    """Return the (unanchored) regex source for *pattern*."""
    source = _REGEX_SPECIAL_RE.sub(lambda m: "\\" + m.group(0), pattern)
    # ** must be set aside before the single-star rule runs
    source = source.replace("**", _DOUBLESTAR)
    source = source.replace("*", "[^/]*")
    source = source.replace(_DOUBLESTAR, ".*")
    return source.replace("?", ".")


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile *pattern*; callers must ``fullmatch`` the result against a filename."""
    return re.compile(translate(pattern))


class GlobMatcher:
    """A compiled ignore pattern."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._regex = compile_pattern(pattern)

    def test(self, filename: str) -> bool:
        return self._regex.fullmatch(filename) is not None

    def __repr__(self) -> str:
        return f"GlobMatcher({self.pattern!r})"


def compile_all(patterns: Iterable[str]) -> List[GlobMatcher]:
    return [GlobMatcher(p) for p in patterns]


def matches_any(filename: str, matchers: Iterable[GlobMatcher]) -> bool:
    """Return True if any matcher accepts *filename*."""
    return any(m.test(filename) for m in matchers)
