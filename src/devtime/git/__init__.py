"""Local git change source."""

from devtime.git.adapter import (
    GitError,
    get_range_diff,
    get_repo_root,
    get_staged_diff,
)

__all__ = [
    "GitError",
    "get_range_diff",
    "get_repo_root",
    "get_staged_diff",
]
