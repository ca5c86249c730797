"""GitHub change source and comment sink."""

from devtime.github.client import (
    COMMENT_MARKER,
    GitHubClient,
    GitHubError,
    PrChanges,
    PullRequestContext,
)

__all__ = [
    "COMMENT_MARKER",
    "GitHubClient",
    "GitHubError",
    "PrChanges",
    "PullRequestContext",
]
