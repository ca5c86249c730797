"""GitHub REST client — pull-request changes in, estimate comment out."""

from __future__ import annotations

import json
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import httpx

from devtime.config.schema import GITHUB_API_URL

logger = logging.getLogger(__name__)

COMMENT_MARKER = "<!-- dev-time-estimate-comment -->"

_DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"
_JSON_MEDIA_TYPE = "application/vnd.github+json"
_COMMENTS_PER_PAGE = 100


class GitHubError(Exception):
    """Raised when the pull request cannot be read or commented on."""


@dataclass(frozen=True)
class PrChanges:
    """Upstream statistics and (possibly truncated) diff for a pull request."""

    additions: int
    deletions: int
    changed_files: int
    diff_content: str


@dataclass(frozen=True)
class PullRequestContext:
    owner: str
    repo: str
    number: int

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PullRequestContext":
        """Read the pull request from the GitHub Actions environment."""
        env = os.environ if environ is None else environ
        repository = env.get("GITHUB_REPOSITORY", "")
        event_path = env.get("GITHUB_EVENT_PATH", "")

        number: Optional[int] = None
        if event_path and Path(event_path).is_file():
            try:
                payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise GitHubError(f"Unreadable event payload at {event_path}: {exc}") from exc
            pr = payload.get("pull_request") or {}
            number = pr.get("number")

        if not number:
            raise GitHubError("This action must be run on a pull request")
        if "/" not in repository:
            raise GitHubError("GITHUB_REPOSITORY is not set (expected owner/repo)")

        owner, repo = repository.split("/", 1)
        return cls(owner=owner, repo=repo, number=int(number))


class GitHubClient:
    """Thin wrapper over the handful of REST endpoints the estimator needs."""

    def __init__(
        self,
        token: str,
        repository: str,
        api_url: str = GITHUB_API_URL,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 30.0,
    ) -> None:
        if not token:
            raise GitHubError(
                "GITHUB_TOKEN environment variable or github-token input is required"
            )
        self.repository = repository
        self._http = httpx.Client(
            base_url=api_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": _JSON_MEDIA_TYPE,
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "devtime",
            },
            transport=transport,
            timeout=timeout,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ---- transport ----

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.debug("GitHub %s %s failed: %s", method, path, exc.response.text)
            raise GitHubError(f"GitHub API returned {status} for {method} {path}") from exc
        except httpx.RequestError as exc:
            raise GitHubError(f"Network error: unable to reach GitHub API ({exc})") from exc
        return response

    # ---- pull request ----

    def _pull_path(self, number: int) -> str:
        return f"/repos/{self.repository}/pulls/{number}"

    def get_pr_details(self, number: int) -> Dict[str, Any]:
        return self._request("GET", self._pull_path(number)).json()

    def get_pr_diff(self, number: int) -> str:
        return self._request(
            "GET", self._pull_path(number), headers={"Accept": _DIFF_MEDIA_TYPE}
        ).text

    def get_pr_changes(self, number: int, max_diff_chars: Optional[int] = None) -> PrChanges:
        """Fetch PR statistics and raw diff; the two requests run concurrently."""
        logger.info("Fetching PR #%d changes...", number)
        with ThreadPoolExecutor(max_workers=2) as pool:
            details_future = pool.submit(self.get_pr_details, number)
            diff_future = pool.submit(self.get_pr_diff, number)
            details = details_future.result()
            diff = diff_future.result()

        if max_diff_chars is not None and len(diff) > max_diff_chars:
            logger.info("Truncating diff from %d to %d characters", len(diff), max_diff_chars)
            diff = diff[:max_diff_chars]

        return PrChanges(
            additions=int(details.get("additions", 0)),
            deletions=int(details.get("deletions", 0)),
            changed_files=int(details.get("changed_files", 0)),
            diff_content=diff,
        )

    # ---- comments ----

    def list_comments(self, number: int) -> List[Dict[str, Any]]:
        comments: List[Dict[str, Any]] = []
        page = 1
        while True:
            batch = self._request(
                "GET",
                f"/repos/{self.repository}/issues/{number}/comments",
                params={"per_page": _COMMENTS_PER_PAGE, "page": page},
            ).json()
            comments.extend(batch)
            if len(batch) < _COMMENTS_PER_PAGE:
                return comments
            page += 1

    def find_estimate_comment(self, number: int) -> Optional[Dict[str, Any]]:
        for comment in self.list_comments(number):
            if COMMENT_MARKER in (comment.get("body") or ""):
                return comment
        return None

    def upsert_comment(self, number: int, content: str) -> int:
        """Create or update the single estimate comment. Returns its id."""
        body = f"{COMMENT_MARKER}\n{content}"
        existing = self.find_estimate_comment(number)

        if existing is not None:
            comment_id = int(existing["id"])
            logger.info("Updating existing comment #%d", comment_id)
            self._request(
                "PATCH",
                f"/repos/{self.repository}/issues/comments/{comment_id}",
                json={"body": body},
            )
            return comment_id

        logger.info("Creating new comment")
        created = self._request(
            "POST",
            f"/repos/{self.repository}/issues/{number}/comments",
            json={"body": body},
        ).json()
        return int(created["id"])
