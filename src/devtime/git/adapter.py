"""Git subprocess wrapper — staged diff and commit-range diff."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _run_git(args: List[str], cwd: Path, timeout: int = 30) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    logger.debug("Running git %s in %s", " ".join(args), cwd)
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip()
        # Empty diff is not an error
        if not stderr or "fatal" not in stderr.lower():
            return result.stdout
        raise GitError(f"git error: {stderr}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def get_staged_diff(repo_root: Path) -> str:
    """Return the unified diff of staged changes (--cached)."""
    return _run_git(["diff", "--cached", "--no-color"], cwd=repo_root)


def get_range_diff(repo_root: Path, base: str, head: str = "HEAD") -> str:
    """Return the unified diff between two commits."""
    return _run_git(["diff", f"{base}..{head}", "--no-color"], cwd=repo_root)
