"""Shared test fixtures — sample diffs, fake model client, temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path
from types import SimpleNamespace
from typing import Any, List

import pytest


@pytest.fixture
def sample_diff_two_files() -> str:
    """A source change plus a generated build artifact."""
    return textwrap.dedent("""\
        diff --git a/src/main.ts b/src/main.ts
        index 1234567..abcdefg 100644
        --- a/src/main.ts
        +++ b/src/main.ts
        @@ -1,3 +1,4 @@
         export function main() {
        +  console.log('hello');
           return 'world';
         }
        diff --git a/dist/main.js b/dist/main.js
        index 1234567..abcdefg 100644
        --- a/dist/main.js
        +++ b/dist/main.js
        @@ -1,10 +1,20 @@
        +// Generated file
        +function main() {
        +  console.log('hello');
        +  return 'world';
        +}
    """)


@pytest.fixture
def sample_diff_mixed() -> str:
    """One file of each category, in a known order."""
    return textwrap.dedent("""\
        diff --git a/src/app.py b/src/app.py
        index 1111111..2222222 100644
        --- a/src/app.py
        +++ b/src/app.py
        @@ -1,2 +1,2 @@
        -x = 1
        +x = 2
        diff --git a/src/components/Button.test.tsx b/src/components/Button.test.tsx
        new file mode 100644
        index 0000000..3333333
        --- /dev/null
        +++ b/src/components/Button.test.tsx
        @@ -0,0 +1,2 @@
        +it('renders', () => {});
        +it('clicks', () => {});
        diff --git a/package.json b/package.json
        index 4444444..5555555 100644
        --- a/package.json
        +++ b/package.json
        @@ -2,1 +2,1 @@
        -  "version": "1.0.0"
        +  "version": "1.1.0"
        diff --git a/scripts/release.sh b/scripts/release.sh
        index 6666666..7777777 100755
        --- a/scripts/release.sh
        +++ b/scripts/release.sh
        @@ -1,1 +1,2 @@
        +echo release
        diff --git a/README.md b/README.md
        index 8888888..9999999 100644
        --- a/README.md
        +++ b/README.md
        @@ -1,1 +1,1 @@
        -# Old title
        +# New title
        diff --git a/assets/logo.png b/assets/logo.png
        new file mode 100644
        Binary files /dev/null and b/assets/logo.png differ
    """)


@pytest.fixture
def sample_diff_malformed() -> str:
    """A valid section sandwiched with junk and a broken header."""
    return textwrap.dedent("""\
        From 1a2b3c Mon Sep 17 00:00:00 2001
        Subject: [PATCH] tweak

        diff --git src/nope.py
        +not counted
        diff --git a/src/ok.py b/src/ok.py
        --- a/src/ok.py
        +++ b/src/ok.py
        @@ -1 +1 @@
        -old
        +new
    """)


@pytest.fixture
def estimation_json() -> str:
    return textwrap.dedent("""\
        Here is my estimate:
        ```json
        {
          "estimations": {
            "Junior": {"timeEstimate": "3 hours", "reasoning": "Needs to learn the module", "complexity": "Medium"},
            "Senior": {"timeEstimate": "1 hour", "reasoning": "Straightforward change", "complexity": "Low"},
            "Expert": {"timeEstimate": "30 minutes", "reasoning": "Trivial", "complexity": "low"}
          }
        }
        ```
    """)


class FakeCompletions:
    """Stands in for ``OpenAI().chat.completions``."""

    def __init__(self, content: Any = None, error: Exception = None) -> None:
        self.content = content
        self.error = error
        self.calls: List[dict] = []

    def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.content is None:
            return SimpleNamespace(choices=[])
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_fake_openai(content: Any = None, error: Exception = None) -> Any:
    completions = FakeCompletions(content, error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


@pytest.fixture
def fake_openai():
    return make_fake_openai


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every env var the config loader reads."""
    for name in (
        "OPENROUTER_API_KEY",
        "INPUT_OPENROUTER-API-KEY",
        "GITHUB_TOKEN",
        "INPUT_GITHUB-TOKEN",
        "DEVTIME_MODEL",
        "INPUT_MODEL",
        "DEVTIME_SKILL_LEVELS",
        "INPUT_SKILL-LEVELS",
        "DEVTIME_IGNORE_PATTERNS",
        "INPUT_IGNORE-PATTERNS",
        "DEVTIME_FORMAT",
        "DEVTIME_MAX_DIFF_CHARS",
        "GITHUB_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for integration tests."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    readme = tmp_path / "README.md"
    readme.write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "init"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    return tmp_path
