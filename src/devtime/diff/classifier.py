"""File classification by name.

Each filename lands in exactly one category. Checks run in a fixed order and
the first hit wins: test, config, build, documentation, code, other. The
order matters because names often satisfy several heuristics at once
(``src/Button.test.tsx`` is both test-shaped and code-shaped).
"""

from __future__ import annotations

from typing import FrozenSet, Tuple

from devtime.diff.models import FileCategory, FileTypeAnalysis

TEST_MARKERS: Tuple[str, ...] = (".test.", ".spec.", "/__tests__/", "/test/", "/tests/")

CONFIG_EXTENSIONS: FrozenSet[str] = frozenset(
    {"json", "yml", "yaml", "toml", "ini", "conf", "config"}
)
CONFIG_MARKERS: Tuple[str, ...] = (
    "dockerfile",
    "gitignore",
    "gitattributes",
    "editorconfig",
    "prettierrc",
    "eslintrc",
)
CONFIG_SUFFIXES: Tuple[str, ...] = (
    "package.json",
    "tsconfig.json",
    "jest.config.js",
    "webpack.config.js",
    "vite.config.js",
    "tailwind.config.js",
    "next.config.js",
    "babel.config.js",
    ".env",
)

BUILD_MARKERS: Tuple[str, ...] = (
    ".github/workflows/",
    "/.github/",
    "ci/",
    "scripts/",
    "makefile",
    "dockerfile",
    "docker-compose.yml",
)

DOC_EXTENSIONS: FrozenSet[str] = frozenset({"md", "rst", "txt", "doc", "docx", "pdf"})
DOC_MARKERS: Tuple[str, ...] = ("readme", "changelog", "license", "contributing", "docs/")

CODE_EXTENSIONS: FrozenSet[str] = frozenset(
    {
        "js", "ts", "jsx", "tsx", "py", "java", "c", "cpp", "h", "hpp",
        "cs", "php", "rb", "go", "rs", "kt", "swift", "dart", "vue", "svelte",
        "html", "css", "scss", "sass", "less", "sql", "sh", "bash", "ps1",
        "r", "scala", "clj", "ex", "exs",
    }
)


def extension_of(filename: str) -> str:
    """Text after the last ``.``, lower-cased (the whole name if there is no dot)."""
    return filename.rsplit(".", 1)[-1].lower()


def _contains_any(text: str, needles: Tuple[str, ...]) -> bool:
    return any(n in text for n in needles)


def classify(filename: str) -> FileCategory:
    """Return the category of *filename*."""
    lower = filename.lower()
    ext = extension_of(filename)

    if _contains_any(lower, TEST_MARKERS):
        return FileCategory.TEST

    if (
        ext in CONFIG_EXTENSIONS
        or _contains_any(lower, CONFIG_MARKERS)
        or lower.endswith(CONFIG_SUFFIXES)
    ):
        return FileCategory.CONFIG

    if _contains_any(lower, BUILD_MARKERS):
        return FileCategory.BUILD

    if ext in DOC_EXTENSIONS or _contains_any(lower, DOC_MARKERS):
        return FileCategory.DOCUMENTATION

    if ext in CODE_EXTENSIONS:
        return FileCategory.CODE

    return FileCategory.OTHER


def categorize(filename: str, analysis: FileTypeAnalysis) -> FileCategory:
    """Classify *filename* and append it to the matching list in *analysis*."""
    category = classify(filename)
    analysis.bucket(category).append(filename)
    return category
