"""Prompt construction for the estimation model."""

from __future__ import annotations

from typing import List, Optional, Sequence

from devtime.diff.models import FileCategory, FileTypeAnalysis, FilterStats

SYSTEM_PROMPT = (
    "You are an expert software developer and project manager who specializes in "
    "estimating development time based on code changes. You provide accurate, "
    "realistic time estimates for different skill levels."
)

MAX_FILES_LISTED = 10

_CATEGORY_LABELS = {
    FileCategory.CODE: "Code",
    FileCategory.TEST: "Tests",
    FileCategory.CONFIG: "Configuration",
    FileCategory.BUILD: "Build/CI",
    FileCategory.DOCUMENTATION: "Documentation",
    FileCategory.OTHER: "Other",
}

_SKILL_DEFINITIONS = {
    "Junior": "0-2 years experience, slower at debugging, needs some guidance",
    "Senior": "3-7 years experience, works efficiently, knows common patterns",
    "Expert": "8+ years experience, very fast implementation, rarely gets stuck",
}

_LIGHTWEIGHT = {FileCategory.CONFIG, FileCategory.DOCUMENTATION, FileCategory.TEST}


def category_label(category: FileCategory) -> str:
    return _CATEGORY_LABELS[category]


def summarize_changes(stats: FilterStats, diff: str) -> str:
    """The change block handed to the model: headline numbers then the diff."""
    return (
        f"**Files Changed:** {stats.changed_files}\n"
        f"**Lines Added:** +{stats.additions}\n"
        f"**Lines Deleted:** -{stats.deletions}\n"
        f"\n"
        f"**Diff:**\n"
        f"{diff}"
    ).strip()


def describe_file_types(analysis: FileTypeAnalysis) -> str:
    lines: List[str] = []
    for category in FileCategory:
        files = analysis.bucket(category)
        if not files:
            continue
        shown = ", ".join(files[:MAX_FILES_LISTED])
        more = len(files) - MAX_FILES_LISTED
        if more > 0:
            shown += f" (+{more} more)"
        lines.append(f"- {category_label(category)} ({len(files)}): {shown}")

    present = {c for c, n in analysis.counts().items() if n}
    if present and present <= _LIGHTWEIGHT:
        lines.append(
            "- Note: only configuration, documentation or test files changed; "
            "these usually take less time than production code."
        )
    return "\n".join(lines)


def _response_format(skill_levels: Sequence[str]) -> str:
    entries = ",".join(
        f"""
    "{level}": {{
      "timeEstimate": "X hours" or "X days",
      "reasoning": "Brief, specific explanation focusing on the actual changes",
      "complexity": "Low/Medium/High"
    }}"""
        for level in skill_levels
    )
    return f"""{{
  "estimations": {{{entries}
  }}
}}"""


def build_prompt(
    pr_changes: str,
    skill_levels: Sequence[str],
    analysis: Optional[FileTypeAnalysis] = None,
) -> str:
    """Render the user prompt for *pr_changes*."""
    definitions = "\n".join(
        f"- **{level}**: {_SKILL_DEFINITIONS[level]}"
        for level in skill_levels
        if level in _SKILL_DEFINITIONS
    )
    file_types = ""
    if analysis is not None and analysis.total_files:
        file_types = f"\n**File Type Breakdown:**\n{describe_file_types(analysis)}\n"

    return f"""
You are an experienced software engineering manager. Analyze the following PR changes and provide REALISTIC time estimates for implementing these specific changes. Focus on actual development work and avoid overestimating.

**IMPORTANT GUIDELINES:**
- This represents changes to an EXISTING codebase, not building from scratch
- Generated files, build artifacts, and lock files have been filtered out
- Estimate ONLY the time needed to make these specific changes
- Consider that developers can copy/paste/modify existing patterns
- Most changes involve adapting existing code rather than creating new architecture

**PR Changes:**
```
{pr_changes}
```
{file_types}
**Skill Level Definitions:**
{definitions}

**Time Estimation Guidelines:**
- Small config/text changes: 15-30 minutes
- Simple function modifications: 30 minutes - 2 hours
- Adding new features: 2-8 hours
- Complex refactoring: 1-3 days
- Major architectural changes: 3-5 days

**Consider for each estimate:**
1. Understanding the existing code context (usually quick for small changes)
2. Making the actual changes (main time component)
3. Basic testing and debugging
4. Creating/updating tests if needed

**Response Format (JSON):**
```json
{_response_format(skill_levels)}
```

Be concise and realistic. Most PR changes should be measured in hours, not days.
"""
