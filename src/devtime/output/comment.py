"""Markdown pull-request comment."""

from __future__ import annotations

from typing import List, Optional, Sequence

from devtime.diff.models import FileCategory, FileTypeAnalysis, FilterStats
from devtime.estimation.models import EstimationResponse
from devtime.estimation.prompt import category_label

_COMPLEXITY_ICON = {
    "Low": "🟢",
    "Medium": "🟡",
    "High": "🔴",
}

_LEVEL_ICON = {
    "Junior": "👶",
    "Senior": "👨‍💻",
    "Expert": "🧙",
}


def _cell(text: str) -> str:
    """Make *text* safe inside a Markdown table cell."""
    return text.replace("|", "\\|").replace("\n", " ").strip()


def format_estimation_comment(
    response: EstimationResponse,
    skill_levels: Sequence[str],
    stats: Optional[FilterStats] = None,
    analysis: Optional[FileTypeAnalysis] = None,
) -> str:
    """Render the estimate as the body of the pull-request comment."""
    out: List[str] = ["## ⏱️ Development Time Estimate", ""]

    out.append("| Skill Level | Time Estimate | Complexity |")
    out.append("|---|---|---|")
    for level in skill_levels:
        est = response.estimations.get(level)
        if est is None:
            continue
        icon = _LEVEL_ICON.get(level, "")
        comp = f"{_COMPLEXITY_ICON.get(est.complexity, '')} {est.complexity}".strip()
        out.append(f"| {icon} **{level}** | {_cell(est.time_estimate)} | {comp} |")
    out.append("")

    reasons = [
        (level, response.estimations[level].reasoning)
        for level in skill_levels
        if level in response.estimations and response.estimations[level].reasoning
    ]
    if reasons:
        out.append("### Reasoning")
        out.append("")
        for level, reasoning in reasons:
            out.append(f"- **{level}:** {reasoning.strip()}")
        out.append("")

    if stats is not None:
        out.append(
            f"**Analyzed changes:** {stats.changed_files} files, "
            f"+{stats.additions} / -{stats.deletions} lines"
        )
        out.append("")

    if analysis is not None and analysis.total_files:
        parts = [
            f"{category_label(c)}: {n}"
            for c, n in analysis.counts().items()
            if n
        ]
        out.append(f"**File types:** {', '.join(parts)}")
        out.append("")

    out.append("---")
    out.append(
        "<sub>Estimates are generated by an AI model from the filtered diff "
        "and are a rough guide only.</sub>"
    )
    return "\n".join(out)


def category_counts_line(analysis: FileTypeAnalysis) -> str:
    return ", ".join(
        f"{c.value}={len(analysis.bucket(c))}" for c in FileCategory
    )
