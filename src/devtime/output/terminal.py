"""Rich terminal reporter — file breakdown and estimate tables."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from devtime.diff.models import FileCategory, FilterResult
from devtime.estimation.models import EstimationResult
from devtime.estimation.prompt import category_label

_COMPLEXITY_STYLE = {
    "Low": "bold black on green",
    "Medium": "bold black on yellow",
    "High": "bold white on red",
}

_CATEGORY_STYLE = {
    FileCategory.CODE: "cyan",
    FileCategory.TEST: "green",
    FileCategory.CONFIG: "yellow",
    FileCategory.BUILD: "magenta",
    FileCategory.DOCUMENTATION: "blue",
    FileCategory.OTHER: "dim",
}


def _complexity_pill(complexity: str) -> Text:
    return Text(f" {complexity.upper()} ", style=_COMPLEXITY_STYLE.get(complexity, ""))


def render_filter(
    result: FilterResult,
    ignored: Sequence[str] = (),
    *,
    console: Optional[Console] = None,
    show_summary: bool = True,
) -> None:
    """Print the per-category file table and retained statistics."""
    console = console or Console(stderr=True)
    analysis = result.file_type_analysis

    if not analysis.total_files:
        console.print("[dim]No files found in diff.[/dim]")
        return

    table = Table(title="Changed Files", title_style="bold", border_style="dim")
    table.add_column("Category", min_width=14)
    table.add_column("File", style="magenta")
    table.add_column("Ignored", justify="center")

    ignored_set = set(ignored)
    for category in FileCategory:
        for filename in analysis.bucket(category):
            table.add_row(
                Text(category_label(category), style=_CATEGORY_STYLE[category]),
                filename,
                "✗" if filename in ignored_set else "",
            )
    console.print(table)

    if show_summary:
        stats = result.filtered_stats
        console.print()
        console.print(f"[dim]Files parsed:[/dim]    {analysis.total_files}")
        console.print(f"[dim]Files retained:[/dim]  {stats.changed_files}")
        console.print(f"[dim]Lines added:[/dim]     +{stats.additions}")
        console.print(f"[dim]Lines deleted:[/dim]   -{stats.deletions}")


def render_estimate(
    estimation: EstimationResult,
    skill_levels: Sequence[str],
    *,
    console: Optional[Console] = None,
) -> None:
    """Print the per-level estimate table, or the failure message."""
    console = console or Console(stderr=True)

    if not estimation.ok:
        assert estimation.failure is not None
        console.print(f"[bold red]Estimation failed:[/bold red] {estimation.failure.message}")
        return

    assert estimation.response is not None
    table = Table(
        title="Development Time Estimate",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Level", style="cyan", min_width=8)
    table.add_column("Time", style="green")
    table.add_column("Complexity", justify="center", width=12)
    table.add_column("Reasoning")

    for level in skill_levels:
        est = estimation.response.estimations.get(level)
        if est is None:
            continue
        table.add_row(level, est.time_estimate, _complexity_pill(est.complexity), est.reasoning)

    console.print()
    console.print(table)
