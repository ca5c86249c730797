"""devtime CLI — Typer application with filter, estimate, action, and init commands."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from devtime import __version__

app = typer.Typer(
    name="devtime",
    help="Estimate developer time for a change from its diff.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)
logger = logging.getLogger("devtime.cli")

_FILTER_FORMATS = ("terminal", "json")


def _load_config(config: Optional[str], root: Optional[Path] = None):
    """Load config, exit 2 on failure."""
    from devtime.config.loader import ConfigError, load_config

    try:
        return load_config(root or Path.cwd(), config)
    except ConfigError as exc:
        logger.debug("Config load failed", exc_info=True)
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _read_diff(diff_file: Optional[str]) -> str:
    """Read a diff from *diff_file* ('-' or None for stdin), exit 2 on failure."""
    if diff_file is None or diff_file == "-":
        return sys.stdin.read()
    try:
        return Path(diff_file).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        console.print(f"[bold red]Error:[/bold red] cannot read {diff_file}: {exc.strerror}")
        raise typer.Exit(code=2) from exc


def _merge_patterns(configured: List[str], cli_values: Optional[List[str]]) -> List[str]:
    from devtime.diff.engine import parse_ignore_patterns

    patterns = list(configured)
    for value in cli_values or []:
        patterns.extend(parse_ignore_patterns(value))
    return patterns


def _require_api_key(cfg) -> None:
    if not cfg.estimation.api_key:
        console.print(
            "[bold red]Config error:[/bold red] OpenRouter API key is required "
            "(set OPENROUTER_API_KEY or the openrouter-api-key input)"
        )
        raise typer.Exit(code=2)


def _check_format(value: Optional[str], allowed) -> None:
    if value is not None and value not in allowed:
        console.print(f"[bold red]Invalid format:[/bold red] {value}")
        raise typer.Exit(code=2)


def _make_client(cfg):
    from devtime.estimation.client import OpenRouterClient
    from devtime.pipeline import settings_from_config

    return OpenRouterClient(settings_from_config(cfg))


# ── filter ────────────────────────────────────────────────────────────────────


@app.command("filter")
def filter_cmd(
    diff_file: Optional[str] = typer.Argument(None, help="Diff file to read ('-' or omitted for stdin)"),
    ignore: Optional[List[str]] = typer.Option(
        None, "--ignore", "-i", help="Comma-separated ignore globs (repeatable)"
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .devtime.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Filter and classify a diff without calling the model."""
    from devtime.diff.engine import filter_diff_by_patterns
    from devtime.log import setup_logging
    from devtime.output import json_report, terminal
    from devtime.pipeline import ignored_files

    setup_logging(verbose=verbose, debug=debug)
    _check_format(format, _FILTER_FORMATS)
    cfg = _load_config(config)
    patterns = _merge_patterns(cfg.filter.ignore_patterns, ignore)
    logger.info("Ignore patterns: %s", ", ".join(patterns) or "(none)")

    diff_text = _read_diff(diff_file)
    result = filter_diff_by_patterns(diff_text, patterns)

    fmt = format or ("json" if cfg.output.format == "json" else "terminal")
    if fmt == "json":
        print(json_report.render_filter(result))
    else:
        terminal.render_filter(
            result,
            ignored_files(result, patterns),
            console=console,
            show_summary=cfg.output.show_summary,
        )


# ── estimate ──────────────────────────────────────────────────────────────────


@app.command()
def estimate(
    diff_file: Optional[str] = typer.Option(None, "--diff-file", "-d", help="Read the diff from a file ('-' for stdin)"),
    from_ref: Optional[str] = typer.Option(None, "--from", help="Base commit"),
    to_ref: Optional[str] = typer.Option(None, "--to", help="Head commit (default HEAD)"),
    ignore: Optional[List[str]] = typer.Option(
        None, "--ignore", "-i", help="Comma-separated ignore globs (repeatable)"
    ),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model identifier"),
    skill_levels: Optional[str] = typer.Option(
        None, "--skill-levels", "-s", help="Comma-separated: Junior, Senior, Expert"
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .devtime.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | markdown"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Estimate a local change: staged changes, a commit range, or a diff file."""
    from devtime.config.loader import ConfigError, resolve_skill_levels
    from devtime.config.schema import OUTPUT_FORMATS
    from devtime.git.adapter import GitError, get_range_diff, get_repo_root, get_staged_diff
    from devtime.log import setup_logging
    from devtime.output import json_report, terminal
    from devtime.output.comment import format_estimation_comment
    from devtime.pipeline import run_estimation

    setup_logging(verbose=verbose, debug=debug)
    _check_format(format, OUTPUT_FORMATS)

    # --- Diff source ---
    if diff_file is not None:
        cfg = _load_config(config)
        diff_text = _read_diff(diff_file)
    else:
        try:
            repo_root = get_repo_root()
            cfg = _load_config(config, repo_root)
            if from_ref:
                diff_text = get_range_diff(repo_root, from_ref, to_ref or "HEAD")
            else:
                diff_text = get_staged_diff(repo_root)
        except GitError as exc:
            console.print(f"[bold red]Git error:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if model:
        cfg.estimation.model = model
    if skill_levels:
        try:
            cfg.estimation.skill_levels = resolve_skill_levels(skill_levels.split(","))
        except ConfigError as exc:
            console.print(f"[bold red]Config error:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc
    if format:
        cfg.output.format = format  # type: ignore[assignment]
    patterns = _merge_patterns(cfg.filter.ignore_patterns, ignore)

    if not diff_text.strip():
        console.print("[dim]No changes to estimate.[/dim]")
        raise typer.Exit(code=0)

    _require_api_key(cfg)
    levels = cfg.estimation.skill_levels
    logger.info("Using skill levels: %s", ", ".join(levels))
    logger.info("Using model: %s", cfg.estimation.model)

    run = run_estimation(diff_text, patterns, levels, _make_client(cfg))

    if cfg.output.format == "json":
        print(json_report.render(run.filter_result, run.estimation, levels))
    elif cfg.output.format == "markdown" and run.estimation.ok:
        print(
            format_estimation_comment(
                run.estimation.unwrap(),
                levels,
                run.filter_result.filtered_stats,
                run.filter_result.file_type_analysis,
            )
        )
    else:
        terminal.render_estimate(run.estimation, levels, console=console)

    if not run.estimation.ok:
        raise typer.Exit(code=1)


# ── action ────────────────────────────────────────────────────────────────────


def _write_action_outputs(outputs: dict) -> None:
    """Append step outputs to $GITHUB_OUTPUT (no-op outside Actions)."""
    path = os.environ.get("GITHUB_OUTPUT")
    if not path:
        return
    with open(path, "a", encoding="utf-8") as f:
        for key, value in outputs.items():
            f.write(f"{key}={value}\n")


@app.command()
def action(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .devtime.toml"),
    verbose: bool = typer.Option(True, "--verbose/--quiet", help="Progress logging"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Run as a GitHub Actions step: estimate the pull request and comment on it."""
    from devtime.github.client import GitHubClient, GitHubError, PullRequestContext
    from devtime.log import setup_logging
    from devtime.output.comment import format_estimation_comment
    from devtime.pipeline import run_estimation

    setup_logging(verbose=verbose, debug=debug)
    logger.info("Starting PR development time estimation...")

    workspace = Path(os.environ.get("GITHUB_WORKSPACE") or Path.cwd())
    cfg = _load_config(config, workspace)
    _require_api_key(cfg)
    levels = cfg.estimation.skill_levels
    logger.info("Using skill levels: %s", ", ".join(levels))
    logger.info("Using model: %s", cfg.estimation.model)

    try:
        ctx = PullRequestContext.from_env()
        with GitHubClient(cfg.github.token or "", ctx.repository, cfg.github.api_url) as gh:
            changes = gh.get_pr_changes(ctx.number, cfg.github.max_diff_chars)
            logger.info(
                "PR Summary: +%d -%d across %d files",
                changes.additions,
                changes.deletions,
                changes.changed_files,
            )

            run = run_estimation(changes.diff_content, cfg.filter.ignore_patterns, levels, _make_client(cfg))
            if not run.estimation.ok:
                assert run.estimation.failure is not None
                message = run.estimation.failure.message
                print(f"::error::{message}")
                console.print(f"[bold red]Action failed:[/bold red] {message}")
                raise typer.Exit(code=1)

            response = run.estimation.unwrap()
            body = format_estimation_comment(
                response,
                levels,
                run.filter_result.filtered_stats,
                run.filter_result.file_type_analysis,
            )
            logger.info("Updating PR comment...")
            gh.upsert_comment(ctx.number, body)
    except GitHubError as exc:
        logger.debug("GitHub step failed", exc_info=True)
        print(f"::error::{exc}")
        console.print(f"[bold red]GitHub error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    _write_action_outputs(
        {
            "estimations": json.dumps(response.to_dict()),
            "skill-levels": ",".join(levels),
        }
    )
    console.print("[green]✓[/green] Successfully updated PR with development time estimation")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing .devtime.toml"),
) -> None:
    """Generate a starter .devtime.toml in the current directory."""
    from devtime.config.defaults import DEFAULT_TOML
    from devtime.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists() and not force:
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"devtime {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """devtime — estimate developer time for a change from its diff."""
