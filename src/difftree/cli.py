"""difftree CLI — Typer application with show and init commands."""

from __future__ import annotations

import logging
import sys
from fnmatch import fnmatch
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from difftree import __version__

app = typer.Typer(
    name="difftree",
    help="Show changed files as a directory tree with added/deleted line counts.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from difftree.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _read_patch(source: str) -> str:
    """Read a unified diff from a file path, or stdin for ``-``."""
    if source == "-":
        return sys.stdin.read()
    try:
        return Path(source).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        console.print(f"[bold red]Error:[/bold red] cannot read patch {source}: {exc}")
        raise typer.Exit(code=2) from exc


# ── show ──────────────────────────────────────────────────────────────────────


@app.command()
def show(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .difftree.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
    from_ref: Optional[str] = typer.Option(None, "--from", help="Base commit"),
    to_ref: Optional[str] = typer.Option(None, "--to", help="Head commit (default HEAD)"),
    worktree: bool = typer.Option(False, "--worktree/--staged", help="Unstaged working-tree changes, or staged (default)"),
    patch: Optional[str] = typer.Option(None, "--patch", "-p", help="Read a unified diff file ('-' for stdin)"),
    collapse: Optional[List[str]] = typer.Option(None, "--collapse", help="Directory path to show collapsed (repeatable)"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging with timing"),
) -> None:
    """Show staged changes (or a commit range, or a patch) as a tree."""
    from difftree.config.loader import ConfigError, load_config
    from difftree.config.schema import OUTPUT_FORMATS
    from difftree.git.adapter import GitError, get_range_diff, get_staged_diff, get_worktree_diff
    from difftree.git.diff_parser import DiffParser
    from difftree.logging_config import log_timing, setup_logging
    from difftree.output import json_report, terminal
    from difftree.stats.extractor import to_file_stats
    from difftree.tree.builder import build_diff_tree
    from difftree.tree.expansion import initial_expanded

    setup_logging("DEBUG" if debug else None, console=console)

    repo_root = Path.cwd() if patch else _resolve_repo_root()

    # --- Load config ---
    try:
        cfg = load_config(repo_root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]

    # --- Get diff ---
    if patch:
        diff_text = _read_patch(patch)
    else:
        try:
            if from_ref:
                diff_text = get_range_diff(repo_root, from_ref, to_ref or "HEAD")
            elif worktree:
                diff_text = get_worktree_diff(repo_root)
            else:
                diff_text = get_staged_diff(repo_root)
        except GitError as exc:
            console.print(f"[bold red]Git error:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc

    # --- Records → stats → tree ---
    with log_timing(logger, "diff tree"):
        records = DiffParser(diff_text).records()
        if cfg.ignore.paths:
            records = [
                r for r in records
                if not any(fnmatch(r.display_path or "", g) for g in cfg.ignore.paths)
            ]
        stats = to_file_stats(records)
        forest = build_diff_tree(stats, collation=cfg.tree.collation)

    logger.debug("%d records, %d root nodes", len(records), len(forest))

    expanded = initial_expanded(forest, cfg.tree.expand)
    if collapse:
        expanded = expanded - {p.strip("/") for p in collapse}

    # --- Output ---
    report_text: Optional[str] = None
    if cfg.output.format == "json":
        report_text = json_report.render(forest, stats)
        print(report_text)
    else:
        terminal.render(forest, len(stats), expanded, show_counts=cfg.output.show_counts)

    if output:
        Path(output).write_text(report_text or json_report.render(forest, stats), encoding="utf-8")
        logger.debug("report written to %s", output)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    full: bool = typer.Option(False, "--full", help="Include all config options with comments"),
) -> None:
    """Generate a starter .difftree.toml in the repo root."""
    from difftree.config.defaults import DEFAULT_TOML, FULL_TOML
    from difftree.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    template = FULL_TOML if full else DEFAULT_TOML
    config_path.write_text(template, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"difftree {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """difftree — changed files as a directory tree."""
