"""transdiff CLI — Typer application with check, init, install, and patterns commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from transdiff import __version__

app = typer.Typer(
    name="transdiff",
    help="Find missing and outdated translations in documentation trees.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)
logger = logging.getLogger("transdiff.cli")


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from transdiff.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _split_langs(raw: str) -> List[str]:
    return [lang.strip() for lang in raw.split(",") if lang.strip()]


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    languages: Optional[str] = typer.Argument(
        None, help="Comma separated language codes, e.g. en,de,fr (default: from config)"
    ),
    baselang: Optional[str] = typer.Option(
        None, "--baselang", "-b", help="Base language CODE (default: first language)"
    ),
    glob: Optional[str] = typer.Option(
        None, "--glob", "-g", help="Pattern name (SUB, EXT, custom) or pattern with %l and %e"
    ),
    directory: Path = typer.Option(Path("."), "--directory", "-d", help="Working directory"),
    extensions: Optional[List[str]] = typer.Option(
        None, "--extensions", "-e", help="File extension substituted for %e (repeatable)"
    ),
    no_git: bool = typer.Option(False, "--no-git", help="Do not use git history"),
    from_revision: Optional[str] = typer.Option(
        None, "--from-revision", "-f", help="Older revision (default: HEAD)"
    ),
    to_revision: Optional[str] = typer.Option(
        None, "--to-revision", "-t", help="Newer revision (default: working copy)"
    ),
    absolute_paths: bool = typer.Option(False, "--absolute-paths", "-a", help="Print absolute paths"),
    show_diff: bool = typer.Option(False, "--show-diff", "-i", help="Print patch of each modified file"),
    format: Optional[str] = typer.Option(None, "--format", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .transdiff.toml"),
    fail_on_diffs: bool = typer.Option(
        False, "--fail-on-diffs", help="Exit 1 when missing or outdated translations are found"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
) -> None:
    """Report missing translations and translations outdated by base changes."""
    from transdiff.audit.engine import AuditError, run_audit
    from transdiff.config.loader import ConfigError, load_config
    from transdiff.filesystem.pattern import PatternError, build_pattern_registry
    from transdiff.git.adapter import GitError
    from transdiff.log import setup_logging
    from transdiff.output import json_report, terminal

    setup_logging(verbose=verbose, debug=debug)

    root = directory.resolve()
    if not root.is_dir():
        console.print(f"[bold red]Invalid directory:[/bold red] {directory}")
        raise typer.Exit(code=2)

    # --- Load config ---
    try:
        cfg = load_config(root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if languages:
        cfg.languages.langs = _split_langs(languages)
    if baselang:
        cfg.languages.base = baselang
    if glob:
        cfg.discovery.glob = glob
    if extensions:
        cfg.discovery.extensions = list(extensions)
    if no_git:
        cfg.git.enabled = False
    if from_revision:
        cfg.git.from_revision = from_revision
    if to_revision:
        cfg.git.to_revision = to_revision
    if absolute_paths:
        cfg.output.absolute_paths = True
    if show_diff:
        cfg.output.show_diff = True
    if fail_on_diffs:
        cfg.check.fail_on_diffs = True
    if format:
        if format not in ("terminal", "json"):
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]

    logger.info("Root: %s", root)
    logger.info("Languages: %s", ", ".join(cfg.languages.langs) or "-")

    # --- Run audit ---
    try:
        registry = build_pattern_registry(root)
        report = run_audit(root, cfg, registry=registry)
    except (AuditError, PatternError) as exc:
        console.print(f"[bold red]Invalid argument:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if cfg.git.enabled and not report.git_available:
        console.print(
            "[yellow]WARN:[/yellow] Git repository was not found. "
            "Check your path or use --no-git to hide this warning."
        )

    if debug:
        console.print(f"[dim]Audit duration: {report.duration_ms:.0f}ms[/dim]")

    # --- Output ---
    report_text: Optional[str] = None
    if cfg.output.format == "terminal":
        terminal.render(
            report,
            absolute_paths=cfg.output.absolute_paths,
            show_diff=cfg.output.show_diff,
            show_summary=cfg.output.show_summary,
        )
    else:
        report_text = json_report.render(
            report,
            absolute_paths=cfg.output.absolute_paths,
            show_diff=cfg.output.show_diff,
        )
        print(report_text)

    # --- Write to file ---
    if output:
        if report_text is None:
            report_text = json_report.render(
                report,
                absolute_paths=cfg.output.absolute_paths,
                show_diff=cfg.output.show_diff,
            )
        Path(output).write_text(report_text, encoding="utf-8")
        logger.info("Report written to %s", output)

    # --- Exit code ---
    if cfg.check.fail_on_diffs and report.has_problems:
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    directory: Path = typer.Option(Path("."), "--directory", "-d", help="Where to create the config"),
) -> None:
    """Generate a starter .transdiff.toml."""
    from transdiff.config.defaults import DEFAULT_TOML
    from transdiff.config.loader import CONFIG_FILE

    config_path = directory.resolve() / CONFIG_FILE

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILE} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── install ───────────────────────────────────────────────────────────────────


@app.command()
def install(
    force: bool = typer.Option(False, "--force", help="Overwrite existing pre-commit hook"),
) -> None:
    """Install transdiff as a git pre-commit hook."""
    from transdiff.hooks.installer import install_hook

    repo_root = _resolve_repo_root()
    success, msg = install_hook(repo_root, force=force)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── uninstall ─────────────────────────────────────────────────────────────────


@app.command()
def uninstall() -> None:
    """Remove the transdiff pre-commit hook."""
    from transdiff.hooks.installer import uninstall_hook

    repo_root = _resolve_repo_root()
    success, msg = uninstall_hook(repo_root)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── patterns ──────────────────────────────────────────────────────────────────


@app.command()
def patterns(
    directory: Path = typer.Option(Path("."), "--directory", "-d", help="Directory with custom patterns"),
) -> None:
    """List predefined and custom file patterns."""
    from rich.table import Table

    from transdiff.filesystem.pattern import PatternError, build_pattern_registry

    try:
        registry = build_pattern_registry(directory.resolve())
    except PatternError as exc:
        console.print(f"[bold red]Pattern error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    table = Table(title="Patterns", title_style="bold", border_style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Pattern", style="magenta")
    table.add_column("Description")
    for p in registry.all_patterns:
        table.add_row(p.name, p.pattern, p.description)
    Console().print(table)


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"transdiff {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """transdiff — find missing and outdated translations."""
