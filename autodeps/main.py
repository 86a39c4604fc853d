"""
autodeps — CLI entrypoint.

Usage:
    autodeps --scan
    autodeps --scan --dry-run --verbose
    autodeps --scan --only go,npm
    python -m autodeps.main --help
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from autodeps import __version__
from autodeps.core.engine.summary import (
    SECTION_FAILED,
    SECTION_SKIPPED,
    SECTION_SUCCEEDED,
    SummaryCollector,
)
from autodeps.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    ENV_LEVEL,
    resolve_level,
    setup_logging,
)


def _print_event(event: dict) -> None:
    """Render one walker progress event inline."""
    kind = event["type"]

    if kind == "found":
        click.echo(f"📁 Found: {event['file']} in {event['directory']}")
    elif kind == "venv_missing":
        click.secho("⚙️  .venv not found. Creating virtual environment...", fg="yellow")
    elif kind == "dispatch":
        mode = "Dry-run" if event["dry_run"] else "Executing"
        click.secho(f"🔧 {event['label']} → {event['directory']}", fg="cyan")
        click.echo(f"   🔸 {mode}: {event['command']}")
    elif kind == "outcome":
        outcome = event["outcome"]
        if outcome.failed:
            click.secho(f"   ❌ {outcome.error}", fg="red")
        click.echo()
    elif kind == "traversal_error":
        click.secho(f"⚠️  Walk error in {event['directory']}: {event['error']}", fg="yellow")


def _print_summary(summary: SummaryCollector) -> None:
    colors = {SECTION_SUCCEEDED: "green", SECTION_SKIPPED: "yellow", SECTION_FAILED: "red"}

    click.secho("📋 Summary", fg="cyan", bold=True)
    for title, records in summary.sections():
        click.secho(f"   {title} ({len(records)}):", fg=colors.get(title, "white"), bold=True)
        for record in records:
            label = record.label or "?"
            click.echo(f"     • {label} → {record.directory}")
            if record.failed and record.error:
                click.echo(f"       │ {record.error}")
            elif record.skipped and record.command:
                click.echo(f"       │ {record.command}")

    if not summary.has_errors:
        click.echo()
        click.secho("✅ No errors", fg="green", bold=True)
    click.echo()


@click.command()
@click.version_option(version=__version__, prog_name="autodeps")
@click.option("--scan", is_flag=True, help="Scan and install dependencies.")
@click.option("--dry-run", is_flag=True, help="Only show what would be done.")
@click.option("--verbose", is_flag=True, help="Show full command paths and log progress at INFO.")
@click.option(
    "--only",
    default=None,
    help="Comma-separated list of dependency types to run (e.g. go,pip,npm).",
)
@click.option(
    "--exclude",
    "excludes",
    multiple=True,
    help=(
        "Directory name to skip while walking (repeatable). "
        "Added to the configured excludes (default: .git, .venv, node_modules)."
    ),
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to autodeps.yml (default: auto-detect).",
)
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    scan: bool,
    dry_run: bool,
    verbose: bool,
    only: str | None,
    excludes: tuple[str, ...],
    config_path: str | None,
    quiet: bool,
    debug: bool,
) -> None:
    """autodeps — install dependencies for every project in this tree."""
    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug, quiet, verbose, os.environ.get(ENV_LEVEL)),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )

    if not scan:
        click.echo("ℹ️  Use --scan to scan for project dependencies.")
        return

    from autodeps.core.config.loader import ConfigError, load_config
    from autodeps.core.models.options import ScanOptions, parse_only
    from autodeps.core.use_cases.scan import FatalStartupError, resolve_root, run_scan

    try:
        root = resolve_root()
    except FatalStartupError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    try:
        config = load_config(Path(config_path) if config_path else None, start_dir=root)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    options = ScanOptions(
        dry_run=dry_run or config.dry_run,
        verbose=verbose or config.verbose,
        only=parse_only(only if only is not None else ",".join(config.only)),
        exclude=frozenset(config.exclude) | frozenset(excludes),
    )

    click.secho("🔍 Scanning for dependency files...", fg="cyan", bold=True)
    click.echo()

    result = run_scan(options, root=root, on_event=_print_event)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if result.summary.total == 0:
        click.secho("📭 No matching project files found.", fg="yellow")
        click.echo()
        click.secho("✅ No errors", fg="green", bold=True)
        return

    _print_summary(result.summary)


if __name__ == "__main__":
    cli()
