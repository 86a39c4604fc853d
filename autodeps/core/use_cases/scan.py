"""
Scan use case — resolve the root, walk it, collect the summary.

The full vertical slice from "scan here" to a finished summary.
Progress events are forwarded to ``on_event`` as they happen so the
CLI can print them while child processes stream their own output.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from autodeps.adapters.registry import AdapterRegistry
from autodeps.core.engine.summary import SummaryCollector
from autodeps.core.engine.walker import TreeWalker
from autodeps.core.models.options import ScanOptions

logger = logging.getLogger(__name__)


class FatalStartupError(Exception):
    """Raised when the scan root cannot be resolved."""


def resolve_root(root: Path | None = None) -> Path:
    """Absolute, existing scan root (default: the working directory).

    Raises:
        FatalStartupError: If the directory cannot be determined.
    """
    try:
        base = root if root is not None else Path.cwd()
        resolved = base.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        if root is None:
            raise FatalStartupError(f"Could not get current directory: {e}") from e
        raise FatalStartupError(f"Could not resolve {root}: {e}") from e

    if not resolved.is_dir():
        raise FatalStartupError(f"Not a directory: {resolved}")
    return resolved


@dataclass
class ScanResult:
    """Result of one scan."""

    root: Path | None = None
    summary: SummaryCollector = field(default_factory=SummaryCollector)
    error: str | None = None


def run_scan(
    options: ScanOptions,
    root: Path | None = None,
    registry: AdapterRegistry | None = None,
    on_event: Callable[[dict], None] | None = None,
) -> ScanResult:
    """Scan a tree and install dependencies for every manifest found.

    Args:
        options: Scan switches (dry-run, verbose, filters).
        root: Directory to scan (default: cwd).
        registry: Optional pre-configured adapter registry.
        on_event: Optional callback receiving each progress event.

    Returns:
        ScanResult with the summary, or ``error`` set when the root
        could not be resolved.
    """
    result = ScanResult()

    try:
        result.root = resolve_root(root)
    except FatalStartupError as e:
        result.error = str(e)
        return result

    if registry is None:
        registry = AdapterRegistry.default()

    logger.info(
        "Scanning %s (dry_run=%s, only=%s)",
        result.root,
        options.dry_run,
        ",".join(sorted(options.only)) or "all",
    )

    walker = TreeWalker(result.root, options, registry, summary=result.summary)
    for event in walker.scan():
        if on_event is not None:
            on_event(event)

    logger.info(
        "Scan finished: %d directories dispatched, %d records",
        len(walker.visited),
        result.summary.total,
    )
    return result
