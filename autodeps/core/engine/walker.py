"""
Tree walker — the scan-and-dispatch loop.

Walks the tree under a root in lexical order, decides which files
trigger an install, and dispatches each one through the adapter
registry. A directory is dispatched at most once: the first match
wins and the directory goes into the visited set.

Python directories get their own path. When a directory holds a
requirements list, the walker makes sure ``.venv`` exists (creating
it if needed) and installs through it, bypassing the plain ``pip``
registry entry for that directory.

``scan()`` is a generator of event dicts so a caller can print
progress between dispatches:

    found            {file, directory}
    venv_missing     {directory}
    dispatch         {label, directory, command, dry_run}
    outcome          {outcome}
    traversal_error  {directory, error}
"""

from __future__ import annotations

import logging
import os
from collections.abc import Generator, Iterator
from pathlib import Path

from autodeps.adapters.registry import AdapterRegistry
from autodeps.core.engine.summary import SummaryCollector
from autodeps.core.models.action import Action, Outcome
from autodeps.core.models.manifest import Category
from autodeps.core.models.options import ScanOptions
from autodeps.core.services.manifests import (
    REQUIREMENTS_FILE,
    VENV_BIN,
    VENV_CREATE_LABEL,
    VENV_INSTALL_LABEL,
    VENV_INSTALL_REQUIRES,
    VENV_MARKER,
    lookup,
    venv_create_command,
    venv_install_command,
)

logger = logging.getLogger(__name__)


class TreeWalker:
    """One scan over one tree.

    Owns the visited set and the summary for that scan; create a new
    walker for every scan.
    """

    def __init__(
        self,
        root: Path,
        options: ScanOptions,
        registry: AdapterRegistry,
        summary: SummaryCollector | None = None,
    ):
        self.root = root
        self.options = options
        self.registry = registry
        self.summary = summary if summary is not None else SummaryCollector()
        self._visited: set[str] = set()

    @property
    def visited(self) -> frozenset[str]:
        """Directories dispatched so far."""
        return frozenset(self._visited)

    # ── Walk ────────────────────────────────────────────────────

    def scan(self) -> Iterator[dict]:
        """Walk the tree and dispatch, yielding progress events."""
        walk_errors: list[OSError] = []

        for dirpath, dirnames, filenames in os.walk(self.root, onerror=walk_errors.append):
            yield from self._drain(walk_errors)

            dirnames[:] = sorted(d for d in dirnames if d not in self.options.exclude)
            directory = Path(dirpath)

            for name in sorted(filenames):
                path = directory / name
                if not path.is_file():
                    if path.is_symlink():
                        yield from self._traversal_error(directory, f"Broken symlink: {path}")
                    continue
                yield from self._visit_file(directory, name, filenames)

        yield from self._drain(walk_errors)

    def _visit_file(self, directory: Path, name: str, siblings: list[str]) -> Iterator[dict]:
        key = str(directory)
        if key in self._visited:
            return

        if self._is_python_dir(directory, siblings):
            self._visited.add(key)
            yield {"type": "found", "file": REQUIREMENTS_FILE, "directory": key}
            yield from self._python_path(directory)
            return

        descriptor = lookup(name)
        if descriptor is None:
            return

        if not self.options.allows(descriptor.category):
            logger.debug("Filtered out %s in %s (category %s)", name, key, descriptor.category)
            return

        self._visited.add(key)
        yield {"type": "found", "file": name, "directory": key}
        action = Action(
            id=f"{descriptor.category}@{key}",
            label=descriptor.label,
            category=descriptor.category,
            command=list(descriptor.command),
            cwd=key,
        )
        yield from self._dispatch(action)

    # ── Python virtual environment ──────────────────────────────

    def _is_python_dir(self, directory: Path, siblings: list[str]) -> bool:
        if REQUIREMENTS_FILE not in siblings:
            return False
        if not self.options.allows(Category.PIP):
            return False
        return (directory / REQUIREMENTS_FILE).is_file()

    def _python_path(self, directory: Path) -> Generator[dict, None, None]:
        key = str(directory)

        if not (directory / VENV_MARKER).is_dir():
            yield {"type": "venv_missing", "directory": key}
            create = Action(
                id=f"venv@{key}",
                label=VENV_CREATE_LABEL,
                category=Category.PIP,
                command=venv_create_command(),
                cwd=key,
            )
            created = yield from self._dispatch(create)
            if created.failed:
                logger.info("Skipping pip install in %s: environment not created", key)
                return

        install = Action(
            id=f"{Category.PIP}@{key}",
            label=VENV_INSTALL_LABEL,
            category=Category.PIP,
            command=venv_install_command(),
            cwd=key,
            requires=list(VENV_INSTALL_REQUIRES),
            search_path=[VENV_BIN],
        )
        yield from self._dispatch(install)

    # ── Dispatch ────────────────────────────────────────────────

    def _dispatch(self, action: Action) -> Generator[dict, None, Outcome]:
        yield {
            "type": "dispatch",
            "label": action.label,
            "directory": action.cwd,
            "command": self.registry.describe(action, verbose=self.options.verbose),
            "dry_run": self.options.dry_run,
        }

        outcome = self.registry.execute_action(
            action,
            dry_run=self.options.dry_run,
            verbose=self.options.verbose,
        )
        self.summary.add(outcome)

        status_marker = "✓" if outcome.ok else "✗" if outcome.failed else "⊘"
        logger.info("%s %s → %s", status_marker, action.label, action.cwd)

        yield {"type": "outcome", "outcome": outcome}
        return outcome

    # ── Errors ──────────────────────────────────────────────────

    def _traversal_error(self, directory: Path, message: str) -> Iterator[dict]:
        logger.info("Walk error in %s: %s", directory, message)
        self.summary.add(
            Outcome.failure(
                label="scan",
                directory=str(directory),
                error=message,
                kind="traversal",
            )
        )
        yield {"type": "traversal_error", "directory": str(directory), "error": message}

    def _drain(self, errors: list[OSError]) -> Iterator[dict]:
        while errors:
            err = errors.pop(0)
            where = Path(err.filename) if err.filename else self.root
            yield from self._traversal_error(where, err.strerror or str(err))
