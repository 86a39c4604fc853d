"""
Logging configuration for the CLI.

Console output of the scan itself (found / dispatch / summary lines)
goes through click. This module only covers diagnostic logging, which
goes to stderr so it never interleaves with the package managers'
stdout.

Level precedence:
    --debug  >  --quiet  >  --verbose  >  AUTODEPS_LOG_LEVEL  >  WARNING

An optional log file is configured with AUTODEPS_LOG_FILE and
AUTODEPS_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import sys

ENV_LEVEL = "AUTODEPS_LOG_LEVEL"
ENV_FILE = "AUTODEPS_LOG_FILE"
ENV_FILE_LEVEL = "AUTODEPS_LOG_FILE_LEVEL"

_DATEFMT = "%H:%M:%S"

# Console format per threshold, checked top-down
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", _DATEFMT),
    (logging.INFO, "%(asctime)s %(message)s", _DATEFMT),
)
_CONSOLE_DEFAULT = "autodeps: %(levelname)s: %(message)s"

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(
    debug: bool = False,
    quiet: bool = False,
    verbose: bool = False,
    env_level: str | None = None,
) -> str:
    """Pick the console log level from CLI switches and the environment."""
    if debug:
        return "DEBUG"
    if quiet:
        return "ERROR"
    if verbose:
        return "INFO"
    return env_level or "WARNING"


def _console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_CONSOLE_DEFAULT)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger once, at CLI startup.

    Args:
        level: Console level name.
        log_file: Optional path; when set, a file handler is added.
        log_file_level: Level for the file handler (default: ``level``).
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(fh)

    root.setLevel(root_level)

    # A closed stderr must not turn into logging tracebacks
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Numeric level for a name; unknown names fall back to WARNING."""
    numeric = logging.getLevelName(level.upper()) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
