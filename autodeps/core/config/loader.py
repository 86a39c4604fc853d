"""
Configuration loader — reads autodeps.yml into scan defaults.

The file is optional. When present it supplies defaults that CLI
flags extend or override:

    only: [go, npm]
    exclude: [node_modules, .git]
    dry_run: false
    verbose: false
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "autodeps.yml"

# Walked past unless autodeps.yml sets its own exclude list
DEFAULT_EXCLUDE: tuple[str, ...] = (".git", ".venv", "node_modules")


class ConfigError(Exception):
    """Raised when the configuration file is invalid or missing."""


class ScanConfig(BaseModel):
    """Scan defaults read from autodeps.yml."""

    model_config = ConfigDict(extra="forbid")

    only: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE))
    dry_run: bool = False
    verbose: bool = False


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for autodeps.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to autodeps.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None, start_dir: Path | None = None) -> ScanConfig:
    """Load and validate scan configuration.

    Args:
        path: Explicit path to autodeps.yml. If None, searches upward
            from ``start_dir``; a missing file yields the defaults.
        start_dir: Where the upward search begins (default: cwd).

    Returns:
        Validated ScanConfig model.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file(start_dir)
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return ScanConfig()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return ScanConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = ScanConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded config from %s", path)
    return config
