"""
Manifest model — what a dependency file is and how to install it.

A descriptor is pure data: the filename that identifies it, a label for
output, the install command tokens, and the package-manager category
used by ``--only`` filtering.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Category(StrEnum):
    """Package-manager families recognised by the scanner."""

    PIP = "pip"
    GO = "go"
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    PIPENV = "pipenv"
    CONDA = "conda"


class ManifestDescriptor(BaseModel):
    """A recognised dependency manifest and its install command."""

    model_config = ConfigDict(frozen=True)

    filename: str                   # exact, case-sensitive match
    label: str                      # human-readable name
    command: tuple[str, ...]        # executable first, then arguments
    category: Category
