"""
Scan options — the read-only switches for one scan.

Built once from CLI flags (and the optional config file) and passed
explicitly to every component that needs it.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from autodeps.core.models.manifest import Category

logger = logging.getLogger(__name__)


def category_allowed(only: frozenset[str] | set[str], category: str) -> bool:
    """Whether ``category`` passes the allow-list.

    An empty allow-list lets everything through. Matching is exact and
    case-sensitive.
    """
    if not only:
        return True
    return str(category) in only


def parse_only(value: str | None) -> frozenset[str]:
    """Parse a comma-separated ``--only`` value into an allow-list."""
    if not value:
        return frozenset()

    parts = frozenset(p.strip() for p in value.split(",") if p.strip())
    known = {c.value for c in Category}
    for unknown in sorted(parts - known):
        logger.warning("Unknown category in --only: %s (valid: %s)", unknown, ", ".join(sorted(known)))
    return parts


class ScanOptions(BaseModel):
    """Immutable switches for a single scan."""

    model_config = ConfigDict(frozen=True)

    dry_run: bool = False
    verbose: bool = False
    only: frozenset[str] = Field(default_factory=frozenset)
    exclude: frozenset[str] = Field(default_factory=frozenset)

    def allows(self, category: str) -> bool:
        return category_allowed(self.only, category)
