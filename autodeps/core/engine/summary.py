"""
Summary collector — every outcome of one scan, in order.

Records are appended as the walk proceeds and rendered once it ends,
in three sections: successes, dry-run skips, failures.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from autodeps.core.models.action import Outcome

SECTION_SUCCEEDED = "Succeeded"
SECTION_SKIPPED = "Skipped (dry-run)"
SECTION_FAILED = "Failed"


@dataclass
class SummaryCollector:
    """Ordered outcome records for a single scan."""

    _records: list[Outcome] = field(default_factory=list, init=False, repr=False)

    def add(self, outcome: Outcome) -> None:
        self._records.append(outcome)

    @property
    def records(self) -> tuple[Outcome, ...]:
        """All outcomes in the order they were added."""
        return tuple(self._records)

    @property
    def successes(self) -> list[Outcome]:
        return [r for r in self._records if r.ok]

    @property
    def skipped(self) -> list[Outcome]:
        return [r for r in self._records if r.skipped]

    @property
    def failures(self) -> list[Outcome]:
        return [r for r in self._records if r.failed]

    @property
    def total(self) -> int:
        return len(self._records)

    @property
    def has_errors(self) -> bool:
        return any(r.failed for r in self._records)

    def sections(self) -> list[tuple[str, list[Outcome]]]:
        """Non-empty sections in display order."""
        ordered = [
            (SECTION_SUCCEEDED, self.successes),
            (SECTION_SKIPPED, self.skipped),
            (SECTION_FAILED, self.failures),
        ]
        return [(title, records) for title, records in ordered if records]
