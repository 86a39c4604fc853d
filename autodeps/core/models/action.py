"""
Action and Outcome models — the execution contract.

Actions represent requested commands. Outcomes represent results.
The walker sends Actions through the adapter registry and gets an
Outcome back for every one of them. Never exceptions.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from autodeps.core.models.manifest import Category


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


ErrorKind = Literal["traversal", "not_found", "execution"]


class Action(BaseModel):
    """One external command to run in one directory."""

    id: str                         # unique action identifier
    label: str = ""                 # human-readable name
    adapter: str = "shell"          # which adapter handles this
    category: Category | None = None
    command: list[str] = Field(default_factory=list)
    cwd: str = "."
    requires: list[str] = Field(default_factory=list)    # executables the command calls
    search_path: list[str] = Field(default_factory=list)  # cwd-relative dirs searched before PATH

    @property
    def command_line(self) -> str:
        return " ".join(self.command)


class Outcome(BaseModel):
    """Result of dispatching (or simulating) one action.

    ``ok`` maps to a success record, ``failed`` to a failure record
    and ``skipped`` to a dry-run record.
    """

    model_config = ConfigDict(frozen=True)

    status: Literal["ok", "skipped", "failed"] = "ok"
    label: str = ""
    directory: str = ""
    command: str = ""

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None
    error_kind: ErrorKind | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the action succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the action failed."""
        return self.status == "failed"

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @classmethod
    def success(
        cls,
        label: str,
        directory: str,
        output: str = "",
        **kwargs: Any,
    ) -> Outcome:
        """Create a success outcome."""
        return cls(
            status="ok",
            label=label,
            directory=directory,
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        label: str,
        directory: str,
        error: str,
        kind: ErrorKind = "execution",
        **kwargs: Any,
    ) -> Outcome:
        """Create a failure outcome."""
        return cls(
            status="failed",
            label=label,
            directory=directory,
            error=error,
            error_kind=kind,
            **kwargs,
        )

    @classmethod
    def skip(
        cls,
        directory: str,
        reason: str = "",
        **kwargs: Any,
    ) -> Outcome:
        """Create a skipped (dry-run) outcome."""
        return cls(
            status="skipped",
            directory=directory,
            output=reason,
            **kwargs,
        )
