"""
Mock adapter — test double for the shell adapter.

Records every execution context it receives instead of spawning
processes. Configurable to return success, failure, or a missing
executable per action.
"""

from __future__ import annotations

from autodeps.adapters.base import Adapter, ExecutionContext
from autodeps.core.models.action import Outcome


class MockAdapter(Adapter):
    """Universal mock adapter for testing.

    By default, returns success for everything. Can be configured
    with custom responses per action ID or per executable.
    """

    def __init__(
        self,
        adapter_name: str = "shell",
        default_output: str = "[mock] executed",
    ):
        self._name = adapter_name
        self._default_output = default_output
        self._responses: dict[str, Outcome] = {}
        self._failures: dict[str, str] = {}
        self._missing: set[str] = set()
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    def set_response(self, action_id: str, outcome: Outcome) -> None:
        """Set a custom response for a specific action ID."""
        self._responses[action_id] = outcome

    def set_failure(self, action_id: str, error: str = "Mock failure") -> None:
        """Configure a specific action to fail."""
        self._failures[action_id] = error

    def set_missing(self, executable: str) -> None:
        """Pretend ``executable`` is not on the search path."""
        self._missing.add(executable)

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Outcome:
        self._call_log.append(context)
        action = context.action

        missing = [e for e in [*action.command[:1], *action.requires] if e in self._missing]
        if missing:
            return Outcome.failure(
                label=action.label,
                directory=action.cwd,
                error=f"Command not found: {missing[0]}",
                kind="not_found",
            )

        if action.id in self._responses:
            return self._responses[action.id]

        if action.id in self._failures:
            return Outcome.failure(
                label=action.label,
                directory=action.cwd,
                error=self._failures[action.id],
            )

        return Outcome.success(
            label=action.label,
            directory=action.cwd,
            output=self._default_output,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()
        self._failures.clear()
        self._missing.clear()
