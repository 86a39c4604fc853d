"""
Adapter base — the protocol contract between the walker and tools.

This defines the abstract interface that every adapter must implement.
The walker only talks to adapters through the registry, never
directly to external tools.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel

from autodeps.core.models.action import Action, Outcome


class ExecutionContext(BaseModel):
    """Everything an adapter needs to execute an action."""

    action: Action
    dry_run: bool = False
    verbose: bool = False

    @property
    def working_dir(self) -> str:
        """Directory the command runs in."""
        return self.action.cwd


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters perform external side effects and return outcomes.
    They NEVER raise exceptions — failures are captured in the Outcome.

    To create a new adapter:
        1. Subclass Adapter
        2. Implement name, validate, execute
        3. Register it in the AdapterRegistry
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell')."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the action can be executed.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Outcome:
        """Execute the action and return an outcome.

        MUST never raise exceptions. All failures are captured
        in the Outcome with status='failed'.
        """

    def describe(self, context: ExecutionContext) -> str:
        """Render the command line as it would be shown to the operator."""
        return context.action.command_line

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
