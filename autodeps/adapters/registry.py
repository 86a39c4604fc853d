"""
Adapter registry — central dispatch for every command the scan runs.

The registry is the single point of adapter management. It handles
registration, lookup, dry-run and action execution. The walker
never talks to adapters directly — always through the registry.
"""

from __future__ import annotations

import logging
import time
from autodeps.adapters.base import Adapter, ExecutionContext
from autodeps.core.models.action import Action, Outcome

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Central registry and dispatcher for adapters.

    Features:
        - Register adapters by name
        - Execute actions through the appropriate adapter
        - Dry-run: validate and render, never execute
    """

    def __init__(self) -> None:
        self._adapters: dict[str, Adapter] = {}

    @classmethod
    def default(cls) -> AdapterRegistry:
        """Registry wired with the real shell adapter."""
        from autodeps.adapters.shell.command import ShellCommandAdapter

        registry = cls()
        registry.register(ShellCommandAdapter())
        return registry

    def register(self, adapter: Adapter) -> None:
        """Register an adapter.

        Args:
            adapter: The adapter instance to register.
        """
        name = adapter.name
        if name in self._adapters:
            logger.warning("Overwriting existing adapter: %s", name)
        self._adapters[name] = adapter
        logger.debug("Registered adapter: %s", name)

    def describe(self, action: Action, verbose: bool = False) -> str:
        """Render ``action`` the way it will be shown before running."""
        adapter = self._adapters.get(action.adapter)
        context = ExecutionContext(action=action, verbose=verbose)
        if adapter is None:
            return action.command_line
        return adapter.describe(context)

    def execute_action(
        self,
        action: Action,
        dry_run: bool = False,
        verbose: bool = False,
    ) -> Outcome:
        """Execute an action through the appropriate adapter.

        This is the main dispatch method. It:
        1. Resolves the adapter
        2. Builds the execution context
        3. Validates the action
        4. Executes (or dry-runs)
        5. Returns an Outcome (never raises)

        Args:
            action: The action to execute.
            dry_run: If True, validate and render but don't execute.
            verbose: If True, render the fully resolved executable path.

        Returns:
            Outcome with execution results.
        """
        start_time = time.monotonic()

        context = ExecutionContext(action=action, dry_run=dry_run, verbose=verbose)

        adapter = self._adapters.get(action.adapter)
        if adapter is None:
            return Outcome.failure(
                label=action.label,
                directory=action.cwd,
                error=f"No adapter registered for '{action.adapter}'",
                command=action.command_line,
            )

        rendered = adapter.describe(context)

        # Validate
        try:
            is_valid, error_msg = adapter.validate(context)
        except Exception as e:
            is_valid, error_msg = False, f"Validation error: {e}"
        if not is_valid:
            return Outcome.failure(
                label=action.label,
                directory=action.cwd,
                error=f"Validation failed: {error_msg}",
                command=rendered,
            )

        # Dry run — validated but not executed
        if dry_run:
            return Outcome.skip(
                directory=action.cwd,
                reason=f"[dry-run] Would run: {rendered}",
                label=action.label,
                command=rendered,
                metadata={"dry_run": True},
            )

        # Execute
        try:
            outcome = adapter.execute(context)
        except Exception as e:
            # Adapters should never raise
            logger.error("Adapter %s raised during execution: %s", action.adapter, e)
            outcome = Outcome.failure(
                label=action.label,
                directory=action.cwd,
                error=f"Unexpected error: {e}",
            )

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        return outcome.model_copy(update={"command": rendered, "duration_ms": elapsed_ms})
