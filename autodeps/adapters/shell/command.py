"""
Shell command adapter — run one package-manager command in one directory.

Output is not captured: the child inherits stdout and stderr so the
operator sees the package manager's own progress as it happens.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from pathlib import Path

from autodeps.adapters.base import Adapter, ExecutionContext
from autodeps.core.models.action import Outcome

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Execute an argv-style command with inherited output streams.

    The executable, and any executable the command calls through a
    shell, is looked up before spawning. A missing one is a failure of
    that one action, never of the scan.
    """

    @property
    def name(self) -> str:
        return "shell"

    def resolve(self, executable: str, extra_dirs: list[str] | None = None) -> str | None:
        """Full path of ``executable``, or None.

        ``extra_dirs`` are searched in order before PATH.
        """
        if not extra_dirs:
            return shutil.which(executable)
        path = os.pathsep.join([*extra_dirs, os.environ.get("PATH", os.defpath)])
        return shutil.which(executable, path=path)

    def describe(self, context: ExecutionContext) -> str:
        command = context.action.command
        if not context.verbose or not command:
            return context.action.command_line

        resolved = self.resolve(command[0]) or command[0]
        return " ".join([resolved, *command[1:]])

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not context.action.command:
            return False, "Missing command"

        cwd = context.working_dir
        if not Path(cwd).is_dir():
            return False, f"Working directory does not exist: {cwd}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Outcome:
        action = context.action
        executable = action.command[0]

        resolved = self.resolve(executable)
        if resolved is None:
            logger.debug("Executable not on PATH: %s", executable)
            return Outcome.failure(
                label=action.label,
                directory=action.cwd,
                error=f"Command not found: {executable}",
                kind="not_found",
            )

        search = [str(Path(action.cwd) / d) for d in action.search_path]
        for required in action.requires:
            if self.resolve(required, search) is None:
                logger.debug("Required executable not found: %s (searched %s)", required, search)
                return Outcome.failure(
                    label=action.label,
                    directory=action.cwd,
                    error=f"Command not found: {required}",
                    kind="not_found",
                )

        argv = [resolved, *action.command[1:]]
        logger.debug("Executing: %s (cwd=%s)", " ".join(argv), action.cwd)
        start = time.monotonic()

        try:
            result = subprocess.run(argv, cwd=action.cwd, check=False)
        except OSError as e:
            return Outcome.failure(
                label=action.label,
                directory=action.cwd,
                error=f"Could not start {executable}: {e}",
                kind="execution",
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)

        if result.returncode == 0:
            return Outcome.success(
                label=action.label,
                directory=action.cwd,
                duration_ms=elapsed_ms,
                metadata={"return_code": result.returncode, "executable": resolved},
            )

        return Outcome.failure(
            label=action.label,
            directory=action.cwd,
            error=f"{action.label or executable} exited with code {result.returncode}",
            kind="execution",
            duration_ms=elapsed_ms,
            metadata={"return_code": result.returncode, "executable": resolved},
        )
