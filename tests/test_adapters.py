"""
Tests for adapter protocol, registry, mock, and shell adapters.
"""

import shutil
from pathlib import Path

from autodeps.adapters.base import ExecutionContext
from autodeps.adapters.mock import MockAdapter
from autodeps.adapters.registry import AdapterRegistry
from autodeps.adapters.shell.command import ShellCommandAdapter
from autodeps.core.models.action import Action, Outcome


def _action(cwd: Path | str = ".", command: list[str] | None = None, **kwargs) -> Action:
    return Action(
        id=kwargs.pop("id", "test"),
        label=kwargs.pop("label", "Test"),
        command=command if command is not None else ["go", "mod", "download"],
        cwd=str(cwd),
        **kwargs,
    )


# ── Protocol Tests ───────────────────────────────────────────────────


class TestExecutionContext:
    def test_working_dir(self):
        ctx = ExecutionContext(action=_action("/project/api"))
        assert ctx.working_dir == "/project/api"

    def test_defaults(self):
        ctx = ExecutionContext(action=_action())
        assert not ctx.dry_run
        assert not ctx.verbose


# ── Mock Adapter Tests ───────────────────────────────────────────────


class TestMockAdapter:
    def test_default_success(self):
        mock = MockAdapter()
        outcome = mock.execute(ExecutionContext(action=_action("/a")))
        assert outcome.ok
        assert outcome.directory == "/a"
        assert mock.call_count == 1

    def test_custom_response(self):
        mock = MockAdapter()
        mock.set_response("op-1", Outcome.success(label="Go", directory="/a", output="custom"))
        outcome = mock.execute(ExecutionContext(action=_action(id="op-1")))
        assert outcome.output == "custom"

    def test_set_failure(self):
        mock = MockAdapter()
        mock.set_failure("op-fail", error="Intentional failure")
        outcome = mock.execute(ExecutionContext(action=_action("/b", id="op-fail")))
        assert outcome.failed
        assert "Intentional failure" in outcome.error
        assert outcome.directory == "/b"

    def test_set_missing(self):
        mock = MockAdapter()
        mock.set_missing("pnpm")
        outcome = mock.execute(ExecutionContext(action=_action(command=["pnpm", "install"])))
        assert outcome.failed
        assert outcome.error_kind == "not_found"
        assert "not found" in outcome.error

    def test_set_missing_required(self):
        mock = MockAdapter()
        mock.set_missing("pip")
        action = _action(command=["sh", "-c", "pip install"], requires=["pip"])
        outcome = mock.execute(ExecutionContext(action=action))
        assert outcome.error == "Command not found: pip"

    def test_call_log(self):
        mock = MockAdapter()
        for i in range(3):
            mock.execute(ExecutionContext(action=_action(id=f"op-{i}")))
        assert mock.call_count == 3
        assert mock.call_log[0].action.id == "op-0"

    def test_reset(self):
        mock = MockAdapter()
        mock.set_failure("op-1")
        mock.set_missing("go")
        mock.execute(ExecutionContext(action=_action(id="op-1")))
        mock.reset()
        assert mock.call_count == 0
        assert mock.execute(ExecutionContext(action=_action(id="op-1"))).ok


# ── Registry Tests ──────────────────────────────────────────────────


class TestAdapterRegistry:
    def test_dispatches_by_adapter_name(self, tmp_path: Path):
        registry = AdapterRegistry()
        mock = MockAdapter(adapter_name="test")
        registry.register(mock)
        outcome = registry.execute_action(_action(tmp_path, adapter="test"))
        assert outcome.ok
        assert mock.call_count == 1

    def test_register_overwrites(self, tmp_path: Path):
        registry = AdapterRegistry()
        first, second = MockAdapter(), MockAdapter()
        registry.register(first)
        registry.register(second)
        registry.execute_action(_action(tmp_path))
        assert first.call_count == 0
        assert second.call_count == 1

    def test_default_uses_shell(self, tmp_path: Path):
        outcome = AdapterRegistry.default().execute_action(
            _action(tmp_path, command=["autodeps-no-such-tool-xyz"])
        )
        assert outcome.error_kind == "not_found"

    def test_missing_adapter_fails(self):
        outcome = AdapterRegistry().execute_action(_action(adapter="nonexistent"))
        assert outcome.failed
        assert "No adapter registered" in outcome.error

    def test_dry_run_never_executes(self, tmp_path: Path):
        registry = AdapterRegistry()
        mock = MockAdapter()
        registry.register(mock)
        outcome = registry.execute_action(_action(tmp_path), dry_run=True)
        assert outcome.skipped
        assert "[dry-run]" in outcome.output
        assert outcome.command == "go mod download"
        assert mock.call_count == 0

    def test_execute(self, tmp_path: Path):
        registry = AdapterRegistry()
        mock = MockAdapter()
        registry.register(mock)
        outcome = registry.execute_action(_action(tmp_path))
        assert outcome.ok
        assert outcome.command == "go mod download"
        assert outcome.duration_ms >= 0
        assert mock.call_count == 1

    def test_validation_failure(self, tmp_path: Path):
        registry = AdapterRegistry.default()
        outcome = registry.execute_action(_action(tmp_path / "missing"))
        assert outcome.failed
        assert "does not exist" in outcome.error

    def test_adapter_exception_becomes_failure(self, tmp_path: Path):
        class Exploding(MockAdapter):
            def execute(self, context):
                raise RuntimeError("kaboom")

        registry = AdapterRegistry()
        registry.register(Exploding())
        outcome = registry.execute_action(_action(tmp_path))
        assert outcome.failed
        assert "kaboom" in outcome.error

    def test_describe_unknown_adapter(self):
        registry = AdapterRegistry()
        assert registry.describe(_action(adapter="nope")) == "go mod download"


# ── Shell Command Adapter Tests ─────────────────────────────────────


class TestShellCommandAdapter:
    def test_name(self):
        assert ShellCommandAdapter().name == "shell"

    def test_validate_missing_command(self, tmp_path: Path):
        valid, msg = ShellCommandAdapter().validate(
            ExecutionContext(action=_action(tmp_path, command=[]))
        )
        assert not valid
        assert "command" in msg.lower()

    def test_validate_bad_cwd(self):
        valid, msg = ShellCommandAdapter().validate(
            ExecutionContext(action=_action("/nonexistent/path"))
        )
        assert not valid
        assert "does not exist" in msg

    def test_execute_success(self, tmp_path: Path):
        outcome = ShellCommandAdapter().execute(
            ExecutionContext(action=_action(tmp_path, command=["sh", "-c", "true"]))
        )
        assert outcome.ok
        assert outcome.metadata["return_code"] == 0
        assert outcome.directory == str(tmp_path)

    def test_execute_runs_in_cwd(self, tmp_path: Path):
        ShellCommandAdapter().execute(
            ExecutionContext(action=_action(tmp_path, command=["sh", "-c", "touch ran.txt"]))
        )
        assert (tmp_path / "ran.txt").is_file()

    def test_execute_nonzero_exit(self, tmp_path: Path):
        outcome = ShellCommandAdapter().execute(
            ExecutionContext(action=_action(tmp_path, command=["sh", "-c", "exit 3"], label="Go"))
        )
        assert outcome.failed
        assert outcome.error_kind == "execution"
        assert outcome.metadata["return_code"] == 3
        assert "exited with code 3" in outcome.error

    def test_execute_not_found(self, tmp_path: Path):
        outcome = ShellCommandAdapter().execute(
            ExecutionContext(action=_action(tmp_path, command=["autodeps-no-such-tool-xyz", "install"]))
        )
        assert outcome.failed
        assert outcome.error_kind == "not_found"
        assert "not found" in outcome.error

    def test_execute_required_missing(self, tmp_path: Path):
        action = _action(
            tmp_path,
            command=["sh", "-c", "autodeps-no-such-tool-xyz"],
            requires=["autodeps-no-such-tool-xyz"],
        )
        outcome = ShellCommandAdapter().execute(ExecutionContext(action=action))
        assert outcome.failed
        assert outcome.error_kind == "not_found"
        assert outcome.error == "Command not found: autodeps-no-such-tool-xyz"

    def test_execute_required_on_search_path(self, tmp_path: Path):
        bin_dir = tmp_path / "env" / "bin"
        bin_dir.mkdir(parents=True)
        tool = bin_dir / "autodeps-local-tool"
        tool.write_text("#!/bin/sh\ntouch ran.txt\n")
        tool.chmod(0o755)
        action = _action(
            tmp_path,
            command=["sh", "-c", ". ./env/bin/autodeps-local-tool"],
            requires=["autodeps-local-tool"],
            search_path=["env/bin"],
        )
        outcome = ShellCommandAdapter().execute(ExecutionContext(action=action))
        assert outcome.ok
        assert (tmp_path / "ran.txt").is_file()

    def test_execute_start_failure(self, tmp_path: Path, monkeypatch):
        def _raise(*args, **kwargs):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr("autodeps.adapters.shell.command.subprocess.run", _raise)
        outcome = ShellCommandAdapter().execute(
            ExecutionContext(action=_action(tmp_path, command=["sh", "-c", "true"]))
        )
        assert outcome.failed
        assert outcome.error_kind == "execution"
        assert "Permission denied" in outcome.error

    def test_describe_plain(self):
        ctx = ExecutionContext(action=_action(command=["sh", "-c", "true"]))
        assert ShellCommandAdapter().describe(ctx) == "sh -c true"

    def test_describe_verbose_resolves_path(self):
        ctx = ExecutionContext(action=_action(command=["sh", "-c", "true"]), verbose=True)
        described = ShellCommandAdapter().describe(ctx)
        assert described.split()[0] == shutil.which("sh")
        assert described.endswith("-c true")

    def test_describe_verbose_unresolvable(self):
        ctx = ExecutionContext(
            action=_action(command=["autodeps-no-such-tool-xyz", "install"]), verbose=True
        )
        assert ShellCommandAdapter().describe(ctx) == "autodeps-no-such-tool-xyz install"
