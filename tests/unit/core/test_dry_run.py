"""Tests for the dry-run invoker wrappers."""

import pytest

from procexec.core.command import DryRunCommandInvoker
from procexec.core.errors import DryRunError, InvocationError, InvocationErrorKind
from procexec.core.shell import DryRunShellInvoker
from procexec.core.types import CommandSpec, RunOptions, ShellCommand
from tests.fakes.command_invoker import FakeCommandInvoker
from tests.fakes.shell_invoker import FakeShellInvoker


def test_dry_run_command_prints_and_does_not_run(capsys: pytest.CaptureFixture[str]) -> None:
    fake = FakeCommandInvoker(installed={"rm": "/bin/rm"})
    dry = DryRunCommandInvoker(fake)

    result = dry.run(CommandSpec("rm", ("-rf", "my dir")))

    assert result.exit_code == 0
    assert result.stdout == ""
    assert result.argv == ("rm", "-rf", "my dir")
    assert fake.run_calls == []
    assert "[DRY RUN] Would run: rm -rf 'my dir'" in capsys.readouterr().err


def test_dry_run_command_returns_bytes_in_binary_mode() -> None:
    dry = DryRunCommandInvoker(FakeCommandInvoker(installed={"cat": "/bin/cat"}))

    result = dry.run(CommandSpec("cat"), RunOptions(text=False))

    assert result.stdout == b""
    assert result.stderr == b""


def test_dry_run_command_still_reports_missing_executable() -> None:
    dry = DryRunCommandInvoker(FakeCommandInvoker())

    with pytest.raises(InvocationError) as exc_info:
        dry.run(CommandSpec("nonexistent-tool"))

    assert exc_info.value.kind == InvocationErrorKind.EXECUTABLE_NOT_FOUND


def test_dry_run_command_start_raises_dry_run_error() -> None:
    fake = FakeCommandInvoker(installed={"ls": "/bin/ls"})
    dry = DryRunCommandInvoker(fake)

    with pytest.raises(DryRunError, match="Cannot start ls in dry-run mode"):
        dry.start(CommandSpec("ls"))

    assert fake.run_calls == []


def test_dry_run_shell_prints_resolved_shell(capsys: pytest.CaptureFixture[str]) -> None:
    fake = FakeShellInvoker(installed_shells={"bash": "/bin/bash"})
    dry = DryRunShellInvoker(fake)

    result = dry.run(ShellCommand("ls | wc -l", shell_override="bash"))

    assert result.exit_code == 0
    assert fake.run_calls == []
    assert "[DRY RUN] Would run via bash (/bin/bash): ls | wc -l" in capsys.readouterr().err


def test_dry_run_shell_still_reports_missing_shell() -> None:
    dry = DryRunShellInvoker(FakeShellInvoker(installed_shells={}))

    with pytest.raises(InvocationError) as exc_info:
        dry.run(ShellCommand("echo hi", shell_override="zsh"))

    assert exc_info.value.kind == InvocationErrorKind.SHELL_NOT_FOUND


def test_dry_run_shell_start_raises_dry_run_error() -> None:
    fake = FakeShellInvoker(installed_shells={"sh": "/bin/sh"})
    dry = DryRunShellInvoker(fake)

    with pytest.raises(DryRunError, match="dry-run mode"):
        dry.start(ShellCommand("make test"))

    assert fake.run_calls == []


def test_dry_run_error_is_distinct_from_invocation_error() -> None:
    assert issubclass(DryRunError, RuntimeError)
    assert not issubclass(DryRunError, InvocationError)
