"""Tests for the `procexec shell` command."""

import json

from click.testing import CliRunner

from procexec.cli.cli import cli
from procexec.core.config_store import ProcexecConfig
from procexec.core.context import ProcexecContext
from procexec.core.shell import DryRunShellInvoker
from procexec.core.types import ExecutionResult
from tests.fakes.shell_invoker import FakeShellInvoker

SHELLS = {"sh": "/bin/sh", "bash": "/bin/bash", "zsh": "/bin/zsh"}


def test_shell_runs_command_line_with_default_shell() -> None:
    invoker = FakeShellInvoker(
        installed_shells=SHELLS,
        results={"export FOO=bar; echo $FOO": ExecutionResult(0, "bar\n", "")},
    )
    ctx = ProcexecContext.for_test(shell_invoker=invoker)

    result = CliRunner().invoke(cli, ["shell", "export FOO=bar; echo $FOO"], obj=ctx)

    assert result.exit_code == 0
    assert "bar" in result.output
    command, _ = invoker.run_calls[0]
    assert command.shell_override is None


def test_shell_override_flag() -> None:
    invoker = FakeShellInvoker(installed_shells=SHELLS)
    ctx = ProcexecContext.for_test(shell_invoker=invoker)

    result = CliRunner().invoke(cli, ["shell", "--shell", "bash", "echo $BASH"], obj=ctx)

    assert result.exit_code == 0
    command, _ = invoker.run_calls[0]
    assert command.shell_override == "bash"
    assert command.command_line == "echo $BASH"


def test_shell_uses_configured_default_shell() -> None:
    invoker = FakeShellInvoker(installed_shells=SHELLS)
    ctx = ProcexecContext.for_test(
        shell_invoker=invoker, config=ProcexecConfig(default_shell="zsh")
    )

    CliRunner().invoke(cli, ["shell", "print -l a b"], obj=ctx)

    command, _ = invoker.run_calls[0]
    assert command.shell_override == "zsh"


def test_shell_flag_beats_configured_default() -> None:
    invoker = FakeShellInvoker(installed_shells=SHELLS)
    ctx = ProcexecContext.for_test(
        shell_invoker=invoker, config=ProcexecConfig(default_shell="zsh")
    )

    CliRunner().invoke(cli, ["shell", "--shell", "sh", "true"], obj=ctx)

    command, _ = invoker.run_calls[0]
    assert command.shell_override == "sh"


def test_shell_preserves_multiline_command_line() -> None:
    invoker = FakeShellInvoker(installed_shells=SHELLS)
    ctx = ProcexecContext.for_test(shell_invoker=invoker)
    command_line = "echo one \\\n  two"

    CliRunner().invoke(cli, ["shell", command_line], obj=ctx)

    command, _ = invoker.run_calls[0]
    assert command.command_line == command_line


def test_shell_unknown_shell_exits_127() -> None:
    ctx = ProcexecContext.for_test(shell_invoker=FakeShellInvoker(installed_shells=SHELLS))

    result = CliRunner().invoke(cli, ["shell", "--shell", "tcsh", "echo hi"], obj=ctx)

    assert result.exit_code == 127
    assert "Unsupported shell 'tcsh'" in result.output


def test_shell_not_installed_exits_127() -> None:
    ctx = ProcexecContext.for_test(shell_invoker=FakeShellInvoker(installed_shells=SHELLS))

    result = CliRunner().invoke(cli, ["shell", "--shell", "fish", "echo hi"], obj=ctx)

    assert result.exit_code == 127
    assert "Shell not found: fish" in result.output


def test_shell_propagates_exit_code() -> None:
    invoker = FakeShellInvoker(
        installed_shells=SHELLS,
        results={"exit 7": ExecutionResult(7, "", "")},
    )
    ctx = ProcexecContext.for_test(shell_invoker=invoker)

    result = CliRunner().invoke(cli, ["shell", "exit 7"], obj=ctx)

    assert result.exit_code == 7


def test_shell_json_output_includes_shell_argv() -> None:
    ctx = ProcexecContext.for_test(shell_invoker=FakeShellInvoker(installed_shells=SHELLS))

    result = CliRunner().invoke(
        cli, ["shell", "--format", "json", "--shell", "bash", "ls | wc -l"], obj=ctx
    )

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["argv"] == ["/bin/bash", "-c", "ls | wc -l"]
    assert data["timed_out"] is False


def test_shell_json_error_for_missing_shell() -> None:
    ctx = ProcexecContext.for_test(shell_invoker=FakeShellInvoker(installed_shells=SHELLS))

    result = CliRunner().invoke(
        cli, ["shell", "--format", "json", "--shell", "pwsh", "Get-Date"], obj=ctx
    )

    assert result.exit_code == 127
    data = json.loads(result.output)
    assert data["kind"] == "shell_not_found"


def test_shell_dry_run_prints_resolved_shell() -> None:
    fake = FakeShellInvoker(installed_shells=SHELLS)
    ctx = ProcexecContext.for_test(shell_invoker=DryRunShellInvoker(fake), dry_run=True)

    result = CliRunner().invoke(cli, ["shell", "--shell", "bash", "rm -rf build"], obj=ctx)

    assert result.exit_code == 0
    assert "[DRY RUN] Would run via bash (/bin/bash): rm -rf build" in result.output
    assert fake.run_calls == []
