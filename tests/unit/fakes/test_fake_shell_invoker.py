"""Tests for FakeShellInvoker test infrastructure."""

import pytest

from procexec.core.errors import InvocationError, InvocationErrorKind
from procexec.core.types import ExecutionResult, ShellCommand
from tests.fakes.shell_invoker import FakeShellInvoker


def test_fake_shell_invoker_resolves_default_shell() -> None:
    """Test that resolve(None) uses the configured default shell."""
    invoker = FakeShellInvoker(installed_shells={"sh": "/bin/sh"})

    shell = invoker.resolve(None)

    assert shell.identity.name == "sh"
    assert shell.path == "/bin/sh"


def test_fake_shell_invoker_missing_shell_raises() -> None:
    """Test that shells not installed raise SHELL_NOT_FOUND."""
    invoker = FakeShellInvoker(installed_shells={"sh": "/bin/sh"})

    with pytest.raises(InvocationError) as exc_info:
        invoker.resolve("fish")

    assert exc_info.value.kind == InvocationErrorKind.SHELL_NOT_FOUND


def test_fake_shell_invoker_unknown_shell_raises_shell_not_found() -> None:
    """Test that unknown identities are rejected like the real resolver."""
    invoker = FakeShellInvoker(installed_shells={"sh": "/bin/sh", "tcsh": "/bin/tcsh"})

    with pytest.raises(InvocationError) as exc_info:
        invoker.resolve("tcsh")

    assert exc_info.value.kind == InvocationErrorKind.SHELL_NOT_FOUND
    assert "Unsupported shell" in str(exc_info.value)


def test_fake_shell_invoker_default_result_carries_invocation() -> None:
    """Test that unregistered command lines succeed with the shell argv."""
    invoker = FakeShellInvoker(installed_shells={"bash": "/bin/bash"})

    result = invoker.run(ShellCommand("echo hi", shell_override="bash"))

    assert result.exit_code == 0
    assert result.argv == ("/bin/bash", "-c", "echo hi")


def test_fake_shell_invoker_returns_canned_result_and_tracks_calls() -> None:
    """Test canned results are keyed by command line and calls are recorded."""
    canned = ExecutionResult(0, "bar\n", "")
    invoker = FakeShellInvoker(
        installed_shells={"sh": "/bin/sh"},
        results={"export FOO=bar; echo $FOO": canned},
    )
    command = ShellCommand("export FOO=bar; echo $FOO")

    result = invoker.run(command)

    assert result is canned
    assert invoker.run_calls == [(command, None)]
