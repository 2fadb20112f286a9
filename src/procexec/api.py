"""Convenience functions over the real invokers.

These are the two operations most callers need:

    >>> from procexec import run_direct, run_via_shell
    >>> run_direct("git", ["rev-parse", "HEAD"]).stdout
    >>> run_via_shell("git log --oneline | head -5", shell_override="bash").stdout

Each call builds its own spec and resolves the program or shell at call
time; nothing is cached between calls.
"""

from collections.abc import Sequence

from procexec.core.command import RealCommandInvoker
from procexec.core.shell import RealShellInvoker
from procexec.core.types import CommandSpec, ExecutionResult, RunOptions, ShellCommand


def run_direct(
    program: str,
    arguments: Sequence[str] = (),
    options: RunOptions | None = None,
) -> ExecutionResult:
    """Run a program without a shell.

    Raises:
        InvocationError: EXECUTABLE_NOT_FOUND or SPAWN_FAILED
    """
    spec = CommandSpec(program=program, arguments=tuple(arguments))
    return RealCommandInvoker().run(spec, options)


def run_via_shell(
    command_line: str,
    shell_override: str | None = None,
    options: RunOptions | None = None,
) -> ExecutionResult:
    """Run a command line through a shell.

    Raises:
        InvocationError: SHELL_NOT_FOUND or SPAWN_FAILED
    """
    command = ShellCommand(command_line=command_line, shell_override=shell_override)
    return RealShellInvoker().run(command, options)
