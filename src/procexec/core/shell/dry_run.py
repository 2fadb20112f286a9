"""Dry-run ShellInvoker wrapper."""

from procexec.cli.output import user_output
from procexec.core.errors import DryRunError
from procexec.core.process import ProcessHandle
from procexec.core.shell.abc import ShellInvoker
from procexec.core.shells import ResolvedShell
from procexec.core.types import DEFAULT_OPTIONS, ExecutionResult, RunOptions, ShellCommand


class DryRunShellInvoker(ShellInvoker):
    """Wrapper that resolves the shell and prints the command line instead of running it.

    Usage:
        dry = DryRunShellInvoker(RealShellInvoker())

        # Prints "[DRY RUN] Would run via bash (/bin/bash): ls | wc -l"
        dry.run(ShellCommand("ls | wc -l", shell_override="bash"))
    """

    def __init__(self, wrapped: ShellInvoker) -> None:
        self._wrapped = wrapped

    def resolve(
        self, shell_override: str | None, options: RunOptions | None = None
    ) -> ResolvedShell:
        return self._wrapped.resolve(shell_override, options)

    def run(self, command: ShellCommand, options: RunOptions | None = None) -> ExecutionResult:
        shell = self._wrapped.resolve(command.shell_override, options)
        user_output(
            f"[DRY RUN] Would run via {shell.identity.name} ({shell.path}): {command.command_line}"
        )
        invocation = shell.build_invocation(command.command_line)
        argv = tuple(invocation) if isinstance(invocation, list) else (invocation,)
        empty = "" if (options or DEFAULT_OPTIONS).text else b""
        return ExecutionResult(exit_code=0, stdout=empty, stderr=empty, argv=argv)

    def start(self, command: ShellCommand, options: RunOptions | None = None) -> ProcessHandle:
        raise DryRunError(
            f"Cannot start {command.command_line!r} in dry-run mode; nothing is spawned"
        )
