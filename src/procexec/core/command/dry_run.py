"""Dry-run CommandInvoker wrapper.

Lookup is delegated to the wrapped invoker so missing executables are still
reported; the process itself is never started.
"""

import shlex

from procexec.cli.output import user_output
from procexec.core.command.abc import CommandInvoker
from procexec.core.errors import DryRunError, InvocationError
from procexec.core.process import ProcessHandle
from procexec.core.types import DEFAULT_OPTIONS, CommandSpec, ExecutionResult, RunOptions


class DryRunCommandInvoker(CommandInvoker):
    """Wrapper that prints what would run instead of running it.

    Usage:
        real = RealCommandInvoker()
        dry = DryRunCommandInvoker(real)

        # Prints "[DRY RUN] Would run: make test" and returns exit code 0
        dry.run(CommandSpec("make", ("test",)))
    """

    def __init__(self, wrapped: CommandInvoker) -> None:
        """Create a dry-run wrapper around a CommandInvoker.

        Args:
            wrapped: Invoker used for executable lookup (usually RealCommandInvoker)
        """
        self._wrapped = wrapped

    def which(self, program: str, options: RunOptions | None = None) -> str | None:
        return self._wrapped.which(program, options)

    def run(self, spec: CommandSpec, options: RunOptions | None = None) -> ExecutionResult:
        if self._wrapped.which(spec.program, options) is None:
            raise InvocationError.executable_not_found(spec.program, None)
        user_output(f"[DRY RUN] Would run: {shlex.join(spec.argv())}")
        empty = "" if (options or DEFAULT_OPTIONS).text else b""
        return ExecutionResult(exit_code=0, stdout=empty, stderr=empty, argv=tuple(spec.argv()))

    def start(self, spec: CommandSpec, options: RunOptions | None = None) -> ProcessHandle:
        raise DryRunError(
            f"Cannot start {spec.program} in dry-run mode; nothing is spawned"
        )
