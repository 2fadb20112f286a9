"""Shell-mediated execution interface.

Architecture:
- ShellInvoker: Abstract base class defining the interface
- RealShellInvoker: Production implementation using subprocess
- DryRunShellInvoker: Resolves the shell but never spawns, for --dry-run
- FakeShellInvoker (tests/fakes): In-memory results for unit tests
"""

from abc import ABC, abstractmethod

from procexec.core.process import ProcessHandle
from procexec.core.shells import ResolvedShell
from procexec.core.types import ExecutionResult, RunOptions, ShellCommand


class ShellInvoker(ABC):
    """Abstract interface for running a command line through a shell.

    The command line is handed to the shell's "execute a string" flag as a
    single argument, so builtins, pipes, redirections and variable expansion
    behave as they would at a prompt. Syntax differences between shells
    (quoting, line continuation) are the caller's concern.
    """

    @abstractmethod
    def resolve(
        self, shell_override: str | None, options: RunOptions | None = None
    ) -> ResolvedShell:
        """Resolve which shell executable would run a command.

        Args:
            shell_override: Shell name or path, or None for the platform default
            options: Supplies the environment (PATH) used for lookup

        Raises:
            InvocationError: SHELL_NOT_FOUND if the shell is unknown or not installed
        """
        ...

    @abstractmethod
    def run(self, command: ShellCommand, options: RunOptions | None = None) -> ExecutionResult:
        """Run a command line to completion and capture its outcome.

        Args:
            command: Command line and optional shell override
            options: Capture, timeout, cwd and environment settings

        Returns:
            ExecutionResult; the shell's non-zero exit is reported here

        Raises:
            InvocationError: SHELL_NOT_FOUND or SPAWN_FAILED
        """
        ...

    @abstractmethod
    def start(self, command: ShellCommand, options: RunOptions | None = None) -> ProcessHandle:
        """Start a command line without waiting for it.

        Returns:
            ProcessHandle to poll, wait on or cancel

        Raises:
            InvocationError: Same conditions as run()
            DryRunError: If this invoker only describes commands (--dry-run)
        """
        ...
