"""Direct process execution interface.

Architecture:
- CommandInvoker: Abstract base class defining the interface
- RealCommandInvoker: Production implementation using subprocess
- DryRunCommandInvoker: Resolves but never spawns, for --dry-run
- FakeCommandInvoker (tests/fakes): In-memory results for unit tests
"""

from abc import ABC, abstractmethod

from procexec.core.process import ProcessHandle
from procexec.core.types import CommandSpec, ExecutionResult, RunOptions


class CommandInvoker(ABC):
    """Abstract interface for running a program without a shell.

    The program is resolved with the platform's executable search rules and
    every argument reaches the child as exactly one argv token. Shell builtins
    are unreachable through this interface by construction.
    """

    @abstractmethod
    def which(self, program: str, options: RunOptions | None = None) -> str | None:
        """Resolve a program to the executable path run() would launch.

        Args:
            program: Executable name or path
            options: Supplies the environment (PATH) and working directory

        Returns:
            Executable path, or None if lookup fails
        """
        ...

    @abstractmethod
    def run(self, spec: CommandSpec, options: RunOptions | None = None) -> ExecutionResult:
        """Run a program to completion and capture its outcome.

        Args:
            spec: Program and argument vector
            options: Capture, timeout, cwd and environment settings

        Returns:
            ExecutionResult; non-zero exit codes and timeouts are reported here

        Raises:
            InvocationError: EXECUTABLE_NOT_FOUND if lookup fails,
                SPAWN_FAILED if the OS refuses to start the process
        """
        ...

    @abstractmethod
    def start(self, spec: CommandSpec, options: RunOptions | None = None) -> ProcessHandle:
        """Start a program without waiting for it.

        Returns:
            ProcessHandle to poll, wait on or cancel

        Raises:
            InvocationError: Same conditions as run()
            DryRunError: If this invoker only describes commands (--dry-run)
        """
        ...
