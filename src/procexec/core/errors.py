"""Error taxonomy for process invocation.

InvocationError covers failures to locate or start a process. A process that
starts and exits non-zero is never an InvocationError; callers who want that
as an exception use ExecutionResult.ensure_success(), which raises
CommandFailedError or CommandTimeoutError.
"""

from collections.abc import Sequence
from enum import Enum


class InvocationErrorKind(Enum):
    """Why a process could not be launched."""

    EXECUTABLE_NOT_FOUND = "executable_not_found"
    SHELL_NOT_FOUND = "shell_not_found"
    SPAWN_FAILED = "spawn_failed"


class InvocationError(Exception):
    """The target executable or shell could not be located or started.

    Attributes:
        kind: Which stage failed
        program: Program or shell that was requested
    """

    def __init__(self, kind: InvocationErrorKind, program: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.program = program

    @classmethod
    def executable_not_found(cls, program: str, search_path: str | None) -> "InvocationError":
        msg = f"Executable not found: {program}"
        if search_path is not None:
            msg += f"\nSearched PATH: {search_path}"
        return cls(InvocationErrorKind.EXECUTABLE_NOT_FOUND, program, msg)

    @classmethod
    def shell_not_found(cls, shell: str, detail: str | None = None) -> "InvocationError":
        msg = f"Shell not found: {shell}"
        if detail:
            msg += f"\n{detail}"
        return cls(InvocationErrorKind.SHELL_NOT_FOUND, shell, msg)

    @classmethod
    def spawn_failed(cls, program: str, error: OSError) -> "InvocationError":
        msg = f"Failed to start {program}: {error.strerror or error}"
        return cls(InvocationErrorKind.SPAWN_FAILED, program, msg)


def _format_command(argv: Sequence[str]) -> str:
    return " ".join(str(arg) for arg in argv)


class CommandFailedError(RuntimeError):
    """A started process exited with a non-zero status."""

    def __init__(
        self,
        operation_context: str,
        *,
        argv: Sequence[str],
        exit_code: int,
        stdout: str,
        stderr: str,
    ) -> None:
        error_msg = f"Failed to {operation_context}"
        error_msg += f"\nCommand: {_format_command(argv)}"
        error_msg += f"\nExit code: {exit_code}"

        stdout_stripped = stdout.strip()
        if stdout_stripped:
            error_msg += f"\nstdout: {stdout_stripped}"

        stderr_stripped = stderr.strip()
        if stderr_stripped:
            error_msg += f"\nstderr: {stderr_stripped}"

        super().__init__(error_msg)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


class CommandTimeoutError(RuntimeError):
    """A started process was killed because it exceeded its timeout."""

    def __init__(
        self,
        operation_context: str,
        *,
        argv: Sequence[str],
        stdout: str,
        stderr: str,
        duration_seconds: float,
    ) -> None:
        error_msg = f"Timed out trying to {operation_context}"
        error_msg += f"\nCommand: {_format_command(argv)}"
        error_msg += f"\nKilled after: {duration_seconds:.1f}s"

        stderr_stripped = stderr.strip()
        if stderr_stripped:
            error_msg += f"\nstderr: {stderr_stripped}"

        super().__init__(error_msg)
        self.stdout = stdout
        self.stderr = stderr


class DryRunError(RuntimeError):
    """An operation that needs a live process was requested in dry-run mode.

    Dry-run invokers can describe what run() would launch, but there is no
    process to hand back from start().
    """
