"""Value types shared by the direct and shell invokers.

All types are frozen dataclasses: specs describe what to launch, RunOptions
describe how, and ExecutionResult is the immutable outcome handed back to the
caller.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from procexec.core.errors import CommandFailedError, CommandTimeoutError


@dataclass(frozen=True)
class CommandSpec:
    """A program plus its argument vector, launched without a shell.

    Attributes:
        program: Executable name (searched on PATH) or path
        arguments: Ordered argument tokens, each delivered as one argv entry
    """

    program: str
    arguments: tuple[str, ...] = ()

    def argv(self) -> list[str]:
        """Return the argument vector as it will reach the child process."""
        return [self.program, *self.arguments]


@dataclass(frozen=True)
class ShellCommand:
    """A command-line string handed verbatim to a shell.

    Attributes:
        command_line: Shell syntax, never parsed or re-tokenized by procexec
        shell_override: Shell name (e.g. "bash") or path; None for platform default
    """

    command_line: str
    shell_override: str | None = None


@dataclass(frozen=True)
class RunOptions:
    """How to launch a process and what to capture.

    Attributes:
        capture_stdout: Capture stdout (otherwise inherit the parent's stream)
        capture_stderr: Capture stderr (otherwise inherit the parent's stream)
        merge_streams: Send stderr into stdout; ordering is best-effort
        timeout_ms: Kill the child after this many milliseconds
        working_directory: Directory to run in (None = current directory)
        environment: Variables overriding/extending the inherited environment
        text: Decode captured output to str using `encoding`
        encoding: Encoding used when `text` is True
        inherit_stdin: Share the parent's stdin (otherwise /dev/null)
    """

    capture_stdout: bool = True
    capture_stderr: bool = True
    merge_streams: bool = False
    timeout_ms: int | None = None
    working_directory: Path | None = None
    environment: Mapping[str, str] | None = None
    text: bool = True
    encoding: str = "utf-8"
    inherit_stdin: bool = False

    def __post_init__(self) -> None:
        if self.timeout_ms is not None and self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {self.timeout_ms}")

    @property
    def timeout_seconds(self) -> float | None:
        if self.timeout_ms is None:
            return None
        return self.timeout_ms / 1000.0


DEFAULT_OPTIONS = RunOptions()


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of a process that was started.

    A non-zero exit code is data, not an error: callers decide what it means.
    Use ensure_success() to turn failure into an exception.

    Attributes:
        exit_code: Process exit status (negative signal number on POSIX kills)
        stdout: Captured stdout ("" or b"" when not captured)
        stderr: Captured stderr ("" or b"" when not captured or merged)
        timed_out: True if the child was killed after timeout_ms elapsed
        argv: Exact argument vector (or cmd.exe command string) launched
        pid: Process id of the child
        duration_seconds: Wall-clock time from spawn to reap
    """

    exit_code: int
    stdout: str | bytes
    stderr: str | bytes
    timed_out: bool = False
    argv: tuple[str, ...] = field(default=())
    pid: int = 0
    duration_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return self.exit_code == 0 and not self.timed_out

    def ensure_success(self, operation_context: str) -> "ExecutionResult":
        """Return self if the process succeeded, otherwise raise.

        Args:
            operation_context: Human-readable description of the operation,
                used as "Failed to <operation_context>" in the error message

        Returns:
            This result, unchanged

        Raises:
            CommandTimeoutError: If the child was killed on timeout
            CommandFailedError: If the child exited non-zero
        """
        if self.timed_out:
            raise CommandTimeoutError(
                operation_context,
                argv=self.argv,
                stdout=_as_text(self.stdout),
                stderr=_as_text(self.stderr),
                duration_seconds=self.duration_seconds,
            )
        if self.exit_code != 0:
            raise CommandFailedError(
                operation_context,
                argv=self.argv,
                exit_code=self.exit_code,
                stdout=_as_text(self.stdout),
                stderr=_as_text(self.stderr),
            )
        return self


def _as_text(output: str | bytes) -> str:
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output
