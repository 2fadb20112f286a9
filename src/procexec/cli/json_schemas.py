"""Pydantic models for JSON output schemas.

These models define the `--format json` output of procexec commands and
validate it at runtime before it is printed.
"""

from pydantic import BaseModel, ConfigDict, Field

from procexec.core.types import ExecutionResult


class ExecutionResponse(BaseModel):
    """JSON response schema for `procexec run` and `procexec shell`.

    Attributes:
        argv: Argument vector (or cmd.exe command string) that was launched
        exit_code: Child exit status
        stdout: Captured stdout, decoded as text
        stderr: Captured stderr, decoded as text
        timed_out: Whether the child was killed on timeout
        pid: Child process id (0 in dry-run mode)
        duration_seconds: Wall-clock run time
    """

    model_config = ConfigDict(strict=True)

    argv: list[str]
    exit_code: int
    stdout: str
    stderr: str
    timed_out: bool
    pid: int = Field(ge=0)
    duration_seconds: float = Field(ge=0)

    @classmethod
    def from_result(cls, result: ExecutionResult) -> "ExecutionResponse":
        return cls(
            argv=list(result.argv),
            exit_code=result.exit_code,
            stdout=_text(result.stdout),
            stderr=_text(result.stderr),
            timed_out=result.timed_out,
            pid=result.pid,
            duration_seconds=result.duration_seconds,
        )


class WhichResponse(BaseModel):
    """JSON response schema for `procexec which`."""

    model_config = ConfigDict(strict=True)

    program: str
    path: str | None


class ShellInfo(BaseModel):
    """One row of `procexec shells --json`.

    Attributes:
        name: Shell identity name
        family: Syntax family ("posix", "fish", "cmd", "powershell")
        path: Executable path, or None if not installed
        is_default: Whether this shell would run when no override is given
    """

    model_config = ConfigDict(strict=True)

    name: str
    family: str
    path: str | None
    is_default: bool


class ShellsResponse(BaseModel):
    """JSON response schema for `procexec shells`."""

    model_config = ConfigDict(strict=True)

    shells: list[ShellInfo]


def _text(output: str | bytes) -> str:
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output
