"""Shared options and reporting for the `run` and `shell` commands."""

import os
import signal
from collections.abc import Callable
from pathlib import Path
from typing import Any, NoReturn

import click

from procexec.cli.json_output import emit_json, emit_json_error
from procexec.cli.json_schemas import ExecutionResponse
from procexec.cli.output import format_duration, machine_output, user_output
from procexec.core.config_store import ProcexecConfig
from procexec.core.errors import InvocationError, InvocationErrorKind
from procexec.core.types import ExecutionResult, RunOptions

# Exit statuses follow shell and coreutils `timeout` conventions.
EXIT_TIMEOUT = 124
EXIT_CANNOT_EXECUTE = 126
EXIT_NOT_FOUND = 127


def execution_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options shared by every command that launches a process."""
    decorators = [
        click.option(
            "--timeout-ms",
            type=click.IntRange(min=1),
            default=None,
            help="Kill the process after this many milliseconds.",
        ),
        click.option(
            "--cwd",
            "working_directory",
            type=click.Path(exists=True, file_okay=False, path_type=Path),
            default=None,
            help="Working directory for the process.",
        ),
        click.option(
            "--env",
            "env_pairs",
            multiple=True,
            metavar="KEY=VALUE",
            help="Set an environment variable (repeatable).",
        ),
        click.option(
            "--merge-streams",
            is_flag=True,
            help="Send stderr into stdout.",
        ),
        click.option(
            "--format",
            "output_format",
            type=click.Choice(["text", "json"]),
            default="text",
            help="Output format.",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def parse_env_pairs(env_pairs: tuple[str, ...]) -> dict[str, str] | None:
    """Parse repeated --env KEY=VALUE options.

    Raises:
        click.BadParameter: If a pair has no '=' or an empty key
    """
    if not env_pairs:
        return None
    env: dict[str, str] = {}
    for pair in env_pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{pair}'", param_hint="--env")
        env[key] = value
    return env


def build_run_options(
    config: ProcexecConfig,
    *,
    timeout_ms: int | None,
    working_directory: Path | None,
    env_pairs: tuple[str, ...],
    merge_streams: bool,
) -> RunOptions:
    """Combine command-line flags with configured defaults."""
    return RunOptions(
        merge_streams=merge_streams,
        timeout_ms=timeout_ms if timeout_ms is not None else config.default_timeout_ms,
        working_directory=working_directory,
        environment=parse_env_pairs(env_pairs),
    )


def exit_status_for(result: ExecutionResult) -> int:
    """Map a result to the exit status procexec itself should return."""
    if result.timed_out:
        return EXIT_TIMEOUT
    if result.exit_code < 0:
        # Killed by signal on POSIX; shells report 128 + signal number.
        return 128 + abs(result.exit_code)
    return result.exit_code


def exit_status_for_error(error: InvocationError) -> int:
    if error.kind == InvocationErrorKind.SPAWN_FAILED:
        return EXIT_CANNOT_EXECUTE
    return EXIT_NOT_FOUND


def fail_invocation(error: InvocationError, output_format: str) -> NoReturn:
    """Report an InvocationError and exit.

    Raises:
        SystemExit: Always
    """
    status = exit_status_for_error(error)
    if output_format == "json":
        emit_json_error(str(error), type(error).__name__, exit_code=status, kind=error.kind.value)
    user_output(click.style("Error: ", fg="red") + str(error))
    raise SystemExit(status)


def report_result(result: ExecutionResult, output_format: str) -> NoReturn:
    """Print a result and exit with the matching status.

    Raises:
        SystemExit: Always, with exit_status_for(result)
    """
    if output_format == "json":
        emit_json(ExecutionResponse.from_result(result).model_dump(mode="json"))
    else:
        if result.stdout:
            machine_output(_text(result.stdout), nl=False)
        if result.stderr:
            user_output(_text(result.stderr), nl=False)
        if result.timed_out:
            user_output(
                click.style("Timed out", fg="red")
                + f" after {format_duration(result.duration_seconds)}; process killed"
            )
        else:
            signal_name = describe_signal(result.exit_code)
            if signal_name is not None:
                user_output(click.style("Terminated by ", fg="red") + signal_name)
    raise SystemExit(exit_status_for(result))


def _text(output: str | bytes) -> str:
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


def describe_signal(exit_code: int) -> str | None:
    """Name the signal behind a negative exit code, if any (POSIX only)."""
    if exit_code >= 0 or os.name == "nt":
        return None
    try:
        return signal.Signals(-exit_code).name
    except ValueError:
        return None
