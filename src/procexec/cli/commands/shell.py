"""Shell command implementation - runs a command line through a shell."""

from pathlib import Path

import click

from procexec.cli.execution import (
    build_run_options,
    execution_options,
    fail_invocation,
    report_result,
)
from procexec.cli.json_output import json_error_boundary
from procexec.core.context import ProcexecContext
from procexec.core.errors import InvocationError
from procexec.core.types import ShellCommand


@click.command("shell")
@execution_options
@click.option(
    "--shell",
    "shell_override",
    default=None,
    help="Shell name (sh, bash, zsh, cmd, pwsh, ...) or path. Defaults to config, then platform.",
)
@click.argument("command_line")
@click.pass_obj
@json_error_boundary
def shell_cmd(
    ctx: ProcexecContext,
    command_line: str,
    shell_override: str | None,
    timeout_ms: int | None,
    working_directory: Path | None,
    env_pairs: tuple[str, ...],
    merge_streams: bool,
    output_format: str,
) -> None:
    """Run COMMAND_LINE through a shell, exactly as written.

    Quote COMMAND_LINE as a single argument. procexec never rewrites it, so
    line continuations and quoting must follow the chosen shell's rules.
    """
    options = build_run_options(
        ctx.config,
        timeout_ms=timeout_ms,
        working_directory=working_directory,
        env_pairs=env_pairs,
        merge_streams=merge_streams,
    )
    shell = shell_override if shell_override is not None else ctx.config.default_shell
    command = ShellCommand(command_line=command_line, shell_override=shell)

    try:
        result = ctx.shell_invoker.run(command, options)
    except InvocationError as e:
        fail_invocation(e, output_format)

    report_result(result, output_format)
