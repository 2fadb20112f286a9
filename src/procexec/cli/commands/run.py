"""Run command implementation - launches a program directly, without a shell."""

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
from procexec.core.types import CommandSpec


@click.command(
    "run",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@execution_options
@click.argument("program")
@click.argument("arguments", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
@json_error_boundary
def run_cmd(
    ctx: ProcexecContext,
    program: str,
    arguments: tuple[str, ...],
    timeout_ms: int | None,
    working_directory: Path | None,
    env_pairs: tuple[str, ...],
    merge_streams: bool,
    output_format: str,
) -> None:
    """Run PROGRAM with ARGUMENTS, each passed as one token.

    No shell is involved: builtins, aliases, pipes and globs are not
    available. Exits with the program's exit status (124 on timeout,
    127 if PROGRAM is not found).
    """
    options = build_run_options(
        ctx.config,
        timeout_ms=timeout_ms,
        working_directory=working_directory,
        env_pairs=env_pairs,
        merge_streams=merge_streams,
    )
    spec = CommandSpec(program=program, arguments=arguments)

    try:
        result = ctx.command_invoker.run(spec, options)
    except InvocationError as e:
        fail_invocation(e, output_format)

    report_result(result, output_format)
