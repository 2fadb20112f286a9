"""Which command implementation - shows what direct lookup resolves a program to."""

import click

from procexec.cli.json_output import emit_json
from procexec.cli.json_schemas import WhichResponse
from procexec.cli.output import machine_output, user_output
from procexec.core.context import ProcexecContext


@click.command("which")
@click.argument("program")
@click.option("--json", "output_json", is_flag=True, help="Output JSON format")
@click.pass_obj
def which_cmd(ctx: ProcexecContext, program: str, output_json: bool) -> None:
    """Print the executable `procexec run PROGRAM` would launch.

    Only real executables on PATH are found; shell builtins, aliases and
    functions are not, which is why `run` cannot reach them.
    """
    path = ctx.command_invoker.which(program)

    if output_json:
        emit_json(WhichResponse(program=program, path=path).model_dump(mode="json"))
    elif path is not None:
        machine_output(path)
    else:
        user_output(f"{program}: not found on PATH (use `procexec shell` for builtins)")

    if path is None:
        raise SystemExit(1)
