"""Shells command implementation - lists known shells and where they live."""

import click
from rich.console import Console
from rich.table import Table

from procexec.cli.json_output import emit_json
from procexec.cli.json_schemas import ShellInfo, ShellsResponse
from procexec.core.context import ProcexecContext
from procexec.core.errors import InvocationError
from procexec.core.shells import KNOWN_SHELLS


def _default_shell_name(ctx: ProcexecContext) -> str | None:
    try:
        return ctx.shell_invoker.resolve(ctx.config.default_shell).identity.name
    except InvocationError:
        return None


def _lookup(ctx: ProcexecContext, name: str) -> str | None:
    try:
        return ctx.shell_invoker.resolve(name).path
    except InvocationError:
        return None


@click.command("shells")
@click.option("--json", "output_json", is_flag=True, help="Output JSON format")
@click.pass_obj
def shells_cmd(ctx: ProcexecContext, output_json: bool) -> None:
    """List supported shells, whether each is installed, and the default."""
    default_name = _default_shell_name(ctx)
    rows = [
        ShellInfo(
            name=name,
            family=identity.family,
            path=_lookup(ctx, name),
            is_default=name == default_name,
        )
        for name, identity in sorted(KNOWN_SHELLS.items())
    ]

    if output_json:
        emit_json(ShellsResponse(shells=rows).model_dump(mode="json"))
        return

    table = Table(box=None, show_header=True, header_style="bold")
    table.add_column("shell")
    table.add_column("family", style="dim")
    table.add_column("path")
    for row in rows:
        name = f"{row.name} (default)" if row.is_default else row.name
        path = row.path if row.path is not None else "[red]not installed[/red]"
        table.add_row(name, row.family, path)
    Console(soft_wrap=True).print(table)
