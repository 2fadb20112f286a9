import logging
import os

import click

from procexec.cli.commands.config import config_group
from procexec.cli.commands.run import run_cmd
from procexec.cli.commands.shell import shell_cmd
from procexec.cli.commands.shells import shells_cmd
from procexec.cli.commands.which import which_cmd
from procexec.cli.output import user_output
from procexec.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

# Enable debug logging if PROCEXEC_DEBUG environment variable is set
if os.environ.get("PROCEXEC_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="procexec")
@click.option("--dry-run", is_flag=True, help="Print what would run without starting anything.")
@click.pass_context
def cli(ctx: click.Context, dry_run: bool) -> None:
    """Run programs directly or through a shell and report their outcome."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context(dry_run=dry_run)
        except ValueError as e:
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from e


cli.add_command(config_group)
cli.add_command(run_cmd)
cli.add_command(shell_cmd)
cli.add_command(shells_cmd)
cli.add_command(which_cmd)


def main() -> None:
    """CLI entry point used by the `procexec` console script."""
    cli()
