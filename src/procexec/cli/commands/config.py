"""Config command group - inspect and update ~/.procexec/config.toml."""

from dataclasses import replace

import click

from procexec.cli.output import machine_output, user_output
from procexec.core.config_store import CONFIG_KEYS, ProcexecConfig
from procexec.core.context import ProcexecContext
from procexec.core.errors import InvocationError
from procexec.core.shells import identity_for


@click.group("config")
def config_group() -> None:
    """Manage procexec configuration."""


@config_group.command("show")
@click.pass_obj
def show_cmd(ctx: ProcexecContext) -> None:
    """Print every config key and its current value."""
    config = ctx.config_store.load()
    for key in CONFIG_KEYS:
        value = getattr(config, key)
        machine_output(f"{key} = {value if value is not None else '(unset)'}")


def _updated_config(config: ProcexecConfig, key: str, value: str) -> ProcexecConfig:
    """Return config with one key changed; an empty value unsets the key.

    Raises:
        SystemExit: If the key is unknown or the value invalid
    """
    match key:
        case "default_shell":
            if not value:
                return replace(config, default_shell=None)
            try:
                identity_for(value)
            except InvocationError as e:
                user_output(click.style("Error: ", fg="red") + str(e))
                raise SystemExit(1) from e
            return replace(config, default_shell=value)
        case "default_timeout_ms":
            if not value:
                return replace(config, default_timeout_ms=None)
            if not value.isdigit() or int(value) <= 0:
                user_output(
                    click.style("Error: ", fg="red")
                    + f"default_timeout_ms must be a positive integer, got '{value}'"
                )
                raise SystemExit(1)
            return replace(config, default_timeout_ms=int(value))
        case _:
            user_output(
                click.style("Error: ", fg="red")
                + f"Unknown config key '{key}'. Valid keys: {', '.join(CONFIG_KEYS)}"
            )
            raise SystemExit(1)


@config_group.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_obj
def set_cmd(ctx: ProcexecContext, key: str, value: str) -> None:
    """Set KEY to VALUE (pass "" to unset)."""
    updated = _updated_config(ctx.config_store.load(), key, value)
    ctx.config_store.save(updated)
    user_output(f"Updated {key} in {ctx.config_store.path()}")
