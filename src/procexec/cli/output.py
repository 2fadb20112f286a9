"""Output routing for CLI commands.

user_output() is for humans and goes to stderr; machine_output() is for
data (captured child stdout, JSON) and goes to stdout, so piping procexec
into another program only ever carries data.
"""

import click


def user_output(message: str = "", nl: bool = True) -> None:
    """Print a human-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", nl: bool = True) -> None:
    """Print machine-consumable data to stdout."""
    click.echo(message, nl=nl)


def format_duration(seconds: float) -> str:
    """Format a duration for humans: "850ms", "12.3s", "2m 05s"."""
    if seconds < 1:
        return f"{int(seconds * 1000)}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m {secs:02d}s"
