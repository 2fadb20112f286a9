"""Shell-mediated process execution."""

from procexec.core.shell.abc import ShellInvoker
from procexec.core.shell.dry_run import DryRunShellInvoker
from procexec.core.shell.real import RealShellInvoker

__all__ = [
    "DryRunShellInvoker",
    "RealShellInvoker",
    "ShellInvoker",
]
