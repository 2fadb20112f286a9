"""Direct (shell-free) process execution."""

from procexec.core.command.abc import CommandInvoker
from procexec.core.command.dry_run import DryRunCommandInvoker
from procexec.core.command.real import RealCommandInvoker

__all__ = [
    "CommandInvoker",
    "DryRunCommandInvoker",
    "RealCommandInvoker",
]
