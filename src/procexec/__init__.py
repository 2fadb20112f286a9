"""Launch external processes directly or through a shell, and capture the outcome."""

from procexec.api import run_direct, run_via_shell
from procexec.core.command import CommandInvoker, RealCommandInvoker
from procexec.core.errors import (
    CommandFailedError,
    CommandTimeoutError,
    DryRunError,
    InvocationError,
    InvocationErrorKind,
)
from procexec.core.process import ProcessHandle
from procexec.core.shell import RealShellInvoker, ShellInvoker
from procexec.core.shells import KNOWN_SHELLS, ResolvedShell, ShellIdentity
from procexec.core.types import CommandSpec, ExecutionResult, RunOptions, ShellCommand

__all__ = [
    "KNOWN_SHELLS",
    "CommandFailedError",
    "CommandInvoker",
    "CommandSpec",
    "CommandTimeoutError",
    "DryRunError",
    "ExecutionResult",
    "InvocationError",
    "InvocationErrorKind",
    "ProcessHandle",
    "RealCommandInvoker",
    "RealShellInvoker",
    "ResolvedShell",
    "RunOptions",
    "ShellCommand",
    "ShellIdentity",
    "ShellInvoker",
    "run_direct",
    "run_via_shell",
]
