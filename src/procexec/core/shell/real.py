"""Production ShellInvoker using subprocess."""

import logging

from procexec.core.executable import build_environment
from procexec.core.process import ProcessHandle, spawn
from procexec.core.shell.abc import ShellInvoker
from procexec.core.shells import ResolvedShell, resolve_shell
from procexec.core.types import DEFAULT_OPTIONS, ExecutionResult, RunOptions, ShellCommand

logger = logging.getLogger(__name__)


class RealShellInvoker(ShellInvoker):
    """Runs command lines as `<shell> <execute-flag> <command_line>`.

    The shell is resolved on every call; there is no cached or process-wide
    shell choice. Equivalent to subprocess's shell=True for the default shell,
    but with explicit shell selection and process-group cleanup on timeout.
    """

    def resolve(
        self, shell_override: str | None, options: RunOptions | None = None
    ) -> ResolvedShell:
        opts = options or DEFAULT_OPTIONS
        return resolve_shell(shell_override, env=build_environment(opts.environment))

    def run(self, command: ShellCommand, options: RunOptions | None = None) -> ExecutionResult:
        return self.start(command, options).result()

    def start(self, command: ShellCommand, options: RunOptions | None = None) -> ProcessHandle:
        opts = options or DEFAULT_OPTIONS
        env = build_environment(opts.environment)
        shell = resolve_shell(command.shell_override, env=env)
        logger.debug("Using %s shell at %s", shell.identity.name, shell.path)

        return spawn(
            shell.build_invocation(command.command_line),
            options=opts,
            env=env,
            label=shell.identity.name,
        )
