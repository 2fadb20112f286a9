"""Production CommandInvoker using subprocess."""

import logging

from procexec.core.command.abc import CommandInvoker
from procexec.core.errors import InvocationError
from procexec.core.executable import build_environment, find_executable, search_path
from procexec.core.process import ProcessHandle, spawn
from procexec.core.types import DEFAULT_OPTIONS, CommandSpec, ExecutionResult, RunOptions

logger = logging.getLogger(__name__)


class RealCommandInvoker(CommandInvoker):
    """Runs programs directly via subprocess.Popen with an argv list.

    Lookup happens up front with shutil.which against the child's effective
    PATH, so a missing program is reported as EXECUTABLE_NOT_FOUND before any
    process is created. The resolved path is passed as `executable` while
    argv[0] stays the name the caller gave.
    """

    def which(self, program: str, options: RunOptions | None = None) -> str | None:
        opts = options or DEFAULT_OPTIONS
        env = build_environment(opts.environment)
        return find_executable(program, env=env, cwd=opts.working_directory)

    def run(self, spec: CommandSpec, options: RunOptions | None = None) -> ExecutionResult:
        return self.start(spec, options).result()

    def start(self, spec: CommandSpec, options: RunOptions | None = None) -> ProcessHandle:
        opts = options or DEFAULT_OPTIONS
        env = build_environment(opts.environment)

        resolved = find_executable(spec.program, env=env, cwd=opts.working_directory)
        if resolved is None:
            logger.debug("Lookup failed for %r", spec.program)
            raise InvocationError.executable_not_found(spec.program, search_path(env))

        logger.debug("Resolved %r to %s", spec.program, resolved)
        return spawn(
            spec.argv(),
            options=opts,
            env=env,
            label=spec.program,
            executable=resolved,
        )
