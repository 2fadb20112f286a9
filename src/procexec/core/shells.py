"""Shell identities and shell resolution.

A shell identity records how to ask a given shell to execute one string
(`sh -c`, `cmd /d /s /c`, `pwsh -Command`). Quoting and line-continuation
rules differ between identities; procexec passes command lines through
untouched and leaves those differences to the caller.

Per-shell caveats:
- POSIX shells (sh, bash, dash, zsh, ksh): backslash-newline continues a line.
- fish: backslash-newline also continues, but `$(...)`/`&&` support depends on
  the fish version.
- cmd: caret (^) escapes and continues lines; `%VAR%` expands.
- powershell/pwsh: backtick (`) continues lines; `$env:VAR` expands.
"""

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from procexec.core.errors import InvocationError
from procexec.core.executable import find_executable, has_path_separator


@dataclass(frozen=True)
class ShellIdentity:
    """How to launch one kind of shell.

    Attributes:
        name: Canonical identity name (e.g. "bash")
        executable: Executable name searched on PATH
        command_flags: Flags preceding the command-line argument
        family: Syntax family: "posix", "fish", "cmd" or "powershell"
    """

    name: str
    executable: str
    command_flags: tuple[str, ...]
    family: str


KNOWN_SHELLS: dict[str, ShellIdentity] = {
    "sh": ShellIdentity("sh", "sh", ("-c",), "posix"),
    "bash": ShellIdentity("bash", "bash", ("-c",), "posix"),
    "dash": ShellIdentity("dash", "dash", ("-c",), "posix"),
    "zsh": ShellIdentity("zsh", "zsh", ("-c",), "posix"),
    "ksh": ShellIdentity("ksh", "ksh", ("-c",), "posix"),
    "fish": ShellIdentity("fish", "fish", ("-c",), "fish"),
    "cmd": ShellIdentity("cmd", "cmd", ("/d", "/s", "/c"), "cmd"),
    "powershell": ShellIdentity(
        "powershell", "powershell", ("-NoProfile", "-NonInteractive", "-Command"), "powershell"
    ),
    "pwsh": ShellIdentity("pwsh", "pwsh", ("-NoProfile", "-NonInteractive", "-Command"), "powershell"),
}


@dataclass(frozen=True)
class ResolvedShell:
    """A shell identity bound to a concrete executable path."""

    identity: ShellIdentity
    path: str

    def build_invocation(self, command_line: str) -> list[str] | str:
        """Assemble the process invocation for a command line.

        For cmd on Windows this returns a single string in the same form
        CPython builds for shell=True, because cmd applies its own quote
        handling to the raw command line. Every other shell gets an argv list
        with the command line as one final token.
        """
        if self.identity.family == "cmd" and sys.platform == "win32":
            flags = " ".join(self.identity.command_flags)
            return f'"{self.path}" {flags} "{command_line}"'
        return [self.path, *self.identity.command_flags, command_line]


def identity_for(name: str) -> ShellIdentity:
    """Look up a shell identity by name or executable basename.

    Accepts "bash", "BASH.EXE", "/usr/bin/zsh", "C:\\Windows\\System32\\cmd.exe".

    Raises:
        InvocationError: SHELL_NOT_FOUND if the name does not match a known shell
    """
    stem = Path(name.replace("\\", "/")).name.lower()
    if stem.endswith(".exe"):
        stem = stem[: -len(".exe")]
    identity = KNOWN_SHELLS.get(stem)
    if identity is None:
        known = ", ".join(sorted(KNOWN_SHELLS))
        raise InvocationError.shell_not_found(
            name, detail=f"Unsupported shell '{name}'. Known shells: {known}"
        )
    return identity


def default_shell_spec(env: Mapping[str, str] | None = None) -> str:
    """Return the platform default shell, computed at call time.

    POSIX: /bin/sh (the shell CPython uses for shell=True).
    Windows: %COMSPEC%, falling back to cmd.exe.
    """
    if sys.platform == "win32":
        source = env if env is not None else os.environ
        return source.get("COMSPEC") or "cmd.exe"
    return "/bin/sh"


def resolve_shell(
    shell_override: str | None,
    *,
    env: Mapping[str, str] | None = None,
) -> ResolvedShell:
    """Resolve a shell override (or the platform default) to an executable.

    Args:
        shell_override: Known shell name, path to a shell, or None for default
        env: Environment whose PATH is searched (None = inherited)

    Returns:
        ResolvedShell with identity and absolute executable path

    Raises:
        InvocationError: SHELL_NOT_FOUND if the shell is unknown or not installed
    """
    spec = shell_override if shell_override is not None else default_shell_spec(env)
    identity = identity_for(spec)

    if has_path_separator(spec):
        path = find_executable(spec)
        # Fall back to a PATH search for the default shell on unusual systems
        # where /bin/sh does not exist (e.g. Android's /system/bin/sh).
        if path is None and shell_override is None:
            path = find_executable(identity.executable, env=env)
    else:
        path = find_executable(identity.executable, env=env)

    if path is None:
        raise InvocationError.shell_not_found(
            spec, detail=f"Looked for '{identity.executable}' executable for shell '{identity.name}'"
        )
    return ResolvedShell(identity=identity, path=path)


def available_shells(env: Mapping[str, str] | None = None) -> dict[str, str | None]:
    """Map each known shell name to its executable path, or None if missing."""
    return {
        name: find_executable(identity.executable, env=env)
        for name, identity in sorted(KNOWN_SHELLS.items())
    }
