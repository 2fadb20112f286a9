"""Executable search and environment assembly.

Lookup follows the platform's own rules via shutil.which (PATHEXT on Windows,
executable bit on POSIX). No shell is ever consulted, so aliases, functions
and builtins are invisible here.
"""

import os
import shutil
from collections.abc import Mapping
from pathlib import Path


def build_environment(overrides: Mapping[str, str] | None) -> dict[str, str] | None:
    """Merge overrides on top of the inherited environment.

    Returns None when there are no overrides so the child inherits
    os.environ untouched.
    """
    if overrides is None:
        return None
    env = os.environ.copy()
    env.update({str(key): str(value) for key, value in overrides.items()})
    return env


def search_path(env: Mapping[str, str] | None) -> str | None:
    """Return the PATH string that lookup will use for this environment."""
    if env is None:
        return os.environ.get("PATH")
    return env.get("PATH")


def has_path_separator(program: str) -> bool:
    if os.sep in program:
        return True
    return os.altsep is not None and os.altsep in program


def find_executable(
    program: str,
    *,
    env: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> str | None:
    """Resolve a program name or path to a runnable file.

    Names are searched on the PATH of `env` (or the inherited PATH). A program
    containing a path separator is treated as a path, relative to `cwd` when
    not absolute, and is never searched on PATH.

    Args:
        program: Bare executable name or path
        env: Environment whose PATH is searched (None = inherited)
        cwd: Directory relative paths are resolved against

    Returns:
        Path to the executable, or None if nothing runnable was found
    """
    if not program:
        return None

    if has_path_separator(program):
        candidate = Path(program)
        if not candidate.is_absolute() and cwd is not None:
            candidate = cwd / candidate
        return shutil.which(str(candidate))

    return shutil.which(program, path=search_path(env))
