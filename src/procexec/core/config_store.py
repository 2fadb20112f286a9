"""Configuration data structures and loading.

Provides immutable config data loaded from ~/.procexec/config.toml. The
library API never reads this file; only the CLI entry point does, and it
passes the values down explicitly.
"""

import os
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import tomlkit

CONFIG_KEYS = ("default_shell", "default_timeout_ms")


@dataclass(frozen=True)
class ProcexecConfig:
    """Immutable CLI configuration.

    Attributes:
        default_shell: Shell used by `procexec shell` when --shell is omitted
        default_timeout_ms: Timeout used when --timeout-ms is omitted
    """

    default_shell: str | None = None
    default_timeout_ms: int | None = None


def parse_config(data: dict[str, object], source: Path) -> ProcexecConfig:
    """Validate raw TOML data into a ProcexecConfig.

    Raises:
        ValueError: If a key has the wrong type or an unknown key is present
    """
    unknown = sorted(set(data) - set(CONFIG_KEYS))
    if unknown:
        raise ValueError(f"Unknown config keys in {source}: {', '.join(unknown)}")

    shell = data.get("default_shell")
    if shell is not None and not isinstance(shell, str):
        raise ValueError(f"'default_shell' must be a string in {source}")

    timeout = data.get("default_timeout_ms")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
            raise ValueError(f"'default_timeout_ms' must be a positive integer in {source}")

    return ProcexecConfig(default_shell=shell, default_timeout_ms=timeout)


class ConfigStore(ABC):
    """Abstract interface for config access.

    Enables in-memory implementations for tests without touching the
    filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if a config file exists."""
        ...

    @abstractmethod
    def load(self) -> ProcexecConfig:
        """Load config, returning defaults when no config exists.

        Raises:
            ValueError: If the config is malformed
        """
        ...

    @abstractmethod
    def save(self, config: ProcexecConfig) -> None:
        """Persist config."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the config file (for messages and debugging)."""
        ...


class RealConfigStore(ConfigStore):
    """Production implementation that reads/writes ~/.procexec/config.toml."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> ProcexecConfig:
        config_path = self.path()
        if not config_path.exists():
            return ProcexecConfig()

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}") from e
        return parse_config(data, config_path)

    def save(self, config: ProcexecConfig) -> None:
        """Write config, preserving comments and formatting of an existing file.

        Raises:
            PermissionError: If the directory or file cannot be written
        """
        config_path = self.path()
        parent = config_path.parent

        if parent.exists() and not os.access(parent, os.W_OK):
            raise PermissionError(
                f"Cannot write to directory: {parent}\n"
                f"The directory exists but is not writable."
            )
        parent.mkdir(parents=True, exist_ok=True)

        if config_path.exists():
            doc = tomlkit.parse(config_path.read_text(encoding="utf-8"))
        else:
            doc = tomlkit.document()
            doc.add(tomlkit.comment("procexec configuration"))

        for key in CONFIG_KEYS:
            value = getattr(config, key)
            if value is None:
                if key in doc:
                    del doc[key]
            else:
                doc[key] = value

        config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")

    def path(self) -> Path:
        if self._config_path is not None:
            return self._config_path
        return Path.home() / ".procexec" / "config.toml"


class InMemoryConfigStore(ConfigStore):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: ProcexecConfig | None = None) -> None:
        """Initialize in-memory store.

        Args:
            config: Initial config state (None = no config saved yet)
        """
        self._config = config

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> ProcexecConfig:
        if self._config is None:
            return ProcexecConfig()
        return self._config

    def save(self, config: ProcexecConfig) -> None:
        self._config = config

    def path(self) -> Path:
        return Path("/fake/procexec/config.toml")
