"""Tests for config parsing and the file/in-memory config stores."""

from pathlib import Path

import pytest

from procexec.core.config_store import (
    InMemoryConfigStore,
    ProcexecConfig,
    RealConfigStore,
    parse_config,
)


def test_parse_config_accepts_known_keys() -> None:
    config = parse_config({"default_shell": "bash", "default_timeout_ms": 5000}, Path("c.toml"))

    assert config == ProcexecConfig(default_shell="bash", default_timeout_ms=5000)


def test_parse_config_empty_gives_defaults() -> None:
    assert parse_config({}, Path("c.toml")) == ProcexecConfig()


def test_parse_config_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="Unknown config keys in c.toml: shell"):
        parse_config({"shell": "bash"}, Path("c.toml"))


@pytest.mark.parametrize("timeout", [0, -5, True, "100", 1.5])
def test_parse_config_rejects_bad_timeouts(timeout: object) -> None:
    with pytest.raises(ValueError, match="default_timeout_ms"):
        parse_config({"default_timeout_ms": timeout}, Path("c.toml"))


def test_parse_config_rejects_non_string_shell() -> None:
    with pytest.raises(ValueError, match="default_shell"):
        parse_config({"default_shell": 3}, Path("c.toml"))


def test_real_store_missing_file_loads_defaults(tmp_path: Path) -> None:
    store = RealConfigStore(tmp_path / "config.toml")

    assert not store.exists()
    assert store.load() == ProcexecConfig()


def test_real_store_save_then_load(tmp_path: Path) -> None:
    config_path = tmp_path / "nested" / "config.toml"
    store = RealConfigStore(config_path)

    store.save(ProcexecConfig(default_shell="zsh", default_timeout_ms=2500))

    assert store.exists()
    assert store.load() == ProcexecConfig(default_shell="zsh", default_timeout_ms=2500)
    assert "procexec configuration" in config_path.read_text(encoding="utf-8")


def test_real_store_save_preserves_comments_and_removes_unset_keys(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        "# my settings\ndefault_shell = \"bash\" # interactive shell\ndefault_timeout_ms = 100\n",
        encoding="utf-8",
    )
    store = RealConfigStore(config_path)

    store.save(ProcexecConfig(default_shell="bash", default_timeout_ms=None))

    content = config_path.read_text(encoding="utf-8")
    assert "# my settings" in content
    assert "default_timeout_ms" not in content
    assert store.load() == ProcexecConfig(default_shell="bash")


def test_real_store_invalid_toml_raises_value_error(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("default_shell = [unclosed\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid TOML"):
        RealConfigStore(config_path).load()


def test_real_store_default_path_is_under_home(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

    assert RealConfigStore().path() == tmp_path / ".procexec" / "config.toml"


def test_in_memory_store_round_trip() -> None:
    store = InMemoryConfigStore()

    assert not store.exists()
    assert store.load() == ProcexecConfig()

    store.save(ProcexecConfig(default_shell="fish"))

    assert store.exists()
    assert store.load().default_shell == "fish"
