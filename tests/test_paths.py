from __future__ import annotations

from pathlib import Path

import pytest

from shutdown_timer.paths import default_config_path, resolve_config_path


def test_default_config_path_uses_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_config_path() == tmp_path / "shutdown-timer" / "config.yaml"


def test_default_config_path_falls_back_to_home(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    assert default_config_path() == Path.home() / ".config" / "shutdown-timer" / "config.yaml"


def test_missing_default_config_resolves_to_none(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert resolve_config_path(None) is None


def test_existing_default_config_is_picked_up(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    p = tmp_path / "shutdown-timer" / "config.yaml"
    p.parent.mkdir()
    p.write_text("{}\n", encoding="utf-8")
    assert resolve_config_path(None) == p


def test_explicit_path_wins(tmp_path: Path) -> None:
    assert resolve_config_path(str(tmp_path / "x.yaml")) == tmp_path / "x.yaml"
