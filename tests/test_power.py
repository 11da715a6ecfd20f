from __future__ import annotations

from typing import Any

import pytest

from shutdown_timer.system import power
from shutdown_timer.system.power import (
    PowerConfig,
    ShutdownError,
    default_shutdown_command,
    normalize_shutdown_command,
    shutdown_now,
)


def test_default_commands_per_platform() -> None:
    assert default_shutdown_command("win32") == ["shutdown", "/s", "/t", "0"]
    assert default_shutdown_command("darwin") == [
        "osascript",
        "-e",
        'tell application "System Events" to shut down',
    ]
    assert default_shutdown_command("linux") == ["shutdown", "-h", "now"]


def test_normalize_falls_back_to_default() -> None:
    assert normalize_shutdown_command(None, "linux") == ["shutdown", "-h", "now"]
    assert normalize_shutdown_command([], "linux") == ["shutdown", "-h", "now"]
    assert normalize_shutdown_command("poweroff", "linux") == ["shutdown", "-h", "now"]
    assert normalize_shutdown_command(["systemctl", 1], "linux") == ["systemctl", "1"]


def test_shutdown_now_spawns_without_waiting(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, Any] = {}

    def fake_popen(cmd: list[str], env: dict[str, str]) -> object:
        seen["cmd"] = cmd
        seen["env"] = env
        return object()

    monkeypatch.setattr(power.subprocess, "Popen", fake_popen)
    shutdown_now(PowerConfig(shutdown_command=["true"]), "test")
    assert seen["cmd"] == ["true"]
    assert seen["env"]["SHUTDOWN_TIMER_REASON"] == "test"


def test_launch_failure_raises_shutdown_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_popen(*_args: object, **_kw: object) -> object:
        raise FileNotFoundError("shutdown")

    monkeypatch.setattr(power.subprocess, "Popen", fake_popen)
    with pytest.raises(ShutdownError):
        shutdown_now(PowerConfig(shutdown_command=["shutdown", "-h", "now"]), "test")
