from __future__ import annotations

import compileall
import importlib
from pathlib import Path


def test_compileall_src() -> None:
    src = Path(__file__).resolve().parents[1] / "src"
    ok = compileall.compile_dir(str(src), quiet=1)
    assert ok


def test_import_packages() -> None:
    for name in (
        "shutdown_timer",
        "shutdown_timer.cli",
        "shutdown_timer.config",
        "shutdown_timer.controller",
        "shutdown_timer.dbus_client",
        "shutdown_timer.scheduler",
        "shutdown_timer.system.power",
        "shutdown_timer.timeparse",
        "shutdown_timer_ui",
        "shutdown_timer_ui.cli",
        "shutdown_timer_ui.model",
    ):
        importlib.import_module(name)
