from __future__ import annotations

import shutil
import subprocess

import pytest


@pytest.mark.skipif(shutil.which("ruff") is None, reason="ruff not installed")
def test_ruff_format_and_check() -> None:
    # A ruff on PATH that cannot run is treated as absent.
    try:
        subprocess.run(["ruff", "--version"], check=True, capture_output=True)  # noqa: S603
    except (OSError, subprocess.CalledProcessError):
        pytest.skip("ruff not runnable")

    subprocess.run(["ruff", "format", "--check", "src", "tests"], check=True)  # noqa: S603
    subprocess.run(["ruff", "check", "src", "tests"], check=True)  # noqa: S603
