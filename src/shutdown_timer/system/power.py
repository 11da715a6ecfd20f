from __future__ import annotations

import logging
import os
import subprocess
import sys
from dataclasses import dataclass

log = logging.getLogger(__name__)


class ShutdownError(RuntimeError):
    pass


@dataclass(frozen=True)
class PowerConfig:
    shutdown_command: list[str]


def default_shutdown_command(platform: str | None = None) -> list[str]:
    platform = sys.platform if platform is None else platform
    if platform.startswith("win"):
        return ["shutdown", "/s", "/t", "0"]
    if platform == "darwin":
        return ["osascript", "-e", 'tell application "System Events" to shut down']
    return ["shutdown", "-h", "now"]


def normalize_shutdown_command(raw: object, platform: str | None = None) -> list[str]:
    """Return the host default if config is missing or invalid."""

    if not isinstance(raw, list) or not raw:
        return default_shutdown_command(platform)
    return [str(x) for x in raw]


def shutdown_now(cfg: PowerConfig, reason: str) -> None:
    """Start the shutdown command without waiting for it.

    Raises ShutdownError if the command could not be spawned. Nothing is
    retried; once it is running the process is expected to go down with the
    machine.
    """

    env = os.environ.copy()
    env["SHUTDOWN_TIMER_REASON"] = reason
    try:
        subprocess.Popen(list(cfg.shutdown_command), env=env)  # noqa: S603
    except OSError as e:
        log.error("Failed to launch shutdown command %s: %s", cfg.shutdown_command, e)
        raise ShutdownError(f"Failed to launch shutdown command: {e}") from e
