from __future__ import annotations

import os
from pathlib import Path


def default_config_path(app_name: str = "shutdown-timer") -> Path:
    """Return the per-user config file location.

    Uses XDG_CONFIG_HOME when available, else ~/.config. The file is optional.
    """

    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        root = Path(base)
    else:
        root = Path.home() / ".config"
    return root / app_name / "config.yaml"


def resolve_config_path(explicit: str | None) -> Path | None:
    if explicit:
        return Path(explicit)
    p = default_config_path()
    return p if p.is_file() else None
