from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from shutdown_timer.scheduler import CONFIRM_CLICKS

DEFAULTS: dict[str, Any] = {
    "scheduler": {
        "confirm_clicks": CONFIRM_CLICKS,
        "presets_minutes": [10, 20, 30],
    },
    "system": {},
    "ui": {"splash_ms": 750},
    "logging": {"level": "INFO"},
}


class ConfigError(ValueError):
    pass


def _require(cfg: dict[str, Any], key: str) -> Any:
    if key not in cfg:
        raise ConfigError(f"Missing required config key: {key}")
    return cfg[key]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def defaults() -> dict[str, Any]:
    return copy.deepcopy(DEFAULTS)


def merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into ``base`` one section deep and return ``base``."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key].update(value)
        else:
            base[key] = value
    return base


def load(path: str | Path | None = None) -> dict[str, Any]:
    cfg = defaults()
    if path is not None:
        p = Path(path)
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Top-level config must be a mapping")
        merge(cfg, data)
    validate(cfg)
    return cfg


def validate(cfg: dict[str, Any]) -> None:
    scheduler = _require(cfg, "scheduler")
    if not isinstance(scheduler, dict):
        raise ConfigError("scheduler must be a mapping")

    clicks = _require(scheduler, "confirm_clicks")
    if not _is_int(clicks) or clicks < 0:
        raise ConfigError(f"scheduler.confirm_clicks must be an integer >= 0: {clicks!r}")

    presets = _require(scheduler, "presets_minutes")
    if not isinstance(presets, list) or not presets:
        raise ConfigError("scheduler.presets_minutes must be a non-empty list")
    for minutes in presets:
        if not _is_int(minutes) or minutes <= 0:
            raise ConfigError(f"scheduler.presets_minutes entries must be > 0: {minutes!r}")

    system = cfg.get("system") or {}
    if "shutdown_command" in system and (
        not isinstance(system["shutdown_command"], list) or not system["shutdown_command"]
    ):
        raise ConfigError("system.shutdown_command must be a non-empty list")

    splash_ms = (cfg.get("ui") or {}).get("splash_ms", 0)
    if not _is_int(splash_ms) or splash_ms < 0:
        raise ConfigError(f"ui.splash_ms must be an integer >= 0: {splash_ms!r}")

    level = str((cfg.get("logging") or {}).get("level", "INFO")).upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigError(f"logging.level is not a valid level: {level}")
