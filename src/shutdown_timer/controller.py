from __future__ import annotations

import asyncio
import logging
import signal
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass
from typing import Any

from shutdown_timer.dbus_service import Callbacks, ShutdownTimerInterface, serve
from shutdown_timer.scheduler import ShutdownScheduler, TimerHandle
from shutdown_timer.system.power import PowerConfig, normalize_shutdown_command, shutdown_now

log = logging.getLogger(__name__)


def _call_later(delay: float, callback: Callable[[], None]) -> TimerHandle:
    # Only ever invoked from D-Bus handlers, which run on the loop.
    return asyncio.get_running_loop().call_later(delay, callback)


@dataclass
class Controller:
    cfg: dict[str, Any]

    def __post_init__(self) -> None:
        self._power_cfg = PowerConfig(
            shutdown_command=normalize_shutdown_command(
                self.cfg.get("system", {}).get("shutdown_command")
            )
        )
        self.scheduler = ShutdownScheduler(
            shutdown=self._shutdown,
            call_later=_call_later,
            confirm_clicks=int(self.cfg["scheduler"]["confirm_clicks"]),
        )
        self._bus = None
        self._stopped: asyncio.Event | None = None

    def _shutdown(self) -> None:
        shutdown_now(self._power_cfg, "shutdown-timer")

    def apply_preset(self, minutes: int) -> bool:
        try:
            self.scheduler.apply_preset(minutes)
        except ValueError as e:
            log.debug("Ignoring preset: %s", e)
            return False
        return True

    def shutdown_now(self) -> bool:
        return self.scheduler.trigger(forced=False)

    def target_time(self) -> str:
        target = self.scheduler.target_time
        return target.strftime("%H:%M") if target else ""

    def remaining_seconds(self) -> int:
        remaining = self.scheduler.remaining_seconds()
        return -1 if remaining is None else int(remaining)

    def callbacks(self) -> Callbacks:
        return Callbacks(
            set_target_time=self.scheduler.set_target_time,
            apply_preset=self.apply_preset,
            arm=self.scheduler.arm,
            cancel=self.scheduler.cancel,
            shutdown_now=self.shutdown_now,
            confirm_counter=lambda: self.scheduler.confirm_counter,
            target_time=self.target_time,
            remaining_seconds=self.remaining_seconds,
        )

    async def start(self) -> None:
        self._stopped = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            with suppress(NotImplementedError):
                loop.add_signal_handler(sig, self._stopped.set)

        iface = ShutdownTimerInterface(self.callbacks())
        self._bus = await serve(iface)
        log.info("Serving shutdown timer on the session bus")

    async def stop(self) -> None:
        self.scheduler.cancel()
        if self._bus:
            self._bus.disconnect()

    async def run(self) -> None:
        await self.start()
        try:
            assert self._stopped
            await self._stopped.wait()
        finally:
            await self.stop()
