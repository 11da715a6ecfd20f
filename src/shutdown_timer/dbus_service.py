from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from dbus_next.aio import MessageBus
from dbus_next.service import ServiceInterface, method

# dbus-next uses signature strings ("s", "b") in annotations.
# Ruff tries to treat these as Python types.


BUS_NAME = "io.github.shutdown_timer"
OBJ_PATH = "/io/github/shutdown_timer"


@dataclass(frozen=True)
class Callbacks:
    set_target_time: Callable[[str], bool]
    apply_preset: Callable[[int], bool]
    arm: Callable[[], bool]
    cancel: Callable[[], bool]
    shutdown_now: Callable[[], bool]
    confirm_counter: Callable[[], int]
    target_time: Callable[[], str]
    remaining_seconds: Callable[[], int]


class ShutdownTimerInterface(ServiceInterface):
    def __init__(self, cb: Callbacks):
        super().__init__(BUS_NAME)
        self._cb = cb

    @method()
    def SetTargetTime(self, value: "s") -> "b":  # noqa: N802
        return bool(self._cb.set_target_time(value))

    @method()
    def ApplyPreset(self, minutes: "x") -> "b":  # noqa: N802
        return bool(self._cb.apply_preset(minutes))

    @method()
    def Arm(self) -> "b":  # noqa: N802
        return bool(self._cb.arm())

    @method()
    def Cancel(self) -> "b":  # noqa: N802
        return bool(self._cb.cancel())

    @method()
    def ShutdownNow(self) -> "b":  # noqa: N802
        return bool(self._cb.shutdown_now())

    @method()
    def ConfirmCounter(self) -> "i":  # noqa: N802
        return int(self._cb.confirm_counter())

    @method()
    def TargetTime(self) -> "s":  # noqa: N802
        return str(self._cb.target_time())

    @method()
    def RemainingSeconds(self) -> "i":  # noqa: N802
        return int(self._cb.remaining_seconds())


async def serve(iface: ShutdownTimerInterface) -> MessageBus:
    bus = await MessageBus().connect()
    bus.export(OBJ_PATH, iface)
    await bus.request_name(BUS_NAME)
    return bus
