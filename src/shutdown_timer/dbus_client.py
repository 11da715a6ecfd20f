from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dbus_next.aio import MessageBus

from shutdown_timer.dbus_service import BUS_NAME, OBJ_PATH


@dataclass
class ShutdownTimerClient:
    bus: MessageBus
    iface: object

    @classmethod
    async def connect(cls) -> ShutdownTimerClient:
        bus = await MessageBus().connect()
        introspection = await bus.introspect(BUS_NAME, OBJ_PATH)
        obj = bus.get_proxy_object(BUS_NAME, OBJ_PATH, introspection)
        iface = obj.get_interface(BUS_NAME)
        return cls(bus=bus, iface=iface)

    async def set_target_time(self, value: str) -> bool:
        return bool(await self.iface.call_set_target_time(value))

    async def apply_preset(self, minutes: int) -> bool:
        return bool(await self.iface.call_apply_preset(minutes))

    async def arm(self) -> bool:
        return bool(await self.iface.call_arm())

    async def cancel(self) -> bool:
        return bool(await self.iface.call_cancel())

    async def shutdown_now(self) -> bool:
        return bool(await self.iface.call_shutdown_now())

    async def status(self) -> dict[str, Any]:
        return {
            "target_time": await self.iface.call_target_time(),
            "remaining_seconds": await self.iface.call_remaining_seconds(),
            "confirm_counter": await self.iface.call_confirm_counter(),
        }

    async def close(self) -> None:
        self.bus.disconnect()
