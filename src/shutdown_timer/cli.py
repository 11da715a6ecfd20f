from __future__ import annotations

import argparse
import asyncio
from typing import Any

from shutdown_timer import __version__
from shutdown_timer.config import load
from shutdown_timer.controller import Controller
from shutdown_timer.dbus_client import ShutdownTimerClient
from shutdown_timer.logs import setup_logging
from shutdown_timer.paths import resolve_config_path


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="shutdown-timer")
    ap.add_argument("--version", action="version", version=__version__)

    sub = ap.add_subparsers(dest="cmd", required=True)

    run = sub.add_parser("run", help="Run the shutdown timer service")
    run.add_argument("-c", "--config")

    ctl = sub.add_parser("ctl", help="Talk to a running service")
    actions = ctl.add_subparsers(dest="action", required=True)
    set_ = actions.add_parser("set", help="Set the target time of day")
    set_.add_argument("time", help="HH:MM, 24-hour")
    preset = actions.add_parser("preset", help="Target now plus MINUTES")
    preset.add_argument("minutes", type=int)
    actions.add_parser("arm", help="Arm the countdown for the current target")
    actions.add_parser("cancel", help="Cancel the pending countdown")
    actions.add_parser("now", help="Request an immediate shutdown")
    actions.add_parser("status", help="Show target, remaining time and confirmations")

    return ap


def format_status(status: dict[str, Any]) -> str:
    target = status["target_time"] or "-"
    remaining = int(status["remaining_seconds"])
    armed = f"{remaining}s" if remaining >= 0 else "not armed"
    return f"target={target} remaining={armed} confirmations={status['confirm_counter']}"


async def _ctl(args: argparse.Namespace) -> None:
    client = await ShutdownTimerClient.connect()
    try:
        if args.action == "set":
            ok = await client.set_target_time(args.time.strip())
            print("ok" if ok else "ignored")
        elif args.action == "preset":
            print("ok" if await client.apply_preset(args.minutes) else "ignored")
        elif args.action == "arm":
            print("armed" if await client.arm() else "not armed")
        elif args.action == "cancel":
            print("cancelled" if await client.cancel() else "nothing to cancel")
        elif args.action == "now":
            if await client.shutdown_now():
                print("shutting down")
            else:
                status = await client.status()
                print(f"{status['confirm_counter']} more confirmation(s) required")
        elif args.action == "status":
            print(format_status(await client.status()))
    finally:
        await client.close()


def main() -> None:
    args = _build_parser().parse_args()
    if args.cmd == "run":
        cfg = load(resolve_config_path(args.config))
        setup_logging(cfg["logging"]["level"])
        ctl = Controller(cfg)
        asyncio.run(ctl.run())
    elif args.cmd == "ctl":
        asyncio.run(_ctl(args))
