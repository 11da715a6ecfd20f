from __future__ import annotations

import argparse
import logging
from typing import Any

from shutdown_timer.config import load
from shutdown_timer.dbus_service import BUS_NAME, OBJ_PATH
from shutdown_timer.logs import setup_logging
from shutdown_timer.paths import resolve_config_path
from shutdown_timer_ui import __version__
from shutdown_timer_ui.model import ViewState, preset_label, remaining_label, shutdown_label

log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="shutdown-timer-ui")
    ap.add_argument("--version", action="version", version=__version__)
    ap.add_argument("-c", "--config")
    return ap


def main() -> None:
    args = _build_parser().parse_args()
    cfg = load(resolve_config_path(args.config))
    setup_logging(cfg["logging"]["level"])

    # Import Gtk lazily so the base package remains importable on non-GUI systems.
    try:
        import gi  # type: ignore

        gi.require_version("Gtk", "3.0")
        from gi.repository import Gio, GLib, Gtk  # type: ignore
    except Exception as e:  # pragma: no cover
        raise SystemExit(
            "shutdown-timer-ui requires GTK3 + PyGObject (apt install python3-gi gir1.2-gtk-3.0)"
        ) from e

    presets = [int(m) for m in cfg["scheduler"]["presets_minutes"]]
    splash_ms = int(cfg["ui"]["splash_ms"])

    proxy = Gio.DBusProxy.new_for_bus_sync(
        Gio.BusType.SESSION,
        Gio.DBusProxyFlags.NONE,
        None,
        BUS_NAME,
        OBJ_PATH,
        BUS_NAME,
        None,
    )

    def call(method: str, params: Any = None) -> Any:
        result = proxy.call_sync(method, params, Gio.DBusCallFlags.NONE, -1, None)
        return result.unpack()[0]

    class Splash(Gtk.Window):
        def __init__(self) -> None:
            super().__init__(title="shutdown-timer")
            self.set_decorated(False)
            self.set_position(Gtk.WindowPosition.CENTER)
            box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=12)
            box.set_border_width(24)
            box.pack_start(Gtk.Label(label="Shutdown Timer"), True, True, 0)
            spinner = Gtk.Spinner()
            spinner.start()
            box.pack_start(spinner, True, True, 0)
            self.add(box)

    class Main(Gtk.Window):
        def __init__(self) -> None:
            super().__init__(title="Shutdown Timer")
            self.set_position(Gtk.WindowPosition.CENTER)
            self.set_border_width(16)
            self.connect("destroy", Gtk.main_quit)
            self._state = ViewState()

            root = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=10)

            row = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
            self._entry = Gtk.Entry()
            self._entry.set_placeholder_text("hrs:mins")
            self._entry.set_max_length(5)
            self._entry.set_text(call("TargetTime") or "00:00")
            self._changed_id = self._entry.connect("changed", self._on_time_changed)
            row.pack_start(self._entry, True, True, 0)

            btn_set = Gtk.Button(label="Set")
            btn_set.connect("clicked", self._on_set)
            row.pack_start(btn_set, False, False, 0)
            root.pack_start(row, False, False, 0)

            presets_row = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
            for minutes in presets:
                b = Gtk.Button(label=preset_label(minutes))
                b.connect("clicked", self._on_preset, minutes)
                presets_row.pack_start(b, True, True, 0)
            root.pack_start(presets_row, False, False, 0)

            self._btn_now = Gtk.Button(label=shutdown_label(call("ConfirmCounter")))
            self._btn_now.connect("clicked", self._on_shutdown_now)
            root.pack_start(self._btn_now, False, False, 0)

            self._status = Gtk.Label(label=remaining_label(-1))
            root.pack_start(self._status, False, False, 0)

            self.add(root)
            GLib.timeout_add(1000, self._tick)

        def _show_target(self) -> None:
            # Reflect the service's target without sending it back as an edit.
            self._entry.handler_block(self._changed_id)
            try:
                self._entry.set_text(call("TargetTime"))
            finally:
                self._entry.handler_unblock(self._changed_id)

        def _refresh(self) -> None:
            counter = call("ConfirmCounter")
            remaining = call("RemainingSeconds")
            if self._state.update(counter, remaining):
                self._btn_now.set_label(shutdown_label(counter))
                self._status.set_text(remaining_label(remaining))

        def _tick(self) -> bool:
            self._refresh()
            return True

        def _on_time_changed(self, entry: Gtk.Entry) -> None:
            call("SetTargetTime", GLib.Variant("(s)", (entry.get_text().strip(),)))

        def _on_set(self, *_: object) -> None:
            call("Arm")
            self._refresh()

        def _on_preset(self, _btn: Gtk.Button, minutes: int) -> None:
            call("ApplyPreset", GLib.Variant("(x)", (minutes,)))
            self._show_target()

        def _on_shutdown_now(self, *_: object) -> None:
            if call("ShutdownNow"):
                self._btn_now.set_label("Shutting down…")
                self._btn_now.set_sensitive(False)
                return
            self._refresh()

    splash = Splash()
    splash.show_all()
    win = Main()

    def finish_splash() -> bool:
        splash.destroy()
        win.show_all()
        log.debug("Splash closed after %d ms", splash_ms)
        return False

    GLib.timeout_add(splash_ms, finish_splash)
    Gtk.main()
