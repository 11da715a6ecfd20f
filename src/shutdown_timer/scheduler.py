from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Protocol

from shutdown_timer.timeparse import ParseError, local_now, resolve, rollover

log = logging.getLogger(__name__)

CONFIRM_CLICKS = 3


class TimerHandle(Protocol):
    def cancel(self) -> Any:
        """Prevent the callback from running."""


# Same shape as asyncio.AbstractEventLoop.call_later.
CallLater = Callable[[float, Callable[[], None]], TimerHandle]


@dataclass(frozen=True)
class PendingCountdown:
    handle: TimerHandle
    fire_at: datetime


class ShutdownScheduler:
    """Single-owner session state for one scheduled shutdown.

    Every method must be called from the event loop that ``call_later``
    schedules on; the countdown callback runs there as well.
    """

    def __init__(
        self,
        shutdown: Callable[[], None],
        call_later: CallLater,
        clock: Callable[[], datetime] = local_now,
        confirm_clicks: int = CONFIRM_CLICKS,
    ):
        if confirm_clicks < 0:
            raise ValueError("confirm_clicks must be >= 0")
        self._shutdown = shutdown
        self._call_later = call_later
        self._clock = clock
        self._confirm_clicks = confirm_clicks

        self.target_time: datetime | None = None
        self.countdown: PendingCountdown | None = None
        self.confirm_counter = confirm_clicks
        self.active = False

    @property
    def armed(self) -> bool:
        return self.countdown is not None

    def remaining_seconds(self, now: datetime | None = None) -> float | None:
        if self.countdown is None:
            return None
        now = self._clock() if now is None else now
        return max(0.0, (self.countdown.fire_at - now).total_seconds())

    def set_target_time(self, raw: str) -> bool:
        try:
            self.target_time = resolve(raw, self._clock())
        except ParseError as e:
            log.debug("Ignoring target time input: %s", e)
            return False
        log.debug("Target time set to %s", self.target_time.isoformat())
        return True

    def apply_preset(self, minutes: int) -> None:
        if minutes <= 0:
            raise ValueError(f"preset minutes must be > 0: {minutes}")
        try:
            self.target_time = self._clock() + timedelta(minutes=minutes)
        except OverflowError as e:
            raise ValueError(f"preset minutes out of range: {minutes}") from e
        log.debug("Preset %d min, target time %s", minutes, self.target_time.isoformat())

    def cancel(self) -> bool:
        if self.countdown is None:
            return False
        self.countdown.handle.cancel()
        self.countdown = None
        log.info("Countdown cancelled")
        return True

    def arm(self) -> bool:
        if self.target_time is None:
            return False
        self.cancel()

        # Recomputed from the moment of arming, not from when the time was entered.
        now = self._clock()
        candidate = datetime.combine(now.date(), self.target_time.timetz())
        fire_at = rollover(candidate, now)
        delay = (fire_at - now).total_seconds()
        if delay <= 0:
            log.warning("Not arming, non-positive delay %.3fs", delay)
            return False

        handle = self._call_later(delay, self._fire)
        self.countdown = PendingCountdown(handle=handle, fire_at=fire_at)
        self.confirm_counter = self._confirm_clicks
        self.active = True
        log.info("Shutdown armed for %s (in %.0fs)", fire_at.isoformat(), delay)
        return True

    def trigger(self, forced: bool = False) -> bool:
        """Shut down now if forced or out of confirmations.

        Returns True when the shutdown action ran; a manual trigger with
        confirmations left only decrements the counter.
        """

        if forced or self.confirm_counter == 0:
            log.warning("Executing shutdown (forced=%s)", forced)
            self._shutdown()
            return True
        self.confirm_counter -= 1
        log.info("Shutdown requested, %d confirmation(s) left", self.confirm_counter)
        return False

    def _fire(self) -> None:
        self.countdown = None
        self.trigger(forced=True)
