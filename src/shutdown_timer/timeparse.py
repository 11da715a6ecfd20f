from __future__ import annotations

import re
from datetime import datetime, time, timedelta

_HHMM = re.compile(r"([0-9]{2}):([0-9]{2})")


class ParseError(ValueError):
    pass


def local_now() -> datetime:
    return datetime.now().astimezone()


def parse_hhmm(raw: str) -> time:
    """Parse a strict 24-hour ``HH:MM`` string."""

    m = _HHMM.fullmatch(raw)
    if not m:
        raise ParseError(f"Expected HH:MM, got {raw!r}")
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        raise ParseError(f"Time of day out of range: {raw!r}")
    return time(hour, minute)


def rollover(candidate: datetime, now: datetime) -> datetime:
    # Equal counts as already past.
    if candidate <= now:
        return candidate + timedelta(days=1)
    return candidate


def resolve(raw: str, now: datetime) -> datetime:
    """Return the next instant strictly after ``now`` whose time of day is ``raw``.

    The candidate is built on ``now``'s date in ``now``'s offset and moved one
    day forward when it is not in the future.
    """

    candidate = datetime.combine(now.date(), parse_hhmm(raw), tzinfo=now.tzinfo)
    return rollover(candidate, now)
