from __future__ import annotations

from dataclasses import dataclass


def preset_label(minutes: int) -> str:
    return f"{minutes} Min"


def shutdown_label(confirm_counter: int) -> str:
    return f"Shutdown Now ({confirm_counter})"


def remaining_label(seconds: int) -> str:
    """Render the countdown status line; negative means nothing is armed."""

    if seconds < 0:
        return "No shutdown scheduled"
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"Shutdown in {hours:d}:{minutes:02d}:{secs:02d}"


@dataclass
class ViewState:
    """Last values read from the service, used to skip redundant redraws."""

    confirm_counter: int = -1
    remaining_seconds: int = -1

    def update(self, confirm_counter: int, remaining_seconds: int) -> bool:
        changed = (
            confirm_counter != self.confirm_counter or remaining_seconds != self.remaining_seconds
        )
        self.confirm_counter = confirm_counter
        self.remaining_seconds = remaining_seconds
        return changed
