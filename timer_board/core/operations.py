"""
Timer operations backed by a TimerStore and user prompts.
"""
from __future__ import annotations

import re
from typing import Optional, Protocol

import structlog

from .exceptions import InvalidDurationError
from .models import Timer
from .timer_store import TimerStore

log = structlog.get_logger()

# "1:30" -> 1 minute 30 seconds
MINUTES_SECONDS_RE = re.compile(r"^(\d{1,3}):(\d{1,2})$")
# "90", "1.5" -> minutes
MINUTES_ONLY_RE = re.compile(r"^\d+(\.\d+)?$")
# "1h30m", "10m", "45s", "1h 5m 10s"
UNIT_PART_RE = re.compile(r"(\d+(?:\.\d+)?)\s*([hms])")

UNIT_SECONDS = {"h": 3600, "m": 60, "s": 1}

DURATION_HINT = "Duration (e.g. 5, 90s, 10m, 1h30m, 1:30):"


def parse_duration(text: str) -> int:
    """
    Parse a duration typed by the user into whole seconds.

    A bare number means minutes. Units h/m/s may be combined and "M:SS" is
    read as minutes and seconds.
    """
    value = (text or "").strip().lower()
    seconds: float = 0.0

    if MINUTES_ONLY_RE.match(value):
        seconds = float(value) * 60
    elif MINUTES_SECONDS_RE.match(value):
        minutes, secs = MINUTES_SECONDS_RE.match(value).groups()
        if int(secs) >= 60:
            raise InvalidDurationError(text)
        seconds = int(minutes) * 60 + int(secs)
    else:
        compact = value.replace(" ", "")
        parts = UNIT_PART_RE.findall(compact)
        if not parts or "".join(f"{n}{u}" for n, u in parts) != compact:
            raise InvalidDurationError(text)
        seconds = sum(float(n) * UNIT_SECONDS[u] for n, u in parts)

    if seconds <= 0:
        raise InvalidDurationError(text)
    return int(round(seconds))


class DetailsPrompter(Protocol):
    """Prompts needed to create and reschedule timers."""

    def ask_text(self, title: str, label: str, default: str = "") -> Optional[str]: ...

    def ask_details(self) -> Optional[tuple[str, str]]:
        """Ask for (duration text, description)."""
        ...


class InteractiveTimerOperations:
    """Implements the timer view's commands on top of a TimerStore."""

    def __init__(self, store: TimerStore, prompter: DetailsPrompter):
        self.store = store
        self.prompter = prompter

    def _ask_duration(self, title: str, default: str = "") -> Optional[int]:
        text = self.prompter.ask_text(title, DURATION_HINT, default)
        if text is None:
            return None
        return parse_duration(text)

    def create(self) -> None:
        seconds = self._ask_duration("New Timer")
        if seconds is None:
            return
        self.store.start_timer(seconds)

    def create_with_details(self) -> None:
        details = self.prompter.ask_details()
        if details is None:
            return
        duration_text, description = details
        seconds = parse_duration(duration_text)
        self.store.start_timer(seconds, description=description or None)

    def cancel(self, timer: Timer) -> None:
        self.store.notify_read(timer)
        self.store.remove(timer)

    def clone(self, timer: Timer) -> None:
        """Start a new timer with the same duration and description."""
        self.store.notify_read(timer)
        self.store.start_timer(timer.duration, description=timer.description)

    def reschedule(self, timer: Timer) -> None:
        """Replace the timer with one that runs for a new duration from now."""
        self.store.notify_read(timer)
        seconds = self._ask_duration("Reschedule Timer")
        if seconds is None:
            return
        new_timer = Timer.starting_now(
            seconds,
            description=timer.description,
            now=self.store.clock(),
        )
        self.store.replace(timer, new_timer)
        log.info("timer_rescheduled", description=timer.description, duration=seconds)

    def toggle_acknowledge(self, timer: Timer) -> None:
        self.store.set_acknowledged(timer, not timer.acknowledged)

    def edit_description(self, timer: Timer, text: str) -> None:
        self.store.set_description(timer, text)

    def remove_finished(self) -> None:
        self.store.remove_finished()
