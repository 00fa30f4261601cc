"""
Display formatting for timer timestamps and remaining time.
"""
from __future__ import annotations

import datetime as dt
from typing import Callable, Optional

from ..config import ViewSettings
from .models import Timer


Clock = Callable[[], dt.datetime]


def format_duration(seconds: int) -> str:
    """Format whole seconds as H:MM:SS (e.g. 60 -> "0:01:00", 90000 -> "25:00:00")."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours}:{minutes:02}:{secs:02}"


class TimerFormatter:
    """
    Turns a timer's timestamps into display strings.

    The formatting rules are fixed at construction time. None of the methods
    raise: missing data is rendered as an empty string.
    """

    def __init__(
        self,
        time_format: str = "%H:%M:%S",
        finished_indicator: str = "✔",
        clock: Optional[Clock] = None,
    ):
        self.time_format = time_format
        self.finished_indicator = finished_indicator
        self.clock: Clock = clock or dt.datetime.now

    @classmethod
    def from_settings(cls, settings: ViewSettings, clock: Optional[Clock] = None) -> TimerFormatter:
        return cls(
            time_format=settings.time_format,
            finished_indicator=settings.finished_indicator,
            clock=clock,
        )

    def now(self) -> dt.datetime:
        return self.clock()

    def format_timestamp(self, value: Optional[dt.datetime]) -> str:
        if value is None:
            return ""
        try:
            return value.strftime(self.time_format)
        except (AttributeError, ValueError):
            return ""

    def start(self, timer: Timer) -> str:
        return self.format_timestamp(getattr(timer, "created", None))

    def end(self, timer: Timer) -> str:
        return self.format_timestamp(getattr(timer, "end", None))

    def remaining(self, timer: Timer, now: Optional[dt.datetime] = None) -> str:
        """Remaining time as H:MM:SS, or the finished indicator once it ran out."""
        if getattr(timer, "end", None) is None:
            return ""
        try:
            left = timer.remaining(now or self.now())
        except TypeError:
            # Naive and aware datetimes cannot be subtracted
            return ""
        seconds = round(left.total_seconds())
        if seconds <= 0:
            return self.finished_indicator
        return format_duration(seconds)
