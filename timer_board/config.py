"""
Configuration for the Timer Board application.

Every setting can be overridden through a TIMER_BOARD_* environment variable.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Optional

import structlog

log = structlog.get_logger()

DEFAULT_REFRESH_INTERVAL = 1.0
DEFAULT_TIME_FORMAT = "%H:%M:%S"
DEFAULT_ACK_GLYPH = "✔"
DEFAULT_FINISHED_INDICATOR = "✔"
DEFAULT_VIEW_TITLE = "Timers"


def get_refresh_interval() -> float:
    """Seconds between two refreshes of the remaining column."""
    raw = os.environ.get("TIMER_BOARD_REFRESH_INTERVAL")
    if raw is None:
        return DEFAULT_REFRESH_INTERVAL
    try:
        value = float(raw)
    except ValueError:
        value = -1.0
    if value <= 0:
        log.warning("invalid_refresh_interval", value=raw, fallback=DEFAULT_REFRESH_INTERVAL)
        return DEFAULT_REFRESH_INTERVAL
    return value


def get_time_format() -> str:
    return os.environ.get("TIMER_BOARD_TIME_FORMAT", DEFAULT_TIME_FORMAT)


def get_ack_glyph() -> str:
    # An empty glyph would make acknowledged rows look unacknowledged
    return os.environ.get("TIMER_BOARD_ACK_GLYPH") or DEFAULT_ACK_GLYPH


def get_finished_indicator() -> str:
    return os.environ.get("TIMER_BOARD_FINISHED_INDICATOR", DEFAULT_FINISHED_INDICATOR)


def get_view_title() -> str:
    return os.environ.get("TIMER_BOARD_VIEW_TITLE", DEFAULT_VIEW_TITLE)


@dataclass(frozen=True)
class ViewSettings:
    """Process-wide display settings for timer views."""
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    time_format: str = DEFAULT_TIME_FORMAT
    ack_glyph: str = DEFAULT_ACK_GLYPH
    finished_indicator: str = DEFAULT_FINISHED_INDICATOR
    view_title: str = DEFAULT_VIEW_TITLE

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "refresh_interval": self.refresh_interval,
            "time_format": self.time_format,
            "ack_glyph": self.ack_glyph,
            "finished_indicator": self.finished_indicator,
            "view_title": self.view_title,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ViewSettings:
        """Deserialize from dictionary."""
        return cls(
            refresh_interval=float(data.get("refresh_interval", DEFAULT_REFRESH_INTERVAL)),
            time_format=data.get("time_format", DEFAULT_TIME_FORMAT),
            ack_glyph=data.get("ack_glyph", DEFAULT_ACK_GLYPH),
            finished_indicator=data.get("finished_indicator", DEFAULT_FINISHED_INDICATOR),
            view_title=data.get("view_title", DEFAULT_VIEW_TITLE),
        )


_settings: Optional[ViewSettings] = None


def load_settings(reload: bool = False) -> ViewSettings:
    """Build the settings from the environment once per process."""
    global _settings
    if _settings is None or reload:
        _settings = ViewSettings(
            refresh_interval=get_refresh_interval(),
            time_format=get_time_format(),
            ack_glyph=get_ack_glyph(),
            finished_indicator=get_finished_indicator(),
            view_title=get_view_title(),
        )
    return _settings
