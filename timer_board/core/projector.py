"""
Projection of timers into table rows.
"""
from __future__ import annotations

import datetime as dt
from typing import Any, Iterable, Optional

from .formatter import TimerFormatter
from .models import (
    ACK_CELL,
    DESCRIPTION_CELL,
    END_CELL,
    REMAINING_CELL,
    START_CELL,
    RowRecord,
    Timer,
)


class EntryProjector:
    """Builds RowRecords from timers using a TimerFormatter."""

    def __init__(self, formatter: TimerFormatter, ack_glyph: str = "✔"):
        self.formatter = formatter
        self.ack_glyph = ack_glyph

    def project(self, timer: Timer, now: Optional[dt.datetime] = None) -> RowRecord:
        """Build the five-cell row for a single timer."""
        now = now or self.formatter.now()
        cells = [
            self.formatter.start(timer),
            self.formatter.end(timer),
            self.formatter.remaining(timer, now),
            self.ack_glyph if getattr(timer, "acknowledged", False) else "",
            getattr(timer, "description", None) or "",
        ]
        return RowRecord(id=timer, cells=cells)

    def project_all(self, timers: Iterable[Timer]) -> list[RowRecord]:
        """
        Project every timer in iteration order.

        No sorting, filtering or deduplication is applied. All rows share a
        single "now" so their remaining cells are consistent.
        """
        now = self.formatter.now()
        return [self.project(timer, now) for timer in timers]

    def refresh_remaining(self, row: RowRecord, now: Optional[dt.datetime] = None) -> None:
        """Recompute the remaining cell of a row in place."""
        row.cells[REMAINING_CELL] = self.formatter.remaining(row.id, now)


def sort_key(timer: Timer, column: int) -> Any:
    """
    Key used to sort a column.

    Start and End sort by their timestamps and Remaining by the true end time
    rather than by its display string. Missing timestamps sort first.
    """
    if column == START_CELL:
        return _timestamp(timer.created)
    if column in (END_CELL, REMAINING_CELL):
        return _timestamp(timer.end)
    if column == ACK_CELL:
        return 1 if timer.acknowledged else 0
    if column == DESCRIPTION_CELL:
        return (timer.description or "").lower()
    raise ValueError(f"Unknown column: {column}")


def _timestamp(value: Optional[dt.datetime]) -> float:
    if value is None:
        return float("-inf")
    return value.timestamp()
