"""
Core data models for the Timer Board application.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from .exceptions import InvalidTransitionError


# Cell positions inside a RowRecord
START_CELL = 0
END_CELL = 1
REMAINING_CELL = 2
ACK_CELL = 3
DESCRIPTION_CELL = 4
CELL_COUNT = 5

COLUMN_TITLES = ("Start", "End", "Remaining", "Ack", "Description")


class ViewPhase(Enum):
    """Lifecycle phases of a timer view."""
    CLOSED = auto()    # No view, no rows
    OPENED = auto()    # Rows populated, no periodic task yet
    VISIBLE = auto()   # Shown on screen, periodic task installed
    HIDDEN = auto()    # Not on screen, periodic task cancelled


VALID_TRANSITIONS: dict[ViewPhase, set[ViewPhase]] = {
    ViewPhase.CLOSED: {ViewPhase.OPENED},
    ViewPhase.OPENED: {ViewPhase.VISIBLE, ViewPhase.HIDDEN, ViewPhase.CLOSED},
    ViewPhase.VISIBLE: {ViewPhase.HIDDEN, ViewPhase.CLOSED},
    ViewPhase.HIDDEN: {ViewPhase.VISIBLE, ViewPhase.CLOSED},
}


def validate_transition(current: ViewPhase, target: ViewPhase) -> bool:
    """Return True when moving from current to target is allowed."""
    return target in VALID_TRANSITIONS.get(current, set())


def check_transition(current: ViewPhase, target: ViewPhase) -> None:
    """Raise InvalidTransitionError unless the move is allowed."""
    if not validate_transition(current, target):
        raise InvalidTransitionError(current.name, target.name)


@dataclass(eq=False)
class Timer:
    """
    A countdown timer owned by the timer store.

    Timers compare and hash by identity, so the object itself serves as the
    row identity in the table.
    """
    created: dt.datetime = field(default_factory=dt.datetime.now)
    end: Optional[dt.datetime] = None
    duration: int = 0  # Seconds the timer was set for
    description: Optional[str] = None
    acknowledged: bool = False

    @classmethod
    def starting_now(
        cls,
        seconds: int,
        description: Optional[str] = None,
        now: Optional[dt.datetime] = None,
    ) -> Timer:
        """Create a timer that started at ``now`` and runs for ``seconds``."""
        start = now or dt.datetime.now()
        return cls(
            created=start,
            end=start + dt.timedelta(seconds=seconds),
            duration=int(seconds),
            description=description,
        )

    def remaining(self, now: dt.datetime) -> Optional[dt.timedelta]:
        """Time left until the end, or None when the end is unknown."""
        if self.end is None:
            return None
        return self.end - now

    def is_finished(self, now: dt.datetime) -> bool:
        """Whether the end time has been reached."""
        return self.end is not None and self.end <= now


@dataclass
class RowRecord:
    """Display projection of one timer: its identity plus five cell strings."""
    id: Timer
    cells: list[str]

    def __post_init__(self):
        if len(self.cells) != CELL_COUNT:
            raise ValueError(
                f"RowRecord needs {CELL_COUNT} cells, got {len(self.cells)}"
            )