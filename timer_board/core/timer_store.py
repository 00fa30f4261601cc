"""
In-memory timer collection for the Timer Board application.
"""
from __future__ import annotations

import datetime as dt
from typing import Callable, Optional

import structlog
from PySide6.QtCore import QObject, Signal

from .models import Timer

log = structlog.get_logger()


class TimerStore(QObject):
    """
    Owns the list of timers and announces every change.

    Views read the timers through ``timers()`` and subscribe with
    ``add_change_listener``. Every mutation emits ``timers_changed`` and
    notifies the change listeners.
    """

    # Signal emitted after any mutation
    timers_changed = Signal()

    # Signal emitted when a timer was picked for an operation
    timer_read = Signal(object)  # Timer

    def __init__(
        self,
        clock: Optional[Callable[[], dt.datetime]] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._timers: list[Timer] = []
        self._change_listeners: list[Callable[[], None]] = []
        self._read_listeners: list[Callable[[Timer], None]] = []
        self.clock = clock or dt.datetime.now

    def timers(self) -> list[Timer]:
        """Snapshot of the current timers in creation order."""
        return list(self._timers)

    def __len__(self) -> int:
        return len(self._timers)

    # =========================================================================
    # Mutations
    # =========================================================================

    def add(self, timer: Timer) -> Timer:
        """Add a timer."""
        self._timers.append(timer)
        log.info("timer_added", description=timer.description, duration=timer.duration)
        self._emit_change()
        return timer

    def start_timer(self, seconds: int, description: Optional[str] = None) -> Timer:
        """Create and add a timer that starts now."""
        timer = Timer.starting_now(seconds, description=description, now=self.clock())
        return self.add(timer)

    def remove(self, timer: Timer) -> bool:
        """Remove a timer. Returns False if it was not in the store."""
        for i, t in enumerate(self._timers):
            if t is timer:
                del self._timers[i]
                log.info("timer_removed", description=timer.description)
                self._emit_change()
                return True
        return False

    def replace(self, old: Timer, new: Timer) -> bool:
        """Swap a timer for another one at the same position."""
        for i, t in enumerate(self._timers):
            if t is old:
                self._timers[i] = new
                self._emit_change()
                return True
        return False

    def set_acknowledged(self, timer: Timer, acknowledged: bool) -> None:
        timer.acknowledged = acknowledged
        self._emit_change()

    def set_description(self, timer: Timer, description: Optional[str]) -> None:
        timer.description = description or None
        self._emit_change()

    def remove_finished(self) -> int:
        """Drop every timer whose end has passed. Returns how many were removed."""
        now = self.clock()
        kept = [t for t in self._timers if not t.is_finished(now)]
        removed = len(self._timers) - len(kept)
        if removed:
            self._timers = kept
            log.info("finished_timers_removed", count=removed)
            self._emit_change()
        return removed

    def notify_read(self, timer: Timer) -> None:
        """Announce that a timer was picked for an operation."""
        self.timer_read.emit(timer)
        for listener in list(self._read_listeners):
            listener(timer)

    # =========================================================================
    # Listeners
    # =========================================================================

    def _emit_change(self) -> None:
        self.timers_changed.emit()
        for listener in list(self._change_listeners):
            listener()

    def add_change_listener(self, callback: Callable[[], None]) -> None:
        """Add a listener callback for timer changes."""
        self._change_listeners.append(callback)

    def remove_change_listener(self, callback: Callable[[], None]) -> None:
        """Remove a change listener callback."""
        if callback in self._change_listeners:
            self._change_listeners.remove(callback)

    def add_read_listener(self, callback: Callable[[Timer], None]) -> None:
        """Add a listener callback for timer reads."""
        self._read_listeners.append(callback)

    def remove_read_listener(self, callback: Callable[[Timer], None]) -> None:
        """Remove a read listener callback."""
        if callback in self._read_listeners:
            self._read_listeners.remove(callback)
