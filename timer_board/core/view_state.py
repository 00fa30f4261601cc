"""
Per-view state and the interfaces the core expects from its host.
"""
from __future__ import annotations

import weakref
from typing import Any, Callable, Optional, Protocol, Sequence, runtime_checkable

from .models import RowRecord, Timer, ViewPhase, check_transition

TIMER_VIEW_KIND = "timer-list"


@runtime_checkable
class TableView(Protocol):
    """A table on screen showing timer rows. Lines are 1-based."""

    view_kind: str

    def is_alive(self) -> bool: ...

    def is_visible(self) -> bool: ...

    def render(self, rows: Sequence[RowRecord]) -> None: ...

    def refresh_remaining(self, rows: Sequence[RowRecord]) -> None: ...

    def cursor_line(self) -> int: ...

    def set_cursor_line(self, line: int) -> None: ...

    def line_count(self) -> int: ...

    def line_of(self, timer: Timer) -> Optional[int]: ...

    def id_at_cursor(self) -> Optional[Timer]: ...

    def at_end(self) -> bool: ...

    def goto_end(self) -> None: ...


class TaskRunner(Protocol):
    """Runs repeating callbacks on the host's event loop."""

    def schedule_repeating(self, interval: float, callback: Callable[[], None]) -> Any:
        """Call ``callback`` every ``interval`` seconds, first after one interval."""
        ...

    def cancel(self, handle: Any) -> None: ...


class ViewState:
    """
    Mutable state of one open timer view.

    The view itself is only weakly referenced so a pending periodic task never
    keeps a destroyed view alive.
    """

    def __init__(self, view: Optional[TableView] = None):
        self._view_ref: Optional[weakref.ref] = None
        self.rows: list[RowRecord] = []
        self.task_handle: Any = None
        self.phase = ViewPhase.CLOSED
        if view is not None:
            self.attach(view)

    def attach(self, view: TableView) -> None:
        self._view_ref = weakref.ref(view)

    @property
    def view(self) -> Optional[TableView]:
        if self._view_ref is None:
            return None
        return self._view_ref()

    @property
    def view_alive(self) -> bool:
        view = self.view
        return view is not None and view.is_alive()

    @property
    def has_task(self) -> bool:
        return self.task_handle is not None

    def transition(self, target: ViewPhase) -> None:
        check_transition(self.phase, target)
        self.phase = target

    def row_for(self, timer: Timer) -> Optional[RowRecord]:
        for row in self.rows:
            if row.id is timer:
                return row
        return None
