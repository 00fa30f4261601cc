"""
Full rebuild of a view's rows from the timer source.
"""
from __future__ import annotations

from typing import Iterable, Optional

import structlog

from .models import RowRecord, Timer
from .projector import EntryProjector
from .view_state import TableView, ViewState

log = structlog.get_logger()


class RevertController:
    """Replaces a view's rows wholesale and re-renders the table."""

    def __init__(self, projector: EntryProjector):
        self.projector = projector

    def revert(self, state: ViewState, timers: Iterable[Timer]) -> list[RowRecord]:
        """
        Rebuild ``state.rows`` from ``timers`` and redraw the view.

        The cursor follows the timer it was on. If that timer is gone the
        cursor keeps its line number, or moves up to the last row when the
        table got shorter.
        """
        view = state.view if state.view_alive else None

        old_line = 0
        focal: Optional[Timer] = None
        if view is not None:
            old_line = view.cursor_line()
            focal = view.id_at_cursor()

        old_count = len(state.rows)
        state.rows = self.projector.project_all(timers)
        log.debug("view_reverted", before=old_count, after=len(state.rows))

        if view is not None:
            view.render(state.rows)
            self._restore_cursor(view, state, focal, old_line)
        return state.rows

    def _restore_cursor(
        self,
        view: TableView,
        state: ViewState,
        focal: Optional[Timer],
        old_line: int,
    ) -> None:
        if focal is not None and state.row_for(focal) is not None:
            line = view.line_of(focal)
            if line is not None:
                view.set_cursor_line(line)
                return

        count = view.line_count()
        if count == 0 or old_line <= 0:
            return
        view.set_cursor_line(min(old_line, count))
