"""
Periodic refresh of the remaining-time column.
"""
from __future__ import annotations

from typing import Optional

import structlog

from .models import ViewPhase
from .projector import EntryProjector
from .view_state import TaskRunner, ViewState

log = structlog.get_logger()


class RefreshScheduler:
    """
    Keeps the remaining column live while a view is on screen.

    At most one periodic task exists per ViewState. ``start`` refuses to
    install a second one and ``stop`` always clears the handle, so a later
    visibility change can install a fresh task.
    """

    def __init__(
        self,
        runner: TaskRunner,
        projector: EntryProjector,
        interval: float = 1.0,
    ):
        self.runner = runner
        self.projector = projector
        self.interval = interval

    def start(self, state: ViewState) -> bool:
        """Install the periodic task. Returns False if one was already active."""
        if state.has_task:
            return False
        state.task_handle = self.runner.schedule_repeating(
            self.interval, lambda: self.tick(state)
        )
        log.debug("refresh_task_installed", interval=self.interval)
        return True

    def stop(self, state: ViewState) -> bool:
        """Cancel the periodic task. Returns False if none was active."""
        handle = state.task_handle
        if handle is None:
            return False
        state.task_handle = None
        self.runner.cancel(handle)
        log.debug("refresh_task_cancelled")
        return True

    def on_visibility_change(self, state: ViewState, visible: Optional[bool] = None) -> None:
        """
        Install or cancel the task after the view was shown or hidden.

        When ``visible`` is omitted it is read from the view.
        """
        if state.phase == ViewPhase.CLOSED:
            self.stop(state)
            return

        if visible is None:
            visible = state.view_alive and state.view.is_visible()

        if visible:
            self.start(state)
            if state.phase != ViewPhase.VISIBLE:
                state.transition(ViewPhase.VISIBLE)
        else:
            self.stop(state)
            if state.phase != ViewPhase.HIDDEN:
                state.transition(ViewPhase.HIDDEN)

    def tick(self, state: ViewState) -> bool:
        """
        One firing of the periodic task.

        Returns True when the rows were patched, False when the task cancelled
        itself because the view is closed, destroyed or off screen.
        """
        if state.phase == ViewPhase.CLOSED or not state.view_alive:
            log.debug("refresh_tick_stale_view")
            self.stop(state)
            return False

        view = state.view
        if state.phase == ViewPhase.HIDDEN or not view.is_visible():
            log.debug("refresh_tick_hidden_view")
            self.stop(state)
            if state.phase == ViewPhase.VISIBLE:
                state.transition(ViewPhase.HIDDEN)
            return False

        was_at_end = view.at_end()
        now = self.projector.formatter.now()
        for row in state.rows:
            self.projector.refresh_remaining(row, now)
        view.refresh_remaining(state.rows)
        if was_at_end:
            view.goto_end()
        return True
