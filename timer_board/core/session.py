"""
Wiring of one timer view to its timer source.
"""
from __future__ import annotations

from typing import Callable, Iterable, Optional, Protocol

import structlog

from ..config import ViewSettings, load_settings
from .dispatcher import CommandDispatcher, Prompter, TimerOperations
from .formatter import Clock, TimerFormatter
from .models import Timer, ViewPhase
from .projector import EntryProjector
from .refresh import RefreshScheduler
from .revert import RevertController
from .view_state import TableView, TaskRunner, ViewState

log = structlog.get_logger()


class TimerSource(Protocol):
    """Read access to the timers plus their change and read notifications."""

    def timers(self) -> Iterable[Timer]: ...

    def add_change_listener(self, callback: Callable[[], None]) -> None: ...

    def remove_change_listener(self, callback: Callable[[], None]) -> None: ...

    def add_read_listener(self, callback: Callable[[Timer], None]) -> None: ...

    def remove_read_listener(self, callback: Callable[[Timer], None]) -> None: ...


class TimerViewSession:
    """
    Lifecycle of one timer view.

    open -> (visible <-> hidden) -> close. Opening populates the rows and
    subscribes to the source, visibility changes install or cancel the
    refresh task, and closing cancels the task and unsubscribes.
    """

    def __init__(
        self,
        source: TimerSource,
        view: TableView,
        runner: TaskRunner,
        operations: TimerOperations,
        prompter: Prompter,
        reporter: Callable[[str], None],
        settings: Optional[ViewSettings] = None,
        clock: Optional[Clock] = None,
    ):
        self.source = source
        self.settings = settings or load_settings()

        formatter = TimerFormatter.from_settings(self.settings, clock=clock)
        self.projector = EntryProjector(formatter, ack_glyph=self.settings.ack_glyph)
        self.state = ViewState(view)
        self.scheduler = RefreshScheduler(
            runner, self.projector, interval=self.settings.refresh_interval
        )
        self.reverter = RevertController(self.projector)
        self.dispatcher = CommandDispatcher(
            self.state, operations, prompter, reporter, refresh=self.revert
        )

    @property
    def is_open(self) -> bool:
        return self.state.phase != ViewPhase.CLOSED

    def open(self) -> None:
        """Populate and render the rows and start listening to the source."""
        self.state.transition(ViewPhase.OPENED)
        self.source.add_change_listener(self.revert)
        self.source.add_read_listener(self._on_timer_read)
        self.revert()
        log.info("timer_view_opened", rows=len(self.state.rows))

    def revert(self) -> None:
        """Rebuild the rows from the source."""
        if not self.is_open:
            return
        self.reverter.revert(self.state, self.source.timers())

    def on_visibility_change(self, visible: Optional[bool] = None) -> None:
        self.scheduler.on_visibility_change(self.state, visible)

    def dispatch(self, key: str) -> bool:
        return self.dispatcher.dispatch(key)

    def timer_at_cursor(self) -> Optional[Timer]:
        return self.dispatcher.timer_at_cursor()

    def close(self) -> None:
        """Cancel the refresh task, unsubscribe and drop the rows."""
        if not self.is_open:
            return
        self.scheduler.stop(self.state)
        self.source.remove_change_listener(self.revert)
        self.source.remove_read_listener(self._on_timer_read)
        self.state.transition(ViewPhase.CLOSED)
        self.state.rows = []
        log.info("timer_view_closed")

    def _on_timer_read(self, timer: Timer) -> None:
        focal = self.dispatcher.timer_at_cursor()
        log.debug("timer_read_seen", read=timer.description, at_cursor=focal is timer)
