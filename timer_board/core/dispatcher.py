"""
Keystroke dispatch for the timer view.
"""
from __future__ import annotations

from typing import Callable, Optional, Protocol

import structlog

from .exceptions import NoTimerAtCursorError, TimerViewError
from .models import Timer
from .view_state import TIMER_VIEW_KIND, TableView, ViewState

log = structlog.get_logger()


class TimerOperations(Protocol):
    """Mutations implemented by the timer-management side."""

    def cancel(self, timer: Timer) -> None: ...

    def clone(self, timer: Timer) -> None: ...

    def reschedule(self, timer: Timer) -> None: ...

    def toggle_acknowledge(self, timer: Timer) -> None: ...

    def edit_description(self, timer: Timer, text: str) -> None: ...

    def remove_finished(self) -> None: ...

    def create(self) -> None: ...

    def create_with_details(self) -> None: ...


class Prompter(Protocol):
    """Asks the user for text. Returns None when the prompt was cancelled."""

    def ask_text(self, title: str, label: str, default: str = "") -> Optional[str]: ...


# Key -> dispatcher method
KEY_BINDINGS: dict[str, str] = {
    "k": "cancel",
    "r": "cancel",
    "R": "remove_finished",
    "+": "create",
    "t": "create",
    "*": "create_with_details",
    "T": "create_with_details",
    "c": "clone",
    "a": "toggle_acknowledge",
    "e": "edit_description",
    "s": "reschedule",
    "g": "refresh",
}


class CommandDispatcher:
    """
    Resolves the timer under the cursor and routes keys to timer operations.

    The dispatcher never changes timers itself. The operations are expected
    to announce their changes through the timer source, which reverts the
    view.
    """

    def __init__(
        self,
        state: ViewState,
        operations: TimerOperations,
        prompter: Prompter,
        reporter: Callable[[str], None],
        refresh: Optional[Callable[[], None]] = None,
    ):
        self.state = state
        self.operations = operations
        self.prompter = prompter
        self.reporter = reporter
        self._refresh = refresh
        self.keymap: dict[str, Callable[[], None]] = {
            key: getattr(self, name) for key, name in KEY_BINDINGS.items()
        }

    # =========================================================================
    # Target resolution
    # =========================================================================

    def timer_at_cursor(self, view: Optional[TableView] = None) -> Optional[Timer]:
        """The timer on the cursor row, or None outside a populated timer view."""
        view = view if view is not None else self.state.view
        if view is None or not view.is_alive():
            return None
        if getattr(view, "view_kind", None) != TIMER_VIEW_KIND:
            return None
        timer = view.id_at_cursor()
        if timer is None or self.state.row_for(timer) is None:
            return None
        return timer

    def require_timer(self, command: str) -> Timer:
        timer = self.timer_at_cursor()
        if timer is None:
            raise NoTimerAtCursorError(command)
        return timer

    # =========================================================================
    # Dispatch
    # =========================================================================

    def dispatch(self, key: str) -> bool:
        """
        Run the command bound to ``key``.

        Returns False for unbound keys so the host can handle them. Errors
        from the command are reported to the user instead of propagating,
        unless they are not meant for the user.
        """
        command = self.keymap.get(key)
        if command is None:
            return False
        try:
            command()
        except TimerViewError as e:
            if not e.user_visible:
                raise
            log.warning("command_rejected", key=key, reason=str(e))
            self.reporter(str(e))
        return True

    # =========================================================================
    # Commands
    # =========================================================================

    def cancel(self) -> None:
        self.operations.cancel(self.require_timer("cancel"))

    def clone(self) -> None:
        self.operations.clone(self.require_timer("clone"))

    def reschedule(self) -> None:
        self.operations.reschedule(self.require_timer("reschedule"))

    def toggle_acknowledge(self) -> None:
        self.operations.toggle_acknowledge(self.require_timer("acknowledge"))

    def edit_description(self) -> None:
        timer = self.require_timer("edit description")
        text = self.prompter.ask_text(
            "Edit Description", "Description:", timer.description or ""
        )
        if text is None:
            return
        self.operations.edit_description(timer, text)

    def remove_finished(self) -> None:
        self.operations.remove_finished()

    def create(self) -> None:
        self.operations.create()

    def create_with_details(self) -> None:
        self.operations.create_with_details()

    def refresh(self) -> None:
        if self._refresh is not None:
            self._refresh()
