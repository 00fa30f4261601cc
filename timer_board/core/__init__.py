"""
Core module for Timer Board application.
Contains timer models, row projection, view synchronization and dispatch.
"""

from .exceptions import (
    InvalidDurationError,
    InvalidTransitionError,
    NoTimerAtCursorError,
    TimerViewError,
)
from .models import (
    COLUMN_TITLES,
    REMAINING_CELL,
    RowRecord,
    Timer,
    ViewPhase,
    validate_transition,
)
from .formatter import TimerFormatter, format_duration
from .projector import EntryProjector, sort_key
from .view_state import TIMER_VIEW_KIND, TableView, TaskRunner, ViewState
from .refresh import RefreshScheduler
from .revert import RevertController
from .dispatcher import KEY_BINDINGS, CommandDispatcher
from .timer_store import TimerStore
from .operations import InteractiveTimerOperations, parse_duration
from .session import TimerViewSession

__all__ = [
    # Errors
    "InvalidDurationError",
    "InvalidTransitionError",
    "NoTimerAtCursorError",
    "TimerViewError",
    # Models
    "COLUMN_TITLES",
    "REMAINING_CELL",
    "RowRecord",
    "Timer",
    "ViewPhase",
    "validate_transition",
    # Projection
    "TimerFormatter",
    "format_duration",
    "EntryProjector",
    "sort_key",
    # View synchronization
    "TIMER_VIEW_KIND",
    "TableView",
    "TaskRunner",
    "ViewState",
    "RefreshScheduler",
    "RevertController",
    "KEY_BINDINGS",
    "CommandDispatcher",
    "TimerViewSession",
    # Timer source
    "TimerStore",
    "InteractiveTimerOperations",
    "parse_duration",
]
