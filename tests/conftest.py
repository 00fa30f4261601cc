"""
Shared fixtures and fakes for the Timer Board tests.
"""
import datetime as dt
import os
from collections import deque
from typing import Optional

import pytest
from PySide6.QtWidgets import QApplication

from timer_board.config import ViewSettings
from timer_board.core import TIMER_VIEW_KIND, Timer


T0 = dt.datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """Signals and widgets need an application instance. No display is used."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance() or QApplication([])
    yield app


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: dt.datetime = T0):
        self.now = now

    def __call__(self) -> dt.datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += dt.timedelta(seconds=seconds)


class FakeView:
    """Table view keeping rows in the order it was given them."""

    view_kind = TIMER_VIEW_KIND

    def __init__(self):
        self.alive = True
        self.visible = True
        self.rows = []
        self.cursor = 0
        self.render_calls = 0
        self.refresh_calls = 0
        self.goto_end_calls = 0

    def is_alive(self) -> bool:
        return self.alive

    def is_visible(self) -> bool:
        return self.visible

    def render(self, rows) -> None:
        self.render_calls += 1
        self.rows = list(rows)
        if self.cursor > len(self.rows):
            self.cursor = len(self.rows)

    def refresh_remaining(self, rows) -> None:
        self.refresh_calls += 1

    def cursor_line(self) -> int:
        return self.cursor

    def set_cursor_line(self, line: int) -> None:
        self.cursor = line

    def line_count(self) -> int:
        return len(self.rows)

    def line_of(self, timer) -> Optional[int]:
        for i, row in enumerate(self.rows):
            if row.id is timer:
                return i + 1
        return None

    def id_at_cursor(self):
        if 1 <= self.cursor <= len(self.rows):
            return self.rows[self.cursor - 1].id
        return None

    def at_end(self) -> bool:
        return bool(self.rows) and self.cursor == len(self.rows)

    def goto_end(self) -> None:
        self.goto_end_calls += 1
        self.cursor = len(self.rows)


class FakeHandle:
    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.cancelled = False


class FakeRunner:
    """Task runner that fires callbacks on demand."""

    def __init__(self):
        self.handles = []

    def schedule_repeating(self, interval, callback):
        handle = FakeHandle(interval, callback)
        self.handles.append(handle)
        return handle

    def cancel(self, handle) -> None:
        handle.cancelled = True

    @property
    def active(self):
        return [h for h in self.handles if not h.cancelled]

    def fire(self) -> None:
        for handle in self.active:
            handle.callback()


class FakeOperations:
    """Records every operation call."""

    def __init__(self):
        self.calls = []

    def cancel(self, timer):
        self.calls.append(("cancel", timer))

    def clone(self, timer):
        self.calls.append(("clone", timer))

    def reschedule(self, timer):
        self.calls.append(("reschedule", timer))

    def toggle_acknowledge(self, timer):
        self.calls.append(("toggle_acknowledge", timer))

    def edit_description(self, timer, text):
        self.calls.append(("edit_description", timer, text))

    def remove_finished(self):
        self.calls.append(("remove_finished",))

    def create(self):
        self.calls.append(("create",))

    def create_with_details(self):
        self.calls.append(("create_with_details",))


class FakePrompter:
    """Answers prompts from a queue. None simulates a cancelled prompt."""

    def __init__(self, answers=(), details=None):
        self.answers = deque(answers)
        self.details = details
        self.questions = []

    def ask_text(self, title, label, default=""):
        self.questions.append((title, default))
        return self.answers.popleft() if self.answers else None

    def ask_details(self):
        return self.details


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def view():
    return FakeView()


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def operations():
    return FakeOperations()


@pytest.fixture
def settings():
    return ViewSettings()


@pytest.fixture
def make_timer(clock):
    """Build a timer that started at the fake clock's current time."""

    def _make(seconds=60, description=None, acknowledged=False):
        timer = Timer.starting_now(seconds, description=description, now=clock())
        timer.acknowledged = acknowledged
        return timer

    return _make
