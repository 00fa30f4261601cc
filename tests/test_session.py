"""
Tests for the timer view lifecycle and its end-to-end scenarios.
"""
import pytest

from timer_board.core import (
    InteractiveTimerOperations,
    InvalidTransitionError,
    TimerStore,
    TimerViewSession,
    ViewPhase,
    validate_transition,
)

from conftest import FakePrompter


@pytest.fixture
def store(clock):
    return TimerStore(clock=clock)


@pytest.fixture
def prompter():
    return FakePrompter()


@pytest.fixture
def reported():
    return []


@pytest.fixture
def session(store, view, runner, prompter, reported, settings, clock):
    operations = InteractiveTimerOperations(store, prompter)
    return TimerViewSession(
        source=store,
        view=view,
        runner=runner,
        operations=operations,
        prompter=prompter,
        reporter=reported.append,
        settings=settings,
        clock=clock,
    )


class TestLifecycle:
    """Tests for open, visibility and close."""

    def test_open_populates_without_task(self, session, store, view, runner):
        """Test opening renders rows but installs no task yet."""
        store.start_timer(60, description="tea")

        session.open()

        assert session.state.phase == ViewPhase.OPENED
        assert len(session.state.rows) == 1
        assert view.render_calls == 1
        assert runner.handles == []

    def test_open_empty_store(self, session, view):
        """Test an empty store opens with zero rows."""
        session.open()
        assert session.state.rows == []
        assert view.rows == []

    def test_open_twice_is_invalid(self, session):
        """Test opening an open view raises."""
        session.open()
        with pytest.raises(InvalidTransitionError):
            session.open()

    def test_visibility_cycle(self, session, runner, view):
        """Test visible/hidden toggling keeps at most one task."""
        session.open()

        session.on_visibility_change(True)
        assert session.state.phase == ViewPhase.VISIBLE
        assert len(runner.active) == 1

        view.visible = False
        session.on_visibility_change(False)
        assert session.state.phase == ViewPhase.HIDDEN
        assert session.state.task_handle is None

        view.visible = True
        session.on_visibility_change(True)
        assert len(runner.active) == 1
        assert len(runner.handles) == 2

    def test_close_cancels_task_and_unsubscribes(self, session, store, runner, view):
        """Test closing stops the task and ignores later changes."""
        session.open()
        session.on_visibility_change(True)

        session.close()

        assert session.state.phase == ViewPhase.CLOSED
        assert session.state.task_handle is None
        assert runner.active == []
        assert session.state.rows == []

        renders = view.render_calls
        store.start_timer(30)
        assert view.render_calls == renders

    def test_close_is_idempotent(self, session):
        """Test closing twice is harmless."""
        session.open()
        session.close()
        session.close()
        assert session.state.phase == ViewPhase.CLOSED

    def test_visibility_after_close_ignored(self, session, runner):
        """Test a late hide/show after close installs nothing."""
        session.open()
        session.close()

        session.on_visibility_change(True)

        assert runner.handles == []


class TestTransitions:
    """Tests for the view phase state machine."""

    @pytest.mark.parametrize(
        "current,target",
        [
            (ViewPhase.CLOSED, ViewPhase.OPENED),
            (ViewPhase.OPENED, ViewPhase.VISIBLE),
            (ViewPhase.OPENED, ViewPhase.HIDDEN),
            (ViewPhase.VISIBLE, ViewPhase.HIDDEN),
            (ViewPhase.HIDDEN, ViewPhase.VISIBLE),
            (ViewPhase.VISIBLE, ViewPhase.CLOSED),
            (ViewPhase.HIDDEN, ViewPhase.CLOSED),
        ],
    )
    def test_valid(self, current, target):
        assert validate_transition(current, target) is True

    @pytest.mark.parametrize(
        "current,target",
        [
            (ViewPhase.CLOSED, ViewPhase.VISIBLE),
            (ViewPhase.CLOSED, ViewPhase.HIDDEN),
            (ViewPhase.VISIBLE, ViewPhase.OPENED),
            (ViewPhase.HIDDEN, ViewPhase.OPENED),
        ],
    )
    def test_invalid(self, current, target):
        assert validate_transition(current, target) is False


class TestScenarios:
    """End-to-end scenarios through the store, operations and view."""

    def test_tea_timer_ticks(self, session, store, runner, view, clock):
        """Test the remaining cell of a fresh timer counts down once per tick."""
        store.start_timer(60, description="tea")
        session.open()
        session.on_visibility_change(True)

        row = session.state.rows[0]
        assert row.cells[2] == "0:01:00"
        assert row.cells[3] == ""
        assert row.cells[4] == "tea"
        start, end = row.cells[0], row.cells[1]

        clock.advance(1)
        runner.fire()

        assert row.cells[2] == "0:00:59"
        assert row.cells[:2] == [start, end]
        assert row.cells[3:] == ["", "tea"]

    def test_toggle_acknowledge_reverts(self, session, store, view):
        """Test acknowledging through the key updates the row via the change hook."""
        timer = store.start_timer(60, description="tea")
        session.open()
        view.cursor = 1

        session.dispatch("a")

        assert timer.acknowledged is True
        row = session.state.row_for(timer)
        assert row.cells[3] == "✔"
        assert view.rows[0].cells[3] == "✔"

    def test_cancel_on_empty_table(self, session, store, reported):
        """Test cancel with no rows reports and leaves the store alone."""
        session.open()

        session.dispatch("k")

        assert len(store) == 0
        assert reported and "No timer" in reported[0]

    def test_cancel_removes_row(self, session, store, view):
        """Test cancelling the focal timer drops its row."""
        a = store.start_timer(30, description="a")
        b = store.start_timer(60, description="b")
        session.open()
        view.cursor = 1

        session.dispatch("k")

        assert store.timers() == [b]
        assert [row.id for row in session.state.rows] == [b]
        assert view.cursor == 1

    def test_clone_keeps_cursor_on_original(self, session, store, view):
        """Test the cursor stays on the cloned timer after the new row appears."""
        a = store.start_timer(30, description="a")
        session.open()
        view.cursor = 1

        session.dispatch("c")

        assert len(session.state.rows) == 2
        assert view.id_at_cursor() is a
        assert session.state.rows[1].cells[4] == "a"

    def test_reschedule(self, session, store, view, prompter, clock):
        """Test rescheduling swaps in a timer with the new duration."""
        old = store.start_timer(30, description="a")
        session.open()
        view.cursor = 1
        prompter.answers.append("2m")

        session.dispatch("s")

        (new,) = store.timers()
        assert new is not old
        assert new.description == "a"
        assert session.state.rows[0].cells[2] == "0:02:00"

    def test_invalid_duration_reported(self, session, store, prompter, reported):
        """Test a bad duration is shown to the user and creates nothing."""
        session.open()
        prompter.answers.append("soon")

        session.dispatch("+")

        assert len(store) == 0
        assert reported == ["Invalid duration: 'soon'"]

    def test_manual_refresh(self, session, store, view, clock):
        """Test g rebuilds the rows."""
        store.start_timer(60)
        session.open()
        renders = view.render_calls

        session.dispatch("g")

        assert view.render_calls == renders + 1

    def test_read_notification(self, session, store, view):
        """Test a timer read notification resolves the focal timer without side effects."""
        timer = store.start_timer(60)
        session.open()
        view.cursor = 1
        renders = view.render_calls

        store.notify_read(timer)

        assert view.render_calls == renders
        assert session.timer_at_cursor() is timer
