"""
Main Window for the Timer Board application.
"""
from __future__ import annotations

from typing import Optional

import structlog
from PySide6.QtCore import QEvent, Slot
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMainWindow, QMessageBox

from ..config import ViewSettings, load_settings
from ..core import (
    InteractiveTimerOperations,
    TimerStore,
    TimerViewSession,
)
from .dialogs import QtPrompter
from .widgets import QtTaskRunner, TimerTableWidget

log = structlog.get_logger()

# (menu label, key)
TIMER_ACTIONS = [
    ("New Timer...", "+"),
    ("New Timer with Details...", "*"),
    (None, None),
    ("Cancel Timer", "k"),
    ("Clone Timer", "c"),
    ("Reschedule Timer...", "s"),
    ("Toggle Acknowledged", "a"),
    ("Edit Description...", "e"),
    (None, None),
    ("Remove Finished Timers", "R"),
]


class MainWindow(QMainWindow):
    """Main application window showing the timer table."""

    def __init__(self, store: TimerStore, settings: Optional[ViewSettings] = None):
        super().__init__()

        self.store = store
        self.settings = settings or load_settings()

        self.setWindowTitle(self.settings.view_title)
        self.setMinimumSize(640, 320)
        self.resize(820, 420)

        self.table = TimerTableWidget()
        self.setCentralWidget(self.table)

        prompter = QtPrompter(self)
        self.operations = InteractiveTimerOperations(store, prompter)
        self.session = TimerViewSession(
            source=store,
            view=self.table,
            runner=QtTaskRunner(self.table),
            operations=self.operations,
            prompter=prompter,
            reporter=self.report_rejection,
            settings=self.settings,
            clock=store.clock,
        )

        self._setup_menus()
        self._setup_connections()

        self.session.open()
        self._update_status()

    def _setup_menus(self):
        """Set up the menu bar."""
        menubar = self.menuBar()

        # Timers menu
        timers_menu = menubar.addMenu("&Timers")
        for label, key in TIMER_ACTIONS:
            if label is None:
                timers_menu.addSeparator()
                continue
            # Text after the tab is only a hint, keys are handled by the table
            action = QAction(f"{label}\t{key}", self)
            action.triggered.connect(lambda checked=False, k=key: self.session.dispatch(k))
            timers_menu.addAction(action)

        timers_menu.addSeparator()

        exit_action = QAction("Exit", self)
        exit_action.setShortcut(QKeySequence.StandardKey.Quit)
        exit_action.triggered.connect(self.close)
        timers_menu.addAction(exit_action)

        # View menu
        view_menu = menubar.addMenu("&View")

        refresh_action = QAction("Refresh\tg", self)
        refresh_action.triggered.connect(self.on_refresh)
        view_menu.addAction(refresh_action)

        # Help menu
        help_menu = menubar.addMenu("&Help")

        about_action = QAction("About", self)
        about_action.triggered.connect(self.on_about)
        help_menu.addAction(about_action)

    def _setup_connections(self):
        """Set up signal/slot connections."""
        self.table.set_key_handler(self.session.dispatch)
        self.table.visibility_changed.connect(self.on_table_visibility_changed)
        self.store.timers_changed.connect(self._update_status)

    def _update_status(self):
        count = len(self.store)
        self.statusBar().showMessage(f"{count} timer(s)")

    # =========================================================================
    # Slots
    # =========================================================================

    def report_rejection(self, message: str) -> None:
        """Tell the user a command could not run."""
        self.statusBar().showMessage(message)
        QMessageBox.information(self, self.settings.view_title, message)

    @Slot(bool)
    def on_table_visibility_changed(self, visible: bool):
        self.session.on_visibility_change(visible)

    @Slot()
    def on_refresh(self):
        self.session.revert()
        self._update_status()

    @Slot()
    def on_about(self):
        """Show about dialog."""
        QMessageBox.about(
            self,
            "About Timer Board",
            "Timer Board\n\n"
            "A live table of countdown timers.\n\n"
            "Keys:\n"
            "- k / r: cancel timer\n"
            "- R: remove finished timers\n"
            "- + / t: new timer\n"
            "- * / T: new timer with details\n"
            "- c: clone timer\n"
            "- a: toggle acknowledged\n"
            "- e: edit description\n"
            "- s: reschedule timer\n"
            "- g: refresh"
        )

    def changeEvent(self, event):
        """Track minimize/restore, which does not always hide the table."""
        super().changeEvent(event)
        session = getattr(self, "session", None)
        if event.type() == QEvent.Type.WindowStateChange and session and session.is_open:
            session.on_visibility_change()

    def closeEvent(self, event):
        """Handle window close."""
        self.session.close()
        try:
            self.store.timers_changed.disconnect(self._update_status)
        except (RuntimeError, TypeError):
            log.debug("status_update_already_disconnected")
        event.accept()
