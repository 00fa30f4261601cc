"""
Widget components for the Timer Board application.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

import shiboken6
from PySide6.QtCore import QObject, Qt, QTimer, Signal
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHeaderView,
    QTableWidget,
    QTableWidgetItem,
    QWidget,
)

from ..core import (
    COLUMN_TITLES,
    REMAINING_CELL,
    TIMER_VIEW_KIND,
    RowRecord,
    Timer,
    sort_key,
)
from ..core.models import ACK_CELL

SORT_ROLE = Qt.ItemDataRole.UserRole + 1
TIMER_ROLE = Qt.ItemDataRole.UserRole


class QtTaskRunner:
    """Runs repeating callbacks with QTimers owned by a parent object."""

    def __init__(self, parent: Optional[QObject] = None):
        self._parent = parent

    def schedule_repeating(self, interval: float, callback: Callable[[], None]) -> QTimer:
        timer = QTimer(self._parent)
        timer.setInterval(max(1, int(interval * 1000)))
        timer.timeout.connect(callback)
        timer.start()
        return timer

    def cancel(self, handle: Any) -> None:
        # The QTimer dies with its parent, so it may already be gone
        if shiboken6.isValid(handle):
            handle.stop()
            handle.deleteLater()


class TimerTableItem(QTableWidgetItem):
    """Table item sorting by SORT_ROLE data instead of its display text."""

    def __lt__(self, other: QTableWidgetItem) -> bool:
        mine = self.data(SORT_ROLE)
        theirs = other.data(SORT_ROLE)
        if mine is None or theirs is None or type(mine) is not type(theirs):
            return super().__lt__(other)
        return mine < theirs


class TimerTableWidget(QTableWidget):
    """Sortable table of timer rows with single-key commands."""

    view_kind = TIMER_VIEW_KIND

    visibility_changed = Signal(bool)  # visible

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self._remaining_items: dict[Timer, QTableWidgetItem] = {}
        self._key_handler: Optional[Callable[[str], bool]] = None

        self.setColumnCount(len(COLUMN_TITLES))
        self.setHorizontalHeaderLabels(list(COLUMN_TITLES))
        self.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.verticalHeader().setVisible(False)

        header = self.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(len(COLUMN_TITLES) - 1, QHeaderView.ResizeMode.Stretch)

        self.setSortingEnabled(True)
        self.sortByColumn(REMAINING_CELL, Qt.SortOrder.AscendingOrder)

    def set_key_handler(self, handler: Optional[Callable[[str], bool]]) -> None:
        """Set the callable receiving typed characters. It returns True if it handled the key."""
        self._key_handler = handler

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(self, rows: Sequence[RowRecord]) -> None:
        """Rebuild every row and re-apply the current sort."""
        sorting = self.isSortingEnabled()
        self.setSortingEnabled(False)

        self.clearContents()
        self.setRowCount(len(rows))
        self._remaining_items = {}

        for i, row in enumerate(rows):
            for col, text in enumerate(row.cells):
                item = TimerTableItem(text)
                item.setData(SORT_ROLE, sort_key(row.id, col))
                item.setData(TIMER_ROLE, row.id)
                if col == ACK_CELL:
                    item.setTextAlignment(Qt.AlignmentFlag.AlignCenter)
                self.setItem(i, col, item)
            self._remaining_items[row.id] = self.item(i, REMAINING_CELL)

        self.setSortingEnabled(sorting)

    def refresh_remaining(self, rows: Sequence[RowRecord]) -> None:
        """Update the Remaining cells in place, keeping row order and scroll position."""
        # Sort keys are end times, which a tick never changes, so rows stay put
        for row in rows:
            item = self._remaining_items.get(row.id)
            if item is not None:
                item.setText(row.cells[REMAINING_CELL])

    # =========================================================================
    # Cursor
    # =========================================================================

    def cursor_line(self) -> int:
        return self.currentRow() + 1 if self.currentRow() >= 0 else 0

    def set_cursor_line(self, line: int) -> None:
        if 1 <= line <= self.rowCount():
            self.setCurrentCell(line - 1, max(self.currentColumn(), 0))

    def line_count(self) -> int:
        return self.rowCount()

    def line_of(self, timer: Timer) -> Optional[int]:
        for row in range(self.rowCount()):
            item = self.item(row, 0)
            if item is not None and item.data(TIMER_ROLE) is timer:
                return row + 1
        return None

    def id_at_cursor(self) -> Optional[Timer]:
        row = self.currentRow()
        if row < 0:
            return None
        item = self.item(row, 0)
        if item is None:
            return None
        return item.data(TIMER_ROLE)

    def at_end(self) -> bool:
        return self.rowCount() > 0 and self.currentRow() == self.rowCount() - 1

    def goto_end(self) -> None:
        if self.rowCount() > 0:
            self.setCurrentCell(self.rowCount() - 1, max(self.currentColumn(), 0))

    # =========================================================================
    # Liveness
    # =========================================================================

    def is_alive(self) -> bool:
        return shiboken6.isValid(self)

    def is_visible(self) -> bool:
        return self.isVisible() and not self.window().isMinimized()

    # =========================================================================
    # Events
    # =========================================================================

    def showEvent(self, event):
        super().showEvent(event)
        self.visibility_changed.emit(True)

    def hideEvent(self, event):
        super().hideEvent(event)
        self.visibility_changed.emit(False)

    def keyPressEvent(self, event):
        """Send plain characters to the key handler, everything else to the table."""
        text = event.text()
        modifiers = event.modifiers() & ~(
            Qt.KeyboardModifier.ShiftModifier | Qt.KeyboardModifier.KeypadModifier
        )
        if (
            text
            and modifiers == Qt.KeyboardModifier.NoModifier
            and self._key_handler is not None
            and self._key_handler(text)
        ):
            event.accept()
            return
        super().keyPressEvent(event)
