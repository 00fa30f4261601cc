"""
Dialog windows for the Timer Board application.
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QInputDialog,
    QLabel,
    QLineEdit,
    QVBoxLayout,
    QWidget,
)

from ..core.operations import DURATION_HINT


class TimerDetailsDialog(QDialog):
    """Dialog asking for a new timer's duration and description."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self.setWindowTitle("New Timer")
        self.setMinimumWidth(360)

        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)

        form = QFormLayout()

        self.duration_edit = QLineEdit()
        self.duration_edit.setPlaceholderText("5, 90s, 10m, 1h30m, 1:30")
        form.addRow(QLabel(DURATION_HINT))
        form.addRow("Duration:", self.duration_edit)

        self.description_edit = QLineEdit()
        form.addRow("Description:", self.description_edit)

        layout.addLayout(form)

        button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok |
            QDialogButtonBox.StandardButton.Cancel
        )
        button_box.accepted.connect(self.accept)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)

    def get_result(self) -> tuple[str, str]:
        """Get (duration text, description)."""
        return (
            self.duration_edit.text().strip(),
            self.description_edit.text().strip(),
        )


class QtPrompter:
    """Prompts shown as modal dialogs over a parent widget."""

    def __init__(self, parent: Optional[QWidget] = None):
        self.parent = parent

    def ask_text(self, title: str, label: str, default: str = "") -> Optional[str]:
        text, ok = QInputDialog.getText(
            self.parent, title, label, QLineEdit.EchoMode.Normal, default
        )
        if not ok:
            return None
        return text

    def ask_details(self) -> Optional[tuple[str, str]]:
        dialog = TimerDetailsDialog(self.parent)
        if dialog.exec() != TimerDetailsDialog.Accepted:
            return None
        return dialog.get_result()
