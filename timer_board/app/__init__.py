"""
App module for Timer Board application.
Contains Qt UI components and main window.
"""

from .main_window import MainWindow
from .dialogs import QtPrompter, TimerDetailsDialog
from .widgets import QtTaskRunner, TimerTableWidget

__all__ = [
    "MainWindow",
    "QtPrompter",
    "TimerDetailsDialog",
    "QtTaskRunner",
    "TimerTableWidget",
]
