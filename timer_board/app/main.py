"""
Main entry point for the Timer Board application.
"""
import argparse
import sys

import structlog
from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt

from ..config import load_settings
from ..core import TimerStore
from ..logging_config import setup_logging
from .main_window import MainWindow

log = structlog.get_logger()

# (seconds, description)
DEMO_TIMERS = [
    (60, "tea"),
    (25 * 60, "focus block"),
    (5, "stretch"),
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Live table of countdown timers")
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Start with a few sample timers"
    )
    parser.add_argument(
        "--log-format",
        choices=["dev", "json"],
        default=None,
        help="Log output format (default: TIMER_BOARD_LOG_FORMAT or dev)"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: TIMER_BOARD_LOG_LEVEL or INFO)"
    )
    return parser


def main():
    """Run the Timer Board application."""
    args, qt_args = build_parser().parse_known_args()
    setup_logging(args.log_format, args.log_level)

    # Enable high DPI scaling
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication([sys.argv[0], *qt_args])

    # Set application metadata
    app.setApplicationName("Timer Board")
    app.setOrganizationName("TimerBoard")
    app.setApplicationVersion("1.0.0")

    # Apply dark style
    app.setStyle("Fusion")

    # Create dark palette
    from PySide6.QtGui import QPalette, QColor

    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, QColor(53, 53, 53))
    palette.setColor(QPalette.ColorRole.WindowText, Qt.GlobalColor.white)
    palette.setColor(QPalette.ColorRole.Base, QColor(25, 25, 25))
    palette.setColor(QPalette.ColorRole.AlternateBase, QColor(53, 53, 53))
    palette.setColor(QPalette.ColorRole.ToolTipBase, Qt.GlobalColor.white)
    palette.setColor(QPalette.ColorRole.ToolTipText, Qt.GlobalColor.white)
    palette.setColor(QPalette.ColorRole.Text, Qt.GlobalColor.white)
    palette.setColor(QPalette.ColorRole.Button, QColor(53, 53, 53))
    palette.setColor(QPalette.ColorRole.ButtonText, Qt.GlobalColor.white)
    palette.setColor(QPalette.ColorRole.Highlight, QColor(42, 130, 218))
    palette.setColor(QPalette.ColorRole.HighlightedText, Qt.GlobalColor.black)
    app.setPalette(palette)

    settings = load_settings()
    store = TimerStore()

    if args.demo:
        for seconds, description in DEMO_TIMERS:
            store.start_timer(seconds, description=description)

    window = MainWindow(store, settings)
    window.show()

    log.info("timer_board_started", timers=len(store), refresh_interval=settings.refresh_interval)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
