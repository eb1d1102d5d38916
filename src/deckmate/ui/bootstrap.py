"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

_LOGGER = logging.getLogger(__name__)


def _configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings and theme."""
    from deckmate.ui.theme import APP_STYLE

    app.setApplicationName("Deckmate")
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)


def run_application(argv: list[str] | None = None) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from deckmate.ui.main_window import MainWindow

    _configure_logging()
    app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app)
    _LOGGER.info("Starting Deckmate")

    window = MainWindow()
    window.show()

    return app.exec()
