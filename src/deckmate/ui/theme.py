"""Visual theme constants and QSS styles for Deckmate."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the chessboard."""

    light_square: QColor
    dark_square: QColor
    highlight_from: QColor  # selected piece origin
    highlight_to: QColor  # legal move targets
    highlight_check: QColor  # king in check
    last_move: QColor  # last move origin / destination
    last_event: QColor  # squares touched by the last event
    white_piece: QColor
    black_piece: QColor
    coord_light: QColor  # coordinate text on dark squares
    coord_dark: QColor  # coordinate text on light squares

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            light_square=QColor(240, 217, 181),  # tan
            dark_square=QColor(181, 136, 99),  # brown
            highlight_from=QColor(255, 255, 0, 100),  # yellow transparent
            highlight_to=QColor(0, 0, 0, 40),  # dark dot overlay
            highlight_check=QColor(255, 0, 0, 120),  # red transparent
            last_move=QColor(155, 199, 0, 105),  # green
            last_event=QColor(90, 140, 255, 105),  # blue
            white_piece=QColor(250, 250, 250),
            black_piece=QColor(20, 20, 20),
            coord_light=QColor(181, 136, 99),
            coord_dark=QColor(240, 217, 181),
        )


APP_STYLE = """
QMainWindow, QWidget {
    background-color: #2b2b2b;
    color: #e0e0e0;
}
QPushButton {
    background-color: #3c3f41;
    border: 1px solid #555;
    border-radius: 4px;
    padding: 6px 12px;
}
QPushButton:hover {
    background-color: #4c5052;
}
QLabel#cardTitle {
    font-size: 15px;
    font-weight: bold;
}
QStatusBar {
    background-color: #232323;
}
"""
