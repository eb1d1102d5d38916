"""CardPanel — turn, game state, last card and both decks."""

from __future__ import annotations

from collections.abc import Sequence

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from deckmate.core.cards import Card, summarize
from deckmate.game.snapshot import GameSnapshot


def format_deck(cards: Sequence[Card]) -> str:
    """One line per distinct card, e.g. ``Sprint ×2``."""
    lines = [f"{card.title} ×{count}" for card, count in summarize(cards)]
    return "\n".join(lines) if lines else "—"


class CardPanel(QWidget):
    """Side panel: status text, the last drawn card, and deck contents.

    Signals:
        new_game_clicked(): The user asked for a fresh game.
        flip_clicked(): The user asked to flip the board.
    """

    new_game_clicked = pyqtSignal()
    flip_clicked = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(8)

        self._turn_label = QLabel()
        self._turn_label.setFont(QFont("DejaVu Sans", 12, QFont.Weight.Bold))
        layout.addWidget(self._turn_label)

        last_box = QGroupBox("Last card")
        last_layout = QVBoxLayout(last_box)
        self._card_title = QLabel("—")
        self._card_title.setObjectName("cardTitle")
        last_layout.addWidget(self._card_title)
        self._event_label = QLabel()
        self._event_label.setWordWrap(True)
        last_layout.addWidget(self._event_label)
        layout.addWidget(last_box)

        white_box = QGroupBox("White deck")
        white_layout = QVBoxLayout(white_box)
        self._white_deck = QLabel()
        self._white_deck.setAlignment(Qt.AlignmentFlag.AlignTop)
        white_layout.addWidget(self._white_deck)
        layout.addWidget(white_box)

        black_box = QGroupBox("Black deck")
        black_layout = QVBoxLayout(black_box)
        self._black_deck = QLabel()
        self._black_deck.setAlignment(Qt.AlignmentFlag.AlignTop)
        black_layout.addWidget(self._black_deck)
        layout.addWidget(black_box)

        layout.addStretch(1)

        row = QHBoxLayout()
        self._btn_new = QPushButton("New game")
        self._btn_new.setMinimumHeight(36)
        self._btn_new.clicked.connect(self.new_game_clicked)
        row.addWidget(self._btn_new)

        self._btn_flip = QPushButton("Flip board")
        self._btn_flip.setMinimumHeight(36)
        self._btn_flip.clicked.connect(self.flip_clicked)
        row.addWidget(self._btn_flip)
        layout.addLayout(row)

    # ── Public API ───────────────────────────────────────────────────────

    def update_from(self, snapshot: GameSnapshot) -> None:
        state = snapshot.state
        if state.is_over:
            self._turn_label.setText(str(state))
        else:
            self._turn_label.setText(f"{snapshot.active.name.capitalize()} to move")

        card = snapshot.last_card
        self._card_title.setText(card.title if card is not None else "—")
        if state.is_over:
            self._event_label.setText("")
        elif snapshot.last_event is not None:
            self._event_label.setText(snapshot.last_event.describe())
        elif card is not None:
            self._event_label.setText("Nothing happened.")
        else:
            self._event_label.setText("")

        self._white_deck.setText(format_deck(snapshot.white_cards))
        self._black_deck.setText(format_deck(snapshot.black_cards))

    # Read-only accessors used by tests

    @property
    def turn_text(self) -> str:
        return self._turn_label.text()

    @property
    def card_text(self) -> str:
        return self._card_title.text()

    @property
    def event_text(self) -> str:
        return self._event_label.text()
