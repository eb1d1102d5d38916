"""MainWindow — top-level window assembling all UI components."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QStatusBar,
    QWidget,
)

from deckmate.core.board import Board
from deckmate.core.cards import Card
from deckmate.core.events import Event
from deckmate.core.move import Move
from deckmate.core.rules import GameState
from deckmate.game.controller import GameController
from deckmate.ui.board_scene import BoardView
from deckmate.ui.card_panel import CardPanel

_LOGGER = logging.getLogger(__name__)


@dataclass
class ViewSettings:
    """User-adjustable view options."""

    show_legal_moves: bool = True
    flipped: bool = False


class MainWindow(QMainWindow):
    """Main application window: one local game, both sides at the mouse."""

    def __init__(
        self,
        controller: GameController | None = None,
        settings: ViewSettings | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Deckmate")
        self.setMinimumSize(820, 600)
        self.resize(1000, 700)

        self._controller = controller if controller is not None else GameController()
        self._settings = settings if settings is not None else ViewSettings()

        self._setup_ui()
        self._setup_menu()
        self._connect_signals()
        self._connect_game_events()

        self._apply_settings()
        self._refresh()

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        self._board_view = BoardView()
        root.addWidget(self._board_view, stretch=3)

        self._card_panel = CardPanel()
        self._card_panel.setFixedWidth(260)
        root.addWidget(self._card_panel)

        self._status = QStatusBar()
        self.setStatusBar(self._status)
        self._status_label = QLabel("Ready")
        self._status.addWidget(self._status_label)

    def _setup_menu(self) -> None:
        menu_bar = self.menuBar()
        assert menu_bar is not None

        menu_game = menu_bar.addMenu("&Game")
        assert menu_game is not None
        act_new = QAction("New game", self)
        act_new.setShortcut("Ctrl+N")
        act_new.triggered.connect(self._on_new_game)
        menu_game.addAction(act_new)

        menu_view = menu_bar.addMenu("&View")
        assert menu_view is not None
        act_flip = QAction("Flip board", self)
        act_flip.setShortcut("Ctrl+F")
        act_flip.triggered.connect(self._on_flip)
        menu_view.addAction(act_flip)

        self._act_legal = QAction("Show legal moves", self)
        self._act_legal.setCheckable(True)
        self._act_legal.setChecked(self._settings.show_legal_moves)
        self._act_legal.toggled.connect(self._on_toggle_legal_moves)
        menu_view.addAction(self._act_legal)

    def _connect_signals(self) -> None:
        self._board_view.move_made.connect(self._on_user_move)
        self._card_panel.new_game_clicked.connect(self._on_new_game)
        self._card_panel.flip_clicked.connect(self._on_flip)

    def _connect_game_events(self) -> None:
        events = self._controller.events
        events.on_card.append(self._on_card)
        events.on_game_over.append(self._on_game_over)
        events.on_restart.append(self._on_restart)

    # ── Accessors ────────────────────────────────────────────────────────

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def board_view(self) -> BoardView:
        return self._board_view

    @property
    def card_panel(self) -> CardPanel:
        return self._card_panel

    @property
    def settings(self) -> ViewSettings:
        return self._settings

    # ── Slots ────────────────────────────────────────────────────────────

    def _on_user_move(self, move: Move) -> None:
        """Handle a move from the board UI."""
        if not self._controller.submit_move(move):
            self._status_label.setText(f"Illegal move: {move}")
            return
        self._refresh()

    def _on_new_game(self) -> None:
        self._controller.new_game()

    def _on_flip(self) -> None:
        self._settings.flipped = not self._settings.flipped
        self._board_view.board_scene.set_flipped(self._settings.flipped)

    def _on_toggle_legal_moves(self, checked: bool) -> None:
        self._settings.show_legal_moves = checked
        self._board_view.board_scene.set_show_legal_moves(checked)

    # ── Game callbacks ───────────────────────────────────────────────────

    def _on_card(self, card: Card, event: Event | None, board: Board) -> None:
        if event is None:
            self._status_label.setText(f"{board.active} drew {card.title}: no effect")
        else:
            self._status_label.setText(f"{board.active} drew {card.title}: {event.describe()}")

    def _on_game_over(self, state: GameState) -> None:
        _LOGGER.info("Game finished: %s", state)
        self._status_label.setText(f"Game over: {state}")

    def _on_restart(self, board: Board) -> None:
        self._status_label.setText("New game")
        self._refresh()

    # ── Helpers ──────────────────────────────────────────────────────────

    def _apply_settings(self) -> None:
        scene = self._board_view.board_scene
        scene.set_flipped(self._settings.flipped)
        scene.set_show_legal_moves(self._settings.show_legal_moves)

    def _refresh(self) -> None:
        snapshot = self._controller.snapshot()
        scene = self._board_view.board_scene
        scene.set_board(self._controller.board)
        scene.set_interactive(not snapshot.state.is_over)
        self._card_panel.update_from(snapshot)
