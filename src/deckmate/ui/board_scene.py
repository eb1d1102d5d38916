"""BoardScene — QGraphicsScene that draws the board, pieces and highlights."""

from __future__ import annotations

from PyQt6.QtCore import QObject, QPointF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPen, QResizeEvent
from PyQt6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
    QGraphicsView,
    QSizePolicy,
    QWidget,
)

from deckmate.core.board import Board
from deckmate.core.enums import Color
from deckmate.core.move import Move
from deckmate.core.types import Location, iter_board
from deckmate.ui.promotion_dialog import PromotionDialog
from deckmate.ui.theme import BoardTheme


class BoardScene(QGraphicsScene):
    """Renders the board, coordinates, highlights, and piece glyphs.

    Signals:
        move_made(Move): Emitted when the user clicks a legal destination.
    """

    move_made = pyqtSignal(Move)

    TILE = 80  # px per square

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.default()
        self._board: Board | None = None
        self._flipped = False

        # Interaction state
        self._selected: Location | None = None
        self._legal_moves: list[Move] = []
        self._interactive = True
        self._show_legal_moves = True

        # Visual layers
        self._square_items: dict[Location, QGraphicsRectItem] = {}
        self._highlight_items: list[QGraphicsRectItem] = []
        self._last_change_items: list[QGraphicsRectItem] = []
        self._check_items: list[QGraphicsRectItem] = []
        self._legal_dot_items: list[QGraphicsRectItem] = []
        self._piece_items: dict[Location, QGraphicsSimpleTextItem] = {}

        self._draw_board()

    # ── Public API ───────────────────────────────────────────────────────

    def set_board(self, board: Board) -> None:
        """Update the displayed board (full redraw of pieces and highlights)."""
        self._board = board
        self._clear_selection()
        self._sync_pieces()
        self._highlight_last_change()
        self._highlight_check()

    def set_interactive(self, interactive: bool) -> None:
        self._interactive = interactive
        if not interactive:
            self._clear_selection()

    def set_flipped(self, flipped: bool) -> None:
        """Flip the board orientation."""
        self._flipped = flipped
        self._draw_board()
        if self._board is not None:
            self.set_board(self._board)

    def is_flipped(self) -> bool:
        return self._flipped

    def set_show_legal_moves(self, visible: bool) -> None:
        """Show or hide legal-move dot highlights."""
        self._show_legal_moves = visible
        if not visible:
            self._clear_items(self._legal_dot_items)

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()

        t = self.TILE
        for loc in iter_board():
            vf, vr = self._visual_coords(loc)
            is_dark = (loc.file + loc.rank) % 2 == 0
            color = self._theme.dark_square if is_dark else self._theme.light_square
            rect = QGraphicsRectItem(vf * t, vr * t, t, t)
            rect.setBrush(QBrush(color))
            rect.setPen(QPen(Qt.PenStyle.NoPen))
            rect.setZValue(0)
            self.addItem(rect)
            self._square_items[loc] = rect

        self.setSceneRect(0, 0, 8 * t, 8 * t)

    def _sync_pieces(self) -> None:
        """Re-create all piece glyphs from the current board."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()

        if self._board is None:
            return

        t = self.TILE
        font = QFont("DejaVu Sans", int(t * 0.6))
        for loc, piece in self._board.iter_pieces():
            item = QGraphicsSimpleTextItem(piece.symbol)
            item.setFont(font)
            white = piece.color == Color.WHITE
            item.setBrush(
                QBrush(self._theme.white_piece if white else self._theme.black_piece)
            )
            item.setPen(QPen(self._theme.black_piece if white else Qt.PenStyle.NoPen))
            bounds = item.boundingRect()
            vf, vr = self._visual_coords(loc)
            item.setPos(
                vf * t + (t - bounds.width()) / 2,
                vr * t + (t - bounds.height()) / 2,
            )
            item.setZValue(1)
            self.addItem(item)
            self._piece_items[loc] = item

    def _highlight_last_change(self) -> None:
        """Mark the squares of the last move, or of the last event if newer."""
        self._clear_items(self._last_change_items)
        board = self._board
        if board is None:
            return
        if board.last_event is not None:
            squares, color = board.last_event.squares(), self._theme.last_event
        elif board.last_move is not None:
            squares = (board.last_move.from_loc, board.last_move.to_loc)
            color = self._theme.last_move
        else:
            return
        for loc in squares:
            rect = self._make_highlight(loc, color)
            rect.setZValue(0.5)
            self._last_change_items.append(rect)

    def _highlight_check(self) -> None:
        self._clear_items(self._check_items)
        if self._board is None:
            return
        king = self._board.get_check()
        if king is not None:
            rect = self._make_highlight(king, self._theme.highlight_check)
            rect.setZValue(0.6)
            self._check_items.append(rect)

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if not self._interactive or self._board is None or event is None:
            return super().mousePressEvent(event)

        loc = self._pos_to_location(event.scenePos())
        if loc is None:
            self._clear_selection()
            return super().mousePressEvent(event)

        # Clicking a legal target → make the move
        if self._selected is not None:
            move = self._find_legal_move(self._selected, loc)
            if move is not None:
                self._clear_selection()
                self.move_made.emit(move)
                return

        piece = self._board[loc]
        if piece is not None and piece.color == self._board.active:
            self._select(loc)
        else:
            self._clear_selection()

        super().mousePressEvent(event)

    # ── Selection / highlights ───────────────────────────────────────────

    def _select(self, loc: Location) -> None:
        self._clear_selection()
        self._selected = loc
        self._highlight_items.append(self._make_highlight(loc, self._theme.highlight_from))

        assert self._board is not None
        for origin, moves in self._board.legal_moves_for_active_color():
            if origin == loc:
                self._legal_moves = moves
                break
        if self._show_legal_moves:
            for m in self._legal_moves:
                dot = self._make_highlight(m.to_loc, self._theme.highlight_to)
                self._legal_dot_items.append(dot)

    def _clear_selection(self) -> None:
        self._selected = None
        self._legal_moves = []
        self._clear_items(self._highlight_items)
        self._clear_items(self._legal_dot_items)

    def _clear_items(self, items: list[QGraphicsRectItem]) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    # ── Move resolution ──────────────────────────────────────────────────

    def _find_legal_move(self, origin: Location, target: Location) -> Move | None:
        """The selected piece's legal move to *target*, asking for promotion."""
        move = next((m for m in self._legal_moves if m.to_loc == target), None)
        if move is None or not move.is_promotion:
            return move

        parent = self.views()[0] if self.views() else None
        promotion = PromotionDialog.ask(move.piece.color, parent)
        if promotion is None:
            return None
        return move.with_promotion(promotion)

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _visual_coords(self, loc: Location) -> tuple[int, int]:
        """Convert board file/rank to visual column/row."""
        if self._flipped:
            return 7 - loc.file, loc.rank
        return loc.file, 7 - loc.rank

    def _pos_to_location(self, pos: QPointF) -> Location | None:
        """Scene position → board location."""
        t = self.TILE
        col = int(pos.x() // t)
        row = int(pos.y() // t)
        if not (0 <= col < 8 and 0 <= row < 8):
            return None
        if self._flipped:
            return Location(7 - col, row)
        return Location(col, 7 - row)

    def _make_highlight(self, loc: Location, color: QColor) -> QGraphicsRectItem:
        """Create a coloured overlay rectangle on a square."""
        t = self.TILE
        vf, vr = self._visual_coords(loc)
        rect = QGraphicsRectItem(vf * t, vr * t, t, t)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect


class BoardView(QGraphicsView):
    """Displays the board scene, handles scaling to fit the widget.

    Signals:
        move_made(Move): Bubbled up from BoardScene.
    """

    move_made = pyqtSignal(Move)

    def __init__(self, parent: QWidget | None = None) -> None:
        self._scene = BoardScene()
        super().__init__(self._scene, parent)

        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(320, 320)

        self._scene.move_made.connect(self.move_made.emit)

    @property
    def board_scene(self) -> BoardScene:
        return self._scene

    def resizeEvent(self, event: QResizeEvent | None) -> None:
        super().resizeEvent(event)
        self.fitInView(self._scene.sceneRect(), Qt.AspectRatioMode.KeepAspectRatio)
