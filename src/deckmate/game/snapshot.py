"""GameSnapshot — a read-only view of a board for whoever displays it."""

from __future__ import annotations

from dataclasses import dataclass

from deckmate.core.board import Board
from deckmate.core.cards import Card
from deckmate.core.enums import Color
from deckmate.core.events import Event
from deckmate.core.move import Move
from deckmate.core.piece import Piece
from deckmate.core.rules import GameState
from deckmate.core.types import Location


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a viewer needs to draw the game.

    ``moves`` is only filled for the viewer whose turn it is; spectators
    (``viewer is None``) and the waiting player get an empty listing.
    """

    viewer: Color | None
    cells: tuple[tuple[Piece | None, ...], ...]
    active: Color
    state: GameState
    moves: tuple[tuple[Location, tuple[Move, ...]], ...]
    check: Location | None
    last_move: Move | None
    last_event: Event | None
    last_card: Card | None
    white_cards: tuple[Card, ...]
    black_cards: tuple[Card, ...]

    def piece_at(self, loc: Location) -> Piece | None:
        return self.cells[loc.rank][loc.file]

    @property
    def my_cards(self) -> tuple[Card, ...]:
        """The viewer's own deck (white's for spectators)."""
        return self.black_cards if self.viewer == Color.BLACK else self.white_cards

    @property
    def opponent_cards(self) -> tuple[Card, ...]:
        return self.white_cards if self.viewer == Color.BLACK else self.black_cards


def build_snapshot(board: Board, viewer: Color | None = None) -> GameSnapshot:
    move_set = board.legal_moves_for_active_color()
    state = board.game_state(move_set)
    visible = move_set if viewer == board.active else []
    return GameSnapshot(
        viewer=viewer,
        cells=tuple(tuple(row) for row in board.cells),
        active=board.active,
        state=state,
        moves=tuple((loc, tuple(moves)) for loc, moves in visible),
        check=board.get_check(),
        last_move=board.last_move,
        last_event=board.last_event,
        last_card=board.last_card,
        white_cards=tuple(board.white_cards),
        black_cards=tuple(board.black_cards),
    )
