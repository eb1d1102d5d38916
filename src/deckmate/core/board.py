"""Board — piece placement plus turn, castling, en passant and card decks."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator

from deckmate.core.cards import Card, generate_cards
from deckmate.core.config import DEFAULT_CONFIG, RuleConfig
from deckmate.core.enums import CastlingRights, Color, PieceType
from deckmate.core.event_generator import EventGenerator
from deckmate.core.events import (
    BishopToKnight,
    Event,
    KingMove,
    KnightToBishop,
    PawnRun,
    PawnsToQueen,
    QueenToPawns,
    QueenToRooks,
    RooksToQueen,
    Rotate,
    Swap,
)
from deckmate.core.move import Move
from deckmate.core.move_generator import MoveGenerator
from deckmate.core.piece import Piece
from deckmate.core.rules import GameState, MoveSet, Rules
from deckmate.core.types import A1, A8, H1, H8, Location, iter_board

_LOGGER = logging.getLogger(__name__)

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

_ROOK_CORNERS: dict[Location, CastlingRights] = {
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
}

Cells = list[list[Piece | None]]


def _empty_cells() -> Cells:
    return [[None] * 8 for _ in range(8)]


class Board:
    """Mutable 8x8 board: the whole state of one game.

    Mutated in place by exactly two operations, :meth:`apply_move` and
    :meth:`apply_event`. Their pure counterparts :meth:`piece_moved` and
    :meth:`event_applied` return a new board and are what the legality and
    event-safety checks simulate with.
    """

    __slots__ = (
        "cells",
        "active",
        "castling",
        "en_passant",
        "half_move_count",
        "last_move",
        "last_event",
        "last_card",
        "white_cards",
        "black_cards",
    )

    def __init__(
        self,
        cells: Cells | None = None,
        active: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Location | None = None,
        half_move_count: int = 0,
        white_cards: list[Card] | None = None,
        black_cards: list[Card] | None = None,
    ) -> None:
        self.cells: Cells = cells if cells is not None else _empty_cells()
        self.active = active
        self.castling = castling
        self.en_passant = en_passant
        self.half_move_count = half_move_count
        self.last_move: Move | None = None
        self.last_event: Event | None = None
        self.last_card: Card | None = None
        self.white_cards: list[Card] = white_cards if white_cards is not None else []
        self.black_cards: list[Card] = black_cards if black_cards is not None else []

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(
        cls,
        rng: random.Random | None = None,
        config: RuleConfig = DEFAULT_CONFIG,
    ) -> Board:
        """Standard starting position with two freshly dealt decks."""
        rng = rng if rng is not None else random.Random()
        b = cls(
            castling=CastlingRights.ALL,
            white_cards=generate_cards(rng, config=config),
            black_cards=generate_cards(rng, config=config),
        )
        for f, pt in enumerate(_BACK_RANK):
            b[Location(f, 0)] = Piece(pt, Color.WHITE)
            b[Location(f, 1)] = Piece(PieceType.PAWN, Color.WHITE)
            b[Location(f, 6)] = Piece(PieceType.PAWN, Color.BLACK)
            b[Location(f, 7)] = Piece(pt, Color.BLACK)
        return b

    # -- Element access -----------------------------------------------------

    def __getitem__(self, loc: Location) -> Piece | None:
        return self.cells[loc.rank][loc.file]

    def __setitem__(self, loc: Location, piece: Piece | None) -> None:
        self.cells[loc.rank][loc.file] = piece

    def is_empty(self, loc: Location) -> bool:
        return self.cells[loc.rank][loc.file] is None

    # -- Query helpers ------------------------------------------------------

    def iter_locations(self) -> Iterator[tuple[Location, Piece | None]]:
        """Every square in scan order (rank ascending, file ascending)."""
        for loc in iter_board():
            yield loc, self[loc]

    def iter_empty_locations(self) -> Iterator[Location]:
        for loc, piece in self.iter_locations():
            if piece is None:
                yield loc

    def iter_pieces(self, color: Color | None = None) -> Iterator[tuple[Location, Piece]]:
        """Occupied squares in scan order, optionally restricted to *color*."""
        for loc, piece in self.iter_locations():
            if piece is not None and (color is None or piece.color == color):
                yield loc, piece

    def king_location(self, color: Color) -> Location:
        """Return the single king square for *color*."""
        for loc, piece in self.iter_pieces(color):
            if piece.piece_type == PieceType.KING:
                return loc
        raise ValueError(f"No {color.name} king on board")

    def cards_of(self, color: Color) -> list[Card]:
        """The deck of *color*; the last element is drawn next."""
        return self.white_cards if color == Color.WHITE else self.black_cards

    # -- Moves and game state -----------------------------------------------

    def legal_moves_for_active_color(self) -> list[tuple[Location, list[Move]]]:
        return MoveGenerator(self).all_legal_moves()

    def game_state(self, move_set: MoveSet) -> GameState:
        return Rules.game_state(self, move_set)

    def is_game_over(self) -> bool:
        return Rules.is_game_over(self)

    def can_attack_king(self, color: Color) -> bool:
        return MoveGenerator(self).can_attack_king(color)

    def get_check(self) -> Location | None:
        """Square of the active king if an enemy piece could capture it."""
        for move in MoveGenerator(self).all_pseudo_legal_moves(self.active.opposite):
            if move.attack is not None and move.attack[1].is_king:
                return move.attack[0]
        return None

    # -- Move application ---------------------------------------------------

    def piece_moved(self, mv: Move) -> Board:
        """The board after *mv*; ``self`` is left untouched."""
        board = self.copy()
        board.en_passant = None
        if mv.attack is not None:
            board[mv.attack[0]] = None
        board[mv.from_loc] = None
        if mv.castle is not None:
            rook_from, rook_to = mv.castle
            board[rook_from] = None
            board[rook_to] = Piece(PieceType.ROOK, mv.piece.color)

        piece = mv.piece
        if piece.piece_type == PieceType.PAWN:
            dy = mv.to_loc.rank - mv.from_loc.rank
            if dy in (2, -2):
                board.en_passant = mv.from_loc + (0, dy // 2)
        elif piece.piece_type == PieceType.ROOK:
            board._revoke_corner(mv.from_loc)
        elif piece.piece_type == PieceType.KING:
            board.castling &= ~CastlingRights.both(piece.color)

        if mv.attack is not None:
            board._revoke_corner(mv.attack[0])
        if mv.promote_to is not None:
            piece = piece.with_type(mv.promote_to)
        board[mv.to_loc] = piece

        board.last_move = mv
        board.last_event = None
        board.active = board.active.opposite
        board.half_move_count += 1
        return board

    def apply_move(self, mv: Move) -> None:
        """Apply a move taken from :meth:`legal_moves_for_active_color`."""
        self._assign(self.piece_moved(mv))

    # -- Events -------------------------------------------------------------

    def event_applied(self, event: Event) -> Board:
        """The board after *event*; the side to move does not change."""
        board = self.copy()
        color = self.active

        if isinstance(event, Swap):
            board[event.first] = self[event.second]
            board[event.second] = self[event.first]
            board._revoke_corner(event.first)
            board._revoke_corner(event.second)
        elif isinstance(event, KnightToBishop):
            board._transmute(event.loc, PieceType.BISHOP)
        elif isinstance(event, BishopToKnight):
            board._transmute(event.loc, PieceType.KNIGHT)
        elif isinstance(event, RooksToQueen):
            board._transmute(event.keep, PieceType.QUEEN)
            board[event.remove] = None
            board.castling &= ~CastlingRights.both(color)
        elif isinstance(event, QueenToRooks):
            board._transmute(event.queen, PieceType.ROOK)
            board[event.extra] = board[event.queen]
        elif isinstance(event, PawnRun):
            board._relocate(event.origin, event.target)
        elif isinstance(event, PawnsToQueen):
            board._transmute(event.pawns[0], PieceType.QUEEN)
            for loc in event.pawns[1:]:
                board[loc] = None
        elif isinstance(event, QueenToPawns):
            queen = self[event.queen]
            assert queen is not None
            board[event.queen] = None
            for file in range(8):
                board[Location(file, event.rank)] = queen.with_type(PieceType.PAWN)
        elif isinstance(event, Rotate):
            board._relocate(event.origin, event.target)
            board._revoke_corner(event.origin)
        elif isinstance(event, KingMove):
            board._relocate(event.origin, event.target)
            board.castling &= ~CastlingRights.both(color)
        else:
            raise TypeError(f"Unknown event: {event!r}")

        board.last_event = event
        return board

    def apply_event(self, event: Event) -> None:
        self._assign(self.event_applied(event))

    def draw_card(
        self,
        rng: random.Random,
        config: RuleConfig = DEFAULT_CONFIG,
    ) -> Event | None:
        """Draw the active side's next card and apply the event it yields.

        The deck is refilled as soon as it runs out. Returns the applied
        event, or ``None`` for a skip card or when no candidate is valid.
        """
        cards = self.cards_of(self.active)
        card = cards.pop()
        self.last_card = card
        if not cards:
            cards.extend(generate_cards(rng, config=config))

        event = EventGenerator(self, rng).generate(card)
        _LOGGER.debug("%s drew %s -> %s", self.active, card.name, event)
        if event is not None:
            self.apply_event(event)
        return event

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board(
            cells=[row.copy() for row in self.cells],
            active=self.active,
            castling=self.castling,
            en_passant=self.en_passant,
            half_move_count=self.half_move_count,
            white_cards=self.white_cards.copy(),
            black_cards=self.black_cards.copy(),
        )
        b.last_move = self.last_move
        b.last_event = self.last_event
        b.last_card = self.last_card
        return b

    def _assign(self, other: Board) -> None:
        for name in self.__slots__:
            setattr(self, name, getattr(other, name))

    def _revoke_corner(self, loc: Location) -> None:
        right = _ROOK_CORNERS.get(loc)
        if right is not None:
            self.castling &= ~right

    def _transmute(self, loc: Location, piece_type: PieceType) -> None:
        piece = self[loc]
        assert piece is not None
        self[loc] = piece.with_type(piece_type)

    def _relocate(self, origin: Location, target: Location) -> None:
        self[target] = self[origin]
        self[origin] = None

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.cells == other.cells
            and self.active == other.active
            and self.castling == other.castling
            and self.en_passant == other.en_passant
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self.cells[rank][file]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
