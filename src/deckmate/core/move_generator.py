"""Pseudo-legal and legal move generation + attack detection."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace
from typing import TYPE_CHECKING

from deckmate.core.enums import CastlingRights, Color, PieceType
from deckmate.core.move import Move
from deckmate.core.piece import Piece
from deckmate.core.types import Location, Offset

if TYPE_CHECKING:
    from deckmate.core.board import Board


KNIGHT_OFFSETS: tuple[Offset, ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[Offset, ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[Offset, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[Offset, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[Offset, ...] = BISHOP_DIRS + ROOK_DIRS

_DIAGONAL_SLIDERS = (PieceType.BISHOP, PieceType.QUEEN)
_ORTHOGONAL_SLIDERS = (PieceType.ROOK, PieceType.QUEEN)


class MoveGenerator:
    """Generates moves for a given :class:`Board`.

    Legality checks simulate each candidate on a scratch copy of the board;
    the board passed in is never modified.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def all_legal_moves(self) -> list[tuple[Location, list[Move]]]:
        """Legal moves of the side to move, grouped by origin in scan order."""
        grouped: list[tuple[Location, list[Move]]] = []
        for loc, piece in self._board.iter_pieces(self._board.active):
            moves = self.legal_moves(loc, piece)
            if moves:
                grouped.append((loc, moves))
        return grouped

    def all_pseudo_legal_moves(self, color: Color) -> Iterator[Move]:
        """Every pseudo-legal move of *color* (may leave own king attacked)."""
        for loc, piece in self._board.iter_pieces(color):
            yield from self.pseudo_legal_moves(loc, piece)

    def legal_moves(self, loc: Location, piece: Piece) -> list[Move]:
        """Pseudo-legal moves of *piece* that keep its own king safe."""
        board = self._board
        opponent = piece.color.opposite
        legal: list[Move] = []
        for move in self.pseudo_legal_moves(loc, piece):
            after = MoveGenerator(board.piece_moved(move))
            if after.can_attack_king(opponent):
                continue
            if move.castle is not None and not self._castle_path_safe(move, opponent):
                continue
            legal.append(move)
        return legal

    def pseudo_legal_moves(self, loc: Location, piece: Piece) -> list[Move]:
        """Moves obeying the piece's movement shape only."""
        moves: list[Move] = []
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(loc, piece, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_directions(loc, piece, KNIGHT_OFFSETS, False, moves)
        elif ptype == PieceType.BISHOP:
            self._gen_directions(loc, piece, BISHOP_DIRS, True, moves)
        elif ptype == PieceType.ROOK:
            self._gen_directions(loc, piece, ROOK_DIRS, True, moves)
        elif ptype == PieceType.QUEEN:
            self._gen_directions(loc, piece, QUEEN_DIRS, True, moves)
        else:
            self._gen_directions(loc, piece, KING_OFFSETS, False, moves)
            self._gen_castling(loc, piece, moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def can_attack_king(self, color: Color) -> bool:
        """Does any pseudo-legal move of *color* capture the enemy king?"""
        board = self._board
        for loc, piece in board.iter_pieces(color.opposite):
            if piece.piece_type == PieceType.KING and self.is_square_attacked(
                loc, color
            ):
                return True
        return False

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return self.can_attack_king(color.opposite)

    def is_square_attacked(self, target: Location, by_color: Color) -> bool:
        """Could a piece of *by_color* capture on *target*?"""
        board = self._board

        pawn_rank = -by_color.forward
        for df in (-1, 1):
            if self._holds(target + (df, pawn_rank), by_color, (PieceType.PAWN,)):
                return True

        for offset in KNIGHT_OFFSETS:
            if self._holds(target + offset, by_color, (PieceType.KNIGHT,)):
                return True

        for offset in KING_OFFSETS:
            if self._holds(target + offset, by_color, (PieceType.KING,)):
                return True

        for dirs, sliders in (
            (BISHOP_DIRS, _DIAGONAL_SLIDERS),
            (ROOK_DIRS, _ORTHOGONAL_SLIDERS),
        ):
            for direction in dirs:
                loc = target + direction
                while loc.is_valid():
                    piece = board[loc]
                    if piece is not None:
                        if piece.color == by_color and piece.piece_type in sliders:
                            return True
                        break
                    loc = loc + direction

        return False

    # -- Piece-specific generators (private) -------------------------------

    def _holds(
        self, loc: Location, color: Color, piece_types: tuple[PieceType, ...]
    ) -> bool:
        if not loc.is_valid():
            return False
        piece = self._board[loc]
        return (
            piece is not None
            and piece.color == color
            and piece.piece_type in piece_types
        )

    def _gen_pawn(self, loc: Location, piece: Piece, moves: list[Move]) -> None:
        board = self._board
        color = piece.color
        step = color.forward
        pawn_moves: list[Move] = []

        one_step = loc + (0, step)
        if one_step.is_valid() and board.is_empty(one_step):
            pawn_moves.append(Move(piece, loc, one_step))
            start_rank = 1 if color == Color.WHITE else 6
            if loc.rank == start_rank:
                two_step = one_step + (0, step)
                if board.is_empty(two_step):
                    pawn_moves.append(Move(piece, loc, two_step))

        for df in (1, -1):
            target = loc + (df, step)
            if not target.is_valid():
                continue
            occupant = board[target]
            if occupant is None:
                if target == board.en_passant:
                    victim_loc = target + (0, -step)
                    victim = board[victim_loc]
                    if victim is not None and victim.color != color:
                        pawn_moves.append(
                            Move(piece, loc, target).with_attack(victim_loc, victim)
                        )
            elif occupant.color != color:
                pawn_moves.append(Move(piece, loc, target).with_attack(target, occupant))

        final_rank = color.final_rank
        for move in pawn_moves:
            if move.to_loc.rank == final_rank:
                move = replace(move, is_promotion=True)
            moves.append(move)

    def _gen_directions(
        self,
        loc: Location,
        piece: Piece,
        directions: tuple[Offset, ...],
        repeat: bool,
        moves: list[Move],
    ) -> None:
        board = self._board
        for direction in directions:
            target = loc + direction
            while target.is_valid():
                occupant = board[target]
                if occupant is None:
                    moves.append(Move(piece, loc, target))
                else:
                    if occupant.color != piece.color:
                        moves.append(
                            Move(piece, loc, target).with_attack(target, occupant)
                        )
                    break
                if not repeat:
                    break
                target = target + direction

    def _gen_castling(self, loc: Location, piece: Piece, moves: list[Move]) -> None:
        board = self._board
        color = piece.color
        rook = Piece(PieceType.ROOK, color)

        if board.castling & CastlingRights.kingside(color):
            rook_from = loc + (3, 0)
            if (
                rook_from.is_valid()
                and board[rook_from] == rook
                and board.is_empty(loc + (1, 0))
                and board.is_empty(loc + (2, 0))
            ):
                moves.append(
                    Move(piece, loc, loc + (2, 0)).with_castle(rook_from, loc + (1, 0))
                )

        if board.castling & CastlingRights.queenside(color):
            rook_from = loc + (-4, 0)
            if (
                rook_from.is_valid()
                and board[rook_from] == rook
                and board.is_empty(loc + (-1, 0))
                and board.is_empty(loc + (-2, 0))
                and board.is_empty(loc + (-3, 0))
            ):
                moves.append(
                    Move(piece, loc, loc + (-2, 0)).with_castle(rook_from, loc + (-1, 0))
                )

    def _castle_path_safe(self, move: Move, opponent: Color) -> bool:
        """Castling may not start from, or pass through, an attacked square."""
        if self.can_attack_king(opponent):
            return False
        step = 1 if move.to_loc.file > move.from_loc.file else -1
        transit = Move(move.piece, move.from_loc, move.from_loc + (step, 0))
        return not MoveGenerator(self._board.piece_moved(transit)).can_attack_king(
            opponent
        )
