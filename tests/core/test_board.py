"""Tests for Board — setup, move application and bookkeeping."""

import random

import pytest

from deckmate.core.board import Board
from deckmate.core.cards import Card
from deckmate.core.enums import CastlingRights, Color, PieceType
from deckmate.core.move import Move
from deckmate.core.notation import board_from_fen
from deckmate.core.piece import Piece
from deckmate.core.types import (
    A1,
    A8,
    B1,
    D1,
    E1,
    E2,
    E3,
    E4,
    E8,
    G1,
    H1,
    H8,
    Location,
)


def _find(board: Board, uci: str) -> Move:
    """The listed legal move matching *uci* (origin + target)."""
    origin, target = Location.parse(uci[:2]), Location.parse(uci[2:4])
    for loc, moves in board.legal_moves_for_active_color():
        if loc == origin:
            for move in moves:
                if move.to_loc == target:
                    return move
    raise AssertionError(f"{uci} is not legal")


class TestInitialBoard:
    def test_back_ranks(self) -> None:
        b = Board.initial(random.Random(1))
        assert b[A1] == Piece(PieceType.ROOK, Color.WHITE)
        assert b[D1] == Piece(PieceType.QUEEN, Color.WHITE)
        assert b[E1] == Piece(PieceType.KING, Color.WHITE)
        assert b[E8] == Piece(PieceType.KING, Color.BLACK)
        assert b[H8] == Piece(PieceType.ROOK, Color.BLACK)

    def test_piece_counts(self) -> None:
        b = Board.initial(random.Random(1))
        assert len(list(b.iter_pieces(Color.WHITE))) == 16
        assert len(list(b.iter_pieces(Color.BLACK))) == 16
        assert len(list(b.iter_empty_locations())) == 32

    def test_turn_and_rights(self) -> None:
        b = Board.initial(random.Random(1))
        assert b.active == Color.WHITE
        assert b.castling == CastlingRights.ALL
        assert b.en_passant is None
        assert b.half_move_count == 0
        assert b.last_move is None and b.last_event is None and b.last_card is None

    def test_decks_dealt(self) -> None:
        b = Board.initial(random.Random(1))
        assert len(b.white_cards) == 5
        assert len(b.black_cards) == 5
        assert b.cards_of(Color.BLACK) is b.black_cards

    def test_empty_board(self) -> None:
        b = Board()
        assert list(b.iter_pieces()) == []
        assert b.castling == CastlingRights.NONE

    def test_king_location(self) -> None:
        b = Board.initial(random.Random(1))
        assert b.king_location(Color.WHITE) == E1
        with pytest.raises(ValueError):
            Board().king_location(Color.WHITE)


class TestPieceMoved:
    def test_source_board_untouched(self) -> None:
        b = Board.initial(random.Random(1))
        before = b.copy()
        after = b.piece_moved(_find(b, "e2e4"))
        assert b == before
        assert after != before

    def test_double_step_sets_en_passant(self) -> None:
        b = Board.initial(random.Random(1))
        after = b.piece_moved(_find(b, "e2e4"))
        assert after.en_passant == E3
        assert after[E4] == Piece(PieceType.PAWN, Color.WHITE)
        assert after[E2] is None

    def test_en_passant_cleared_next_move(self) -> None:
        b = Board.initial(random.Random(1))
        b.apply_move(_find(b, "e2e4"))
        b.apply_move(_find(b, "g8f6"))
        assert b.en_passant is None

    def test_bookkeeping(self) -> None:
        b = Board.initial(random.Random(1))
        move = _find(b, "g1f3")
        b.apply_move(move)
        assert b.active == Color.BLACK
        assert b.half_move_count == 1
        assert b.last_move == move
        assert b.last_event is None

    def test_king_move_clears_both_rights(self) -> None:
        b = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        after = b.piece_moved(_find(b, "e1f1"))
        assert after.castling == CastlingRights.BLACK_BOTH

    def test_rook_move_revokes_its_corner(self) -> None:
        b = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        after = b.piece_moved(_find(b, "h1h4"))
        assert after.castling == (
            CastlingRights.WHITE_QUEENSIDE | CastlingRights.BLACK_BOTH
        )

    def test_capture_on_corner_revokes_opponent_right(self) -> None:
        b = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        after = b.piece_moved(_find(b, "a1a8"))
        assert not after.castling & CastlingRights.BLACK_QUEENSIDE
        assert not after.castling & CastlingRights.WHITE_QUEENSIDE
        assert after.castling & CastlingRights.BLACK_KINGSIDE

    def test_castling_moves_rook(self) -> None:
        b = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        after = b.piece_moved(_find(b, "e1g1"))
        assert after[G1] == Piece(PieceType.KING, Color.WHITE)
        assert after[Location.parse("f1")] == Piece(PieceType.ROOK, Color.WHITE)
        assert after[H1] is None
        assert not after.castling & CastlingRights.WHITE_BOTH

    def test_queenside_castling(self) -> None:
        b = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
        after = b.piece_moved(_find(b, "e8c8"))
        assert after[Location.parse("c8")] == Piece(PieceType.KING, Color.BLACK)
        assert after[Location.parse("d8")] == Piece(PieceType.ROOK, Color.BLACK)
        assert after[A8] is None

    def test_en_passant_removes_victim(self) -> None:
        b = board_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        after = b.piece_moved(_find(b, "e5d6"))
        assert after[Location.parse("d6")] == Piece(PieceType.PAWN, Color.WHITE)
        assert after[Location.parse("d5")] is None

    def test_promotion_uses_chosen_piece(self) -> None:
        b = board_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        move = _find(b, "a7a8").with_promotion(PieceType.KNIGHT)
        after = b.piece_moved(move)
        assert after[A8] == Piece(PieceType.KNIGHT, Color.WHITE)


class TestCheckQueries:
    def test_get_check_reports_king_square(self) -> None:
        b = board_from_fen("4k3/8/8/8/8/8/8/4K2r w - - 0 1")
        assert b.get_check() == E1
        assert b.can_attack_king(Color.BLACK)

    def test_no_check(self) -> None:
        b = Board.initial(random.Random(1))
        assert b.get_check() is None
        assert not b.can_attack_king(Color.WHITE)


class TestCopyAndEquality:
    def test_copy_is_independent(self) -> None:
        b = Board.initial(random.Random(1))
        c = b.copy()
        c[B1] = None
        c.white_cards.append(Card.SWAP)
        assert b[B1] is not None
        assert len(b.white_cards) == 5

    def test_equality_ignores_decks(self) -> None:
        a = Board.initial(random.Random(1))
        b = Board.initial(random.Random(2))
        assert a == b

    def test_repr_diagram(self) -> None:
        text = repr(Board.initial(random.Random(1)))
        assert text.splitlines()[0] == "8 r n b q k b n r"
        assert text.splitlines()[-1] == "  a b c d e f g h"


class TestMoveRecordReversal:
    """A move record alone is enough to put the previous board back."""

    @staticmethod
    def _restore(after: Board, mv: Move) -> Board:
        board = after.copy()
        board[mv.to_loc] = None
        board[mv.from_loc] = mv.piece
        if mv.attack is not None:
            attacked_loc, attacked = mv.attack
            board[attacked_loc] = attacked
        if mv.castle is not None:
            rook_from, rook_to = mv.castle
            board[rook_to] = None
            board[rook_from] = Piece(PieceType.ROOK, mv.piece.color)
        return board

    @pytest.mark.parametrize(
        ("fen", "uci", "promote_to"),
        [
            ("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1", "e4d5", None),
            ("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1", "e5d6", None),
            ("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1", "e1g1", None),
            ("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1", "e1c1", None),
            ("1n2k3/P7/8/8/8/8/8/4K3 w - - 0 1", "a7b8", PieceType.QUEEN),
        ],
        ids=["capture", "en-passant", "kingside", "queenside", "promotion-capture"],
    )
    def test_cells_restored(
        self, fen: str, uci: str, promote_to: PieceType | None
    ) -> None:
        board = board_from_fen(fen)
        mv = _find(board, uci)
        if promote_to is not None:
            mv = mv.with_promotion(promote_to)
        after = board.piece_moved(mv)
        assert after.cells != board.cells
        assert mv.is_promotion == (promote_to is not None)
        if mv.is_promotion:
            assert after[mv.to_loc] != mv.piece
        assert self._restore(after, mv).cells == board.cells
