"""Tests for GameSnapshot — what each viewer gets to see."""

import random

from deckmate.core.board import Board
from deckmate.core.cards import Card
from deckmate.core.enums import Color, PieceType
from deckmate.core.notation import board_from_fen
from deckmate.core.piece import Piece
from deckmate.core.rules import GameState
from deckmate.core.types import E1, E8
from deckmate.game.snapshot import build_snapshot


def _board() -> Board:
    board = Board.initial(random.Random(0))
    board.white_cards = [Card.SWAP, Card.SKIP]
    board.black_cards = [Card.ROTATE]
    return board


def test_active_viewer_gets_moves() -> None:
    snap = build_snapshot(_board(), Color.WHITE)
    assert sum(len(moves) for _, moves in snap.moves) == 20
    assert snap.active == Color.WHITE
    assert snap.state == GameState.NORMAL


def test_waiting_viewer_and_spectator_get_no_moves() -> None:
    assert build_snapshot(_board(), Color.BLACK).moves == ()
    assert build_snapshot(_board()).moves == ()


def test_cards_by_viewer() -> None:
    snap = build_snapshot(_board(), Color.BLACK)
    assert snap.my_cards == (Card.ROTATE,)
    assert snap.opponent_cards == (Card.SWAP, Card.SKIP)
    spectator = build_snapshot(_board())
    assert spectator.my_cards == (Card.SWAP, Card.SKIP)


def test_pieces_and_check() -> None:
    snap = build_snapshot(_board())
    assert snap.piece_at(E1) == Piece(PieceType.KING, Color.WHITE)
    assert snap.piece_at(E8) == Piece(PieceType.KING, Color.BLACK)
    assert snap.check is None

    checked = build_snapshot(board_from_fen("4k3/8/8/8/8/8/8/4K2r w - - 0 1"))
    assert checked.check == E1


def test_snapshot_is_detached_from_board() -> None:
    board = _board()
    snap = build_snapshot(board)
    board[E1] = None
    board.white_cards.clear()
    assert snap.piece_at(E1) is not None
    assert snap.white_cards == (Card.SWAP, Card.SKIP)
