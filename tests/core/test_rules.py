"""Tests for check, checkmate and stalemate detection."""

import random

from deckmate.core.board import Board
from deckmate.core.enums import Color, GameStateKind
from deckmate.core.notation import board_from_fen
from deckmate.core.rules import GameState, Rules
from deckmate.core.types import Location


def _play(board: Board, *ucis: str) -> None:
    for uci in ucis:
        origin, target = Location.parse(uci[:2]), Location.parse(uci[2:4])
        listing = dict(board.legal_moves_for_active_color())
        move = next(m for m in listing[origin] if m.to_loc == target)
        board.apply_move(move)


class TestGameState:
    def test_initial_is_normal(self) -> None:
        board = Board.initial(random.Random(0))
        state = board.game_state(board.legal_moves_for_active_color())
        assert state == GameState.NORMAL
        assert not state.is_over
        assert state.winner is None

    def test_fools_mate(self) -> None:
        board = Board.initial(random.Random(0))
        _play(board, "f2f3", "e7e5", "g2g4", "d8h4")
        assert board.legal_moves_for_active_color() == []
        state = Rules.current_state(board)
        assert state.kind == GameStateKind.CHECKMATE
        assert state.loser == Color.WHITE
        assert state.winner == Color.BLACK
        assert str(state) == "checkmate, black wins"
        assert Rules.is_checkmate(board)
        assert board.is_game_over()

    def test_stalemate(self) -> None:
        board = board_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert Rules.current_state(board) == GameState.STALEMATE
        assert Rules.is_stalemate(board)
        assert not Rules.is_in_check(board)

    def test_back_rank_mate(self) -> None:
        board = board_from_fen("R5k1/5ppp/8/8/8/8/8/6K1 b - - 0 1")
        assert Rules.is_in_check(board)
        assert Rules.current_state(board) == GameState.checkmate(Color.BLACK)

    def test_state_derived_from_listing(self) -> None:
        quiet = board_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        checked = board_from_fen("4k3/8/8/8/8/8/8/4K2r w - - 0 1")
        assert quiet.game_state([]) == GameState.STALEMATE
        assert checked.game_state([]) == GameState.checkmate(Color.WHITE)
        assert checked.game_state(checked.legal_moves_for_active_color()) == GameState.NORMAL

    def test_check_with_escape_is_normal(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K2r w - - 0 1")
        assert Rules.is_in_check(board)
        assert Rules.current_state(board) == GameState.NORMAL
