"""Tests for GameController — the session coordinator."""

import random

from deckmate.core.board import Board
from deckmate.core.cards import Card
from deckmate.core.config import RuleConfig
from deckmate.core.enums import Color, GameStateKind, PieceType
from deckmate.core.events import Event
from deckmate.core.move import Move
from deckmate.core.notation import STARTING_FEN
from deckmate.core.piece import Piece
from deckmate.core.rules import GameState
from deckmate.core.types import A7, A8, E2, E4, E5, Location
from deckmate.game.controller import GameController

NO_CARDS = RuleConfig(skip_probability=1.0)


def _make_controller(fen: str | None = None, config: RuleConfig = NO_CARDS) -> GameController:
    ctrl = GameController(random.Random(42), config)
    if fen is not None:
        ctrl.new_game(fen)
    return ctrl


def _listed(ctrl: GameController, uci: str) -> Move:
    origin, target = Location.parse(uci[:2]), Location.parse(uci[2:4])
    moves = dict(ctrl.legal_moves)[origin]
    return next(m for m in moves if m.to_loc == target)


def _play(ctrl: GameController, *ucis: str) -> None:
    for uci in ucis:
        assert ctrl.submit_move(_listed(ctrl, uci))


class TestNewGame:
    def test_starts_with_white(self) -> None:
        ctrl = _make_controller()
        assert ctrl.side_to_move == Color.WHITE
        assert ctrl.state == GameState.NORMAL
        assert not ctrl.is_game_over

    def test_custom_fen(self) -> None:
        ctrl = _make_controller("4k3/8/8/8/8/8/8/4K3 b - - 0 1")
        assert ctrl.side_to_move == Color.BLACK

    def test_restart_resets_board_and_notifies(self) -> None:
        ctrl = _make_controller()
        seen: list[Board] = []
        ctrl.events.on_restart.append(seen.append)
        _play(ctrl, "e2e4")
        ctrl.restart()
        assert len(seen) == 1
        assert seen[0] is ctrl.board
        assert ctrl.board[E4] is None
        assert ctrl.side_to_move == Color.WHITE

    def test_config_exposed(self) -> None:
        assert _make_controller().config is NO_CARDS


class TestSubmitMove:
    def test_legal_move_accepted(self) -> None:
        ctrl = _make_controller()
        assert ctrl.submit_move(_listed(ctrl, "e2e4"))
        assert ctrl.side_to_move == Color.BLACK
        assert ctrl.board[E4] == Piece(PieceType.PAWN, Color.WHITE)

    def test_unlisted_move_rejected(self) -> None:
        ctrl = _make_controller()
        pawn = Piece(PieceType.PAWN, Color.WHITE)
        assert not ctrl.submit_move(Move(pawn, E2, E5))
        assert ctrl.side_to_move == Color.WHITE
        assert ctrl.board[E2] == pawn

    def test_wrong_side_rejected(self) -> None:
        ctrl = _make_controller()
        pawn = Piece(PieceType.PAWN, Color.BLACK)
        assert not ctrl.submit_move(
            Move(pawn, Location.parse("e7"), Location.parse("e5"))
        )

    def test_callbacks_fire(self) -> None:
        ctrl = _make_controller()
        moves: list[Move] = []
        cards: list[tuple[Card, Event | None]] = []
        ctrl.events.on_move.append(lambda m, b: moves.append(m))
        ctrl.events.on_card.append(lambda c, e, b: cards.append((c, e)))
        move = _listed(ctrl, "g1f3")
        ctrl.submit_move(move)
        assert moves == [move]
        assert cards == [(Card.SKIP, None)]

    def test_card_drawn_by_next_side(self) -> None:
        ctrl = _make_controller()
        white_before = list(ctrl.board.white_cards)
        _play(ctrl, "e2e4")
        assert len(ctrl.board.black_cards) == 4
        assert ctrl.board.white_cards == white_before
        assert ctrl.board.last_card == Card.SKIP

    def test_events_happen_with_real_decks(self) -> None:
        ctrl = _make_controller(config=RuleConfig(skip_probability=0.0))
        seen: list[Event | None] = []
        ctrl.events.on_card.append(lambda c, e, b: seen.append(e))
        for _ in range(6):
            if ctrl.is_game_over:
                break
            _, moves = ctrl.legal_moves[0]
            ctrl.submit_move(moves[0].with_promotion(PieceType.QUEEN) if moves[0].is_promotion else moves[0])
        assert seen
        assert any(e is not None for e in seen)


class TestPromotion:
    FEN = "4k3/P7/8/8/8/8/8/4K3 w - - 0 1"

    def test_choice_required(self) -> None:
        ctrl = _make_controller(self.FEN)
        move = _listed(ctrl, "a7a8")
        assert move.is_promotion and move.promote_to is None
        assert not ctrl.submit_move(move)
        assert not ctrl.submit_move(move.with_promotion(PieceType.KING))
        assert not ctrl.submit_move(move.with_promotion(PieceType.PAWN))
        assert ctrl.board[A7] is not None

    def test_promote_to_queen(self) -> None:
        ctrl = _make_controller(self.FEN)
        assert ctrl.submit_move(_listed(ctrl, "a7a8").with_promotion(PieceType.QUEEN))
        assert ctrl.board[A8] == Piece(PieceType.QUEEN, Color.WHITE)
        assert ctrl.get_check() == Location.parse("e8")

    def test_choice_on_ordinary_move_rejected(self) -> None:
        ctrl = _make_controller(STARTING_FEN)
        move = _listed(ctrl, "e2e4").with_promotion(PieceType.QUEEN)
        assert not ctrl.submit_move(move)


class TestGameOver:
    def test_fools_mate(self) -> None:
        ctrl = _make_controller()
        over: list[GameState] = []
        cards: list[Card] = []
        ctrl.events.on_game_over.append(over.append)
        ctrl.events.on_card.append(lambda c, e, b: cards.append(c))
        _play(ctrl, "f2f3", "e7e5", "g2g4", "d8h4")
        assert over == [GameState.checkmate(Color.WHITE)]
        assert over[0].kind == GameStateKind.CHECKMATE
        assert len(cards) == 3
        assert ctrl.is_game_over
        assert ctrl.legal_moves == []

    def test_moves_rejected_after_game_over(self) -> None:
        ctrl = _make_controller("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert ctrl.state == GameState.STALEMATE
        king = Piece(PieceType.KING, Color.BLACK)
        assert not ctrl.submit_move(
            Move(king, Location.parse("h8"), Location.parse("g8"))
        )
