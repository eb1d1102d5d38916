"""GameController — the session coordinator around one :class:`Board`.

Validates submitted moves, applies them, draws a card for the side to move
next, and notifies listeners via simple callbacks so the UI / tests can
subscribe.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field

from deckmate.core.board import Board
from deckmate.core.cards import Card
from deckmate.core.config import DEFAULT_CONFIG, RuleConfig
from deckmate.core.enums import Color
from deckmate.core.events import Event
from deckmate.core.move import PROMOTION_TYPES, Move
from deckmate.core.notation import board_from_fen
from deckmate.core.rules import GameState
from deckmate.core.types import Location
from deckmate.game.snapshot import GameSnapshot, build_snapshot

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, Board], None]
CardCallback = Callable[[Card, Event | None, Board], None]  # card, applied event
GameOverCallback = Callable[[GameState], None]
RestartCallback = Callable[[Board], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_card: list[CardCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_restart: list[RestartCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Owns the board of one game and serialises every mutation of it.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread); at most one move or card draw is in flight.
    """

    __slots__ = ("_board", "_rng", "_config", "events")

    def __init__(
        self,
        rng: random.Random | None = None,
        config: RuleConfig = DEFAULT_CONFIG,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._config = config
        self._board = Board.initial(self._rng, config)
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def config(self) -> RuleConfig:
        return self._config

    @property
    def side_to_move(self) -> Color:
        return self._board.active

    @property
    def legal_moves(self) -> list[tuple[Location, list[Move]]]:
        return self._board.legal_moves_for_active_color()

    @property
    def state(self) -> GameState:
        return self._board.game_state(self.legal_moves)

    @property
    def is_game_over(self) -> bool:
        return self.state.is_over

    def get_check(self) -> Location | None:
        return self._board.get_check()

    def snapshot(self, viewer: Color | None = None) -> GameSnapshot:
        return build_snapshot(self._board, viewer)

    # ── Commands ─────────────────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        """Start over from the initial position (or *fen*) with fresh decks."""
        if fen is None:
            self._board = Board.initial(self._rng, self._config)
        else:
            self._board = board_from_fen(fen, self._rng, self._config)
        _LOGGER.info("New game started")
        for cb in self.events.on_restart:
            cb(self._board)

    def restart(self) -> None:
        self.new_game()

    def submit_move(self, move: Move) -> bool:
        """Apply *move* if legal, then draw a card for the next side.

        Promotion moves must name their piece via ``promote_to``.
        """
        move_set = self.legal_moves
        if self._board.game_state(move_set).is_over:
            return False
        if not self._is_listed(move, move_set):
            _LOGGER.debug("Rejected move %s", move)
            return False

        self._board.apply_move(move)
        for cb in self.events.on_move:
            cb(move, self._board)

        state = self.state
        if state.is_over:
            _LOGGER.info("Game over: %s", state)
            for cb in self.events.on_game_over:
                cb(state)
            return True

        event = self._board.draw_card(self._rng, self._config)
        card = self._board.last_card
        assert card is not None
        for cb in self.events.on_card:
            cb(card, event, self._board)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    @staticmethod
    def _is_listed(move: Move, move_set: list[tuple[Location, list[Move]]]) -> bool:
        if move.is_promotion:
            if move.promote_to not in PROMOTION_TYPES:
                return False
            move = move.with_promotion(None)
        elif move.promote_to is not None:
            return False
        for origin, moves in move_set:
            if origin == move.from_loc:
                return move in moves
        return False
