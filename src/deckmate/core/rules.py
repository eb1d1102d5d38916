"""High-level rules: checkmate and stalemate detection.

The game state is always derived from the live legal-move listing; nothing
here is cached on the board.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from deckmate.core.enums import Color, GameStateKind
from deckmate.core.move import Move
from deckmate.core.move_generator import MoveGenerator
from deckmate.core.types import Location

if TYPE_CHECKING:
    from deckmate.core.board import Board

MoveSet = Sequence[tuple[Location, Sequence[Move]]]


@dataclass(frozen=True, slots=True)
class GameState:
    """Normal, Stalemate, or Checkmate of the ``loser`` color."""

    NORMAL: ClassVar[GameState]
    STALEMATE: ClassVar[GameState]

    kind: GameStateKind
    loser: Color | None = None

    @classmethod
    def checkmate(cls, loser: Color) -> GameState:
        return cls(GameStateKind.CHECKMATE, loser)

    @property
    def is_over(self) -> bool:
        return self.kind != GameStateKind.NORMAL

    @property
    def winner(self) -> Color | None:
        return self.loser.opposite if self.loser is not None else None

    def __str__(self) -> str:
        if self.kind == GameStateKind.CHECKMATE:
            return f"checkmate, {self.winner} wins"
        return self.kind.name.lower()


GameState.NORMAL = GameState(GameStateKind.NORMAL)
GameState.STALEMATE = GameState(GameStateKind.STALEMATE)


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    @staticmethod
    def is_in_check(board: Board) -> bool:
        return MoveGenerator(board).is_in_check(board.active)

    @staticmethod
    def game_state(board: Board, move_set: MoveSet) -> GameState:
        """Derive the state of *board* given its active color's legal moves."""
        if move_set:
            return GameState.NORMAL
        if MoveGenerator(board).can_attack_king(board.active.opposite):
            return GameState.checkmate(board.active)
        return GameState.STALEMATE

    @staticmethod
    def current_state(board: Board) -> GameState:
        return Rules.game_state(board, MoveGenerator(board).all_legal_moves())

    @staticmethod
    def is_game_over(board: Board) -> bool:
        return Rules.current_state(board).is_over

    @staticmethod
    def is_checkmate(board: Board) -> bool:
        return Rules.current_state(board).kind == GameStateKind.CHECKMATE

    @staticmethod
    def is_stalemate(board: Board) -> bool:
        return Rules.current_state(board).kind == GameStateKind.STALEMATE
