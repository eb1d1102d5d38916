"""Core domain layer — the rule engine, with zero external dependencies.

Quick start::

    import random

    from deckmate.core import Board

    rng = random.Random(7)
    board = Board.initial(rng)
    origin, moves = board.legal_moves_for_active_color()[0]
    board.apply_move(moves[0])
    if not board.is_game_over():
        board.draw_card(rng)
"""

from deckmate.core.board import Board
from deckmate.core.cards import Card, generate_cards, summarize
from deckmate.core.config import DEFAULT_CONFIG, RuleConfig
from deckmate.core.enums import CastlingRights, Color, GameStateKind, PieceType
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
from deckmate.core.move import PROMOTION_TYPES, Move
from deckmate.core.move_generator import MoveGenerator
from deckmate.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from deckmate.core.piece import Piece
from deckmate.core.rules import GameState, Rules
from deckmate.core.types import Location

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Card",
    "Color",
    "GameStateKind",
    "PieceType",
    # Types
    "Location",
    # Domain objects
    "Board",
    "GameState",
    "Move",
    "MoveGenerator",
    "PROMOTION_TYPES",
    "Piece",
    "Rules",
    # Events / cards
    "BishopToKnight",
    "Event",
    "EventGenerator",
    "KingMove",
    "KnightToBishop",
    "PawnRun",
    "PawnsToQueen",
    "QueenToPawns",
    "QueenToRooks",
    "RooksToQueen",
    "Rotate",
    "Swap",
    "generate_cards",
    "summarize",
    # Config
    "DEFAULT_CONFIG",
    "RuleConfig",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
