"""Random event synthesis: generate candidates, keep the safe ones, pick one."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from itertools import combinations, permutations
from typing import TYPE_CHECKING

from deckmate.core.cards import Card
from deckmate.core.enums import PieceType
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
from deckmate.core.move_generator import MoveGenerator
from deckmate.core.piece import Piece
from deckmate.core.types import Location

if TYPE_CHECKING:
    from deckmate.core.board import Board

_LOGGER = logging.getLogger(__name__)

_FUSION_PAWNS = 8


class EventGenerator:
    """Builds events for the side to move of *board*.

    Every candidate is applied to a scratch copy and kept only if the
    resulting position is still playable: neither king can be captured and
    the side to move has a legal move.
    """

    __slots__ = ("_board", "_rng", "_pieces")

    def __init__(self, board: Board, rng: random.Random) -> None:
        self._board = board
        self._rng = rng
        self._pieces: list[tuple[Location, Piece]] = list(board.iter_pieces(board.active))

    # -- Public API ---------------------------------------------------------

    def generate(self, card: Card) -> Event | None:
        """Pick a valid event for *card*; ``None`` for SKIP or no candidate."""
        synthesize = self._routines().get(card)
        if synthesize is None:
            return None
        return self.choose(synthesize())

    def choose(self, candidates: list[Event]) -> Event | None:
        """Shuffle the valid candidates and return the first one."""
        valid = [event for event in candidates if self.is_valid(event)]
        _LOGGER.debug("%d of %d candidates valid", len(valid), len(candidates))
        if not valid:
            return None
        self._rng.shuffle(valid)
        return valid[0]

    def is_valid(self, event: Event) -> bool:
        after = self._board.event_applied(event)
        gen = MoveGenerator(after)
        color = after.active
        if gen.can_attack_king(color.opposite):
            return False
        if gen.can_attack_king(color):
            return False
        return bool(gen.all_legal_moves())

    # -- Candidate synthesis ------------------------------------------------

    def swap_candidates(self) -> list[Event]:
        final_rank = self._board.active.final_rank
        cands: list[Event] = []
        for (l1, p1), (l2, p2) in combinations(self._pieces, 2):
            if p1.piece_type == p2.piece_type or p1.is_king or p2.is_king:
                continue
            # A pawn may not land on its promotion rank.
            if p1.piece_type == PieceType.PAWN and l2.rank == final_rank:
                continue
            if p2.piece_type == PieceType.PAWN and l1.rank == final_rank:
                continue
            cands.append(Swap(l1, l2))
        return cands

    def knight_to_bishop_candidates(self) -> list[Event]:
        return [KnightToBishop(loc) for loc in self._locations_of(PieceType.KNIGHT)]

    def bishop_to_knight_candidates(self) -> list[Event]:
        return [BishopToKnight(loc) for loc in self._locations_of(PieceType.BISHOP)]

    def rooks_to_queen_candidates(self) -> list[Event]:
        rooks = self._locations_of(PieceType.ROOK)
        return [RooksToQueen(keep, remove) for keep, remove in permutations(rooks, 2)]

    def queen_to_rooks_candidates(self) -> list[Event]:
        empties = list(self._board.iter_empty_locations())
        return [
            QueenToRooks(queen, extra)
            for queen in self._locations_of(PieceType.QUEEN)
            for extra in empties
        ]

    def pawn_run_candidates(self) -> list[Event]:
        board = self._board
        step = board.active.forward
        final_rank = board.active.final_rank
        cands: list[Event] = []
        for origin in self._locations_of(PieceType.PAWN):
            target = origin
            while True:
                ahead = target + (0, step)
                if not ahead.is_valid() or ahead.rank == final_rank:
                    break
                if not board.is_empty(ahead):
                    break
                target = ahead
            if target != origin:
                cands.append(PawnRun(origin, target))
        return cands

    def pawns_to_queen_candidates(self) -> list[Event]:
        pawns = self._locations_of(PieceType.PAWN)[:_FUSION_PAWNS]
        if len(pawns) < _FUSION_PAWNS:
            return []
        cands: list[Event] = []
        for i in range(_FUSION_PAWNS):
            order = pawns.copy()
            order[0], order[i] = order[i], order[0]
            cands.append(PawnsToQueen(tuple(order)))
        return cands

    def queen_to_pawns_candidates(self) -> list[Event]:
        board = self._board
        final_rank = board.active.final_rank
        cands: list[Event] = []
        for queen in self._locations_of(PieceType.QUEEN):
            for rank in range(8):
                if rank == final_rank:
                    continue
                if all(
                    loc == queen or board.is_empty(loc)
                    for loc in (Location(file, rank) for file in range(8))
                ):
                    cands.append(QueenToPawns(queen, rank))
        return cands

    def rotate_candidates(self) -> list[Event]:
        board = self._board
        cands: list[Event] = []
        for origin, _ in self._pieces:
            if origin.file not in (0, 7):
                continue
            target = Location(7 - origin.file, origin.rank)
            if board.is_empty(target):
                cands.append(Rotate(origin, target))
        return cands

    def king_move_candidates(self) -> list[Event]:
        board = self._board
        origin = board.king_location(board.active)
        step = 1 if origin.file < 4 else -1
        target = origin
        while True:
            ahead = target + (step, 0)
            if not ahead.is_valid() or not board.is_empty(ahead):
                break
            target = ahead
        if target == origin:
            return []
        return [KingMove(origin, target)]

    # -- Helpers ------------------------------------------------------------

    def _locations_of(self, piece_type: PieceType) -> list[Location]:
        return [loc for loc, piece in self._pieces if piece.piece_type == piece_type]

    def _routines(self) -> dict[Card, Callable[[], list[Event]]]:
        return {
            Card.BISHOP_TO_KNIGHT: self.bishop_to_knight_candidates,
            Card.KNIGHT_TO_BISHOP: self.knight_to_bishop_candidates,
            Card.ROOKS_TO_QUEEN: self.rooks_to_queen_candidates,
            Card.QUEEN_TO_ROOKS: self.queen_to_rooks_candidates,
            Card.PAWNS_TO_QUEEN: self.pawns_to_queen_candidates,
            Card.QUEEN_TO_PAWNS: self.queen_to_pawns_candidates,
            Card.SWAP: self.swap_candidates,
            Card.ROTATE: self.rotate_candidates,
            Card.PAWN_RUN: self.pawn_run_candidates,
            Card.KING_MOVE: self.king_move_candidates,
        }
