"""Move record: everything needed to apply a move and to replay it backwards."""

from __future__ import annotations

from dataclasses import dataclass, replace

from deckmate.core.enums import PieceType
from deckmate.core.piece import Piece
from deckmate.core.types import Location

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    ``attack`` holds the captured square and piece; for en passant the
    square differs from ``to``. ``castle`` holds the rook's origin and
    destination.
    """

    piece: Piece
    from_loc: Location
    to_loc: Location
    attack: tuple[Location, Piece] | None = None
    castle: tuple[Location, Location] | None = None
    is_promotion: bool = False
    promote_to: PieceType | None = None

    def with_attack(self, loc: Location, piece: Piece) -> Move:
        return replace(self, attack=(loc, piece))

    def with_castle(self, rook_from: Location, rook_to: Location) -> Move:
        return replace(self, castle=(rook_from, rook_to))

    def with_promotion(self, piece_type: PieceType | None) -> Move:
        """Choose the promotion piece; ``None`` clears the choice."""
        return replace(self, promote_to=piece_type)

    @property
    def is_capture(self) -> bool:
        return self.attack is not None

    @property
    def is_en_passant(self) -> bool:
        return self.attack is not None and self.attack[0] != self.to_loc

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.from_loc}{self.to_loc}"
        if self.promote_to is not None:
            base += _PROMO_CHARS.get(self.promote_to, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
