"""Board mutation events produced by cards.

Each event is a frozen record of the squares it touches; applying it is the
board's job (:meth:`deckmate.core.board.Board.event_applied`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, TypeAlias

from deckmate.core.cards import Card
from deckmate.core.types import Location


@dataclass(frozen=True, slots=True)
class Swap:
    """Two friendly non-king pieces of different types trade places."""

    card: ClassVar[Card] = Card.SWAP

    first: Location
    second: Location

    def describe(self) -> str:
        return f"{self.first} ↔ {self.second}"

    def squares(self) -> tuple[Location, ...]:
        return (self.first, self.second)


@dataclass(frozen=True, slots=True)
class KnightToBishop:
    card: ClassVar[Card] = Card.KNIGHT_TO_BISHOP

    loc: Location

    def describe(self) -> str:
        return f"knight on {self.loc} becomes a bishop"

    def squares(self) -> tuple[Location, ...]:
        return (self.loc,)


@dataclass(frozen=True, slots=True)
class BishopToKnight:
    card: ClassVar[Card] = Card.BISHOP_TO_KNIGHT

    loc: Location

    def describe(self) -> str:
        return f"bishop on {self.loc} becomes a knight"

    def squares(self) -> tuple[Location, ...]:
        return (self.loc,)


@dataclass(frozen=True, slots=True)
class RooksToQueen:
    """The rook on ``keep`` becomes a queen; the rook on ``remove`` vanishes."""

    card: ClassVar[Card] = Card.ROOKS_TO_QUEEN

    keep: Location
    remove: Location

    def describe(self) -> str:
        return f"rooks on {self.keep} and {self.remove} fuse into a queen on {self.keep}"

    def squares(self) -> tuple[Location, ...]:
        return (self.keep, self.remove)


@dataclass(frozen=True, slots=True)
class QueenToRooks:
    """The queen becomes a rook and a second rook appears on ``extra``."""

    card: ClassVar[Card] = Card.QUEEN_TO_ROOKS

    queen: Location
    extra: Location

    def describe(self) -> str:
        return f"queen on {self.queen} splits into rooks on {self.queen} and {self.extra}"

    def squares(self) -> tuple[Location, ...]:
        return (self.queen, self.extra)


@dataclass(frozen=True, slots=True)
class PawnRun:
    card: ClassVar[Card] = Card.PAWN_RUN

    origin: Location
    target: Location

    def describe(self) -> str:
        return f"pawn sprints {self.origin} → {self.target}"

    def squares(self) -> tuple[Location, ...]:
        return (self.origin, self.target)


@dataclass(frozen=True, slots=True)
class PawnsToQueen:
    """Eight pawns fuse; ``pawns[0]`` becomes the queen."""

    card: ClassVar[Card] = Card.PAWNS_TO_QUEEN

    pawns: tuple[Location, ...]

    def describe(self) -> str:
        return f"eight pawns assemble into a queen on {self.pawns[0]}"

    def squares(self) -> tuple[Location, ...]:
        return self.pawns


@dataclass(frozen=True, slots=True)
class QueenToPawns:
    card: ClassVar[Card] = Card.QUEEN_TO_PAWNS

    queen: Location
    rank: int

    def describe(self) -> str:
        return f"queen on {self.queen} shatters into pawns on rank {self.rank + 1}"

    def squares(self) -> tuple[Location, ...]:
        return (self.queen, *(Location(file, self.rank) for file in range(8)))


@dataclass(frozen=True, slots=True)
class Rotate:
    """A piece on an edge file wraps around to the opposite edge."""

    card: ClassVar[Card] = Card.ROTATE

    origin: Location
    target: Location

    def describe(self) -> str:
        return f"piece wraps around {self.origin} → {self.target}"

    def squares(self) -> tuple[Location, ...]:
        return (self.origin, self.target)


@dataclass(frozen=True, slots=True)
class KingMove:
    card: ClassVar[Card] = Card.KING_MOVE

    origin: Location
    target: Location

    def describe(self) -> str:
        return f"king slides {self.origin} → {self.target}"

    def squares(self) -> tuple[Location, ...]:
        return (self.origin, self.target)


Event: TypeAlias = (
    Swap
    | KnightToBishop
    | BishopToKnight
    | RooksToQueen
    | QueenToRooks
    | PawnRun
    | PawnsToQueen
    | QueenToPawns
    | Rotate
    | KingMove
)
