"""Location value type and coordinate helpers.

Board layout: ``file`` 0–7 maps to a–h, ``rank`` 0–7 maps to 1–8.
White starts on ranks 0 and 1, Black on ranks 6 and 7.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeAlias

Offset: TypeAlias = tuple[int, int]  # (file delta, rank delta)


@dataclass(frozen=True, slots=True)
class Location:
    """A board coordinate. May be off-board until :meth:`is_valid` is checked."""

    file: int
    rank: int

    def is_valid(self) -> bool:
        return 0 <= self.file < 8 and 0 <= self.rank < 8

    def __add__(self, offset: Offset) -> Location:
        df, dr = offset
        return Location(self.file + df, self.rank + dr)

    def __str__(self) -> str:
        """Algebraic name, e.g. ``Location(4, 3)`` → ``'e4'``."""
        return chr(ord("a") + self.file) + str(self.rank + 1)

    @classmethod
    def parse(cls, name: str) -> Location:
        """Parse a square name, e.g. ``'e4'``."""
        if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
            raise ValueError(f"Invalid square name: {name!r}")
        return cls(ord(name[0]) - ord("a"), int(name[1]) - 1)


def iter_board() -> Iterator[Location]:
    """All 64 locations in scan order: rank ascending, then file ascending."""
    for rank in range(8):
        for file in range(8):
            yield Location(file, rank)


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Location(f, 0) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Location(f, 1) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Location(f, 2) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Location(f, 3) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Location(f, 4) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Location(f, 5) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Location(f, 6) for f in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Location(f, 7) for f in range(8))
