"""FEN parsing and serialization for :class:`Board`.

Only the move number of the two clock fields is meaningful here; the
halfmove clock is accepted on input and always written as ``0``.
"""

from __future__ import annotations

import random
from itertools import groupby

from deckmate.core.board import Board
from deckmate.core.cards import generate_cards
from deckmate.core.config import DEFAULT_CONFIG, RuleConfig
from deckmate.core.enums import CastlingRights, Color
from deckmate.core.piece import Piece
from deckmate.core.types import Location

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}

_SIDES: dict[str, Color] = {"w": Color.WHITE, "b": Color.BLACK}


def board_from_fen(
    fen: str,
    rng: random.Random | None = None,
    config: RuleConfig = DEFAULT_CONFIG,
) -> Board:
    """Parse a FEN string into a :class:`Board` with freshly dealt decks."""
    fields = fen.split()
    if len(fields) not in (4, 5, 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    board = Board(cells=_read_placement(fields[0]))
    if fields[1] not in _SIDES:
        raise ValueError(f"Invalid FEN side-to-move field: {fields[1]!r}")
    board.active = _SIDES[fields[1]]
    board.castling = _read_castling(fields[2])
    board.en_passant = _read_en_passant(fields[3], board.active)
    if len(fields) == 6:
        board.half_move_count = _half_moves(fields[5], board.active)

    rng = rng if rng is not None else random.Random()
    board.white_cards = generate_cards(rng, config=config)
    board.black_cards = generate_cards(rng, config=config)
    return board


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN."""
    placement = "/".join(_write_rank(board.cells[rank]) for rank in range(7, -1, -1))
    side = next(ch for ch, color in _SIDES.items() if color == board.active)
    castling = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if board.castling & right
    ) or "-"
    ep = str(board.en_passant) if board.en_passant is not None else "-"
    return f"{placement} {side} {castling} {ep} 0 {board.half_move_count // 2 + 1}"


# ── Field readers ────────────────────────────────────────────────────────────


def _read_placement(text: str) -> list[list[Piece | None]]:
    rows = text.split("/")
    if len(rows) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {text!r}")
    # FEN lists rank 8 first; cells are indexed from rank 1.
    return [_read_rank(row) for row in reversed(rows)]


def _read_rank(text: str) -> list[Piece | None]:
    cells: list[Piece | None] = []
    for ch in text:
        if ch in "12345678":
            cells.extend([None] * int(ch))
        elif ch.isdigit():
            raise ValueError(f"Invalid FEN digit {ch!r} in rank {text!r}")
        else:
            cells.append(Piece.from_char(ch))
    if len(cells) != 8:
        raise ValueError(f"Invalid FEN rank width: {text!r}")
    return cells


def _read_castling(text: str) -> CastlingRights:
    if text == "-":
        return CastlingRights.NONE
    if len(set(text)) != len(text) or not set(text) <= _CASTLING_CHARS.keys():
        raise ValueError(f"Invalid FEN castling field: {text!r}")
    rights = CastlingRights.NONE
    for ch in text:
        rights |= _CASTLING_CHARS[ch]
    return rights


def _read_en_passant(text: str, active: Color) -> Location | None:
    if text == "-":
        return None
    target = Location.parse(text)
    # Two ranks short of the side to move's promotion rank.
    if target.rank != active.final_rank - 2 * active.forward:
        raise ValueError(f"Invalid FEN en-passant square: {text!r}")
    return target


def _half_moves(text: str, active: Color) -> int:
    fullmove = int(text)
    if fullmove < 1:
        raise ValueError(f"Invalid FEN fullmove number: {text!r}")
    return 2 * (fullmove - 1) + int(active)


# ── Field writers ────────────────────────────────────────────────────────────


def _write_rank(cells: list[Piece | None]) -> str:
    out = ""
    for empty, run in groupby(cells, key=lambda piece: piece is None):
        pieces = list(run)
        out += str(len(pieces)) if empty else "".join(map(str, pieces))
    return out
