from __future__ import annotations

from typing import List, Optional

from .piece import Piece
from .position import Position, CASTLING_FLAGS
from .types import Color, sq
from .pieces import King, Queen, Rook, Bishop, Knight, Pawn

BACK_RANK = (Rook, Knight, Bishop, Queen, King, Bishop, Knight, Rook)

def standard_position() -> Position:
    board: List[Optional[Piece]] = [None] * 64
    for f, kind in enumerate(BACK_RANK):
        board[sq(f, 0)] = kind(Color.WHITE)
        board[sq(f, 7)] = kind(Color.BLACK)
    for f in range(8):
        board[sq(f, 1)] = Pawn(Color.WHITE)
        board[sq(f, 6)] = Pawn(Color.BLACK)
    return Position(board=tuple(board), castling=frozenset(CASTLING_FLAGS))

def ascii_board(position: Position) -> str:
    rows = []
    for r in range(7, -1, -1):
        row = []
        for f in range(8):
            p = position.piece_at(sq(f, r))
            row.append(p.symbol if p else ".")
        rows.append(" ".join(row))
    return "\n".join(rows)
