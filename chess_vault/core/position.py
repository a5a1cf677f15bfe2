from __future__ import annotations

from dataclasses import dataclass, replace
from typing import FrozenSet, Iterator, Optional, Tuple

from .piece import Piece
from .types import Color, sq_name

CASTLING_FLAGS = "KQkq"

@dataclass(frozen=True)
class Position:
    """One board state plus the game-state flags needed to generate moves.

    Positions are never mutated; every move produces a new one.
    """

    board: Tuple[Optional[Piece], ...]
    side_to_move: Color = Color.WHITE
    castling: FrozenSet[str] = frozenset()
    ep_square: Optional[int] = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    def __post_init__(self) -> None:
        if len(self.board) != 64:
            raise ValueError(f"Board must have 64 squares, got {len(self.board)}")

    def piece_at(self, s: int) -> Optional[Piece]:
        return self.board[s]

    def iter_pieces_of(self, color: Color) -> Iterator[Tuple[int, Piece]]:
        for square, piece in enumerate(self.board):
            if piece is not None and piece.color is color:
                yield square, piece

    def king_square(self, color: Color) -> int:
        for square, p in enumerate(self.board):
            if p is not None and p.color is color and p.letter == "k":
                return square
        raise ValueError("King not found")

    def is_square_attacked(self, target: int, by_color: Color) -> bool:
        for square, p in self.iter_pieces_of(by_color):
            for a in p.attacks(self, square):
                if a == target:
                    return True
        return False

    def in_check(self, color: Optional[Color] = None) -> bool:
        color = self.side_to_move if color is None else color
        return self.is_square_attacked(self.king_square(color), color.opponent())

    def castling_string(self) -> str:
        return "".join(f for f in CASTLING_FLAGS if f in self.castling) or "-"

    def ep_name(self) -> str:
        return "-" if self.ep_square is None else sq_name(self.ep_square)

    def replace(self, **changes) -> "Position":
        return replace(self, **changes)
