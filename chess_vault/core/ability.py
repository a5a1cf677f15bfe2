from __future__ import annotations

from typing import Iterable, TYPE_CHECKING

if TYPE_CHECKING:
    from .piece import Piece
    from .position import Position
    from .moves import Move

class Ability:
    """A capability a piece kind has: the moves it makes and the squares it attacks."""

    def generate_moves(self, piece: "Piece", square: int, position: "Position") -> Iterable["Move"]:
        return ()

    def generate_attacks(self, piece: "Piece", square: int, position: "Position") -> Iterable[int]:
        return ()
