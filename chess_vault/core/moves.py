from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple, Type, TYPE_CHECKING

from .types import Color, sq

if TYPE_CHECKING:
    from .piece import Piece
    from .position import Position


# Moving from or to one of these squares forfeits the listed rights.
_CASTLE_SQUARE_RIGHTS = {
    sq(4, 0): "KQ",
    sq(7, 0): "K",
    sq(0, 0): "Q",
    sq(4, 7): "kq",
    sq(7, 7): "k",
    sq(0, 7): "q",
}


def _rights_after(castling: FrozenSet[str], *squares: int) -> FrozenSet[str]:
    lost = set()
    for s in squares:
        lost.update(_CASTLE_SQUARE_RIGHTS.get(s, ""))
    return castling - lost if lost else castling


def _finish(
    position: "Position",
    board: List[Optional["Piece"]],
    mover: "Piece",
    captured: Optional["Piece"],
    touched: Tuple[int, ...],
    ep_square: Optional[int] = None,
) -> "Position":
    if captured is not None or mover.letter == "p":
        halfmove = 0
    else:
        halfmove = position.halfmove_clock + 1

    # Fullmove increments after Black has played
    fullmove = position.fullmove_number
    if position.side_to_move is Color.BLACK:
        fullmove += 1

    return position.replace(
        board=tuple(board),
        side_to_move=position.side_to_move.opponent(),
        castling=_rights_after(position.castling, *touched),
        ep_square=ep_square,
        halfmove_clock=halfmove,
        fullmove_number=fullmove,
    )


@dataclass(frozen=True)
class Move:
    from_sq: int
    to_sq: int
    flags: Tuple[str, ...] = ()

    def apply(self, position: "Position") -> "Position":
        raise NotImplementedError

    def captured_piece(self, position: "Position") -> Optional["Piece"]:
        return position.piece_at(self.to_sq)

@dataclass(frozen=True)
class NormalMove(Move):
    def apply(self, position: "Position") -> "Position":
        board = list(position.board)
        moved = board[self.from_sq]
        if moved is None:
            raise ValueError("No piece to move")

        captured = board[self.to_sq]
        board[self.to_sq] = moved
        board[self.from_sq] = None

        ep_square = None
        if "double_pawn_push" in self.flags:
            ep_square = (self.from_sq + self.to_sq) // 2

        return _finish(position, board, moved, captured, (self.from_sq, self.to_sq), ep_square)

@dataclass(frozen=True)
class EnPassantMove(Move):
    captured_sq: int = -1

    def apply(self, position: "Position") -> "Position":
        board = list(position.board)
        moved = board[self.from_sq]
        captured = board[self.captured_sq]
        if moved is None or captured is None:
            raise ValueError("Invalid en passant state")

        board[self.captured_sq] = None
        board[self.to_sq] = moved
        board[self.from_sq] = None
        return _finish(position, board, moved, captured, (self.from_sq, self.to_sq))

    def captured_piece(self, position: "Position") -> Optional["Piece"]:
        return position.piece_at(self.captured_sq)

@dataclass(frozen=True)
class CastleMove(Move):
    rook_from: int = -1
    rook_to: int = -1

    @property
    def kingside(self) -> bool:
        return self.rook_from > self.from_sq

    def apply(self, position: "Position") -> "Position":
        board = list(position.board)
        king = board[self.from_sq]
        rook = board[self.rook_from]
        if king is None or rook is None:
            raise ValueError("Invalid castling state")

        board[self.from_sq] = None
        board[self.rook_from] = None
        board[self.to_sq] = king
        board[self.rook_to] = rook
        return _finish(position, board, king, None, (self.from_sq, self.rook_from))

    def captured_piece(self, position: "Position") -> Optional["Piece"]:
        return None

@dataclass(frozen=True)
class PromotionMove(Move):
    promote_to: Type["Piece"] = None  # type: ignore[assignment]

    def apply(self, position: "Position") -> "Position":
        board = list(position.board)
        pawn = board[self.from_sq]
        if pawn is None:
            raise ValueError("No pawn to promote")

        captured = board[self.to_sq]
        board[self.from_sq] = None
        board[self.to_sq] = self.promote_to(pawn.color)  # type: ignore[misc]
        # Clock rules follow the pawn, not the promoted piece.
        return _finish(position, board, pawn, captured, (self.from_sq, self.to_sq))
