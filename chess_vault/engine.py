"""Public move engine: legal move listing, SAN application and game status.

Positions go in, new positions and immutable ``MoveDescriptor`` values come
out. Nothing here keeps state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Sequence, Tuple

from .core import (
    Position, Move, Color,
    NormalMove, EnPassantMove, CastleMove, PromotionMove,
    generate_legal, has_legal_move,
)
from .san import to_san, parse_san, move_to_lan


class MoveFlag(Enum):
    CAPTURE = "capture"
    EN_PASSANT = "en_passant"
    KINGSIDE_CASTLE = "kingside_castle"
    QUEENSIDE_CASTLE = "queenside_castle"
    PROMOTION = "promotion"
    DOUBLE_PUSH = "double_push"
    CHECK = "check"
    CHECKMATE = "checkmate"


class GameStatus(Enum):
    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


@dataclass(frozen=True)
class MoveDescriptor:
    color: Color
    piece: str
    from_sq: int
    to_sq: int
    san: str
    lan: str
    flags: FrozenSet[MoveFlag] = frozenset()
    captured: Optional[str] = None
    promotion: Optional[str] = None
    # Opaque; assigned by the replay builder and ignored by equality.
    move_id: str = field(default="", compare=False)

    def has(self, flag: MoveFlag) -> bool:
        return flag in self.flags


def describe(position: Position, move: Move, legal: Optional[Sequence[Move]] = None) -> Tuple[Position, MoveDescriptor]:
    """Apply an already-legal move and describe it."""
    mover = position.piece_at(move.from_sq)
    if mover is None:
        raise ValueError("No piece on from-square")

    after = move.apply(position)
    captured = move.captured_piece(position)

    flags = set()
    if captured is not None:
        flags.add(MoveFlag.CAPTURE)
    if isinstance(move, EnPassantMove):
        flags.add(MoveFlag.EN_PASSANT)
    if isinstance(move, CastleMove):
        flags.add(MoveFlag.KINGSIDE_CASTLE if move.kingside else MoveFlag.QUEENSIDE_CASTLE)
    if isinstance(move, PromotionMove):
        flags.add(MoveFlag.PROMOTION)
    if isinstance(move, NormalMove) and "double_pawn_push" in move.flags:
        flags.add(MoveFlag.DOUBLE_PUSH)

    san = to_san(position, move, legal)
    if san.endswith("#"):
        flags.update((MoveFlag.CHECK, MoveFlag.CHECKMATE))
    elif san.endswith("+"):
        flags.add(MoveFlag.CHECK)

    descriptor = MoveDescriptor(
        color=mover.color,
        piece=mover.letter,
        from_sq=move.from_sq,
        to_sq=move.to_sq,
        san=san,
        lan=move_to_lan(move),
        flags=frozenset(flags),
        captured=None if captured is None else captured.letter,
        promotion=move.promote_to.letter if isinstance(move, PromotionMove) else None,
    )
    return after, descriptor


def legal_moves(position: Position) -> FrozenSet[MoveDescriptor]:
    legal = generate_legal(position)
    return frozenset(describe(position, m, legal)[1] for m in legal)


def apply(position: Position, token: str) -> Tuple[Position, MoveDescriptor]:
    """Apply one SAN token; raises IllegalMoveError or AmbiguousMoveError."""
    legal = generate_legal(position)
    move = parse_san(position, token, legal)
    return describe(position, move, legal)


def game_status(position: Position) -> GameStatus:
    in_check = position.in_check()
    if has_legal_move(position):
        return GameStatus.CHECK if in_check else GameStatus.ONGOING
    return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
