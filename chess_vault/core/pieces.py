from __future__ import annotations

from typing import Dict, Type

from .piece import Piece
from .abilities import StepAbility, SlideAbility, PawnAbility, CastleAbility, KING8, ORTH, DIAG, KNIGHT_DELTAS

class King(Piece):
    letter = "k"
    abilities = (StepAbility(KING8), CastleAbility())

class Queen(Piece):
    letter = "q"
    abilities = (SlideAbility(KING8),)

class Rook(Piece):
    letter = "r"
    abilities = (SlideAbility(ORTH),)

class Bishop(Piece):
    letter = "b"
    abilities = (SlideAbility(DIAG),)

class Knight(Piece):
    letter = "n"
    abilities = (StepAbility(KNIGHT_DELTAS),)

class Pawn(Piece):
    letter = "p"
    abilities = (PawnAbility(),)

PIECE_TYPES = (Pawn, Knight, Bishop, Rook, Queen, King)
PROMOTION_TYPES = (Queen, Rook, Bishop, Knight)

LETTER_TO_PIECE: Dict[str, Type[Piece]] = {cls.letter: cls for cls in PIECE_TYPES}
