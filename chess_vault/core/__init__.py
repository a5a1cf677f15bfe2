from .types import Color, FILES, sq, file_of, rank_of, in_bounds, sq_name, parse_square
from .piece import Piece
from .position import Position, CASTLING_FLAGS
from .moves import Move, NormalMove, EnPassantMove, CastleMove, PromotionMove
from .rules import Rule, KingSafetyRule
from .pieces import King, Queen, Rook, Bishop, Knight, Pawn, PIECE_TYPES, PROMOTION_TYPES, LETTER_TO_PIECE
from .movegen import pseudo_legal_moves, generate_legal, has_legal_move
from .setup import standard_position, ascii_board

__all__ = [
    "Color","FILES","sq","file_of","rank_of","in_bounds","sq_name","parse_square",
    "Piece","Position","CASTLING_FLAGS",
    "Move","NormalMove","EnPassantMove","CastleMove","PromotionMove",
    "Rule","KingSafetyRule",
    "King","Queen","Rook","Bishop","Knight","Pawn","PIECE_TYPES","PROMOTION_TYPES","LETTER_TO_PIECE",
    "pseudo_legal_moves","generate_legal","has_legal_move",
    "standard_position","ascii_board",
]
