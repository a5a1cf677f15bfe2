from __future__ import annotations

from typing import List, Optional

from .core import (
    Position, Piece, Color, sq, rank_of, parse_square,
    CASTLING_FLAGS, LETTER_TO_PIECE, standard_position,
)
from .errors import FormatError

STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# castling flag -> (king square, rook square, color)
_CASTLING_HOMES = {
    "K": (sq(4, 0), sq(7, 0), Color.WHITE),
    "Q": (sq(4, 0), sq(0, 0), Color.WHITE),
    "k": (sq(4, 7), sq(7, 7), Color.BLACK),
    "q": (sq(4, 7), sq(0, 7), Color.BLACK),
}


def default_start() -> Position:
    return standard_position()


def _parse_placement(placement: str) -> List[Optional[Piece]]:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FormatError("FEN placement must have 8 ranks")

    board: List[Optional[Piece]] = [None] * 64
    kings = {Color.WHITE: 0, Color.BLACK: 0}

    for rank_idx, row in enumerate(ranks):
        r = 7 - rank_idx
        f = 0
        for ch in row:
            if ch in "0123456789":
                gap = int(ch)
                if gap < 1 or gap > 8:
                    raise FormatError("Bad empty-square run in FEN")
                f += gap
                if f > 8:
                    raise FormatError("Bad rank width in FEN")
                continue
            if f >= 8:
                raise FormatError("Bad rank width in FEN")
            kind = LETTER_TO_PIECE.get(ch.lower())
            if kind is None:
                raise FormatError(f"Unknown piece char: {ch}")
            color = Color.WHITE if ch.isupper() else Color.BLACK
            board[sq(f, r)] = kind(color)
            if kind.letter == "k":
                kings[color] += 1
            f += 1
        if f != 8:
            raise FormatError("Bad rank width in FEN")

    if kings[Color.WHITE] != 1 or kings[Color.BLACK] != 1:
        raise FormatError("FEN must contain exactly one king per side")
    return board


def _parse_castling(castling: str, board: List[Optional[Piece]]) -> frozenset:
    if castling == "-":
        return frozenset()

    seen = set()
    for flag in castling:
        if flag not in CASTLING_FLAGS or flag in seen:
            raise FormatError("Bad castling rights in FEN")
        seen.add(flag)

        king_sq, rook_sq, color = _CASTLING_HOMES[flag]
        king, rook = board[king_sq], board[rook_sq]
        if not (king is not None and king.letter == "k" and king.color is color):
            raise FormatError("Bad castling rights in FEN")
        if not (rook is not None and rook.letter == "r" and rook.color is color):
            raise FormatError("Bad castling rights in FEN")
    return frozenset(seen)


def _parse_ep(ep: str, board: List[Optional[Piece]], side: Color) -> Optional[int]:
    if ep == "-":
        return None
    try:
        ep_sq = parse_square(ep)
    except ValueError as exc:
        raise FormatError("Bad en-passant square in FEN") from exc

    if side is Color.WHITE:
        # black moved last; pawn is one rank below ep square
        if rank_of(ep_sq) != 5:
            raise FormatError("Bad en-passant square in FEN")
        to_sq, from_sq, expected_color = ep_sq - 8, ep_sq + 8, Color.BLACK
    else:
        if rank_of(ep_sq) != 2:
            raise FormatError("Bad en-passant square in FEN")
        to_sq, from_sq, expected_color = ep_sq + 8, ep_sq - 8, Color.WHITE

    if board[ep_sq] is not None or board[from_sq] is not None:
        raise FormatError("Bad en-passant square in FEN")

    pawn = board[to_sq]
    if pawn is None or pawn.letter != "p" or pawn.color is not expected_color:
        raise FormatError("Bad en-passant square in FEN")
    return ep_sq


def _parse_counter(value: str, name: str, minimum: int) -> int:
    if not (value.isascii() and value.isdigit()) or int(value) < minimum:
        raise FormatError(f"Bad {name} in FEN: {value!r}")
    return int(value)


def parse_fen(fen: str) -> Position:
    """Parse standard chess FEN into a Position."""
    parts = fen.strip().split()
    if len(parts) != 6:
        raise FormatError("FEN must have 6 fields")

    placement, stm, castling, ep, halfmove, fullmove = parts

    board = _parse_placement(placement)

    if stm == "w":
        side = Color.WHITE
    elif stm == "b":
        side = Color.BLACK
    else:
        raise FormatError("Bad side-to-move in FEN")

    position = Position(
        board=tuple(board),
        side_to_move=side,
        castling=_parse_castling(castling, board),
        ep_square=_parse_ep(ep, board, side),
        halfmove_clock=_parse_counter(halfmove, "halfmove clock", 0),
        fullmove_number=_parse_counter(fullmove, "fullmove number", 1),
    )
    # the side that just moved cannot have left its own king attacked
    if position.in_check(side.opponent()):
        raise FormatError("Side not to move is in check")
    return position


def position_to_fen(position: Position) -> str:
    # placement
    rows = []
    for r in range(7, -1, -1):
        empty = 0
        row = []
        for f in range(8):
            p = position.piece_at(sq(f, r))
            if p is None:
                empty += 1
                continue
            if empty:
                row.append(str(empty))
                empty = 0
            row.append(p.symbol)
        if empty:
            row.append(str(empty))
        rows.append("".join(row))
    placement = "/".join(rows)

    return (
        f"{placement} {position.side_to_move.letter} {position.castling_string()} "
        f"{position.ep_name()} {position.halfmove_clock} {position.fullmove_number}"
    )
