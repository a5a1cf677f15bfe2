from __future__ import annotations

import re
from typing import List, Optional, Sequence, Type

from .core import (
    Position, Move, Piece,
    CastleMove, PromotionMove,
    FILES, sq_name, file_of, rank_of, parse_square,
    LETTER_TO_PIECE, Pawn, generate_legal, has_legal_move,
)
from .errors import IllegalMoveError, AmbiguousMoveError


_SAN_RE = re.compile(
    r"^(?P<piece>[NBRQK])?"
    r"(?P<file>[a-h])?(?P<rank>[1-8])?"
    r"(?P<capture>x)?"
    r"(?P<dest>[a-h][1-8])"
    r"(?:=?(?P<promo>[NBRQnbrq]))?$"
)
_CASTLE_TOKENS = {
    "O-O": True, "0-0": True,
    "O-O-O": False, "0-0-0": False,
}
_ANNOTATION_CHARS = "+#!?"


def to_san(position: Position, move: Move, legal: Optional[Sequence[Move]] = None) -> str:
    """Convert a legal move to SAN."""
    # Castling
    if isinstance(move, CastleMove):
        san = "O-O" if move.kingside else "O-O-O"
        return san + _check_suffix(move.apply(position))

    mover = position.piece_at(move.from_sq)
    if mover is None:
        raise ValueError("Move has no mover on from_sq")

    is_capture = move.captured_piece(position) is not None
    dest = sq_name(move.to_sq)

    if isinstance(mover, Pawn):
        if is_capture:
            san = f"{FILES[file_of(move.from_sq)]}x{dest}"
        else:
            san = dest
    else:
        disamb = ""
        if mover.letter != "k":
            if legal is None:
                legal = generate_legal(position)
            disamb = _disambiguation(position, move, type(mover), legal)
        san = f"{mover.letter.upper()}{disamb}{'x' if is_capture else ''}{dest}"

    # promotion
    if isinstance(move, PromotionMove):
        san += "=" + move.promote_to.letter.upper()

    return san + _check_suffix(move.apply(position))


def _check_suffix(after: Position) -> str:
    if not after.in_check():
        return ""
    return "+" if has_legal_move(after) else "#"


def _disambiguation(position: Position, move: Move, mover_cls: Type[Piece], legal: Sequence[Move]) -> str:
    others = []
    for m in legal:
        if m.to_sq != move.to_sq or m.from_sq == move.from_sq:
            continue
        if type(position.piece_at(m.from_sq)) is not mover_cls:
            continue
        others.append(m.from_sq)

    if not others:
        return ""

    my_file = file_of(move.from_sq)
    my_rank = rank_of(move.from_sq)

    if all(file_of(s) != my_file for s in others):
        return FILES[my_file]
    if all(rank_of(s) != my_rank for s in others):
        return str(my_rank + 1)
    return f"{FILES[my_file]}{my_rank + 1}"


def strip_annotations(token: str) -> str:
    return token.strip().rstrip(_ANNOTATION_CHARS)


def parse_san(position: Position, token: str, legal: Optional[Sequence[Move]] = None) -> Move:
    """Resolve a SAN token to the unique legal move it names.

    Raises IllegalMoveError when nothing matches and AmbiguousMoveError when
    the token's disambiguators leave more than one candidate.
    """
    text = strip_annotations(token)
    if legal is None:
        legal = generate_legal(position)

    if text in _CASTLE_TOKENS:
        kingside = _CASTLE_TOKENS[text]
        for m in legal:
            if isinstance(m, CastleMove) and m.kingside is kingside:
                return m
        raise IllegalMoveError("castling is not legal here", token=token)

    match = _SAN_RE.match(text)
    if match is None:
        raise IllegalMoveError("unreadable move token", token=token)

    kind = LETTER_TO_PIECE[(match.group("piece") or "p").lower()]
    dest = parse_square(match.group("dest"))
    from_file = match.group("file")
    from_rank = match.group("rank")
    wants_capture = match.group("capture") is not None
    promo = match.group("promo")
    promo_cls = LETTER_TO_PIECE[promo.lower()] if promo else None

    if promo_cls is not None and kind is not Pawn:
        raise IllegalMoveError("only pawns promote", token=token)

    candidates: List[Move] = []
    for m in legal:
        if m.to_sq != dest or isinstance(m, CastleMove):
            continue
        if type(position.piece_at(m.from_sq)) is not kind:
            continue
        if from_file is not None and FILES[file_of(m.from_sq)] != from_file:
            continue
        if from_rank is not None and str(rank_of(m.from_sq) + 1) != from_rank:
            continue

        is_capture = m.captured_piece(position) is not None
        if wants_capture and not is_capture:
            continue
        if kind is Pawn and is_capture and from_file is None:
            continue

        if isinstance(m, PromotionMove):
            if m.promote_to is not promo_cls:
                continue
        elif promo_cls is not None:
            continue
        candidates.append(m)

    if not candidates:
        raise IllegalMoveError("no legal move matches", token=token)
    if len(candidates) > 1:
        origins = ", ".join(sorted(sq_name(m.from_sq) for m in candidates))
        raise AmbiguousMoveError(f"ambiguous between moves from {origins}", token=token)
    return candidates[0]


def move_to_lan(move: Move) -> str:
    s = f"{sq_name(move.from_sq)}{sq_name(move.to_sq)}"
    if isinstance(move, PromotionMove):
        s += move.promote_to.letter
    return s
