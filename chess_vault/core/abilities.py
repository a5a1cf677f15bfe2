from __future__ import annotations

from typing import Iterable, Tuple

from .ability import Ability
from .moves import NormalMove, EnPassantMove, PromotionMove, CastleMove
from .types import Color, file_of, rank_of, in_bounds, sq

# deltas
ORTH = ((1,0),(-1,0),(0,1),(0,-1))
DIAG = ((1,1),(1,-1),(-1,1),(-1,-1))
KNIGHT_DELTAS = ((1,2),(2,1),(2,-1),(1,-2),(-1,-2),(-2,-1),(-2,1),(-1,2))
KING8 = ORTH + DIAG

class StepAbility(Ability):
    def __init__(self, deltas: Iterable[Tuple[int,int]]):
        self.deltas = tuple(deltas)

    def generate_moves(self, piece, square, position):
        for to in self.generate_attacks(piece, square, position):
            target = position.piece_at(to)
            if target is None or target.color is not piece.color:
                yield NormalMove(square, to)

    def generate_attacks(self, piece, square, position):
        f0, r0 = file_of(square), rank_of(square)
        for df, dr in self.deltas:
            f, r = f0 + df, r0 + dr
            if in_bounds(f, r):
                yield sq(f, r)

class SlideAbility(Ability):
    def __init__(self, deltas: Iterable[Tuple[int,int]]):
        self.deltas = tuple(deltas)

    def generate_moves(self, piece, square, position):
        for to in self.generate_attacks(piece, square, position):
            target = position.piece_at(to)
            if target is None or target.color is not piece.color:
                yield NormalMove(square, to)

    def generate_attacks(self, piece, square, position):
        f0, r0 = file_of(square), rank_of(square)
        for df, dr in self.deltas:
            f, r = f0 + df, r0 + dr
            while in_bounds(f, r):
                to = sq(f, r)
                yield to
                if position.piece_at(to) is not None:
                    break
                f += df
                r += dr

class PawnAbility(Ability):
    def _advance(self, square, to, last_rank):
        if rank_of(to) == last_rank:
            from .pieces import PROMOTION_TYPES
            for kind in PROMOTION_TYPES:
                yield PromotionMove(square, to, promote_to=kind)
        else:
            yield NormalMove(square, to)

    def generate_moves(self, piece, square, position):
        direction = 1 if piece.color is Color.WHITE else -1
        start_rank = 1 if piece.color is Color.WHITE else 6
        last_rank = 7 if piece.color is Color.WHITE else 0

        f0, r0 = file_of(square), rank_of(square)

        # forward 1
        r1 = r0 + direction
        if in_bounds(f0, r1):
            one = sq(f0, r1)
            if position.piece_at(one) is None:
                yield from self._advance(square, one, last_rank)

                if r0 == start_rank:
                    two = sq(f0, r0 + 2 * direction)
                    if position.piece_at(two) is None:
                        yield NormalMove(square, two, flags=("double_pawn_push",))

        # captures, including en passant onto the target square
        for to in self.generate_attacks(piece, square, position):
            target = position.piece_at(to)
            if target is not None and target.color is not piece.color:
                yield from self._advance(square, to, last_rank)
            elif target is None and to == position.ep_square:
                captured_sq = to - 8 * direction
                victim = position.piece_at(captured_sq)
                if victim is not None and victim.letter == "p" and victim.color is not piece.color:
                    yield EnPassantMove(square, to, captured_sq=captured_sq)

    def generate_attacks(self, piece, square, position):
        direction = 1 if piece.color is Color.WHITE else -1
        f0, r0 = file_of(square), rank_of(square)
        for df in (-1, 1):
            f, r = f0 + df, r0 + direction
            if in_bounds(f, r):
                yield sq(f, r)

class CastleAbility(Ability):
    # right -> (rook file, files that must be empty, files the king crosses)
    SIDES = {
        "K": (7, (5, 6), (5, 6)),
        "Q": (0, (1, 2, 3), (3, 2)),
    }

    def generate_moves(self, piece, square, position):
        home_rank = 0 if piece.color is Color.WHITE else 7
        if square != sq(4, home_rank):
            return

        enemy = piece.color.opponent()
        checked = None

        for right, (rook_file, corridor, crossed) in self.SIDES.items():
            flag = right if piece.color is Color.WHITE else right.lower()
            if flag not in position.castling:
                continue

            rook_sq = sq(rook_file, home_rank)
            rook = position.piece_at(rook_sq)
            if rook is None or rook.letter != "r" or rook.color is not piece.color:
                continue

            # corridor empty?
            if any(position.piece_at(sq(f, home_rank)) is not None for f in corridor):
                continue

            if checked is None:
                checked = position.is_square_attacked(square, enemy)
            if checked:
                return

            if any(position.is_square_attacked(sq(f, home_rank), enemy) for f in crossed):
                continue

            step = 1 if rook_file > 4 else -1
            yield CastleMove(
                square,
                sq(4 + 2 * step, home_rank),
                rook_from=rook_sq,
                rook_to=sq(4 + step, home_rank),
            )
