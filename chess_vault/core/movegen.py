from __future__ import annotations

from typing import Iterable, List, Sequence

from .moves import Move
from .position import Position
from .rules import Rule, DEFAULT_RULES

def pseudo_legal_moves(position: Position) -> Iterable[Move]:
    for square, p in position.iter_pieces_of(position.side_to_move):
        yield from p.pseudo_legal_moves(position, square)

def apply_rules(position: Position, moves: Iterable[Move], rules: Sequence[Rule] = DEFAULT_RULES) -> Iterable[Move]:
    out: Iterable[Move] = moves
    for rule in rules:
        out = rule.apply(position, position.side_to_move, out)
    return out

def generate_legal(position: Position, rules: Sequence[Rule] = DEFAULT_RULES) -> List[Move]:
    return list(apply_rules(position, pseudo_legal_moves(position), rules))

def has_legal_move(position: Position) -> bool:
    for _ in apply_rules(position, pseudo_legal_moves(position)):
        return True
    return False
