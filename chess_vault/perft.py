from __future__ import annotations

from typing import Dict

from .core import Position, generate_legal
from .san import move_to_lan


def perft(position: Position, depth: int) -> int:
    """Performance test: count leaf nodes to `depth` from `position`."""
    if depth <= 0:
        return 1
    moves = generate_legal(position)
    if depth == 1:
        return len(moves)
    total = 0
    for m in moves:
        total += perft(m.apply(position), depth - 1)
    return total


def perft_divide(position: Position, depth: int) -> Dict[str, int]:
    """Divide perft: nodes per root move."""
    out: Dict[str, int] = {}
    for m in generate_legal(position):
        out[move_to_lan(m)] = perft(m.apply(position), depth - 1)
    return out
