from __future__ import annotations

from typing import Iterable, Protocol, TYPE_CHECKING

from .types import Color

if TYPE_CHECKING:
    from .moves import Move
    from .position import Position

class Rule(Protocol):
    def apply(self, position: "Position", color: Color, moves: Iterable["Move"]) -> Iterable["Move"]:
        ...

class KingSafetyRule:
    """Reject any move that leaves your own king in check."""
    def apply(self, position: "Position", color: Color, moves: Iterable["Move"]) -> Iterable["Move"]:
        for m in moves:
            if not m.apply(position).in_check(color):
                yield m

DEFAULT_RULES = (KingSafetyRule(),)
