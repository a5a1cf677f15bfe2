from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterable, Tuple, TYPE_CHECKING

from .ability import Ability
from .types import Color

@dataclass(frozen=True)
class Piece:
    """A piece kind plus its color. Squares live on the Position, not here."""

    color: Color

    letter: ClassVar[str] = "?"
    abilities: ClassVar[Tuple[Ability, ...]] = ()

    @property
    def symbol(self) -> str:
        return self.letter.upper() if self.color is Color.WHITE else self.letter

    def pseudo_legal_moves(self, position: "Position", square: int) -> Iterable["Move"]:
        for ab in self.abilities:
            yield from ab.generate_moves(self, square, position)

    def attacks(self, position: "Position", square: int) -> Iterable[int]:
        for ab in self.abilities:
            yield from ab.generate_attacks(self, square, position)

# typing-only
if TYPE_CHECKING:
    from .position import Position
    from .moves import Move
