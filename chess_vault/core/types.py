from __future__ import annotations

from enum import Enum

class Color(Enum):
    WHITE = 1
    BLACK = -1

    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def letter(self) -> str:
        return "w" if self is Color.WHITE else "b"

    @classmethod
    def from_name(cls, name: str) -> "Color":
        """Accept 'white'/'black' (any case) or FEN-style 'w'/'b'."""
        key = name.strip().lower()
        if key in ("white", "w"):
            return cls.WHITE
        if key in ("black", "b"):
            return cls.BLACK
        raise ValueError(f"Unknown color: {name!r}")

FILES = "abcdefgh"

def sq(file: int, rank: int) -> int:
    return rank * 8 + file

def file_of(s: int) -> int:
    return s % 8

def rank_of(s: int) -> int:
    return s // 8

def in_bounds(file: int, rank: int) -> bool:
    return 0 <= file < 8 and 0 <= rank < 8

def sq_name(s: int) -> str:
    return f"{FILES[file_of(s)]}{rank_of(s) + 1}"

def parse_square(a: str) -> int:
    a = a.strip().lower()
    if len(a) != 2 or a[0] not in FILES or a[1] not in "12345678":
        raise ValueError(f"Bad square: {a!r}")
    return sq(FILES.index(a[0]), int(a[1]) - 1)
