"""FIDE Elo rules: expected score, rating change and performance rating.

All functions are pure and never raise on numeric input. Rating gaps beyond
400 points are clamped (FIDE Handbook B.02, 8.3.1) rather than rejected.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional, Sequence, Union

from .core import Color


DEFAULT_K_FACTOR = 20.0
MAX_RATING_GAP = 400
MAX_DP = 800

WIN_SCORE = 1.0
DRAW_SCORE = 0.5
LOSS_SCORE = 0.0

# FIDE rating differential dp, indexed by score percentage 0..100.
FIDE_DP_TABLE = (
    -800, -677, -589, -538, -501, -470, -444, -422, -401, -383,
    -366, -351, -336, -322, -309, -296, -284, -273, -262, -251,
    -240, -230, -220, -211, -202, -193, -184, -175, -166, -158,
    -149, -141, -133, -125, -117, -110, -102, -95, -87, -80,
    -72, -65, -57, -50, -43, -36, -29, -21, -14, -7,
    0,
    7, 14, 21, 29, 36, 43, 50, 57, 65, 72,
    80, 87, 95, 102, 110, 117, 125, 133, 141, 149,
    158, 166, 175, 184, 193, 202, 211, 220, 230, 240,
    251, 262, 273, 284, 296, 309, 322, 336, 351, 366,
    383, 401, 422, 444, 470, 501, 538, 589, 677, 800,
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _logistic(diff: float) -> float:
    return 1.0 / (1.0 + 10.0 ** (diff / 400.0))


def expected_score(subject_rating: float, opponent_rating: float) -> float:
    diff = opponent_rating - subject_rating
    diff = max(-MAX_RATING_GAP, min(MAX_RATING_GAP, diff))
    # Complement keeps expected_score(a, b) + expected_score(b, a) exact.
    if diff > 0:
        return 1.0 - _logistic(-diff)
    return _logistic(diff)


def rating_delta(
    subject_rating: float,
    opponent_rating: float,
    actual_score: float,
    k_factor: float = DEFAULT_K_FACTOR,
) -> float:
    return k_factor * (actual_score - expected_score(subject_rating, opponent_rating))


def dp_for(percentage: float) -> int:
    if percentage >= 1.0:
        return MAX_DP
    if percentage <= 0.0:
        return -MAX_DP

    key = round_half_up(percentage * 100)
    if 0 <= key < len(FIDE_DP_TABLE):
        return FIDE_DP_TABLE[key]
    return round_half_up(-400 * math.log10(1 / percentage - 1))


def performance_rating(opponent_ratings: Sequence[float], total_score: float) -> int:
    if not opponent_ratings:
        return 0

    count = len(opponent_ratings)
    average = sum(opponent_ratings) / count
    return round_half_up(average + dp_for(total_score / count))


class DeclaredResult(Enum):
    WHITE_WIN = "1-0"
    BLACK_WIN = "0-1"
    DRAW = "1/2-1/2"
    UNKNOWN = "*"

    @classmethod
    def from_token(cls, token: object) -> "DeclaredResult":
        text = str(token).strip() if token is not None else ""
        for member in (cls.WHITE_WIN, cls.BLACK_WIN, cls.DRAW):
            if text == member.value:
                return member
        return cls.UNKNOWN

    @property
    def winner(self) -> Optional[Color]:
        if self is DeclaredResult.WHITE_WIN:
            return Color.WHITE
        if self is DeclaredResult.BLACK_WIN:
            return Color.BLACK
        return None

    def score_for(self, color: Color) -> float:
        if self is DeclaredResult.DRAW:
            return DRAW_SCORE
        # Unknown results count as a loss.
        return WIN_SCORE if self.winner is color else LOSS_SCORE


def _as_color(color: Union[Color, str]) -> Optional[Color]:
    if isinstance(color, Color):
        return color
    try:
        return Color.from_name(str(color))
    except ValueError:
        return None


def parse_declared_result(result_token: object, subject_color: Union[Color, str]) -> float:
    result = DeclaredResult.from_token(result_token)
    if result is DeclaredResult.DRAW:
        return DRAW_SCORE
    color = _as_color(subject_color)
    if color is None:
        return LOSS_SCORE
    return result.score_for(color)


def describe_result(result_token: object, subject_color: Union[Color, str]) -> str:
    """Game-note label for the subject: Win, Loss, Draw or Unknown."""
    result = DeclaredResult.from_token(result_token)
    color = _as_color(subject_color)
    if result is DeclaredResult.DRAW:
        return "Draw"
    if result is DeclaredResult.UNKNOWN or color is None:
        return "Unknown"
    return "Win" if result.winner is color else "Loss"
