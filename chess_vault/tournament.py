"""Tournament aggregation over game outcome records.

A summary is rebuilt from scratch on every call; there is no incremental
update path, so re-running over the same records yields the same summary.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from .core import Color
from .errors import EmptyInputError
from .rating import (
    DEFAULT_K_FACTOR,
    parse_declared_result,
    performance_rating,
    rating_delta,
    round_half_up,
)


LOGGER = logging.getLogger("chess_vault.tournament")

STATUS_COMPLETED = "completed"


@dataclass(frozen=True)
class GameOutcomeRecord:
    tournament: str
    result: str
    subject_color: Union[Color, str]
    opponent_rating: float = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GameOutcomeRecord":
        """Build a record from game-note metadata (tournament, result, my_color, opponent_rating)."""
        raw = data.get("opponent_rating") or 0
        try:
            rating = float(raw)
        except (TypeError, ValueError):
            rating = math.nan
        # unreadable, infinite or NaN ratings count as unknown
        if not math.isfinite(rating):
            LOGGER.warning("record_bad_opponent_rating", extra={"value": repr(raw)})
            rating = 0
        return cls(
            tournament=str(data.get("tournament") or ""),
            result=str(data.get("result") or "*"),
            subject_color=str(data.get("my_color") or ""),
            opponent_rating=rating,
        )


def format_score(score: float) -> str:
    return str(int(score)) if float(score).is_integer() else str(score)


@dataclass(frozen=True)
class TournamentSummary:
    tournament: str
    start_rating: float
    total_score: float = 0.0
    games: int = 0
    opponent_ratings: Tuple[float, ...] = ()
    performance_rating: int = 0
    rating_change: float = 0.0
    end_rating: int = 0

    @property
    def score_text(self) -> str:
        return f"{format_score(self.total_score)}/{self.games}"

    def to_fields(self) -> Dict[str, Any]:
        """Values for the tournament's metadata fields once it is closed."""
        return {
            "status": STATUS_COMPLETED,
            "end_rating": self.end_rating,
            "performance_rating": self.performance_rating,
            "score": self.score_text,
            "rating_change": round(self.rating_change, 2),
        }


def matches_tournament(reference: str, tournament: str) -> bool:
    """True when a record's tournament reference names `tournament`.

    Bare names and link forms such as ``[[Name]]``, ``[[Folder/Name]]`` or
    ``[[Name|alias]]`` all match. This is a substring test, so one
    tournament's name contained in another's also matches.
    """
    if not tournament or not reference:
        return False
    return tournament in reference


def aggregate_tournament(
    tournament: str,
    start_rating: float,
    records: Iterable[GameOutcomeRecord],
    k_factor: float = DEFAULT_K_FACTOR,
    *,
    require_games: bool = False,
) -> TournamentSummary:
    total_score = 0.0
    games = 0
    opponents: List[float] = []
    change = 0.0

    for record in records:
        if not matches_tournament(record.tournament, tournament):
            continue

        score = parse_declared_result(record.result, record.subject_color)
        total_score += score
        games += 1

        if record.opponent_rating > 0:
            opponents.append(record.opponent_rating)
            change += rating_delta(start_rating, record.opponent_rating, score, k_factor)

    if games == 0:
        LOGGER.info("tournament_no_games", extra={"tournament": tournament})
        if require_games:
            raise EmptyInputError(f"No games found for tournament {tournament!r}")

    summary = TournamentSummary(
        tournament=tournament,
        start_rating=start_rating,
        total_score=total_score,
        games=games,
        opponent_ratings=tuple(opponents),
        performance_rating=performance_rating(opponents, total_score),
        rating_change=change,
        end_rating=round_half_up(start_rating + change),
    )
    LOGGER.debug(
        "tournament_aggregated",
        extra={"tournament": tournament, "games": games, "score": summary.score_text},
    )
    return summary
