from __future__ import annotations

from collections.abc import Iterable

from chess_insights.insights_models import RatingPoint
from chess_insights.models import MatchRecord
from chess_insights.results import subject_side


def compute_rating_history(records: Iterable[MatchRecord], identity: str) -> list[RatingPoint]:
    """Subject rating after each game, oldest first."""
    points = [
        RatingPoint(
            date=record.end_time,
            rating=subject_side(record, identity).rating,
            time_class=record.time_class.value,
        )
        for record in records
    ]
    return sorted(points, key=lambda point: point.date)
