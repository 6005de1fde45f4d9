from __future__ import annotations

from collections.abc import Iterable
from datetime import tzinfo

from chess_insights.insights_models import ActivityDay
from chess_insights.models import MatchRecord
from chess_insights.result_stats import ResultTally
from chess_insights.results import get_result
from chess_insights.utils import local_datetime


def compute_activity_heatmap(
    records: Iterable[MatchRecord], identity: str, tz: tzinfo | None = None
) -> list[ActivityDay]:
    """One entry per local calendar day with games, oldest day first."""
    days: dict[str, ResultTally] = {}
    for record in records:
        date = local_datetime(record.end_time, tz).strftime("%Y-%m-%d")
        days.setdefault(date, ResultTally()).add(get_result(record, identity))
    return [
        ActivityDay(
            date=date,
            count=tally.total,
            wins=tally.wins,
            losses=tally.losses,
            draws=tally.draws,
        )
        for date, tally in sorted(days.items())
    ]
