"""Hour-of-day and day-of-week activity buckets."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, tzinfo

from chess_insights.chess_game_result import ChessGameResult
from chess_insights.insights_models import CalendarStats, DayBucket, HourBucket
from chess_insights.models import MatchRecord
from chess_insights.percentages import percentage
from chess_insights.results import get_result
from chess_insights.utils import local_datetime

DAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def compute_calendar_stats(
    records: Iterable[MatchRecord], identity: str, tz: tzinfo | None = None
) -> CalendarStats:
    """Bucket games and wins by local hour (0-23) and weekday (Sun-Sat).

    Every bucket is present even when empty. ``tz`` defaults to the host's
    local timezone.
    """
    hour_games = [0] * 24
    hour_wins = [0] * 24
    day_games = [0] * 7
    day_wins = [0] * 7
    for record in records:
        moment = local_datetime(record.end_time, tz)
        hour = moment.hour
        day = _sunday_first_weekday(moment)
        won = get_result(record, identity) is ChessGameResult.WIN
        hour_games[hour] += 1
        day_games[day] += 1
        if won:
            hour_wins[hour] += 1
            day_wins[day] += 1
    return CalendarStats(
        hour_of_day=tuple(
            HourBucket(
                hour=hour,
                games=hour_games[hour],
                wins=hour_wins[hour],
                win_pct=percentage(hour_wins[hour], hour_games[hour]),
            )
            for hour in range(24)
        ),
        day_of_week=tuple(
            DayBucket(
                day=day,
                label=DAY_LABELS[day],
                games=day_games[day],
                wins=day_wins[day],
                win_pct=percentage(day_wins[day], day_games[day]),
            )
            for day in range(7)
        ),
    )


def _sunday_first_weekday(moment: datetime) -> int:
    return (moment.weekday() + 1) % 7
