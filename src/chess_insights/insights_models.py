"""Derived value objects returned by the aggregators."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from chess_insights.percentages import percentage


@dataclass(frozen=True, slots=True)
class ResultCounts:
    """Win/loss/draw tallies with independently rounded percentages."""

    wins: int
    losses: int
    draws: int
    total: int
    win_pct: int
    loss_pct: int
    draw_pct: int

    @classmethod
    def from_counts(cls, wins: int, losses: int, draws: int) -> ResultCounts:
        total = wins + losses + draws
        return cls(
            wins=wins,
            losses=losses,
            draws=draws,
            total=total,
            win_pct=percentage(wins, total),
            loss_pct=percentage(losses, total),
            draw_pct=percentage(draws, total),
        )


@dataclass(frozen=True, slots=True)
class RatingPoint:
    date: int
    rating: int
    time_class: str


@dataclass(frozen=True, slots=True)
class OpeningAggregate:
    eco: str
    name: str
    count: int
    wins: int
    losses: int
    draws: int
    win_pct: int


@dataclass(frozen=True, slots=True)
class HourBucket:
    hour: int
    games: int
    wins: int
    win_pct: int


@dataclass(frozen=True, slots=True)
class DayBucket:
    day: int
    label: str
    games: int
    wins: int
    win_pct: int


@dataclass(frozen=True, slots=True)
class CalendarStats:
    """Games and wins by local hour of day (24 buckets) and weekday (7 buckets, Sunday first)."""

    hour_of_day: tuple[HourBucket, ...]
    day_of_week: tuple[DayBucket, ...]


@dataclass(frozen=True, slots=True)
class AccuracyPoint:
    date: int
    accuracy: float
    time_class: str


@dataclass(frozen=True, slots=True)
class AccuracyStats:
    average: float | None
    by_time_class: dict[str, float]
    history: tuple[AccuracyPoint, ...]


@dataclass(frozen=True, slots=True)
class AccuracyBucket:
    bucket: str
    min: int
    max: int
    count: int


@dataclass(frozen=True, slots=True)
class CastlingCounts:
    kingside: int
    queenside: int
    none: int


@dataclass(frozen=True, slots=True)
class CastlingStats:
    counts: CastlingCounts
    kingside_pct: int
    queenside_pct: int
    no_castle_pct: int
    kingside_win_pct: int
    queenside_win_pct: int
    no_castle_win_pct: int


@dataclass(frozen=True, slots=True)
class PieceMoveCounts:
    pawn: int = 0
    knight: int = 0
    bishop: int = 0
    rook: int = 0
    queen: int = 0
    king: int = 0


@dataclass(frozen=True, slots=True)
class ActivityDay:
    date: str
    count: int
    wins: int
    losses: int
    draws: int


@dataclass(frozen=True, slots=True)
class TacticsSummary:
    """Mate-in-one conversion over the analyzed sample."""

    games_analyzed: int
    missed_mates: int
    mates_played: int

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class CountryAggregate:
    country: str
    count: int
