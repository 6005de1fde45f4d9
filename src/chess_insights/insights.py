"""Record filters and the combined insights payload."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from datetime import tzinfo

from chess_insights.accuracy_stats import compute_accuracy_distribution, compute_accuracy_stats
from chess_insights.activity_heatmap import compute_activity_heatmap
from chess_insights.calendar_stats import compute_calendar_stats
from chess_insights.castling_stats import compute_castling_stats
from chess_insights.chess_player_color import ChessPlayerColor
from chess_insights.chess_time_control import normalize_time_class_filter
from chess_insights.models import MatchRecord
from chess_insights.opening_stats import compute_opening_stats
from chess_insights.opponent_stats import (
    compute_opponent_country_stats,
    extract_opponent_usernames,
)
from chess_insights.piece_moves import compute_piece_move_frequency
from chess_insights.rating_history import compute_rating_history
from chess_insights.result_stats import compute_game_phase_stats, compute_result_counts
from chess_insights.utils import Now, funclogger

SECONDS_PER_DAY = 86400


@dataclass(frozen=True, slots=True)
class InsightsFilters:
    """Narrow a batch by time class and recency.

    Attributes:
        time_class: A time class value, or ``"all"``.
        days_back: Keep games that ended within this many days; None keeps all.
    """

    time_class: str = "all"
    days_back: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "time_class", normalize_time_class_filter(self.time_class))
        if self.days_back is not None and self.days_back < 0:
            raise ValueError(f"days_back must be non-negative: {self.days_back}")


def filter_records(
    records: Iterable[MatchRecord],
    filters: InsightsFilters,
    now: float | None = None,
) -> list[MatchRecord]:
    """Return the records that pass ``filters``, preserving order."""
    selected = list(records)
    if filters.time_class != "all":
        selected = [record for record in selected if record.time_class == filters.time_class]
    if filters.days_back is not None:
        reference = Now.as_seconds() if now is None else now
        cutoff = reference - filters.days_back * SECONDS_PER_DAY
        selected = [record for record in selected if record.end_time >= cutoff]
    return selected


def available_time_classes(records: Iterable[MatchRecord]) -> list[str]:
    """Distinct time classes present in the batch, first-seen order."""
    return list(dict.fromkeys(record.time_class.value for record in records))


@funclogger
def build_insights_payload(
    records: Iterable[MatchRecord],
    identity: str,
    country_map: Mapping[str, str] | None = None,
    tz: tzinfo | None = None,
) -> dict[str, object]:
    """Run every synchronous aggregator over one batch.

    The tactics summary is not included; it is produced off-thread by
    :class:`chess_insights.offload.TacticsOffloadManager`.
    """
    batch = list(records)
    accuracy = compute_accuracy_stats(batch, identity)
    return {
        "username": identity,
        "results": asdict(compute_result_counts(batch, identity)),
        "rating_history": [asdict(point) for point in compute_rating_history(batch, identity)],
        "openings": {
            "white": [
                asdict(opening)
                for opening in compute_opening_stats(batch, identity, ChessPlayerColor.WHITE)
            ],
            "black": [
                asdict(opening)
                for opening in compute_opening_stats(batch, identity, ChessPlayerColor.BLACK)
            ],
        },
        "calendar": asdict(compute_calendar_stats(batch, identity, tz)),
        "accuracy": asdict(accuracy),
        "accuracy_distribution": [
            asdict(bucket) for bucket in compute_accuracy_distribution(accuracy.history)
        ],
        "castling": asdict(compute_castling_stats(batch, identity)),
        "game_phases": {
            phase.value: asdict(counts)
            for phase, counts in compute_game_phase_stats(batch, identity).items()
        },
        "piece_moves": asdict(compute_piece_move_frequency(batch, identity)),
        "activity": [asdict(day) for day in compute_activity_heatmap(batch, identity, tz)],
        "opponent_countries": [
            asdict(country)
            for country in compute_opponent_country_stats(batch, identity, country_map or {})
        ],
        "opponent_count": len(extract_opponent_usernames(batch, identity)),
        "time_classes": available_time_classes(batch),
    }
