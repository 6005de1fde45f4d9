"""Accuracy trend, per-time-class averages and the 10-point distribution."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from chess_insights.insights_models import AccuracyBucket, AccuracyPoint, AccuracyStats
from chess_insights.models import MatchRecord
from chess_insights.percentages import round_half_up
from chess_insights.results import played_as_white

BUCKET_COUNT = 10
BUCKET_WIDTH = 10


class _HasAccuracy(Protocol):
    accuracy: float


def compute_accuracy_stats(records: Iterable[MatchRecord], identity: str) -> AccuracyStats:
    """Average subject accuracy over the records that carry accuracy data.

    ``average`` is None rather than 0 when no record has accuracies.
    """
    history: list[AccuracyPoint] = []
    sums: dict[str, tuple[float, int]] = {}
    for record in records:
        if record.accuracies is None:
            continue
        accuracy = (
            record.accuracies.white
            if played_as_white(record, identity)
            else record.accuracies.black
        )
        time_class = record.time_class.value
        history.append(
            AccuracyPoint(date=record.end_time, accuracy=accuracy, time_class=time_class)
        )
        total, count = sums.get(time_class, (0.0, 0))
        sums[time_class] = (total + accuracy, count + 1)

    by_time_class = {
        time_class: round_half_up(total / count) for time_class, (total, count) in sums.items()
    }
    average = None
    if history:
        average = round_half_up(sum(point.accuracy for point in history) / len(history))
    return AccuracyStats(
        average=average,
        by_time_class=by_time_class,
        history=tuple(sorted(history, key=lambda point: point.date)),
    )


def compute_accuracy_distribution(history: Iterable[_HasAccuracy]) -> list[AccuracyBucket]:
    """Count accuracy points per 10-point bucket.

    Always returns ten buckets ``0–10`` through ``90–100``. A perfect 100
    lands in the last bucket and negative values in the first.
    """
    counts = [0] * BUCKET_COUNT
    for point in history:
        index = int(point.accuracy // BUCKET_WIDTH)
        counts[min(max(index, 0), BUCKET_COUNT - 1)] += 1
    return [
        AccuracyBucket(
            bucket=f"{index * BUCKET_WIDTH}–{(index + 1) * BUCKET_WIDTH}",
            min=index * BUCKET_WIDTH,
            max=(index + 1) * BUCKET_WIDTH,
            count=counts[index],
        )
        for index in range(BUCKET_COUNT)
    ]
