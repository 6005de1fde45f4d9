"""Most played openings per color."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from chess_insights.chess_player_color import ChessPlayerColor
from chess_insights.insights_models import OpeningAggregate
from chess_insights.models import MatchRecord
from chess_insights.openings import extract_opening
from chess_insights.result_stats import ResultTally
from chess_insights.results import get_result, subject_color

DEFAULT_TOP_N = 10


@dataclass(slots=True)
class _OpeningTally:
    eco: str
    name: str
    results: ResultTally = field(default_factory=ResultTally)

    def freeze(self) -> OpeningAggregate:
        counts = self.results.freeze()
        return OpeningAggregate(
            eco=self.eco,
            name=self.name,
            count=counts.total,
            wins=counts.wins,
            losses=counts.losses,
            draws=counts.draws,
            win_pct=counts.win_pct,
        )


def compute_opening_stats(
    records: Iterable[MatchRecord],
    identity: str,
    color: ChessPlayerColor | str,
    top_n: int = DEFAULT_TOP_N,
) -> list[OpeningAggregate]:
    """Top openings the subject played with ``color``, most frequent first.

    Games are grouped by ECO code; the first name seen for a code is kept.
    Ties keep first-seen order.
    """
    side = color if isinstance(color, ChessPlayerColor) else ChessPlayerColor.from_str(color)
    tallies: dict[str, _OpeningTally] = {}
    for record in records:
        if subject_color(record, identity) is not side:
            continue
        opening = extract_opening(record.pgn)
        tally = tallies.get(opening.eco)
        if tally is None:
            tally = tallies[opening.eco] = _OpeningTally(eco=opening.eco, name=opening.name)
        tally.results.add(get_result(record, identity))
    ranked = sorted(tallies.values(), key=lambda tally: tally.results.total, reverse=True)
    return [tally.freeze() for tally in ranked[: max(top_n, 0)]]
