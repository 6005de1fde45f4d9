"""Result tallies overall and by game phase."""

from __future__ import annotations

from collections.abc import Iterable

from chess_insights.chess_game_result import ChessGameResult
from chess_insights.game_phase import GamePhase, classify_game_phase
from chess_insights.insights_models import ResultCounts
from chess_insights.models import MatchRecord
from chess_insights.results import get_result


class ResultTally:
    """Mutable win/loss/draw accumulator used while scanning a batch."""

    __slots__ = ("draws", "losses", "wins")

    def __init__(self) -> None:
        self.wins = 0
        self.losses = 0
        self.draws = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses + self.draws

    def add(self, result: ChessGameResult) -> None:
        if result is ChessGameResult.WIN:
            self.wins += 1
        elif result is ChessGameResult.LOSS:
            self.losses += 1
        else:
            self.draws += 1

    def freeze(self) -> ResultCounts:
        return ResultCounts.from_counts(self.wins, self.losses, self.draws)


def compute_result_counts(records: Iterable[MatchRecord], identity: str) -> ResultCounts:
    """Overall win/loss/draw counts for the subject."""
    tally = ResultTally()
    for record in records:
        tally.add(get_result(record, identity))
    return tally.freeze()


def compute_game_phase_stats(
    records: Iterable[MatchRecord], identity: str
) -> dict[GamePhase, ResultCounts]:
    """Win/loss/draw counts grouped by the phase each game ended in."""
    tallies = {phase: ResultTally() for phase in GamePhase}
    for record in records:
        tallies[classify_game_phase(record.pgn)].add(get_result(record, identity))
    return {phase: tally.freeze() for phase, tally in tallies.items()}
