"""Missed mate-in-one detection.

Replays the subject's most recent games and, at every position where the
subject is to move, checks whether any legal move mates on the spot. Each
such position counts either as a mate played or a mate missed depending on
the move actually made.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

import chess

from chess_insights.insights_models import TacticsSummary
from chess_insights.models import MatchRecord
from chess_insights.results import subject_color
from chess_insights.rules_engine import RulesEngine
from chess_insights.utils import funclogger, get_logger

logger = get_logger(__name__)

DEFAULT_SAMPLE_SIZE = 100


@dataclass(slots=True)
class _MateTally:
    missed: int = 0
    played: int = 0


def select_recent_sample(
    records: Iterable[MatchRecord], sample_size: int = DEFAULT_SAMPLE_SIZE
) -> list[MatchRecord]:
    """Return the ``sample_size`` most recently finished records, newest first."""
    ranked = sorted(records, key=lambda record: record.end_time, reverse=True)
    return ranked[: max(sample_size, 0)]


def has_mate_in_one(engine: RulesEngine, board: chess.Board) -> bool:
    """Return True when the side to move has a move that checkmates immediately."""
    for candidate in engine.legal_moves(board):
        engine.apply(board, candidate)
        mates = engine.is_checkmate(board)
        engine.revert(board)
        if mates:
            return True
    return False


@funclogger
def compute_tactics_stats(
    records: Iterable[MatchRecord],
    identity: str,
    *,
    engine: RulesEngine | None = None,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    should_stop: Callable[[], bool] | None = None,
) -> TacticsSummary:
    """Count mate-in-one chances the subject converted or missed.

    Every sampled record counts toward ``games_analyzed``, including records
    whose PGN cannot be replayed; those contribute no mate counts.
    ``should_stop`` is polled between records to abandon a run early.
    """
    engine = engine or RulesEngine()
    sample = select_recent_sample(records, sample_size)
    totals = _MateTally()
    for record in sample:
        if should_stop is not None and should_stop():
            logger.debug("Tactics scan stopped early for %s", identity)
            break
        tally = _scan_record(engine, record, identity)
        if tally is None:
            continue
        totals.missed += tally.missed
        totals.played += tally.played
    return TacticsSummary(
        games_analyzed=len(sample),
        missed_mates=totals.missed,
        mates_played=totals.played,
    )


def _scan_record(engine: RulesEngine, record: MatchRecord, identity: str) -> _MateTally | None:
    replay = engine.replay(record.pgn)
    if not replay.ok or replay.board is None:
        logger.debug("Skipping game %s: %s", _record_label(record), replay.error)
        return None
    board = replay.board
    subject_turn = subject_color(record, identity).value
    tally = _MateTally()
    try:
        for move in replay.moves:
            if board.turn != subject_turn or not has_mate_in_one(engine, board):
                engine.apply(board, move)
                continue
            engine.apply(board, move)
            if engine.is_checkmate(board):
                tally.played += 1
            else:
                tally.missed += 1
    except (AssertionError, ValueError) as exc:
        logger.debug("Abandoned game %s mid-walk: %s", _record_label(record), exc)
        return None
    return tally


def _record_label(record: MatchRecord) -> str:
    return record.url or record.uuid or str(record.end_time)
