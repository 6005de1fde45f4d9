from __future__ import annotations

from collections.abc import Iterable

from chess_insights.castling import CastlingSide, detect_castling
from chess_insights.chess_game_result import ChessGameResult
from chess_insights.insights_models import CastlingCounts, CastlingStats
from chess_insights.models import MatchRecord
from chess_insights.percentages import percentage
from chess_insights.results import get_result


def compute_castling_stats(records: Iterable[MatchRecord], identity: str) -> CastlingStats:
    """Castling frequency and win rate per castling side.

    Frequencies are over the whole batch; win rates over each side's own count.
    """
    counts = dict.fromkeys(CastlingSide, 0)
    wins = dict.fromkeys(CastlingSide, 0)
    total = 0
    for record in records:
        side = detect_castling(record.pgn)
        total += 1
        counts[side] += 1
        if get_result(record, identity) is ChessGameResult.WIN:
            wins[side] += 1
    return CastlingStats(
        counts=CastlingCounts(
            kingside=counts[CastlingSide.KINGSIDE],
            queenside=counts[CastlingSide.QUEENSIDE],
            none=counts[CastlingSide.NONE],
        ),
        kingside_pct=percentage(counts[CastlingSide.KINGSIDE], total),
        queenside_pct=percentage(counts[CastlingSide.QUEENSIDE], total),
        no_castle_pct=percentage(counts[CastlingSide.NONE], total),
        kingside_win_pct=percentage(wins[CastlingSide.KINGSIDE], counts[CastlingSide.KINGSIDE]),
        queenside_win_pct=percentage(
            wins[CastlingSide.QUEENSIDE], counts[CastlingSide.QUEENSIDE]
        ),
        no_castle_win_pct=percentage(wins[CastlingSide.NONE], counts[CastlingSide.NONE]),
    )
