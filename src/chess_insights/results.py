"""Resolve the subject's side and result in a match record."""

from __future__ import annotations

from chess_insights.chess_game_result import ChessGameResult
from chess_insights.chess_player_color import ChessPlayerColor
from chess_insights.models import MatchRecord, MatchSide
from chess_insights.utils import normalize_string


def played_as_white(record: MatchRecord, identity: str) -> bool:
    """Return True when ``identity`` is the first (white) side of the record."""
    return normalize_string(record.white.username) == normalize_string(identity)


def subject_color(record: MatchRecord, identity: str) -> ChessPlayerColor:
    """Return the subject's color; anyone not playing White is treated as Black."""
    return ChessPlayerColor.from_bool(played_as_white(record, identity))


def subject_side(record: MatchRecord, identity: str) -> MatchSide:
    return record.white if played_as_white(record, identity) else record.black


def opponent_side(record: MatchRecord, identity: str) -> MatchSide:
    return record.black if played_as_white(record, identity) else record.white


def opponent_username(record: MatchRecord, identity: str) -> str:
    """Return the lower-cased identity of the subject's opponent."""
    return normalize_string(opponent_side(record, identity).username)


def get_result(record: MatchRecord, identity: str) -> ChessGameResult:
    """Return win, loss or draw from the subject's point of view."""
    return subject_side(record, identity).result.to_game_result()
