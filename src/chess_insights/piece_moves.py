"""Count which pieces the subject moves."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import fields

from chess_insights.chess_piece_type import ChessPieceType
from chess_insights.insights_models import PieceMoveCounts
from chess_insights.models import MatchRecord
from chess_insights.movetext import parse_move_tokens
from chess_insights.results import subject_color

_LEADING_PIECES = {
    "O": ChessPieceType.KING,
    "N": ChessPieceType.KNIGHT,
    "B": ChessPieceType.BISHOP,
    "R": ChessPieceType.ROOK,
    "Q": ChessPieceType.QUEEN,
}
_PAWN_FILES = frozenset("abcdefgh")


def classify_move(token: str) -> ChessPieceType | None:
    """Return the piece a SAN token moves, from its first character.

    Castling counts as a king move. Explicit ``K`` moves are not classified.
    """
    if not token:
        return None
    leading = token[0]
    if leading in _PAWN_FILES:
        return ChessPieceType.PAWN
    return _LEADING_PIECES.get(leading)


def compute_piece_move_frequency(
    records: Iterable[MatchRecord], identity: str
) -> PieceMoveCounts:
    """Count the subject's moves per piece type across the batch."""
    counts = {field.name: 0 for field in fields(PieceMoveCounts)}
    for record in records:
        tokens = parse_move_tokens(record.pgn)
        offset = subject_color(record, identity).token_offset()
        for token in tokens[offset::2]:
            piece = classify_move(token)
            if piece is not None:
                counts[piece.value] += 1
    return PieceMoveCounts(**counts)
