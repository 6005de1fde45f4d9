"""Castling side detection."""

from __future__ import annotations

from enum import StrEnum

from chess_insights.movetext import strip_header_tags

_QUEENSIDE_MARKER = "O-O-O"
_KINGSIDE_MARKER = "O-O"


class CastlingSide(StrEnum):
    KINGSIDE = "kingside"
    QUEENSIDE = "queenside"
    NONE = "none"


def detect_castling(pgn: str | None) -> CastlingSide:
    """Return which castling notation appears in a game's movetext.

    ``O-O`` is a substring of ``O-O-O``, so queenside is tested first.
    """
    moves = strip_header_tags(pgn or "")
    if _contains_marker(moves, _QUEENSIDE_MARKER):
        return CastlingSide.QUEENSIDE
    if _contains_marker(moves, _KINGSIDE_MARKER):
        return CastlingSide.KINGSIDE
    return CastlingSide.NONE


def _contains_marker(text: str, marker: str) -> bool:
    start = text.find(marker)
    while start != -1:
        end = start + len(marker)
        if not _is_word_char_at(text, start - 1) and not _is_word_char_at(text, end):
            return True
        start = text.find(marker, start + 1)
    return False


def _is_word_char_at(text: str, index: int) -> bool:
    if index < 0 or index >= len(text):
        return False
    char = text[index]
    return char.isalnum() or char == "_"
