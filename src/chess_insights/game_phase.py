"""Game length based phase classification."""

from __future__ import annotations

from enum import StrEnum

from chess_insights.movetext import count_move_number_markers

_OPENING_MAX_MOVES = 12
_MIDDLEGAME_MAX_MOVES = 40


class GamePhase(StrEnum):
    OPENING = "opening"
    MIDDLEGAME = "middlegame"
    ENDGAME = "endgame"


def classify_game_phase(pgn: str | None) -> GamePhase:
    """Classify the phase a game ended in from its number of move markers.

    Markers are counted over the whole blob, headers included, so dated
    headers such as ``[Date "2024.01.15"]`` add to the count.
    """
    move_count = count_move_number_markers(pgn or "")
    if move_count < _OPENING_MAX_MOVES:
        return GamePhase.OPENING
    if move_count < _MIDDLEGAME_MAX_MOVES:
        return GamePhase.MIDDLEGAME
    return GamePhase.ENDGAME
