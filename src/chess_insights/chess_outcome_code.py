"""Per-side outcome codes reported by chess.com."""

from __future__ import annotations

from enum import StrEnum

from chess_insights.chess_game_result import ChessGameResult


class OutcomeCode(StrEnum):
    """
    Closed enumeration of the per-side ``result`` strings in chess.com game data.

    Every game carries one code per side: the winner's side reads ``win`` and
    the loser's side names how the game was lost (``checkmated``,
    ``resigned``, ...). Drawn games carry the same draw code on both sides.

    Methods:
        parse(value: str | None) -> OutcomeCode:
            Converts a raw string into a member. Never raises: unknown values
            map to ``UNRECOGNIZED``.

        to_game_result() -> ChessGameResult:
            Total mapping onto win/draw/loss. ``UNRECOGNIZED`` counts as a loss.
    """

    WIN = "win"
    CHECKMATED = "checkmated"
    AGREED = "agreed"
    REPETITION = "repetition"
    TIMEOUT = "timeout"
    RESIGNED = "resigned"
    STALEMATE = "stalemate"
    LOSE = "lose"
    INSUFFICIENT = "insufficient"
    FIFTY_MOVE = "50move"
    ABANDONED = "abandoned"
    KING_OF_THE_HILL = "kingofthehill"
    THREE_CHECK = "threecheck"
    TIME_VS_INSUFFICIENT = "timevsinsufficient"
    BUGHOUSE_PARTNER_LOSE = "bughousepartnerlose"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def parse(cls, value: str | None) -> OutcomeCode:
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.UNRECOGNIZED

    def to_game_result(self) -> ChessGameResult:
        if self is OutcomeCode.WIN:
            return ChessGameResult.WIN
        if self in DRAW_CODES:
            return ChessGameResult.DRAW
        return ChessGameResult.LOSS


DRAW_CODES = frozenset(
    {
        OutcomeCode.AGREED,
        OutcomeCode.REPETITION,
        OutcomeCode.STALEMATE,
        OutcomeCode.INSUFFICIENT,
        OutcomeCode.FIFTY_MOVE,
        OutcomeCode.TIME_VS_INSUFFICIENT,
    }
)
