from __future__ import annotations

from enum import StrEnum


class ChessGameResult(StrEnum):
    """
    Enumeration representing the outcome of a chess game for one player.

    Attributes:
        WIN: Indicates a win.
        LOSS: Indicates a loss.
        DRAW: Indicates a draw.
    """

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"
