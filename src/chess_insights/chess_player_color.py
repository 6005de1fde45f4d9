from __future__ import annotations

from enum import Enum

import chess


class ChessPlayerColor(Enum):
    """Enum representing the color of a chess player.

    Attributes:
        WHITE: Represents the white player (corresponds to chess.WHITE).
        BLACK: Represents the black player (corresponds to chess.BLACK).

    Methods:
        from_str(color_str: str) -> ChessPlayerColor:
            Converts a string to the corresponding ChessPlayerColor enum value.
            Raises ValueError for input besides ("white", "w", "black", "b").

        is_white() -> bool:
            Returns True if the color is white.

        token_offset() -> int:
            Index of this side's first ply in a tokenized move list.
    """

    WHITE = chess.WHITE
    BLACK = chess.BLACK

    @classmethod
    def from_str(cls, color_str: str) -> ChessPlayerColor:
        color_str = color_str.lower()
        if color_str in ["white", "w"]:
            return cls.WHITE
        if color_str in ["black", "b"]:
            return cls.BLACK
        raise ValueError(f"Invalid color string: {color_str}")

    @classmethod
    def from_bool(cls, is_white: bool) -> ChessPlayerColor:
        return cls.WHITE if is_white else cls.BLACK

    def is_white(self) -> bool:
        return self == ChessPlayerColor.WHITE

    def token_offset(self) -> int:
        return 0 if self.is_white() else 1
