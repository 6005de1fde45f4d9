"""Piece type helpers for chess models."""

from __future__ import annotations

from enum import StrEnum


class ChessPieceType(StrEnum):
    """
    An enumeration representing the types of chess pieces.

    Attributes:
        PAWN (str): Represents a pawn piece.
        KNIGHT (str): Represents a knight piece.
        BISHOP (str): Represents a bishop piece.
        ROOK (str): Represents a rook piece.
        QUEEN (str): Represents a queen piece.
        KING (str): Represents a king piece.
    """

    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
