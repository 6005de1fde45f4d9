"""Thin adapter over python-chess used by the tactics detector."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO

import chess
import chess.pgn

from chess_insights.errors import ReplayError


@dataclass(frozen=True, slots=True)
class ReplayResult:
    """Outcome of replaying a PGN.

    On success ``board`` holds the game's starting position and ``moves`` the
    mainline in play order. On failure ``error`` describes why.
    """

    ok: bool
    moves: tuple[chess.Move, ...] = ()
    board: chess.Board | None = None
    error: str | None = None

    @classmethod
    def failed(cls, error: ReplayError) -> ReplayResult:
        return cls(ok=False, error=str(error))


class RulesEngine:
    """Legal move generation, move application and mate detection."""

    def replay(self, pgn: str) -> ReplayResult:
        """Parse ``pgn`` into its mainline without raising."""
        try:
            game = _read_game(pgn)
        except ReplayError as exc:
            return ReplayResult.failed(exc)
        return ReplayResult(ok=True, moves=tuple(game.mainline_moves()), board=game.board())

    def legal_moves(self, board: chess.Board) -> list[chess.Move]:
        return list(board.legal_moves)

    def apply(self, board: chess.Board, move: chess.Move) -> None:
        board.push(move)

    def revert(self, board: chess.Board) -> chess.Move:
        return board.pop()

    def is_checkmate(self, board: chess.Board) -> bool:
        return board.is_checkmate()

    def is_stalemate(self, board: chess.Board) -> bool:
        return board.is_stalemate()


def _read_game(pgn: str) -> chess.pgn.Game:
    try:
        game = chess.pgn.read_game(StringIO(pgn or ""))
    except ValueError as exc:
        raise ReplayError(f"Unreadable PGN: {exc}") from exc
    if game is None:
        raise ReplayError("No game found in PGN")
    if game.errors:
        raise ReplayError(f"Invalid movetext: {game.errors[0]}")
    return game
