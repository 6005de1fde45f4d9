import unittest

import chess

from chess_insights.rules_engine import RulesEngine
from tests.record_fixtures import FOOLS_MATE, make_pgn


class RulesEngineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = RulesEngine()

    def test_replay_returns_start_position_and_mainline(self) -> None:
        result = self.engine.replay(make_pgn(FOOLS_MATE, White="a", Black="b"))

        self.assertTrue(result.ok)
        self.assertIsNone(result.error)
        self.assertEqual(result.board.fen(), chess.STARTING_FEN)
        self.assertEqual([move.uci() for move in result.moves], ["f2f3", "e7e5", "g2g4", "d8h4"])

    def test_replay_reports_failures_without_raising(self) -> None:
        for pgn in ("", "1. e4 e5 2. Qh8", "1. e4 e5 2. Ke3"):
            with self.subTest(pgn=pgn):
                result = self.engine.replay(pgn)
                self.assertFalse(result.ok)
                self.assertIsNone(result.board)
                self.assertTrue(result.error)

    def test_replay_honours_fen_setup(self) -> None:
        fen = "6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1"
        result = self.engine.replay(make_pgn("1. Ra8#", SetUp="1", FEN=fen))

        self.assertTrue(result.ok)
        self.assertEqual(result.board.fen(), fen)

    def test_apply_revert_and_status(self) -> None:
        board = chess.Board("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        mate = chess.Move.from_uci("a1a8")

        self.assertIn(mate, self.engine.legal_moves(board))
        self.engine.apply(board, mate)
        self.assertTrue(self.engine.is_checkmate(board))
        self.assertEqual(self.engine.revert(board), mate)
        self.assertFalse(self.engine.is_checkmate(board))

    def test_is_stalemate(self) -> None:
        board = chess.Board("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")

        self.assertTrue(self.engine.is_stalemate(board))
        self.assertFalse(self.engine.is_checkmate(board))


if __name__ == "__main__":
    unittest.main()
