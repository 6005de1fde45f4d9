import unittest

from pydantic import ValidationError

from chess_insights.chess_outcome_code import OutcomeCode
from chess_insights.chess_time_control import TimeClass
from chess_insights.models import MatchRecord


def _api_game(**overrides: object) -> dict[str, object]:
    game: dict[str, object] = {
        "url": "https://www.chess.com/game/live/1",
        "pgn": "1. e4 e5 1-0",
        "time_control": "180+2",
        "end_time": 1_700_000_000,
        "rated": True,
        "uuid": "abc-123",
        "time_class": "blitz",
        "rules": "chess",
        "fen": "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1",
        "white": {"username": "Hero", "rating": 1510, "result": "win", "@id": "x"},
        "black": {"username": "Villain", "rating": 1490, "result": "resigned"},
    }
    game.update(overrides)
    return game


class MatchRecordTests(unittest.TestCase):
    def test_from_api_payload_ignores_unknown_fields(self) -> None:
        record = MatchRecord.from_api_payload(_api_game())

        self.assertEqual(record.white.username, "Hero")
        self.assertEqual(record.white.result, OutcomeCode.WIN)
        self.assertEqual(record.black.result, OutcomeCode.RESIGNED)
        self.assertEqual(record.time_class, TimeClass.BLITZ)
        self.assertEqual(record.time_control, "180+2")
        self.assertIsNone(record.accuracies)

    def test_correspondence_alias(self) -> None:
        record = MatchRecord.from_api_payload(_api_game(time_class="correspondence"))

        self.assertEqual(record.time_class, TimeClass.DAILY)

    def test_unknown_outcome_is_unrecognized(self) -> None:
        game = _api_game(black={"username": "Villain", "rating": 1490, "result": "vanished"})

        record = MatchRecord.from_api_payload(game)

        self.assertEqual(record.black.result, OutcomeCode.UNRECOGNIZED)

    def test_accuracies(self) -> None:
        record = MatchRecord.from_api_payload(
            _api_game(accuracies={"white": 91.5, "black": 77.25})
        )

        self.assertEqual(record.accuracies.white, 91.5)
        self.assertEqual(record.accuracies.black, 77.25)

    def test_missing_required_fields_raise(self) -> None:
        game = _api_game()
        del game["end_time"]

        with self.assertRaises(ValidationError):
            MatchRecord.from_api_payload(game)

    def test_invalid_time_class_raises(self) -> None:
        with self.assertRaises(ValidationError):
            MatchRecord.from_api_payload(_api_game(time_class="blindfold"))

    def test_payload_round_trip(self) -> None:
        record = MatchRecord.from_api_payload(_api_game(accuracies={"white": 90, "black": 80}))

        payload = record.to_payload()

        self.assertEqual(payload["time_class"], "blitz")
        self.assertEqual(payload["white"]["result"], "win")
        self.assertEqual(MatchRecord.from_payload(payload), record)

    def test_records_are_frozen(self) -> None:
        record = MatchRecord.from_api_payload(_api_game())

        with self.assertRaises(ValidationError):
            record.pgn = ""


if __name__ == "__main__":
    unittest.main()
