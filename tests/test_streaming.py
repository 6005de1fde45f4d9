import json
import unittest
from threading import Event

from chess_insights.insights_models import TacticsSummary
from chess_insights.offload import TacticsInvocation, TacticsOffloadManager
from chess_insights.rules_engine import ReplayResult, RulesEngine
from chess_insights.streaming import _format_sse, _tactics_event_stream
from tests.record_fixtures import SCHOLARS_MATE, SUBJECT, make_record

WAIT_S = 10


class BlockingEngine(RulesEngine):
    def __init__(self, gate: Event, entered: Event) -> None:
        self.gate = gate
        self.entered = entered

    def replay(self, pgn: str) -> ReplayResult:
        self.entered.set()
        self.gate.wait(WAIT_S)
        return super().replay(pgn)


class FormatSseTests(unittest.TestCase):
    def test_format(self) -> None:
        payload = _format_sse("progress", {"step": "start"})

        self.assertEqual(payload, b'event: progress\ndata: {"step": "start"}\n\n')


class TacticsEventStreamTests(unittest.TestCase):
    def setUp(self) -> None:
        self.gate = Event()
        self.entered = Event()
        self.manager = TacticsOffloadManager(
            engine_factory=lambda: BlockingEngine(self.gate, self.entered)
        )

    def tearDown(self) -> None:
        self.gate.set()
        self.manager.shutdown()

    def test_closing_stream_early_cancels_running_invocation(self) -> None:
        invocation = self.manager.start([make_record(pgn=SCHOLARS_MATE)], SUBJECT)
        self.assertTrue(self.entered.wait(WAIT_S))
        stream = _tactics_event_stream(self.manager, invocation, SUBJECT, 1)

        self.assertEqual(next(stream), b"retry: 1000\n\n")
        self.assertIn(b"event: progress", next(stream))
        stream.close()

        self.assertTrue(invocation.cancelled)
        self.assertIsNone(self.manager.current)
        self.gate.set()
        self.assertTrue(invocation.done.wait(WAIT_S))
        self.assertIsNone(invocation.result)
        self.assertIsNone(self.manager.stats)

    def test_closing_stale_stream_leaves_newer_invocation_running(self) -> None:
        stale = TacticsInvocation(token=99, identity=SUBJECT)
        current = self.manager.start([make_record(pgn=SCHOLARS_MATE)], SUBJECT)
        stream = _tactics_event_stream(self.manager, stale, SUBJECT, 1)

        next(stream)
        stream.close()

        self.assertTrue(stale.cancelled)
        self.assertFalse(current.cancelled)
        self.assertIs(self.manager.current, current)

    def test_finished_invocation_is_not_cancelled_on_close(self) -> None:
        self.gate.set()
        invocation = self.manager.start([make_record(pgn=SCHOLARS_MATE)], SUBJECT)
        self.assertTrue(self.manager.wait(WAIT_S))

        events = list(_tactics_event_stream(self.manager, invocation, SUBJECT, 1))

        self.assertFalse(invocation.cancelled)
        self.assertIs(self.manager.current, invocation)
        final = events[-1].decode()
        self.assertTrue(final.startswith("event: complete"))
        data = json.loads(final.split("data: ", 1)[1])
        self.assertEqual(
            data["result"],
            TacticsSummary(games_analyzed=1, missed_mates=0, mates_played=1).to_dict(),
        )

    def test_without_invocation_completes_with_zero_summary(self) -> None:
        events = list(_tactics_event_stream(self.manager, None, SUBJECT, 0))

        final = events[-1].decode()
        self.assertTrue(final.startswith("event: complete"))
        self.assertIn('"games_analyzed": 0', final)


if __name__ == "__main__":
    unittest.main()
