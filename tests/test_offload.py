import unittest
from threading import Event

from chess_insights.insights_models import TacticsSummary
from chess_insights.offload import TacticsOffloadManager, TacticsRequest
from chess_insights.rules_engine import ReplayResult, RulesEngine
from tests.record_fixtures import (
    FOOLS_MATE_LATE,
    SCHOLARS_MATE,
    SCHOLARS_MATE_MISSED,
    SUBJECT,
    make_record,
)

WAIT_S = 10


class GatedEngine(RulesEngine):
    """Blocks replays of games tagged ``{slow}`` until the gate opens."""

    def __init__(self, gate: Event, entered: Event | None = None) -> None:
        self.gate = gate
        self.entered = entered

    def replay(self, pgn: str) -> ReplayResult:
        if "{slow}" in pgn:
            if self.entered is not None:
                self.entered.set()
            self.gate.wait(WAIT_S)
        return super().replay(pgn)


class TacticsOffloadManagerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.gate = Event()
        self.entered = Event()
        self.results: list[TacticsSummary] = []
        self.errors: list[Exception] = []
        self.manager = TacticsOffloadManager(
            engine_factory=lambda: GatedEngine(self.gate, self.entered),
            on_result=self.results.append,
            on_error=self.errors.append,
        )

    def tearDown(self) -> None:
        self.gate.set()
        self.manager.shutdown()

    def test_delivers_summary(self) -> None:
        invocation = self.manager.start([make_record(pgn=SCHOLARS_MATE)], SUBJECT)

        self.assertIsNotNone(invocation)
        self.assertTrue(self.manager.wait(WAIT_S))
        expected = TacticsSummary(games_analyzed=1, missed_mates=0, mates_played=1)
        self.assertEqual(self.manager.stats, expected)
        self.assertEqual(invocation.result, expected)
        self.assertFalse(self.manager.loading)
        self.assertEqual(self.results, [expected])
        self.assertEqual(self.errors, [])

    def test_loading_while_running(self) -> None:
        self.manager.start([make_record(pgn="{slow} " + SCHOLARS_MATE)], SUBJECT)
        self.assertTrue(self.entered.wait(WAIT_S))

        self.assertTrue(self.manager.loading)
        self.assertIsNone(self.manager.stats)

        self.gate.set()
        self.assertTrue(self.manager.wait(WAIT_S))
        self.assertFalse(self.manager.loading)
        self.assertIsNotNone(self.manager.stats)

    def test_superseded_result_is_discarded(self) -> None:
        first = self.manager.start([make_record(pgn="{slow} " + SCHOLARS_MATE)], SUBJECT)
        self.assertTrue(self.entered.wait(WAIT_S))
        second = self.manager.start([make_record(pgn=SCHOLARS_MATE_MISSED)], SUBJECT)

        self.assertTrue(first.cancelled)
        self.assertIs(self.manager.current, second)
        self.assertTrue(self.manager.wait(WAIT_S))

        self.gate.set()
        self.assertTrue(first.done.wait(WAIT_S))
        expected = TacticsSummary(games_analyzed=1, missed_mates=1, mates_played=0)
        self.assertEqual(self.manager.stats, expected)
        self.assertIsNone(first.result)
        self.assertEqual(self.results, [expected])

    def test_empty_batch_leaves_manager_idle(self) -> None:
        running = self.manager.start([make_record(pgn="{slow} " + SCHOLARS_MATE)], SUBJECT)

        invocation = self.manager.start([], SUBJECT)

        self.assertIsNone(invocation)
        self.assertTrue(running.cancelled)
        self.assertIsNone(self.manager.current)
        self.assertIsNone(self.manager.stats)
        self.assertFalse(self.manager.loading)
        self.assertTrue(self.manager.wait(0))

    def test_shutdown_discards_running_invocation(self) -> None:
        invocation = self.manager.start([make_record(pgn="{slow} " + SCHOLARS_MATE)], SUBJECT)
        self.assertTrue(self.entered.wait(WAIT_S))

        self.manager.shutdown()
        self.gate.set()

        self.assertTrue(invocation.done.wait(WAIT_S))
        self.assertTrue(invocation.cancelled)
        self.assertIsNone(invocation.result)
        self.assertIsNone(self.manager.stats)
        self.assertEqual(self.results, [])

    def test_cancel_current_invocation_leaves_manager_idle(self) -> None:
        invocation = self.manager.start([make_record(pgn="{slow} " + SCHOLARS_MATE)], SUBJECT)
        self.assertTrue(self.entered.wait(WAIT_S))

        self.manager.cancel(invocation)
        self.gate.set()

        self.assertTrue(invocation.done.wait(WAIT_S))
        self.assertTrue(invocation.cancelled)
        self.assertIsNone(self.manager.current)
        self.assertIsNone(invocation.result)
        self.assertFalse(self.manager.loading)
        self.assertEqual(self.results, [])

    def test_cancel_superseded_invocation_keeps_newer_one(self) -> None:
        first = self.manager.start([make_record(pgn="{slow} " + SCHOLARS_MATE)], SUBJECT)
        self.assertTrue(self.entered.wait(WAIT_S))
        second = self.manager.start([make_record(pgn=SCHOLARS_MATE_MISSED)], SUBJECT)

        self.manager.cancel(first)

        self.assertIs(self.manager.current, second)
        self.assertFalse(second.cancelled)
        self.assertTrue(self.manager.wait(WAIT_S))
        self.assertEqual(
            self.manager.stats, TacticsSummary(games_analyzed=1, missed_mates=1, mates_played=0)
        )

    def test_worker_failure_is_reported(self) -> None:
        def broken_engine() -> RulesEngine:
            raise RuntimeError("engine unavailable")

        manager = TacticsOffloadManager(engine_factory=broken_engine, on_error=self.errors.append)

        invocation = manager.start([make_record(pgn=SCHOLARS_MATE)], SUBJECT)

        self.assertTrue(manager.wait(WAIT_S))
        self.assertIsInstance(invocation.error, RuntimeError)
        self.assertIs(manager.error, invocation.error)
        self.assertEqual(self.errors, [invocation.error])
        self.assertIsNone(manager.stats)
        self.assertFalse(manager.loading)

    def test_sample_size_is_configurable(self) -> None:
        manager = TacticsOffloadManager(sample_size=1)
        records = [
            make_record(pgn=SCHOLARS_MATE, end_time=1),
            make_record(pgn=FOOLS_MATE_LATE, subject_white=False, end_time=2),
        ]

        manager.start(records, SUBJECT)

        self.assertTrue(manager.wait(WAIT_S))
        self.assertEqual(
            manager.stats, TacticsSummary(games_analyzed=1, missed_mates=1, mates_played=1)
        )


class TacticsRequestTests(unittest.TestCase):
    def test_records_are_copied_as_plain_payloads(self) -> None:
        record = make_record(pgn=SCHOLARS_MATE, accuracies=(91.5, 60.0), url="https://x/1")

        request = TacticsRequest.from_records([record], SUBJECT)

        self.assertIsInstance(request.records[0], dict)
        self.assertEqual(request.records[0]["white"]["result"], "win")
        self.assertEqual(request.match_records(), [record])


if __name__ == "__main__":
    unittest.main()
