"""Run the tactics detector off the calling thread.

A :class:`TacticsOffloadManager` owns at most one in-flight invocation.
Starting a new one cancels its predecessor, and a result that arrives from a
superseded invocation is dropped, so only the latest request is ever
surfaced. Records cross the thread boundary as plain dict payloads.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from threading import Event, Lock, Thread

from chess_insights.insights_models import TacticsSummary
from chess_insights.models import MatchRecord
from chess_insights.rules_engine import RulesEngine
from chess_insights.tactics import DEFAULT_SAMPLE_SIZE, compute_tactics_stats
from chess_insights.utils import get_logger

logger = get_logger(__name__)

ResultCallback = Callable[[TacticsSummary], None]
ErrorCallback = Callable[[Exception], None]


@dataclass(frozen=True, slots=True)
class TacticsRequest:
    """One-shot request message handed to the worker."""

    records: tuple[dict[str, object], ...]
    identity: str

    @classmethod
    def from_records(cls, records: Iterable[MatchRecord], identity: str) -> TacticsRequest:
        return cls(records=tuple(record.to_payload() for record in records), identity=identity)

    def match_records(self) -> list[MatchRecord]:
        return [MatchRecord.from_payload(payload) for payload in self.records]


@dataclass(slots=True)
class TacticsInvocation:
    """Ownership record for one worker run."""

    token: int
    identity: str
    thread: Thread | None = None
    cancel: Event = field(default_factory=Event)
    done: Event = field(default_factory=Event)
    result: TacticsSummary | None = None
    error: Exception | None = None

    @property
    def cancelled(self) -> bool:
        return self.cancel.is_set()


class TacticsOffloadManager:
    """Keeps the tactics summary for the most recently requested batch."""

    def __init__(
        self,
        *,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        engine_factory: Callable[[], RulesEngine] = RulesEngine,
        on_result: ResultCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._sample_size = sample_size
        self._engine_factory = engine_factory
        self._on_result = on_result
        self._on_error = on_error
        self._lock = Lock()
        self._tokens = itertools.count(1)
        self._current: TacticsInvocation | None = None
        self._stats: TacticsSummary | None = None
        self._error: Exception | None = None

    @property
    def stats(self) -> TacticsSummary | None:
        with self._lock:
            return self._stats

    @property
    def error(self) -> Exception | None:
        with self._lock:
            return self._error

    @property
    def loading(self) -> bool:
        with self._lock:
            current = self._current
            return current is not None and current.result is None and current.error is None

    @property
    def current(self) -> TacticsInvocation | None:
        with self._lock:
            return self._current

    def start(self, records: Iterable[MatchRecord], identity: str) -> TacticsInvocation | None:
        """Supersede any running invocation and analyze ``records``.

        Returns the new invocation, or None when ``records`` is empty, in
        which case the manager is left idle with no stats.
        """
        request = TacticsRequest.from_records(records, identity)
        with self._lock:
            self._discard_current_locked()
            self._stats = None
            self._error = None
            if not request.records:
                return None
            invocation = TacticsInvocation(token=next(self._tokens), identity=identity)
            invocation.thread = Thread(
                target=self._run,
                args=(invocation, request),
                name=f"tactics-{invocation.token}",
                daemon=True,
            )
            self._current = invocation
        logger.info(
            "Starting tactics invocation %s for %s (%s records)",
            invocation.token,
            identity,
            len(request.records),
        )
        invocation.thread.start()
        return invocation

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the current invocation finishes; True when nothing is pending."""
        with self._lock:
            current = self._current
        if current is None:
            return True
        return current.done.wait(timeout)

    def cancel(self, invocation: TacticsInvocation) -> None:
        """Cancel ``invocation`` once its consumer has gone away.

        The manager goes idle only when ``invocation`` is still the current
        one; a newer invocation is left running.
        """
        with self._lock:
            if self._current is invocation:
                self._discard_current_locked()
            else:
                invocation.cancel.set()

    def shutdown(self) -> None:
        """Cancel and forget the current invocation."""
        with self._lock:
            self._discard_current_locked()

    def _discard_current_locked(self) -> None:
        if self._current is None:
            return
        self._current.cancel.set()
        logger.debug("Discarding tactics invocation %s", self._current.token)
        self._current = None

    def _run(self, invocation: TacticsInvocation, request: TacticsRequest) -> None:
        try:
            summary = compute_tactics_stats(
                request.match_records(),
                request.identity,
                engine=self._engine_factory(),
                sample_size=self._sample_size,
                should_stop=invocation.cancel.is_set,
            )
        except Exception as exc:
            logger.exception("Tactics invocation %s failed", invocation.token)
            self._deliver_error(invocation, exc)
        else:
            self._deliver_result(invocation, summary)
        finally:
            invocation.done.set()

    def _deliver_result(self, invocation: TacticsInvocation, summary: TacticsSummary) -> None:
        with self._lock:
            if not self._owns(invocation):
                logger.debug("Dropping result of superseded invocation %s", invocation.token)
                return
            invocation.result = summary
            self._stats = summary
            callback = self._on_result
        if callback is not None:
            callback(summary)

    def _deliver_error(self, invocation: TacticsInvocation, exc: Exception) -> None:
        with self._lock:
            invocation.error = exc
            if not self._owns(invocation):
                return
            self._error = exc
            callback = self._on_error
        if callback is not None:
            callback(exc)

    def _owns(self, invocation: TacticsInvocation) -> bool:
        return self._current is invocation and not invocation.cancelled
