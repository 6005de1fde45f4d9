"""Server-Sent Events helpers for the tactics stream."""

from __future__ import annotations

import json
from collections.abc import Iterator

from fastapi.responses import StreamingResponse

from chess_insights.insights_models import TacticsSummary
from chess_insights.offload import TacticsInvocation, TacticsOffloadManager
from chess_insights.utils import get_logger

logger = get_logger(__name__)

KEEP_ALIVE_INTERVAL_S = 1.0


def _format_sse(event: str, payload: dict[str, object]) -> bytes:
    """Return an SSE-formatted payload as bytes."""
    return f"event: {event}\ndata: {json.dumps(payload)}\n\n".encode()


def _tactics_event_stream(
    manager: TacticsOffloadManager,
    invocation: TacticsInvocation | None,
    username: str,
    games: int,
) -> Iterator[bytes]:
    """Yield progress, keep-alives and the final event for one invocation.

    Closing the stream before the invocation finishes cancels it.
    """
    try:
        yield b"retry: 1000\n\n"
        yield _format_sse(
            "progress",
            {"step": "start", "message": "Analyzing tactics", "username": username, "games": games},
        )
        if invocation is None:
            empty = TacticsSummary(games_analyzed=0, missed_mates=0, mates_played=0)
            yield _format_sse("complete", {"step": "complete", "result": empty.to_dict()})
            return
        while not invocation.done.wait(KEEP_ALIVE_INTERVAL_S):
            yield b": keep-alive\n\n"
        if invocation.cancelled:
            yield _format_sse(
                "error", {"step": "error", "message": "Superseded by a newer request"}
            )
        elif invocation.error is not None:
            yield _format_sse("error", {"step": "error", "message": str(invocation.error)})
        elif invocation.result is not None:
            yield _format_sse(
                "complete", {"step": "complete", "result": invocation.result.to_dict()}
            )
        else:
            yield _format_sse("error", {"step": "error", "message": "No result produced"})
    finally:
        if invocation is not None and not invocation.done.is_set():
            logger.info("Tactics stream for %s closed early; cancelling", username)
            manager.cancel(invocation)


def _streaming_response(
    manager: TacticsOffloadManager,
    invocation: TacticsInvocation | None,
    username: str,
    games: int,
) -> StreamingResponse:
    """Return a streaming response for one tactics invocation."""
    return StreamingResponse(
        _tactics_event_stream(manager, invocation, username, games),
        media_type="text/event-stream",
    )
