"""Custom error types used in chess_insights."""

from __future__ import annotations

import requests


class ChessApiError(requests.HTTPError):
    """Chess.com API failure.

    ``status`` carries the HTTP status code, or 0 when the request never
    produced a response (DNS failure, connection reset, timeout).
    """

    def __init__(
        self,
        message: str,
        status: int,
        *,
        response: requests.Response | None = None,
    ) -> None:
        super().__init__(message, response=response)
        self.status = status


class ReplayError(ValueError):
    """A movetext could not be replayed into a legal move sequence."""
