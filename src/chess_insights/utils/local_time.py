from __future__ import annotations

from datetime import datetime, tzinfo


def local_datetime(epoch_seconds: int, tz: tzinfo | None = None) -> datetime:
    """Convert epoch seconds to a datetime in ``tz``, or the host's local time when None."""
    return datetime.fromtimestamp(epoch_seconds, tz)
