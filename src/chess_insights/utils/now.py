from datetime import UTC, datetime


class Now:
    @staticmethod
    def as_seconds(as_int: bool = False) -> float:
        """Return the current UTC time as a float timestamp in seconds."""

        if as_int:
            return int(datetime.now(UTC).timestamp())
        return datetime.now(UTC).timestamp()
