"""Time class parsing helpers."""

from __future__ import annotations

from enum import StrEnum

_TIME_CLASS_ALIASES = {
    "correspondence": "daily",
}


class TimeClass(StrEnum):
    """The time-control categories chess.com assigns to every game."""

    DAILY = "daily"
    RAPID = "rapid"
    BLITZ = "blitz"
    BULLET = "bullet"

    @classmethod
    def from_str(cls, value: str) -> TimeClass:
        """Convert a raw label into a TimeClass, raising ValueError when unknown."""
        normalized = _normalize_time_class_input(value)
        normalized = _TIME_CLASS_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValueError(f"Invalid time class: {value}") from exc


def _normalize_time_class_input(value: str | None) -> str:
    normalized = (value or "").strip().lower()
    if not normalized or normalized == "-":
        return ""
    return normalized


def normalize_time_class_filter(value: str | None) -> str:
    """Normalize a time class filter value, returning ``"all"`` when unset."""
    normalized = _normalize_time_class_input(value)
    if not normalized or normalized == "all":
        return "all"
    return TimeClass.from_str(normalized).value
