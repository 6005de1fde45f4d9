"""Profile summary and current ratings shown alongside the insights."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from chess_insights.chess_time_control import TimeClass

RATED_TIME_CLASSES = (TimeClass.RAPID, TimeClass.BLITZ, TimeClass.BULLET, TimeClass.DAILY)


@dataclass(frozen=True, slots=True)
class PlayerProfileSummary:
    """The public profile fields worth surfacing.

    Attributes:
        username: Username as chess.com spells it.
        title: Chess title such as ``"GM"``, when the player holds one.
        name: Display name, when set.
        country: Two-letter country code taken from the profile's country URL.
        avatar: Avatar image URL, when set.
    """

    username: str
    title: str | None = None
    name: str | None = None
    country: str | None = None
    avatar: str | None = None


def country_code_from_url(country_url: object) -> str | None:
    """Return the code at the end of a ``.../country/XX`` URL."""
    if not isinstance(country_url, str) or not country_url:
        return None
    return country_url.rstrip("/").rsplit("/", 1)[-1] or None


def summarize_profile(
    profile: Mapping[str, object], fallback_username: str = ""
) -> PlayerProfileSummary:
    return PlayerProfileSummary(
        username=_text(profile.get("username")) or fallback_username,
        title=_text(profile.get("title")),
        name=_text(profile.get("name")),
        country=country_code_from_url(profile.get("country")),
        avatar=_text(profile.get("avatar")),
    )


def extract_current_ratings(stats: Mapping[str, object]) -> dict[str, int]:
    """Latest rating per time class from a stats payload.

    Reads ``chess_<time class>.last.rating``; time classes the player has no
    rating in are left out.
    """
    ratings: dict[str, int] = {}
    for time_class in RATED_TIME_CLASSES:
        record = stats.get(f"chess_{time_class.value}")
        if not isinstance(record, Mapping):
            continue
        last = record.get("last")
        if not isinstance(last, Mapping):
            continue
        rating = last.get("rating")
        if isinstance(rating, int) and not isinstance(rating, bool):
            ratings[time_class.value] = rating
    return ratings


def _text(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
