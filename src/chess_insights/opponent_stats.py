"""Opponent identities and their resolved countries."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from chess_insights.insights_models import CountryAggregate
from chess_insights.models import MatchRecord
from chess_insights.results import opponent_username


def extract_opponent_usernames(records: Iterable[MatchRecord], identity: str) -> list[str]:
    """Unique lower-cased opponent usernames in first-seen order."""
    return list(dict.fromkeys(opponent_username(record, identity) for record in records))


def compute_opponent_country_stats(
    records: Iterable[MatchRecord],
    identity: str,
    country_map: Mapping[str, str],
) -> list[CountryAggregate]:
    """Count games per opponent country, most frequent first.

    ``country_map`` maps lower-cased usernames to country codes; opponents
    missing from it are skipped.
    """
    counts: dict[str, int] = {}
    for record in records:
        country = country_map.get(opponent_username(record, identity))
        if not country:
            continue
        counts[country] = counts.get(country, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [CountryAggregate(country=country, count=count) for country, count in ranked]
