from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import requests
from pydantic import ValidationError

from chess_insights.config import Settings
from chess_insights.errors import ChessApiError
from chess_insights.models import MatchRecord
from chess_insights.player_overview import country_code_from_url
from chess_insights.utils import get_logger

logger = get_logger(__name__)

ARCHIVE_MONTH_PATTERN = re.compile(r"/games/(\d{4})/(\d{2})$")

__all__ = [
    "ArchiveMonth",
    "ChesscomClient",
    "ChesscomClientContext",
    "FetchProgress",
    "build_client_for_settings",
    "parse_archive_month",
]


@dataclass(slots=True)
class ChesscomClientContext:
    """Context for Chess.com API interactions.

    Attributes:
        settings: Application settings used for API calls.
        logger: Logger for client-specific messages.
    """

    settings: Settings
    logger: logging.Logger


@dataclass(frozen=True, slots=True)
class ArchiveMonth:
    year: int
    month: int


@dataclass(frozen=True, slots=True)
class FetchProgress:
    """Progress reported after each monthly archive is fetched."""

    fetched_months: int
    total_months: int
    total_games: int


ProgressCallback = Callable[[FetchProgress], None]
CountriesCallback = Callable[[dict[str, str]], None]


def parse_archive_month(archive_url: str) -> ArchiveMonth | None:
    """Return the year and month encoded at the end of an archive URL."""
    match = ARCHIVE_MONTH_PATTERN.search(archive_url.rstrip("/"))
    if match is None:
        return None
    return ArchiveMonth(year=int(match.group(1)), month=int(match.group(2)))


class ChesscomClient:
    """Client for the read-only Chess.com published-data API."""

    def __init__(self, context: ChesscomClientContext) -> None:
        """Initialize the client.

        Args:
            context: Client context containing settings and logger.
        """

        self._context = context

    @property
    def settings(self) -> Settings:
        return self._context.settings

    @property
    def logger(self) -> logging.Logger:
        return self._context.logger

    def fetch_player_profile(self, username: str) -> dict[str, object]:
        """Fetch a player's public profile.

        Args:
            username: Player name; case is ignored.

        Returns:
            The profile JSON object.

        Raises:
            ChessApiError: On a non-2xx response or a transport failure.
        """

        return self._get_json(self._player_url(username))

    def fetch_player_stats(self, username: str) -> dict[str, object]:
        """Fetch a player's rating statistics for every game type."""

        return self._get_json(f"{self._player_url(username)}/stats")

    def fetch_profile_and_stats(
        self, username: str
    ) -> tuple[dict[str, object], dict[str, object]]:
        """Fetch the profile and the rating statistics concurrently.

        Raises:
            ChessApiError: When either request fails.
        """

        with ThreadPoolExecutor(max_workers=2) as executor:
            profile = executor.submit(self.fetch_player_profile, username)
            stats = executor.submit(self.fetch_player_stats, username)
            return profile.result(), stats.result()

    def fetch_game_archives(self, username: str) -> list[str]:
        """Fetch the monthly archive URLs for a player, oldest first."""

        payload = self._get_json(f"{self._player_url(username)}/games/archives")
        return [str(url) for url in payload.get("archives") or []]

    def fetch_monthly_games(self, username: str, year: int, month: int) -> list[MatchRecord]:
        """Fetch one month of finished games.

        Games that do not validate as :class:`MatchRecord` are skipped.

        Args:
            username: Player name; case is ignored.
            year: Four digit year.
            month: Month number, 1 being January.

        Returns:
            Records in the order the archive lists them.
        """

        url = f"{self._player_url(username)}/games/{year}/{month:02d}"
        payload = self._get_json(url)
        return self._coerce_games(payload.get("games") or [], url)

    def fetch_all_games(
        self,
        username: str,
        on_progress: ProgressCallback | None = None,
    ) -> list[MatchRecord]:
        """Fetch every game from the newest archives, oldest month first.

        ``settings.max_archive_months`` bounds how many of the most recent
        archives are read; 0 reads them all.

        Example:
            >>> client.fetch_all_games("hikaru", on_progress=print)
        """

        archives = self.fetch_game_archives(username)
        limit = self.settings.max_archive_months
        if limit > 0:
            archives = archives[-limit:]
        records: list[MatchRecord] = []
        for index, archive_url in enumerate(archives, start=1):
            archive_month = parse_archive_month(archive_url)
            if archive_month is None:
                self.logger.warning("Skipping unrecognised archive URL %s", archive_url)
                continue
            records.extend(
                self.fetch_monthly_games(username, archive_month.year, archive_month.month)
            )
            if on_progress is not None:
                on_progress(
                    FetchProgress(
                        fetched_months=index,
                        total_months=len(archives),
                        total_games=len(records),
                    )
                )
        self.logger.info("Fetched %s Chess.com games for %s", len(records), username)
        return records

    def fetch_player_country(self, username: str) -> str | None:
        """Return a player's two-letter country code, or None when unavailable.

        Failures are logged and reported as None.
        """

        try:
            profile = self.fetch_player_profile(username)
        except (ChessApiError, ValueError) as exc:
            self.logger.debug("Country lookup failed for %s: %s", username, exc)
            return None
        return country_code_from_url(profile.get("country"))

    def load_opponent_countries(
        self,
        usernames: Iterable[str],
        on_batch: CountriesCallback | None = None,
    ) -> dict[str, str]:
        """Resolve countries for many players in small concurrent batches.

        Batches are separated by ``settings.country_batch_delay_ms``.
        ``on_batch`` receives a copy of the map accumulated so far after each
        batch.

        Returns:
            Lower-cased username to country code, for resolved players only.
        """

        names = [name.lower() for name in usernames]
        batch_size = max(self.settings.country_batch_size, 1)
        delay_s = max(self.settings.country_batch_delay_ms, 0) / 1000.0
        countries: dict[str, str] = {}
        with ThreadPoolExecutor(max_workers=batch_size) as executor:
            for start in range(0, len(names), batch_size):
                batch = names[start : start + batch_size]
                for name, country in zip(
                    batch, executor.map(self.fetch_player_country, batch), strict=True
                ):
                    if country:
                        countries[name] = country
                if on_batch is not None:
                    on_batch(dict(countries))
                if start + batch_size < len(names) and delay_s:
                    time.sleep(delay_s)
        self.logger.info("Resolved %s of %s opponent countries", len(countries), len(names))
        return countries

    def _player_url(self, username: str) -> str:
        return f"{self.settings.chesscom_base_url}/player/{username.lower()}"

    def _get_json(self, url: str) -> dict[str, object]:
        """Issue a GET and decode the JSON body.

        Raises:
            ChessApiError: On a non-2xx response (``status`` set) or a
                transport failure (``status`` 0).
        """

        try:
            response = requests.get(
                url,
                headers={
                    "Accept": "application/json",
                    "User-Agent": self.settings.user_agent,
                },
                timeout=self.settings.request_timeout_s,
            )
        except requests.RequestException as exc:
            raise ChessApiError(f"Network error fetching {url}: {exc}", 0) from exc
        if not 200 <= response.status_code < 300:
            raise ChessApiError(
                f"chess.com API error {response.status_code} for {url}",
                response.status_code,
                response=response,
            )
        return response.json()

    def _coerce_games(self, games: Iterable[Mapping[str, object]], url: str) -> list[MatchRecord]:
        records: list[MatchRecord] = []
        for game in games:
            try:
                records.append(MatchRecord.from_api_payload(game))
            except ValidationError as exc:
                self.logger.warning(
                    "Skipping malformed game %s from %s: %s",
                    game.get("url") or game.get("uuid"),
                    url,
                    exc.errors()[0]["msg"] if exc.errors() else exc,
                )
        return records


def build_client_for_settings(settings: Settings) -> ChesscomClient:
    """Return a client bound to ``settings`` and the module logger."""

    return ChesscomClient(ChesscomClientContext(settings=settings, logger=logger))
