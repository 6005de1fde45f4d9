from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

DEFAULT_CHESSCOM_BASE_URL = "https://api.chess.com/pub"
DEFAULT_USER_AGENT = "chess-insights/0.1 (+https://github.com/chess-insights)"
DEFAULT_TACTICS_SAMPLE_SIZE = 100
DEFAULT_COUNTRY_BATCH_SIZE = 5
DEFAULT_COUNTRY_BATCH_DELAY_MS = 150


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _env_int(name: str, default: int) -> int:
    value = _env(name)
    if not value:
        return default
    return int(value)


@dataclass(slots=True)
class Settings:
    """Central configuration for fetching, analysis, and the HTTP service."""

    api_token: str = field(
        default_factory=lambda: _env("CHESS_INSIGHTS_API_TOKEN", "local-dev-token")
    )
    user: str = field(
        default_factory=lambda: _env("CHESSCOM_USERNAME", _env("CHESSCOM_USER", "chesscom"))
    )
    chesscom_base_url: str = field(
        default_factory=lambda: _env("CHESSCOM_BASE_URL", DEFAULT_CHESSCOM_BASE_URL).rstrip("/")
    )
    user_agent: str = field(
        default_factory=lambda: _env("CHESS_INSIGHTS_USER_AGENT", DEFAULT_USER_AGENT)
    )
    request_timeout_s: int = field(
        default_factory=lambda: _env_int("CHESSCOM_TIMEOUT_S", 15)
    )
    # 0 fetches every archive the player has
    max_archive_months: int = field(
        default_factory=lambda: _env_int("CHESSCOM_MAX_ARCHIVE_MONTHS", 0)
    )
    tactics_sample_size: int = field(
        default_factory=lambda: _env_int(
            "CHESS_INSIGHTS_TACTICS_SAMPLE_SIZE", DEFAULT_TACTICS_SAMPLE_SIZE
        )
    )
    country_batch_size: int = field(
        default_factory=lambda: _env_int(
            "CHESS_INSIGHTS_COUNTRY_BATCH_SIZE", DEFAULT_COUNTRY_BATCH_SIZE
        )
    )
    country_batch_delay_ms: int = field(
        default_factory=lambda: _env_int(
            "CHESS_INSIGHTS_COUNTRY_BATCH_DELAY_MS", DEFAULT_COUNTRY_BATCH_DELAY_MS
        )
    )
    timezone: str = field(default_factory=lambda: _env("CHESS_INSIGHTS_TIMEZONE"))
    log_level: str = field(
        default_factory=lambda: _env("CHESS_INSIGHTS_LOG_LEVEL", "INFO").upper()
    )

    @property
    def tzinfo(self) -> tzinfo | None:
        """Return the configured timezone, or None for the host's local time."""
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except ZoneInfoNotFoundError as exc:
            raise ValueError(f"Unknown timezone: {self.timezone}") from exc


def get_settings(**overrides: object) -> Settings:
    """Return a Settings instance with .env values loaded and overrides applied."""
    load_dotenv()
    return Settings(**overrides)
