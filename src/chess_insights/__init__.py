"""chess_insights package entrypoints."""

import json

from chess_insights.chesscom_client import ChesscomClient, build_client_for_settings
from chess_insights.config import Settings, get_settings
from chess_insights.insights import build_insights_payload, filter_records
from chess_insights.models import MatchRecord
from chess_insights.offload import TacticsOffloadManager
from chess_insights.tactics import compute_tactics_stats
from chess_insights.utils import set_level


def main() -> None:
    """Fetch the configured user's games and print the insights bundle."""
    settings = get_settings()
    set_level(settings.log_level)
    client = build_client_for_settings(settings)
    records = client.fetch_all_games(settings.user)
    payload = build_insights_payload(records, settings.user, tz=settings.tzinfo)
    print(json.dumps(payload, indent=2))


__all__ = [
    "ChesscomClient",
    "MatchRecord",
    "Settings",
    "TacticsOffloadManager",
    "build_client_for_settings",
    "build_insights_payload",
    "compute_tactics_stats",
    "filter_records",
    "get_settings",
    "main",
]
