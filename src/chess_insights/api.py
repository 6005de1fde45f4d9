from __future__ import annotations

import time as time_module
from collections import OrderedDict
from contextlib import asynccontextmanager
from dataclasses import asdict, dataclass
from threading import Lock
from typing import cast

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.responses import StreamingResponse
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware

from chess_insights.chesscom_client import build_client_for_settings
from chess_insights.config import get_settings
from chess_insights.errors import ChessApiError
from chess_insights.insights import InsightsFilters, build_insights_payload, filter_records
from chess_insights.models import MatchRecord
from chess_insights.offload import TacticsOffloadManager
from chess_insights.opponent_stats import (
    compute_opponent_country_stats,
    extract_opponent_usernames,
)
from chess_insights.player_overview import (
    PlayerProfileSummary,
    extract_current_ratings,
    summarize_profile,
)
from chess_insights.streaming import _streaming_response
from chess_insights.utils import get_logger

logger = get_logger(__name__)

_GAMES_CACHE_TTL_S = 300
_GAMES_CACHE_MAX_ENTRIES = 32
_TACTICS_MANAGERS_MAX_ENTRIES = 32
_TACTICS_MANAGERS_LOCK = Lock()


@dataclass(frozen=True, slots=True)
class PlayerData:
    records: list[MatchRecord]
    profile: PlayerProfileSummary
    current_ratings: dict[str, int]


_GAMES_CACHE: OrderedDict[str, tuple[float, PlayerData]] = OrderedDict()
_GAMES_CACHE_LOCK = Lock()


def _extract_api_token(request: Request) -> str | None:
    auth_header = request.headers.get("authorization")
    if auth_header and auth_header.lower().startswith("bearer "):
        return auth_header.split(" ", 1)[1].strip()
    api_key = request.headers.get("x-api-key")
    if api_key:
        return api_key.strip()
    return None


def require_api_token(request: Request) -> None:
    if request.url.path == "/api/health":
        return
    settings = get_settings()
    expected = settings.api_token
    supplied = _extract_api_token(request)
    if not supplied or supplied != expected:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Tear down running tactics invocations when the app stops."""
    application.state.tactics_managers = OrderedDict()
    yield
    with _TACTICS_MANAGERS_LOCK:
        managers: OrderedDict[str, TacticsOffloadManager] = application.state.tactics_managers
        for manager in managers.values():
            manager.shutdown()
        managers.clear()


app = FastAPI(
    title="chess-insights",
    version="0.1.0",
    lifespan=lifespan,
    dependencies=[Depends(require_api_token)],
    middleware=[
        Middleware(
            cast("type[object]", CORSMiddleware),
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )
    ],
)
app.state.tactics_managers = OrderedDict()


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/insights/{username}")
def insights(
    username: str,
    time_class: str = Query("all"),
    days_back: int | None = Query(None, ge=0),
) -> dict[str, object]:
    filters = _resolve_filters(time_class, days_back)
    player = _load_player(username)
    filtered = filter_records(player.records, filters)
    payload = build_insights_payload(filtered, username, tz=get_settings().tzinfo)
    payload["profile"] = asdict(player.profile)
    payload["current_ratings"] = dict(player.current_ratings)
    payload["filters"] = asdict(filters)
    payload["total_games"] = len(player.records)
    payload["filtered_games"] = len(filtered)
    return payload


@app.get("/api/insights/{username}/countries")
def opponent_countries(
    username: str,
    time_class: str = Query("all"),
    days_back: int | None = Query(None, ge=0),
) -> dict[str, object]:
    filters = _resolve_filters(time_class, days_back)
    filtered = filter_records(_load_player(username).records, filters)
    client = build_client_for_settings(get_settings())
    country_map = client.load_opponent_countries(extract_opponent_usernames(filtered, username))
    return {
        "countries": country_map,
        "aggregates": [
            asdict(country)
            for country in compute_opponent_country_stats(filtered, username, country_map)
        ],
    }


@app.get("/api/insights/{username}/tactics/stream")
def stream_tactics(
    request: Request,
    username: str,
    time_class: str = Query("all"),
    days_back: int | None = Query(None, ge=0),
) -> StreamingResponse:
    filters = _resolve_filters(time_class, days_back)
    filtered = filter_records(_load_player(username).records, filters)
    manager = _tactics_manager(request.app, username)
    invocation = manager.start(filtered, username)
    return _streaming_response(manager, invocation, username, len(filtered))


def _resolve_filters(time_class: str, days_back: int | None) -> InsightsFilters:
    try:
        return InsightsFilters(time_class=time_class, days_back=days_back)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def _load_player(username: str) -> PlayerData:
    """Profile, current ratings and every game for ``username``, cached briefly."""
    key = username.lower()
    cached = _get_cached_player(key)
    if cached is not None:
        return cached
    client = build_client_for_settings(get_settings())
    try:
        profile, stats = client.fetch_profile_and_stats(username)
        records = client.fetch_all_games(username)
    except ChessApiError as exc:
        logger.warning("Failed to load games for %s: %s", username, exc)
        if exc.status == status.HTTP_404_NOT_FOUND:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f'Player "{username}" not found on chess.com',
            ) from exc
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to load data: {exc}",
        ) from exc
    player = PlayerData(
        records=records,
        profile=summarize_profile(profile, fallback_username=username),
        current_ratings=extract_current_ratings(stats),
    )
    _set_cached_player(key, player)
    return player


def _tactics_manager(application: FastAPI, username: str) -> TacticsOffloadManager:
    """Return the manager for ``username``, evicting the least recently used past the cap."""
    key = username.lower()
    evicted: list[TacticsOffloadManager] = []
    with _TACTICS_MANAGERS_LOCK:
        managers: OrderedDict[str, TacticsOffloadManager] = application.state.tactics_managers
        manager = managers.get(key)
        if manager is None:
            manager = TacticsOffloadManager(sample_size=get_settings().tactics_sample_size)
            managers[key] = manager
        managers.move_to_end(key)
        while len(managers) > _TACTICS_MANAGERS_MAX_ENTRIES:
            _, stale = managers.popitem(last=False)
            evicted.append(stale)
    for stale in evicted:
        stale.shutdown()
    return manager


def _get_cached_player(key: str) -> PlayerData | None:
    now = time_module.time()
    with _GAMES_CACHE_LOCK:
        cached = _GAMES_CACHE.get(key)
        if not cached:
            return None
        cached_at, player = cached
        if now - cached_at > _GAMES_CACHE_TTL_S:
            _GAMES_CACHE.pop(key, None)
            return None
        _GAMES_CACHE.move_to_end(key)
        return player


def _set_cached_player(key: str, player: PlayerData) -> None:
    with _GAMES_CACHE_LOCK:
        _GAMES_CACHE[key] = (time_module.time(), player)
        _GAMES_CACHE.move_to_end(key)
        while len(_GAMES_CACHE) > _GAMES_CACHE_MAX_ENTRIES:
            _GAMES_CACHE.popitem(last=False)


def _clear_games_cache() -> None:
    with _GAMES_CACHE_LOCK:
        _GAMES_CACHE.clear()
