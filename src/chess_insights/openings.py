"""Opening identity from PGN header tags."""

from __future__ import annotations

from dataclasses import dataclass

from chess_insights.movetext import strip_move_number

UNKNOWN_ECO = "Unknown"
UNKNOWN_OPENING = "Unknown Opening"
_OPENINGS_URL_MARKER = "/openings/"


@dataclass(frozen=True, slots=True)
class OpeningIdentity:
    """ECO code and human-readable opening name."""

    eco: str
    name: str


def extract_opening(pgn: str | None) -> OpeningIdentity:
    """Return the opening of a game.

    The name comes from the ``Opening`` tag when present, otherwise it is
    derived from the ``ECOUrl`` tag, otherwise ``"Unknown Opening"``.
    """
    text = pgn or ""
    eco = read_header_tag(text, "ECO") or UNKNOWN_ECO
    name = read_header_tag(text, "Opening")
    if name is None:
        url = read_header_tag(text, "ECOUrl")
        name = parse_opening_name_from_url(url) if url else UNKNOWN_OPENING
    return OpeningIdentity(eco=eco, name=name)


def read_header_tag(pgn: str, tag: str) -> str | None:
    """Return the non-empty value of ``[tag "value"]``, or None."""
    needle = f'[{tag} "'
    search_from = 0
    while True:
        start = pgn.find(needle, search_from)
        if start == -1:
            return None
        value_start = start + len(needle)
        value_end = pgn.find('"', value_start)
        if value_end == -1:
            return None
        value = pgn[value_start:value_end]
        if value and pgn.startswith("]", value_end + 1):
            return value
        search_from = value_start


def parse_opening_name_from_url(url: str) -> str:
    """Derive an opening name from a chess.com ``ECOUrl``.

    ``https://www.chess.com/openings/Queens-Pawn-Game-2.Nf3-Nf6`` gives
    ``"Queens Pawn Game"``: hyphen-separated words are collected until the
    first move-number token.
    """
    marker_at = url.find(_OPENINGS_URL_MARKER)
    if marker_at == -1:
        return UNKNOWN_OPENING
    path = url[marker_at + len(_OPENINGS_URL_MARKER) :]
    next_marker = path.find(_OPENINGS_URL_MARKER)
    if next_marker != -1:
        path = path[:next_marker]
    name_parts: list[str] = []
    for part in path.split("-"):
        if _is_move_number_token(part):
            break
        name_parts.append(part)
    return " ".join(name_parts) or UNKNOWN_OPENING


def _is_move_number_token(part: str) -> bool:
    return strip_move_number(part) != part
