from __future__ import annotations

from chess_insights.chess_outcome_code import DRAW_CODES, OutcomeCode
from chess_insights.models import MatchRecord

SUBJECT = "Subject"
OPPONENT = "Rival"
BASE_END_TIME = 1_700_000_000

SCHOLARS_MATE = "1. e4 e5 2. Bc4 Nc6 3. Qh5 Nf6 4. Qxf7# 1-0"
SCHOLARS_MATE_MISSED = "1. e4 e5 2. Bc4 Nc6 3. Qh5 Nf6 4. d3 Nxh5 0-1"
FOOLS_MATE = "1. f3 e5 2. g4 Qh4# 0-1"
FOOLS_MATE_LATE = "1. f3 e5 2. g4 Nc6 3. Nc3 Qh4# 0-1"
QUIET_GAME = "1. d4 d5 2. c4 e6 3. Nc3 Nf6 1/2-1/2"


def make_pgn(moves: str, **headers: str) -> str:
    tags = "\n".join(f'[{name} "{value}"]' for name, value in headers.items())
    if not tags:
        return moves
    return f"{tags}\n\n{moves}"


def opponent_code_for(subject_result: str) -> str:
    if subject_result == "win":
        return "resigned"
    if OutcomeCode.parse(subject_result) in DRAW_CODES:
        return subject_result
    return "win"


def make_record(
    *,
    subject_white: bool = True,
    subject_result: str = "win",
    opponent_result: str | None = None,
    pgn: str = "",
    end_time: int = BASE_END_TIME,
    time_class: str = "blitz",
    subject: str = SUBJECT,
    opponent: str = OPPONENT,
    subject_rating: int = 1500,
    opponent_rating: int = 1500,
    accuracies: tuple[float, float] | None = None,
    url: str | None = None,
) -> MatchRecord:
    subject_side = {"username": subject, "rating": subject_rating, "result": subject_result}
    opponent_side = {
        "username": opponent,
        "rating": opponent_rating,
        "result": opponent_result or opponent_code_for(subject_result),
    }
    white, black = (subject_side, opponent_side) if subject_white else (opponent_side, subject_side)
    payload: dict[str, object] = {
        "white": white,
        "black": black,
        "pgn": pgn,
        "end_time": end_time,
        "time_class": time_class,
        "rated": True,
    }
    if accuracies is not None:
        payload["accuracies"] = {"white": accuracies[0], "black": accuracies[1]}
    if url is not None:
        payload["url"] = url
    return MatchRecord.from_api_payload(payload)
