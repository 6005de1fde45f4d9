"""Immutable match record models."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chess_insights.chess_outcome_code import OutcomeCode
from chess_insights.chess_time_control import TimeClass


class MatchSide(BaseModel):
    """One side of a match.

    Attributes:
        username: Player identity as reported by the source.
        rating: Rating after the game.
        result: Outcome code for this side.
    """

    model_config = ConfigDict(frozen=True)

    username: str
    rating: int = 0
    result: OutcomeCode = OutcomeCode.UNRECOGNIZED

    @field_validator("result", mode="before")
    @classmethod
    def _parse_result(cls, value: object) -> OutcomeCode:
        if isinstance(value, OutcomeCode):
            return value
        return OutcomeCode.parse(None if value is None else str(value))


class SideAccuracies(BaseModel):
    """Per-side accuracy scores (0-100) for analyzed games."""

    model_config = ConfigDict(frozen=True)

    white: float
    black: float


class MatchRecord(BaseModel):
    """A finished game as delivered by the record source.

    Attributes:
        white: First side.
        black: Second side.
        pgn: Raw PGN text, headers and movetext.
        end_time: Epoch seconds at which the game ended.
        time_class: Time-control category.
        rated: Whether the game was rated.
        accuracies: Optional per-side accuracy scores.
        url: Game URL, when known.
        uuid: Source identifier, when known.
        time_control: Raw time control string (e.g. ``"180+2"``).
    """

    model_config = ConfigDict(frozen=True)

    white: MatchSide
    black: MatchSide
    pgn: str = ""
    end_time: int
    time_class: TimeClass
    rated: bool = True
    accuracies: SideAccuracies | None = None
    url: str | None = None
    uuid: str | None = None
    time_control: str | None = Field(default=None)

    @field_validator("time_class", mode="before")
    @classmethod
    def _parse_time_class(cls, value: object) -> TimeClass:
        if isinstance(value, TimeClass):
            return value
        return TimeClass.from_str(str(value))

    @classmethod
    def from_api_payload(cls, payload: Mapping[str, object]) -> MatchRecord:
        """Build a record from a chess.com archive game object.

        Raises:
            pydantic.ValidationError: When required fields are missing or invalid.
        """
        return cls.model_validate(dict(payload))

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> MatchRecord:
        """Rebuild a record from :meth:`to_payload` output."""
        return cls.model_validate(dict(payload))

    def to_payload(self) -> dict[str, object]:
        """Return a JSON-compatible copy of the record."""
        return self.model_dump(mode="json")
