from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

import requests


@dataclass(slots=True)
class FakeResponse:
    status_code: int = 200
    json_data: dict | None = None
    headers: dict | None = None

    def json(self) -> dict:
        return self.json_data or {}

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


def make_fake_get(
    responses: Iterable[FakeResponse],
    *,
    captured_urls: list[str] | None = None,
) -> Callable[..., FakeResponse]:
    queue = list(responses)

    def _fake_get(url: str, *_args, **_kwargs) -> FakeResponse:
        if captured_urls is not None:
            captured_urls.append(url)
        return queue.pop(0)

    return _fake_get


def make_routed_get(
    routes: Mapping[str, FakeResponse],
    *,
    default: FakeResponse | None = None,
) -> Callable[..., FakeResponse]:
    """Answer by URL so concurrent callers get deterministic responses."""

    fallback = default or FakeResponse(status_code=404, json_data={"message": "not found"})

    def _fake_get(url: str, *_args, **_kwargs) -> FakeResponse:
        return routes.get(url, fallback)

    return _fake_get
