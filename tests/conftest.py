"""Shared fixtures: an in-process fake of the Hacker News API.

The fake is an ``httpx.MockTransport`` so the real client code (URL building,
status handling, JSON decoding) runs unchanged; no socket is ever opened.
"""

from __future__ import annotations

import json
import threading
from typing import Any, Optional

import httpx
import pytest

from config.settings import Settings

BASE_URL = "https://hn.test/v0"

#: Three stories; "Go" matches ids 1 and 3.
SAMPLE_ITEMS: dict[int, Any] = {
    1: {
        "id": 1, "type": "story", "by": "gopher", "time": 1700000000,
        "title": "Go 2.0 released", "url": "https://go.dev/blog/go2",
        "score": 120, "descendants": 42, "kids": [11, 12],
    },
    2: {
        "id": 2, "type": "story", "by": "ferris", "time": 1700000100,
        "title": "Rust async update", "url": "https://blog.rust-lang.org/async",
        "score": 80, "descendants": 17,
    },
    3: {
        "id": 3, "type": "story", "by": "gopher", "time": 1700000200,
        "title": "Go tooling survey", "url": None,
        "score": 15, "descendants": 0,
    },
}


class FakeHackerNews:
    """Routes requests to canned story lists and item payloads.

    Item values may be a JSON-able payload, an ``httpx.Response`` (returned
    as-is) or an exception class from ``httpx`` (raised as a transport error).
    """

    def __init__(
        self,
        items: Optional[dict[int, Any]] = None,
        lists: Optional[dict[str, Any]] = None,
    ) -> None:
        self.items = dict(SAMPLE_ITEMS if items is None else items)
        self.lists = lists if lists is not None else {"new": list(self.items)}
        self.requests: list[str] = []
        self._lock = threading.Lock()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        with self._lock:
            self.requests.append(path)

        name = path.rsplit("/", 1)[-1]
        if name.endswith("stories.json"):
            category = name[: -len("stories.json")]
            if category not in self.lists:
                return httpx.Response(404, json={"error": "not found"})
            return self._respond(self.lists[category], request)

        if "/item/" in path:
            story_id = int(name[: -len(".json")])
            return self._respond(self.items.get(story_id), request)

        return httpx.Response(404)

    @staticmethod
    def _respond(value: Any, request: httpx.Request) -> httpx.Response:
        if isinstance(value, httpx.Response):
            return value
        if isinstance(value, type) and issubclass(value, httpx.RequestError):
            raise value("simulated failure", request=request)
        return httpx.Response(
            200,
            content=json.dumps(value).encode(),
            headers={"Content-Type": "application/json"},
        )

    @property
    def item_requests(self) -> list[str]:
        return [p for p in self.requests if "/item/" in p]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def settings() -> Settings:
    return Settings(base_url=BASE_URL, request_timeout=5.0, max_workers=0)


@pytest.fixture
def fake_hn() -> FakeHackerNews:
    return FakeHackerNews()


@pytest.fixture
def make_hn():
    """Factory for a ``FakeHackerNews`` with custom items or story lists."""
    return FakeHackerNews
