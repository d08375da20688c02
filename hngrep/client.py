"""Hacker News API client.

Two read operations, both against the public Firebase API:

    GET <base>/<category>stories.json   → ordered list of story ids
    GET <base>/item/<id>.json           → one item object

``story_ids`` raises on failure (nothing can be searched without the list).
``fetch_item`` never raises for per-item problems; it reports them inside a
``FetchOutcome`` so the caller decides what a failed item means.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import httpx
from pydantic import ValidationError

from hngrep.errors import DecodeError, ResolutionError, TransportError
from hngrep.models import Category, FetchOutcome, Item

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)


class HackerNewsClient:
    """Thin wrapper around a shared ``httpx.Client``.

    ``httpx.Client`` is safe to share between threads, so one instance serves
    every concurrent item fetch. The connection pool is left unbounded to match
    the one-worker-per-id fan-out; otherwise requests would queue for a pool
    slot and could hit the pool timeout.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> None:
        """Initialise the client.

        Args:
            settings: Application configuration (base URL, timeout, user agent).
            transport: Optional transport override, used by tests to mock the API.
        """
        self.settings = settings
        self._http = httpx.Client(
            base_url=settings.base_url,
            timeout=httpx.Timeout(settings.request_timeout),
            limits=httpx.Limits(max_connections=None, max_keepalive_connections=32),
            headers={"User-Agent": settings.user_agent},
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> HackerNewsClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ── Story list ─────────────────────────────────────────────────────────

    def story_ids(self, category: Category) -> list[int]:
        """Fetch the ordered story ids for *category*.

        Raises:
            ResolutionError: On any transport failure, non-2xx status, or a
                payload that is not a JSON list of integers.
        """
        path = f"/{Category(category).value}stories.json"
        try:
            resp = self._http.get(path)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ResolutionError(
                f"story list {path} returned HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise ResolutionError(f"story list {path} request failed: {exc}") from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            raise ResolutionError(f"story list {path} is not valid JSON") from exc

        if not isinstance(payload, list) or not all(
            isinstance(i, int) and not isinstance(i, bool) for i in payload
        ):
            raise ResolutionError(f"story list {path} is not a list of integer ids")

        logger.info("Resolved %d %s story ids", len(payload), Category(category).value)
        return payload

    # ── Single item ────────────────────────────────────────────────────────

    def fetch_item(self, story_id: int) -> FetchOutcome:
        """Fetch and decode one item. A single attempt; no retries."""
        path = f"/item/{story_id}.json"
        logger.debug("GET %s", path)
        try:
            resp = self._http.get(path)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            return self._failed(TransportError(story_id, f"HTTP {exc.response.status_code}"))
        except httpx.HTTPError as exc:
            return self._failed(TransportError(story_id, f"{type(exc).__name__}: {exc}"))

        try:
            payload: Any = resp.json()
        except ValueError as exc:
            return self._failed(DecodeError(story_id, f"invalid JSON: {exc}"))

        if payload is None:
            return self._failed(DecodeError(story_id, "item not found (null payload)"))
        if not isinstance(payload, dict):
            return self._failed(DecodeError(story_id, f"expected an object, got {type(payload).__name__}"))

        try:
            item = Item.model_validate(payload)
        except ValidationError as exc:
            return self._failed(
                DecodeError(story_id, f"{exc.error_count()} validation error(s)")
            )
        return FetchOutcome.success(story_id, item)

    @staticmethod
    def _failed(error: TransportError | DecodeError) -> FetchOutcome:
        logger.warning("%s", error)
        return FetchOutcome.failure(error)
