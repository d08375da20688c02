"""Search orchestration: concurrent fan-out / fan-in over the item endpoint.

Flow:
    1. compile the title pattern (fails before any network activity)
    2. resolve the story id list (one blocking request)
    3. fan out: one fetch task per id, all submitted before any result is read
    4. fan in: read exactly one ``FetchOutcome`` per id from a shared queue,
       failing fast on the first error
    5. aggregate the matches into a ``SearchResult``

Every task delivers exactly one outcome, so the collector never waits on an
outcome that will not arrive and never leaves one behind for a later run.
"""

from __future__ import annotations

import logging
import queue
import re
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Optional

from hngrep.aggregator import build_result
from hngrep.client import HackerNewsClient
from hngrep.errors import BatchTimeoutError, ErrorKind, FetchError
from hngrep.matcher import compile_pattern, title_matches
from hngrep.models import Category, FetchOutcome, Item, SearchResult

if TYPE_CHECKING:
    import httpx

    from config.settings import Settings

logger = logging.getLogger(__name__)

#: A fetch callable: story id in, outcome out. Must not block indefinitely.
Fetcher = Callable[[int], FetchOutcome]


# ── Fan-out ────────────────────────────────────────────────────────────────────


def _deliver(story_id: int, fetch: Fetcher, outcomes: queue.Queue[FetchOutcome]) -> None:
    """Run one fetch and put exactly one outcome on *outcomes*."""
    try:
        outcome = fetch(story_id)
    except Exception as exc:
        logger.exception("Fetch task for item %d raised", story_id)
        outcome = FetchOutcome.failure(
            FetchError(story_id, f"{type(exc).__name__}: {exc}", kind=ErrorKind.INTERNAL)
        )
    outcomes.put(outcome)


def fan_out(
    executor: ThreadPoolExecutor,
    story_ids: Sequence[int],
    fetch: Fetcher,
    outcomes: queue.Queue[FetchOutcome],
) -> list[Future[None]]:
    """Submit one fetch task per story id.

    Args:
        executor: Pool the tasks run on.
        story_ids: Ids to fetch; one task each, duplicates included.
        fetch: Callable producing a ``FetchOutcome`` for one id.
        outcomes: Shared unbounded queue every task writes its outcome to.

    Returns:
        The submitted futures, in submission order.
    """
    return [executor.submit(_deliver, story_id, fetch, outcomes) for story_id in story_ids]


# ── Fan-in ─────────────────────────────────────────────────────────────────────


def collect(
    outcomes: queue.Queue[FetchOutcome],
    expected: int,
    predicate: Callable[[Item], bool],
    timeout: Optional[float] = None,
) -> list[Item]:
    """Consume exactly *expected* outcomes and return the matching items.

    Items are returned in receive order. *timeout* bounds the whole batch,
    since the per-request httpx timeout applies to each read, not to a
    response trickling in slowly.

    Raises:
        FetchError: The first failed outcome received; remaining outcomes are
            left unread.
        BatchTimeoutError: If *timeout* seconds pass before all outcomes arrive.
    """
    deadline = None if timeout is None else time.monotonic() + timeout
    matched: list[Item] = []
    for received in range(1, expected + 1):
        remaining = None if deadline is None else max(deadline - time.monotonic(), 0.0)
        try:
            outcome = outcomes.get(timeout=remaining)
        except queue.Empty:
            logger.error("Batch deadline hit after %d/%d outcomes", received - 1, expected)
            raise BatchTimeoutError(received - 1, expected, timeout) from None
        if outcome.error is not None:
            logger.error(
                "Aborting batch after %d/%d outcomes: %s", received, expected, outcome.error
            )
            raise outcome.error
        if predicate(outcome.item):
            matched.append(outcome.item)
    return matched


# ── Orchestrator ───────────────────────────────────────────────────────────────


class SearchOrchestrator:
    """Runs one search: resolve ids, fetch items concurrently, filter, aggregate.

    The HTTP client is lazy-initialised and closed by :meth:`close` (or on
    leaving a ``with`` block), so the orchestrator can be built in tests
    without touching the network.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """Initialise the orchestrator.

        Args:
            settings: Application configuration.
            transport: Optional ``httpx`` transport, forwarded to the client.
        """
        self.settings = settings
        self._transport = transport
        self._client: Optional[HackerNewsClient] = None

    @property
    def client(self) -> HackerNewsClient:
        """Lazy-initialise and return the Hacker News client."""
        if self._client is None:
            self._client = HackerNewsClient(self.settings, transport=self._transport)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> SearchOrchestrator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def search(
        self,
        pattern: str | re.Pattern[str],
        category: Category = Category.NEW,
        limit: Optional[int] = None,
    ) -> SearchResult:
        """Search the titles of one story list.

        Args:
            pattern: Regular expression, or an already compiled pattern.
            category: Which story list to search.
            limit: Only fetch the first *limit* ids of the list.

        Returns:
            A ``SearchResult`` with matches in story list order.

        Raises:
            PatternError: If *pattern* does not compile (raised before any request).
            ResolutionError: If the story list cannot be fetched.
            FetchError: On the first item that fails to fetch or decode.
            BatchTimeoutError: If the items are not all fetched within the
                configured batch timeout.
        """
        compiled = pattern if isinstance(pattern, re.Pattern) else compile_pattern(pattern)
        category = Category(category)

        story_ids = self.client.story_ids(category)
        if limit is not None:
            story_ids = story_ids[:max(limit, 0)]

        logger.info(
            "Search pattern=%r category=%s items=%d",
            compiled.pattern, category.value, len(story_ids),
        )

        matched = self.fetch_matching(story_ids, lambda item: title_matches(compiled, item))

        logger.info("Search complete: %d of %d items matched", len(matched), len(story_ids))
        return build_result(matched, story_ids, pattern=compiled.pattern, category=category)

    def fetch_matching(
        self,
        story_ids: Sequence[int],
        predicate: Callable[[Item], bool],
    ) -> list[Item]:
        """Fetch every id concurrently and return items satisfying *predicate*.

        Outstanding tasks are cancelled if the batch fails fast.
        """
        if not story_ids:
            return []

        workers = self.settings.max_workers or len(story_ids)
        outcomes: queue.Queue[FetchOutcome] = queue.Queue()
        executor = ThreadPoolExecutor(
            max_workers=min(workers, len(story_ids)),
            thread_name_prefix="hngrep-fetch",
        )
        try:
            fan_out(executor, story_ids, self.client.fetch_item, outcomes)
            return collect(
                outcomes, len(story_ids), predicate, timeout=self.settings.batch_timeout
            )
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
