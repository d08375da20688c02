"""Result aggregation.

Responsibilities:
- Put matched items back into the order the story list gave them
- Keep every match, including repeats of an id the list names twice
- Build the immutable ``SearchResult`` handed to renderers

Fetches complete in whatever order the network produces, so the collector's
receive order is not reproducible; sorting by request position is what makes
two identical runs print identical output.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from hngrep.models import Category, Item, SearchResult

logger = logging.getLogger(__name__)


# ── Ordering ───────────────────────────────────────────────────────────────────


def order_by_request(items: Iterable[Item], story_ids: Sequence[int]) -> list[Item]:
    """Sort *items* by the position of their id in *story_ids*.

    Items whose id is not in *story_ids* sort last, by id. Every item is
    kept; repeats of one id stay together at its first position, so the
    count of matches is unchanged.

    Args:
        items: Matched items in receive order.
        story_ids: The ids as returned by the story list.

    Returns:
        A new list in request order.

    Examples:
        >>> [i.id for i in order_by_request([item3, item1], [1, 2, 3])]
        [1, 3]
    """
    position: dict[int, int] = {}
    for index, story_id in enumerate(story_ids):
        position.setdefault(story_id, index)

    last = len(story_ids)
    return sorted(items, key=lambda i: (position.get(i.id, last), i.id))


# ── Public pipeline ────────────────────────────────────────────────────────────


def build_result(
    items: Iterable[Item],
    story_ids: Sequence[int],
    pattern: str = "",
    category: Category = Category.NEW,
) -> SearchResult:
    """Order the matches and wrap them in a ``SearchResult``.

    Args:
        items: Matched items from the collector.
        story_ids: The requested ids, in story list order.
        pattern: The search pattern, carried for renderers.
        category: The story list that was searched.

    Returns:
        A ``SearchResult`` whose ``total`` equals ``len(items)``.
    """
    ordered = order_by_request(items, story_ids)
    logger.debug("Aggregated %d matches", len(ordered))
    return SearchResult(
        total=len(ordered),
        items=ordered,
        pattern=pattern,
        category=Category(category).value,
    )
