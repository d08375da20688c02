"""
Data models shared across hngrep.

``Item`` and ``SearchResult`` are Pydantic models; ``FetchOutcome`` is a plain
frozen dataclass because it never crosses a serialisation boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hngrep.errors import FetchError

#: Hacker News discussion page for an item.
ITEM_PAGE_URL = "https://news.ycombinator.com/item?id={id}"


class Category(str, Enum):
    """Story list to search. The value is the ``<category>stories.json`` prefix."""

    NEW = "new"
    TOP = "top"
    BEST = "best"


class Item(BaseModel):
    """A Hacker News item (story, comment, job, poll or pollopt).

    Only ``id`` and ``title`` matter to the search; the rest is carried through
    for renderers. Unknown fields are ignored and ``null`` values fall back to
    the field default.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: int
    title: str = ""
    score: int = 0
    comment_count: int = Field(default=0, alias="descendants")
    author: str = Field(default="", alias="by")
    url: Optional[str] = None

    # Pass-through fields, not interpreted by the search.
    type: str = ""
    deleted: bool = False
    dead: bool = False
    time: Optional[int] = None
    text: Optional[str] = None
    parent: Optional[int] = None
    poll: Optional[int] = None
    kids: tuple[int, ...] = ()
    parts: tuple[int, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @property
    def link(self) -> str:
        """The story URL, or the discussion page for text-only posts (Ask HN, …)."""
        return self.url or ITEM_PAGE_URL.format(id=self.id)

    def __str__(self) -> str:
        return f"{self.title}\n{self.link}"


@dataclass(frozen=True)
class FetchOutcome:
    """Result of one fetch attempt: exactly one of ``item`` or ``error`` is set."""

    story_id: int
    item: Optional[Item] = None
    error: Optional[FetchError] = None

    def __post_init__(self) -> None:
        if (self.item is None) == (self.error is None):
            raise ValueError("FetchOutcome needs exactly one of item or error.")

    @classmethod
    def success(cls, story_id: int, item: Item) -> FetchOutcome:
        return cls(story_id=story_id, item=item)

    @classmethod
    def failure(cls, error: FetchError) -> FetchOutcome:
        return cls(story_id=error.story_id, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


class SearchResult(BaseModel):
    """Matches for one search run, handed to a renderer."""

    model_config = ConfigDict(frozen=True)

    total: int
    items: tuple[Item, ...]
    pattern: str = ""
    category: str = Category.NEW.value

    @model_validator(mode="after")
    def total_matches_items(self) -> SearchResult:
        if self.total != len(self.items):
            raise ValueError(
                f"total={self.total} does not match {len(self.items)} items"
            )
        return self
