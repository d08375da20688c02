"""Title matching.

Patterns use :func:`re.search` semantics: a match anywhere in the title counts,
and matching is case-sensitive unless ``ignore_case`` is requested.
"""

from __future__ import annotations

import re

from hngrep.errors import PatternError
from hngrep.models import Item


def compile_pattern(pattern: str, ignore_case: bool = False) -> re.Pattern[str]:
    """Compile a user-supplied pattern.

    Args:
        pattern: Regular expression in Python ``re`` syntax.
        ignore_case: Match regardless of letter case.

    Returns:
        The compiled pattern.

    Raises:
        PatternError: If the pattern does not compile.

    Examples:
        >>> compile_pattern("Go").search("Go 2.0 released") is not None
        True
    """
    flags = re.IGNORECASE if ignore_case else 0
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise PatternError(pattern, str(exc)) from exc


def title_matches(compiled: re.Pattern[str], item: Item) -> bool:
    """Return ``True`` if *compiled* matches anywhere in the item's title."""
    return compiled.search(item.title) is not None
