"""Error taxonomy for hngrep.

Every failure the pipeline can surface derives from ``HNGrepError`` so that
entry points can report it with a single ``except`` clause.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Why a single item fetch failed."""

    TRANSPORT = "transport"    # connection error, timeout, non-2xx status
    DECODE = "decode"          # payload is not a valid item
    INTERNAL = "internal"      # unexpected exception inside a fetch task


class HNGrepError(Exception):
    """Base class for all hngrep failures."""


class PatternError(HNGrepError, ValueError):
    """The user-supplied title pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class ResolutionError(HNGrepError):
    """The story id list could not be fetched or decoded."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FetchError(HNGrepError):
    """A single item fetch failed."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, story_id: int, detail: str, *, kind: Optional[ErrorKind] = None) -> None:
        if kind is not None:
            self.kind = kind
        super().__init__(f"item {story_id}: {self.kind.value} error: {detail}")
        self.story_id = story_id
        self.detail = detail


class TransportError(FetchError):
    kind = ErrorKind.TRANSPORT


class DecodeError(FetchError):
    kind = ErrorKind.DECODE


class BatchTimeoutError(HNGrepError):
    """The batch did not deliver every outcome before its overall deadline."""

    def __init__(self, received: int, expected: int, timeout: float) -> None:
        super().__init__(
            f"timed out after {timeout:g}s with {received}/{expected} items fetched"
        )
        self.received = received
        self.expected = expected
        self.timeout = timeout
