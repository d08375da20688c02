"""Application settings — all configuration loaded from environment variables.

Usage:
    from config.settings import Settings
    settings = Settings()
    settings.validate()   # raises ValueError on a malformed value
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

#: Public Hacker News API root (Firebase).
DEFAULT_BASE_URL = "https://hacker-news.firebaseio.com/v0"


@dataclass
class Settings:
    """Centralised application configuration.

    All values are read from environment variables at instantiation time
    so that tests can override them by patching ``os.environ``.
    """

    # ── Hacker News API ─────────────────────────────────────────────────────
    base_url: str = field(
        default_factory=lambda: os.environ.get("HN_BASE_URL", DEFAULT_BASE_URL).rstrip("/")
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("HNGREP_USER_AGENT", "hngrep/1.0")
    )

    # ── Fetching ────────────────────────────────────────────────────────────
    #: Per-request timeout in seconds (story list and every item fetch).
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("HNGREP_TIMEOUT", "10"))
    )
    #: Worker cap for the item fan-out. 0 means one worker per story id.
    max_workers: int = field(
        default_factory=lambda: int(os.environ.get("HNGREP_MAX_WORKERS", "0"))
    )
    #: Overall deadline in seconds for collecting every item of one batch.
    batch_timeout: float = field(
        default_factory=lambda: float(os.environ.get("HNGREP_BATCH_TIMEOUT", "60"))
    )

    # ── Flask ───────────────────────────────────────────────────────────────
    debug: bool = field(
        default_factory=lambda: os.environ.get("FLASK_DEBUG", "0") == "1"
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "5001"))
    )

    def validate(self) -> None:
        """Raise ``ValueError`` if any setting is out of range."""
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"HN_BASE_URL must be an http(s) URL, got {self.base_url!r}.")
        if self.request_timeout <= 0:
            raise ValueError("HNGREP_TIMEOUT must be a positive number of seconds.")
        if self.batch_timeout <= 0:
            raise ValueError("HNGREP_BATCH_TIMEOUT must be a positive number of seconds.")
        if self.max_workers < 0:
            raise ValueError("HNGREP_MAX_WORKERS must be 0 (unbounded) or a positive integer.")
