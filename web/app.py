"""
Flask web server for hngrep.

Routes
──────
GET  /                                     Search form + HTML results table
GET  /api/search?pattern=...&category=...  JSON: {"total": n, "items": [...]}
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv
from flask import Flask, jsonify, render_template, request

# Allow running as `python web/app.py` from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

load_dotenv()

from config.settings import Settings
from hngrep.errors import HNGrepError, PatternError
from hngrep.models import Category
from hngrep.search import SearchOrchestrator

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

CATEGORIES = [c.value for c in Category]


def _search_params() -> tuple[str, str, int | None]:
    """Read and validate ``pattern``, ``category`` and ``limit`` query params.

    Raises:
        ValueError: On an unknown category or a non-integer limit.
    """
    pattern = request.args.get("pattern", "")
    category = request.args.get("category", Category.NEW.value)
    if category not in CATEGORIES:
        raise ValueError(f"category must be one of {', '.join(CATEGORIES)}")
    raw_limit = request.args.get("limit", "").strip()
    limit = int(raw_limit) if raw_limit else None
    return pattern, category, limit


def _run_search(pattern: str, category: str, limit: int | None):
    settings = Settings()
    with SearchOrchestrator(settings) as orchestrator:
        return orchestrator.search(pattern, category=Category(category), limit=limit)


# ── UI ─────────────────────────────────────────────────────────────────────

@app.route("/")
def index():
    pattern = request.args.get("pattern", "")
    context = {"pattern": pattern, "categories": CATEGORIES, "category": "new",
               "result": None, "error": None}
    if not pattern:
        return render_template("results.html", **context)

    try:
        pattern, category, limit = _search_params()
        context["category"] = category
        context["result"] = _run_search(pattern, category, limit)
        status = 200
    except (PatternError, ValueError) as exc:
        context["error"] = str(exc)
        status = 400
    except HNGrepError as exc:
        logger.exception("Search failed for pattern=%r", pattern)
        context["error"] = str(exc)
        status = 502
    return render_template("results.html", **context), status


# ── Search API ─────────────────────────────────────────────────────────────

@app.route("/api/search")
def search_endpoint():
    """Run one search and return the SearchResult as JSON.

    Query params:
      pattern   (required) — regular expression matched against titles
      category  (optional) — new | top | best (default: new)
      limit     (optional) — only search the first N stories
    """
    try:
        pattern, category, limit = _search_params()
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    if not pattern:
        return jsonify({"error": "pattern query param is required"}), 400

    try:
        result = _run_search(pattern, category, limit)
    except PatternError as exc:
        return jsonify({"error": str(exc)}), 400
    except HNGrepError as exc:
        logger.exception("Search failed for pattern=%r", pattern)
        return jsonify({"error": str(exc)}), 502

    return jsonify(
        {
            "total": result.total,
            "items": [item.model_dump(mode="json") for item in result.items],
        }
    )


# ── Entry point ────────────────────────────────────────────────────────────

if __name__ == "__main__":
    settings = Settings()
    app.run(debug=settings.debug, host="0.0.0.0", port=settings.port)
