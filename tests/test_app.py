"""Tests for web/app.py — JSON API and HTML results page."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from hngrep.errors import DecodeError, PatternError, ResolutionError
from hngrep.models import Category, Item, SearchResult
from web.app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


@pytest.fixture
def mock_orchestrator():
    with patch("web.app.SearchOrchestrator") as mock_cls:
        orch = MagicMock()
        mock_cls.return_value.__enter__.return_value = orch
        orch.search.return_value = SearchResult(
            total=2,
            items=[
                Item(id=1, title="Go 2.0 released", url="https://go.dev", score=120, by="gopher"),
                Item(id=3, title="Go tooling survey", score=15, by="gopher"),
            ],
            pattern="Go",
        )
        yield orch


class TestSearchApi:
    def test_returns_total_and_items(self, client, mock_orchestrator):
        resp = client.get("/api/search?pattern=Go")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["total"] == 2
        assert [i["id"] for i in data["items"]] == [1, 3]

    def test_passes_category_and_limit(self, client, mock_orchestrator):
        client.get("/api/search?pattern=Go&category=top&limit=30")
        args, kwargs = mock_orchestrator.search.call_args
        assert args == ("Go",)
        assert kwargs == {"category": Category.TOP, "limit": 30}

    def test_missing_pattern_is_400(self, client, mock_orchestrator):
        resp = client.get("/api/search")
        assert resp.status_code == 400
        mock_orchestrator.search.assert_not_called()

    def test_unknown_category_is_400(self, client, mock_orchestrator):
        assert client.get("/api/search?pattern=Go&category=ask").status_code == 400

    def test_bad_limit_is_400(self, client, mock_orchestrator):
        assert client.get("/api/search?pattern=Go&limit=many").status_code == 400

    def test_pattern_error_is_400(self, client, mock_orchestrator):
        mock_orchestrator.search.side_effect = PatternError("Go(", "missing )")
        resp = client.get("/api/search?pattern=Go(")
        assert resp.status_code == 400
        assert "invalid pattern" in resp.get_json()["error"]

    @pytest.mark.parametrize("error", [ResolutionError("down"), DecodeError(2, "garbage")])
    def test_upstream_error_is_502(self, client, mock_orchestrator, error):
        mock_orchestrator.search.side_effect = error
        resp = client.get("/api/search?pattern=Go")
        assert resp.status_code == 502
        assert "error" in resp.get_json()


class TestIndex:
    def test_form_without_pattern(self, client, mock_orchestrator):
        resp = client.get("/")
        assert resp.status_code == 200
        assert b"<form" in resp.data
        mock_orchestrator.search.assert_not_called()

    def test_renders_results_table(self, client, mock_orchestrator):
        resp = client.get("/?pattern=Go&category=best")
        assert resp.status_code == 200
        html = resp.get_data(as_text=True)
        assert "Go 2.0 released" in html
        assert 'href="https://go.dev"' in html
        assert 'href="https://news.ycombinator.com/item?id=3"' in html

    def test_error_page_status(self, client, mock_orchestrator):
        mock_orchestrator.search.side_effect = ResolutionError("down")
        resp = client.get("/?pattern=Go")
        assert resp.status_code == 502
        assert "down" in resp.get_data(as_text=True)
