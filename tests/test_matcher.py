"""Tests for hngrep/matcher.py — pattern compilation and title matching."""

from __future__ import annotations

import pytest

from hngrep.errors import PatternError
from hngrep.matcher import compile_pattern, title_matches
from hngrep.models import Item


def item(title: str) -> Item:
    return Item(id=1, title=title)


class TestCompilePattern:
    def test_invalid_pattern_raises(self):
        with pytest.raises(PatternError) as info:
            compile_pattern("[unclosed")
        assert info.value.pattern == "[unclosed"

    def test_pattern_error_is_value_error(self):
        with pytest.raises(ValueError):
            compile_pattern("(")

    def test_ignore_case_flag(self):
        assert title_matches(compile_pattern("rust", ignore_case=True), item("Rust 2024"))


class TestTitleMatches:
    def test_matches_anywhere(self):
        assert title_matches(compile_pattern("tooling"), item("Go tooling survey"))

    def test_not_a_full_match(self):
        assert title_matches(compile_pattern("Go"), item("Why I left Go"))

    def test_case_sensitive_by_default(self):
        assert not title_matches(compile_pattern("go"), item("Go 2.0 released"))

    def test_anchors(self):
        compiled = compile_pattern(r"^Show HN:")
        assert title_matches(compiled, item("Show HN: hngrep"))
        assert not title_matches(compiled, item("Ask HN: Show HN: etiquette?"))

    def test_empty_title_only_matches_empty_pattern(self):
        assert title_matches(compile_pattern(""), item(""))
        assert not title_matches(compile_pattern("x"), item(""))
