"""Tests for text utility functions."""

from __future__ import annotations

import re

import pytest

from infofind.utils.text import (
    escape_literal,
    join_non_empty,
    normalize_scope,
    sanitize_pattern,
    strip_article,
    truncate_unsafe,
)


class TestTruncateUnsafe:
    """Test truncate_unsafe function."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Jane", "Jane"),
            ('Jane"; rm -rf', "Jane"),
            ("O'Brien", "O"),
            ("back`tick", "back"),
            ('"quoted"', ""),
            ("", ""),
            (None, ""),
        ],
    )
    def test_truncate(self, value: str | None, expected: str) -> None:
        assert truncate_unsafe(value) == expected

    def test_idempotent(self) -> None:
        """Truncating twice gives the same as once."""
        for value in ['Jane"; rm -rf', "a'b`c", "plain", "`"]:
            once = truncate_unsafe(value)
            assert truncate_unsafe(once) == once


class TestSanitizePattern:
    """Test sanitize_pattern function."""

    def test_cuts_at_double_quote(self) -> None:
        assert sanitize_pattern('Jane"; rm -rf') == "Jane"

    def test_slash_becomes_wildcard(self) -> None:
        assert sanitize_pattern("AC/DC") == "AC.DC"

    def test_keeps_regex_syntax(self) -> None:
        assert sanitize_pattern("^Jane.*Doe$") == "^Jane.*Doe$"

    def test_idempotent(self) -> None:
        for value in ['Jane"; rm -rf', "a/b/c", "x'y", "^(A|B)"]:
            once = sanitize_pattern(value)
            assert sanitize_pattern(once) == once


class TestEscapeLiteral:
    """Test escape_literal function."""

    def test_brackets_escaped(self) -> None:
        escaped = escape_literal("Song (live) [remix]")

        assert escaped == r"Song \(live\) \[remix\]"
        assert re.fullmatch(escaped, "Song (live) [remix]")

    def test_quotes_become_wildcards(self) -> None:
        assert escape_literal("Don't \"stop\"") == "Don.t .stop."

    def test_spaces_untouched(self) -> None:
        assert escape_literal("Jane Doe") == "Jane Doe"

    def test_other_metacharacters(self) -> None:
        value = "a.b*c+d?e|f^g$h{1}\\"
        assert re.fullmatch(escape_literal(value), value)


class TestStripArticle:
    """Test strip_article function."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("The Cat", "Cat"),
            ("A Bird", "Bird"),
            ("The The", "The"),
            ("the cat", "the cat"),
            ("Theatre", "Theatre"),
            ("An Owl", "An Owl"),
            ("Apple", "Apple"),
        ],
    )
    def test_strip(self, value: str, expected: str) -> None:
        assert strip_article(value) == expected


class TestNormalizeScope:
    """Test normalize_scope function."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("fiction", "fiction"),
            ("/fiction/", "fiction"),
            ("fiction/short", "fiction/short"),
            ("", ""),
            (None, ""),
            ("/", ""),
            ("bad dir", ""),
            ("fiction;rm", ""),
        ],
    )
    def test_normalize(self, raw: str | None, expected: str) -> None:
        assert normalize_scope(raw) == expected


class TestJoinNonEmpty:
    def test_drops_empty(self) -> None:
        assert join_non_empty(["Author", "", "Title", None]) == "Author,Title"
