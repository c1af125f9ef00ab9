"""Text helpers for request values, sort keys and regex patterns."""

from __future__ import annotations

import re
from typing import Iterable

_UNSAFE_CUTOFF = re.compile(r"[`'\"]")
_QUOTE_OR_SLASH = re.compile(r"['\"/]")
_REGEX_SPECIALS = frozenset("\\.^$*+?{}[]()|")
_LEADING_ARTICLE = re.compile(r"^(?:The|A) ")
_SCOPE_CHARS = re.compile(r"[-_./\w]+")

TITLE_ARTICLE_PATTERN = "(A |The )*"


def truncate_unsafe(value: str | None) -> str:
    """Keep only the leading run of *value* before any backtick or quote."""
    if not value:
        return ""
    match = _UNSAFE_CUTOFF.search(value)
    return value[: match.start()] if match else value


def sanitize_pattern(value: str | None) -> str:
    """Make a user-supplied field value safe to use as a search pattern.

    The value is cut at the first backtick or quote, and any remaining
    quote or slash becomes a single-character wildcard.
    """
    return _QUOTE_OR_SLASH.sub(".", truncate_unsafe(value))


def escape_literal(value: str) -> str:
    """Escape regex metacharacters so *value* matches literally.

    Quotes become ``.`` so the pattern can sit inside a query string.
    """
    escaped = "".join("\\" + char if char in _REGEX_SPECIALS else char for char in value)
    return escaped.replace("'", ".").replace('"', ".")


def strip_article(value: str) -> str:
    """Drop a single leading ``"The "`` or ``"A "``."""
    return _LEADING_ARTICLE.sub("", value, count=1)


def normalize_scope(raw: str | None) -> str:
    """Turn a category path into a scope; anything odd means the whole site."""
    if not raw:
        return ""
    scope = raw.strip("/")
    if not scope or not _SCOPE_CHARS.fullmatch(scope):
        return ""
    return scope


def join_non_empty(values: Iterable[str | None], separator: str = ",") -> str:
    return separator.join(value for value in values if value)
