"""Exceptions raised inside the InfoFind core.

None of these escape a search or an index build: each one is caught where
it is raised and turned into an empty contribution (no match, default type,
plain listing).
"""

from __future__ import annotations


class InfoFindError(Exception):
    """Base class for InfoFind errors."""


class ConfigError(InfoFindError):
    """The configuration file could not be read or has the wrong shape."""


class InvalidPatternError(InfoFindError):
    """A sanitised field pattern is not a valid regular expression."""

    def __init__(self, field: str, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid pattern for {field!r}: {pattern!r} ({reason})")
        self.field = field
        self.pattern = pattern
        self.reason = reason


class UnknownFieldError(InfoFindError):
    """A field was used that has no entry in the type specification."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Field not declared in info_type_spec: {field!r}")
        self.field = field


class EmptyCriteriaError(InfoFindError):
    """A find was requested but no field parameter resolved to a pattern."""
