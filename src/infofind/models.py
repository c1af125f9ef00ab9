"""Core InfoFind data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

MetadataRecord = Dict[str, str]

INDEX_STYLES = ("short", "medium", "long")


@dataclass(slots=True, frozen=True)
class SidecarFile:
    """A metadata file and the logical directory it lives in."""

    path: str
    directory: str


@dataclass(slots=True, frozen=True)
class SearchCriteria:
    """Field/pattern constraints, kept in field-name order.

    ``submitted`` holds the request values the patterns were cut from; the
    summary reports those.
    """

    pairs: Tuple[Tuple[str, str], ...] = ()
    submitted: Tuple[Tuple[str, str], ...] = field(default=(), compare=False)

    @classmethod
    def from_mapping(
        cls, patterns: Dict[str, str], submitted: Optional[Dict[str, str]] = None
    ) -> "SearchCriteria":
        return cls(tuple(sorted(patterns.items())), tuple(sorted((submitted or {}).items())))

    @property
    def fields(self) -> List[str]:
        return [name for name, _ in self.pairs]

    def summary(self) -> str:
        return " ".join(f"{name}={value}" for name, value in self.submitted or self.pairs)

    def __bool__(self) -> bool:
        return bool(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)


@dataclass(slots=True)
class SearchResult:
    entries: List[str] = field(default_factory=list)
    criteria: str = ""
    sort_criteria: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.entries)


@dataclass(slots=True, frozen=True)
class IndexEntry:
    """One distinct value of an indexed field."""

    value: str
    sort_key: str

    @property
    def letter(self) -> str:
        key = self.sort_key or self.value
        return key[:1].upper()


@dataclass(slots=True)
class AlphaGroup:
    letter: str
    entries: List[IndexEntry] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class IndexLink:
    """A browse link: what to show and the query string that reproduces it."""

    field: str
    label: str
    query: str
    href: str


@dataclass(slots=True)
class BrowseIndex:
    """Alphabetical index of a field's values within a scope."""

    field: str
    scope: str
    style: str
    groups: List[AlphaGroup] = field(default_factory=list)
    links: List[IndexLink] = field(default_factory=list)

    @property
    def letters(self) -> List[str]:
        return [group.letter for group in self.groups]

    @property
    def values(self) -> List[str]:
        return [entry.value for group in self.groups for entry in group.entries]

    def links_for(self, letter: str) -> List[IndexLink]:
        """Links for the values grouped under *letter*."""
        wanted = {entry.value for group in self.groups if group.letter == letter for entry in group.entries}
        return [link for link in self.links if link.label in wanted]

    def __bool__(self) -> bool:
        return bool(self.groups)
