"""Alphabetical browse indexes over the distinct values of a field."""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple
from urllib.parse import quote

from infofind.catalog.store import MetadataCatalog
from infofind.config import AppConfig
from infofind.index.discovery import discover_entries
from infofind.index.search import FIND_PARAM
from infofind.models import INDEX_STYLES, AlphaGroup, BrowseIndex, IndexEntry, IndexLink
from infofind.utils.text import TITLE_ARTICLE_PATTERN, escape_literal, normalize_scope, strip_article

LOGGER = logging.getLogger(__name__)

DEFAULT_STYLE = "medium"


def make_entry(value: str, field_type: str) -> IndexEntry:
    sort_key = strip_article(value) if field_type == "title" else value
    return IndexEntry(value=value, sort_key=sort_key or value)


def _order(entry: IndexEntry, field_type: str) -> tuple:
    if field_type == "number":
        try:
            return (0, float(entry.value), entry.value)
        except ValueError:
            return (1, entry.value.upper(), entry.value)
    if field_type == "title":
        return (entry.sort_key, entry.value)
    return (entry.sort_key.upper(), entry.value)


def sort_entries(values: Sequence[str], field_type: str = "string") -> List[IndexEntry]:
    """Distinct non-empty *values* as entries, in index order.

    Numbers sort numerically (anything unparsable goes last), titles by
    their article-stripped key, everything else case-insensitively.
    """
    entries = [make_entry(value, field_type) for value in set(values) if value]
    return sorted(entries, key=lambda entry: _order(entry, field_type))


def group_entries(entries: Sequence[IndexEntry]) -> List[AlphaGroup]:
    """One group per distinct first letter, letters sorted.

    Entries keep their index order inside a group; numeric and
    case-sensitive title orders can put a letter in several places.
    """
    groups: Dict[str, AlphaGroup] = {}
    for entry in entries:
        groups.setdefault(entry.letter, AlphaGroup(letter=entry.letter)).entries.append(entry)
    return [groups[letter] for letter in sorted(groups)]


def starts_with_pattern(letter: str, field_type: str) -> str:
    if letter.lower() != letter.upper():
        letter_pattern = f"[{letter.upper()}{letter.lower()}]"
    else:
        letter_pattern = escape_literal(letter)
    prefix = TITLE_ARTICLE_PATTERN if field_type == "title" else ""
    return f"^{prefix}{letter_pattern}"


def exact_pattern(value: str, field_type: str) -> str:
    prefix = TITLE_ARTICLE_PATTERN if field_type == "title" else ""
    return f"^{prefix}{escape_literal(value)}$"


def sort_fields_for(field: str, config: AppConfig) -> List[str]:
    """The indexed field first, then the default sort order without it."""
    if not config.sort_param:
        return []
    return [field] + [name for name in config.sort_order if name != field]


def link_query(field: str, pattern: str, config: AppConfig) -> str:
    pairs: List[Tuple[str, str]] = [(config.field_prefix + field, pattern), (FIND_PARAM, "1")]
    pairs.extend((config.sort_param, name) for name in sort_fields_for(field, config))
    return ";".join(f"{quote(name, safe='')}={quote(value, safe='')}" for name, value in pairs)


def link_href(query: str, scope: str, config: AppConfig, base: str = "") -> str:
    """Where a browse link points; *base* is the path pages are served under."""
    path = f"/{scope}/" if scope else "/"
    if config.url:
        # hybrid sites point at the CGI script and pass the path explicitly
        return f"{config.url}?{query};path={quote(path)}"
    return f"{config.site_url.rstrip('/')}{base.rstrip('/')}{path}?{query}"


class IndexBuilder:
    """Builds browse indexes for page templates."""

    def __init__(self, catalog: MetadataCatalog, config: AppConfig, base: str = "") -> None:
        self.catalog = catalog
        self.config = config
        self.base = base

    def collect_values(self, field: str, scope: str) -> List[str]:
        values: List[str] = []
        for item_id in discover_entries(self.catalog, scope):
            value = self.catalog.lookup_field(item_id, field)
            if value:
                values.append(value)
        return values

    def build(self, field: str, scope: str | None = "", style: str = DEFAULT_STYLE) -> BrowseIndex:
        if style not in INDEX_STYLES:
            LOGGER.warning("Unknown index style %r, using %s", style, DEFAULT_STYLE)
            style = DEFAULT_STYLE
        scope = normalize_scope(scope)
        field_type = self.config.field_spec(field).type

        entries = sort_entries(self.collect_values(field, scope), field_type)
        index = BrowseIndex(field=field, scope=scope, style=style, groups=group_entries(entries))
        if style == "short":
            patterns = [
                (group.letter, starts_with_pattern(group.letter, field_type))
                for group in index.groups
            ]
        elif style == "long":
            patterns = [
                (entry.value, exact_pattern(entry.value, field_type))
                for group in index.groups
                for entry in group.entries
            ]
        else:
            patterns = [(entry.value, exact_pattern(entry.value, field_type)) for entry in entries]

        for label, pattern in patterns:
            query = link_query(field, pattern, self.config)
            href = link_href(query, scope, self.config, self.base)
            index.links.append(IndexLink(field=field, label=label, query=query, href=href))
        LOGGER.debug(
            "Built %s index of %s in %r: %d values", style, field, scope, len(entries)
        )
        return index
