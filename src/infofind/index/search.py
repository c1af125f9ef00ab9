"""Search content items by their metadata."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from infofind.catalog.store import MetadataCatalog
from infofind.config import AppConfig
from infofind.errors import EmptyCriteriaError
from infofind.index.discovery import discover_entries
from infofind.index.matcher import CriteriaMatcher
from infofind.models import SearchCriteria, SearchResult
from infofind.utils.params import RequestParams, param_value, param_values
from infofind.utils.text import join_non_empty, normalize_scope, sanitize_pattern, truncate_unsafe

LOGGER = logging.getLogger(__name__)

FIND_PARAM = "info_find"


def find_requested(params: RequestParams) -> bool:
    """True if the request carries a usable ``info_find`` flag."""
    return bool(truncate_unsafe(param_value(params, FIND_PARAM)))


def build_criteria(params: RequestParams, config: AppConfig) -> SearchCriteria:
    """Collect ``<prefix><field>`` parameters for every declared field.

    Matching uses the sanitised patterns; the summary keeps the values as
    they were submitted.

    Raises :class:`EmptyCriteriaError` when none of them yields a pattern.
    """
    patterns: Dict[str, str] = {}
    submitted: Dict[str, str] = {}
    for field in config.fields:
        raw = param_value(params, config.field_prefix + field)
        if not raw:
            continue
        pattern = sanitize_pattern(raw)
        if not pattern:
            LOGGER.debug("Ignoring %s: nothing left after sanitising %r", field, raw)
            continue
        patterns[field] = pattern
        submitted[field] = raw
    if not patterns:
        raise EmptyCriteriaError("No field parameters given")
    return SearchCriteria.from_mapping(patterns, submitted)


def sort_criteria(params: RequestParams, config: AppConfig) -> Optional[str]:
    """Comma-joined non-empty sort parameter values, or ``None``."""
    if not config.sort_param:
        return None
    values = param_values(params, config.sort_param)
    if not any(values):
        return None
    return join_non_empty(values)


class Searcher:
    """Runs info_find queries over a metadata catalog."""

    def __init__(self, catalog: MetadataCatalog, config: AppConfig) -> None:
        self.catalog = catalog
        self.config = config

    def search(self, scope: str | None, params: RequestParams) -> Optional[SearchResult]:
        """Return the matching entries, or ``None`` when this is not a find.

        ``None`` tells the caller to fall back to its plain listing.
        """
        if not find_requested(params):
            return None
        try:
            criteria = build_criteria(params, self.config)
        except EmptyCriteriaError:
            LOGGER.debug("info_find given without any field values; plain listing")
            return None

        result = SearchResult(
            criteria=criteria.summary(),
            sort_criteria=sort_criteria(params, self.config),
        )
        result.entries = self.filter_entries(normalize_scope(scope), criteria)
        LOGGER.debug("%s", ":".join(result.entries))
        LOGGER.info(
            "InfoFind %r in scope %r: %d found", result.criteria, scope or "", result.count
        )
        return result

    def filter_entries(self, scope: str, criteria: SearchCriteria) -> list[str]:
        matcher = CriteriaMatcher(criteria)
        found: list[str] = []
        seen: set[str] = set()
        for item_id in discover_entries(self.catalog, scope):
            if item_id in seen:
                continue
            LOGGER.debug("InfoFind looking at %s", item_id)
            if matcher.matches(self.catalog.lookup(item_id)):
                seen.add(item_id)
                found.append(item_id)
        return found
