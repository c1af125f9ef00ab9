"""Conjunctive field-pattern matching against metadata records."""

from __future__ import annotations

import logging
import re
from typing import Dict, Optional, Pattern

from infofind.errors import InvalidPatternError
from infofind.models import MetadataRecord, SearchCriteria

LOGGER = logging.getLogger(__name__)


def compile_pattern(field: str, pattern: str) -> Pattern[str]:
    try:
        return re.compile(pattern, re.DOTALL)
    except re.error as exc:
        raise InvalidPatternError(field, pattern, str(exc)) from exc


class CriteriaMatcher:
    """Decide whether a record satisfies every pattern in a criteria set.

    Patterns are compiled once.  A pattern that fails to compile is logged
    and treated as never matching, so the rest of the search still runs.
    """

    def __init__(self, criteria: SearchCriteria) -> None:
        self.criteria = criteria
        self._patterns = dict(criteria.pairs)
        self._compiled: Dict[str, Optional[Pattern[str]]] = {}
        for field, pattern in criteria.pairs:
            try:
                self._compiled[field] = compile_pattern(field, pattern)
            except InvalidPatternError as exc:
                LOGGER.warning("%s", exc)
                self._compiled[field] = None

    def matches(self, record: MetadataRecord) -> bool:
        if not self.criteria:
            return False
        for field in self.criteria.fields:
            value = record.get(field) or ""
            compiled = self._compiled[field]
            if compiled is None or compiled.search(value) is None:
                LOGGER.debug("InfoFind %s=%r NOTfound=%s", field, value, self._patterns[field])
                return False
            LOGGER.debug("InfoFind %s=%r found=%s", field, value, self._patterns[field])
        return True


def matches(record: MetadataRecord, criteria: SearchCriteria) -> bool:
    return CriteriaMatcher(criteria).matches(record)
