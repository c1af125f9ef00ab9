"""Page-type resolution: plain category listings and info_find result pages."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from infofind.catalog.store import MetadataCatalog
from infofind.index.discovery import in_scope
from infofind.index.search import Searcher, find_requested
from infofind.utils.files import strip_suffix
from infofind.utils.params import RequestParams
from infofind.utils.text import normalize_scope

LOGGER = logging.getLogger(__name__)

INFO_FIND_TYPE = "info_find"
INFO_FIND_ALTERNATIVES = ("find", "category")


@dataclass(slots=True, frozen=True)
class PathInfo:
    """A request path split into its category (scope) and entry parts."""

    path: str
    scope: str
    entry: str = ""
    error: Optional[str] = None

    @property
    def is_category(self) -> bool:
        return not self.entry


def parse_path(path_info: str | None) -> PathInfo:
    path = "/" + (path_info or "").lstrip("/")
    parts = [part for part in path.split("/") if part]
    if ".." in parts:
        return PathInfo(path=path, scope="", error="Path may not contain '..'")
    if path.endswith("/") or not parts:
        directory, entry = "/".join(parts), ""
    else:
        directory, entry = "/".join(parts[:-1]), parts[-1]
    return PathInfo(path=path, scope=normalize_scope(directory), entry=entry)


@dataclass(slots=True)
class PageEntries:
    path_type: str
    entries: List[str] = field(default_factory=list)
    num_found: Optional[int] = None
    criteria: Optional[str] = None
    sort_criteria: Optional[str] = None


class PageResolver(ABC):
    """Decides what kind of page a path is and which entries it shows."""

    @abstractmethod
    def path_type(self, path: PathInfo, params: RequestParams) -> str: ...

    @abstractmethod
    def alt_path_types(self, path_type: str) -> Tuple[str, ...]: ...

    @abstractmethod
    def select_entries(self, path: PathInfo, params: RequestParams) -> PageEntries: ...


class DefaultPageResolver(PageResolver):
    def __init__(self, catalog: MetadataCatalog) -> None:
        self.catalog = catalog

    def path_type(self, path: PathInfo, params: RequestParams) -> str:
        return "category" if path.is_category else "entry"

    def alt_path_types(self, path_type: str) -> Tuple[str, ...]:
        return ()

    def select_entries(self, path: PathInfo, params: RequestParams) -> PageEntries:
        path_type = self.path_type(path, params)
        if path_type == "entry":
            entry = strip_suffix(path.entry)
            item_id = f"{path.scope}/{entry}" if path.scope else entry
            known = self.catalog.known_content_items()
            return PageEntries(path_type=path_type, entries=[item_id] if item_id in known else [])
        entries = sorted(
            item_id
            for item_id in self.catalog.known_content_items()
            if in_scope(item_id.rpartition("/")[0], path.scope)
        )
        return PageEntries(path_type=path_type, entries=entries)


class InfoFindPageResolver(PageResolver):
    """Turns paths with an ``info_find`` parameter into search result pages.

    Everything else, and a find with nothing to search on, goes to the
    wrapped resolver.
    """

    def __init__(self, default: PageResolver, searcher: Searcher) -> None:
        self.default = default
        self.searcher = searcher

    def path_type(self, path: PathInfo, params: RequestParams) -> str:
        if path.error is None and find_requested(params):
            return INFO_FIND_TYPE
        return self.default.path_type(path, params)

    def alt_path_types(self, path_type: str) -> Tuple[str, ...]:
        if path_type == INFO_FIND_TYPE:
            return INFO_FIND_ALTERNATIVES
        return self.default.alt_path_types(path_type)

    def select_entries(self, path: PathInfo, params: RequestParams) -> PageEntries:
        if self.path_type(path, params) == INFO_FIND_TYPE:
            result = self.searcher.search(path.scope, params)
            if result is not None:
                return PageEntries(
                    path_type=INFO_FIND_TYPE,
                    entries=result.entries,
                    num_found=result.count,
                    criteria=result.criteria,
                    sort_criteria=result.sort_criteria,
                )
            LOGGER.debug("Nothing to find for %s; using plain listing", path.path)
            page = self.default.select_entries(path, params)
            page.path_type = INFO_FIND_TYPE
            return page
        return self.default.select_entries(path, params)
