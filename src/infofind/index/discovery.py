"""Find the content items that have metadata under a scope."""

from __future__ import annotations

import logging
from typing import List

from infofind.catalog.store import MetadataCatalog
from infofind.utils.files import strip_suffix

LOGGER = logging.getLogger(__name__)


def in_scope(directory: str, scope: str) -> bool:
    """True if *directory* is *scope* itself or lies below it."""
    if not scope:
        return True
    return directory == scope or directory.startswith(scope + "/")


def sidecar_item_id(sidecar_path: str, known: set[str]) -> str | None:
    """Map a sidecar path to the item it describes.

    ``a.info`` describes ``a``; ``a.txt.info`` describes ``a`` too when
    ``a.txt`` is not itself an item id.  Orphaned sidecars give ``None``.
    """
    item_id = strip_suffix(sidecar_path)
    if item_id in known:
        return item_id
    without_content_suffix = strip_suffix(item_id)
    if without_content_suffix != item_id and without_content_suffix in known:
        return without_content_suffix
    return None


def discover_entries(catalog: MetadataCatalog, scope: str = "") -> List[str]:
    """Return the ids of items with a sidecar file within *scope*, sorted."""
    known = catalog.known_content_items()
    found: set[str] = set()
    for sidecar in catalog.list_sidecar_files():
        if not in_scope(sidecar.directory, scope):
            continue
        item_id = sidecar_item_id(sidecar.path, known)
        if item_id is None:
            LOGGER.debug("Ignoring orphaned metadata file %s", sidecar.path)
            continue
        found.add(item_id)
    LOGGER.debug("Discovered %d entries in scope %r", len(found), scope)
    return sorted(found)
