"""Metadata catalog backed by ``.info`` sidecar files on disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Protocol, Sequence, Set

from infofind.models import MetadataRecord, SidecarFile
from infofind.utils.files import (
    iter_suffixed_paths,
    logical_directory,
    relative_id,
    strip_suffix,
)

LOGGER = logging.getLogger(__name__)


class MetadataCatalog(Protocol):
    """What the search and index code needs from a metadata store."""

    data_dir: Path

    def lookup(self, item_id: str) -> MetadataRecord: ...

    def lookup_field(self, item_id: str, field: str) -> str: ...

    def list_sidecar_files(self) -> List[SidecarFile]: ...

    def known_content_items(self) -> Set[str]: ...


def parse_info_text(text: str) -> MetadataRecord:
    """Parse ``Field: value`` lines into a record.

    Lines starting with whitespace continue the previous value on a new
    line.  Blank lines and ``#`` comments are ignored.
    """
    record: MetadataRecord = {}
    current: str | None = None
    for line in text.splitlines():
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        if line[0] in " \t" and current is not None:
            record[current] += "\n" + line.strip()
            continue
        name, sep, value = line.partition(":")
        if not sep or not name.strip():
            LOGGER.debug("Skipping malformed info line: %r", line)
            current = None
            continue
        current = name.strip()
        record[current] = value.strip()
    return record


class InfoFileCatalog:
    """Reads metadata from ``<item>.info`` files under a data directory."""

    def __init__(
        self,
        data_dir: Path,
        *,
        sidecar_suffix: str = "info",
        content_suffixes: Sequence[str] = ("txt", "html", "md"),
    ) -> None:
        self.data_dir = Path(data_dir)
        self.sidecar_suffix = sidecar_suffix.lstrip(".")
        self.content_suffixes = tuple(content_suffixes)

    def sidecar_path(self, item_id: str) -> Path | None:
        """Locate ``<id>.info``, falling back to ``<id>.<ext>.info``."""
        candidates = [f"{item_id}.{self.sidecar_suffix}"] + [
            f"{item_id}.{suffix}.{self.sidecar_suffix}" for suffix in self.content_suffixes
        ]
        for candidate in candidates:
            path = self.data_dir.joinpath(*candidate.split("/"))
            if path.is_file():
                return path
        return None

    def lookup(self, item_id: str) -> MetadataRecord:
        """Return the field/value mapping for *item_id*; empty if it has none."""
        path = self.sidecar_path(item_id)
        if path is None:
            return {}
        return parse_info_text(path.read_text(encoding="utf-8", errors="replace"))

    def lookup_field(self, item_id: str, field: str) -> str:
        return self.lookup(item_id).get(field, "")

    def list_sidecar_files(self) -> List[SidecarFile]:
        sidecars = [
            SidecarFile(
                path=relative_id(path, self.data_dir),
                directory=logical_directory(path, self.data_dir),
            )
            for path in iter_suffixed_paths(self.data_dir, [self.sidecar_suffix])
        ]
        LOGGER.debug("Found %d sidecar files under %s", len(sidecars), self.data_dir)
        return sidecars

    def known_content_items(self) -> Set[str]:
        return {
            strip_suffix(relative_id(path, self.data_dir))
            for path in iter_suffixed_paths(self.data_dir, self.content_suffixes)
        }
