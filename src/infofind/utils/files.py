"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import Iterable, Iterator


def iter_suffixed_paths(root: Path, suffixes: Iterable[str]) -> Iterator[Path]:
    """Yield files under *root* whose extension is one of *suffixes*."""
    wanted = {"." + suffix.lower().lstrip(".") for suffix in suffixes}
    if not root.is_dir():
        return
    for item in sorted(root.rglob("*")):
        if item.is_file() and item.suffix.lower() in wanted:
            yield item


def relative_id(path: PurePath, root: PurePath) -> str:
    """Slash-joined path of *path* relative to *root*, independent of the OS."""
    return "/".join(path.relative_to(root).parts)


def strip_suffix(path_id: str) -> str:
    """Drop the final ``.ext`` from the last component of *path_id*."""
    head, sep, tail = path_id.rpartition("/")
    stem = tail.rsplit(".", 1)[0] if "." in tail.lstrip(".") else tail
    return f"{head}{sep}{stem}"


def logical_directory(path: PurePath, root: PurePath) -> str:
    """Directory of *path* relative to *root*; empty for the root itself."""
    parent = path.parent
    if parent == root:
        return ""
    return relative_id(parent, root)
