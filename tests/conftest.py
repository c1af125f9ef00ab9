"""Shared fixtures: a small site with .info sidecar files."""

from __future__ import annotations

from pathlib import Path

import pytest

from infofind.catalog.store import InfoFileCatalog
from infofind.config import AppConfig, FieldSpec

SITE_FILES = {
    "fiction/a.txt": "Entry A",
    "fiction/a.info": "Author: Jane Doe\nTitle: The Cat\nYear: 2001\nGenre: Mystery\n",
    "fiction/b.txt": "Entry B",
    "fiction/b.info": "Author: John\nTitle: Dog Days\nYear: 1999\nGenre: Romance\n",
    "fiction/short/d.txt": "Entry D",
    "fiction/short/d.info": (
        "Author: Jane Austen\n"
        "Title: A Bird\n"
        "Year: 10\n"
        "Notes: first line\n"
        "  second line\n"
    ),
    "fiction/e.txt": "Entry without metadata",
    "fictional/f.txt": "Sibling directory with a shared prefix",
    "fictional/f.info": "Author: Jane Roe\nTitle: Elsewhere\n",
    "nonfiction/c.txt": "Entry C",
    "nonfiction/c.info": "Author: Jane Doe\nTitle: Apple\nYear: 2\n",
    "orphan.info": "Author: Nobody\n",
}


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    data_dir = tmp_path / "data"
    for name, content in SITE_FILES.items():
        path = data_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return data_dir


@pytest.fixture
def config(site_dir: Path) -> AppConfig:
    return AppConfig(
        data_dir=site_dir,
        sort_param="sort",
        sort_param_reverse="reverse",
        sort_order=("Author", "Title"),
        type_spec={
            "Author": FieldSpec(type="string"),
            "Title": FieldSpec(type="title"),
            "Year": FieldSpec(type="number"),
            "Genre": FieldSpec(type="limited", values=("Mystery", "Romance")),
            "Notes": FieldSpec(type="text"),
        },
    )


@pytest.fixture
def catalog(site_dir: Path) -> InfoFileCatalog:
    return InfoFileCatalog(site_dir)
