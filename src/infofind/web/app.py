"""FastAPI application serving info_find pages and browse indexes."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from infofind.catalog.store import InfoFileCatalog
from infofind.config import AppConfig
from infofind.index.browse import IndexBuilder
from infofind.index.headers import active_sort_fields
from infofind.index.search import Searcher
from infofind.models import INDEX_STYLES
from infofind.resolver import DefaultPageResolver, InfoFindPageResolver, parse_path
from infofind.utils.params import params_from_query
from infofind.web.dependencies import get_catalog, get_config
from infofind.web.frontend import ENTRIES_ROUTE, router as frontend_router
from infofind.web.markup import make_form, render_index

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="InfoFind Web", version="0.1.0")
app.include_router(frontend_router)


class PagePayload(BaseModel):
    path: str
    path_type: str
    alt_path_types: List[str]
    entries: List[str]
    num_found: Optional[int] = None
    criteria: Optional[str] = None
    sort_criteria: Optional[str] = None
    header_fields: List[str] = []
    form: str = ""


class LinkPayload(BaseModel):
    label: str
    query: str
    href: str


class GroupPayload(BaseModel):
    letter: str
    values: List[str]


class BrowsePayload(BaseModel):
    field: str
    scope: str
    style: str
    groups: List[GroupPayload]
    links: List[LinkPayload]


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get(ENTRIES_ROUTE, response_model=PagePayload)
@app.get(ENTRIES_ROUTE + "/{path:path}", response_model=PagePayload)
async def entries_page(
    request: Request,
    path: str = "",
    config: AppConfig = Depends(get_config),
    catalog: InfoFileCatalog = Depends(get_catalog),
) -> PagePayload:
    # keep trailing slashes: they mark a category path
    path_info = parse_path(request.url.path[len(ENTRIES_ROUTE):] or path)
    if path_info.error:
        raise HTTPException(status_code=400, detail=path_info.error)

    params = params_from_query(request.url.query)
    resolver = InfoFindPageResolver(DefaultPageResolver(catalog), Searcher(catalog, config))
    page = resolver.select_entries(path_info, params)
    return PagePayload(
        path=path_info.path,
        path_type=page.path_type,
        alt_path_types=list(resolver.alt_path_types(page.path_type)),
        entries=page.entries,
        num_found=page.num_found,
        criteria=page.criteria,
        sort_criteria=page.sort_criteria,
        header_fields=[name for name in active_sort_fields(params, config) if name],
        form=make_form(config, f"{ENTRIES_ROUTE}{path_info.path}"),
    )


@app.get("/browse/{field}", response_model=None)
async def browse_index(
    field: str,
    scope: str = "",
    style: str = "medium",
    format: str = "json",
    config: AppConfig = Depends(get_config),
    catalog: InfoFileCatalog = Depends(get_catalog),
) -> BrowsePayload | HTMLResponse:
    if style not in INDEX_STYLES:
        raise HTTPException(
            status_code=400, detail=f"Unknown style {style!r}; use one of {', '.join(INDEX_STYLES)}"
        )

    index = IndexBuilder(catalog, config, base=ENTRIES_ROUTE).build(field, scope, style)
    if format == "html":
        return HTMLResponse(content=render_index(index))
    return BrowsePayload(
        field=index.field,
        scope=index.scope,
        style=index.style,
        groups=[
            GroupPayload(letter=group.letter, values=[entry.value for entry in group.entries])
            for group in index.groups
        ],
        links=[LinkPayload(label=link.label, query=link.query, href=link.href) for link in index.links],
    )
