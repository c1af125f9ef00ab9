"""HTML search form page for the InfoFind web UI."""

from __future__ import annotations

from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from infofind.config import AppConfig
from infofind.web.dependencies import get_config
from infofind.web.markup import make_form

router = APIRouter()

ENTRIES_ROUTE = "/entries"

_PAGE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{title}</title></head>
<body>
<h1>{title}</h1>
{body}
</body>
</html>
"""


def render_page(title: str, body: str) -> str:
    return _PAGE.format(title=escape(title), body=body)


@router.get("/", response_class=HTMLResponse)
async def index(config: AppConfig = Depends(get_config)) -> HTMLResponse:
    form = make_form(config, f"{ENTRIES_ROUTE}/")
    body = form or "<p>No searchable fields are configured.</p>"
    return HTMLResponse(content=render_page("InfoFind", body))
