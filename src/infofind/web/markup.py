"""HTML for the search form and browse indexes.

Both are pure functions of the configuration and their inputs; nothing
here touches the catalog.
"""

from __future__ import annotations

from html import escape
from typing import List, Optional, Sequence

from infofind.config import AppConfig
from infofind.index.search import FIND_PARAM
from infofind.models import BrowseIndex, IndexLink

TEXT_FIELD_TYPES = ("string", "title", "number", "text")


def form_action(config: AppConfig, path_info: str) -> str:
    if config.url:
        return config.url
    return config.site_url.rstrip("/") + path_info


def _field_input(name: str, field: str, config: AppConfig) -> str:
    spec = config.field_spec(field)
    if spec.type in TEXT_FIELD_TYPES:
        return f'<td><input type="text" name="{escape(name)}" size="{config.field_size}"/>\n'
    options = "".join(f"<option>{escape(value)}</option>\n" for value in spec.values)
    return (
        f'<td><select name="{escape(name)}">\n'
        "<option value=''>-- select --</option>\n"
        f"{options}</select>"
    )


def _sort_columns(fields: Sequence[str], config: AppConfig) -> List[str]:
    sort_name = escape(config.sort_param or "")
    reverse_name = escape(config.sort_param_reverse or "")
    options = "".join(f"<option>{escape(field)}</option>\n" for field in fields)
    parts = ["<td><table border='1'>"]
    for _ in fields:
        parts.append(
            f'<tr><td><select name="{sort_name}">\n'
            "<option value=''>-- sort by --</option>\n"
            f"{options}</select></td></tr>\n"
        )
    parts.append("</table></td>")
    parts.append("<td><table border='1'>")
    for field in fields:
        label = escape(field)
        parts.append(
            f'<tr><td><input type="checkbox" name="{reverse_name}" value="{label}">'
            f"{label}</input></td></tr>\n"
        )
    parts.append("</table></td>")
    return parts


def make_form(config: AppConfig, path_info: str = "/", fields: Optional[Sequence[str]] = None) -> str:
    """Build the info_find search form.

    Uses every declared field unless *fields* is given.  Returns an empty
    string when no fields are declared at all.
    """
    if not config.type_spec:
        return ""
    fields = list(fields) if fields else config.fields

    parts = [f'<form action="{escape(form_action(config, path_info))}">\n']
    if config.url:
        parts.append(f'<input type="hidden" name="path" value="{escape(path_info)}"/>')
    parts.append('<table border="0">\n<tr><th>Match Fields</th>\n')
    if config.sort_param:
        parts.append("<th>Sort</th><th>Reversed</th>")
    parts.append('</tr><tr>\n<td><table border="1">\n')
    for field in fields:
        parts.append(f"<tr><td><strong>{escape(field)}</strong></td>\n")
        parts.append(_field_input(config.field_prefix + field, field, config))
        parts.append("</td></tr>\n")
    parts.append("</table></td>")
    if config.sort_param:
        parts.extend(_sort_columns(fields, config))
    parts.append(
        "</tr></table>\n"
        f'<input type="Submit" name="{FIND_PARAM}" value="Search"/>\n'
        '<input type="Reset"/>\n'
        "</form>"
    )
    return "".join(parts)


def _link_list(links: Sequence[IndexLink]) -> str:
    items = "".join(
        f'<li><a href="{escape(link.href)}">{escape(link.label)}</a></li>\n' for link in links
    )
    return f'<ul class="infofind-index">\n{items}</ul>'


def render_index(index: BrowseIndex) -> str:
    """Markup for a browse index; long indexes get a heading per letter."""
    if index.style != "long":
        return _link_list(index.links)
    sections = "".join(
        f"<dt>{escape(group.letter)}</dt>\n<dd>{_link_list(index.links_for(group.letter))}</dd>\n"
        for group in index.groups
    )
    return f'<dl class="infofind-index">\n{sections}</dl>'
